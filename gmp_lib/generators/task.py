"""Task request generators."""

from __future__ import annotations

from typing import Optional, Sequence

from ..errors import InvalidArgument
from ..xmlutil import escape_xml_value
from .common import Command, flag, id_element, require_text, response_tag_for, text_element


def generator_create_task(
    *,
    name: str,
    config_id: str,
    target_id: str,
    scanner_id: Optional[str] = None,
    comment: Optional[str] = None,
    alterable: Optional[bool] = None,
    schedule_id: Optional[str] = None,
    alert_ids: Optional[Sequence[str]] = None,
) -> Command:
    require_text("name", name)
    require_text("config_id", config_id)
    require_text("target_id", target_id)

    parts = [
        "<create_task>",
        text_element("name", name),
        id_element("config", config_id),
        id_element("target", target_id),
    ]
    if comment:
        parts.append(text_element("comment", comment))
    if scanner_id:
        parts.append(id_element("scanner", scanner_id))
    if alterable is not None:
        parts.append(f"<alterable>{flag(alterable)}</alterable>")
    if schedule_id:
        parts.append(id_element("schedule", schedule_id))
    for alert_id in alert_ids or ():
        parts.append(id_element("alert", alert_id))
    parts.append("</create_task>")
    return "".join(parts), response_tag_for("create_task")


def generator_modify_task(
    *,
    task_id: str,
    name: Optional[str] = None,
    comment: Optional[str] = None,
    alterable: Optional[bool] = None,
    config_id: Optional[str] = None,
    target_id: Optional[str] = None,
    scanner_id: Optional[str] = None,
    schedule_id: Optional[str] = None,
) -> Command:
    require_text("task_id", task_id)

    parts = [f'<modify_task task_id="{escape_xml_value(task_id)}">']
    if name:
        parts.append(text_element("name", name))
    if comment:
        parts.append(text_element("comment", comment))
    if alterable is not None:
        parts.append(f"<alterable>{flag(alterable)}</alterable>")
    if config_id:
        parts.append(id_element("config", config_id))
    if target_id:
        parts.append(id_element("target", target_id))
    if scanner_id:
        parts.append(id_element("scanner", scanner_id))
    if schedule_id:
        parts.append(id_element("schedule", schedule_id))
    parts.append("</modify_task>")
    return "".join(parts), response_tag_for("modify_task")


def generator_delete_task(*, task_id: str, ultimate: bool = False) -> Command:
    require_text("task_id", task_id)
    return (
        f'<delete_task task_id="{escape_xml_value(task_id)}" ultimate="{flag(ultimate)}"/>',
        response_tag_for("delete_task"),
    )


def generator_task_action(command_name: str, *, task_id: str) -> Command:
    if command_name not in ("start_task", "stop_task", "pause_task", "resume_task"):
        raise InvalidArgument(f"unsupported task action {command_name!r}")
    require_text("task_id", task_id)
    return f'<{command_name} task_id="{escape_xml_value(task_id)}"/>', response_tag_for(command_name)


def generator_get_task_status(*, task_id: str) -> Command:
    require_text("task_id", task_id)
    return f'<get_tasks task_id="{escape_xml_value(task_id)}" details="1"/>', response_tag_for("get_tasks")


def generator_get_report(*, report_id: str, format_id: Optional[str] = None, details: Optional[bool] = None) -> Command:
    require_text("report_id", report_id)
    details_value = flag(True if details is None else details)
    format_fragment = f' format_id="{escape_xml_value(format_id)}"' if format_id else ""
    return (
        f'<get_reports report_id="{escape_xml_value(report_id)}" details="{details_value}"{format_fragment}/>',
        response_tag_for("get_reports"),
    )
