"""Port list request generators."""

from __future__ import annotations

from typing import Optional

from ..xmlutil import escape_xml_value
from .common import Command, flag, require_text, response_tag_for, text_element


def generator_create_port_list(*, name: str, port_range: str, comment: Optional[str] = None) -> Command:
    require_text("name", name)
    require_text("port_range", port_range)
    parts = [
        "<create_port_list>",
        text_element("name", name),
        text_element("port_range", port_range),
    ]
    if comment:
        parts.append(text_element("comment", comment))
    parts.append("</create_port_list>")
    return "".join(parts), response_tag_for("create_port_list")


def generator_modify_port_list(
    *,
    port_list_id: str,
    name: Optional[str] = None,
    comment: Optional[str] = None,
) -> Command:
    require_text("port_list_id", port_list_id)
    parts = [f'<modify_port_list port_list_id="{escape_xml_value(port_list_id)}">']
    if name:
        parts.append(text_element("name", name))
    if comment:
        parts.append(text_element("comment", comment))
    parts.append("</modify_port_list>")
    return "".join(parts), response_tag_for("modify_port_list")


def generator_delete_port_list(*, port_list_id: str, ultimate: bool = False) -> Command:
    require_text("port_list_id", port_list_id)
    return (
        f'<delete_port_list port_list_id="{escape_xml_value(port_list_id)}" ultimate="{flag(ultimate)}"/>',
        response_tag_for("delete_port_list"),
    )
