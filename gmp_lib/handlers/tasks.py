"""
Handlers for task responses.

Task listings differ between manager versions: the run state may be in
<status> or <scan_run_status>, the report count in <report_count>,
<reports><count> or <result_count>. Candidate paths are tried in order.
"""

from __future__ import annotations

from typing import Optional

from ..types import CommandResult, TaskStatus, TaskSummary
from ..xmlutil import XmlNode
from .common import entity_nodes, map_entities, node_id, node_name

_REPORT_ID_PATHS = (
    "last_report/report/@id",
    "last_report/@id",
    "current_report/report/@id",
    "current_report/@id",
)


def _task(node: XmlNode) -> TaskSummary:
    return TaskSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        status=node.read_string("status", "scan_run_status"),
        progress=node.read_number("progress"),
        report_count=node.read_number("report_count", "reports/count", "result_count"),
    )


def map_tasks(result: CommandResult) -> list[TaskSummary]:
    return map_entities(result, "task", _task)


def map_task_status(result: CommandResult, *, task_id: str) -> Optional[TaskStatus]:
    nodes = entity_nodes(result, "task")
    if not nodes:
        return None
    node = nodes[0]
    return TaskStatus(
        task_id=node.attr("id") or task_id,
        name=node_name(node),
        status=node.read_string("status", "scan_run_status"),
        progress=node.read_number("progress"),
        report_id=node.read_string(*_REPORT_ID_PATHS),
    )
