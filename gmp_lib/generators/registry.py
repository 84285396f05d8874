"""
List command registry.

One entry per resource kind that the client can list in bulk or search:
the get_* command, the element name of one entity in the response, and the
handler that maps a response to summaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..errors import InvalidArgument
from ..handlers import inventory, tasks, users
from ..types import CommandResult
from .common import response_tag_for


@dataclass(frozen=True, slots=True)
class ListCommandSpec:
    kind: str
    command_name: str
    entity_name: str
    mapper: Callable[[CommandResult], list[Any]]

    @property
    def response_tag(self) -> str:
        return response_tag_for(self.command_name)


def _list_entry(kind: str, entity_name: str, mapper: Callable[[CommandResult], list[Any]]) -> ListCommandSpec:
    return ListCommandSpec(kind=kind, command_name=f"get_{kind}", entity_name=entity_name, mapper=mapper)


LIST_COMMANDS: dict[str, ListCommandSpec] = {
    entry.kind: entry
    for entry in (
        _list_entry("users", "user", users.map_users),
        _list_entry("tasks", "task", tasks.map_tasks),
        _list_entry("port_lists", "port_list", inventory.map_port_lists),
        _list_entry("credentials", "credential", inventory.map_credentials),
        _list_entry("targets", "target", inventory.map_targets),
        _list_entry("configs", "config", inventory.map_configs),
        _list_entry("scanners", "scanner", inventory.map_scanners),
        _list_entry("schedules", "schedule", inventory.map_schedules),
        _list_entry("report_formats", "report_format", inventory.map_report_formats),
        _list_entry("alerts", "alert", inventory.map_alerts),
    )
}


def list_command(kind: str) -> ListCommandSpec:
    try:
        return LIST_COMMANDS[kind]
    except KeyError:
        raise InvalidArgument(f"Unknown resource kind: {kind!r}") from None
