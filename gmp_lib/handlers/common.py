"""Shared helpers for response handlers."""

from __future__ import annotations

from typing import Callable, TypeVar

from ..status import read_resource_id
from ..types import CommandResult, OperationResult
from ..xmlutil import XmlNode

T = TypeVar("T")

Mapper = Callable[[CommandResult], list[T]]


def entity_nodes(result: CommandResult, entity_name: str) -> list[XmlNode]:
    return result.root.entity_nodes(entity_name)


def map_entities(result: CommandResult, entity_name: str, build: Callable[[XmlNode], T]) -> list[T]:
    return [build(node) for node in entity_nodes(result, entity_name)]


def node_id(node: XmlNode) -> str:
    return node.attr("id") or ""


def node_name(node: XmlNode) -> str:
    return node.read_string("name") or ""


def split_hosts(raw_hosts: str) -> tuple[str, ...]:
    raw_hosts = raw_hosts.strip()
    if not raw_hosts:
        return ()
    return tuple(host.strip() for host in raw_hosts.split(",") if host.strip())


def map_operation_result(result: CommandResult) -> OperationResult:
    return OperationResult(
        success=result.ok,
        status_code=result.status.code,
        status_text=result.status.text,
        resource_id=read_resource_id(result.root),
        raw_xml=result.response_xml,
    )
