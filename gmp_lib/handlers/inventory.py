"""
Handlers for the scan inventory listings: port lists, credentials, targets,
scan configs, scanners, schedules, report formats and alerts.
"""

from __future__ import annotations

from ..types import (
    AlertSummary,
    CommandResult,
    ConfigSummary,
    CredentialSummary,
    PortListSummary,
    ReportFormatSummary,
    ScannerSummary,
    ScheduleSummary,
    TargetSummary,
)
from ..xmlutil import XmlNode
from .common import map_entities, node_id, node_name, split_hosts


def _port_list(node: XmlNode) -> PortListSummary:
    return PortListSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        port_count=node.read_number("port_count", "port_count/all", "ports/count", "count"),
    )


def map_port_lists(result: CommandResult) -> list[PortListSummary]:
    return map_entities(result, "port_list", _port_list)


def _credential(node: XmlNode) -> CredentialSummary:
    return CredentialSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        login=node.read_string("login", "credential_login", "auth/login"),
    )


def map_credentials(result: CommandResult) -> list[CredentialSummary]:
    return map_entities(result, "credential", _credential)


def _target(node: XmlNode) -> TargetSummary:
    return TargetSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        hosts=split_hosts(node.read_string("hosts", "host") or ""),
        port_list_id=node.read_string("port_list/@id", "port_list/port_list/@id"),
    )


def map_targets(result: CommandResult) -> list[TargetSummary]:
    return map_entities(result, "target", _target)


def _config(node: XmlNode) -> ConfigSummary:
    return ConfigSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        usage_type=node.read_string("usage_type", "type"),
        family_count=node.read_number("families/count", "family_count"),
        nvt_count=node.read_number("nvts/count", "nvt_count"),
    )


def map_configs(result: CommandResult) -> list[ConfigSummary]:
    return map_entities(result, "config", _config)


def _scanner(node: XmlNode) -> ScannerSummary:
    return ScannerSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        host=node.read_string("host", "scanner_host"),
        port=node.read_number("port", "scanner_port"),
        scanner_type=node.read_string("type", "scanner_type"),
    )


def map_scanners(result: CommandResult) -> list[ScannerSummary]:
    return map_entities(result, "scanner", _scanner)


def _schedule(node: XmlNode) -> ScheduleSummary:
    return ScheduleSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        timezone=node.read_string("timezone"),
        next_time=node.read_string("next_time", "next_run"),
    )


def map_schedules(result: CommandResult) -> list[ScheduleSummary]:
    return map_entities(result, "schedule", _schedule)


def _report_format(node: XmlNode) -> ReportFormatSummary:
    return ReportFormatSummary(
        id=node_id(node),
        name=node_name(node),
        extension=node.read_string("extension"),
        content_type=node.read_string("content_type"),
        active=node.read_bool("active"),
    )


def map_report_formats(result: CommandResult) -> list[ReportFormatSummary]:
    return map_entities(result, "report_format", _report_format)


def _alert(node: XmlNode) -> AlertSummary:
    return AlertSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        event=node.read_string("event/name", "event"),
        condition=node.read_string("condition/name", "condition"),
        method=node.read_string("method/name", "method"),
    )


def map_alerts(result: CommandResult) -> list[AlertSummary]:
    return map_entities(result, "alert", _alert)
