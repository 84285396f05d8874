"""
GMP client facade.

GmpClient wraps one Session and exposes resource operations: bulk listing
with paged fallback, filtered searches, task control, port list and
credential management, and version/diagnostics probes. Listing and search
results are typed summaries; create/modify/delete/action commands return
an OperationResult whether or not the manager accepted them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from .generators.common import generator_get_list
from .generators.credential import generator_create_credential, generator_delete_credential
from .generators.port_list import (
    generator_create_port_list,
    generator_delete_port_list,
    generator_modify_port_list,
)
from .generators.registry import list_command
from .generators.system import generator_get_version
from .generators.task import (
    generator_create_task,
    generator_delete_task,
    generator_get_report,
    generator_get_task_status,
    generator_modify_task,
    generator_task_action,
)
from .handlers.common import map_operation_result
from .handlers.system import map_version
from .handlers.tasks import map_task_status
from .retrieval import fetch_all_entities
from .session import Session
from .types import (
    AlertSummary,
    Capabilities,
    ClientConfig,
    CommandResult,
    ConfigSummary,
    ConnectionTarget,
    CredentialSummary,
    Credentials,
    Diagnostics,
    GmpTransport,
    OperationResult,
    PortListSummary,
    ReportFormatSummary,
    ScannerSummary,
    ScheduleSummary,
    SearchParameters,
    TargetSummary,
    TaskStatus,
    TaskSummary,
    UserSummary,
    VersionInfo,
)

logger = logging.getLogger(__name__)


class GmpClient:
    """
    High-level GMP client.

    Typical usage:
        client = GmpClient(ClientConfig(command_timeout_s=30.0))
        if await client.connect(Credentials("admin", "secret"), TcpTarget("scanner.local", 9390)):
            tasks = await client.get_all_tasks()
        await client.disconnect()
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[Session] = None,
        transport: Optional[GmpTransport] = None,
    ) -> None:
        if session is not None:
            self.config = session.cfg
            self._session = session
        else:
            self.config = config or ClientConfig()
            self._session = Session(self.config, transport=transport)

    @property
    def session(self) -> Session:
        return self._session

    # --------------------------
    # Lifecycle
    # --------------------------

    async def connect(
        self,
        credentials: Optional[Credentials],
        target: ConnectionTarget,
        *,
        timeout_s: Optional[float] = None,
    ) -> bool:
        return await self._session.connect(credentials, target, timeout_s=timeout_s)

    async def disconnect(self) -> None:
        await self._session.disconnect()

    def is_connected(self) -> bool:
        return self._session.is_connected()

    def is_authenticated(self) -> bool:
        return self._session.is_authenticated()

    def get_last_error(self) -> Optional[str]:
        return self._session.get_last_error()

    # --------------------------
    # Listing helpers
    # --------------------------

    async def _get_all(self, kind: str) -> list[Any]:
        entry = list_command(kind)
        return await fetch_all_entities(
            self._session,
            entry.command_name,
            entry.entity_name,
            entry.mapper,
            expected_root_tag=entry.response_tag,
        )

    async def _search(self, kind: str, search: Optional[SearchParameters]) -> list[Any]:
        entry = list_command(kind)
        xml, response_tag = generator_get_list(entry.command_name, search=search)
        result = await self._session.execute_authenticated_command(xml, response_tag)
        return entry.mapper(result)

    async def _operation(self, command: tuple[str, str]) -> OperationResult:
        xml, response_tag = command
        result = await self._session.execute_authenticated_command(xml, response_tag)
        return map_operation_result(result)

    # --------------------------
    # Users and tasks
    # --------------------------

    async def get_all_users(self) -> list[UserSummary]:
        return await self._get_all("users")

    async def search_users(self, search: Optional[SearchParameters] = None) -> list[UserSummary]:
        return await self._search("users", search)

    async def get_all_tasks(self) -> list[TaskSummary]:
        return await self._get_all("tasks")

    async def search_tasks(self, search: Optional[SearchParameters] = None) -> list[TaskSummary]:
        return await self._search("tasks", search)

    async def create_task(
        self,
        *,
        name: str,
        config_id: str,
        target_id: str,
        scanner_id: Optional[str] = None,
        comment: Optional[str] = None,
        alterable: Optional[bool] = None,
        schedule_id: Optional[str] = None,
        alert_ids: Optional[Sequence[str]] = None,
    ) -> OperationResult:
        return await self._operation(
            generator_create_task(
                name=name,
                config_id=config_id,
                target_id=target_id,
                scanner_id=scanner_id,
                comment=comment,
                alterable=alterable,
                schedule_id=schedule_id,
                alert_ids=alert_ids,
            )
        )

    async def modify_task(
        self,
        *,
        task_id: str,
        name: Optional[str] = None,
        comment: Optional[str] = None,
        alterable: Optional[bool] = None,
        config_id: Optional[str] = None,
        target_id: Optional[str] = None,
        scanner_id: Optional[str] = None,
        schedule_id: Optional[str] = None,
    ) -> OperationResult:
        return await self._operation(
            generator_modify_task(
                task_id=task_id,
                name=name,
                comment=comment,
                alterable=alterable,
                config_id=config_id,
                target_id=target_id,
                scanner_id=scanner_id,
                schedule_id=schedule_id,
            )
        )

    async def delete_task(self, *, task_id: str, ultimate: bool = False) -> OperationResult:
        return await self._operation(generator_delete_task(task_id=task_id, ultimate=ultimate))

    async def start_task(self, *, task_id: str) -> OperationResult:
        return await self._operation(generator_task_action("start_task", task_id=task_id))

    async def stop_task(self, *, task_id: str) -> OperationResult:
        return await self._operation(generator_task_action("stop_task", task_id=task_id))

    async def pause_task(self, *, task_id: str) -> OperationResult:
        return await self._operation(generator_task_action("pause_task", task_id=task_id))

    async def resume_task(self, *, task_id: str) -> OperationResult:
        return await self._operation(generator_task_action("resume_task", task_id=task_id))

    async def get_task_status(self, *, task_id: str) -> Optional[TaskStatus]:
        xml, response_tag = generator_get_task_status(task_id=task_id)
        result = await self._session.execute_authenticated_command(xml, response_tag)
        return map_task_status(result, task_id=task_id)

    async def get_task_report(
        self,
        *,
        task_id: Optional[str] = None,
        report_id: Optional[str] = None,
        format_id: Optional[str] = None,
        details: Optional[bool] = None,
    ) -> Optional[CommandResult]:
        """
        Fetch a report. Without report_id the task's last (or current)
        report is used; None when the task has no report yet.
        """
        if not report_id and task_id:
            status = await self.get_task_status(task_id=task_id)
            report_id = status.report_id if status is not None else None
        if not report_id:
            return None
        xml, response_tag = generator_get_report(report_id=report_id, format_id=format_id, details=details)
        return await self._session.execute_authenticated_command(xml, response_tag)

    # --------------------------
    # Port lists and credentials
    # --------------------------

    async def get_all_port_lists(self) -> list[PortListSummary]:
        return await self._get_all("port_lists")

    async def search_port_lists(self, search: Optional[SearchParameters] = None) -> list[PortListSummary]:
        return await self._search("port_lists", search)

    async def create_port_list(self, *, name: str, port_range: str, comment: Optional[str] = None) -> OperationResult:
        return await self._operation(generator_create_port_list(name=name, port_range=port_range, comment=comment))

    async def modify_port_list(
        self,
        *,
        port_list_id: str,
        name: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> OperationResult:
        return await self._operation(
            generator_modify_port_list(port_list_id=port_list_id, name=name, comment=comment)
        )

    async def delete_port_list(self, *, port_list_id: str, ultimate: bool = False) -> OperationResult:
        return await self._operation(generator_delete_port_list(port_list_id=port_list_id, ultimate=ultimate))

    async def get_all_credentials(self) -> list[CredentialSummary]:
        return await self._get_all("credentials")

    async def search_credentials(self, search: Optional[SearchParameters] = None) -> list[CredentialSummary]:
        return await self._search("credentials", search)

    async def create_credential(
        self,
        *,
        name: str,
        login: str,
        password: str,
        comment: Optional[str] = None,
        allow_insecure: Optional[bool] = None,
    ) -> OperationResult:
        return await self._operation(
            generator_create_credential(
                name=name,
                login=login,
                password=password,
                comment=comment,
                allow_insecure=allow_insecure,
            )
        )

    async def delete_credential(self, *, credential_id: str, ultimate: bool = False) -> OperationResult:
        return await self._operation(generator_delete_credential(credential_id=credential_id, ultimate=ultimate))

    # --------------------------
    # Scan inventory
    # --------------------------

    async def get_all_targets(self) -> list[TargetSummary]:
        return await self._get_all("targets")

    async def search_targets(self, search: Optional[SearchParameters] = None) -> list[TargetSummary]:
        return await self._search("targets", search)

    async def get_all_configs(self) -> list[ConfigSummary]:
        return await self._get_all("configs")

    async def search_configs(self, search: Optional[SearchParameters] = None) -> list[ConfigSummary]:
        return await self._search("configs", search)

    async def get_all_scanners(self) -> list[ScannerSummary]:
        return await self._get_all("scanners")

    async def search_scanners(self, search: Optional[SearchParameters] = None) -> list[ScannerSummary]:
        return await self._search("scanners", search)

    async def get_all_schedules(self) -> list[ScheduleSummary]:
        return await self._get_all("schedules")

    async def search_schedules(self, search: Optional[SearchParameters] = None) -> list[ScheduleSummary]:
        return await self._search("schedules", search)

    async def get_all_report_formats(self) -> list[ReportFormatSummary]:
        return await self._get_all("report_formats")

    async def search_report_formats(self, search: Optional[SearchParameters] = None) -> list[ReportFormatSummary]:
        return await self._search("report_formats", search)

    async def get_all_alerts(self) -> list[AlertSummary]:
        return await self._get_all("alerts")

    async def search_alerts(self, search: Optional[SearchParameters] = None) -> list[AlertSummary]:
        return await self._search("alerts", search)

    # --------------------------
    # System
    # --------------------------

    async def get_version(self) -> VersionInfo:
        xml, response_tag = generator_get_version()
        result = await self._session.execute_authenticated_command(xml, response_tag)
        return map_version(result.raise_for_status())

    async def get_diagnostics(self) -> Diagnostics:
        version = await self.get_version()
        scanners = await self.get_all_scanners()
        configs = await self.get_all_configs()
        targets = await self.get_all_targets()
        schedules = await self.get_all_schedules()
        report_formats = await self.get_all_report_formats()
        alerts = await self.get_all_alerts()
        logger.debug(
            "GMP diagnostics: version=%s scanners=%d configs=%d targets=%d",
            version.version,
            len(scanners),
            len(configs),
            len(targets),
        )
        return Diagnostics(
            version=version,
            scanner_count=len(scanners),
            config_count=len(configs),
            target_count=len(targets),
            schedule_count=len(schedules),
            report_format_count=len(report_formats),
            alert_count=len(alerts),
        )

    async def get_capabilities(self) -> Capabilities:
        diagnostics = await self.get_diagnostics()
        return Capabilities(protocol_version=diagnostics.version, diagnostics=diagnostics)

    async def execute_raw_command(
        self,
        xml: str,
        expected_root_tag: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
    ) -> CommandResult:
        return await self._session.execute_raw_command(xml, expected_root_tag, timeout_s=timeout_s)


__all__ = ["GmpClient"]
