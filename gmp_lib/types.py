"""Public types for gmp_lib."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Literal, Optional, Protocol, Union

from .errors import InvalidArgument, ProtocolRejected

if TYPE_CHECKING:
    from lxml import etree

    from .xmlutil import XmlNode


DEFAULT_CONNECT_TIMEOUT_S = 15.0
DEFAULT_COMMAND_TIMEOUT_S = 20.0
DEFAULT_DISCONNECT_GRACE_S = 0.5
DEFAULT_PAGE_SIZE = 200


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Immutable client configuration.

    Provided once at construction time and treated as read-only thereafter.
    """

    connect_timeout_s: float = DEFAULT_CONNECT_TIMEOUT_S
    command_timeout_s: float = DEFAULT_COMMAND_TIMEOUT_S
    disconnect_grace_s: float = DEFAULT_DISCONNECT_GRACE_S
    page_size: int = DEFAULT_PAGE_SIZE
    recv_max_bytes: int = 65536
    wire_log: bool = False
    logger_name: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("connect_timeout_s", "command_timeout_s", "disconnect_grace_s"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or value <= 0:
                raise InvalidArgument(f"{name} must be a positive number (got {value!r})")
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise InvalidArgument(f"page_size must be an int >= 1 (got {self.page_size!r})")
        if not isinstance(self.recv_max_bytes, int) or self.recv_max_bytes < 1:
            raise InvalidArgument(f"recv_max_bytes must be an int >= 1 (got {self.recv_max_bytes!r})")


# --------------------------
# Connection targets
# --------------------------


@dataclass(frozen=True, slots=True)
class TcpTarget:
    host: str
    port: int
    connect_timeout_s: Optional[float] = None

    @property
    def kind(self) -> Literal["tcp"]:
        return "tcp"

    def describe(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class UnixSocketTarget:
    path: str
    connect_timeout_s: Optional[float] = None

    @property
    def kind(self) -> Literal["unix_socket"]:
        return "unix_socket"

    def describe(self) -> str:
        return self.path


ConnectionTarget = Union[TcpTarget, UnixSocketTarget]


@dataclass(frozen=True, slots=True)
class Credentials:
    username: Optional[str]
    password: Optional[str]

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password=<redacted>)"


class SessionState(str, Enum):
    """Session lifecycle; every failure path returns to DISCONNECTED."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AUTHENTICATED = "authenticated"


class GmpTransport(Protocol):
    """What the Session needs from a byte-stream transport."""

    async def connect(self, target: ConnectionTarget, *, timeout_s: Optional[float] = None) -> None: ...

    async def disconnect(self) -> None: ...

    def is_connected(self) -> bool: ...

    async def send_raw(
        self,
        xml: str,
        *,
        timeout_s: Optional[float] = None,
        expected_root_tag: Optional[str] = None,
    ) -> str: ...


# --------------------------
# Results
# --------------------------


@dataclass(frozen=True, slots=True)
class GmpStatus:
    code: Optional[int] = None
    raw_code: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CommandResult:
    """One executed command; produced once, never mutated."""

    ok: bool
    status: GmpStatus
    response_xml: str
    tree: "etree._ElementTree"
    root_tag: str
    root: "XmlNode"

    def raise_for_status(self) -> "CommandResult":
        if not self.ok:
            raise ProtocolRejected(
                self.status.text
                or f'Command failed with root response tag "{self.root_tag}" and no status text.',
                status_code=self.status.code,
                root_tag=self.root_tag,
            )
        return self


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Summary of a create/modify/delete/action command."""

    success: bool
    status_code: Optional[int]
    status_text: Optional[str]
    resource_id: Optional[str]
    raw_xml: str


@dataclass(frozen=True, slots=True)
class SearchParameters:
    filter: Optional[str] = None
    first: Optional[int] = None
    rows: Optional[int] = None
    details: Optional[bool] = None
    sort_field: Optional[str] = None
    sort_desc: bool = False
    extra_filter: Optional[str] = None
    query_text: Optional[str] = None


# --------------------------
# Resource summaries
# --------------------------


@dataclass(frozen=True, slots=True)
class UserSummary:
    id: str
    name: str
    comment: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TaskSummary:
    id: str
    name: str
    comment: Optional[str] = None
    status: Optional[str] = None
    progress: Optional[float] = None
    report_count: Optional[float] = None


@dataclass(frozen=True, slots=True)
class PortListSummary:
    id: str
    name: str
    comment: Optional[str] = None
    port_count: Optional[float] = None


@dataclass(frozen=True, slots=True)
class CredentialSummary:
    id: str
    name: str
    comment: Optional[str] = None
    login: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TargetSummary:
    id: str
    name: str
    comment: Optional[str] = None
    hosts: tuple[str, ...] = field(default_factory=tuple)
    port_list_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ConfigSummary:
    id: str
    name: str
    comment: Optional[str] = None
    usage_type: Optional[str] = None
    family_count: Optional[float] = None
    nvt_count: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ScannerSummary:
    id: str
    name: str
    comment: Optional[str] = None
    host: Optional[str] = None
    port: Optional[float] = None
    scanner_type: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ScheduleSummary:
    id: str
    name: str
    comment: Optional[str] = None
    timezone: Optional[str] = None
    next_time: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ReportFormatSummary:
    id: str
    name: str
    extension: Optional[str] = None
    content_type: Optional[str] = None
    active: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class AlertSummary:
    id: str
    name: str
    comment: Optional[str] = None
    event: Optional[str] = None
    condition: Optional[str] = None
    method: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TaskStatus:
    task_id: str
    name: str
    status: Optional[str] = None
    progress: Optional[float] = None
    report_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class VersionInfo:
    raw_response: CommandResult
    version: Optional[str]


@dataclass(frozen=True, slots=True)
class Diagnostics:
    version: Optional[VersionInfo]
    scanner_count: int
    config_count: int
    target_count: int
    schedule_count: int
    report_format_count: int
    alert_count: int


@dataclass(frozen=True, slots=True)
class Capabilities:
    protocol_version: Optional[VersionInfo]
    diagnostics: Diagnostics
