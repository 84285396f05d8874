"""Async client for the Greenbone Management Protocol (GMP)."""

from .channel import CommandChannel
from .client import GmpClient
from .connection import Connection
from .errors import (
    ConnectError,
    ConnectTimeout,
    GmpError,
    GmpErrorContext,
    GmpProtocolError,
    GmpStateError,
    GmpTransportError,
    InvalidArgument,
    MalformedDocument,
    NotAuthenticated,
    NotConnected,
    PaginationFailure,
    ProtocolRejected,
    ReadTimeout,
    SocketClosed,
    SocketError,
)
from .framing import FramedDocument, extract_document
from .retrieval import fetch_all_entities
from .session import Session
from .status import interpret_status, is_status_success, read_status
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
    GmpStatus,
    GmpTransport,
    OperationResult,
    PortListSummary,
    ReportFormatSummary,
    ScannerSummary,
    ScheduleSummary,
    SearchParameters,
    SessionState,
    TargetSummary,
    TaskStatus,
    TaskSummary,
    TcpTarget,
    UnixSocketTarget,
    UserSummary,
    VersionInfo,
)
from .xmlutil import XmlNode, escape_xml_value

__all__ = [
    "AlertSummary",
    "Capabilities",
    "ClientConfig",
    "CommandChannel",
    "CommandResult",
    "ConfigSummary",
    "ConnectError",
    "ConnectTimeout",
    "Connection",
    "ConnectionTarget",
    "CredentialSummary",
    "Credentials",
    "Diagnostics",
    "FramedDocument",
    "GmpClient",
    "GmpError",
    "GmpErrorContext",
    "GmpProtocolError",
    "GmpStateError",
    "GmpStatus",
    "GmpTransport",
    "GmpTransportError",
    "InvalidArgument",
    "MalformedDocument",
    "NotAuthenticated",
    "NotConnected",
    "OperationResult",
    "PaginationFailure",
    "PortListSummary",
    "ProtocolRejected",
    "ReadTimeout",
    "ReportFormatSummary",
    "ScannerSummary",
    "ScheduleSummary",
    "SearchParameters",
    "Session",
    "SessionState",
    "SocketClosed",
    "SocketError",
    "TargetSummary",
    "TaskStatus",
    "TaskSummary",
    "TcpTarget",
    "UnixSocketTarget",
    "UserSummary",
    "VersionInfo",
    "XmlNode",
    "escape_xml_value",
    "extract_document",
    "fetch_all_entities",
    "interpret_status",
    "is_status_success",
    "read_status",
]
