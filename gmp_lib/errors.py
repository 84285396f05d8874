"""
Typed errors for gmp_lib.

Transport faults (connect, read, write) and state violations are raised.
A well-formed response with a non-success status is not an error at the
Session layer; it is returned as a CommandResult with ok=False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class GmpErrorContext:
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    phase: Optional[str] = None
    detail: Optional[str] = None


class GmpError(Exception):
    """Base exception for all gmp_lib failures."""

    def __init__(
        self,
        message: str = "",
        *,
        context: Optional[GmpErrorContext] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.cause = cause


# --------------------------
# Transport
# --------------------------


class GmpTransportError(GmpError):
    """Raised when the underlying byte stream fails."""


class ConnectTimeout(GmpTransportError):
    """No connection was established within the connect timeout."""


class ConnectError(GmpTransportError):
    """The connection was refused or the target was unreachable."""


class ReadTimeout(GmpTransportError, TimeoutError):
    """No matching response arrived before the command deadline."""


class SocketClosed(GmpTransportError):
    """The peer closed the stream while a response was awaited."""


class SocketError(GmpTransportError):
    """A read or write on the stream failed."""


# --------------------------
# Session state
# --------------------------


class GmpStateError(GmpError):
    """Raised when an operation is attempted in the wrong session state."""


class NotConnected(GmpStateError):
    pass


class NotAuthenticated(GmpStateError):
    pass


# --------------------------
# Protocol
# --------------------------


class GmpProtocolError(GmpError):
    """Raised for protocol-level failures."""


class MalformedDocument(GmpProtocolError):
    """A framed response failed XML well-formedness validation."""


class ProtocolRejected(GmpProtocolError):
    """A well-formed response carried a non-success status."""

    def __init__(
        self,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        root_tag: Optional[str] = None,
        context: Optional[GmpErrorContext] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)
        self.status_code = status_code
        self.root_tag = root_tag


class PaginationFailure(GmpProtocolError):
    """A page fetch failed after the bulk fetch had already been rejected."""


class InvalidArgument(GmpError, ValueError):
    """Raised for caller mistakes (bad parameters, unusable command XML)."""


__all__ = [
    "ConnectError",
    "ConnectTimeout",
    "GmpError",
    "GmpErrorContext",
    "GmpProtocolError",
    "GmpStateError",
    "GmpTransportError",
    "InvalidArgument",
    "MalformedDocument",
    "NotAuthenticated",
    "NotConnected",
    "PaginationFailure",
    "ProtocolRejected",
    "ReadTimeout",
    "SocketClosed",
    "SocketError",
]
