"""
GMP Session

Responsibilities:
- Track the connection lifecycle as an explicit SessionState.
- Authenticate after connect, trying the <credentials> envelope first and
  the legacy flat form second.
- Execute one command: guard the state, send through the transport, parse
  the response and interpret its status into a CommandResult.
- Keep the last failure as a human readable message (last_error).

Non-responsibilities (explicit):
- Framing, socket I/O and single-flight ordering (Connection).
- Deciding how to list a whole collection (retrieval.py).
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

from .connection import Connection
from .errors import GmpError, InvalidArgument, NotAuthenticated, NotConnected
from .framing import root_tag_of
from .generators.authenticate import generator_authenticate, generator_authenticate_legacy
from .status import interpret_status, read_status
from .types import (
    ClientConfig,
    CommandResult,
    ConnectionTarget,
    Credentials,
    GmpTransport,
    SessionState,
)
from .xmlutil import parse_document

MISSING_CREDENTIALS_MESSAGE = (
    "Missing required authentication values: username and password are required."
)

_FIRST_ELEMENT_RE = re.compile(r"<\s*([A-Za-z_][A-Za-z0-9_]*)\b")


def derive_expected_root_tag(command_xml: str) -> str:
    """Map "<get_tasks .../>" to "get_tasks_response"."""
    match = _FIRST_ELEMENT_RE.search(command_xml or "")
    if match is None:
        raise InvalidArgument(
            "Unable to derive expected root tag from command XML; provide expected_root_tag."
        )
    return f"{match.group(1)}_response"


def _describe_error(err: BaseException) -> str:
    return str(err) or type(err).__name__


class Session:
    """
    Authenticated GMP session over one transport.

    Typical usage:
        session = Session(ClientConfig())
        ok = await session.connect(Credentials("admin", "secret"), TcpTarget("127.0.0.1", 9390))
        result = await session.execute_authenticated_command("<get_version/>", "get_version_response")
        await session.disconnect()
    """

    def __init__(
        self,
        cfg: Optional[ClientConfig] = None,
        *,
        transport: Optional[GmpTransport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cfg = cfg or ClientConfig()
        self.transport: GmpTransport = transport if transport is not None else Connection(self.cfg)
        self.state: SessionState = SessionState.DISCONNECTED
        self.last_error: Optional[str] = None
        self._log = logger or logging.getLogger(self.cfg.logger_name or __name__)

    # --------------------------
    # Connection lifecycle
    # --------------------------

    async def connect(
        self,
        credentials: Optional[Credentials],
        target: ConnectionTarget,
        *,
        timeout_s: Optional[float] = None,
    ) -> bool:
        """
        Open the transport and authenticate.

        Returns True once authenticated. Every failure (bad credentials,
        unreachable target, rejected authentication) leaves the session
        DISCONNECTED, records last_error and returns False.
        """
        self.last_error = None
        username = credentials.username if credentials is not None else None
        password = credentials.password if credentials is not None else None
        if not username or not password:
            self.last_error = MISSING_CREDENTIALS_MESSAGE
            return False

        if self.state is not SessionState.DISCONNECTED:
            await self.disconnect()

        self.state = SessionState.CONNECTING
        try:
            await self.transport.connect(target, timeout_s=timeout_s)
            self.state = SessionState.CONNECTED
            authenticated = await self._authenticate(username, password)
        except asyncio.CancelledError:
            await self.disconnect()
            raise
        except (GmpError, OSError) as e:
            self.last_error = _describe_error(e)
            self._log.warning("GMP connect to %s failed: %s", target.describe(), self.last_error)
            await self.disconnect()
            return False

        if not authenticated:
            self._log.warning("GMP authentication as %r failed: %s", username, self.last_error)
            await self.disconnect()
            return False

        self.state = SessionState.AUTHENTICATED
        self._log.info("GMP authenticated to %s as %r", target.describe(), username)
        return True

    async def _authenticate(self, username: str, password: str) -> bool:
        for generate in (generator_authenticate, generator_authenticate_legacy):
            xml, response_tag = generate(username=username, password=password)
            result = await self.execute_command(xml, response_tag, require_authenticated=False)
            if result.ok:
                return True
            self._log.debug("GMP authenticate form %s rejected: %s", generate.__name__, self.last_error)
        return False

    async def disconnect(self) -> None:
        """Close the transport; authenticated and connected are cleared together."""
        self.state = SessionState.DISCONNECTED
        await self.transport.disconnect()

    def is_connected(self) -> bool:
        return self.state in (SessionState.CONNECTED, SessionState.AUTHENTICATED) and self.transport.is_connected()

    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED and self.transport.is_connected()

    def get_last_error(self) -> Optional[str]:
        return self.last_error

    def clear_last_error(self) -> None:
        self.last_error = None

    # --------------------------
    # Command execution
    # --------------------------

    async def execute_command(
        self,
        xml: str,
        expected_root_tag: str,
        *,
        timeout_s: Optional[float] = None,
        require_authenticated: bool = True,
    ) -> CommandResult:
        """
        Send one command and return its interpreted response.

        A non-success status is not raised; the result carries ok=False and
        last_error holds the status text. Transport faults raise.
        """
        if require_authenticated:
            if not self.is_authenticated():
                raise NotAuthenticated("Session is not authenticated.")
        elif not self.is_connected():
            raise NotConnected("Session is not connected.")

        effective_timeout = timeout_s if timeout_s is not None else self.cfg.command_timeout_s
        self._log.debug("GMP command <%s> expecting <%s>", root_tag_of(xml), expected_root_tag)
        try:
            response_xml = await self.transport.send_raw(
                xml,
                timeout_s=effective_timeout,
                expected_root_tag=expected_root_tag,
            )
            root = parse_document(response_xml)
        except GmpError as e:
            self.last_error = _describe_error(e)
            if not self.transport.is_connected():
                self.state = SessionState.DISCONNECTED
            raise

        status = read_status(root)
        verdict = interpret_status(status, root.tag)
        if not verdict.ok:
            self.last_error = verdict.message
        return CommandResult(
            ok=verdict.ok,
            status=status,
            response_xml=response_xml,
            tree=root.element.getroottree(),
            root_tag=root.tag,
            root=root,
        )

    async def execute_authenticated_command(
        self,
        xml: str,
        expected_root_tag: str,
        *,
        timeout_s: Optional[float] = None,
    ) -> CommandResult:
        return await self.execute_command(xml, expected_root_tag, timeout_s=timeout_s)

    async def execute_raw_command(
        self,
        xml: str,
        expected_root_tag: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
    ) -> CommandResult:
        """Run caller-supplied XML; the response tag is derived when not given."""
        if expected_root_tag is None:
            expected_root_tag = derive_expected_root_tag(xml)
        return await self.execute_command(xml, expected_root_tag, timeout_s=timeout_s)


__all__ = ["MISSING_CREDENTIALS_MESSAGE", "Session", "derive_expected_root_tag"]
