"""
GMP Connection

Responsibilities:
- Own the stream lifecycle (TCP or unix domain socket).
- Accumulate received text and hand it to the document framer.
- Write one command and wait for the response whose root tag matches,
  bounded by a wall-clock deadline.
- Serialize callers through a CommandChannel so only one command is ever
  in flight on the wire.

Non-responsibilities (explicit):
- Authentication and session state (Session).
- Interpreting response status (status.py).
"""

from __future__ import annotations

import asyncio
import codecs
import contextlib
import logging
import re
import socket
from typing import Optional

from .channel import CommandChannel
from .errors import (
    ConnectError,
    ConnectTimeout,
    GmpErrorContext,
    NotConnected,
    ReadTimeout,
    SocketClosed,
    SocketError,
)
from .framing import extract_document, root_tag_of
from .types import ClientConfig, ConnectionTarget, TcpTarget
from .xmlutil import parse_document

logger = logging.getLogger(__name__)

_PASSWORD_RE = re.compile(r"<password>.*?</password>", re.DOTALL)


def redact_command(xml: str) -> str:
    return _PASSWORD_RE.sub("<password>***</password>", xml)


class Connection:
    """
    Raw GMP stream.

    Typical usage:
        conn = Connection(cfg)
        await conn.connect(TcpTarget("127.0.0.1", 9390))
        xml = await conn.send_raw("<get_version/>", expected_root_tag="get_version_response")
        await conn.disconnect()
    """

    def __init__(self, cfg: Optional[ClientConfig] = None) -> None:
        self.cfg = cfg or ClientConfig()
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._target: Optional[ConnectionTarget] = None
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._channel = CommandChannel()
        self.last_error: Exception | None = None

    @property
    def target(self) -> Optional[ConnectionTarget]:
        return self._target

    @property
    def channel(self) -> CommandChannel:
        return self._channel

    @property
    def buffered(self) -> str:
        """Received text not yet consumed by the framer."""
        return self._buffer

    # --------------------------
    # Connection lifecycle
    # --------------------------

    async def connect(self, target: ConnectionTarget, *, timeout_s: Optional[float] = None) -> None:
        if self._writer is not None:
            await self.disconnect()

        if timeout_s is None:
            timeout_s = target.connect_timeout_s
        if timeout_s is None:
            timeout_s = self.cfg.connect_timeout_s

        self.last_error = None
        logger.info("GMP connecting to %s (%s)", target.describe(), target.kind)
        try:
            reader, writer = await asyncio.wait_for(self._open(target), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            self.last_error = e
            raise ConnectTimeout(
                f"Socket connect timeout after {timeout_s}s to {target.describe()}.",
                context=self._context(target, phase="connect"),
                cause=e,
            ) from e
        except OSError as e:
            self.last_error = e
            raise ConnectError(
                f"Failed to connect to {target.describe()}: {e}",
                context=self._context(target, phase="connect"),
                cause=e,
            ) from e

        if isinstance(target, TcpTarget):
            sock = writer.get_extra_info("socket")
            if sock is not None:
                with contextlib.suppress(OSError):
                    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)

        self._reader = reader
        self._writer = writer
        self._target = target
        self._reset_buffer()
        logger.info("GMP connected to %s", target.describe())

    async def _open(self, target: ConnectionTarget) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        if isinstance(target, TcpTarget):
            return await asyncio.open_connection(target.host, target.port)
        return await asyncio.open_unix_connection(target.path)

    async def disconnect(self) -> None:
        """
        Half-close, then close; abort when the peer has not finished closing
        within the grace period. Safe to call multiple times.
        """
        writer = self._writer
        target = self._target
        self._reader = None
        self._writer = None
        self._target = None
        self._reset_buffer()
        if writer is None:
            return

        with contextlib.suppress(OSError, RuntimeError):
            if not writer.is_closing() and writer.can_write_eof():
                writer.write_eof()
        writer.close()
        try:
            await asyncio.wait_for(writer.wait_closed(), timeout=self.cfg.disconnect_grace_s)
        except asyncio.TimeoutError:
            logger.debug("GMP close grace period expired; aborting transport")
            writer.transport.abort()
        except OSError as e:
            logger.debug("GMP close reported %s: %s", type(e).__name__, e)
        logger.info("GMP disconnected from %s", target.describe() if target is not None else "<unknown>")

    def is_connected(self) -> bool:
        if self._writer is None or self._writer.is_closing():
            return False
        return not (self._reader is not None and self._reader.at_eof())

    # --------------------------
    # Transport helpers
    # --------------------------

    def _reset_buffer(self) -> None:
        self._buffer = ""
        self._decoder.reset()

    def _context(self, target: Optional[ConnectionTarget], *, phase: str, detail: Optional[str] = None) -> GmpErrorContext:
        target = target if target is not None else self._target
        if isinstance(target, TcpTarget):
            return GmpErrorContext(host=target.host, port=target.port, phase=phase, detail=detail)
        if target is not None:
            return GmpErrorContext(path=target.path, phase=phase, detail=detail)
        return GmpErrorContext(phase=phase, detail=detail)

    def _require_connected(self) -> None:
        if self._writer is None or self._reader is None or self._writer.is_closing():
            raise NotConnected("Socket is not connected.", context=self._context(None, phase="send"))

    def _teardown(self, err: Exception | None) -> None:
        """Drop a stream that failed mid-exchange; it is not reusable."""
        self.last_error = err
        writer = self._writer
        self._reader = None
        self._writer = None
        self._target = None
        self._reset_buffer()
        if writer is not None:
            writer.transport.abort()

    async def _write_xml(self, xml: str, *, timeout_s: float) -> None:
        self._require_connected()
        assert self._writer is not None
        payload = f"{xml.strip()}\n"
        if self.cfg.wire_log and logger.isEnabledFor(logging.DEBUG):
            logger.debug("TX (%d chars): %s", len(payload), redact_command(payload.rstrip()))
        try:
            self._writer.write(payload.encode("utf-8"))
            await asyncio.wait_for(self._writer.drain(), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            context = self._context(None, phase="write")
            self._teardown(e)
            raise SocketError(f"Socket write stalled for {timeout_s}s.", context=context, cause=e) from e
        except OSError as e:
            context = self._context(None, phase="write")
            self._teardown(e)
            raise SocketError(f"Socket write failed: {e}", context=context, cause=e) from e

    async def _wait_for_data(self, *, timeout_s: float) -> None:
        reader = self._reader
        if reader is None:
            raise NotConnected("Socket unavailable while waiting for response data.")
        try:
            chunk = await asyncio.wait_for(reader.read(self.cfg.recv_max_bytes), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            raise ReadTimeout(
                f"Socket read timeout after {timeout_s:.3f}s.",
                context=self._context(None, phase="read"),
                cause=e,
            ) from e
        except OSError as e:
            context = self._context(None, phase="read")
            self._teardown(e)
            raise SocketError(f"Socket read failed: {e}", context=context, cause=e) from e

        if not chunk:
            context = self._context(None, phase="read")
            err = SocketClosed("Socket closed while waiting for response data.", context=context)
            self._teardown(err)
            raise err

        if self.cfg.wire_log and logger.isEnabledFor(logging.DEBUG):
            logger.debug("RX raw chunk (%d bytes)", len(chunk))
        self._buffer += self._decoder.decode(chunk)

    def _take_document(self) -> Optional[str]:
        framed = extract_document(self._buffer)
        if framed.document is None:
            return None
        self._buffer = framed.remainder
        return framed.document

    # --------------------------
    # Framed receive pump
    # --------------------------

    async def _read_response(self, *, timeout_s: float, expected_root_tag: Optional[str]) -> str:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_s
        while True:
            document = self._take_document()
            if document is not None:
                root_tag = root_tag_of(document)
                if expected_root_tag is None or root_tag == expected_root_tag:
                    parse_document(document)
                    if self.cfg.wire_log and logger.isEnabledFor(logging.DEBUG):
                        logger.debug("RX document (%d chars): %s", len(document), document)
                    return document
                # Single flight: nobody else can be waiting for this one.
                logger.debug(
                    "Discarding <%s> document while waiting for <%s>",
                    root_tag,
                    expected_root_tag,
                )
                continue

            remaining = deadline - loop.time()
            if remaining <= 0:
                suffix = f" ({expected_root_tag})" if expected_root_tag else ""
                raise ReadTimeout(
                    f"Timed out waiting for XML response{suffix}.",
                    context=self._context(None, phase="read"),
                )
            await self._wait_for_data(timeout_s=remaining)

    # --------------------------
    # Public send API
    # --------------------------

    async def send_raw(
        self,
        xml: str,
        *,
        timeout_s: Optional[float] = None,
        expected_root_tag: Optional[str] = None,
    ) -> str:
        """
        Write one command and return the first document whose root tag is
        expected_root_tag (or the first document at all when it is None).

        The deadline starts once the command has been written. Cancelling the
        caller closes the stream.
        """
        effective_timeout = timeout_s if timeout_s is not None else self.cfg.command_timeout_s

        async def _exchange() -> str:
            self._require_connected()
            try:
                await self._write_xml(xml, timeout_s=effective_timeout)
                return await self._read_response(
                    timeout_s=effective_timeout,
                    expected_root_tag=expected_root_tag,
                )
            except asyncio.CancelledError:
                # The response may still arrive; the stream cannot be trusted.
                logger.debug("GMP command cancelled mid-exchange; closing stream")
                self._teardown(None)
                raise

        return await self._channel.run(_exchange, label=expected_root_tag or root_tag_of(xml))


__all__ = ["Connection", "redact_command"]
