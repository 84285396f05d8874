"""pytest configuration and fixtures for gmp_lib tests.

Provides:
- LoopbackGmpServer: scripted asyncio peer on 127.0.0.1 or a unix socket
- gmp_server: fixture starting servers and closing them after the test
- CLOSE: responder step that drops the connection
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Optional, Union

import pytest_asyncio

CLOSE = object()

# A responder turns one received command line into the steps to play back:
# bytes/str chunks are written, numbers are delays in seconds, CLOSE drops
# the connection.
Step = Union[bytes, str, float, int, object]
Responder = Callable[[str], Iterable[Step]]


def static_responder(mapping: dict[str, Iterable[Step]]) -> Responder:
    """Answer by command root tag; unknown commands get no answer."""

    def _respond(command: str) -> Iterable[Step]:
        for prefix, steps in mapping.items():
            if command.startswith(f"<{prefix}"):
                return steps
        return ()

    return _respond


class LoopbackGmpServer:
    def __init__(self, responder: Responder) -> None:
        self._responder = responder
        self._server: Optional[asyncio.AbstractServer] = None
        self._writers: set[asyncio.StreamWriter] = set()
        self.received: list[str] = []
        self.connections = 0
        self.host = "127.0.0.1"
        self.port = 0
        self.path: Optional[str] = None

    async def start(self, *, unix_path: Optional[str] = None) -> "LoopbackGmpServer":
        if unix_path is not None:
            self._server = await asyncio.start_unix_server(self._handle, path=unix_path)
            self.path = unix_path
        else:
            self._server = await asyncio.start_server(self._handle, self.host, 0)
            self.port = self._server.sockets[0].getsockname()[1]
        return self

    async def close(self) -> None:
        for writer in list(self._writers):
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        self._writers.add(writer)
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                command = line.decode("utf-8").strip()
                self.received.append(command)
                for step in self._responder(command):
                    if step is CLOSE:
                        return
                    if isinstance(step, (int, float)):
                        await asyncio.sleep(step)
                        continue
                    writer.write(step.encode("utf-8") if isinstance(step, str) else step)
                    await writer.drain()
        except (ConnectionError, OSError):
            pass
        finally:
            self._writers.discard(writer)
            writer.close()


@pytest_asyncio.fixture
async def gmp_server() -> AsyncIterator[Callable[..., Awaitable[LoopbackGmpServer]]]:
    servers: list[LoopbackGmpServer] = []

    async def _start(responder: Responder, *, unix_path: Optional[str] = None) -> LoopbackGmpServer:
        server = await LoopbackGmpServer(responder).start(unix_path=unix_path)
        servers.append(server)
        return server

    yield _start

    for server in servers:
        await server.close()
