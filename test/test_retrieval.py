import re

import pytest

from gmp_lib.errors import InvalidArgument, PaginationFailure
from gmp_lib.handlers.users import map_users
from gmp_lib.retrieval import fetch_all_entities
from gmp_lib.session import Session
from gmp_lib.types import ClientConfig, Credentials, TcpTarget

AUTH_OK = '<authenticate_response status="200" status_text="OK"/>'
_PAGE_RE = re.compile(r'filter="first=(\d+) rows=(\d+)"')


class _PagingTransport:
    """A manager holding `total` users that rejects rows=-1 unless bulk_ok."""

    def __init__(self, total: int, *, bulk_ok: bool = False, fail_at_first: int | None = None) -> None:
        self.total = total
        self.bulk_ok = bulk_ok
        self.fail_at_first = fail_at_first
        self.sent: list[str] = []
        self.connected = False

    async def connect(self, target, *, timeout_s=None) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    def is_connected(self) -> bool:
        return self.connected

    def _users(self, first: int, rows: int) -> str:
        last = min(self.total, first + rows - 1)
        users = "".join(f'<user id="u{i}"><name>user{i}</name></user>' for i in range(first, last + 1))
        return f'<get_users_response status="200" status_text="OK">{users}<filters/></get_users_response>'

    async def send_raw(self, xml, *, timeout_s=None, expected_root_tag=None) -> str:
        self.sent.append(xml)
        if xml.startswith("<authenticate"):
            return AUTH_OK
        if 'filter="rows=-1"' in xml:
            if self.bulk_ok:
                return self._users(1, self.total)
            return '<get_users_response status="400" status_text="Unsupported filter"/>'
        match = _PAGE_RE.search(xml)
        assert match is not None, xml
        first, rows = int(match.group(1)), int(match.group(2))
        if first == self.fail_at_first:
            return '<get_users_response status="500" status_text="Internal error"/>'
        return self._users(first, rows)


async def _session(transport: _PagingTransport, **cfg) -> Session:
    session = Session(ClientConfig(**cfg), transport=transport)
    assert await session.connect(Credentials("admin", "secret"), TcpTarget("127.0.0.1", 9390))
    return session


def _list_commands(transport: _PagingTransport) -> list[str]:
    return [xml for xml in transport.sent if xml.startswith("<get_users")]


@pytest.mark.asyncio
async def test_bulk_fetch_returns_everything_in_one_call() -> None:
    transport = _PagingTransport(5, bulk_ok=True)
    session = await _session(transport)
    session.last_error = "previous failure"

    users = await fetch_all_entities(session, "get_users", "user", map_users)

    assert [u.id for u in users] == ["u1", "u2", "u3", "u4", "u5"]
    assert _list_commands(transport) == ['<get_users filter="rows=-1"/>']
    assert session.get_last_error() is None


@pytest.mark.asyncio
async def test_rejected_bulk_fetch_falls_back_to_pages() -> None:
    transport = _PagingTransport(350)
    session = await _session(transport)

    users = await fetch_all_entities(session, "get_users", "user", map_users)

    assert len(users) == 350
    assert [u.id for u in users[:2]] == ["u1", "u2"]
    assert users[199].id == "u200"
    assert users[200].id == "u201"
    assert users[-1].name == "user350"
    assert _list_commands(transport) == [
        '<get_users filter="rows=-1"/>',
        '<get_users filter="first=1 rows=200"/>',
        '<get_users filter="first=201 rows=200"/>',
    ]
    assert session.get_last_error() is None


@pytest.mark.asyncio
async def test_exact_multiple_of_page_size_ends_on_empty_page() -> None:
    transport = _PagingTransport(4)
    session = await _session(transport)

    users = await fetch_all_entities(session, "get_users", "user", map_users, page_size=2)

    assert [u.id for u in users] == ["u1", "u2", "u3", "u4"]
    assert _list_commands(transport)[1:] == [
        '<get_users filter="first=1 rows=2"/>',
        '<get_users filter="first=3 rows=2"/>',
        '<get_users filter="first=5 rows=2"/>',
    ]


@pytest.mark.asyncio
async def test_page_size_comes_from_config() -> None:
    transport = _PagingTransport(3)
    session = await _session(transport, page_size=10)

    users = await fetch_all_entities(session, "get_users", "user", map_users)

    assert len(users) == 3
    assert _list_commands(transport)[1:] == ['<get_users filter="first=1 rows=10"/>']


@pytest.mark.asyncio
async def test_failed_page_raises_pagination_failure() -> None:
    transport = _PagingTransport(350, fail_at_first=201)
    session = await _session(transport)

    with pytest.raises(PaginationFailure, match="Internal error"):
        await fetch_all_entities(session, "get_users", "user", map_users)
    assert session.get_last_error() == "Internal error"


@pytest.mark.asyncio
async def test_failed_page_without_status_text_uses_default_message() -> None:
    class _Silent(_PagingTransport):
        async def send_raw(self, xml, *, timeout_s=None, expected_root_tag=None) -> str:
            if "first=" in xml:
                self.sent.append(xml)
                return '<get_users_response status="503"/>'
            return await super().send_raw(xml, timeout_s=timeout_s, expected_root_tag=expected_root_tag)

    session = await _session(_Silent(10))
    with pytest.raises(PaginationFailure, match="Unable to retrieve all user rows via pagination."):
        await fetch_all_entities(session, "get_users", "user", map_users)


@pytest.mark.asyncio
async def test_invalid_page_size_is_rejected() -> None:
    session = await _session(_PagingTransport(1))
    with pytest.raises(InvalidArgument):
        await fetch_all_entities(session, "get_users", "user", map_users, page_size=0)
