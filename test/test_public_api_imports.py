from __future__ import annotations

import dataclasses
from enum import Enum

import pytest

import gmp_lib
from gmp_lib import (
    Capabilities,
    ClientConfig,
    CommandResult,
    Credentials,
    Diagnostics,
    GmpClient,
    GmpError,
    GmpProtocolError,
    GmpStateError,
    GmpTransportError,
    InvalidArgument,
    NotAuthenticated,
    OperationResult,
    ReadTimeout,
    SearchParameters,
    SessionState,
    TcpTarget,
    UnixSocketTarget,
)


def test_public_api_types_are_dataclasses_or_enums() -> None:
    for cls in (
        ClientConfig,
        Credentials,
        TcpTarget,
        UnixSocketTarget,
        CommandResult,
        OperationResult,
        SearchParameters,
        Diagnostics,
        Capabilities,
    ):
        assert dataclasses.is_dataclass(cls)
    assert issubclass(SessionState, Enum)


def test_every_exported_name_resolves() -> None:
    for name in gmp_lib.__all__:
        assert getattr(gmp_lib, name) is not None


def test_error_hierarchy() -> None:
    assert issubclass(GmpTransportError, GmpError)
    assert issubclass(GmpStateError, GmpError)
    assert issubclass(GmpProtocolError, GmpError)
    assert issubclass(ReadTimeout, TimeoutError)
    assert issubclass(NotAuthenticated, GmpStateError)
    assert issubclass(InvalidArgument, ValueError)


def test_client_config_defaults_and_validation() -> None:
    cfg = ClientConfig()
    assert (cfg.connect_timeout_s, cfg.command_timeout_s, cfg.disconnect_grace_s, cfg.page_size) == (15.0, 20.0, 0.5, 200)
    assert cfg.wire_log is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.page_size = 10  # type: ignore[misc]
    for bad in ({"page_size": 0}, {"command_timeout_s": 0}, {"connect_timeout_s": -1.0}, {"recv_max_bytes": 0}):
        with pytest.raises(InvalidArgument):
            ClientConfig(**bad)


def test_targets_and_credentials() -> None:
    assert TcpTarget("scanner.local", 9390).kind == "tcp"
    assert TcpTarget("scanner.local", 9390).describe() == "scanner.local:9390"
    assert UnixSocketTarget("/run/gvmd/gvmd.sock").kind == "unix_socket"
    assert "secret" not in repr(Credentials("admin", "secret"))


def test_client_instantiation_without_connection() -> None:
    client = GmpClient()
    assert client.is_connected() is False
    assert client.is_authenticated() is False
    assert client.get_last_error() is None
