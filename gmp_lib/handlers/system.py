"""Handlers for get_version responses."""

from __future__ import annotations

from ..types import CommandResult, VersionInfo


def map_version(result: CommandResult) -> VersionInfo:
    version = result.root.read_string("version", "get_version_response/version", "gvmd_version")
    return VersionInfo(raw_response=result, version=version or None)
