"""System-level request generators."""

from __future__ import annotations

from .common import Command, response_tag_for


def generator_get_version() -> Command:
    return "<get_version/>", response_tag_for("get_version")
