"""Handlers for get_users responses."""

from __future__ import annotations

from ..types import CommandResult, UserSummary
from ..xmlutil import XmlNode
from .common import map_entities, node_id, node_name


def _user(node: XmlNode) -> UserSummary:
    return UserSummary(
        id=node_id(node),
        name=node_name(node),
        comment=node.read_string("comment"),
        role=node.read_string("role/name", "role"),
    )


def map_users(result: CommandResult) -> list[UserSummary]:
    return map_entities(result, "user", _user)
