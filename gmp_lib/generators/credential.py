"""Credential request generators."""

from __future__ import annotations

from typing import Optional

from ..errors import InvalidArgument
from ..xmlutil import escape_xml_value
from .common import Command, flag, require_text, response_tag_for, text_element


def generator_create_credential(
    *,
    name: str,
    login: str,
    password: str,
    comment: Optional[str] = None,
    allow_insecure: Optional[bool] = None,
) -> Command:
    require_text("name", name)
    require_text("login", login)
    if not isinstance(password, str):
        raise InvalidArgument("password must be a string")
    parts = [
        "<create_credential>",
        text_element("name", name),
        text_element("login", login),
        text_element("password", password),
    ]
    if comment:
        parts.append(text_element("comment", comment))
    if allow_insecure is not None:
        parts.append(f"<allow_insecure>{flag(allow_insecure)}</allow_insecure>")
    parts.append("</create_credential>")
    return "".join(parts), response_tag_for("create_credential")


def generator_delete_credential(*, credential_id: str, ultimate: bool = False) -> Command:
    require_text("credential_id", credential_id)
    return (
        f'<delete_credential credential_id="{escape_xml_value(credential_id)}" ultimate="{flag(ultimate)}"/>',
        response_tag_for("delete_credential"),
    )
