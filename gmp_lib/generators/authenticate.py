"""Authentication request generators."""

from __future__ import annotations

from .common import Command, text_element

AUTHENTICATE_RESPONSE = "authenticate_response"


def generator_authenticate(*, username: str, password: str) -> Command:
    """Current envelope: credentials nested in a <credentials> element."""
    body = text_element("username", username) + text_element("password", password)
    return f"<authenticate><credentials>{body}</credentials></authenticate>", AUTHENTICATE_RESPONSE


def generator_authenticate_legacy(*, username: str, password: str) -> Command:
    """Older managers: username/password directly under <authenticate>."""
    body = text_element("username", username) + text_element("password", password)
    return f"<authenticate>{body}</authenticate>", AUTHENTICATE_RESPONSE
