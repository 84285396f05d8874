"""
gmp_lib/status.py

Status interpretation for GMP responses.

Responses report success through a "status" attribute (an HTTP-like code)
and a human readable "status_text". Some commands omit both on the happy
path, so a response whose root tag ends in "_response" and carries no
status code also counts as success.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import GmpStatus
from .xmlutil import XmlNode

RESPONSE_SUFFIX = "_response"

_RESOURCE_ID_ATTRIBUTES = (
    "id",
    "task_id",
    "report_id",
    "credential_id",
    "target_id",
    "port_list_id",
    "result_id",
)


@dataclass(frozen=True, slots=True)
class StatusVerdict:
    ok: bool
    message: Optional[str]


def read_status(root: XmlNode) -> GmpStatus:
    raw_code = root.attr("status")
    if raw_code is None:
        raw_code = root.read_string("status")
    text = root.attr("status_text")
    if text is None:
        text = root.read_string("status_text")

    code: Optional[int] = None
    if raw_code:
        try:
            code = int(raw_code.strip())
        except ValueError:
            code = None
    return GmpStatus(code=code, raw_code=raw_code, text=text)


def is_status_success(status_code: Optional[int]) -> bool:
    if status_code is None:
        return False
    return 200 <= status_code < 300


def interpret_status(status: GmpStatus, root_tag: str) -> StatusVerdict:
    ok = is_status_success(status.code) or (
        status.code is None and root_tag.endswith(RESPONSE_SUFFIX)
    )
    if ok:
        return StatusVerdict(ok=True, message=status.text)
    message = status.text or (
        f'Command failed with root response tag "{root_tag}" and no status text.'
    )
    return StatusVerdict(ok=False, message=message)


def read_resource_id(root: XmlNode) -> Optional[str]:
    for name in _RESOURCE_ID_ATTRIBUTES:
        value = root.attr(name)
        if value:
            return value
    return None


__all__ = [
    "RESPONSE_SUFFIX",
    "StatusVerdict",
    "interpret_status",
    "is_status_success",
    "read_resource_id",
    "read_status",
]
