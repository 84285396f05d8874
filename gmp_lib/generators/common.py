"""Shared helpers for GMP request generators."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..errors import InvalidArgument
from ..types import SearchParameters
from ..xmlutil import escape_xml_value

# (command_xml, expected_root_tag)
Command = tuple[str, str]

ALL_ROWS = -1


def response_tag_for(command_name: str) -> str:
    return f"{command_name}_response"


def require_text(name: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"{name} must be a non-empty string (got {value!r})")
    return value


def require_command_name(command_name: object) -> str:
    name = require_text("command_name", command_name)
    if not name.replace("_", "").isalnum() or name[0].isdigit():
        raise InvalidArgument(f"command_name must be a plain element name (got {command_name!r})")
    return name


def flag(value: bool) -> str:
    return "1" if value else "0"


def text_element(tag: str, value: str) -> str:
    return f"<{tag}>{escape_xml_value(value)}</{tag}>"


def id_element(tag: str, resource_id: str) -> str:
    return f'<{tag} id="{escape_xml_value(resource_id)}"/>'


def merge_search_parameters(params: SearchParameters) -> SearchParameters:
    """Fold query_text into the filter expression."""
    query_text = (params.query_text or "").strip()
    if not query_text:
        return replace(params, query_text=None)
    current = (params.filter or "").strip()
    merged = f"{current} {query_text}" if current else query_text
    return replace(params, filter=merged, query_text=None)


def build_filter_string(params: Optional[SearchParameters]) -> Optional[str]:
    if params is None:
        return None

    fragments: list[str] = []
    if params.filter and params.filter.strip():
        fragments.append(params.filter.strip())
    if params.extra_filter and params.extra_filter.strip():
        fragments.append(params.extra_filter.strip())
    if params.first is not None:
        fragments.append(f"first={params.first}")
    if params.rows is not None:
        fragments.append(f"rows={params.rows}")
    if params.sort_field and params.sort_field.strip():
        prefix = "-" if params.sort_desc else ""
        fragments.append(f"sort={prefix}{params.sort_field.strip()}")

    if not fragments:
        return None
    return " ".join(fragments)


def build_get_command_attributes(params: Optional[SearchParameters]) -> str:
    attributes: list[str] = []
    if params is not None and params.details is not None:
        attributes.append(f'details="{flag(params.details)}"')

    filter_string = build_filter_string(params)
    if filter_string:
        attributes.append(f'filter="{escape_xml_value(filter_string)}"')

    if not attributes:
        return ""
    return " " + " ".join(attributes)


def generator_get_list(command_name: str, *, search: Optional[SearchParameters] = None) -> Command:
    name = require_command_name(command_name)
    params = merge_search_parameters(search) if search is not None else None
    return f"<{name}{build_get_command_attributes(params)}/>", response_tag_for(name)


def generator_get_all(command_name: str) -> Command:
    return generator_get_list(command_name, search=SearchParameters(rows=ALL_ROWS))


def generator_get_page(command_name: str, *, first: int, rows: int) -> Command:
    if not isinstance(first, int) or first < 1:
        raise InvalidArgument(f"first must be an int >= 1 (got {first!r})")
    if not isinstance(rows, int) or rows < 1:
        raise InvalidArgument(f"rows must be an int >= 1 (got {rows!r})")
    return generator_get_list(command_name, search=SearchParameters(first=first, rows=rows))
