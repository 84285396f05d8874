"""
Bulk retrieval with paged fallback.

Managers usually honour filter="rows=-1" and return every row at once.
Some reject it (or cap it); then the collection is walked with
first=F rows=P pages until a page comes back short.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from .errors import InvalidArgument, PaginationFailure
from .generators.common import generator_get_all, generator_get_page, response_tag_for
from .session import Session
from .types import CommandResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_all_entities(
    session: Session,
    command_name: str,
    entity_name: str,
    mapper: Callable[[CommandResult], list[T]],
    *,
    expected_root_tag: Optional[str] = None,
    page_size: Optional[int] = None,
) -> list[T]:
    """
    Return every mapped entity of a get_* command.

    Raises PaginationFailure when a page is rejected after the bulk request
    already was. Transport and state errors propagate from the session.
    """
    if page_size is None:
        page_size = session.cfg.page_size
    if not isinstance(page_size, int) or page_size < 1:
        raise InvalidArgument(f"page_size must be an int >= 1 (got {page_size!r})")
    response_tag = expected_root_tag or response_tag_for(command_name)

    xml, _ = generator_get_all(command_name)
    result = await session.execute_authenticated_command(xml, response_tag)
    if result.ok:
        mapped = mapper(result)
        session.clear_last_error()
        return mapped

    logger.debug(
        "Bulk %s rejected (%s); paging %s rows %d at a time",
        command_name,
        result.status.text,
        entity_name,
        page_size,
    )
    items: list[T] = []
    first = 1
    while True:
        xml, _ = generator_get_page(command_name, first=first, rows=page_size)
        page = await session.execute_authenticated_command(xml, response_tag)
        if not page.ok:
            raise PaginationFailure(
                page.status.text or f"Unable to retrieve all {entity_name} rows via pagination."
            )
        items.extend(mapper(page))
        count = len(page.root.entity_nodes(entity_name))
        logger.debug("%s page first=%d returned %d %s rows", command_name, first, count, entity_name)
        if count < page_size:
            break
        first += page_size

    session.clear_last_error()
    return items


__all__ = ["fetch_all_entities"]
