""" Relay pagination over an ordered query

The store can't skip to "page N", and it doesn't count rows.
All it can do is: order by a field, start after / end before a value, limit.

So a page is fetched like this:

* `first`: forward query, start after the `after` cursor, limit `first`
* `last`: backward query, start after the `before` cursor, limit `last`; then reversed back into forward order
* neither: the whole forward query

Then two probe queries, 1 row each, tell whether there's anything beyond the page's boundaries.
Both probes use the forward query.
"""

from __future__ import annotations

import asyncio
import logging
from collections import abc
from typing import Any, Optional, Protocol

from unfireorm import exc
from unfireorm.document import Document
from unfireorm.settings import CollectionSettings
from unfireorm.typing import Query, QueryFn

from .page import PaginateInput, QueryInput, Edge, PageInfo, Page, NO_CURSOR


logger = logging.getLogger(__name__)


class FindManyByQuery(Protocol):
    """ Capability: run a query against the collection, get mapped documents

    Documents that lack the `required_field` must fail with `MissingCursorFieldError`
    """
    def __call__(self, query_fn: QueryFn, *, prime: bool = False,
                 required_field: Optional[str] = None) -> abc.Awaitable[list[Document]]: ...


async def paginate_query(
        paginate_input: PaginateInput,
        query_input: QueryInput,
        find_many_by_query: FindManyByQuery,
        *,
        prime: bool = False,
        settings: Optional[CollectionSettings] = None,
) -> Page[Document, Any]:
    """ Fetch a page of documents

    Args:
        paginate_input: The page request: first/after, or last/before
        query_input: The forward and backward queries, and the name of the cursor field
        find_many_by_query: The function that executes queries
        prime: Put the documents of the page into the document loader cache
        settings: Page size limits

    Raises:
        exc.PaginateInputError: negative `first` / `last`
        exc.MissingCursorFieldError: a document lacks the cursor field
    """
    forward, backward, cursor_field = query_input.forward, query_input.backward, query_input.cursor_field
    first, after, last, before = _prepare_input(paginate_input, settings)

    # Load the nodes
    nodes: list[Document]
    if first is not None:
        nodes = await _fetch_nodes(find_many_by_query, forward, cursor_field, after, first, prime=prime)
    elif last is not None:
        nodes = await _fetch_nodes(find_many_by_query, backward, cursor_field, before, last, prime=prime)
        nodes.reverse()  # fetched in reverse order
    else:
        logger.debug('Paginating without a limit: fetching the whole query')
        nodes = await find_many_by_query(lambda ref: forward, prime=prime, required_field=cursor_field)

    # Edges
    edges = [
        Edge(node=node, cursor=get_cursor(node, cursor_field))
        for node in nodes
    ]

    # Empty page: nothing to probe
    if not edges:
        return Page(
            edges=[],
            page_info=PageInfo(has_next_page=False, has_previous_page=False),
        )

    # Probe the neighbors
    start_cursor = edges[0].cursor
    end_cursor = edges[-1].cursor
    has_next_page, has_previous_page = await asyncio.gather(
        _exists(find_many_by_query, lambda ref: forward.start_after({cursor_field: end_cursor}).limit(1)),
        _exists(find_many_by_query, lambda ref: forward.end_before({cursor_field: start_cursor}).limit(1)),
    )

    # Done
    return Page(
        edges=edges,
        page_info=PageInfo(
            has_next_page=has_next_page,
            has_previous_page=has_previous_page,
            start_cursor=start_cursor,
            end_cursor=end_cursor,
        ),
    )


def get_cursor(node: Document, cursor_field: str) -> Any:
    """ Get the cursor value from a document

    `None` is a valid cursor value; a missing field is not.

    Raises:
        exc.MissingCursorFieldError
    """
    data = node.to_data()
    try:
        return data[cursor_field]
    except KeyError:
        raise exc.MissingCursorFieldError(cursor_field, node.id)


def _prepare_input(paginate_input: PaginateInput, settings: Optional[CollectionSettings]) -> tuple[Optional[int], Any, Optional[int], Any]:
    """ Validate the input, apply limits from the settings """
    first, after, last, before = paginate_input.first, paginate_input.after, paginate_input.last, paginate_input.before

    for name, value in (('first', first), ('last', last)):
        if value is not None and value < 0:
            raise exc.PaginateInputError(f'"{name}" must be non-negative, got {value}')

    if settings is not None:
        if first is not None:
            first = settings.get_final_limit(first)
        elif last is not None:
            last = settings.get_final_limit(last)
        else:
            first = settings.get_default_limit()

    return first, after, last, before


async def _fetch_nodes(find_many_by_query: FindManyByQuery, query: Query, cursor_field: str, cursor: Any, limit: int, *, prime: bool) -> list[Document]:
    """ Fetch up to `limit` nodes that follow `cursor` in `query` order """
    if limit == 0:
        return []

    if cursor is not NO_CURSOR:
        query = query.start_after({cursor_field: cursor})

    return list(await find_many_by_query(lambda ref: query.limit(limit), prime=prime, required_field=cursor_field))


async def _exists(find_many_by_query: FindManyByQuery, query_fn: QueryFn) -> bool:
    """ Probe: does this query return anything? """
    return len(await find_many_by_query(query_fn)) > 0
