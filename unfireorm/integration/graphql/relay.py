""" Relay pagination """

from __future__ import annotations

from collections import abc
from typing import Any, Optional, TypedDict

from unfireorm.document import Document
from unfireorm.pager import Page, PaginateInput, NO_CURSOR, encode_opaque_cursor, decode_opaque_cursor


def paginate_input_from_args(*, first: int = None, after: str = None,
                             last: int = None, before: str = None,
                             ) -> PaginateInput:
    """ Convert relay field arguments into a page request

    Example:
        async def resolve_users(root, info, **args):
            page = await users.paginate(paginate_input_from_args(**args), ...)
            return relay_connection(page)

    Raises:
        exc.CursorDecodeError: malformed cursor. GraphQL reports it as a field error.
    """
    return PaginateInput(
        first=first,
        after=decode_opaque_cursor(after) if after is not None else NO_CURSOR,
        last=last,
        before=decode_opaque_cursor(before) if before is not None else NO_CURSOR,
    )


def relay_connection(page: Page, node: abc.Callable[[Document], Any] = None) -> ConnectionDict:
    """ Get results in Relay paginated format

    Args:
        page: The page of documents
        node: Convert a document into a GraphQL node. Default: `{'id': ..., **data}`
    """
    node = node or _document_node
    page_info = page.page_info

    return {
        'edges': [
            {'node': node(edge.node), 'cursor': encode_opaque_cursor(edge.cursor)}
            for edge in page.edges
        ],
        'pageInfo': {
            'hasPreviousPage': page_info.has_previous_page,
            'hasNextPage': page_info.has_next_page,
            'startCursor': encode_opaque_cursor(page_info.start_cursor) if page.edges else None,
            'endCursor': encode_opaque_cursor(page_info.end_cursor) if page.edges else None,
        }
    }


def _document_node(document: Document) -> dict:
    return {'id': document.id, **document.to_data()}


class ConnectionDict(TypedDict):
    """ Relay Connection type: paginated list """
    edges: list[EdgeDict]
    pageInfo: PageInfoDict


class EdgeDict(TypedDict):
    """ Relay Edge type: paginated item """
    node: Any
    cursor: str


class PageInfoDict(TypedDict):
    """ Relay Page Info """
    hasPreviousPage: bool
    hasNextPage: bool
    startCursor: Optional[str]
    endCursor: Optional[str]
