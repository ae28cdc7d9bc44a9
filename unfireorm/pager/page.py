from __future__ import annotations

import dataclasses
from typing import Any, Generic, Optional, TypeVar, Union

from unfireorm.typing import Query


CursorT = TypeVar('CursorT')
NodeT = TypeVar('NodeT')


class _NoCursor:
    """ Marker: no cursor given. `None` can't be used: it's a valid cursor value """

    def __repr__(self):
        return 'NO_CURSOR'


NO_CURSOR: Any = _NoCursor()


@dataclasses.dataclass
class PaginateInput(Generic[CursorT]):
    """ Relay page request

    Use `first` + `after` to go forward, or `last` + `before` to go backward.
    When both `first` and `last` are given, `first` wins.
    When neither is given, the whole query is fetched.

    `after` and `before` default to `NO_CURSOR`: start from the edge of the query.
    `None` is a cursor like any other: documents where the cursor field is null.
    """
    first: Optional[int] = None
    after: Union[CursorT, Any] = NO_CURSOR
    last: Optional[int] = None
    before: Union[CursorT, Any] = NO_CURSOR

    @classmethod
    def from_dict(cls, input: Optional[dict]) -> PaginateInput[CursorT]:
        """ Create from a dict of relay arguments. Unknown keys are ignored. Missing or null cursors are not given """
        input = input or {}
        return cls(
            first=input.get('first'),
            after=_cursor_or_no_cursor(input.get('after')),
            last=input.get('last'),
            before=_cursor_or_no_cursor(input.get('before')),
        )


@dataclasses.dataclass
class QueryInput:
    """ The queries to paginate

    Both queries must be ordered by `cursor_field`: `forward` in the canonical order, `backward` in reverse.
    """
    forward: Query
    backward: Query
    cursor_field: str


@dataclasses.dataclass
class Edge(Generic[NodeT, CursorT]):
    """ Paginated item """
    node: NodeT
    cursor: CursorT


@dataclasses.dataclass
class PageInfo(Generic[CursorT]):
    """ Page boundaries, and whether there's anything beyond them """
    has_next_page: bool
    has_previous_page: bool
    start_cursor: Optional[CursorT] = None
    end_cursor: Optional[CursorT] = None


@dataclasses.dataclass
class Page(Generic[NodeT, CursorT]):
    """ A page of results """
    edges: list[Edge[NodeT, CursorT]]
    page_info: PageInfo[CursorT]

    @property
    def nodes(self) -> list[NodeT]:
        return [edge.node for edge in self.edges]

    def __len__(self):
        return len(self.edges)

    def __iter__(self):
        return iter(self.nodes)



def _cursor_or_no_cursor(value: Any) -> Any:
    return NO_CURSOR if value is None else value
