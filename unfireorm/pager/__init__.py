""" Cursor-based pagination

Relay-style pagination over a store that only knows start-after / end-before / limit.
"""

from .page import PaginateInput, QueryInput, Edge, PageInfo, Page, NO_CURSOR
from .paginate import paginate_query, get_cursor, FindManyByQuery
from .cursor import encode_opaque_cursor, decode_opaque_cursor, CursorValue
