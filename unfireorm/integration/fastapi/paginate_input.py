import fastapi
from typing import Optional

from unfireorm import exc
from unfireorm.pager import PaginateInput, NO_CURSOR, decode_opaque_cursor


def paginate_input(*,
        first: Optional[int] = fastapi.Query(
            None,
            ge=0,
            title='Pagination. The number of items to get after the `after` cursor.',
        ),
        after: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Opaque cursor: get items after this one.',
            description='Use `endCursor` of the current page to get the next page.',
        ),
        last: Optional[int] = fastapi.Query(
            None,
            ge=0,
            title='Pagination. The number of items to get before the `before` cursor.',
        ),
        before: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Opaque cursor: get items before this one.',
            description='Use `startCursor` of the current page to get the previous page.',
        ),
) -> PaginateInput:
    """ Get the relay page request from the request parameters

    Example:
        /api/users?first=10&after=datetime:...

        @app.get('/api/users')
        async def list_users(page: PaginateInput = fastapi.Depends(paginate_input)):
            ...

    Raises:
        fastapi.HTTPException: 400 on a malformed cursor
    """
    try:
        return PaginateInput(
            first=first,
            after=_decode_argument(after),
            last=last,
            before=_decode_argument(before),
        )
    except exc.CursorDecodeError as e:
        raise fastapi.HTTPException(status_code=400, detail=str(e)) from e


def _decode_argument(value: Optional[str]):
    """ Decode an opaque cursor argument """
    # Not given
    if value is None:
        return NO_CURSOR

    return decode_opaque_cursor(value)
