from typing import Any


class BaseUnfireException(Exception):
    pass


class ConfigurationError(BaseUnfireException):
    """ The library is misconfigured

    Reported when a collection, a mapper, or a loader was given settings that cannot work.
    This is a programming error.
    """


class MissingCursorFieldError(ConfigurationError):
    """ A paginated document lacks the cursor field

    Every document returned by a paginated query must have the cursor field.
    Its absence is a schema error: the page fetch is aborted.
    """

    def __init__(self, cursor_field: str, document_id: str):
        self.cursor_field = cursor_field
        self.document_id = document_id

        super().__init__(f'Cursor field "{cursor_field}" is missing on document "{document_id}"')


class DocumentNotFoundError(BaseUnfireException):
    """ A point lookup found no document

    Reported per-key: sibling lookups in the same batch are not affected
    """

    def __init__(self, key: str, where: str = None, by: str = None):
        self.key = key
        self.where = where
        self.by = by

        msg = f'Document "{key}" not found'
        if where:
            msg += f' in "{where}"'
        if by:
            msg += f' by "{by}"'
        super().__init__(msg)


class PaginateInputError(BaseUnfireException):
    """ Invalid pagination input provided by the User """

    def __init__(self, err: str):
        super().__init__(f'Pagination error: {err}')


class CursorDecodeError(PaginateInputError):
    """ An opaque cursor could not be decoded """

    def __init__(self, cursor: str, err: Any):
        self.cursor = cursor
        super().__init__(f'Malformed cursor {cursor!r}: {err}')


class StoreError(BaseUnfireException):
    """ Store failure

    Only raised by the in-memory store in `unfireorm.testing`.
    Errors from a real store client propagate unmodified.
    """
