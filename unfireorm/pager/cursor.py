""" Opaque cursors

Cursor values are raw field values: strings, numbers, timestamps.
Transport layers (GraphQL, HTTP) want strings, so cursors are encoded as opaque strings:
a prefix that tells the value type, and the base85-encoded JSON of the value.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any, Union

from unfireorm import exc


CursorValue = Union[str, int, float, bool, datetime, None]


def encode_opaque_cursor(value: CursorValue) -> str:
    """ Encode a cursor value as an opaque string. Give it a nice prefix so that the user sees what's up

    Raises:
        TypeError: unsupported value type
    """
    # NOTE: bool before int: bool is a subclass of int
    if value is None:
        prefix, data = 'null', None
    elif isinstance(value, bool):
        prefix, data = 'bool', value
    elif isinstance(value, datetime):  # also: Firestore's DatetimeWithNanoseconds
        prefix, data = 'datetime', value.isoformat()
    elif isinstance(value, int):
        prefix, data = 'int', value
    elif isinstance(value, float):
        prefix, data = 'float', value
    elif isinstance(value, str):
        prefix, data = 'str', value
    else:
        raise TypeError(f'Cannot encode a cursor of type {type(value).__name__}')

    return prefix + ':' + base64.b85encode(json.dumps(data).encode()).decode()


def decode_opaque_cursor(cursor: str) -> CursorValue:
    """ Decode an opaque cursor into its value

    Raises:
        exc.CursorDecodeError: all sorts of errors related to bad cursor
    """
    try:
        prefix, data_encoded = cursor.split(':', 1)
        data = json.loads(base64.b85decode(data_encoded))
    except (ValueError, AttributeError, binascii.Error) as e:  # json.JSONDecodeError is a ValueError
        raise exc.CursorDecodeError(cursor, e) from e

    try:
        decoder = _DECODERS[prefix]
    except KeyError:
        raise exc.CursorDecodeError(cursor, f'unknown cursor type {prefix!r}')

    try:
        return decoder(data)
    except (TypeError, ValueError) as e:
        raise exc.CursorDecodeError(cursor, e) from e


def _expect(type_: type):
    def decoder(data: Any):
        if not isinstance(data, type_) or (type_ is not bool and isinstance(data, bool)):
            raise TypeError(f'expected {type_.__name__}, got {type(data).__name__}')
        return data
    return decoder


def _decode_float(data: Any) -> float:
    # JSON writes 1.0 as "1.0" but let's be lenient with ints
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        raise TypeError(f'expected float, got {type(data).__name__}')
    return float(data)


def _decode_null(data: Any) -> None:
    if data is not None:
        raise TypeError(f'expected null, got {type(data).__name__}')
    return None


_DECODERS = {
    'null': _decode_null,
    'bool': _expect(bool),
    'int': _expect(int),
    'float': _decode_float,
    'str': _expect(str),
    'datetime': lambda data: datetime.fromisoformat(_expect(str)(data)),
}
