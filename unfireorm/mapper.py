""" Mappers: convert raw document data into typed payloads and back

A mapper is injected into a collection when it's constructed.
It decides which fields a document owns: everything else (e.g. sub-collection handles) is never exported.
"""

from __future__ import annotations

import dataclasses
from typing import Generic, TypeVar, Protocol

from . import exc
from .typing import DocumentData


PayloadT = TypeVar('PayloadT')


class Mapper(Protocol[PayloadT]):
    """ Capability: convert raw document data <-> a typed payload """

    def load(self, data: DocumentData) -> PayloadT:
        """ Raw document data -> payload """

    def dump(self, payload: PayloadT) -> DocumentData:
        """ Payload -> raw document data. Only the fields the payload owns """


class DictMapper:
    """ No-op mapper: payloads are plain dicts, stored as is """

    def load(self, data: DocumentData) -> DocumentData:
        return dict(data)

    def dump(self, payload: DocumentData) -> DocumentData:
        return dict(payload)


class DataclassMapper(Generic[PayloadT]):
    """ Mapper for dataclass payloads

    The dataclass declares exactly the fields a document owns:
    they are the only ones loaded from the store and the only ones written back.

    Example:
        @dataclass
        class User:
            display_name: str
            created_at: datetime

        users = Collection(client.collection('users'), DataclassMapper(User))
    """

    def __init__(self, cls: type[PayloadT]):
        if not dataclasses.is_dataclass(cls) or not isinstance(cls, type):
            raise exc.ConfigurationError(f'{cls!r} is not a dataclass')

        self.cls = cls
        self.field_names: tuple[str, ...] = tuple(
            field.name
            for field in dataclasses.fields(cls)
            if field.init
        )

    def load(self, data: DocumentData) -> PayloadT:
        # Unknown keys are dropped: the dataclass defines the projection
        return self.cls(**{
            name: data[name]
            for name in self.field_names
            if name in data
        })

    def dump(self, payload: PayloadT) -> DocumentData:
        return {
            name: getattr(payload, name)
            for name in self.field_names
        }
