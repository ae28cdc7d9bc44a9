""" Structural types for the document store

The library talks to the store through these protocols only.
They follow the async API of `google-cloud-firestore` (`AsyncClient`),
and `unfireorm.testing` implements them in memory.
"""

from __future__ import annotations

from collections import abc
from typing import Any, NewType, Optional, Protocol, Union


# Document id as assigned by the store. Unique within one collection only.
StoreLocalId = NewType('StoreLocalId', str)

# Application-level unique key. Used to address documents across a collection group,
# where store ids are not guaranteed to be unique.
GlobalUniqueKey = NewType('GlobalUniqueKey', str)

# Raw document data, as stored
DocumentData = dict[str, Any]

# A cursor position: { field name => value }, as understood by start_after() / end_before()
CursorPosition = dict[str, Any]


class DocumentSnapshot(Protocol):
    """ A document read from the store """
    @property
    def id(self) -> str: ...

    @property
    def reference(self) -> DocumentReference: ...

    @property
    def exists(self) -> bool: ...

    def to_dict(self) -> Optional[DocumentData]: ...


class DocumentReference(Protocol):
    """ A pointer to a document, existing or not """
    @property
    def id(self) -> str: ...

    async def get(self) -> DocumentSnapshot: ...

    async def set(self, document_data: DocumentData) -> Any: ...

    async def delete(self) -> Any: ...

    def collection(self, collection_id: str) -> CollectionReference: ...


class Query(Protocol):
    """ An ordered query. Every method but get() returns a new query """
    def where(self, field_path: str, op_string: str, value: Any) -> Query: ...

    def order_by(self, field_path: str, direction: str = ...) -> Query: ...

    def start_after(self, document_fields: Union[CursorPosition, DocumentSnapshot]) -> Query: ...

    def end_before(self, document_fields: Union[CursorPosition, DocumentSnapshot]) -> Query: ...

    def limit(self, count: int) -> Query: ...

    async def get(self) -> list[DocumentSnapshot]: ...


class CollectionReference(Query, Protocol):
    """ A collection: a query over its documents that can also address & create them """
    @property
    def id(self) -> str: ...

    def document(self, document_id: Optional[str] = None) -> DocumentReference: ...

    async def add(self, document_data: DocumentData, document_id: Optional[str] = None) -> tuple[Any, DocumentReference]: ...


# A collection group is just a query across all collections with the same name
CollectionGroup = Query


class Client(Protocol):
    """ The store client """
    def collection(self, collection_id: str) -> CollectionReference: ...

    def collection_group(self, collection_id: str) -> CollectionGroup: ...

    async def recursive_delete(self, reference: Union[CollectionReference, DocumentReference]) -> int: ...


# A function that builds a query from a collection (or collection group) reference
QueryFn = abc.Callable[[Any], Query]
