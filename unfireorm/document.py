from __future__ import annotations

import dataclasses
from typing import Any, Generic

from .mapper import Mapper, PayloadT
from .typing import StoreLocalId, DocumentReference, DocumentSnapshot, DocumentData, Client


@dataclasses.dataclass
class Document(Generic[PayloadT]):
    """ A document loaded from the store

    Keeps the store-level identity (`id`, `ref`) apart from the data (`payload`).
    """
    # Document id, as assigned by the store
    id: StoreLocalId

    # Reference to the document in the store
    ref: DocumentReference

    # Typed document data
    payload: PayloadT

    # The mapper that produced the payload. Used to write it back.
    mapper: Mapper[PayloadT] = dataclasses.field(repr=False, compare=False)

    @classmethod
    def from_snapshot(cls, snapshot: DocumentSnapshot, mapper: Mapper[PayloadT]) -> Document[PayloadT]:
        """ Map a store snapshot """
        return cls(
            id=StoreLocalId(snapshot.id),
            ref=snapshot.reference,
            payload=mapper.load(snapshot.to_dict() or {}),
            mapper=mapper,
        )

    def to_data(self) -> DocumentData:
        """ Get the document data as a dict: only the fields the payload owns """
        return self.mapper.dump(self.payload)

    def get(self, field: str, default: Any = None) -> Any:
        """ Get one field from the document data """
        return self.to_data().get(field, default)

    async def update(self) -> None:
        """ Write the payload back to the store """
        await self.ref.set(self.to_data())

    async def delete(self) -> None:
        """ Delete this document. Sub-collections are kept """
        await self.ref.delete()

    async def recursive_delete(self, client: Client) -> int:
        """ Delete this document with all of its sub-collections

        Returns:
            The number of deleted documents
        """
        return await client.recursive_delete(self.ref)
