""" Collections: typed access to the store

* `Collection`: documents of one collection, addressed by store id
* `CollectionGroup`: documents of every collection with the same name, addressed by a unique field

Each collection object owns a document loader: keep one per request to keep the cache fresh.
"""

from __future__ import annotations

from typing import Any, Generic, Optional

from . import exc
from .document import Document
from .loader import DocumentLoader, CollectionDocumentLoader, CollectionGroupDocumentLoader
from .mapper import Mapper, PayloadT
from .pager import PaginateInput, QueryInput, Page, paginate_query
from .settings import CollectionSettings
from .typing import CollectionReference, CollectionGroup as CollectionGroupRef, DocumentSnapshot
from .typing import Query, QueryFn, StoreLocalId, GlobalUniqueKey


class CollectionBase(Generic[PayloadT]):
    """ Operations shared by collections and collection groups """
    # Store reference: a collection, or a collection group query
    ref: Any

    # Converts raw document data into payloads
    mapper: Mapper[PayloadT]

    # Batches & caches point lookups
    loader: DocumentLoader

    settings: CollectionSettings

    def __init__(self, ref: Any, mapper: Mapper[PayloadT], loader: DocumentLoader, settings: Optional[CollectionSettings]):
        self.ref = ref
        self.mapper = mapper
        self.loader = loader
        self.settings = settings or CollectionSettings()

    def transform(self, snapshot: DocumentSnapshot) -> Document[PayloadT]:
        """ Map a store snapshot to a document """
        return Document.from_snapshot(snapshot, self.mapper)

    def cache_key(self, snapshot: DocumentSnapshot) -> str:
        """ Get the loader cache key for a snapshot """
        raise NotImplementedError

    async def find_one_by_id(self, key: str, *, cache: bool = True) -> Document[PayloadT]:
        """ Find a document by key

        Args:
            key: The document key
            cache: Use the cached document, if any. With `False`, always read from the store.

        Raises:
            exc.DocumentNotFoundError
        """
        if not cache:
            self.loader.clear(key)
        return self.transform(await self.loader.load(key))

    async def find_many_by_id(self, keys: list[str], *, cache: bool = True) -> list[Document[PayloadT]]:
        """ Find many documents by keys, in one batch

        Raises:
            exc.DocumentNotFoundError: if any of them is missing
        """
        if not cache:
            for key in keys:
                self.loader.clear(key)
        return [self.transform(snapshot) for snapshot in await self.loader.load_many(keys)]

    async def find_many_by_query(self, query_fn: QueryFn, *, prime: bool = False,
                                 required_field: Optional[str] = None) -> list[Document[PayloadT]]:
        """ Run a query, get documents

        Args:
            query_fn: A function that builds a query from the collection reference
            prime: Put the loaded documents into the loader cache
            required_field: A field every document must have in the store. Checked before mapping.

        Raises:
            exc.MissingCursorFieldError: a document lacks the `required_field`
        """
        snapshots = await query_fn(self.ref).get()

        if required_field is not None:
            for snapshot in snapshots:
                if required_field not in (snapshot.to_dict() or {}):
                    raise exc.MissingCursorFieldError(required_field, snapshot.id)

        if prime:
            for snapshot in snapshots:
                self.loader.prime(self.cache_key(snapshot), snapshot)

        return [self.transform(snapshot) for snapshot in snapshots]

    async def paginate(self, paginate_input: PaginateInput, *,
                       forward: Query, backward: Query, cursor_field: str,
                       prime: Optional[bool] = None) -> Page[Document[PayloadT], Any]:
        """ Get a page of documents

        Example:
            users.paginate(
                PaginateInput(first=10),
                forward=users.ref.order_by('created_at', direction='ASCENDING'),
                backward=users.ref.order_by('created_at', direction='DESCENDING'),
                cursor_field='created_at',
            )

        Args:
            paginate_input: The page request
            forward: The query ordered by `cursor_field`
            backward: The same query in reverse order
            cursor_field: The field to get cursor values from
            prime: Put the loaded documents into the loader cache. Default: from settings.

        Raises:
            exc.PaginateInputError
            exc.MissingCursorFieldError
        """
        return await paginate_query(
            paginate_input,
            QueryInput(forward=forward, backward=backward, cursor_field=cursor_field),
            self.find_many_by_query,
            prime=self.settings.prime_on_paginate if prime is None else prime,
            settings=self.settings,
        )

    def clear(self, key: str):
        """ Forget the cached document """
        self.loader.clear(key)


class Collection(CollectionBase[PayloadT]):
    """ Documents of one collection

    Example:
        users = Collection(client.collection('users'), DataclassMapper(User))
        user = await users.find_one_by_id('1')
    """
    ref: CollectionReference

    def __init__(self, ref: CollectionReference, mapper: Mapper[PayloadT], settings: CollectionSettings = None):
        settings = settings or CollectionSettings()
        super().__init__(
            ref,
            mapper,
            CollectionDocumentLoader(ref, max_batch_size=settings.max_batch_size),
            settings,
        )

    def cache_key(self, snapshot: DocumentSnapshot) -> StoreLocalId:
        return StoreLocalId(snapshot.id)

    async def insert(self, payload: PayloadT, id: Optional[str] = None) -> Document[PayloadT]:
        """ Insert a document, get it back

        Args:
            payload: Document data
            id: Document id. If given, an existing document with this id is overwritten.
                Otherwise, the store generates an id.

        Returns:
            The document, as stored
        """
        data = self.mapper.dump(payload)

        if id is not None:
            ref = self.ref.document(id)
            await ref.set(data)
        else:
            _, ref = await self.ref.add(data)

        return await self.find_one_by_id(ref.id, cache=False)

    async def update(self, document: Document[PayloadT]) -> Document[PayloadT]:
        """ Save the document's payload to the store """
        await document.update()
        self.loader.clear(document.id)
        return document

    async def delete(self, id: str):
        """ Delete a document by id. Sub-collections are kept """
        await self.ref.document(id).delete()
        self.loader.clear(id)

    def sub_collection(self, id: str, name: str, mapper: Mapper, settings: CollectionSettings = None) -> Collection:
        """ Get a sub-collection of a document """
        return Collection(self.ref.document(id).collection(name), mapper, settings or self.settings)


class CollectionGroup(CollectionBase[PayloadT]):
    """ Documents of every collection with the same name

    Store ids are not unique across a collection group.
    That's why documents of a group must have a unique field of their own: `id_field`.
    Use its values as keys with find_one_by_id()

    Example:
        comments = CollectionGroup(client.collection_group('comments'), DictMapper(), id_field='uid')
        comment = await comments.find_one_by_id('c8a6a3')
    """
    ref: CollectionGroupRef

    def __init__(self, ref: CollectionGroupRef, mapper: Mapper[PayloadT], id_field: str, settings: CollectionSettings = None):
        settings = settings or CollectionSettings()
        super().__init__(
            ref,
            mapper,
            CollectionGroupDocumentLoader(ref, id_field, max_batch_size=settings.max_batch_size),
            settings,
        )
        self.id_field = id_field

    def cache_key(self, snapshot: DocumentSnapshot) -> GlobalUniqueKey:
        data = snapshot.to_dict() or {}
        try:
            return GlobalUniqueKey(data[self.id_field])
        except KeyError:
            raise exc.ConfigurationError(f'Document "{snapshot.id}" lacks the "{self.id_field}" field: cannot cache it')

    def key_of(self, document: Document[PayloadT]) -> GlobalUniqueKey:
        """ Get the unique key of a document """
        return GlobalUniqueKey(document.to_data()[self.id_field])
