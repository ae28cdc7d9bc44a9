""" Document loaders: batch & cache point lookups

* `DocumentLoader`: base class
* `CollectionDocumentLoader` looks documents up by store id
* `CollectionGroupDocumentLoader` looks documents up by a unique field, across a collection group

Every `load()` made within the same event loop tick is collected into one batch.
Loaded snapshots are cached until cleared: one loader belongs to one collection facade.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from strawberry.dataloader import DataLoader

from . import exc
from .typing import CollectionReference, CollectionGroup, DocumentSnapshot


logger = logging.getLogger(__name__)


class DocumentLoader:
    """ Loader base

    Base for classes that implement:
    * Fetch one document by key
    * Report a missing document as `DocumentNotFoundError`

    Batching, deduplication and caching are provided by strawberry's DataLoader.
    """

    def __init__(self, *, max_batch_size: Optional[int] = None):
        self._loader: DataLoader[str, DocumentSnapshot] = DataLoader(
            load_fn=self._batch_load,
            max_batch_size=max_batch_size,
        )

    async def load(self, key: str) -> DocumentSnapshot:
        """ Load a document by key

        This call will be batched with other load() calls made in the same event loop tick.

        Raises:
            exc.DocumentNotFoundError
        """
        return await self._loader.load(key)

    async def load_many(self, keys: list[str]) -> list[DocumentSnapshot]:
        """ Load many documents by keys. Fails if any of them fails """
        return await self._loader.load_many(keys)

    def prime(self, key: str, snapshot: DocumentSnapshot):
        """ Put an already known document into the cache. Existing entries are kept """
        self._loader.prime(key, snapshot)

    def clear(self, key: str):
        """ Forget a cached document, pending or resolved. Keys that aren't cached are ignored """
        try:
            self._loader.clear(key)
        except KeyError:
            pass  # not cached

    def clear_all(self):
        """ Forget every cached document """
        self._loader.clear_all()

    async def _batch_load(self, keys: list[str]) -> list[Union[DocumentSnapshot, BaseException]]:
        logger.debug('%s: loading a batch of %d documents', type(self).__name__, len(keys))

        # Every key is fetched on its own: a failure is reported for that key only.
        # DataLoader sets exception values as errors on the corresponding futures.
        results = await asyncio.gather(
            *(self.fetch_one(key) for key in keys),
            return_exceptions=True,
        )
        return list(results)

    async def fetch_one(self, key: str) -> DocumentSnapshot:
        """ Actually fetch one document from the store

        Raises:
            exc.DocumentNotFoundError
        """
        raise NotImplementedError


class CollectionDocumentLoader(DocumentLoader):
    """ Loads documents of one collection by their store id """

    def __init__(self, ref: CollectionReference, *, max_batch_size: Optional[int] = None):
        super().__init__(max_batch_size=max_batch_size)
        self.ref = ref

    async def fetch_one(self, key: str) -> DocumentSnapshot:
        snapshot = await self.ref.document(key).get()
        if not snapshot.exists:
            raise exc.DocumentNotFoundError(key, where=self.ref.id)
        return snapshot


class CollectionGroupDocumentLoader(DocumentLoader):
    """ Loads documents from a collection group by a unique field

    Store ids are only unique within one collection, so a group needs a field of its own:
    `id_field`, which has to be unique across the whole group.
    """

    def __init__(self, ref: CollectionGroup, id_field: str, *, max_batch_size: Optional[int] = None):
        if not isinstance(id_field, str) or not id_field:
            raise exc.ConfigurationError(f'Collection group id field must be a non-empty string, got {id_field!r}')

        super().__init__(max_batch_size=max_batch_size)
        self.ref = ref
        self.id_field = id_field

    async def fetch_one(self, key: str) -> DocumentSnapshot:
        snapshots = await self.ref.where(self.id_field, '==', key).limit(1).get()
        if not snapshots:
            raise exc.DocumentNotFoundError(key, where=_collection_id(self.ref), by=self.id_field)
        return snapshots[0]


def _collection_id(query: CollectionGroup) -> Optional[str]:
    """ Get the collection id a collection group query runs over

    Firestore queries keep their collection reference as `_parent`
    """
    parent = getattr(query, '_parent', None)
    return getattr(parent, 'id', None)
