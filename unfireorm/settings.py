from __future__ import annotations

import dataclasses
from typing import Optional


@dataclasses.dataclass
class CollectionSettings:
    """ Settings for a Collection

    This object defines additional behavior of collections:
    page size limits, loader priming, batch sizes.
    Every setting defaults to the plain behavior: no limits, no priming.
    """
    # The page size you get when neither `first` nor `last` is given.
    # `None` means: fetch the whole collection. Beware of large collections.
    default_limit: Optional[int] = None

    # The max page size, regardless of `first` / `last`
    max_limit: Optional[int] = None

    # Prime the document loader with documents fetched by paginate()
    prime_on_paginate: bool = False

    # Max number of keys the document loader fetches in one batch
    max_batch_size: Optional[int] = None

    def get_final_limit(self, limit: Optional[int]) -> Optional[int]:
        """ Callback that fine-tunes `first` / `last` by applying the max limit

        Used by: paginate_query() to decide how many documents a page gets
        """
        if limit is not None and self.max_limit is not None:
            limit = min(limit, self.max_limit)
        return limit

    def get_default_limit(self) -> Optional[int]:
        """ Callback: the page size when neither `first` nor `last` is given """
        return self.get_final_limit(self.default_limit)
