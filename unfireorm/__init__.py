__version__ = __import__('importlib.metadata').metadata.version('unfireorm')

from .collection import Collection, CollectionGroup
from .document import Document
from .mapper import Mapper, DictMapper, DataclassMapper
from .loader import DocumentLoader, CollectionDocumentLoader, CollectionGroupDocumentLoader
from .settings import CollectionSettings
from .typing import StoreLocalId, GlobalUniqueKey

from . import exc

from .pager import PaginateInput, QueryInput, Edge, PageInfo, Page, NO_CURSOR, paginate_query
