""" Tools for testing """

from .memstore import MemoryClient, MemoryQuery, MemoryCollectionReference, MemoryDocumentReference, MemoryDocumentSnapshot
from .memstore import ASCENDING, DESCENDING

from .query_logger import QueryCounter, QueryLogger, ExpectedQueryCounter
