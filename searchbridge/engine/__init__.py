from searchbridge.core.exceptions import (
    BadRequestError,
    MalformedInputError,
    NotFoundError,
)

from ._bulk import BulkWriteCoordinator
from ._executor import SearchExecutor
from ._index_admin import IndexAdmin
from ._models import (
    SOFT_DELETED_FIELD,
    CompiledQuery,
    DeleteOperation,
    IndexOperation,
    IndexSettings,
    PredicateSet,
    RangeBound,
    SortDirection,
    SortOrder,
    WriteBatch,
)
from ._query import DistinctAggregator, QueryTranslator
from ._reconciler import ResultReconciler
from ._record import Record, RecordSource
from ._transport import Transport
from .component import SearchEngine

__all__ = [
    "SOFT_DELETED_FIELD",
    "BulkWriteCoordinator",
    "CompiledQuery",
    "DeleteOperation",
    "DistinctAggregator",
    "IndexAdmin",
    "IndexOperation",
    "IndexSettings",
    "PredicateSet",
    "QueryTranslator",
    "RangeBound",
    "Record",
    "RecordSource",
    "ResultReconciler",
    "SearchEngine",
    "SearchExecutor",
    "SortDirection",
    "SortOrder",
    "Transport",
    "WriteBatch",
    "BadRequestError",
    "MalformedInputError",
    "NotFoundError",
]
