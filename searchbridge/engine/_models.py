from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Sequence

from searchbridge.core import DataModel
from searchbridge.core.exceptions import MalformedInputError

SOFT_DELETED_FIELD = "__soft_deleted"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(DataModel):
    """Sort order."""

    field: str
    """Field to sort on."""

    direction: SortDirection = SortDirection.ASC
    """Sort direction."""


class RangeBound(DataModel):
    """Inclusive range bounds. A missing bound is open."""

    gte: Any | None = None
    """Lower bound."""

    lte: Any | None = None
    """Upper bound."""

    def to_native(self) -> dict[str, Any]:
        bounds: dict[str, Any] = {}
        if self.gte is not None:
            bounds["gte"] = self.gte
        if self.lte is not None:
            bounds["lte"] = self.lte
        return bounds


class PredicateSet(DataModel):
    """Backend-agnostic query description.

    Filters keep insertion order, which is the order their clauses
    appear in the compiled query. Builder methods mutate and return
    the instance so calls can be chained.
    """

    query: str = ""
    """Free text query."""

    wheres: dict[str, Any] = {}
    """Equality filters."""

    where_ins: dict[str, list[Any]] = {}
    """Set membership filters."""

    where_not_ins: dict[str, list[Any]] = {}
    """Set exclusion filters."""

    ranges: dict[str, RangeBound] = {}
    """Range filters."""

    orders: list[SortOrder] = []
    """Sort orders."""

    limit: int | None = None
    """Maximum number of hits."""

    offset: int = 0
    """Number of hits to skip."""

    distinct_field: str | None = None
    """Field to aggregate distinct values on."""

    index: str | None = None
    """Collection override."""

    options: dict[str, Any] = {}
    """Native search options merged into the request body."""

    callback: Callable[..., Any] | None = None
    """Custom execution override. Called with
    (transport, query, options) instead of the standard search."""

    source: Any | None = None
    """Record source the query is bound to."""

    def where(self, field: str, value: Any) -> PredicateSet:
        self.wheres[field] = value
        return self

    def where_in(self, field: str, values: Sequence[Any]) -> PredicateSet:
        self.where_ins[field] = list(values)
        return self

    def where_not_in(
        self, field: str, values: Sequence[Any]
    ) -> PredicateSet:
        self.where_not_ins[field] = list(values)
        return self

    def where_between(
        self, field: str, values: Sequence[Any]
    ) -> PredicateSet:
        values = list(values)
        if len(values) != 2:
            raise MalformedInputError(
                "Unexpected value: " + ", ".join(str(v) for v in values)
            )
        self.ranges[field] = RangeBound(gte=values[0], lte=values[1])
        return self

    def where_range(
        self,
        field: str,
        gte: Any | None = None,
        lte: Any | None = None,
    ) -> PredicateSet:
        if gte is None and lte is None:
            raise MalformedInputError(
                f"Range on {field} needs at least one bound"
            )
        self.ranges[field] = RangeBound(gte=gte, lte=lte)
        return self

    def order_by(
        self,
        field: str,
        direction: str | SortDirection = SortDirection.ASC,
    ) -> PredicateSet:
        try:
            direction = SortDirection(direction.lower())
        except ValueError as e:
            raise MalformedInputError(
                f"Unexpected sort direction: {direction}"
            ) from e
        self.orders.append(SortOrder(field=field, direction=direction))
        return self

    def order_by_desc(self, field: str) -> PredicateSet:
        return self.order_by(field, SortDirection.DESC)

    def take(self, limit: int) -> PredicateSet:
        self.limit = limit
        return self

    def skip(self, offset: int) -> PredicateSet:
        self.offset = offset
        return self

    def within(self, index: str) -> PredicateSet:
        self.index = index
        return self

    def distinct_by(self, field: str) -> PredicateSet:
        self.distinct_field = field
        return self

    def with_options(self, options: dict[str, Any]) -> PredicateSet:
        self.options.update(options)
        return self

    def using(self, callback: Callable[..., Any]) -> PredicateSet:
        self.callback = callback
        return self


class CompiledQuery(DataModel):
    """Boolean query tree.

    Empty slots are left out of the native document. A query with
    no clauses at all has no native form.
    """

    must: list[dict[str, Any]] = []
    filter: list[dict[str, Any]] = []
    should: list[dict[str, Any]] = []
    must_not: list[dict[str, Any]] = []
    minimum_should_match: int | None = None

    def is_empty(self) -> bool:
        return (
            not self.must
            and not self.filter
            and not self.should
            and not self.must_not
            and self.minimum_should_match is None
        )

    def to_native(self) -> dict[str, Any]:
        if self.is_empty():
            return {}
        node: dict[str, Any] = {}
        if self.must:
            node["must"] = list(self.must)
        if self.filter:
            node["filter"] = list(self.filter)
        if self.must_not:
            node["must_not"] = list(self.must_not)
        if self.minimum_should_match is not None:
            node["minimum_should_match"] = self.minimum_should_match
            node["should"] = list(self.should)
        return {"bool": node}


class IndexOperation(DataModel):
    """Bulk index operation."""

    collection: str
    id: str
    document: dict[str, Any]

    def to_native(self) -> list[dict[str, Any]]:
        return [
            {"index": {"_index": self.collection, "_id": self.id}},
            self.document,
        ]


class DeleteOperation(DataModel):
    """Bulk delete operation."""

    collection: str
    id: str

    def to_native(self) -> list[dict[str, Any]]:
        return [{"delete": {"_index": self.collection, "_id": self.id}}]


class WriteBatch(DataModel):
    """Write operations sent in one bulk round trip."""

    collection: str | None = None
    operations: list[IndexOperation | DeleteOperation] = []

    def is_empty(self) -> bool:
        return not self.operations

    def to_native(self) -> list[dict[str, Any]]:
        body: list[dict[str, Any]] = []
        for op in self.operations:
            body.extend(op.to_native())
        return body


class IndexSettings(DataModel):
    """Index creation settings.

    `default` applies to every index, named entries are merged on top.
    """

    default: dict[str, Any] = {}
    indices: dict[str, dict[str, Any]] = {}

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> IndexSettings:
        config = dict(config or {})
        default = config.pop("default", None) or {}
        return cls(default=default, indices=config)
