from __future__ import annotations

from typing import Any

from searchbridge.core import debug

from ._models import CompiledQuery, PredicateSet
from ._query import DistinctAggregator, QueryTranslator
from ._transport import Transport


class SearchExecutor:
    """Issue compiled queries and pick apart raw engine responses."""

    transport: Transport

    def __init__(self, transport: Transport):
        self.transport = transport

    def build_options(
        self,
        predicates: PredicateSet,
        defaults: dict[str, Any],
    ) -> dict[str, Any]:
        if predicates.distinct_field:
            options = DistinctAggregator.compile(predicates.distinct_field)
        else:
            options = dict(defaults)
            sort = QueryTranslator.compile_sort(predicates)
            if sort:
                options["sort"] = sort
        options.update(predicates.options)
        return options

    def execute(
        self,
        index: str,
        predicates: PredicateSet,
        query: CompiledQuery,
        options: dict[str, Any],
    ) -> Any:
        body = dict(options)
        if not query.is_empty():
            body["query"] = query.to_native()
        if predicates.callback is not None:
            return predicates.callback(self.transport, predicates.query, body)
        debug(f"Searching {index}", name="executor")
        return self.transport.search(index=index, body=body)

    @staticmethod
    def extract_hits(response: Any) -> dict[str, Any] | None:
        if not isinstance(response, dict):
            return None
        return response.get("hits", None)

    @staticmethod
    def get_total_count(results: Any) -> int:
        if not isinstance(results, dict):
            return 0
        total = results.get("total")
        if isinstance(total, dict):
            return total.get("value", 0) or 0
        if isinstance(total, int):
            return total
        return 0

    @staticmethod
    def map_ids(results: Any) -> list[str]:
        if not isinstance(results, dict):
            return []
        return [hit.get("_id") for hit in results.get("hits") or []]
