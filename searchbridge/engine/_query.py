from __future__ import annotations

from typing import Any

from ._models import SOFT_DELETED_FIELD, CompiledQuery, PredicateSet

DISTINCT_BUCKET_SIZE = 200
EXACT_SUBFIELD = "raw"


class QueryTranslator:
    """Compile a predicate set into a boolean query tree."""

    @staticmethod
    def compile(
        predicates: PredicateSet,
        fields: list[str] | None = None,
    ) -> CompiledQuery:
        must: list[dict[str, Any]] = []
        filter: list[dict[str, Any]] = []
        should: list[dict[str, Any]] = []
        must_not: list[dict[str, Any]] = []
        minimum_should_match = None

        if predicates.query:
            must.append(
                QueryTranslator.convert_text(predicates.query, fields or [])
            )

        if predicates.wheres or predicates.ranges:
            wheres = {SOFT_DELETED_FIELD: 0}
            wheres.update(predicates.wheres)
            for key, value in wheres.items():
                filter.append(QueryTranslator.convert_term(key, value))
            for key, bound in predicates.ranges.items():
                filter.append({"range": {key: bound.to_native()}})

        if predicates.where_ins:
            minimum_should_match = len(predicates.where_ins)
            for key, values in predicates.where_ins.items():
                for value in values:
                    should.append(QueryTranslator.convert_term(key, value))

        for key, values in predicates.where_not_ins.items():
            must_not.append({"terms": {key: list(values)}})

        return CompiledQuery(
            must=must,
            filter=filter,
            should=should,
            must_not=must_not,
            minimum_should_match=minimum_should_match,
        )

    @staticmethod
    def compile_sort(predicates: PredicateSet) -> list[dict[str, Any]]:
        return [
            {order.field: {"order": order.direction.value}}
            for order in predicates.orders
        ]

    @staticmethod
    def convert_text(query: str, fields: list[str]) -> dict[str, Any]:
        return {
            "simple_query_string": {
                "query": query,
                "fields": list(fields),
                "default_operator": "and",
            }
        }

    @staticmethod
    def convert_term(key: str, value: Any) -> dict[str, Any]:
        return {"term": {key: value}}


class DistinctAggregator:
    """Request shape for the distinct keys of one field."""

    @staticmethod
    def compile(field: str) -> dict[str, Any]:
        return {
            "stored_fields": field,
            "aggregations": {
                field: {
                    "terms": {
                        "field": f"{field}.{EXACT_SUBFIELD}",
                        "size": DISTINCT_BUCKET_SIZE,
                        "min_doc_count": 1,
                        "shard_min_doc_count": 1,
                        "show_term_doc_count_error": False,
                        "order": {"_count": "desc", "_key": "asc"},
                    }
                }
            },
        }

    @staticmethod
    def extract_keys(response: Any, field: str) -> list[Any]:
        if not isinstance(response, dict):
            return []
        aggregation = response.get("aggregations", {}).get(field)
        if not isinstance(aggregation, dict):
            return []
        return [bucket.get("key") for bucket in aggregation.get("buckets", [])]
