from __future__ import annotations

from typing import Any, Iterable, Iterator

from ._record import Record, RecordSource


class ResultReconciler:
    """Map ranked hits back onto records from the backing store.

    Records come back from the store in arbitrary order and may be
    missing or extra. The result keeps only records named by a hit and
    orders them by hit rank.
    """

    @staticmethod
    def get_ids(results: Any) -> list[str]:
        if not isinstance(results, dict):
            return []
        hits = results.get("hits")
        if not hits:
            return []
        return [str(hit["_id"]) for hit in hits]

    @staticmethod
    def reconcile(
        predicates: Any,
        results: Any,
        source: RecordSource,
    ) -> Any:
        ids = ResultReconciler.get_ids(results)
        if not ids:
            return source.new_collection()
        records = source.get_records_by_ids(predicates, ids)
        return source.new_collection(ResultReconciler._order(records, ids))

    @staticmethod
    def reconcile_lazy(
        predicates: Any,
        results: Any,
        source: RecordSource,
    ) -> Iterator[Record]:
        ids = ResultReconciler.get_ids(results)
        if not ids:
            return iter(source.new_collection())

        def generate() -> Iterator[Record]:
            records = source.stream_records_by_ids(predicates, ids)
            yield from ResultReconciler._order(records, ids)

        return generate()

    @staticmethod
    def _order(records: Iterable[Record], ids: list[str]) -> list[Record]:
        positions = {id: rank for rank, id in enumerate(ids)}
        matched = [
            record
            for record in records
            if str(record.get_search_key()) in positions
        ]
        return sorted(
            matched, key=lambda r: positions[str(r.get_search_key())]
        )
