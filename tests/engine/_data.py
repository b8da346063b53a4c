from typing import Any, Iterable, Iterator

from searchbridge.engine import SOFT_DELETED_FIELD

DEFAULT = object()


class SearchableRecord:
    def __init__(
        self,
        id: Any,
        value: Any = DEFAULT,
        collection: str = "table",
        key_name: str = "id",
        soft_delete: bool = False,
        trashed: bool = False,
    ):
        self.id = id
        self.value = {"id": id} if value is DEFAULT else value
        self.collection = collection
        self.key_name = key_name
        self.soft_delete = soft_delete
        self.trashed = trashed
        self.metadata: dict[str, Any] = {}

    def get_search_key(self) -> Any:
        return self.id

    def get_search_key_name(self) -> str:
        return self.key_name

    def searchable_as(self) -> str:
        return self.collection

    def to_searchable_dict(self) -> dict[str, Any] | None:
        return self.value

    def get_search_metadata(self) -> dict[str, Any]:
        return self.metadata

    def uses_soft_delete(self) -> bool:
        return self.soft_delete

    def push_soft_delete_metadata(self) -> None:
        self.metadata[SOFT_DELETED_FIELD] = 1 if self.trashed else 0

    def __repr__(self) -> str:
        return f"SearchableRecord({self.id!r})"


class RecordCollection(list):
    pass


class InMemoryRecordSource:
    def __init__(
        self,
        records: Iterable[SearchableRecord] = (),
        collection: str = "table",
        fields: list[str] | None = None,
    ):
        self.records = list(records)
        self.collection = collection
        self.fields = fields if fields is not None else ["title", "body"]
        self.fetched: list[list[str]] = []
        self.streamed: list[list[str]] = []

    def searchable_as(self) -> str:
        return self.collection

    def searchable_fields(self) -> list[str]:
        return self.fields

    def get_records_by_ids(
        self, predicates: Any, ids: list[str]
    ) -> list[SearchableRecord]:
        self.fetched.append(ids)
        return list(self.records)

    def stream_records_by_ids(
        self, predicates: Any, ids: list[str]
    ) -> Iterator[SearchableRecord]:
        self.streamed.append(ids)
        for record in self.records:
            yield record

    def new_collection(
        self, records: Iterable[SearchableRecord] = ()
    ) -> RecordCollection:
        return RecordCollection(records)


def hits(*ids: Any, total: int | None = None) -> dict[str, Any]:
    result: dict[str, Any] = {
        "hits": [{"_id": id, "_source": {"id": id}} for id in ids]
    }
    if total is not None:
        result["total"] = {"value": total, "relation": "eq"}
    return result
