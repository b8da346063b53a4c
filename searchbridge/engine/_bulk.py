from __future__ import annotations

from typing import Any, Iterable

from searchbridge.core import debug, warn
from searchbridge.core.exceptions import BadRequestError

from ._models import DeleteOperation, IndexOperation, WriteBatch
from ._record import Record
from ._transport import Transport


class BulkWriteCoordinator:
    """Batch index and delete operations into one bulk request."""

    transport: Transport
    soft_delete: bool

    def __init__(self, transport: Transport, soft_delete: bool = False):
        self.transport = transport
        self.soft_delete = soft_delete

    def build_index_batch(self, records: Iterable[Record]) -> WriteBatch:
        batch = WriteBatch()
        for record in records:
            if self.soft_delete and record.uses_soft_delete():
                record.push_soft_delete_metadata()
            document = self.convert_document(record)
            if document is None:
                continue
            key_name = record.get_search_key_name()
            collection = record.searchable_as()
            if batch.collection is None:
                batch.collection = collection
            batch.operations.append(
                IndexOperation(
                    collection=collection,
                    id=str(document[key_name]),
                    document=document,
                )
            )
        return batch

    def build_delete_batch(
        self,
        items: Iterable[Record | Any],
        collection: str | None = None,
    ) -> WriteBatch:
        batch = WriteBatch(collection=collection)
        for item in items:
            if isinstance(item, Record):
                id = item.get_search_key()
                item_collection = item.searchable_as()
            else:
                id = item
                item_collection = batch.collection
            if item_collection is None:
                raise BadRequestError(
                    "Collection name must be specified to delete by id"
                )
            if batch.collection is None:
                batch.collection = item_collection
            batch.operations.append(
                DeleteOperation(collection=item_collection, id=str(id))
            )
        return batch

    def submit(self, batch: WriteBatch) -> dict[str, Any] | None:
        if batch.is_empty() or batch.collection is None:
            debug("Bulk request skipped, no operations")
            return None
        response = self.transport.bulk(
            index=batch.collection,
            operations=batch.to_native(),
        )
        if isinstance(response, dict) and response.get("errors"):
            failed = [
                item
                for item in response.get("items", [])
                for result in item.values()
                if result.get("error")
            ]
            warn(
                f"Bulk request on {batch.collection} "
                f"had {len(failed)} failed items"
            )
        return response

    @staticmethod
    def convert_document(record: Record) -> dict[str, Any] | None:
        searchable = record.to_searchable_dict()
        if not searchable:
            return None
        document = dict(searchable)
        document.update(record.get_search_metadata() or {})
        document[record.get_search_key_name()] = record.get_search_key()
        return document
