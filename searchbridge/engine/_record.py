from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable


@runtime_checkable
class Record(Protocol):
    """A host record that can be written to the search engine."""

    def get_search_key(self) -> Any:
        """Unique external identifier."""
        ...

    def get_search_key_name(self) -> str:
        """Name of the identifier field in the indexed document."""
        ...

    def searchable_as(self) -> str:
        """Target collection name."""
        ...

    def to_searchable_dict(self) -> dict[str, Any] | None:
        """Searchable representation. Empty opts the record out."""
        ...

    def get_search_metadata(self) -> dict[str, Any]:
        """Extra fields merged into the indexed document."""
        ...

    def uses_soft_delete(self) -> bool: ...

    def push_soft_delete_metadata(self) -> None:
        """Add the soft delete marker to the search metadata."""
        ...


class RecordSource(Protocol):
    """Backing store that records are re-fetched from after a search."""

    def searchable_as(self) -> str: ...

    def searchable_fields(self) -> list[str]: ...

    def get_records_by_ids(
        self, predicates: Any, ids: list[str]
    ) -> Iterable[Record]:
        """Fetch records eagerly. May return fewer records than ids."""
        ...

    def stream_records_by_ids(
        self, predicates: Any, ids: list[str]
    ) -> Iterable[Record]:
        """Fetch records as a pull based sequence."""
        ...

    def new_collection(self, records: Iterable[Record] = ()) -> Any:
        """Wrap records in the host's collection type."""
        ...
