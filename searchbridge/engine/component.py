from __future__ import annotations

from typing import Any, Iterable

from searchbridge.core import Component, Response, operation

from ._models import PredicateSet
from ._record import Record, RecordSource


class SearchEngine(Component):
    collection: str | None

    def __init__(
        self,
        collection: str | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            collection:
                Default collection name.
        """
        self.collection = collection
        super().__init__(**kwargs)

    @operation()
    def update(
        self,
        records: Iterable[Record],
        **kwargs: Any,
    ) -> Response[None]:
        """Index records in one bulk request.

        Records with an empty searchable representation are skipped.
        No request is sent when nothing is left to index.

        Args:
            records:
                Records to index.
        """
        raise NotImplementedError

    @operation()
    def delete(
        self,
        records: Iterable[Record | str | int],
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[None]:
        """Remove records from the index in one bulk request.

        Args:
            records:
                Records or bare record identifiers.
            collection:
                Collection name. Required for bare identifiers
                unless a default collection is configured.

        Raises:
            BadRequestError:
                Collection could not be resolved.
        """
        raise NotImplementedError

    @operation()
    def search(
        self,
        predicates: PredicateSet,
        **kwargs: Any,
    ) -> Response[Any]:
        """Search.

        Args:
            predicates:
                Query description.

        Returns:
            The hits section of the engine response, or None
            when the response has none. With a custom executor,
            whatever the executor returned.
        """
        raise NotImplementedError

    @operation()
    def paginate(
        self,
        predicates: PredicateSet,
        per_page: int = 10,
        page: int = 1,
        **kwargs: Any,
    ) -> Response[Any]:
        """Search one page.

        Args:
            predicates:
                Query description.
            per_page:
                Page size.
            page:
                One based page number.

        Returns:
            The hits section of the engine response.
        """
        raise NotImplementedError

    @operation()
    def distinct(
        self,
        predicates: PredicateSet,
        field: str | None = None,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        """Distinct values of a field, most frequent first.

        Args:
            predicates:
                Query description.
            field:
                Field to aggregate on. Defaults to the
                distinct field of the predicate set.

        Returns:
            Bucket keys.
        """
        raise NotImplementedError

    @operation()
    def count(
        self,
        predicates: PredicateSet,
        **kwargs: Any,
    ) -> Response[int]:
        """Count matching documents.

        Args:
            predicates:
                Query description.

        Returns:
            Total hit count.
        """
        raise NotImplementedError

    @operation()
    def map_ids(
        self,
        results: Any = None,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        """Identifiers of the hits, in rank order.

        Args:
            results:
                Search result.
        """
        raise NotImplementedError

    @operation()
    def map(
        self,
        predicates: PredicateSet,
        results: Any = None,
        source: RecordSource | None = None,
        **kwargs: Any,
    ) -> Response[Any]:
        """Fetch the records behind the hits, in rank order.

        Args:
            predicates:
                Query the results came from.
            results:
                Search result.
            source:
                Record source. Defaults to the source
                bound to the predicate set.

        Returns:
            Records in the source's collection type.
        """
        raise NotImplementedError

    @operation()
    def lazy_map(
        self,
        predicates: PredicateSet,
        results: Any = None,
        source: RecordSource | None = None,
        **kwargs: Any,
    ) -> Response[Iterable[Any]]:
        """Stream the records behind the hits, in rank order.

        Args:
            predicates:
                Query the results came from.
            results:
                Search result.
            source:
                Record source. Defaults to the source
                bound to the predicate set.

        Returns:
            Iterator over records. It can be consumed once.
        """
        raise NotImplementedError

    @operation()
    def get_total_count(
        self,
        results: Any = None,
        **kwargs: Any,
    ) -> Response[int]:
        """Total hit count of a search result, 0 when absent.

        Args:
            results:
                Search result.
        """
        raise NotImplementedError

    @operation()
    def flush(
        self,
        source: RecordSource | None = None,
        collection: str | None = None,
        **kwargs: Any,
    ) -> Response[None]:
        """Remove every document from a collection.

        Args:
            source:
                Record source whose collection is flushed.
            collection:
                Collection name.
        """
        raise NotImplementedError

    @operation()
    def create_index(
        self,
        name: str,
        options: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[dict[str, Any]]:
        """Create index.

        Args:
            name:
                Index name.
            options:
                Settings merged over the configured ones.

        Returns:
            Engine acknowledgement.
        """
        raise NotImplementedError

    @operation()
    def delete_index(
        self,
        name: str,
        **kwargs: Any,
    ) -> Response[dict[str, Any]]:
        """Delete index.

        Args:
            name:
                Index name.

        Returns:
            Engine acknowledgement.
        """
        raise NotImplementedError

    @operation()
    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        """Close the engine client."""
        raise NotImplementedError
