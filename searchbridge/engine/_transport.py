from __future__ import annotations

from typing import Any, Protocol


class Transport(Protocol):
    """Operations the engine issues against the search backend.

    Implementations raise their client's native errors, which are
    propagated to callers unchanged.
    """

    def bulk(
        self, index: str, operations: list[dict[str, Any]]
    ) -> dict[str, Any]: ...

    def search(self, index: str, body: dict[str, Any]) -> dict[str, Any]: ...

    def delete_by_query(
        self, index: str, query: dict[str, Any]
    ) -> dict[str, Any]: ...

    def create_index(
        self, index: str, body: dict[str, Any]
    ) -> dict[str, Any]: ...

    def delete_index(self, index: str) -> dict[str, Any]: ...

    def close(self) -> None: ...
