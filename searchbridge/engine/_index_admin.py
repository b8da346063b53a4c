from __future__ import annotations

import copy
from typing import Any

from ._models import IndexSettings
from ._transport import Transport


class IndexAdmin:
    transport: Transport
    settings: IndexSettings

    def __init__(self, transport: Transport, settings: IndexSettings):
        self.transport = transport
        self.settings = settings

    def create_index(
        self,
        name: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body = self.get_index_body(name, options)
        return self.transport.create_index(index=name, body=body)

    def delete_index(self, name: str) -> dict[str, Any]:
        return self.transport.delete_index(index=name)

    def get_index_body(
        self,
        name: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body = merge(
            self.settings.default, self.settings.indices.get(name) or {}
        )
        return merge(body, options or {})


def merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
