from __future__ import annotations

from typing import Any

from ._yaml_loader import YamlLoader
from .data_model import DataModel

__all__ = [
    "ComponentConfig",
    "Manifest",
    "ProviderConfig",
    "MANIFEST_FILE",
]


MANIFEST_FILE = "searchbridge.yaml"


class ProviderConfig(DataModel):
    type: str
    parameters: dict[str, Any] = dict()


class ComponentConfig(DataModel):
    type: str
    parameters: dict[str, Any] = dict()
    providers: dict[str, ProviderConfig] = dict()


class Manifest(DataModel):
    variables: dict[str, Any] = dict()
    components: dict[str, ComponentConfig] = dict()
    bindings: dict[str, dict[str, str]] = dict()

    @staticmethod
    def parse(path: str) -> Manifest:
        obj = YamlLoader.load(path=path)
        return Manifest.from_dict(obj)
