from __future__ import annotations

import copy
import importlib
import inspect
import os
import re
from typing import Any

from ._component import Component
from ._log_helper import warn
from ._provider import Provider
from ._type_converter import TypeConverter
from .exceptions import LoadError
from .manifest import MANIFEST_FILE, Manifest

REF_PATTERN = re.compile(r"^\$\{(.+)\}$")


class Loader:
    """Build components and their providers from a manifest."""

    path: str
    manifest_path: str
    manifest: Manifest

    def __init__(
        self,
        path: str = ".",
        manifest: str = MANIFEST_FILE,
    ):
        self.path = path
        self.manifest_path = os.path.join(path, manifest)
        self.manifest = Manifest.parse(path=self.manifest_path)

    def load_component(
        self,
        handle: str,
        tag: str | None = None,
    ) -> Component:
        if handle not in self.manifest.components:
            raise LoadError(f"Component {handle} not found in manifest")
        cconfig = self.manifest.components[handle]
        parameters = self._resolve_param(copy.deepcopy(cconfig.parameters))
        provider = None
        if cconfig.providers:
            phandle = self._resolve_provider_handle(handle, tag)
            pconfig = cconfig.providers[phandle]
            provider = Loader.load_provider_instance(
                path=Loader.get_provider_path(cconfig.type, pconfig.type),
                parameters=self._resolve_param(
                    copy.deepcopy(pconfig.parameters)
                ),
            )
            provider.__handle__ = phandle
            provider.__type__ = pconfig.type
        component = Loader.load_component_instance(
            path=Loader.get_component_path(cconfig.type),
            parameters=parameters,
            provider=provider,
        )
        component.__handle__ = handle
        component.__type__ = cconfig.type
        return component

    def _resolve_provider_handle(
        self,
        chandle: str,
        tag: str | None = None,
    ) -> str:
        cconfig = self.manifest.components[chandle]
        if tag and tag in self.manifest.bindings:
            bindings = self.manifest.bindings[tag]
            if chandle in bindings:
                phandle = bindings[chandle]
                if phandle not in cconfig.providers:
                    raise LoadError(
                        f"Provider handle {phandle} not found in "
                        f"providers for {chandle}"
                    )
                return phandle
        elif tag:
            warn(f"No bindings for tag {tag}, using first provider")
        return next(iter(cconfig.providers.keys()))

    def _resolve_param(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {k: self._resolve_param(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_param(item) for item in value]
        if isinstance(value, str):
            match = REF_PATTERN.match(value)
            if match:
                return self._resolve_ref(match.group(1))
        return value

    def _resolve_ref(self, ref: str) -> Any:
        if ref.startswith("env."):
            return os.getenv(ref[len("env.") :])
        if ref.startswith("variables."):
            name = ref[len("variables.") :]
            return self._resolve_param(self.manifest.variables.get(name))
        raise LoadError(f"Unsupported reference ${{{ref}}}")

    @staticmethod
    def get_component_path(component_type: str) -> str:
        if ":" in component_type:
            return component_type
        return f"{component_type}.component"

    @staticmethod
    def get_provider_path(component_type: str, provider_type: str) -> str:
        if ":" in provider_type or ".providers." in provider_type:
            return provider_type
        return f"{component_type}.providers.{provider_type}"

    @staticmethod
    def load_component_instance(
        path: str,
        parameters: dict,
        provider: Provider | None,
    ) -> Component:
        component = Loader.load_class(path, Component)
        converted_parameters = TypeConverter.convert_args(
            component.__init__, parameters
        )
        if provider is not None:
            converted_parameters["__provider__"] = provider
        return component(**converted_parameters)

    @staticmethod
    def load_provider_instance(
        path: str | None = None,
        parameters: dict[str, Any] = dict(),
    ) -> Provider:
        if path is None:
            return Provider(**parameters)
        provider = Loader.load_class(path, Provider)
        converted_parameters = TypeConverter.convert_args(
            provider.__init__, parameters
        )
        return provider(**converted_parameters)

    @staticmethod
    def load_class(path: str, type: Any) -> Any:
        class_name = None
        if ":" in path:
            module_name, class_name = path.split(":", 1)
        else:
            module_name = path
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise LoadError(f"Module {module_name} could not be loaded") from e
        if class_name is not None:
            return getattr(module, class_name)
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if issubclass(cls, type) and cls.__module__ == module_name:
                return cls
        raise LoadError(f"{type.__name__} not found at {module_name}")
