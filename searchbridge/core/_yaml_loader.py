import os

import yaml

from .exceptions import LoadError


class YamlLoader:
    @staticmethod
    def load(path: str) -> dict:
        if not os.path.isfile(path):
            raise LoadError(f"Manifest {path} not found")
        with open(path, "r") as file:
            obj = yaml.safe_load(file) or {}
        if not isinstance(obj, dict):
            raise LoadError(f"Manifest {path} must be a mapping")
        return obj
