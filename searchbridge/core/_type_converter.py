import inspect
import json
import types
from typing import Any, Union, get_args, get_origin, get_type_hints


class TypeConverter:
    """Coerce loosely typed operation arguments to the callee's hints.

    Arguments that arrive from a manifest or a serialized operation are
    plain dicts, strings and numbers. Data models are rebuilt from dicts,
    numeric strings become numbers. Values that already carry the
    expected shape pass through untouched.
    """

    @staticmethod
    def convert_value(value, expected_type):
        if expected_type is None or expected_type is Any:
            return value
        origin = get_origin(expected_type)

        # Optional[T] and T | None
        if origin in (Union, types.UnionType):
            candidates = [
                t for t in get_args(expected_type) if t is not type(None)
            ]
            if len(candidates) != 1:
                return value
            expected_type = candidates[0]
            origin = get_origin(expected_type)

        if isinstance(value, list) and origin in (list, tuple):
            elem_type = (
                get_args(expected_type)[0] if get_args(expected_type) else Any
            )
            return [TypeConverter.convert_value(v, elem_type) for v in value]

        if isinstance(value, dict) and origin is dict:
            _, val_type = get_args(expected_type) or (Any, Any)
            return {
                k: TypeConverter.convert_value(v, val_type)
                for k, v in value.items()
            }

        from_dict = getattr(expected_type, "from_dict", None)
        if callable(from_dict):
            if isinstance(value, dict):
                return from_dict(value)
            if isinstance(value, str):
                return from_dict(json.loads(value))

        try:
            if expected_type is int and isinstance(value, (str, float)):
                return int(value)
            if expected_type is float and isinstance(value, (str, int)):
                return float(value)
            if expected_type is str and isinstance(value, (int, float)):
                return str(value)
            if expected_type is bool and isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            if expected_type is dict and isinstance(value, str):
                return json.loads(value)
        except (ValueError, TypeError):
            pass

        return value

    @staticmethod
    def convert_args(method, args: dict) -> dict:
        sig = inspect.signature(method)
        hints = get_type_hints(method)
        converted_args: dict = {}
        for param_name in sig.parameters:
            if param_name in args:
                converted_args[param_name] = TypeConverter.convert_value(
                    args[param_name], hints.get(param_name, None)
                )
        return args | converted_args
