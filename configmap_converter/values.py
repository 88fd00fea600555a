"""
Values Module

Nested mapping of extracted default values, rendered into values.yaml.
"""
from typing import Any, Dict, Sequence


class Values(dict):
    """Path-addressable nested mapping of chart values"""

    def set_nested(self, path: Sequence[str], value: Any) -> None:
        """Set value at path, creating intermediate mappings as needed

        A non-mapping value found on the way is replaced by a mapping.

        Args:
            path: Key segments from the root (must not be empty)
            value: Value to store at the final segment
        """
        if not path:
            raise ValueError("Cannot set a value at an empty path")

        current = self
        for key in path[:-1]:
            child = current.get(key)
            if not isinstance(child, dict):
                child = {}
                current[key] = child
            current = child
        current[path[-1]] = value

    def get_nested(self, path: Sequence[str], default: Any = None) -> Any:
        """Return value at path, or default if any segment is missing"""
        current = self
        for key in path:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def merge(self, other: Dict[str, Any]) -> 'Values':
        """Deep merge other into this store, other wins on conflicts

        Args:
            other: Values to merge in

        Returns:
            self, to allow chaining
        """
        _deep_merge(self, other)
        return self


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(base.get(key), dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif isinstance(value, dict):
            base[key] = _copy_mapping(value)
        else:
            base[key] = value


def _copy_mapping(mapping: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _copy_mapping(v) if isinstance(v, dict) else v for k, v in mapping.items()}
