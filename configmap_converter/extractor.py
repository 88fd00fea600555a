"""
Extractor Module

Walks a nested configuration mapping and turns every configurable scalar into
a Helm values reference, recording the original (typed) value in a Values
store under the same dotted path.

The input mapping is never mutated: every call builds and returns a new
mapping. Unsupported shapes (arrays, mappings that cannot be normalized,
unknown types) are copied through unchanged and reported to the diagnostics
sink; they never abort the walk.
"""
import copy
from typing import Any, Dict, Optional

from .classifier import ValueKind, classify, kind_of
from .constants import SKIPPED_KEYS
from .diagnostics import (
    ARRAY_UNSUPPORTED,
    INVALID_REFERENCE,
    MAPPING_NOT_NORMALIZED,
    UNRECOGNIZED_TYPE,
    Diagnostics,
)
from .value_path import ValuePath
from .values import Values


def extract(config: Dict[str, Any], values: Values, path: ValuePath,
            diagnostics: Diagnostics) -> Dict[str, Any]:
    """Replace configurable leaves of config with value references

    Args:
        config: String-keyed mapping node
        values: Store receiving extracted values
        path: Path of config from the values root
        diagnostics: Sink for non-fatal anomalies

    Returns:
        New mapping with leaves replaced by placeholders
    """
    result = {}
    for key, value in config.items():
        if key in SKIPPED_KEYS:
            result[key] = copy.deepcopy(value)
            continue

        kind = kind_of(value)
        if kind.is_leaf:
            result[key] = replace(value, values, path, key, diagnostics)
        elif kind is ValueKind.MAPPING:
            result[key] = _extract_mapping(value, values, path.child(key), diagnostics)
        elif kind is ValueKind.ARRAY:
            diagnostics.warn(ARRAY_UNSUPPORTED, path.child(key), "arrays not supported")
            result[key] = copy.deepcopy(value)
        else:
            type_name = type(value).__name__
            diagnostics.warn(UNRECOGNIZED_TYPE, path.child(key),
                             f"unknown type {type_name}", type_name=type_name)
            result[key] = copy.deepcopy(value)
    return result


def replace(value: Any, values: Values, path: ValuePath, key: str,
            diagnostics: Diagnostics = None) -> Any:
    """Record a leaf in values and return the placeholder that replaces it

    kind/apiVersion are returned unchanged and never stored. Paths with
    segments Helm cannot address (e.g. 8080, my-key) are still replaced but
    reported.
    """
    if key in SKIPPED_KEYS:
        return value

    value_path = path.child(key)
    leaf = classify(value)
    values.set_nested(value_path, leaf.value)
    invalid = value_path.invalid_segments()
    if invalid and diagnostics is not None:
        diagnostics.warn(INVALID_REFERENCE, value_path,
                         f"segments {invalid} are not valid template identifiers")
    return value_path.placeholder


def normalize_mapping(mapping: Dict[Any, Any]) -> Optional[Dict[str, Any]]:
    """Convert a mapping with scalar non-string keys to a string-keyed one

    Booleans become 'true'/'false', numbers their decimal text.

    Returns:
        String-keyed copy, or None if a key is not a scalar or two keys collide
    """
    normalized = {}
    for key, value in mapping.items():
        if isinstance(key, str):
            name = key
        elif isinstance(key, bool):
            name = 'true' if key else 'false'
        elif isinstance(key, (int, float)):
            name = str(key)
        else:
            return None
        if name in normalized:
            return None
        normalized[name] = value
    return normalized


def has_string_keys(mapping: Dict[Any, Any]) -> bool:
    return all(isinstance(key, str) for key in mapping)


def _extract_mapping(mapping: Dict[Any, Any], values: Values, path: ValuePath,
                     diagnostics: Diagnostics) -> Dict[Any, Any]:
    if has_string_keys(mapping):
        return extract(mapping, values, path, diagnostics)

    normalized = normalize_mapping(mapping)
    if normalized is None:
        diagnostics.warn(MAPPING_NOT_NORMALIZED, path,
                         "unable to convert mapping keys to strings")
        return copy.deepcopy(mapping)
    return extract(normalized, values, path, diagnostics)
