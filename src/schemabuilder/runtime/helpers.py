"""Map, pattern and sequence helpers called by every builder."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any

from schemabuilder.typing.enums import ScalarKind


def map_has_key(m: Mapping[str, Any], key: str) -> bool:
    """Return whether `key` is present in `m`."""
    return key in m


def map_contains_all_keys(m: Mapping[str, Any], keys: Iterable[str]) -> bool:
    """Return whether every key of `keys` is present in `m`."""
    return all(key in m for key in keys)


def map_contains_only_keys(m: Mapping[str, Any], allowed: Iterable[str]) -> bool:
    """Return whether every key of `m` belongs to `allowed`."""
    allowed_keys = frozenset(allowed)
    return all(key in allowed_keys for key in m)


def unpack_map(value: object) -> tuple[Mapping[str, Any] | None, bool]:
    """Downcast a decoded value to a string-keyed mapping.

    Args:
        value (object): Decoded JSON/YAML value.

    Returns:
        tuple[Mapping[str, Any] | None, bool]: The mapping and True, or None and False when
        the value is not a mapping or has a non-string key.
    """
    if not isinstance(value, Mapping):
        return None, False
    if not all(isinstance(key, str) for key in value):
        return None, False
    return value, True


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def pattern_matches(pattern: str, key: str) -> bool:
    """Return whether `pattern` matches anywhere in `key`.

    Args:
        pattern (str): Regular expression; anchor it explicitly to match the whole key.
        key (str): Candidate map key.

    Returns:
        bool: True on a match.
    """
    return _compile_pattern(pattern).search(key) is not None


def is_sequence(value: object) -> bool:
    """Return whether a decoded value is an array."""
    return isinstance(value, (list, tuple))


def scalar_matches(value: object, kind: ScalarKind) -> bool:
    """Check a decoded value against a scalar kind without coercion.

    `bool` values never satisfy `int`, and `int` values never satisfy `float`.

    Args:
        value (object): Decoded value.
        kind (ScalarKind): Declared property kind.

    Returns:
        bool: True when the dynamic type matches exactly.
    """
    if kind is ScalarKind.STRING:
        return isinstance(value, str)
    if kind is ScalarKind.BOOL:
        return isinstance(value, bool)
    if kind is ScalarKind.INT:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, float)


def coerce_scalar_sequence(values: Iterable[object], kind: ScalarKind) -> list[Any]:
    """Keep the elements of `values` that match `kind`.

    Args:
        values (Iterable[object]): Decoded array.
        kind (ScalarKind): Element kind.

    Returns:
        list[Any]: Matching elements, in input order.
    """
    return [item for item in values if scalar_matches(item, kind)]


def convert_to_string_array(values: Iterable[object]) -> list[str]:
    """Keep the string elements of a decoded array.

    Args:
        values (Iterable[object]): Decoded array.

    Returns:
        list[str]: String elements, in input order.
    """
    return coerce_scalar_sequence(values, ScalarKind.STRING)


def describe_type(value: object) -> str:
    """Return a JSON-flavoured name for the dynamic type of a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "map"
    if is_sequence(value):
        return "array"
    return type(value).__name__
