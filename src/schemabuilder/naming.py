"""Python identifiers for schema classes, properties and builder functions."""

from __future__ import annotations

import keyword
import re
from functools import lru_cache
from typing import TYPE_CHECKING

from schemabuilder.runtime.messages import OneOfMessage

if TYPE_CHECKING:
    from schemabuilder.typing.models import ClassCollection

# Builtins used in generated annotations cannot be shadowed by fields.
_EXTRA_RESERVED_FIELDS = frozenset({"schema_class", "oneof", "str", "int", "float", "bool", "list", "dict"})


def snake_case(name: str) -> str:
    """Convert camelCase, PascalCase or punctuated names to snake_case.

    Args:
        name (str): Raw name, e.g. `operationId` or `x-amazon-apigateway`.

    Returns:
        str: Lower snake_case name, possibly empty.
    """
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    s = re.sub(r"[^A-Za-z0-9]+", "_", s)
    return re.sub(r"_+", "_", s).strip("_").lower()


def pascal_case(name: str) -> str:
    """Convert a schema class name to a PascalCase identifier.

    Names that already look like PascalCase are kept as they are.

    Args:
        name (str): Raw class name.

    Returns:
        str: PascalCase name, possibly empty.
    """
    if re.fullmatch(r"[A-Z][a-zA-Z0-9]*", name):
        return name
    parts = re.split(r"[^A-Za-z0-9]+", name)
    return "".join(part[0].upper() + part[1:] for part in parts if part)


@lru_cache(maxsize=1)
def _reserved_field_names() -> frozenset[str]:
    return frozenset(name for name in dir(OneOfMessage) if not name.startswith("__")) | _EXTRA_RESERVED_FIELDS


def field_identifier(property_name: str) -> str:
    """Return the Python field name of a schema property.

    `$ref` becomes `ref`; names clashing with keywords or model attributes get a trailing underscore.

    Args:
        property_name (str): Key expected in the input mapping.

    Returns:
        str: Valid, non-reserved field identifier.
    """
    candidate = snake_case(property_name) or "field"
    if candidate[0].isdigit():
        candidate = f"f_{candidate}"
    if (
        keyword.iskeyword(candidate)
        or candidate in _reserved_field_names()
        or candidate.startswith("model_")
    ):
        candidate = f"{candidate}_"
    return candidate


def class_identifier(class_name: str) -> str:
    """Return the Python class name used for a schema class."""
    candidate = pascal_case(class_name) or "Anonymous"
    if candidate[0].isdigit():
        candidate = f"X{candidate}"
    if keyword.iskeyword(candidate):
        candidate = f"{candidate}_"
    return candidate


def _ensure_unique_name(candidate: str, used: set[str]) -> str:
    if candidate not in used:
        used.add(candidate)
        return candidate
    i = 2
    while f"{candidate}{i}" in used:
        i += 1
    unique = f"{candidate}{i}"
    used.add(unique)
    return unique


class NameTable:
    """Deterministic identifiers for every class and property of a collection."""

    def __init__(self, collection: ClassCollection) -> None:
        self._classes: dict[str, str] = {}
        self._builders: dict[str, str] = {}
        self._fields: dict[str, dict[str, str]] = {}

        used_classes: set[str] = {"BUILDERS", "MESSAGE_TYPES"}
        used_builders: set[str] = {"version"}
        for class_model in collection.sorted_classes():
            self._classes[class_model.name] = _ensure_unique_name(
                class_identifier(class_model.name),
                used_classes,
            )
            self._builders[class_model.name] = _ensure_unique_name(
                f"build_{snake_case(class_model.name) or 'anonymous'}",
                used_builders,
            )
            used_fields: set[str] = set()
            self._fields[class_model.name] = {
                name: _ensure_unique_name(field_identifier(name), used_fields)
                for name in class_model.sorted_property_names()
            }

    def class_name(self, class_name: str) -> str:
        """Python class name of a schema class."""
        return self._classes[class_name]

    def builder_name(self, class_name: str) -> str:
        """Builder function name of a schema class."""
        return self._builders[class_name]

    def field_name(self, class_name: str, property_name: str) -> str:
        """Field name of a property within its class."""
        return self._fields[class_name][property_name]
