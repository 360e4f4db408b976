"""Schema-centric domain models."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemabuilder.exceptions import SchemaModelError, UnknownClassError
from schemabuilder.typing.enums import ClassKind, PropertyKind, ScalarKind

_MAP_TYPE_RE = re.compile(r"^map<\s*string\s*,\s*([A-Za-z_][A-Za-z0-9_.]*)\s*>$")


def map_type_info(type_name: str) -> tuple[bool, str]:
    """Split a `map<string, X>` marker.

    Args:
        type_name (str): Declared property type.

    Returns:
        tuple[bool, str]: Whether the type is a map marker, and the value type name.
    """
    match = _MAP_TYPE_RE.fullmatch(type_name.strip())
    if match is None:
        return False, ""
    return True, match.group(1)


def _fill_names_from_keys(entries: object) -> object:
    """Inject mapping keys as `name` entries and accept list payloads.

    Args:
        entries (object): Raw `classes` or `properties` payload.

    Returns:
        object: Mapping of name -> payload, or the input untouched when it has another shape.
    """
    if isinstance(entries, list):
        keyed: dict[str, object] = {}
        for entry in entries:
            name = entry.get("name") if isinstance(entry, dict) else getattr(entry, "name", None)
            if not isinstance(name, str):
                return entries
            keyed[name] = entry
        return keyed
    if not isinstance(entries, dict):
        return entries
    filled: dict[str, object] = {}
    for key, entry in entries.items():
        if isinstance(entry, dict) and "name" not in entry:
            filled[key] = {"name": key, **entry}
        else:
            filled[key] = entry
    return filled


class PropertyModel(BaseModel):
    """Single property of a schema class."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    type: str
    repeated: bool = False
    pattern: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def _validate_pattern(self) -> PropertyModel:
        """Ensure the key pattern compiles.

        Raises:
            SchemaModelError: If the pattern is not a valid regular expression.

        Returns:
            PropertyModel: Validated property.
        """
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise SchemaModelError(
                    message=f"invalid pattern {self.pattern!r}: {exc}",
                    property_name=self.name,
                ) from exc
        return self

    @property
    def scalar_kind(self) -> ScalarKind | None:
        """Scalar kind of the property, if its type is a scalar."""
        if self.type in ScalarKind.values():
            return ScalarKind(self.type)
        return None

    @property
    def map_value_type(self) -> str | None:
        """Value type of a `map<string, X>` property."""
        is_map, value_type = map_type_info(self.type)
        return value_type if is_map else None


class ClassModel(BaseModel):
    """Schema class definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    properties: dict[str, PropertyModel] = Field(default_factory=dict)
    required: frozenset[str] = Field(default_factory=frozenset)
    open: bool = False
    one_of_wrapper: bool = False
    is_string_array: bool = False
    is_blob: bool = False
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_property_names(cls, data: Any) -> Any:
        """Fill property names from their mapping keys."""
        if isinstance(data, dict) and "properties" in data:
            return {**data, "properties": _fill_names_from_keys(data["properties"])}
        return data

    @model_validator(mode="after")
    def _validate_shape(self) -> ClassModel:
        """Check the invariants a class can verify on its own.

        Raises:
            SchemaModelError: If the class definition is inconsistent.

        Returns:
            ClassModel: Validated class.
        """
        for key, prop in self.properties.items():
            if key != prop.name:
                raise SchemaModelError(
                    message=f"property declared under key '{key}' is named '{prop.name}'",
                    class_name=self.name,
                )
        if self.is_string_array and self.is_blob:
            raise SchemaModelError(message="a class cannot be both a string array and a blob", class_name=self.name)
        if (self.is_string_array or self.is_blob) and self.properties:
            raise SchemaModelError(
                message="string-array and blob classes cannot declare properties",
                class_name=self.name,
            )
        if self.one_of_wrapper and self.required:
            raise SchemaModelError(message="oneOf classes cannot require keys", class_name=self.name)
        if not self.open:
            unknown = sorted(self.required - self.properties.keys())
            if unknown:
                raise SchemaModelError(
                    message=f"closed class requires undeclared keys: {', '.join(unknown)}",
                    class_name=self.name,
                )
        return self

    @property
    def kind(self) -> ClassKind:
        """Composition mode, resolved in dispatch precedence."""
        if self.is_string_array:
            return ClassKind.STRING_ARRAY
        if self.is_blob:
            return ClassKind.BLOB
        if self.one_of_wrapper:
            return ClassKind.ONE_OF
        return ClassKind.REGULAR

    def sorted_property_names(self) -> list[str]:
        """Return property names in build order.

        Returns:
            list[str]: Lexicographically sorted names.
        """
        return sorted(self.properties)

    def sorted_properties(self) -> list[PropertyModel]:
        """Return properties in build order.

        Returns:
            list[PropertyModel]: Properties sorted by name.
        """
        return [self.properties[name] for name in self.sorted_property_names()]

    def sorted_required(self) -> list[str]:
        """Return required keys in a stable order.

        Returns:
            list[str]: Sorted required keys.
        """
        return sorted(self.required)


class ClassCollection(BaseModel):
    """Complete schema model: every class that gets a builder."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "schema"
    version: str = "v1"
    classes: dict[str, ClassModel] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_class_names(cls, data: Any) -> Any:
        """Fill class names from their mapping keys."""
        if isinstance(data, dict) and "classes" in data:
            return {**data, "classes": _fill_names_from_keys(data["classes"])}
        return data

    @model_validator(mode="after")
    def _validate_references(self) -> ClassCollection:
        """Check invariants spanning several classes.

        Raises:
            SchemaModelError: If a reference is dangling or a oneOf class holds non-class properties.

        Returns:
            ClassCollection: Validated collection.
        """
        for key, class_model in self.classes.items():
            if key != class_model.name:
                raise SchemaModelError(message=f"class declared under key '{key}' is named '{class_model.name}'")
            for prop in class_model.sorted_properties():
                kind = self._resolve_kind(class_model, prop)
                if kind is PropertyKind.MAP and prop.repeated:
                    raise SchemaModelError(
                        message="map properties cannot be repeated",
                        class_name=class_model.name,
                        property_name=prop.name,
                    )
                if class_model.one_of_wrapper and kind is not PropertyKind.CLASS:
                    raise SchemaModelError(
                        message="oneOf classes can only hold nested-class properties",
                        class_name=class_model.name,
                        property_name=prop.name,
                    )
        return self

    def _resolve_kind(self, class_model: ClassModel, prop: PropertyModel) -> PropertyKind:
        if prop.scalar_kind is not None:
            return PropertyKind.SCALAR
        if prop.type in self.classes:
            return PropertyKind.CLASS
        value_type = prop.map_value_type
        if value_type is not None:
            if value_type in ScalarKind.values() or value_type in self.classes:
                return PropertyKind.MAP
            raise SchemaModelError(
                message=f"map value type '{value_type}' is not a scalar or a known class",
                class_name=class_model.name,
                property_name=prop.name,
            )
        raise SchemaModelError(
            message=f"unknown property type '{prop.type}'",
            class_name=class_model.name,
            property_name=prop.name,
        )

    def property_kind(self, prop: PropertyModel) -> PropertyKind:
        """Classify a property of this collection.

        Args:
            prop (PropertyModel): Property declared by one of the classes.

        Returns:
            PropertyKind: Scalar, nested class, or map.
        """
        if prop.scalar_kind is not None:
            return PropertyKind.SCALAR
        if prop.type in self.classes:
            return PropertyKind.CLASS
        return PropertyKind.MAP

    def sorted_class_names(self) -> list[str]:
        """Return class names in generation order.

        Returns:
            list[str]: Sorted class names.
        """
        return sorted(self.classes)

    def get(self, class_name: str) -> ClassModel:
        """Look up a class by name.

        Args:
            class_name (str): Schema class name.

        Raises:
            UnknownClassError: If the class is not defined.

        Returns:
            ClassModel: The class definition.
        """
        try:
            return self.classes[class_name]
        except KeyError as exc:
            raise UnknownClassError(class_name=class_name, known=self.sorted_class_names()) from exc

    def __contains__(self, class_name: object) -> bool:
        """Return whether a class is defined."""
        return class_name in self.classes

    def sorted_classes(self) -> list[ClassModel]:
        """Return class models in generation order.

        Returns:
            list[ClassModel]: Classes sorted by name.
        """
        return [self.classes[name] for name in self.sorted_class_names()]
