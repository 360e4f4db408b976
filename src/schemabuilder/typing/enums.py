"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    @classmethod
    def values(cls) -> list[str]:
        """Return every member value.

        Returns:
            list[str]: Member values in declaration order.
        """
        return [member.value for member in cls]

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class ScalarKind(_EnumMixin):
    """Primitive property types understood by the builders."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"

    @property
    def annotation(self) -> str:
        """Python annotation used for fields of this kind."""
        return _SCALAR_ANNOTATIONS[self]

    @property
    def zero_literal(self) -> str:
        """Source literal of the zero value for fields of this kind."""
        return _SCALAR_ZERO_LITERALS[self]


_SCALAR_ANNOTATIONS = {
    ScalarKind.STRING: "str",
    ScalarKind.INT: "int",
    ScalarKind.FLOAT: "float",
    ScalarKind.BOOL: "bool",
}

_SCALAR_ZERO_LITERALS = {
    ScalarKind.STRING: '""',
    ScalarKind.INT: "0",
    ScalarKind.FLOAT: "0.0",
    ScalarKind.BOOL: "False",
}


class ClassKind(_EnumMixin):
    """Composition mode of a schema class, in dispatch precedence order."""

    STRING_ARRAY = "string_array"
    BLOB = "blob"
    ONE_OF = "one_of"
    REGULAR = "regular"


class PropertyKind(_EnumMixin):
    """Shape of a property value."""

    SCALAR = "scalar"
    CLASS = "class"
    MAP = "map"


class DiagnosticCode(_EnumMixin):
    """Soft failure categories reported while building instances."""

    UNEXPECTED_VALUE = "unexpected_value"
    NOT_A_MAPPING = "not_a_mapping"
    EXPECTED_SEQUENCE = "expected_sequence"
    TYPE_MISMATCH = "type_mismatch"
    TOO_DEEP = "too_deep"


class ResultStatus(_EnumMixin):
    """Outcome of a single property conversion."""

    SET = "set"
    ABSENT = "absent"
    REJECTED = "rejected"


class DocumentFormat(_EnumMixin):
    """Serialization formats accepted for models and input documents."""

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_suffix(cls, suffix: str) -> DocumentFormat:
        """Guess the format from a file suffix.

        Args:
            suffix: File suffix including the dot, e.g. ".yaml".

        Returns:
            DocumentFormat: YAML for `.yaml`/`.yml`, JSON otherwise.
        """
        if suffix.lower() in {".yaml", ".yml"}:
            return cls.YAML
        return cls.JSON
