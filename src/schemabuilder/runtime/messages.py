"""Base classes for the typed instances produced by builders."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Typed instance of one schema class.

    Fields start at their zero value; builders only pass the fields they could convert.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_class: ClassVar[str] = ""

    def to_document(self) -> Any:
        """Render the instance back to plain JSON-compatible data.

        Fields still at their zero value are omitted and keys use the schema property names.

        Returns:
            Any: A mapping for map-backed classes.
        """
        document: dict[str, Any] = {}
        for name, field_info in type(self).model_fields.items():
            value = getattr(self, name)
            if value == field_info.get_default(call_default_factory=True):
                continue
            key = field_info.serialization_alias or name
            document[key] = _to_plain(value)
        return document


class OneOfBranch(BaseModel):
    """Active alternative of a discriminated union."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    class_name: str
    value: Message


class OneOfMessage(Message):
    """Instance of a oneOf class: at most one branch is active."""

    oneof: OneOfBranch | None = None

    def which_oneof(self) -> str | None:
        """Return the property name of the active branch.

        Returns:
            str | None: Branch name, or None when no candidate matched.
        """
        return self.oneof.name if self.oneof is not None else None

    def to_document(self) -> Any:
        """Render the active branch, merged with any other populated fields."""
        document = super().to_document()
        branch = document.pop("oneof", None)
        if branch is None:
            return document
        inner = branch["value"]
        if isinstance(inner, Mapping):
            return {**inner, **document}
        if not document:
            return inner
        return {**document, branch["name"]: inner}


class StringArrayMessage(Message):
    """Instance of a class accepting a bare string in place of an array."""

    value: list[str] = Field(default_factory=list)

    def to_document(self) -> Any:
        """Render as the wrapped array."""
        return list(self.value)


class BlobMessage(Message):
    """Instance of a class storing the textual rendering of any value."""

    value: str = ""

    def to_document(self) -> Any:
        """Render as the stored text."""
        return self.value


def _to_plain(value: Any) -> Any:
    if isinstance(value, OneOfBranch):
        return {"name": value.name, "value": value.value.to_document()}
    if isinstance(value, Message):
        return value.to_document()
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    return value
