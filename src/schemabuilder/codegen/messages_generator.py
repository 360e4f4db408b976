"""Emit the message types module of a generated package."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemabuilder.message_types import is_one_of_candidate
from schemabuilder.typing.enums import ClassKind, PropertyKind, ScalarKind

if TYPE_CHECKING:
    from schemabuilder.naming import NameTable
    from schemabuilder.typing.models import ClassCollection, ClassModel, PropertyModel

_BASES = {
    ClassKind.STRING_ARRAY: "_messages.StringArrayMessage",
    ClassKind.BLOB: "_messages.BlobMessage",
    ClassKind.ONE_OF: "_messages.OneOfMessage",
    ClassKind.REGULAR: "_messages.Message",
}


def comment_text(text: str) -> str:
    """Collapse whitespace so `text` fits on a single comment line."""
    return " ".join(text.split())


def docstring_literal(text: str) -> str:
    """Render text as a one-line docstring literal."""
    sanitized = comment_text(text).replace("\\", "\\\\").replace('"', '\\"')
    return f'"""{sanitized}"""'


class MessagesGenerator:
    """Render one pydantic message class per schema class."""

    @staticmethod
    def render(collection: ClassCollection, names: NameTable, *, license_header: str = "") -> str:
        """Render the messages module.

        Args:
            collection (ClassCollection): Schema model.
            names (NameTable): Identifier table shared with the builders module.
            license_header (str): Comment block prepended to the module.

        Returns:
            str: Module source.
        """
        lines: list[str] = []
        if license_header:
            lines.append(license_header)
            lines.append("")
        lines.append("# THIS FILE IS AUTOMATICALLY GENERATED.")
        lines.append(docstring_literal(f"Message types of the {collection.name} schema ({collection.version})."))
        lines.append("")
        lines.append("from __future__ import annotations")
        lines.append("")
        lines.append("from pydantic import Field as _Field")
        lines.append("")
        lines.append("from schemabuilder.runtime import messages as _messages")
        lines.append("")

        for class_model in collection.sorted_classes():
            lines.append("")
            lines.extend(MessagesGenerator._render_class(collection, names, class_model))

        lines.append("")
        lines.append("")
        lines.append("MESSAGE_TYPES: dict[str, type[_messages.Message]] = {")
        for class_model in collection.sorted_classes():
            lines.append(f"    {class_model.name!r}: {names.class_name(class_model.name)},")
        lines.append("}")
        lines.append("")
        lines.append("for _message_type in MESSAGE_TYPES.values():")
        lines.append("    _message_type.model_rebuild()")
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _render_class(collection: ClassCollection, names: NameTable, class_model: ClassModel) -> list[str]:
        class_name = names.class_name(class_model.name)
        description = class_model.description or f"Typed instance of schema class '{class_model.name}'."
        lines = [
            f"class {class_name}({_BASES[class_model.kind]}):",
            f"    {docstring_literal(description)}",
            "",
            f"    schema_class = {class_model.name!r}",
        ]
        for prop in class_model.sorted_properties():
            if is_one_of_candidate(collection, class_model, prop):
                lines.append(f"    # oneof: {comment_text(prop.name)} -> {names.class_name(prop.type)}")
                continue
            if prop.description:
                lines.append(f"    # {comment_text(prop.description)}")
            annotation, default = MessagesGenerator._field_spec(collection, names, prop)
            field_name = names.field_name(class_model.name, prop.name)
            lines.append(f"    {field_name}: {annotation} = _Field({default}, serialization_alias={prop.name!r})")
        return lines

    @staticmethod
    def _field_spec(collection: ClassCollection, names: NameTable, prop: PropertyModel) -> tuple[str, str]:
        kind = collection.property_kind(prop)
        if kind is PropertyKind.SCALAR:
            scalar = ScalarKind(prop.type)
            if prop.repeated:
                return f"list[{scalar.annotation}]", "default_factory=list"
            return scalar.annotation, f"default={scalar.zero_literal}"
        if kind is PropertyKind.CLASS:
            nested = names.class_name(prop.type)
            if prop.repeated:
                return f"list[{nested} | None]", "default_factory=list"
            return f"{nested} | None", "default=None"
        value_type = prop.map_value_type or ""
        if value_type in ScalarKind.values():
            return f"dict[str, {ScalarKind(value_type).annotation}]", "default_factory=dict"
        return f"dict[str, {names.class_name(value_type)} | None]", "default_factory=dict"
