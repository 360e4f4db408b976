"""Pydantic message types created at runtime for a schema model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field, create_model

from schemabuilder.naming import NameTable
from schemabuilder.runtime.messages import BlobMessage, Message, OneOfMessage, StringArrayMessage
from schemabuilder.typing.enums import ClassKind, PropertyKind, ScalarKind

if TYPE_CHECKING:
    from schemabuilder.typing.models import ClassCollection, ClassModel, PropertyModel

_SCALAR_TYPES: dict[ScalarKind, type] = {
    ScalarKind.STRING: str,
    ScalarKind.INT: int,
    ScalarKind.FLOAT: float,
    ScalarKind.BOOL: bool,
}

_BASES: dict[ClassKind, type[Message]] = {
    ClassKind.STRING_ARRAY: StringArrayMessage,
    ClassKind.BLOB: BlobMessage,
    ClassKind.ONE_OF: OneOfMessage,
    ClassKind.REGULAR: Message,
}


def is_one_of_candidate(collection: ClassCollection, class_model: ClassModel, prop: PropertyModel) -> bool:
    """Return whether a property is an alternative of its class's oneOf slot.

    Args:
        collection (ClassCollection): Schema model.
        class_model (ClassModel): Owning class.
        prop (PropertyModel): Property of `class_model`.

    Returns:
        bool: True for non-repeated nested-class properties of a oneOf class.
    """
    return (
        class_model.one_of_wrapper
        and not prop.repeated
        and collection.property_kind(prop) is PropertyKind.CLASS
    )


def _field_definition(collection: ClassCollection, prop: PropertyModel) -> tuple[Any, Any]:
    alias = prop.name
    kind = collection.property_kind(prop)
    if kind is PropertyKind.SCALAR:
        scalar = _SCALAR_TYPES[ScalarKind(prop.type)]
        if prop.repeated:
            return list[scalar], Field(default_factory=list, serialization_alias=alias)
        return scalar, Field(default=scalar(), serialization_alias=alias)
    if kind is PropertyKind.CLASS:
        if prop.repeated:
            return list[Message | None], Field(default_factory=list, serialization_alias=alias)
        return Message | None, Field(default=None, serialization_alias=alias)
    value_type = prop.map_value_type or ""
    if value_type in ScalarKind.values():
        return dict[str, _SCALAR_TYPES[ScalarKind(value_type)]], Field(
            default_factory=dict,
            serialization_alias=alias,
        )
    return dict[str, Message | None], Field(default_factory=dict, serialization_alias=alias)


def generate_message_types(
    collection: ClassCollection,
    names: NameTable | None = None,
) -> dict[str, type[Message]]:
    """Create one message type per schema class.

    Nested-class fields are typed with the `Message` base so self-referential
    schemas need no forward references.

    Args:
        collection (ClassCollection): Schema model.
        names (NameTable | None): Identifier table; built from `collection` when omitted.

    Returns:
        dict[str, type[Message]]: Schema class name -> message type.
    """
    names = names or NameTable(collection)
    types: dict[str, type[Message]] = {}
    for class_model in collection.sorted_classes():
        fields: dict[str, Any] = {}
        for prop in class_model.sorted_properties():
            if is_one_of_candidate(collection, class_model, prop):
                continue
            fields[names.field_name(class_model.name, prop.name)] = _field_definition(collection, prop)
        message_type = create_model(
            names.class_name(class_model.name),
            __base__=_BASES[class_model.kind],
            __module__=__name__,
            __doc__=class_model.description or f"Typed instance of schema class '{class_model.name}'.",
            **fields,
        )
        message_type.schema_class = class_model.name
        types[class_model.name] = message_type
    return types
