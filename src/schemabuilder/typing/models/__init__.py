"""Core domain model exports."""

from schemabuilder.typing.models.build import PropertyResult
from schemabuilder.typing.models.diagnostics import Diagnostic
from schemabuilder.typing.models.schema import ClassCollection, ClassModel, PropertyModel, map_type_info

__all__ = [
    "ClassCollection",
    "ClassModel",
    "Diagnostic",
    "PropertyModel",
    "PropertyResult",
    "map_type_info",
]
