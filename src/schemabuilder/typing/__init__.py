"""Typing-centric domain modules."""

from schemabuilder.typing.enums import (
    ClassKind,
    DiagnosticCode,
    DocumentFormat,
    PropertyKind,
    ResultStatus,
    ScalarKind,
)
from schemabuilder.typing.models import (
    ClassCollection,
    ClassModel,
    Diagnostic,
    PropertyModel,
    PropertyResult,
)
from schemabuilder.typing.protocol import Builder, DiagnosticReporter

__all__ = [
    "Builder",
    "ClassCollection",
    "ClassKind",
    "ClassModel",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticReporter",
    "DocumentFormat",
    "PropertyKind",
    "PropertyModel",
    "PropertyResult",
    "ResultStatus",
    "ScalarKind",
]
