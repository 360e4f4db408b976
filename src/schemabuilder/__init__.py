"""Schemabuilder package."""

from schemabuilder.compiler import CompiledSchema, compile_schema
from schemabuilder.exceptions import (
    CodegenError,
    DependencyError,
    ModelLoadError,
    PackageError,
    SchemaModelError,
    SettingsError,
    UnknownClassError,
)
from schemabuilder.logging import configure_logging, get_logger
from schemabuilder.runtime.diagnostics import CollectingReporter, LoggingReporter, NullReporter
from schemabuilder.settings import Settings, get_settings
from schemabuilder.typing.models import ClassCollection, ClassModel, PropertyModel

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("schemabuilder")

__all__ = [
    "ClassCollection",
    "ClassModel",
    "CodegenError",
    "CollectingReporter",
    "CompiledSchema",
    "DependencyError",
    "LoggingReporter",
    "ModelLoadError",
    "NullReporter",
    "PackageError",
    "PropertyModel",
    "SchemaModelError",
    "Settings",
    "SettingsError",
    "UnknownClassError",
    "__version__",
    "compile_schema",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
