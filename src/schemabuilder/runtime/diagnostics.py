"""Diagnostic reporters injected into builder calls."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemabuilder.logging import get_logger
from schemabuilder.runtime.helpers import describe_type
from schemabuilder.typing.models import Diagnostic

if TYPE_CHECKING:
    import structlog

    from schemabuilder.typing.enums import DiagnosticCode
    from schemabuilder.typing.protocol import DiagnosticReporter


class LoggingReporter:
    """Reporter writing each diagnostic as a structured warning."""

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self._logger = logger or get_logger("schemabuilder.builders")

    def report(self, diagnostic: Diagnostic) -> None:
        """Log the diagnostic at warning level."""
        self._logger.warning(diagnostic.message, extra=diagnostic.log_fields())


class CollectingReporter:
    """Reporter keeping diagnostics in memory, one instance per conversion."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """Append the diagnostic."""
        self.diagnostics.append(diagnostic)

    def codes(self) -> list[DiagnosticCode]:
        """Return the codes of the collected diagnostics, in report order."""
        return [diagnostic.code for diagnostic in self.diagnostics]

    def __len__(self) -> int:
        return len(self.diagnostics)


class NullReporter:
    """Reporter discarding every diagnostic."""

    def report(self, diagnostic: Diagnostic) -> None:
        """Ignore the diagnostic."""


_default_reporter: LoggingReporter | None = None


def resolve_reporter(reporter: DiagnosticReporter | None) -> DiagnosticReporter:
    """Return `reporter`, falling back to the package logging reporter.

    Args:
        reporter (DiagnosticReporter | None): Caller-provided reporter.

    Returns:
        DiagnosticReporter: Reporter to use for the conversion.
    """
    global _default_reporter  # noqa: PLW0603

    if reporter is not None:
        return reporter
    if _default_reporter is None:
        _default_reporter = LoggingReporter()
    return _default_reporter


def report(
    reporter: DiagnosticReporter,
    code: DiagnosticCode,
    message: str,
    *,
    class_name: str,
    value: object,
    property_name: str | None = None,
    key_count: int | None = None,
) -> None:
    """Build a diagnostic and hand it to `reporter`.

    Args:
        reporter (DiagnosticReporter): Destination.
        code (DiagnosticCode): Failure category.
        message (str): Human readable summary.
        class_name (str): Class being built.
        value (object): Offending value, recorded as its repr.
        property_name (str | None): Property being converted, if any.
        key_count (int | None): Number of keys of the offending input, when relevant.
    """
    reporter.report(
        Diagnostic(
            code=code,
            class_name=class_name,
            property_name=property_name,
            message=f"{message} (got {describe_type(value)})",
            value=repr(value),
            key_count=key_count,
        ),
    )
