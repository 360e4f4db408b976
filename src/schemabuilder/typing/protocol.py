"""Builder and diagnostics interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from schemabuilder.runtime.messages import Message
    from schemabuilder.typing.models import Diagnostic


class DiagnosticReporter(Protocol):
    """Sink for soft-failure diagnostics raised during a conversion."""

    def report(self, diagnostic: Diagnostic) -> None:
        """Record one diagnostic.

        Args:
            diagnostic: The rejected value and where it was found.
        """


class Builder(Protocol):
    """Per-class entry point converting a dynamic value into a typed instance."""

    def __call__(self, value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
        """Convert a decoded document value.

        Args:
            value: Decoded JSON/YAML value.
            reporter: Optional diagnostics sink; the package logger is used when omitted.

        Returns:
            Message | None: A fresh instance, or None when the value does not conform.
        """
