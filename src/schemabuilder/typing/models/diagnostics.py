"""Diagnostic records emitted by builders on soft failures."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from schemabuilder.typing.enums import DiagnosticCode


class Diagnostic(BaseModel):
    """One rejected or unexpected input value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: DiagnosticCode
    class_name: str
    property_name: str | None = None
    message: str
    value: str
    key_count: int | None = None

    def log_fields(self) -> dict[str, object]:
        """Return structured logging fields.

        Returns:
            dict[str, object]: Non-empty fields of the diagnostic, message excluded.
        """
        return self.model_dump(mode="json", exclude={"message"}, exclude_none=True)
