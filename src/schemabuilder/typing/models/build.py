"""Explicit per-property conversion outcomes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from schemabuilder.typing.enums import ResultStatus


class PropertyResult(BaseModel):
    """Outcome of converting one property of an input mapping.

    Only `set` results populate fields of the instance under construction;
    `absent` and `rejected` leave the field at its zero value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    field: str
    status: ResultStatus
    value: Any = None

    @classmethod
    def set(cls, field: str, value: Any) -> PropertyResult:
        """Build a result carrying a converted value."""
        return cls(field=field, status=ResultStatus.SET, value=value)

    @classmethod
    def absent(cls, field: str) -> PropertyResult:
        """Build a result for a key missing from the input."""
        return cls(field=field, status=ResultStatus.ABSENT)

    @classmethod
    def rejected(cls, field: str) -> PropertyResult:
        """Build a result for a value that failed conversion."""
        return cls(field=field, status=ResultStatus.REJECTED)

    @property
    def is_set(self) -> bool:
        """Whether the result populates its field."""
        return self.status is ResultStatus.SET
