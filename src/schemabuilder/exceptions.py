"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass, field


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class SchemaModelError(PackageError):
    """Raised when a schema model violates one of its structural invariants."""

    message: str
    class_name: str | None = None
    property_name: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        location = ".".join(part for part in (self.class_name, self.property_name) if part)
        return f"{location}: {self.message}" if location else self.message


@dataclass(frozen=True)
class ModelLoadError(PackageError):
    """Raised when a schema model or an input document cannot be read."""

    source: str
    message: str = "Failed to load"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        suffix = f": {self.exc}" if self.exc else ""
        return f"{self.message} '{self.source}'{suffix}"


@dataclass(frozen=True)
class UnknownClassError(PackageError):
    """Raised when a builder is requested for a class the schema does not define."""

    class_name: str
    known: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        """Return error message payload."""
        if not self.known:
            return f"Unknown schema class '{self.class_name}'"
        return f"Unknown schema class '{self.class_name}'. Known classes: {', '.join(self.known)}"


@dataclass(frozen=True)
class CodegenError(PackageError):
    """Raised when generated sources cannot be produced or written."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"
