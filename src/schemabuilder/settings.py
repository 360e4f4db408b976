"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemabuilder.exceptions import SettingsError

_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "schemabuilder"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    timeout: float = Field(
        default=30.0,
        validation_alias="TIMEOUT",
        description="Timeout in seconds when fetching a schema model over HTTP.",
    )

    output_dir: str = Field(
        default="generated",
        validation_alias="OUTPUT_DIR",
        description="Directory receiving generated packages.",
    )
    package_name: str = Field(
        default="schema_builders",
        validation_alias="PACKAGE_NAME",
        description="Python package name of the generated builders.",
    )
    license_file: str | None = Field(
        default=None,
        validation_alias="LICENSE_FILE",
        description="Text file whose content is prepended to every generated module.",
    )

    @field_validator("package_name")
    @classmethod
    def _validate_package_name(cls, value: str) -> str:
        """Ensure the generated package name is importable.

        Args:
            value (str): Candidate package name.

        Raises:
            ValueError: If the name is not a valid Python identifier.

        Returns:
            str: Validated package name.
        """
        if not _PACKAGE_NAME_RE.fullmatch(value):
            raise ValueError(f"PACKAGE_NAME must be a valid Python identifier, got '{value}'")  # noqa: TRY003
        return value

    def license_header(self) -> str:
        """Return the license text to prepend to generated modules.

        Returns:
            str: License text rendered as `#` comments, or an empty string.
        """
        if not self.license_file:
            return ""
        return render_license_header(Path(self.license_file).read_text(encoding="utf-8"))


def render_license_header(text: str) -> str:
    """Render license text as a block of Python comments.

    Lines already starting with `#` are kept verbatim.

    Args:
        text (str): Raw license text.

    Returns:
        str: Comment block without a trailing newline.
    """
    lines = []
    for line in text.strip().splitlines():
        stripped = line.rstrip()
        if stripped.startswith("#"):
            lines.append(stripped)
        elif stripped:
            lines.append(f"# {stripped}")
        else:
            lines.append("#")
    return "\n".join(lines)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        raise SettingsError(exc=exc) from exc
