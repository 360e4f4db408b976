"""Load schema models and input documents from JSON or YAML sources."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import yaml
from pydantic import ValidationError

from schemabuilder.exceptions import ModelLoadError, SchemaModelError
from schemabuilder.logging import get_logger
from schemabuilder.typing.enums import DocumentFormat
from schemabuilder.typing.models import ClassCollection

if TYPE_CHECKING:
    from schemabuilder.settings import Settings

logger = get_logger("schemabuilder.loader")

_URL_SCHEMES = ("http://", "https://")


def is_url(source: str | Path) -> bool:
    """Return whether a source designates a remote model.

    Args:
        source (str | Path): File path or URL.

    Returns:
        bool: True for http(s) URLs.
    """
    return isinstance(source, str) and source.startswith(_URL_SCHEMES)


def parse_document(text: str, document_format: DocumentFormat, *, source: str = "<string>") -> Any:
    """Decode JSON or YAML text into plain Python data.

    Args:
        text (str): Raw document text.
        document_format (DocumentFormat): Syntax of `text`.
        source (str): Origin of the text, used in error messages.

    Raises:
        ModelLoadError: If the text is not well-formed.

    Returns:
        Any: Decoded value.
    """
    try:
        if document_format is DocumentFormat.YAML:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ModelLoadError(source=source, message=f"Invalid {document_format.value} document", exc=exc) from exc


def load_document(path: str | Path) -> Any:
    """Read an input document from disk.

    The syntax is chosen from the file suffix; unknown suffixes are read as JSON.

    Args:
        path (str | Path): Document path.

    Raises:
        ModelLoadError: If the file cannot be read or decoded.

    Returns:
        Any: Decoded value, ready to be passed to a builder.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(source=str(path), message="Cannot read document", exc=exc) from exc
    return parse_document(text, DocumentFormat.from_suffix(path.suffix), source=str(path))


def _load_from_url(url: str, timeout: float) -> Any:
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise ModelLoadError(source=url, message="Cannot fetch schema model", exc=exc) from exc
    suffix = Path(httpx.URL(url).path).suffix
    content_type = response.headers.get("content-type", "")
    document_format = DocumentFormat.YAML if "yaml" in content_type else DocumentFormat.from_suffix(suffix)
    return parse_document(response.text, document_format, source=url)


def load_class_collection(source: str | Path, settings: Settings | None = None) -> ClassCollection:
    """Load and validate a schema model.

    Args:
        source (str | Path): JSON/YAML file path, or an http(s) URL.
        settings (Settings | None): Provides the HTTP timeout; defaults apply when omitted.

    Raises:
        ModelLoadError: If the source cannot be read or does not describe a schema model.
        SchemaModelError: If the model violates a structural invariant.

    Returns:
        ClassCollection: Validated schema model.
    """
    if is_url(source):
        timeout = settings.timeout if settings is not None else 30.0
        payload = _load_from_url(str(source), timeout)
    else:
        payload = load_document(source)

    if not isinstance(payload, dict):
        raise ModelLoadError(source=str(source), message="Schema model must be a mapping")

    try:
        collection = ClassCollection.model_validate(payload)
    except SchemaModelError:
        raise
    except ValidationError as exc:
        raise ModelLoadError(source=str(source), message="Invalid schema model", exc=exc) from exc

    logger.info(
        "Schema model loaded",
        extra={"source": str(source), "schema": collection.name, "classes": len(collection.classes)},
    )
    return collection
