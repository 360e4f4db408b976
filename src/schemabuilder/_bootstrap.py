"""Package bootstrap helpers."""

from schemabuilder.dependencies import ensure_package_dependencies
from schemabuilder.logging import get_logger

ensure_package_dependencies()

logger = get_logger("schemabuilder")

__all__ = ["logger"]
