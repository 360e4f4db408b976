"""Source generation for standalone builder packages."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from schemabuilder.codegen.builders_generator import BuildersGenerator
from schemabuilder.codegen.messages_generator import MessagesGenerator, docstring_literal
from schemabuilder.exceptions import CodegenError
from schemabuilder.logging import get_logger
from schemabuilder.naming import NameTable

if TYPE_CHECKING:
    from schemabuilder.typing.models import ClassCollection

logger = get_logger("schemabuilder.codegen")

MESSAGES_MODULE = "messages"
BUILDERS_MODULE = "builders"


class PackageGenerator:
    """Render and write the `__init__`, `messages` and `builders` modules of a package."""

    @staticmethod
    def render(collection: ClassCollection, *, license_header: str = "") -> dict[str, str]:
        """Render every module of a generated package.

        Args:
            collection (ClassCollection): Validated schema model.
            license_header (str): Comment block prepended to each module.

        Returns:
            dict[str, str]: File name -> module source.
        """
        names = NameTable(collection)
        return {
            "__init__.py": PackageGenerator._render_init(collection, names, license_header=license_header),
            f"{MESSAGES_MODULE}.py": MessagesGenerator.render(collection, names, license_header=license_header),
            f"{BUILDERS_MODULE}.py": BuildersGenerator.render(
                collection,
                names,
                messages_module=MESSAGES_MODULE,
                license_header=license_header,
            ),
        }

    @staticmethod
    def generate(
        collection: ClassCollection,
        *,
        output_dir: Path = Path("generated"),
        package_name: str = "schema_builders",
        license_header: str = "",
    ) -> list[Path]:
        """Write a generated package to disk.

        Existing modules of the package are overwritten.

        Args:
            collection (ClassCollection): Validated schema model.
            output_dir (Path): Directory receiving the package.
            package_name (str): Package directory name.
            license_header (str): Comment block prepended to each module.

        Raises:
            CodegenError: If the package directory or one of its modules cannot be written.

        Returns:
            list[Path]: Written module paths.
        """
        if not package_name.isidentifier():
            raise CodegenError(message=f"package name '{package_name}' is not a valid Python identifier")

        sources = PackageGenerator.render(collection, license_header=license_header)
        package_dir = Path(output_dir) / package_name
        written: list[Path] = []
        try:
            package_dir.mkdir(parents=True, exist_ok=True)
            for file_name, source in sources.items():
                path = package_dir / file_name
                path.write_text(source, encoding="utf-8")
                written.append(path)
        except OSError as exc:
            raise CodegenError(message=f"cannot write package to '{package_dir}': {exc}") from exc

        logger.info(
            "Generated builder package",
            extra={"package_dir": str(package_dir), "classes": len(collection.classes), "modules": len(written)},
        )
        return written

    @staticmethod
    def _render_init(collection: ClassCollection, names: NameTable, *, license_header: str = "") -> str:
        class_names = [names.class_name(class_model.name) for class_model in collection.sorted_classes()]
        builder_names = [names.builder_name(class_model.name) for class_model in collection.sorted_classes()]

        lines: list[str] = []
        if license_header:
            lines.append(license_header)
            lines.append("")
        lines.append("# THIS FILE IS AUTOMATICALLY GENERATED.")
        lines.append(docstring_literal(f"Builders of the {collection.name} schema ({collection.version})."))
        lines.append("")
        lines.append(f"from .{BUILDERS_MODULE} import (")
        lines.append("    BUILDERS,")
        lines.extend(f"    {name}," for name in builder_names)
        lines.append("    version,")
        lines.append(")")
        lines.append(f"from .{MESSAGES_MODULE} import (")
        lines.append("    MESSAGE_TYPES,")
        lines.extend(f"    {name}," for name in class_names)
        lines.append(")")
        lines.append("")
        lines.append("__all__ = [")
        exported = sorted(["BUILDERS", "MESSAGE_TYPES", "version", *builder_names, *class_names])
        lines.extend(f"    {name!r}," for name in exported)
        lines.append("]")
        lines.append("")
        return "\n".join(lines)


def generate_package(
    collection: ClassCollection,
    output_dir: Path,
    package_name: str,
    *,
    license_header: str = "",
) -> list[Path]:
    """Write the builder package of `collection`.

    Args:
        collection (ClassCollection): Validated schema model.
        output_dir (Path): Directory receiving the package.
        package_name (str): Package directory name.
        license_header (str): Comment block prepended to each module.

    Returns:
        list[Path]: Written module paths.
    """
    return PackageGenerator.generate(
        collection,
        output_dir=output_dir,
        package_name=package_name,
        license_header=license_header,
    )


__all__ = ["BuildersGenerator", "MessagesGenerator", "PackageGenerator", "generate_package"]
