"""CLI entry point for schemabuilder."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from schemabuilder import __version__
from schemabuilder._bootstrap import logger
from schemabuilder.codegen import generate_package
from schemabuilder.compiler import compile_schema
from schemabuilder.dependencies import ensure_cli_dependencies_for_load
from schemabuilder.exceptions import PackageError
from schemabuilder.loader import load_class_collection, load_document
from schemabuilder.logging import configure_logging
from schemabuilder.settings import get_settings, render_license_header

if TYPE_CHECKING:
    from schemabuilder.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="schemabuilder",
        description="Generate and run builders turning JSON/YAML documents into typed instances.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser("generate", help="Write a builder package for a schema model")
    generate_parser.add_argument("--model", required=True, dest="model", help="Model file path or http(s) URL")
    generate_parser.add_argument("--output-dir", type=Path, default=None, dest="output_dir")
    generate_parser.add_argument("--package", default=None, dest="package_name")
    generate_parser.add_argument("--license", type=Path, default=None, dest="license_path")

    build_cmd_parser = subparsers.add_parser("build", help="Convert one document into an instance of a class")
    build_cmd_parser.add_argument("--model", required=True, dest="model", help="Model file path or http(s) URL")
    build_cmd_parser.add_argument("--class", required=True, dest="class_name")
    build_cmd_parser.add_argument("--input", required=True, type=Path, dest="input_path")

    classes_parser = subparsers.add_parser("classes", help="List the classes of a schema model")
    classes_parser.add_argument("--model", required=True, dest="model", help="Model file path or http(s) URL")

    return parser


def _license_header(args: argparse.Namespace, settings: Settings) -> str:
    """Resolve the license header of generated modules.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        str: Comment block, or an empty string.
    """
    if args.license_path is None:
        return settings.license_header()
    return render_license_header(args.license_path.read_text(encoding="utf-8"))


def _run_generate(args: argparse.Namespace, settings: Settings) -> int:
    collection = load_class_collection(args.model, settings)
    written = generate_package(
        collection,
        args.output_dir or Path(settings.output_dir),
        args.package_name or settings.package_name,
        license_header=_license_header(args, settings),
    )
    for path in written:
        sys.stdout.write(f"{path}\n")
    return 0


def _run_build(args: argparse.Namespace, settings: Settings) -> int:
    collection = load_class_collection(args.model, settings)
    compiled = compile_schema(collection)
    document = load_document(args.input_path)
    instance = compiled.build(args.class_name, document)
    if instance is None:
        logger.error(
            "Input does not conform to the schema class",
            extra={"class_name": args.class_name, "input_path": str(args.input_path)},
        )
        return 1
    sys.stdout.write(json.dumps(instance.to_document(), indent=2, ensure_ascii=False))
    sys.stdout.write("\n")
    return 0


def _run_classes(args: argparse.Namespace, settings: Settings) -> int:
    collection = load_class_collection(args.model, settings)
    for class_model in collection.sorted_classes():
        sys.stdout.write(f"{class_model.name}\t{class_model.kind.to_str()}\n")
    return 0


_COMMANDS = {
    "generate": _run_generate,
    "build": _run_build,
    "classes": _run_classes,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments to parse; `sys.argv` when omitted.

    Returns:
        int: Exit code (0 for success, 1 for error, 130 when interrupted).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        ensure_cli_dependencies_for_load()
        return command(args, settings)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except OSError:
        logger.exception("Cannot access a file", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user", extra={"command": args.command})
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
