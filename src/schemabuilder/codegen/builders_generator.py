"""Emit the builders module of a generated package."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemabuilder.codegen.messages_generator import comment_text, docstring_literal
from schemabuilder.message_types import is_one_of_candidate
from schemabuilder.typing.enums import ClassKind, PropertyKind, ScalarKind

if TYPE_CHECKING:
    from schemabuilder.naming import NameTable
    from schemabuilder.typing.models import ClassCollection, ClassModel, PropertyModel


def _scalar_ref(kind: ScalarKind) -> str:
    return f"_ScalarKind.{kind.name}"


def _inner_builder(names: NameTable, class_name: str) -> str:
    return f"_{names.builder_name(class_name)}"


def _proto_comment(collection: ClassCollection, prop: PropertyModel, number: int) -> str:
    line = f"{prop.type} {prop.name} = {number};"
    if prop.repeated:
        line = f"repeated {line}"
    if prop.pattern and collection.property_kind(prop) is PropertyKind.MAP:
        line = f"{line} (keys matching {prop.pattern!r})"
    return f"# {comment_text(line)}"


class BuildersGenerator:
    """Render one `build_<class>` entry point per schema class.

    Each entry point guards a private `_build_<class>` function; nested
    properties call the private functions directly.
    """

    @staticmethod
    def render(
        collection: ClassCollection,
        names: NameTable,
        *,
        messages_module: str = "messages",
        license_header: str = "",
    ) -> str:
        """Render the builders module.

        Args:
            collection (ClassCollection): Schema model.
            names (NameTable): Identifier table shared with the messages module.
            messages_module (str): Sibling module holding the message types.
            license_header (str): Comment block prepended to the module.

        Returns:
            str: Module source.
        """
        lines: list[str] = []
        if license_header:
            lines.append(license_header)
            lines.append("")
        lines.append("# THIS FILE IS AUTOMATICALLY GENERATED.")
        lines.append(docstring_literal(f"Builders converting decoded documents into {collection.name} messages."))
        lines.append("")
        lines.append("from __future__ import annotations")
        lines.append("")
        lines.append("from typing import TYPE_CHECKING")
        lines.append("")
        lines.append("from schemabuilder.runtime import conversions as _conv")
        lines.append("from schemabuilder.runtime.diagnostics import resolve_reporter as _resolve_reporter")
        lines.append("from schemabuilder.typing.enums import ScalarKind as _ScalarKind")
        lines.append("")
        lines.append(f"from . import {messages_module} as _m")
        lines.append("")
        lines.append("if TYPE_CHECKING:")
        lines.append("    from collections.abc import Callable")
        lines.append("")
        lines.append("    from schemabuilder.runtime.messages import Message")
        lines.append("    from schemabuilder.typing.protocol import DiagnosticReporter")
        lines.append("")
        lines.append("")
        lines.append("def version() -> str:")
        lines.append('    """Return the version label of the schema these builders implement."""')
        lines.append(f"    return {collection.version!r}")

        for class_model in collection.sorted_classes():
            lines.append("")
            lines.append("")
            lines.extend(BuildersGenerator._render_builder(collection, names, class_model))

        lines.append("")
        lines.append("")
        lines.append("BUILDERS: dict[str, Callable[..., Message | None]] = {")
        for class_model in collection.sorted_classes():
            lines.append(f"    {class_model.name!r}: {names.builder_name(class_model.name)},")
        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _render_builder(collection: ClassCollection, names: NameTable, class_model: ClassModel) -> list[str]:
        class_name = class_model.name
        message_type = f"_m.{names.class_name(class_name)}"
        inner = _inner_builder(names, class_name)
        lines = [
            f"def {names.builder_name(class_name)}(",
            "    value: object,",
            "    reporter: DiagnosticReporter | None = None,",
            f") -> {message_type} | None:",
            f'    """Build a `{names.class_name(class_name)}` from a decoded value."""',
            f"    return _conv.build_guarded({class_name!r}, {inner}, value, reporter)",
            "",
            "",
            f"def {inner}(value: object, reporter: DiagnosticReporter | None = None) -> {message_type} | None:",
        ]

        if class_model.kind is ClassKind.STRING_ARRAY:
            lines.append(
                f"    return _conv.build_string_array({class_name!r}, {message_type}, value, _resolve_reporter(reporter))",
            )
            return lines
        if class_model.kind is ClassKind.BLOB:
            lines.append(f"    return _conv.build_blob({message_type}, value)")
            return lines

        lines.append("    reporter = _resolve_reporter(reporter)")
        lines.append(f"    m = _conv.unpack_object({class_name!r}, value, reporter)")
        lines.append("    if m is None:")
        lines.append("        return None")
        required = repr(tuple(class_model.sorted_required()))
        allowed = "None" if class_model.open else repr(tuple(class_model.sorted_property_names()))
        lines.append(f"    if not _conv.check_keys(m, {required}, {allowed}):")
        lines.append("        return None")
        lines.append("    return _conv.build_object(")
        lines.append(f"        {message_type},")
        lines.append("        [")

        candidates: list[str] = []
        for number, prop in enumerate(class_model.sorted_properties(), start=1):
            if is_one_of_candidate(collection, class_model, prop):
                candidates.append(f"({prop.name!r}, {prop.type!r}, {_inner_builder(names, prop.type)})")
                continue
            lines.append(f"            {_proto_comment(collection, prop, number)}")
            lines.append(f"            {BuildersGenerator._render_property(collection, names, class_model, prop)},")
        if candidates:
            lines.append("            # oneof")
            lines.append(f"            _conv.resolve_one_of(m, [{', '.join(candidates)}], reporter),")

        lines.append("        ],")
        lines.append("    )")
        return lines

    @staticmethod
    def _render_property(
        collection: ClassCollection,
        names: NameTable,
        class_model: ClassModel,
        prop: PropertyModel,
    ) -> str:
        class_name = class_model.name
        key = prop.name
        field = names.field_name(class_name, key)
        kind = collection.property_kind(prop)

        if kind is PropertyKind.SCALAR:
            scalar = _scalar_ref(ScalarKind(prop.type))
            func = "convert_scalar_sequence" if prop.repeated else "convert_scalar"
            return f"_conv.{func}({class_name!r}, m, {key!r}, {field!r}, {scalar}, reporter)"

        if kind is PropertyKind.CLASS:
            nested = _inner_builder(names, prop.type)
            if prop.repeated:
                return f"_conv.convert_nested_sequence(m, {key!r}, {field!r}, {nested}, reporter)"
            return f"_conv.convert_nested(m, {key!r}, {field!r}, {nested}, reporter)"

        value_type = prop.map_value_type or ""
        if value_type in ScalarKind.values():
            scalar = _scalar_ref(ScalarKind(value_type))
            return (
                f"_conv.convert_scalar_map({class_name!r}, m, {key!r}, {field!r}, {scalar}, "
                f"{prop.pattern!r}, reporter)"
            )
        nested = _inner_builder(names, value_type)
        return f"_conv.convert_nested_map(m, {field!r}, {nested}, {prop.pattern!r}, reporter)"
