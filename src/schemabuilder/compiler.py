"""Compile a schema model into in-process builders, one per class."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schemabuilder.message_types import generate_message_types, is_one_of_candidate
from schemabuilder.naming import NameTable
from schemabuilder.runtime import conversions
from schemabuilder.runtime.diagnostics import resolve_reporter
from schemabuilder.typing.enums import ClassKind, PropertyKind, ScalarKind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from schemabuilder.runtime.messages import Message
    from schemabuilder.typing.models import ClassCollection, ClassModel, PropertyModel, PropertyResult
    from schemabuilder.typing.protocol import Builder, DiagnosticReporter

    Converter = Callable[[Mapping[str, Any], DiagnosticReporter], PropertyResult]


class CompiledSchema:
    """Builders for every class of a schema model.

    Builders are plain callables `(value, reporter=None) -> Message | None`.
    Nested classes are resolved by name at call time, so self-referential
    schemas compile and recursion is bounded by the input's nesting depth.
    """

    def __init__(
        self,
        collection: ClassCollection,
        message_types: Mapping[str, type[Message]] | None = None,
    ) -> None:
        self.collection = collection
        self.names = NameTable(collection)
        self.message_types = dict(message_types or generate_message_types(collection, self.names))
        self._builders: dict[str, Builder] = {}
        for class_model in collection.sorted_classes():
            self._builders[class_model.name] = self._compile_class(class_model)
        self._entry_points = {name: self._entry_point(name) for name in self._builders}
        self._by_builder_name = {self.names.builder_name(name): name for name in self._builders}

    @property
    def class_names(self) -> list[str]:
        """Schema class names, sorted."""
        return sorted(self._builders)

    def builder(self, class_name: str) -> Builder:
        """Return the entry point of a class.

        Args:
            class_name (str): Schema class name.

        Returns:
            Builder: The class builder.
        """
        self.collection.get(class_name)
        return self._entry_points[class_name]

    def build(self, class_name: str, value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
        """Convert a decoded value into an instance of `class_name`.

        Args:
            class_name (str): Schema class name.
            value (object): Decoded JSON/YAML value.
            reporter (DiagnosticReporter | None): Diagnostics sink; the package logger when omitted.

        Returns:
            Message | None: A fresh instance, or None when the value does not conform.
        """
        return self.builder(class_name)(value, reporter)

    def __getattr__(self, item: str) -> Builder:
        """Expose `build_<ClassName>` and `build_<snake_name>` entry points."""
        if item.startswith("build_"):
            builders = self.__dict__.get("_entry_points", {})
            class_name = item.removeprefix("build_")
            if class_name in builders:
                return builders[class_name]
            by_builder_name = self.__dict__.get("_by_builder_name", {})
            if item in by_builder_name:
                return builders[by_builder_name[item]]
        raise AttributeError(item)

    # -------------------------
    # class compilation
    # -------------------------
    def _entry_point(self, class_name: str) -> Builder:
        build = self._builders[class_name]

        def entry_point(value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
            return conversions.build_guarded(class_name, build, value, reporter)

        entry_point.__name__ = entry_point.__qualname__ = build.__name__
        entry_point.__doc__ = build.__doc__
        return entry_point

    def _lazy(self, class_name: str) -> Builder:
        builders = self._builders

        def build(value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
            return builders[class_name](value, reporter)

        return build

    def _compile_class(self, class_model: ClassModel) -> Builder:
        class_name = class_model.name
        message_type: Any = self.message_types[class_name]
        kind = class_model.kind

        if kind is ClassKind.STRING_ARRAY:

            def build(value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
                return conversions.build_string_array(class_name, message_type, value, resolve_reporter(reporter))

        elif kind is ClassKind.BLOB:

            def build(value: object, reporter: DiagnosticReporter | None = None) -> Message | None:  # noqa: ARG001
                return conversions.build_blob(message_type, value)

        else:
            required = class_model.sorted_required()
            allowed = None if class_model.open else frozenset(class_model.properties)
            converters = self._compile_properties(class_model)

            def build(value: object, reporter: DiagnosticReporter | None = None) -> Message | None:
                reporter = resolve_reporter(reporter)
                m = conversions.unpack_object(class_name, value, reporter)
                if m is None:
                    return None
                if not conversions.check_keys(m, required, allowed):
                    return None
                return conversions.build_object(message_type, [convert(m, reporter) for convert in converters])

        build.__name__ = build.__qualname__ = self.names.builder_name(class_name)
        build.__doc__ = f"Build a `{message_type.__name__}` from a decoded value."
        return build

    def _compile_properties(self, class_model: ClassModel) -> list[Converter]:
        converters: list[Converter] = []
        candidates: list[tuple[str, str, Builder]] = []
        for prop in class_model.sorted_properties():
            if is_one_of_candidate(self.collection, class_model, prop):
                candidates.append((prop.name, prop.type, self._lazy(prop.type)))
                continue
            converters.append(self._compile_property(class_model, prop))
        if candidates:
            converters.append(lambda m, reporter: conversions.resolve_one_of(m, candidates, reporter))
        return converters

    def _compile_property(self, class_model: ClassModel, prop: PropertyModel) -> Converter:
        class_name = class_model.name
        key = prop.name
        field = self.names.field_name(class_name, key)
        kind = self.collection.property_kind(prop)

        if kind is PropertyKind.SCALAR:
            scalar = ScalarKind(prop.type)
            if prop.repeated:
                return lambda m, reporter: conversions.convert_scalar_sequence(
                    class_name, m, key, field, scalar, reporter
                )
            return lambda m, reporter: conversions.convert_scalar(class_name, m, key, field, scalar, reporter)

        if kind is PropertyKind.CLASS:
            nested = self._lazy(prop.type)
            if prop.repeated:
                return lambda m, reporter: conversions.convert_nested_sequence(m, key, field, nested, reporter)
            return lambda m, reporter: conversions.convert_nested(m, key, field, nested, reporter)

        value_type = prop.map_value_type or ""
        pattern = prop.pattern
        if value_type in ScalarKind.values():
            scalar = ScalarKind(value_type)
            return lambda m, reporter: conversions.convert_scalar_map(
                class_name, m, key, field, scalar, pattern, reporter
            )
        nested = self._lazy(value_type)
        return lambda m, reporter: conversions.convert_nested_map(m, field, nested, pattern, reporter)


def compile_schema(
    collection: ClassCollection,
    message_types: Mapping[str, type[Message]] | None = None,
) -> CompiledSchema:
    """Compile builders for every class of `collection`.

    Args:
        collection (ClassCollection): Validated schema model.
        message_types (Mapping[str, type[Message]] | None): Existing target types keyed by class
            name; created with `generate_message_types` when omitted.

    Returns:
        CompiledSchema: The compiled builders.
    """
    return CompiledSchema(collection, message_types)
