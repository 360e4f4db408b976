"""Conversion routines shared by compiled schemas and generated builder modules.

Every per-class builder is a composition of these functions:

1. a class-level gate (`build_string_array`, `build_blob`, or `unpack_object`
   followed by `check_keys`),
2. one property conversion per declared property, each returning a
   `PropertyResult`,
3. `build_object`, which populates a fresh instance from the `set` results.

Public entry points wrap the class builder in `build_guarded`.

Conversions never raise on bad input. Shape problems are reported to the
injected reporter and turn into `None` instances or unset fields.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sized
from typing import TYPE_CHECKING, Any, TypeVar

from schemabuilder.runtime.diagnostics import CollectingReporter, report, resolve_reporter
from schemabuilder.runtime.helpers import (
    coerce_scalar_sequence,
    convert_to_string_array,
    describe_type,
    is_sequence,
    map_contains_all_keys,
    map_contains_only_keys,
    map_has_key,
    pattern_matches,
    scalar_matches,
    unpack_map,
)
from schemabuilder.runtime.messages import BlobMessage, Message, OneOfBranch, StringArrayMessage
from schemabuilder.typing.enums import DiagnosticCode, ScalarKind
from schemabuilder.typing.models import Diagnostic, PropertyResult

if TYPE_CHECKING:
    from schemabuilder.typing.protocol import DiagnosticReporter

BuildFn = Callable[[object, "DiagnosticReporter | None"], "Message | None"]
M = TypeVar("M", bound=Message)
SA = TypeVar("SA", bound=StringArrayMessage)
B = TypeVar("B", bound=BlobMessage)

ONE_OF_FIELD = "oneof"


# -------------------------
# class-level gates
# -------------------------
def build_string_array(
    class_name: str,
    message_type: type[SA],
    value: object,
    reporter: DiagnosticReporter,
) -> SA | None:
    """Lift a bare string into a one-element array instance.

    Args:
        class_name (str): Class being built.
        message_type (type[SA]): Target type.
        value (object): Decoded value.
        reporter (DiagnosticReporter): Diagnostics sink.

    Returns:
        SA | None: Instance wrapping `[value]`, or None when `value` is not a string.
    """
    if isinstance(value, str):
        return message_type(value=[value])
    report(reporter, DiagnosticCode.UNEXPECTED_VALUE, "expected a string", class_name=class_name, value=value)
    return None


def build_blob(message_type: type[B], value: object) -> B:
    """Store the default textual rendering of any value."""
    return message_type(value=str(value))


def unpack_object(class_name: str, value: object, reporter: DiagnosticReporter) -> Mapping[str, Any] | None:
    """Downcast the input of a map-backed class.

    Args:
        class_name (str): Class being built.
        value (object): Decoded value.
        reporter (DiagnosticReporter): Diagnostics sink.

    Returns:
        Mapping[str, Any] | None: The input mapping, or None after reporting the mismatch.
    """
    m, ok = unpack_map(value)
    if ok:
        return m
    key_count = len(value) if isinstance(value, Sized) and not isinstance(value, str) else 0
    report(
        reporter,
        DiagnosticCode.NOT_A_MAPPING,
        f"unexpected argument to build {class_name}",
        class_name=class_name,
        value=value,
        key_count=key_count,
    )
    return None


def check_keys(m: Mapping[str, Any], required: Collection[str], allowed: Collection[str] | None) -> bool:
    """Enforce required and allowed keys.

    Both failures are silent: the caller returns None without a diagnostic.

    Args:
        m (Mapping[str, Any]): Input mapping.
        required (Collection[str]): Keys that must be present.
        allowed (Collection[str] | None): Keys that may be present, or None for open classes.

    Returns:
        bool: True when the mapping passes both checks.
    """
    if required and not map_contains_all_keys(m, required):
        return False
    return allowed is None or map_contains_only_keys(m, allowed)


def collect_fields(results: Iterable[PropertyResult]) -> dict[str, Any]:
    """Aggregate property results into constructor arguments.

    Absent and rejected results are dropped so their fields keep the zero value.

    Args:
        results (Iterable[PropertyResult]): One result per declared property.

    Returns:
        dict[str, Any]: Field name -> converted value.
    """
    return {result.field: result.value for result in results if result.is_set}


def build_object(message_type: type[M], results: Iterable[PropertyResult]) -> M:
    """Allocate a fresh instance populated from property results."""
    return message_type(**collect_fields(results))


# -------------------------
# scalar properties
# -------------------------
def convert_scalar(
    class_name: str,
    m: Mapping[str, Any],
    key: str,
    field: str,
    kind: ScalarKind,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Convert a single scalar value, checking its dynamic type exactly."""
    if not map_has_key(m, key):
        return PropertyResult.absent(field)
    value = m[key]
    if scalar_matches(value, kind):
        return PropertyResult.set(field, value)
    report(
        reporter,
        DiagnosticCode.TYPE_MISMATCH,
        f"expected {kind.value} for '{key}'",
        class_name=class_name,
        property_name=key,
        value=value,
    )
    return PropertyResult.rejected(field)


def convert_scalar_sequence(
    class_name: str,
    m: Mapping[str, Any],
    key: str,
    field: str,
    kind: ScalarKind,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Convert an array of scalars, dropping elements of another type."""
    if not map_has_key(m, key):
        return PropertyResult.absent(field)
    value = m[key]
    if not is_sequence(value):
        report(
            reporter,
            DiagnosticCode.EXPECTED_SEQUENCE,
            f"expected an array for '{key}'",
            class_name=class_name,
            property_name=key,
            value=value,
        )
        return PropertyResult.rejected(field)
    if kind is ScalarKind.STRING:
        return PropertyResult.set(field, convert_to_string_array(value))
    return PropertyResult.set(field, coerce_scalar_sequence(value, kind))


# -------------------------
# nested class properties
# -------------------------
def convert_nested(
    m: Mapping[str, Any],
    key: str,
    field: str,
    build: BuildFn,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Build a nested instance; a failed build leaves the field unset."""
    if not map_has_key(m, key):
        return PropertyResult.absent(field)
    instance = build(m[key], reporter)
    if instance is None:
        return PropertyResult.rejected(field)
    return PropertyResult.set(field, instance)


def convert_nested_sequence(
    m: Mapping[str, Any],
    key: str,
    field: str,
    build: BuildFn,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Build one nested instance per array element.

    Every element keeps its slot: an element that fails to build becomes None.
    A value that is not an array leaves the field unset without a diagnostic.
    """
    if not map_has_key(m, key):
        return PropertyResult.absent(field)
    value = m[key]
    if not is_sequence(value):
        return PropertyResult.rejected(field)
    return PropertyResult.set(field, [build(item, reporter) for item in value])


def resolve_one_of(
    m: Mapping[str, Any],
    candidates: Iterable[tuple[str, str, BuildFn]],
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Select the active branch of a discriminated union.

    The whole input mapping is offered to each candidate in order; the first
    candidate returning an instance wins and later ones are not tried.
    Diagnostics raised by losing candidates are discarded.

    Args:
        m (Mapping[str, Any]): Input mapping of the union class.
        candidates (Iterable[tuple[str, str, BuildFn]]): (property name, class name, builder),
            sorted by property name.
        reporter (DiagnosticReporter): Diagnostics sink.

    Returns:
        PropertyResult: The branch, or an absent result when no candidate matched.
    """
    for name, class_name, build in candidates:
        trial = CollectingReporter()
        instance = build(m, trial)
        if instance is None:
            continue
        for diagnostic in trial.diagnostics:
            reporter.report(diagnostic)
        return PropertyResult.set(ONE_OF_FIELD, OneOfBranch(name=name, class_name=class_name, value=instance))
    return PropertyResult.absent(ONE_OF_FIELD)


# -------------------------
# pattern-matched map properties
# -------------------------
def _matching_items(m: Mapping[str, Any], pattern: str | None) -> Iterable[tuple[str, Any]]:
    for key, value in m.items():
        if pattern is None or pattern_matches(pattern, key):
            yield key, value


def convert_scalar_map(
    class_name: str,
    m: Mapping[str, Any],
    name: str,
    field: str,
    kind: ScalarKind,
    pattern: str | None,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Collect input entries whose key matches `pattern` and whose value is a `kind` scalar.

    The whole input mapping is scanned, declared properties included.
    """
    entries: dict[str, Any] = {}
    for key, value in _matching_items(m, pattern):
        if scalar_matches(value, kind):
            entries[key] = value
            continue
        report(
            reporter,
            DiagnosticCode.TYPE_MISMATCH,
            f"expected {kind.value} for map entry '{key}'",
            class_name=class_name,
            property_name=name,
            value=value,
        )
    return PropertyResult.set(field, entries)


def convert_nested_map(
    m: Mapping[str, Any],
    field: str,
    build: BuildFn,
    pattern: str | None,
    reporter: DiagnosticReporter,
) -> PropertyResult:
    """Build a nested instance for every input entry whose key matches `pattern`.

    Entries that fail to build are kept as None.
    """
    entries = {key: build(value, reporter) for key, value in _matching_items(m, pattern)}
    return PropertyResult.set(field, entries)


# -------------------------
# entry points
# -------------------------
def build_guarded(
    class_name: str,
    build: BuildFn,
    value: object,
    reporter: DiagnosticReporter | None,
) -> Message | None:
    """Run a top-level class build on a decoded value.

    Nested builds recurse on the input's depth. Input nested deeper than the
    interpreter stack allows is reported as `too_deep` and yields None.

    Args:
        class_name (str): Class being built.
        build (BuildFn): Class builder.
        value (object): Decoded JSON/YAML value.
        reporter (DiagnosticReporter | None): Diagnostics sink; the package logger when omitted.

    Returns:
        Message | None: A fresh instance, or None when the value does not conform.
    """
    reporter = resolve_reporter(reporter)
    try:
        return build(value, reporter)
    except RecursionError:
        # the repr of such a value can overflow as well
        value_type = describe_type(value)
        reporter.report(
            Diagnostic(
                code=DiagnosticCode.TOO_DEEP,
                class_name=class_name,
                message=f"input nesting exceeds the recursion limit (got {value_type})",
                value=value_type,
            ),
        )
        return None
