from __future__ import annotations

from pydantic import Field

from schemabuilder.runtime import conversions
from schemabuilder.runtime.diagnostics import CollectingReporter
from schemabuilder.runtime.messages import BlobMessage, Message, StringArrayMessage
from schemabuilder.typing.enums import DiagnosticCode, ResultStatus, ScalarKind
from schemabuilder.typing.models import PropertyResult


class _Tags(StringArrayMessage):
    schema_class = "Tags"


class _Raw(BlobMessage):
    schema_class = "Raw"


class _Owner(Message):
    schema_class = "Owner"

    name: str = Field(default="", serialization_alias="name")
    age: int = Field(default=0, serialization_alias="age")


def _build_owner(value: object, reporter=None) -> _Owner | None:
    m = conversions.unpack_object("Owner", value, reporter)
    if m is None or not conversions.check_keys(m, ["name"], ["age", "name"]):
        return None
    return conversions.build_object(
        _Owner,
        [
            conversions.convert_scalar("Owner", m, "age", "age", ScalarKind.INT, reporter),
            conversions.convert_scalar("Owner", m, "name", "name", ScalarKind.STRING, reporter),
        ],
    )


def test_build_string_array_lifts_a_bare_string() -> None:
    reporter = CollectingReporter()

    tags = conversions.build_string_array("Tags", _Tags, "hello", reporter)

    assert tags == _Tags(value=["hello"])
    assert len(reporter) == 0


def test_build_string_array_rejects_other_values() -> None:
    reporter = CollectingReporter()

    assert conversions.build_string_array("Tags", _Tags, 42, reporter) is None
    assert conversions.build_string_array("Tags", _Tags, ["a"], reporter) is None
    assert reporter.codes() == [DiagnosticCode.UNEXPECTED_VALUE, DiagnosticCode.UNEXPECTED_VALUE]


def test_build_blob_stores_the_textual_rendering() -> None:
    assert conversions.build_blob(_Raw, {"a": 1}).value == "{'a': 1}"
    assert conversions.build_blob(_Raw, None).value == "None"
    assert conversions.build_blob(_Raw, "text").value == "text"


def test_unpack_object_reports_the_key_count() -> None:
    reporter = CollectingReporter()

    assert conversions.unpack_object("Owner", [1, 2, 3], reporter) is None
    assert conversions.unpack_object("Owner", "abc", reporter) is None

    assert [diagnostic.key_count for diagnostic in reporter.diagnostics] == [3, 0]
    assert reporter.codes() == [DiagnosticCode.NOT_A_MAPPING, DiagnosticCode.NOT_A_MAPPING]


def test_check_keys() -> None:
    assert conversions.check_keys({"name": "a"}, ["name"], ["name", "age"])
    assert not conversions.check_keys({"age": 1}, ["name"], ["name", "age"])
    assert not conversions.check_keys({"name": "a", "x": 1}, ["name"], ["name", "age"])
    assert conversions.check_keys({"name": "a", "x": 1}, ["name"], None)
    assert conversions.check_keys({}, [], None)


def test_collect_fields_keeps_set_results_only() -> None:
    results = [
        PropertyResult.set("a", 1),
        PropertyResult.absent("b"),
        PropertyResult.rejected("c"),
        PropertyResult.set("d", None),
    ]

    assert conversions.collect_fields(results) == {"a": 1, "d": None}


def test_convert_scalar_outcomes() -> None:
    reporter = CollectingReporter()
    m = {"name": 42, "age": 7}

    assert conversions.convert_scalar("Owner", m, "age", "age", ScalarKind.INT, reporter) == PropertyResult.set(
        "age",
        7,
    )
    assert conversions.convert_scalar("Owner", m, "nick", "nick", ScalarKind.STRING, reporter).status is (
        ResultStatus.ABSENT
    )
    rejected = conversions.convert_scalar("Owner", m, "name", "name", ScalarKind.STRING, reporter)

    assert rejected.status is ResultStatus.REJECTED
    assert reporter.codes() == [DiagnosticCode.TYPE_MISMATCH]
    assert reporter.diagnostics[0].property_name == "name"
    assert reporter.diagnostics[0].message == "expected string for 'name' (got int)"


def test_convert_scalar_sequence() -> None:
    reporter = CollectingReporter()
    m = {"scores": [1, "2", True, 3], "names": ["a", 1], "bad": "x"}

    scores = conversions.convert_scalar_sequence("Pet", m, "scores", "scores", ScalarKind.INT, reporter)
    names = conversions.convert_scalar_sequence("Pet", m, "names", "names", ScalarKind.STRING, reporter)
    bad = conversions.convert_scalar_sequence("Pet", m, "bad", "bad", ScalarKind.STRING, reporter)

    assert scores.value == [1, 3]
    assert names.value == ["a"]
    assert bad.status is ResultStatus.REJECTED
    assert reporter.codes() == [DiagnosticCode.EXPECTED_SEQUENCE]


def test_convert_nested_leaves_failed_builds_unset() -> None:
    reporter = CollectingReporter()
    m = {"good": {"name": "Ada"}, "bad": {"age": 3}}

    good = conversions.convert_nested(m, "good", "good", _build_owner, reporter)
    bad = conversions.convert_nested(m, "bad", "bad", _build_owner, reporter)
    missing = conversions.convert_nested(m, "none", "none", _build_owner, reporter)

    assert good.value == _Owner(name="Ada")
    assert bad.status is ResultStatus.REJECTED
    assert missing.status is ResultStatus.ABSENT


def test_convert_nested_sequence_keeps_a_slot_per_element() -> None:
    reporter = CollectingReporter()
    m = {"owners": [{"name": "a"}, {"age": 1}, {"name": "c"}]}

    result = conversions.convert_nested_sequence(m, "owners", "owners", _build_owner, reporter)

    assert result.value == [_Owner(name="a"), None, _Owner(name="c")]


def test_convert_nested_sequence_rejects_non_arrays_silently() -> None:
    reporter = CollectingReporter()

    m = {"owners": {"name": "a"}}

    result = conversions.convert_nested_sequence(m, "owners", "owners", _build_owner, reporter)

    assert result.status is ResultStatus.REJECTED
    assert reporter.codes() == []


def test_resolve_one_of_first_match_wins() -> None:
    reporter = CollectingReporter()
    calls: list[str] = []

    def _tracking(name: str):
        def build(value: object, trial=None) -> _Owner | None:
            calls.append(name)
            return _build_owner(value, trial)

        return build

    result = conversions.resolve_one_of(
        {"name": "Ada"},
        [("a", "Owner", _tracking("a")), ("b", "Owner", _tracking("b"))],
        reporter,
    )

    assert result.field == conversions.ONE_OF_FIELD
    assert result.value.name == "a"
    assert result.value.value == _Owner(name="Ada")
    assert calls == ["a"]


def test_resolve_one_of_discards_losing_diagnostics() -> None:
    reporter = CollectingReporter()

    def _tags(value: object, trial=None) -> _Tags | None:
        return conversions.build_string_array("Tags", _Tags, value, trial)

    result = conversions.resolve_one_of(
        {"name": "Ada", "age": "old"},
        [("tags", "Tags", _tags), ("owner", "Owner", _build_owner)],
        reporter,
    )

    assert result.value.name == "owner"
    assert result.value.value == _Owner(name="Ada")
    # Only the winner's type mismatch on 'age' is forwarded.
    assert reporter.codes() == [DiagnosticCode.TYPE_MISMATCH]


def test_resolve_one_of_without_match_is_absent() -> None:
    result = conversions.resolve_one_of({"x": 1}, [("owner", "Owner", _build_owner)], CollectingReporter())

    assert result.status is ResultStatus.ABSENT


def test_convert_scalar_map_filters_keys_and_values() -> None:
    reporter = CollectingReporter()
    m = {"x-foo": "a", "bar": "b", "x-num": 1}

    result = conversions.convert_scalar_map("Pet", m, "ext", "ext", ScalarKind.STRING, "^x-", reporter)

    assert result.value == {"x-foo": "a"}
    assert reporter.codes() == [DiagnosticCode.TYPE_MISMATCH]


def test_convert_scalar_map_without_pattern_scans_every_key() -> None:
    m = {"a": 1, "b": 2}

    result = conversions.convert_scalar_map("Pet", m, "ext", "ext", ScalarKind.INT, None, CollectingReporter())

    assert result.value == {"a": 1, "b": 2}


def test_convert_nested_map_keeps_failed_entries_as_none() -> None:
    m = {"staff-1": {"name": "Ada"}, "staff-2": {"age": 2}, "boss": {"name": "Bob"}}

    result = conversions.convert_nested_map(m, "staff", _build_owner, "^staff-", CollectingReporter())

    assert result.value == {"staff-1": _Owner(name="Ada"), "staff-2": None}


def test_build_guarded_reports_stack_exhaustion() -> None:
    reporter = CollectingReporter()

    def _overflow(value: object, reporter=None) -> _Owner | None:
        raise RecursionError

    assert conversions.build_guarded("Owner", _overflow, {"name": "Ada"}, reporter) is None
    assert conversions.build_guarded("Owner", _build_owner, {"name": "Ada"}, reporter) == _Owner(name="Ada")
    assert reporter.codes() == [DiagnosticCode.TOO_DEEP]
    assert reporter.diagnostics[0].value == "map"
