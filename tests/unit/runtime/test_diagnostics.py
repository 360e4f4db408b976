from __future__ import annotations

from schemabuilder.runtime import diagnostics
from schemabuilder.runtime.diagnostics import (
    CollectingReporter,
    LoggingReporter,
    NullReporter,
    report,
    resolve_reporter,
)
from schemabuilder.typing.enums import DiagnosticCode


def test_report_builds_a_diagnostic() -> None:
    reporter = CollectingReporter()

    report(
        reporter,
        DiagnosticCode.NOT_A_MAPPING,
        "unexpected argument to build Pet",
        class_name="Pet",
        value=[1, 2],
        key_count=2,
    )

    assert len(reporter) == 1
    diagnostic = reporter.diagnostics[0]
    assert diagnostic.code is DiagnosticCode.NOT_A_MAPPING
    assert diagnostic.message == "unexpected argument to build Pet (got array)"
    assert diagnostic.value == "[1, 2]"
    assert diagnostic.key_count == 2
    assert diagnostic.property_name is None
    assert reporter.codes() == [DiagnosticCode.NOT_A_MAPPING]


def test_logging_reporter_writes_a_warning(mocker) -> None:
    logger = mocker.Mock()
    reporter = LoggingReporter(logger=logger)

    report(reporter, DiagnosticCode.UNEXPECTED_VALUE, "expected a string", class_name="Tags", value=42)

    logger.warning.assert_called_once_with(
        "expected a string (got int)",
        extra={"code": "unexpected_value", "class_name": "Tags", "value": "42"},
    )


def test_null_reporter_discards_diagnostics() -> None:
    report(NullReporter(), DiagnosticCode.TYPE_MISMATCH, "expected int", class_name="Pet", value="x")


def test_resolve_reporter_prefers_the_caller_reporter() -> None:
    reporter = CollectingReporter()

    assert resolve_reporter(reporter) is reporter


def test_resolve_reporter_defaults_to_a_shared_logging_reporter(monkeypatch) -> None:
    monkeypatch.setattr(diagnostics, "_default_reporter", None)

    first = resolve_reporter(None)
    second = resolve_reporter(None)

    assert isinstance(first, LoggingReporter)
    assert first is second
