from __future__ import annotations

from schemabuilder import logger as package_logger
from schemabuilder.logging import _truncate_long_values, configure_logging, get_logger
from schemabuilder.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_use_message_key(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO"), force=True)
    logger = get_logger("tests.json")
    logger.warning("unexpected argument to build Pet", extra={"class_name": "Pet"})

    captured = capsys.readouterr()
    assert '"message": "unexpected argument to build Pet"' in captured.err
    assert '"class_name": "Pet"' in captured.err


def test_long_values_are_truncated() -> None:
    event = _truncate_long_values(None, "info", {"message": "x", "value": "a" * 600})  # type: ignore[arg-type]

    assert event["message"] == "x"
    assert event["value"].startswith("a" * 512)
    assert event["value"].endswith("...(+88 chars)")


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
