"""
Tests for the logging setup.

Tests:
- JSON formatter fields
- Root logger configuration and quieted libraries
"""

import json
import logging

import pytest

from app.core.logging_config import CustomJsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test runner configured it"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    engine_level = logging.getLogger("sqlalchemy.engine").level

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(engine_level)


def make_record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord(
        name="app.crud.company", level=level, pathname="app/crud/company.py",
        lineno=42, msg=msg, args=(), exc_info=None, func="update",
    )


class TestJsonFormatter:
    """Tests for CustomJsonFormatter"""

    def test_standard_fields(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(module)s %(funcName)s %(message)s')
        payload = json.loads(formatter.format(make_record(logging.INFO, "Updated company c1")))

        assert payload["message"] == "Updated company c1"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.crud.company"
        assert payload["function"] == "update"
        assert payload["timestamp"].endswith("+00:00")
        assert "line" not in payload

    def test_warnings_carry_location(self):
        formatter = CustomJsonFormatter('%(message)s')
        payload = json.loads(formatter.format(make_record(logging.WARNING, "No company: nope")))

        assert payload["line"] == 42
        assert payload["pathname"] == "app/crud/company.py"


class TestSetupLogging:
    """Tests for setup_logging"""

    def test_json_handler_installed(self, restore_root_logger):
        setup_logging(log_level="debug", json_logs=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, CustomJsonFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_plain_handler_for_development(self, restore_root_logger):
        setup_logging(log_level="INFO", json_logs=False)

        formatter = restore_root_logger.handlers[0].formatter
        assert not isinstance(formatter, CustomJsonFormatter)
        assert restore_root_logger.level == logging.INFO
