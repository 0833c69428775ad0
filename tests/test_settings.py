"""
Tests for settings and logging.
"""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from apivalidation import generate_schema, get_settings, normalize, settings_context, validate
from apivalidation.log import configure_logging, get_logger
from structstest import Customer, Step


class TestSettings:
    def test_defaults(self):
        settings = get_settings()
        assert settings.max_depth is None
        assert settings.strict_decode is False
        assert dict(settings.default_context) == {}

    def test_override_is_scoped(self):
        with settings_context(max_depth=5) as settings:
            assert settings.max_depth == 5
            assert get_settings().max_depth == 5
            with settings_context(strict_decode=True):
                assert get_settings().max_depth == 5
                assert get_settings().strict_decode
        assert get_settings().max_depth is None


class TestLogging:
    def test_validation_failure_logged(self):
        with capture_logs() as logs:
            validate(Customer())
        events = [e for e in logs if e["event"] == "validation.failed"]
        assert len(events) == 1
        assert events[0]["value_type"] == "Customer"

    def test_success_not_logged(self):
        with capture_logs() as logs:
            validate(Customer(name="Ann", email="a@b.co"))
        assert not [e for e in logs if e["event"] == "validation.failed"]

    def test_schema_and_normalize_events(self):
        with capture_logs() as logs:
            generate_schema(Customer)
            normalize(Step(label="x"))
        names = {e["event"] for e in logs}
        assert {"schema.generated", "normalize.visit"} <= names
        Step.trail.clear()


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    def test_json_lines(self, capsys):
        configure_logging(level="info", json_logs=True)
        get_logger("apivalidation.tests").info("checked", count=2)
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "checked"
        assert record["count"] == 2
        assert record["level"] == "info"
        assert record["logger"] == "apivalidation.tests"
        assert logging.getLogger().level == logging.INFO

    def test_console(self, capsys):
        configure_logging(level="warning")
        logger = get_logger("apivalidation.tests")
        logger.info("hidden")
        logger.warning("shown", field="name")
        out = capsys.readouterr().out
        assert "shown" in out
        assert "field=name" in out
        assert "hidden" not in out
