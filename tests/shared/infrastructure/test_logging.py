"""
Tests for structlog configuration.
"""

import io
import json
import logging

import structlog

from verify_sonar.shared.infrastructure.config import Settings
from verify_sonar.shared.infrastructure.logging import configure_logging, get_logger


def teardown_function():
    structlog.reset_defaults()


def test_json_output_in_production():
    stream = io.StringIO()
    configure_logging(stream=stream, level="INFO", settings=Settings(_env_file=None, app_env="production"))

    get_logger("verify_sonar.test").info("bridge_resolved", port=64121)

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["event"] == "bridge_resolved"
    assert record["port"] == 64121
    assert record["level"] == "info"


def test_level_filters_debug():
    stream = io.StringIO()
    configure_logging(stream=stream, settings=Settings(_env_file=None, app_env="production", log_level="WARNING"))

    get_logger("verify_sonar.test").debug("bridge_status_failed", port=64120)

    assert stream.getvalue() == ""
    assert logging.getLogger().level == logging.WARNING
