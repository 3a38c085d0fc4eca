"""Unit tests for logging setup."""

import json
import logging

import pytest
from loguru import logger

from user_api.api.http.controllers.user import UserController
from user_api.api.utils.app_startup import (
    configure_logging,
    get_logger,
    parse_log_level,
)
from user_api.entities.user import CreateUserRequest
from user_api.runtime.config.config_data import LoggingConfig


@pytest.fixture(autouse=True)
def reset_loguru():
    yield
    logger.remove()
    logging.basicConfig(handlers=[], force=True)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("debug", "DEBUG"),
        ("INFO", "INFO"),
        ("warn", "WARNING"),
        ("error", "ERROR"),
        ("fatal", "CRITICAL"),
        ("panic", "CRITICAL"),
        ("trace", "TRACE"),
        ("nonsense", "INFO"),
        ("", "INFO"),
    ],
)
def test_parse_log_level(name, expected):
    assert parse_log_level(name) == expected


def test_disabled_level():
    assert parse_log_level("disabled") is None


def test_json_format_serializes_records(capsys):
    configure_logging(LoggingConfig(level="info", format="json"))

    get_logger("tests").info("hello")

    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    record = json.loads(lines[-1])["record"]
    assert record["message"] == "hello"
    assert record["extra"]["component"] == "tests"


def test_level_filters_lower_records(capsys):
    configure_logging(LoggingConfig(level="warn", format="console"))

    logger.info("quiet")
    logger.warning("loud")

    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "loud" in out


def test_disabled_emits_nothing(capsys):
    configure_logging(LoggingConfig(level="disabled"))

    logger.error("nothing")

    assert capsys.readouterr().out == ""


def test_stdlib_logging_is_intercepted(capsys):
    configure_logging(LoggingConfig(level="info", format="json"))

    logging.getLogger("some.library").warning("from stdlib")

    out = capsys.readouterr().out
    assert "from stdlib" in out


def test_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    configure_logging(LoggingConfig(level="info", format="console", file=str(log_file)))

    logger.info("to file")
    logger.complete()
    logger.remove()

    assert "to file" in log_file.read_text()


def test_service_and_controller_log_under_their_components(capsys, user_service):
    configure_logging(LoggingConfig(level="info", format="json"))
    controller = UserController(user_service)
    request = CreateUserRequest(name="Alice", email="alice@example.com", age=30)

    assert controller.create_user(None, request).status_code == 200
    assert controller.create_user(None, request).status_code == 500

    records = [
        json.loads(line)["record"]
        for line in capsys.readouterr().out.splitlines()
        if line
    ]
    by_message = {r["message"]: r["extra"]["component"] for r in records}
    assert by_message["User created"] == "user_service"
    failures = [r for r in records if r["message"].startswith("Failed to create user")]
    assert failures
    assert failures[0]["extra"]["component"] == "user_controller"
    assert failures[0]["level"]["name"] == "ERROR"
