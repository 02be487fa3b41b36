"""Tests for environment configuration and logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from config import AppConfig, load_config
from logging_setup import init_logging


def test_defaults():
    assert load_config({}) == AppConfig()


def test_values_from_environment():
    config = load_config({
        "ALGOVIZ_HOST": "0.0.0.0",
        "ALGOVIZ_PORT": "8080",
        "ALGOVIZ_DEBUG": "yes",
        "ALGOVIZ_DEFAULT_SPEED_MS": "250",
        "ALGOVIZ_TICK_INTERVAL_MS": "50",
        "ALGOVIZ_LOG_LEVEL": "debug",
        "ALGOVIZ_LOG_FILE": "logs/app.log",
    })
    assert config == AppConfig(
        host="0.0.0.0",
        port=8080,
        debug=True,
        default_speed_ms=250,
        tick_interval_ms=50,
        log_level="DEBUG",
        log_file="logs/app.log",
    )


def test_bad_values_fall_back(caplog):
    with caplog.at_level(logging.WARNING, logger="config"):
        config = load_config({
            "ALGOVIZ_PORT": "abc",
            "ALGOVIZ_DEBUG": "maybe",
            "ALGOVIZ_LOG_LEVEL": "LOUD",
        })
    assert config.port == 5000
    assert config.debug is False
    assert config.log_level == "INFO"
    assert len(caplog.records) == 3


def test_numbers_are_clamped():
    config = load_config({"ALGOVIZ_PORT": "70000", "ALGOVIZ_TICK_INTERVAL_MS": "1"})
    assert config.port == 65535
    assert config.tick_interval_ms == 10


def test_empty_log_file_means_none():
    assert load_config({"ALGOVIZ_LOG_FILE": ""}).log_file is None


def test_init_logging_is_idempotent(tmp_path):
    root = logging.getLogger()
    old_level = root.level
    log_file = tmp_path / "logs" / "algoviz.log"
    try:
        init_logging("DEBUG", str(log_file))
        count = len(root.handlers)
        init_logging("WARNING", str(log_file))

        assert len(root.handlers) == count
        assert root.level == logging.WARNING
        assert log_file.exists()
    finally:
        for handler in [h for h in root.handlers if isinstance(h, RotatingFileHandler)]:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(old_level)
