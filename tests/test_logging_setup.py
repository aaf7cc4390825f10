import logging

import pytest

from finance_tracker.config import Settings
from finance_tracker.logging_setup import configure_logging, get_logger
from finance_tracker.main import create_app


@pytest.fixture
def pkg_logger():
    logger = logging.getLogger("finance_tracker")
    level = logger.level
    yield logger
    configure_logging(level)


def _stream_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]


def test_level_comes_from_environment(monkeypatch, pkg_logger):
    monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "debug")
    configure_logging()
    assert pkg_logger.level == logging.DEBUG


def test_explicit_level_beats_environment(monkeypatch, pkg_logger):
    monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "DEBUG")
    configure_logging("ERROR")
    assert pkg_logger.level == logging.ERROR


def test_reconfiguring_applies_new_level_to_the_one_handler(pkg_logger):
    configure_logging("DEBUG")
    configure_logging("WARNING")

    assert pkg_logger.level == logging.WARNING
    handlers = _stream_handlers(pkg_logger)
    assert len(handlers) == 1
    assert handlers[0].level == logging.WARNING


def test_create_app_reads_level_from_environment(monkeypatch, pkg_logger):
    monkeypatch.setenv("FINANCE_TRACKER_LOG_LEVEL", "WARNING")
    create_app(Settings(seed_data=False))
    assert pkg_logger.level == logging.WARNING
    assert get_logger("finance_tracker.store").getEffectiveLevel() == logging.WARNING
