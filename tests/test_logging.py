import logging

import pytest
from conftest import configure_quiet_structlog

from clouding.logging import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    levels = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    root_level = root.level
    yield
    root.setLevel(root_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    configure_quiet_structlog()


def test_level_name_is_case_insensitive(restore_logging):
    configure_logging("debug", json=False)
    assert logging.getLogger().level == logging.DEBUG


def test_http_library_loggers_stay_at_warning(restore_logging):
    configure_logging(logging.DEBUG)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_http_library_loggers_follow_stricter_level(restore_logging):
    configure_logging("ERROR")
    assert logging.getLogger("httpx").level == logging.ERROR
