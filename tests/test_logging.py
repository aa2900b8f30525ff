import logging

import pytest

from linkcell import config as lc_config
from linkcell.logging import get_logger


def test_logger_respects_runtime_level(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LINKCELL_LOG_LEVEL", "DEBUG")
    lc_config.reset_runtime_config_cache()

    logger = get_logger("tests.logging")

    assert logger.level == logging.DEBUG
    assert logger.name == "linkcell.tests.logging"


def test_root_logger_configured_once():
    get_logger()
    lc_config.reset_runtime_config_cache()
    root = get_logger()

    assert root.name == "linkcell"
    assert len(root.handlers) == 1
