"""
Unit tests for logging setup
"""

import logging

from core.logging import NOISY_LOGGERS, setup_logging


def test_setup_logging_uses_override_level():
    assert setup_logging("debug") == "DEBUG"


def test_setup_logging_quiets_driver_loggers():
    setup_logging()

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
