"""
Tests for the SDK log formatter and logging setup.
"""

import importlib
import io
import logging

import pytest

from orchestrator_sdk import logging_config
from orchestrator_sdk.logging_config import SDK_LOGGERS, ThreeCharLevelFormatter, is_configured, setup_sdk_logging


def make_record(level: int) -> logging.LogRecord:
    return logging.LogRecord("orchestrator_sdk.tx.dispatcher", level, __file__, 1, "proposal included", None, None)


class TestThreeCharLevelFormatter:
    def test_level_names(self):
        formatter = ThreeCharLevelFormatter("%(levelname)s %(name)s %(message)s", use_color=False)
        assert formatter.format(make_record(logging.WARNING)) == "WRN orchestrator_sdk.tx.dispatcher proposal included"
        assert formatter.format(make_record(logging.DEBUG)).startswith("DBG ")
        assert formatter.format(make_record(logging.CRITICAL)).startswith("CRT ")

    def test_no_color_without_tty(self, monkeypatch):
        monkeypatch.setattr(logging_config.sys, "stdout", io.StringIO())
        formatter = ThreeCharLevelFormatter("%(levelname)s", use_color=True)
        assert formatter.use_color is False
        assert formatter.format(make_record(logging.INFO)) == "INF"


class TestSetupSdkLogging:
    def test_idempotent_unless_forced(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_LOGGING_CONFIGURED", True)
        sdk_logger = logging.getLogger("orchestrator_sdk.wallet")
        monkeypatch.setattr(sdk_logger, "level", logging.ERROR)

        setup_sdk_logging(debug=True)

        assert is_configured()
        assert sdk_logger.level == logging.ERROR

    @pytest.mark.parametrize("module_name", [
        "orchestrator_sdk.tx.client",
        "orchestrator_sdk.tx.dispatcher",
        "orchestrator_sdk.tx.fee",
        "orchestrator_sdk.wallet.events",
        "orchestrator_sdk.wallet.extension",
        "orchestrator_sdk.wallet.ledger",
        "orchestrator_sdk.wallet.local",
    ])
    def test_every_module_logger_is_configured(self, module_name):
        module = importlib.import_module(module_name)
        assert module.logger.name == module_name
        assert module_name in SDK_LOGGERS
