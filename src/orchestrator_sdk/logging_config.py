"""
Centralized logging configuration for the Orchestrator SDK.
"""

import logging
import sys

_LOGGING_CONFIGURED = False

SDK_LOGGERS = [
    'orchestrator_sdk',
    'orchestrator_sdk.tx',
    'orchestrator_sdk.tx.client',
    'orchestrator_sdk.tx.dispatcher',
    'orchestrator_sdk.tx.fee',
    'orchestrator_sdk.governance',
    'orchestrator_sdk.wallet',
    'orchestrator_sdk.wallet.events',
    'orchestrator_sdk.wallet.extension',
    'orchestrator_sdk.wallet.ledger',
    'orchestrator_sdk.wallet.local',
]


class ThreeCharLevelFormatter(logging.Formatter):
    """Formatter that uses 3-character log level names with optional colors."""

    LEVEL_MAPPING = {
        'DEBUG': 'DBG',
        'INFO': 'INF',
        'WARNING': 'WRN',
        'ERROR': 'ERR',
        'CRITICAL': 'CRT',
    }

    COLORS = {
        'DBG': '\033[36m',
        'INF': '\033[32m',
        'WRN': '\033[33m',
        'ERR': '\033[31m',
        'CRT': '\033[35m',
        'RESET': '\033[0m',
    }

    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        levelname = self.LEVEL_MAPPING.get(record.levelname, record.levelname[:3])

        if self.use_color:
            color = self.COLORS.get(levelname, '')
            reset = self.COLORS['RESET']
            record.levelname = f"{color}{levelname}{reset}"
        else:
            record.levelname = levelname

        return super().format(record)


def setup_sdk_logging(debug: bool = False, force: bool = False, use_color: bool = True):
    """
    Configure logging for the Orchestrator SDK.

    Args:
        debug: If True, set DEBUG level, otherwise INFO level
        force: If True, reconfigure even if already configured
        use_color: If True, use colored output (auto-disabled for non-TTY)
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED and not force:
        return

    sdk_level = logging.DEBUG if debug else logging.INFO

    formatter = ThreeCharLevelFormatter(
        fmt='%(asctime)s %(levelname)s %(name)s %(message)s',
        use_color=use_color,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # Root stays at WARNING so httpx/cosmpy debug output is suppressed
    logging.basicConfig(
        level=logging.WARNING,
        handlers=[handler],
        force=True,
    )

    for logger_name in SDK_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(sdk_level)
        logger.propagate = True

    _LOGGING_CONFIGURED = True


def is_configured() -> bool:
    """Check if SDK logging has been configured."""
    return _LOGGING_CONFIGURED
