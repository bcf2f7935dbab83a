# -*- coding: utf-8 -*-
"""
Logging for the wizard.

Everything logs under the "devwizard" logger: a rotating file gets all
records, the console gets LOG_CONSOLE_LEVEL and above. Single modules can
be quietened or made chatty from the environment, e.g.

    LOG_LEVELS="services.wizard.auto_save=DEBUG,services.draft_api_service=WARNING"
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional

LOGGER_NAME = "devwizard"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"

_logger: Optional[logging.Logger] = None


def parse_log_levels(value: str) -> Dict[str, int]:
    """
    Parse "module=LEVEL,module=LEVEL" into {module: level}.

    Module names are relative to the "devwizard" logger. Entries with an
    unknown level name are skipped.
    """
    levels = {}
    for entry in (value or "").split(","):
        module, sep, level_name = entry.partition("=")
        module = module.strip()
        level = logging.getLevelName(level_name.strip().upper())
        if sep and module and isinstance(level, int):
            levels[module] = level
    return levels


def setup_logger(
    console_level: Optional[str] = None,
    module_levels: Optional[Dict[str, int]] = None
) -> logging.Logger:
    """
    Configure the "devwizard" logger and per-module levels.

    Args:
        console_level: Level name for stdout (default: Config.LOG_CONSOLE_LEVEL)
        module_levels: {module: level} overrides (default: parsed Config.LOG_LEVELS)
    """
    global _logger

    # Import here to avoid circular imports
    from app.config import Config

    if console_level is None:
        console_level = Config.LOG_CONSOLE_LEVEL
    if module_levels is None:
        module_levels = parse_log_levels(Config.LOG_LEVELS)

    Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    file_handler = RotatingFileHandler(
        Config.LOG_PATH,
        maxBytes=Config.LOG_MAX_BYTES,
        backupCount=Config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level.upper())
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console_handler)

    for module, level in module_levels.items():
        root.getChild(module).setLevel(level)
        root.debug(f"Log level for {module}: {logging.getLevelName(level)}")

    _logger = root
    return root


def get_logger(name: str) -> logging.Logger:
    """Child of the "devwizard" logger for a module (pass __name__)."""
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger.getChild(name)
