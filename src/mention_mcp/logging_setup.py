"""Logging configuration"""

import logging
import os
import sys
from pathlib import Path

from .config import Config
from .consts import SERVER_NAME

LOGGER_NAME = "mention-mcp"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def default_log_dir(platform: str | None = None, home: Path | None = None) -> Path:
    """Platform-conventional directory for the server log file."""
    platform = platform or sys.platform
    home = home or Path.home()

    if platform == "darwin":
        return home / "Library" / "Logs" / SERVER_NAME
    if platform == "win32":
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else home / "AppData" / "Local"
        return base / SERVER_NAME / "logs"
    return home / ".local" / "share" / SERVER_NAME / "logs"


def setup_logging(config: Config) -> logging.Logger:
    """Configure the package logger.

    Records go to a log file; stdout is reserved for the MCP stdio
    transport, so console output (when enabled) goes to stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, config.log_level, logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    log_dir = config.log_dir or default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_dir / f"{SERVER_NAME}.log", encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if config.console_logging:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
