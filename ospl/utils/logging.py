"""
Logging setup for ospl
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

import colorlog

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_console_handler: Optional[logging.Handler] = None


def setup_console_logging(level: str = "INFO", color: bool = True,
                          fmt: str = DEFAULT_FORMAT) -> logging.Handler:
    """
    Setup console logging with optional color support

    Args:
        level: Logging level
        color: Whether to use colored output (only on a terminal)
        fmt: Format used when output is not colored

    Returns:
        The installed handler
    """
    global _console_handler

    console_handler = logging.StreamHandler(sys.stderr)

    if color and sys.stderr.isatty():
        formatter = colorlog.ColoredFormatter(
            '%(log_color)s%(asctime)s - %(name)s - %(levelname)s%(reset)s - %(message)s',
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        formatter = logging.Formatter(fmt)

    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.addHandler(console_handler)
    _console_handler = console_handler
    return console_handler


def setup_file_logging(log_file: Union[str, Path], level: str = "DEBUG",
                       fmt: str = DEFAULT_FORMAT) -> logging.Handler:
    """Also write log records to ``log_file``."""
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(getattr(logging, level.upper()))
    file_handler.setFormatter(logging.Formatter(fmt))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def setup_logging(config: Dict[str, Any], level: Optional[str] = None) -> None:
    """Configure logging from the ``logging`` section of a config."""
    log_config = config.get('logging', {})
    level = level or log_config.get('level', 'INFO')
    fmt = log_config.get('format') or DEFAULT_FORMAT

    setup_console_logging(level, color=log_config.get('color', True), fmt=fmt)
    if log_config.get('file'):
        setup_file_logging(log_config['file'], fmt=fmt)
