"""Logging setup for devpush.

Console records go through rich so they interleave cleanly with rsync's own
progress output; an optional log file receives the full DEBUG stream.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..config.settings import LoggingConfig

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    logging_config: Optional[LoggingConfig] = None, console: Optional[Console] = None
) -> logging.Logger:
    """Configure the ``devpush`` logger from a validated logging section.

    The console handler honours ``logging_config.level``. When a log file is
    configured the logger itself is opened up to DEBUG and the file handler
    records everything, independently of ``--quiet``.

    Args:
        logging_config: Level and optional file (defaults to ``LoggingConfig()``)
        console: Optional Rich console for output

    Returns:
        Configured logger instance
    """
    if logging_config is None:
        logging_config = LoggingConfig()
    console_level = logging.getLevelName(logging_config.level)
    log_file = Path(logging_config.file).expanduser() if logging_config.file else None

    logger = logging.getLogger("devpush")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if log_file else console_level)

    if console is None:
        console = Console(stderr=True)

    rich_handler = RichHandler(
        console=console, show_time=True, show_path=False, markup=False, rich_tracebacks=True
    )
    rich_handler.setLevel(console_level)
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
