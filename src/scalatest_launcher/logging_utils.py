"""Logging setup shared by the CLI and the launcher."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_configured = False
_file_handler: Optional[logging.Handler] = None


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> None:
    """Install a rich console handler and, optionally, a file handler on the root logger.

    Args:
        level: Log level name
        log_file: Also write log records to this file when given
        console: Console the rich handler writes to (defaults to stderr)
    """
    global _configured, _file_handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
        _configured = True

    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = logging.FileHandler(log_file, encoding="utf-8")
        _file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(_file_handler)
