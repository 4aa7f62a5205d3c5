"""Logging for opskit: rich console output plus an optional log file."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# stdout carries command output (tables, ids); logs go to stderr
console = Console(stderr=True)

ROOT_LOGGER = "opskit"
LOG_DIR = Path.home() / ".local" / "state" / "opskit"
LOG_FILE = LOG_DIR / "opskit.log"
FALLBACK_LOG_FILE = Path("/tmp/opskit.log")
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

_file_handler: Optional[logging.FileHandler] = None


def _level(verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.INFO


def _writable_log_path(log_file: Optional[str]) -> Path:
    target = Path(log_file).expanduser() if log_file else LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return FALLBACK_LOG_FILE
    return target


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Mirror every ``opskit.*`` log record into a file.

    Only the first call attaches a handler; later calls return the path
    already in use. Secrets never reach the log, services log only the
    command names and request paths.
    """
    global _file_handler

    if _file_handler is not None:
        return Path(_file_handler.baseFilename)

    path = _writable_log_path(log_file)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(_level(verbose))
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(_level(verbose))
    _file_handler = handler

    root.debug(f"File logging to {path}")
    return path


def set_verbose(verbose: bool) -> None:
    """Switch every opskit logger between INFO and DEBUG."""
    level = _level(verbose)
    logging.getLogger(ROOT_LOGGER).setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(ROOT_LOGGER + ".") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` with a single rich stderr handler attached."""
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger
