#!/usr/bin/env python3
"""
Logging setup for DoubleCheck scripts.

Logs go to a rotating file under LOG_DIR (default ./logs) and, optionally,
to stderr. The library itself only ever logs through the logger it is given.

Usage:
    from doublecheck.logging_config import setup_logging

    logger = setup_logging(name="query", wiki_id="enwiki")
    client = WikiQueryClient(logger=logger)
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_dir(default: str = "./logs") -> Path:
    """Log directory from the LOG_DIR environment variable, else default."""
    return Path(os.environ.get("LOG_DIR", default))


def setup_logging(
    name: str,
    wiki_id: Optional[str] = None,
    log_dir: Optional[str] = None,
    level: int = logging.INFO,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
    console: bool = True,
) -> logging.Logger:
    """
    Configure a logger writing to {wiki_id}-{name}.log (or {name}.log).

    Args:
        name: Logger name, also used in the log filename
        wiki_id: Wiki key prefixed to the filename (e.g., "enwiki")
        log_dir: Directory for log files (default: get_log_dir())
        level: Logging level
        max_bytes: Max log file size before rotation
        backup_count: Number of rotated files kept
        console: Also log to stderr

    Returns:
        The configured logger. Calling again replaces its handlers.
    """
    log_path = Path(log_dir) if log_dir is not None else get_log_dir()
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / (f"{wiki_id}-{name}.log" if wiki_id else f"{name}.log")

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        # stderr, so JSON printed to stdout stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    logger.debug(f"Logging initialized: {log_file}")
    return logger
