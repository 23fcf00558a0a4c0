"""
Centralized logging configuration for almanac.

Provides debug logging to file for every clock operation.
Log file: <state dir>/almanac.log (with rotation)

Usage:
    from almanac.logging_config import setup_logging
    setup_logging(state_dir)  # Call once at startup

All almanac.* loggers will write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime


# Global configuration
LOG_FILE_NAME = "almanac.log"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB per file
BACKUP_COUNT = 3

_logging_initialized = False


def setup_logging(
    state_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for almanac.

    Args:
        state_dir: Directory the log file goes in
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    state_path = Path(state_dir)
    state_path.mkdir(parents=True, exist_ok=True)
    log_path = state_path / LOG_FILE_NAME

    root_logger = logging.getLogger("almanac")
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers (for re-initialization)
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-40s | %(funcName)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-30s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"Almanac logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_path.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_path


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_advance(
    logger: logging.Logger,
    minute: int,
    operation: str,
    details: str | None = None,
) -> None:
    """Log a committed clock operation."""
    details_str = f" | {details}" if details else ""
    logger.info(f"MINUTE {minute:09d} | {operation}{details_str}")


def log_phase(
    logger: logging.Logger,
    minute: int,
    phase_name: str,
    status: str,
    duration_ms: float | None = None,
) -> None:
    """Log rollover phase execution."""
    duration_str = f" | {duration_ms:.1f}ms" if duration_ms is not None else ""
    logger.debug(f"MINUTE {minute:09d} | PHASE | {phase_name} | {status}{duration_str}")


def log_event(
    logger: logging.Logger,
    minute: int,
    event_type: str,
    details: str | None = None,
) -> None:
    """Log a notification being published."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"MINUTE {minute:09d} | EVENT | {event_type}{details_str}")


def log_storage(
    logger: logging.Logger,
    operation: str,
    path: Path | str | None = None,
    success: bool = True,
    details: str | None = None,
) -> None:
    """Log storage operations (snapshots, event log)."""
    status = "OK" if success else "FAILED"
    path_str = f" | {path}" if path else ""
    details_str = f" | {details}" if details else ""
    logger.debug(f"STORAGE | {operation}{path_str} | {status}{details_str}")
