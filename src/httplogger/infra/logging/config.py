from __future__ import annotations

"""
Diagnostic Logging Configuration.

Settings for the package's own diagnostic output (stderr and an optional
rotating trace file). This is separate from the success/failure files the
HttpLogger writes for delivered records.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

LEVEL_NAMES: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Minimum level name to emit.
        console: Emit to stderr.
        log_file: Optional path of a rotating trace file.
        max_bytes: Size at which the trace file rolls over.
        backup_count: Number of rolled-over trace files to keep.
        console_fmt: Format string for stderr.
        file_fmt: Format string for the trace file.
        datefmt: Timestamp format for the trace file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
