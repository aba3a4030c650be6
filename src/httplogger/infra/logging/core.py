from __future__ import annotations

"""
Diagnostic Logging Bootstrap.

Idempotently attaches this package's handlers to the root logger. Output
handlers sit behind a QueueHandler/QueueListener pair so that writing the
trace file never blocks the thread performing a log delivery.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from httplogger.infra.logging.config import LEVEL_NAMES, LoggingConfig
from httplogger.infra.logging.handlers import (
    create_console_handler,
    create_rotating_file_handler,
    is_own_handler,
    tag_handler,
)

CONFIGURED_FLAG_ATTR: str = "_httplogger_configured"
QUEUE_LISTENER_ATTR: str = "_httplogger_queue_listener"


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install stderr/trace-file handlers on the root logger.

    Calling this again is a no-op unless `force` is set, in which case the
    previously installed handlers and listener are replaced.

    Args:
        cfg: Diagnostic logging settings.
        force: Re-install even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = parse_level(cfg.level)
    root.setLevel(level)
    reset_logging(root)

    outputs: List[logging.Handler] = []
    if cfg.console:
        outputs.append(create_console_handler(level, logging.Formatter(cfg.console_fmt)))
    if cfg.log_file:
        fh = create_rotating_file_handler(
            cfg.log_file,
            level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh is not None:
            outputs.append(fh)

    if not outputs:
        return root

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    listener = QueueListener(log_queue, *outputs, respect_handler_level=True)
    listener.start()

    root.addHandler(tag_handler(QueueHandler(log_queue)))
    setattr(root, QUEUE_LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_FLAG_ATTR, True)
    atexit.register(_stop_listener, listener)
    return root


def reset_logging(root: Optional[logging.Logger] = None) -> None:
    """Remove our handlers from the root logger and stop the queue listener."""
    root = root or logging.getLogger()
    listener = getattr(root, QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        setattr(root, QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if is_own_handler(handler):
            root.removeHandler(handler)
            handler.close()

    setattr(root, CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def parse_level(level: Optional[str]) -> int:
    """Level name to number; unknown or empty names mean INFO."""
    if not level:
        return logging.INFO
    return LEVEL_NAMES.get(str(level).strip().upper(), logging.INFO)


def _stop_listener(listener: QueueListener) -> None:
    # QueueListener.stop() fails if the listener thread is already gone.
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
