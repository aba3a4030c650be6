from __future__ import annotations

"""
Standard-library logging bridge.

Lets an application attach an HttpLogger to any `logging` logger so that
ordinary `logger.error(...)` / `logger.exception(...)` calls are forwarded
to the remote endpoint.
"""

import dataclasses
import logging
import threading

from httplogger.core.logger import HttpLogger
from httplogger.domain.constants import Severity
from httplogger.domain.models import ExceptionInfo

# Records from these loggers (and their children) are never forwarded:
# delivering a record makes the HTTP stack log on its own.
_IGNORED_LOGGERS = ("httplogger", "urllib3", "requests")


def severity_for_levelno(levelno: int) -> Severity:
    """Map a stdlib logging level number onto a Severity."""
    if levelno >= logging.CRITICAL:
        return Severity.CRITICAL
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARNING
    return Severity.INFO


def is_ignored_logger(name: str) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in _IGNORED_LOGGERS)


class HttpLogHandler(logging.Handler):
    """
    logging.Handler that delivers records through an HttpLogger.

    Records carrying exc_info are sent as exceptions whose message is the
    record's message followed by the exception text. The handler's
    formatter, if any, is applied to plain messages only.

    Records emitted on a thread while that thread is already delivering a
    record are dropped, whatever logger they come from.
    """

    def __init__(self, http_logger: HttpLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.http_logger = http_logger
        self._local = threading.local()

    def emit(self, record: logging.LogRecord) -> None:
        if is_ignored_logger(record.name) or getattr(self._local, "delivering", False):
            return
        self._local.delivering = True
        try:
            severity = severity_for_levelno(record.levelno)
            exc = record.exc_info[1] if record.exc_info else None
            if exc is not None:
                self.http_logger.log(self._exception_info(record, exc), severity)
            else:
                self.http_logger.log(self.format(record), severity)
        except Exception:
            self.handleError(record)
        finally:
            self._local.delivering = False

    @staticmethod
    def _exception_info(record: logging.LogRecord, exc: BaseException) -> ExceptionInfo:
        info = ExceptionInfo.from_exception(exc)
        text = record.getMessage()
        if not text:
            return info
        message = f"{text}: {info.message}" if info.message else text
        return dataclasses.replace(info, message=message)
