from __future__ import annotations

"""
HttpLogger Entry Point.

Ties configuration, record building, and transmission together behind the
single `log` call used by host applications. Construction is the only place
where misconfiguration raises; every log call is best-effort.
"""

import logging
import os
from typing import Any, Optional, Union

import requests

from httplogger.core.builder import Clock, LogRecordBuilder
from httplogger.core.transmitter import LogTransmitter
from httplogger.domain.config import LoggerConfig
from httplogger.domain.constants import (
    FAILED_LOG_FILE,
    SUCCESS_LOG_FILE,
    Mode,
    Platform,
    Severity,
)
from httplogger.domain.errors import ConfigurationError
from httplogger.domain.models import ErrorDescriptor, TransmissionOutcome, as_log_input
from httplogger.infra.fs import get_default_log_dir, normalize_path, safe_mkdir

logger = logging.getLogger(__name__)


class HttpLogger:
    """
    Forwards messages and exceptions to a remote HTTP endpoint.

    Args:
        app_id: Optional application ID sent as the 'app-id' header.
        secret_key: Optional secret sent as the 'x-secret-key' header.
        log_to_file: Append a block per call to success_log.txt/failed_log.txt.
        log_dir: Directory for those files. Defaults to <user data dir>/logs.
        config: Configuration to use. A fresh default LoggerConfig otherwise.
        session: Optional requests.Session for connection reuse.
        clock: Timestamp source, mainly for tests.

    Raises:
        ConfigurationError: If the log directory cannot be created.

    Credentials are kept only when both are non-empty.
    """

    def __init__(
            self,
            app_id: Optional[str] = None,
            secret_key: Optional[str] = None,
            log_to_file: bool = False,
            log_dir: Optional[str] = None,
            config: Optional[LoggerConfig] = None,
            session: Optional[requests.Session] = None,
            clock: Optional[Clock] = None,
    ) -> None:
        self.config = config if config is not None else LoggerConfig()

        if app_id and secret_key:
            self.app_id: Optional[str] = app_id
            self.secret_key: Optional[str] = secret_key
        else:
            if app_id or secret_key:
                logger.warning("Partial API credentials supplied; sending logs without credentials.")
            self.app_id = None
            self.secret_key = None

        self.log_dir: Optional[str] = None
        success_path: Optional[str] = None
        failed_path: Optional[str] = None
        if log_to_file:
            self.log_dir = normalize_path(log_dir, get_default_log_dir())
            ok, err = safe_mkdir(self.log_dir)
            if not ok:
                raise ConfigurationError(f"Failed to create log directory: {self.log_dir} ({err})")
            success_path = os.path.join(self.log_dir, SUCCESS_LOG_FILE)
            failed_path = os.path.join(self.log_dir, FAILED_LOG_FILE)

        self._builder = LogRecordBuilder(clock=clock)
        self._transmitter = LogTransmitter(success_path, failed_path, session=session)

    def __repr__(self) -> str:
        return (
            f"HttpLogger(endpoint={self.config.endpoint!r}, "
            f"credentials={'yes' if self.app_id else 'no'}, log_dir={self.log_dir!r})"
        )

    # --- Paths ---

    @property
    def success_log_path(self) -> Optional[str]:
        return self._transmitter.success_log_path

    @property
    def failed_log_path(self) -> Optional[str]:
        return self._transmitter.failed_log_path

    # --- Configuration passthrough ---

    def set_endpoint(self, url: str) -> None:
        self.config.set_endpoint(url)

    def set_mode(self, mode: Union[Mode, str]) -> None:
        self.config.set_mode(mode)

    def set_platform(self, platform: Union[Platform, str]) -> None:
        self.config.set_platform(platform)

    # --- Logging ---

    def log(self, value: Any, level: Union[Severity, str] = Severity.INFO) -> TransmissionOutcome:
        """
        Build a record from `value`, send it, and record the outcome.

        Args:
            value: A message, any JSON-able data, an exception, or one of the
                   explicit input variants (Message, ErrorDescriptor,
                   ExceptionInfo).
            level: Severity. Unknown names fall back to 'info'.

        Returns:
            TransmissionOutcome: Whether the server accepted the record.
        """
        severity = Severity.coerce(level)
        if not isinstance(level, Severity) and severity.value != str(level).strip().lower():
            logger.debug(f"Unknown log level {level!r}; using '{severity.value}'.")

        snapshot = self.config.snapshot()
        record = self._builder.build(
            as_log_input(value),
            severity,
            snapshot,
            app_id=self.app_id,
            secret_key=self.secret_key,
        )
        return self._transmitter.send(record, snapshot)

    def log_error(self, code: int, message: str, file: str, line: int) -> TransmissionOutcome:
        """Log a structured runtime error; severity follows the error code."""
        return self.log(ErrorDescriptor(code=code, message=message, file=file, line=line))

    def info(self, value: Any) -> TransmissionOutcome:
        return self.log(value, Severity.INFO)

    def warning(self, value: Any) -> TransmissionOutcome:
        return self.log(value, Severity.WARNING)

    def error(self, value: Any) -> TransmissionOutcome:
        return self.log(value, Severity.ERROR)

    def critical(self, value: Any) -> TransmissionOutcome:
        return self.log(value, Severity.CRITICAL)

    def exception(self, value: Any) -> TransmissionOutcome:
        return self.log(value, Severity.EXCEPTION)
