from __future__ import annotations

"""
httplogger: forward application errors and messages to a remote HTTP
collector, with optional local success/failure records.

Typical use:

    from httplogger import HttpLogger

    http_logger = HttpLogger(app_id="app", secret_key="secret", log_to_file=True)
    http_logger.set_endpoint("https://collector.example.com/errors")
    try:
        ...
    except Exception as exc:
        http_logger.exception(exc)
"""

from httplogger.core.builder import LogRecordBuilder, normalize_type, safe_json
from httplogger.core.handler import HttpLogHandler
from httplogger.core.logger import HttpLogger
from httplogger.core.transmitter import LogTransmitter
from httplogger.domain.config import LoggerConfig, load_config
from httplogger.domain.constants import VERSION, Mode, Platform, RecordType, Severity
from httplogger.domain.errors import ConfigurationError, HttpLoggerError
from httplogger.domain.models import (
    ErrorDescriptor,
    ExceptionInfo,
    LogRecord,
    Message,
    TransmissionOutcome,
)

__version__ = VERSION

__all__ = [
    "HttpLogger",
    "HttpLogHandler",
    "LoggerConfig",
    "load_config",
    "LogRecordBuilder",
    "LogTransmitter",
    "LogRecord",
    "TransmissionOutcome",
    "Message",
    "ErrorDescriptor",
    "ExceptionInfo",
    "Severity",
    "Mode",
    "Platform",
    "RecordType",
    "ConfigurationError",
    "HttpLoggerError",
    "normalize_type",
    "safe_json",
    "__version__",
]
