from __future__ import annotations

"""
Log Domain Data Models.

Defines the three input variants accepted by the logger, the canonical
LogRecord sent to the server, and the TransmissionOutcome of one POST.
"""

import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# -----------------------------------------------------------------------------
# INPUT VARIANTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Message:
    """A plain scalar or arbitrary structured value."""
    value: Any


@dataclass(frozen=True)
class ErrorDescriptor:
    """
    A structured runtime error as reported by the host's error handler.

    Attributes:
        code: Numeric error-type code (see constants.ERROR_CODE_SEVERITY).
        message: Error description.
        file: Originating source file.
        line: Originating line number.
    """
    code: int
    message: str
    file: str
    line: int


@dataclass(frozen=True)
class ExceptionInfo:
    """
    Exception-like input, detached from the live exception object.

    Attributes:
        type_name: Run-time class name of the exception.
        message: Exception message.
        file: File where the exception was raised.
        line: Line where the exception was raised.
        trace: Formatted stack trace text.
    """
    type_name: str
    message: str
    file: str
    line: int
    trace: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionInfo":
        """
        Extract origin and trace from a live exception.

        The origin is the innermost traceback frame. Exceptions that were
        never raised carry no traceback and report '<unknown>' on line 0.
        """
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        if frames:
            origin = frames[-1]
            file, line = origin.filename, origin.lineno or 0
        else:
            file, line = "<unknown>", 0

        trace = "".join(traceback.format_tb(exc.__traceback__)) if frames else ""
        return cls(
            type_name=type(exc).__name__,
            message=_exception_text(exc),
            file=file,
            line=line,
            trace=trace.rstrip("\n"),
        )


LogInput = Union[Message, ErrorDescriptor, ExceptionInfo]


def as_log_input(value: Any) -> LogInput:
    """Wrap an arbitrary value into one of the three input variants."""
    if isinstance(value, (Message, ErrorDescriptor, ExceptionInfo)):
        return value
    if isinstance(value, BaseException):
        return ExceptionInfo.from_exception(value)
    return Message(value)

# -----------------------------------------------------------------------------
# RECORD & OUTCOME
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogRecord:
    """
    Canonical flat record built once per log call.

    Attributes:
        level: Severity name.
        type: One of typeError, syntaxError, customError, other.
        message: Human-readable description.
        stack: Stack trace text; empty when not applicable.
        platform: 'web' or 'mobile'.
        environment: 'development' or 'production'.
        timestamp: Creation time as YYYY-MM-DD HH:MM:SS.
        app_id: Application ID, or None.
        secret_key: Secret key, or None.
    """
    level: str
    type: str
    message: str
    stack: str
    platform: str
    environment: str
    timestamp: str
    app_id: Optional[str] = None
    secret_key: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.app_id) and bool(self.secret_key)

    def to_payload(self) -> Dict[str, str]:
        """JSON body of the outbound request. Credentials travel as headers."""
        return {
            "level": self.level,
            "type": self.type,
            "message": self.message,
            "stack": self.stack,
            "platform": self.platform,
            "environment": self.environment,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class TransmissionOutcome:
    """
    Result of a single POST attempt.

    Attributes:
        ok: True iff there was no transport error and status < 400.
        status_code: HTTP status, or None when no response arrived.
        response_body: Raw response text, or None when no response arrived.
        error: Transport error text, or None.
    """
    ok: bool
    status_code: Optional[int] = None
    response_body: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "TransmissionOutcome":
        return cls(ok=status_code < 400, status_code=status_code, response_body=body)

    @classmethod
    def from_error(cls, error: str) -> "TransmissionOutcome":
        return cls(ok=False, error=error or "Unknown transport error")


def _exception_text(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"
