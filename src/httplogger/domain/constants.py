from __future__ import annotations

"""
Domain Constants and Enumerations.

Centralizes the severity levels, deployment modes, platform tags, and the
numeric error-code table used to classify structured runtime errors.
"""

from enum import Enum
from typing import Dict

VERSION = "1.2.0"

DEFAULT_ENDPOINT = "http://127.0.0.1:5000/errorhandler"
DEFAULT_TIMEOUT = 10.0

SUCCESS_LOG_FILE = "success_log.txt"
FAILED_LOG_FILE = "failed_log.txt"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NOT_APPLICABLE = "N/A"
NO_RESPONSE = "No response"
BLOCK_SEPARATOR = "-----------------------------------"


# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class Severity(str, Enum):
    """Ordinal classification of a log entry."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    EXCEPTION = "exception"

    @classmethod
    def coerce(cls, value: object) -> "Severity":
        """
        Resolve an enum member or a case-insensitive name to a Severity.

        Unknown values fall back to INFO instead of raising, since this runs
        on the logging path.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INFO


class Mode(str, Enum):
    """Deployment mode of the host application."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Platform(str, Enum):
    """Origin tag of a log entry."""
    WEB = "web"
    MOBILE = "mobile"


class RecordType(str, Enum):
    """Classification carried in the 'type' field of every record."""
    TYPE_ERROR = "typeError"
    SYNTAX_ERROR = "syntaxError"
    CUSTOM_ERROR = "customError"
    OTHER = "other"


# -----------------------------------------------------------------------------
# ERROR CODE TABLE
# -----------------------------------------------------------------------------

# Numeric error-type codes emitted by the host runtime's error reporter.
E_ERROR = 1
E_WARNING = 2
E_PARSE = 4
E_NOTICE = 8
E_CORE_ERROR = 16
E_CORE_WARNING = 32
E_COMPILE_ERROR = 64
E_COMPILE_WARNING = 128
E_USER_ERROR = 256
E_USER_WARNING = 512
E_USER_NOTICE = 1024
E_STRICT = 2048
E_RECOVERABLE_ERROR = 4096
E_DEPRECATED = 8192
E_USER_DEPRECATED = 16384

ERROR_CODE_SEVERITY: Dict[int, Severity] = {
    E_NOTICE: Severity.INFO,
    E_USER_NOTICE: Severity.INFO,
    E_STRICT: Severity.INFO,
    E_DEPRECATED: Severity.INFO,
    E_USER_DEPRECATED: Severity.INFO,

    E_WARNING: Severity.WARNING,
    E_CORE_WARNING: Severity.WARNING,
    E_COMPILE_WARNING: Severity.WARNING,
    E_USER_WARNING: Severity.WARNING,

    E_RECOVERABLE_ERROR: Severity.ERROR,

    E_ERROR: Severity.CRITICAL,
    E_PARSE: Severity.CRITICAL,
    E_CORE_ERROR: Severity.CRITICAL,
    E_COMPILE_ERROR: Severity.CRITICAL,
    E_USER_ERROR: Severity.CRITICAL,
}

# Lowercased class names with a dedicated record type. Anything missing maps
# to CUSTOM_ERROR.
TYPE_NAME_MAP: Dict[str, RecordType] = {
    "typeerror": RecordType.TYPE_ERROR,
    "parseerror": RecordType.SYNTAX_ERROR,
    "syntaxerror": RecordType.SYNTAX_ERROR,
    "other": RecordType.OTHER,
}
