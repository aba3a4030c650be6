from __future__ import annotations

"""
Log Record Builder.

Normalizes any of the three input variants plus a severity into the flat
LogRecord sent to the server. Building never fails: values that cannot be
fully serialized degrade to placeholder text.
"""

import json
import logging
import math
from datetime import datetime
from typing import Any, Callable, Optional, Set

from httplogger.domain.config import ConfigSnapshot
from httplogger.domain.constants import (
    ERROR_CODE_SEVERITY,
    TIMESTAMP_FORMAT,
    TYPE_NAME_MAP,
    RecordType,
    Severity,
)
from httplogger.domain.models import (
    ErrorDescriptor,
    ExceptionInfo,
    LogInput,
    LogRecord,
    Message,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_CIRCULAR = "<circular>"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class LogRecordBuilder:
    """
    Turns log inputs into LogRecords.

    Args:
        clock: Source of the record timestamp. Defaults to datetime.now.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or datetime.now

    def build(
            self,
            value: LogInput,
            level: Severity,
            config: ConfigSnapshot,
            app_id: Optional[str] = None,
            secret_key: Optional[str] = None,
    ) -> LogRecord:
        """
        Build the record for one log call.

        Args:
            value: Message, ErrorDescriptor, or ExceptionInfo.
            level: Requested severity. Ignored for ErrorDescriptor, whose
                   severity comes from its error code.
            config: Configuration snapshot supplying platform and environment.
            app_id: Application ID of the owning logger.
            secret_key: Secret key of the owning logger.

        Returns:
            LogRecord: The normalized record.
        """
        if isinstance(value, ErrorDescriptor):
            level = severity_for_error_code(value.code)
            message = str(value.message)
            stack = f"{value.file} on line {value.line}"
            type_name = RecordType.OTHER.value
        elif isinstance(value, ExceptionInfo):
            message = f"{value.message} in {value.file}:{value.line}"
            stack = value.trace
            type_name = value.type_name
        else:
            raw = value.value if isinstance(value, Message) else value
            message = stringify(raw)
            stack = ""
            type_name = RecordType.OTHER.value

        if not (app_id and secret_key):
            app_id, secret_key = None, None

        return LogRecord(
            level=level.value,
            type=normalize_type(type_name),
            message=message,
            stack=stack,
            platform=config.platform.value,
            environment=config.environment,
            timestamp=self._clock().strftime(TIMESTAMP_FORMAT),
            app_id=app_id,
            secret_key=secret_key,
        )


def severity_for_error_code(code: Any) -> Severity:
    """Map a numeric error-type code to a severity; unknown codes are EXCEPTION."""
    try:
        return ERROR_CODE_SEVERITY.get(int(code), Severity.EXCEPTION)
    except (TypeError, ValueError):
        return Severity.EXCEPTION


def normalize_type(name: Any) -> str:
    """
    Classify a class name or tag into one of the four record types.

    Case-insensitive; anything unrecognized is a customError.
    """
    key = str(name).strip().lower() if name is not None else ""
    return TYPE_NAME_MAP.get(key, RecordType.CUSTOM_ERROR).value


def stringify(value: Any) -> str:
    """String form of scalars; best-effort JSON for everything else."""
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return safe_json(value)


def safe_json(value: Any) -> str:
    """
    Serialize arbitrary data to JSON without ever raising.

    Unserializable leaves become their repr, cycles become '<circular>'.
    If even that fails, a '<unserializable TypeName>' placeholder is returned.
    """
    try:
        return json.dumps(_to_jsonable(value, set()), ensure_ascii=False, sort_keys=False)
    except Exception as e:
        logger.debug(f"JSON serialization degraded to placeholder: {e}")
        return f"<unserializable {type(value).__name__}>"


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_jsonable(value: Any, seen: Set[int]) -> Any:
    """Recursively convert a value into JSON-compatible primitives."""
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        # NaN and infinities are not valid JSON.
        return value if math.isfinite(value) else repr(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")

    marker = id(value)
    if marker in seen:
        return _CIRCULAR

    if isinstance(value, dict):
        seen.add(marker)
        try:
            return {_key(k): _to_jsonable(v, seen) for k, v in value.items()}
        finally:
            seen.discard(marker)

    if isinstance(value, (list, tuple, set, frozenset)):
        seen.add(marker)
        try:
            return [_to_jsonable(v, seen) for v in value]
        finally:
            seen.discard(marker)

    if hasattr(value, "__dict__") and not isinstance(value, type):
        seen.add(marker)
        try:
            return {_key(k): _to_jsonable(v, seen) for k, v in vars(value).items()}
        finally:
            seen.discard(marker)

    return _safe_repr(value)


def _key(key: Any) -> str:
    return key if isinstance(key, str) else _safe_repr(key)


def _safe_repr(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<unrepresentable {type(value).__name__}>"
