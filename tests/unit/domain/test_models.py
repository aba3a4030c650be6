from __future__ import annotations

"""
Unit tests for the log domain models and severity enum.
"""

import pytest

from httplogger.domain.constants import Severity
from httplogger.domain.models import (
    ErrorDescriptor,
    ExceptionInfo,
    LogRecord,
    Message,
    TransmissionOutcome,
    as_log_input,
)


def _raise_value_error() -> None:
    raise ValueError("bad value")


def test_as_log_input_wraps_plain_values() -> None:
    assert as_log_input("hello") == Message("hello")
    assert as_log_input({"a": 1}) == Message({"a": 1})


def test_as_log_input_passes_variants_through() -> None:
    descriptor = ErrorDescriptor(code=2, message="m", file="f.py", line=3)
    assert as_log_input(descriptor) is descriptor


def test_exception_info_from_raised_exception() -> None:
    try:
        _raise_value_error()
    except ValueError as exc:
        info = as_log_input(exc)

    assert isinstance(info, ExceptionInfo)
    assert info.type_name == "ValueError"
    assert info.message == "bad value"
    assert info.file.endswith("test_models.py")
    assert info.line > 0
    assert "_raise_value_error" in info.trace


def test_exception_info_from_unraised_exception() -> None:
    info = ExceptionInfo.from_exception(KeyError("missing"))
    assert info.file == "<unknown>"
    assert info.line == 0
    assert info.trace == ""


def test_payload_excludes_credentials() -> None:
    record = LogRecord(
        level="error", type="other", message="m", stack="", platform="web",
        environment="production", timestamp="2024-01-01 00:00:00",
        app_id="app", secret_key="secret",
    )
    payload = record.to_payload()
    assert set(payload) == {
        "level", "type", "message", "stack", "platform", "environment", "timestamp"
    }
    assert record.has_credentials is True


@pytest.mark.parametrize("status, ok", [(200, True), (302, True), (399, True), (400, False), (503, False)])
def test_outcome_classification(status: int, ok: bool) -> None:
    assert TransmissionOutcome.from_response(status, "").ok is ok


def test_outcome_from_error_is_failure() -> None:
    outcome = TransmissionOutcome.from_error("connection refused")
    assert outcome.ok is False
    assert outcome.status_code is None
    assert outcome.response_body is None


@pytest.mark.parametrize("raw, expected", [
    (Severity.CRITICAL, Severity.CRITICAL),
    ("ERROR", Severity.ERROR),
    (" warning ", Severity.WARNING),
    ("verbose", Severity.INFO),
    (None, Severity.INFO),
])
def test_severity_coerce(raw, expected: Severity) -> None:
    assert Severity.coerce(raw) is expected
