from __future__ import annotations

"""
End-to-end scenarios for HttpLogger.

Uses a real local stub collector and a refused port instead of mocks, and
checks the contents of success_log.txt / failed_log.txt.
"""

import json
import logging
import threading
from pathlib import Path

import pytest

from httplogger import ConfigurationError, ErrorDescriptor, HttpLogger, HttpLogHandler, LoggerConfig
from httplogger.domain import constants as c

REFUSED_ENDPOINT = "http://localhost:9/no-such-server"


def _blocks(path: Path):
    if not path.exists():
        return []
    return [b for b in path.read_text(encoding="utf-8").split("-----------------------------------\n") if b]

# -----------------------------------------------------------------------------
# CONSTRUCTION
# -----------------------------------------------------------------------------

def test_log_dir_is_created(tmp_path: Path) -> None:
    log_dir = tmp_path / "deep" / "logs"
    http_logger = HttpLogger(log_to_file=True, log_dir=str(log_dir))
    assert log_dir.is_dir()
    assert http_logger.success_log_path == str(log_dir / "success_log.txt")
    assert http_logger.failed_log_path == str(log_dir / "failed_log.txt")


def test_uncreatable_log_dir_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ConfigurationError):
        HttpLogger(log_to_file=True, log_dir=str(blocker / "logs"))


def test_file_logging_disabled_by_default() -> None:
    http_logger = HttpLogger()
    assert http_logger.success_log_path is None
    assert http_logger.failed_log_path is None


def test_setters_validate() -> None:
    http_logger = HttpLogger()
    with pytest.raises(ConfigurationError):
        http_logger.set_endpoint("garbage")
    with pytest.raises(ConfigurationError):
        http_logger.set_platform("tv")
    with pytest.raises(ConfigurationError):
        http_logger.set_mode("debug")

# -----------------------------------------------------------------------------
# DELIVERY SCENARIOS
# -----------------------------------------------------------------------------

def test_connection_refused_writes_failure_block(tmp_path: Path, fixed_clock) -> None:
    config = LoggerConfig(endpoint=REFUSED_ENDPOINT, timeout=5)
    http_logger = HttpLogger(log_to_file=True, log_dir=str(tmp_path), config=config, clock=fixed_clock)

    outcome = http_logger.log("boom", level="error")

    assert outcome.ok is False
    blocks = _blocks(tmp_path / "failed_log.txt")
    assert len(blocks) == 1
    block = blocks[0]
    assert block.startswith("[2024-05-17 14:03:09]\n")
    assert "LEVEL: error\n" in block
    assert "Message: boom\n" in block
    assert "Response: No response\n" in block
    error_line = next(line for line in block.splitlines() if line.startswith("CURL Error: "))
    assert len(error_line) > len("CURL Error: ")
    assert not (tmp_path / "success_log.txt").exists()


def test_stub_server_success_writes_success_block(tmp_path: Path, stub_collector) -> None:
    config = LoggerConfig(endpoint=stub_collector.url, mode="production", platform="mobile")
    http_logger = HttpLogger(
        app_id="app-1", secret_key="s3cr3t", log_to_file=True, log_dir=str(tmp_path), config=config
    )

    outcome = http_logger.log("ok", level="info")

    assert outcome.ok is True
    blocks = _blocks(tmp_path / "success_log.txt")
    assert len(blocks) == 1
    assert "Message: ok\n" in blocks[0]
    assert 'Response: {"status":"received"}\n' in blocks[0]
    assert "Platform: mobile\n" in blocks[0]
    assert "Environment: production\n" in blocks[0]
    assert not (tmp_path / "failed_log.txt").exists()

    request = stub_collector.requests[0]
    assert request["headers"]["content-type"] == "application/json"
    assert request["headers"]["app-id"] == "app-1"
    assert request["headers"]["x-secret-key"] == "s3cr3t"
    body = json.loads(request["body"])
    assert body["level"] == "info"
    assert body["message"] == "ok"
    assert body["type"] == "other"
    assert body["environment"] == "production"


def test_http_error_status_is_failure(tmp_path: Path, stub_collector) -> None:
    stub_collector.status = 422
    stub_collector.body = "invalid payload"
    config = LoggerConfig(endpoint=stub_collector.url)
    http_logger = HttpLogger(log_to_file=True, log_dir=str(tmp_path), config=config)

    outcome = http_logger.warning("odd")

    assert outcome.ok is False
    assert outcome.status_code == 422
    block = _blocks(tmp_path / "failed_log.txt")[0]
    assert "Response: invalid payload\n" in block
    assert "CURL Error" not in block


def test_no_files_written_when_disabled(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    http_logger = HttpLogger(config=LoggerConfig(endpoint=REFUSED_ENDPOINT))
    outcome = http_logger.log("nobody hears this", level="critical")
    assert outcome.ok is False
    assert list(tmp_path.iterdir()) == []


def test_exception_and_descriptor_inputs(stub_collector) -> None:
    http_logger = HttpLogger(config=LoggerConfig(endpoint=stub_collector.url))

    try:
        {}["missing"]
    except KeyError as exc:
        http_logger.exception(exc)
    http_logger.log_error(c.E_COMPILE_ERROR, "Cannot redeclare", "/app/lib.php", 40)

    exc_body = json.loads(stub_collector.requests[0]["body"])
    assert exc_body["level"] == "exception"
    assert exc_body["type"] == "customError"
    assert exc_body["message"].startswith("'missing' in ")
    assert "test_logger_scenarios.py" in exc_body["stack"]

    err_body = json.loads(stub_collector.requests[1]["body"])
    assert err_body["level"] == "critical"
    assert err_body["stack"] == "/app/lib.php on line 40"
    assert err_body["type"] == "other"


def test_log_never_raises_on_unserializable_input(stub_collector) -> None:
    http_logger = HttpLogger(config=LoggerConfig(endpoint=stub_collector.url))
    payload = {"lock": threading.Lock()}
    outcome = http_logger.log(payload, level="warning")
    assert outcome.ok is True
    body = json.loads(stub_collector.requests[0]["body"])
    assert "lock" in json.loads(body["message"])


def test_configuration_changes_apply_to_next_call(stub_collector) -> None:
    http_logger = HttpLogger(config=LoggerConfig(endpoint=REFUSED_ENDPOINT))
    assert http_logger.info("first").ok is False

    http_logger.set_endpoint(stub_collector.url)
    http_logger.set_platform("mobile")
    assert http_logger.info("second").ok is True
    assert json.loads(stub_collector.requests[0]["body"])["platform"] == "mobile"


def test_descriptor_variant_through_log(stub_collector) -> None:
    http_logger = HttpLogger(config=LoggerConfig(endpoint=stub_collector.url))
    http_logger.log(ErrorDescriptor(code=c.E_NOTICE, message="n", file="f", line=1), level="critical")
    assert json.loads(stub_collector.requests[0]["body"])["level"] == "info"


def test_lone_surrogate_message_is_delivered_and_recorded(tmp_path: Path, stub_collector) -> None:
    """Filenames decoded with surrogateescape can be logged like any other text."""
    http_logger = HttpLogger(
        log_to_file=True,
        log_dir=str(tmp_path),
        config=LoggerConfig(endpoint=stub_collector.url),
    )
    outcome = http_logger.log("bad name \udcff.txt", level="error")

    assert outcome.ok is True
    assert json.loads(stub_collector.requests[0]["body"])["message"] == "bad name \udcff.txt"
    blocks = _blocks(tmp_path / "success_log.txt")
    assert len(blocks) == 1
    assert "Message: bad name \\udcff.txt" in blocks[0]
    assert not (tmp_path / "failed_log.txt").exists()

# -----------------------------------------------------------------------------
# LOGGING BRIDGE
# -----------------------------------------------------------------------------

def test_root_handler_at_debug_sends_one_request_per_record(stub_collector) -> None:
    """The HTTP stack's own debug records are not forwarded back to the collector."""
    root = logging.getLogger()
    old_level = root.level
    handler = HttpLogHandler(HttpLogger(config=LoggerConfig(endpoint=stub_collector.url)))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        logging.getLogger("app").warning("one event")
    finally:
        root.removeHandler(handler)
        root.setLevel(old_level)

    assert len(stub_collector.requests) == 1
    body = json.loads(stub_collector.requests[0]["body"])
    assert body["message"] == "one event"
    assert body["level"] == "warning"
