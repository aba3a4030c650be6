from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts 'src' on sys.path so the package is importable without installation.
2. Provides a fixed clock, a default config, and a stub collector server.
"""

import os
import sys
import threading
from datetime import datetime
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Dict, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from httplogger.domain.config import LoggerConfig  # noqa: E402

FIXED_NOW = datetime(2024, 5, 17, 14, 3, 9)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_clock():
    """Clock returning a constant instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def config() -> LoggerConfig:
    """Default configuration pointed at a placeholder test endpoint."""
    return LoggerConfig(endpoint="http://collector.test/errorhandler")


class StubCollector:
    """Minimal HTTP collector recording every POST it receives."""

    def __init__(self, status: int = 200, body: str = '{"status":"received"}') -> None:
        self.status = status
        self.body = body
        self.requests: List[Dict[str, Any]] = []
        collector = self

        class _Handler(BaseHTTPRequestHandler):
            def do_POST(self) -> None:  # noqa: N802
                length = int(self.headers.get("Content-Length", 0))
                collector.requests.append({
                    "path": self.path,
                    "headers": {k.lower(): v for k, v in self.headers.items()},
                    "body": self.rfile.read(length).decode("utf-8"),
                })
                payload = collector.body.encode("utf-8")
                self.send_response(collector.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format: str, *args: Any) -> None:
                pass

        self._server = HTTPServer(("127.0.0.1", 0), _Handler)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}/errorhandler"

    def start(self) -> "StubCollector":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def stub_collector() -> Iterator[StubCollector]:
    """A running stub collector answering HTTP 200."""
    server = StubCollector().start()
    try:
        yield server
    finally:
        server.stop()
