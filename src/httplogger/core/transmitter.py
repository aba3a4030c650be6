from __future__ import annotations

"""
Log Transmitter.

Delivers a LogRecord to the configured endpoint with a single synchronous
POST, classifies the outcome, and (when file logging is enabled) appends a
block to the matching local file. Nothing in this module raises on the
logging path: transport and write failures are reported, not propagated.
"""

import logging
from typing import Dict, Optional

import requests

from httplogger.core.formatting import format_block
from httplogger.domain.config import ConfigSnapshot
from httplogger.domain.errors import ConfigurationError
from httplogger.domain.models import LogRecord, TransmissionOutcome
from httplogger.infra.fs import append_text
from httplogger.infra.network import post_json

logger = logging.getLogger(__name__)

APP_ID_HEADER = "app-id"
SECRET_KEY_HEADER = "x-secret-key"


class LogTransmitter:
    """
    Sends records and persists their outcomes.

    Args:
        success_log_path: File receiving blocks for successful deliveries.
        failed_log_path: File receiving blocks for failed deliveries.
        session: Optional requests.Session reused across calls.

    File logging is enabled only when both paths are given.
    """

    def __init__(
            self,
            success_log_path: Optional[str] = None,
            failed_log_path: Optional[str] = None,
            session: Optional[requests.Session] = None,
    ) -> None:
        if bool(success_log_path) != bool(failed_log_path):
            raise ConfigurationError("success_log_path and failed_log_path must be set together.")
        self.success_log_path = success_log_path
        self.failed_log_path = failed_log_path
        self._session = session

    @property
    def file_logging_enabled(self) -> bool:
        return bool(self.success_log_path and self.failed_log_path)

    def send(self, record: LogRecord, config: ConfigSnapshot) -> TransmissionOutcome:
        """
        POST the record and record the outcome locally.

        Args:
            record: The record to deliver.
            config: Snapshot supplying endpoint and timeout.

        Returns:
            TransmissionOutcome: Classification of the attempt.
        """
        status, body, error = post_json(
            config.endpoint,
            record.to_payload(),
            headers=credential_headers(record),
            timeout=config.timeout,
            session=self._session,
        )

        if error is not None:
            outcome = TransmissionOutcome.from_error(error)
            logger.warning(f"Log delivery to {config.endpoint} failed: {error}")
        else:
            outcome = TransmissionOutcome.from_response(status, body or "")
            if not outcome.ok:
                logger.warning(f"Log delivery to {config.endpoint} rejected with HTTP {status}")

        self.record_outcome(record, outcome)
        return outcome

    def record_outcome(self, record: LogRecord, outcome: TransmissionOutcome) -> None:
        """Append the formatted block to the success or failure file."""
        if not self.file_logging_enabled:
            return

        target = self.success_log_path if outcome.ok else self.failed_log_path
        try:
            append_text(target, format_block(record, outcome))
        except (OSError, ValueError) as e:
            logger.error(f"Could not append log block to {target}: {e}")


def credential_headers(record: LogRecord) -> Dict[str, str]:
    """Credential headers for a record; empty when it carries no credentials."""
    if not record.has_credentials:
        return {}
    return {
        APP_ID_HEADER: record.app_id,
        SECRET_KEY_HEADER: record.secret_key,
    }
