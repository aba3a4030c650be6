from __future__ import annotations

"""
Local Log Block Formatting.

Renders one record and its transmission outcome into the human-readable
block appended to success_log.txt or failed_log.txt.
"""

from typing import List

from httplogger.domain.constants import BLOCK_SEPARATOR, NO_RESPONSE, NOT_APPLICABLE
from httplogger.domain.models import LogRecord, TransmissionOutcome


def format_block(record: LogRecord, outcome: TransmissionOutcome) -> str:
    """
    Render the text block for one log call.

    Success blocks carry the response body when it is non-empty. Failure
    blocks always carry a Response line (the body, or 'No response') and a
    CURL Error line when the transport itself failed.

    Returns:
        str: Newline-terminated block, separator included.
    """
    lines: List[str] = [
        f"[{record.timestamp}]",
        f"LEVEL: {record.level}",
        f"Message: {record.message}",
        f"Stack: {record.stack or NOT_APPLICABLE}",
        f"Platform: {record.platform}",
        f"Environment: {record.environment}",
    ]

    if outcome.ok:
        if outcome.response_body:
            lines.append(f"Response: {outcome.response_body}")
    else:
        lines.append(f"Response: {outcome.response_body or NO_RESPONSE}")
        if outcome.error:
            lines.append(f"CURL Error: {outcome.error}")

    lines.append(BLOCK_SEPARATOR)
    return "\n".join(lines) + "\n"
