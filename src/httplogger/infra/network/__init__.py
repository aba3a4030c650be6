from __future__ import annotations

"""
Network Communication Infrastructure.

Thin wrapper around requests used by the transmitter to deliver records.
"""

from httplogger.infra.network.client import PostResult, post_json
from httplogger.infra.network.common import JSON_CONTENT_TYPE, USER_AGENT

__all__ = [
    "post_json",
    "PostResult",
    "USER_AGENT",
    "JSON_CONTENT_TYPE",
]
