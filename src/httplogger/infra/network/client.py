from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from httplogger.infra.network.common import JSON_CONTENT_TYPE, USER_AGENT

logger = logging.getLogger(__name__)

# (status_code, response_body, error_text); status and body are None when the
# request never produced a response.
PostResult = Tuple[Optional[int], Optional[str], Optional[str]]


def post_json(
        url: str,
        payload: Dict[str, Any],
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
) -> PostResult:
    """
    Execute one JSON POST and report the result without raising.

    Transport problems (DNS, refused connection, timeout, TLS) are returned
    as error text. HTTP error statuses are returned as-is for the caller to
    classify.
    """
    # ASCII-only JSON keeps lone surrogates from failing the encode.
    body = json.dumps(payload, ensure_ascii=True).encode("ascii")
    merged_headers = {
        "Content-Type": JSON_CONTENT_TYPE,
        "User-Agent": USER_AGENT,
    }
    if headers:
        merged_headers.update(headers)

    sender = session if session is not None else requests
    try:
        response = sender.post(url, data=body, headers=merged_headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.debug(f"POST {url} failed at transport level: {e}")
        return None, None, str(e) or type(e).__name__

    logger.debug(f"POST {url} -> HTTP {response.status_code}")
    return response.status_code, response.text, None
