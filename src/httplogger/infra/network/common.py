from __future__ import annotations

from httplogger.domain.constants import VERSION

USER_AGENT = f"httplogger/{VERSION}"
JSON_CONTENT_TYPE = "application/json"
