from __future__ import annotations

"""
Logger Configuration.

Holds the endpoint, deployment mode, platform tag, and request timeout that
every log call reads. Each HttpLogger owns (or is handed) one LoggerConfig;
there is no module-level mutable state. Mutation goes through validating
setters and each call reads a consistent snapshot under a lock.
"""

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from httplogger.domain.constants import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    Mode,
    Platform,
)
from httplogger.domain.errors import ConfigurationError
from httplogger.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
_ALLOWED_SCHEMES = ("http", "https")

ENV_ENDPOINT = "HTTPLOGGER_ENDPOINT"
ENV_MODE = "HTTPLOGGER_MODE"
ENV_PLATFORM = "HTTPLOGGER_PLATFORM"
ENV_TIMEOUT = "HTTPLOGGER_TIMEOUT"


@dataclass(frozen=True)
class ConfigSnapshot:
    """
    Immutable view of a LoggerConfig at one instant.

    Attributes:
        endpoint: Target URL for the POST request.
        mode: Deployment mode.
        platform: Origin tag.
        timeout: Request timeout in seconds, or None for no timeout.
    """
    endpoint: str
    mode: Mode
    platform: Platform
    timeout: Optional[float]

    @property
    def environment(self) -> str:
        return self.mode.value


class LoggerConfig:
    """
    Mutable, lock-guarded logger configuration.

    Attributes are read through properties; writes go through the set_*
    methods, which raise ConfigurationError on invalid input.
    """

    def __init__(
            self,
            endpoint: str = DEFAULT_ENDPOINT,
            mode: Union[Mode, str] = Mode.DEVELOPMENT,
            platform: Union[Platform, str] = Platform.WEB,
            timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        self._lock = threading.RLock()
        self._endpoint = validate_endpoint(endpoint)
        self._mode = validate_mode(mode)
        self._platform = validate_platform(platform)
        self._timeout = validate_timeout(timeout)

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"LoggerConfig(endpoint={snap.endpoint!r}, mode={snap.mode.value!r}, "
            f"platform={snap.platform.value!r}, timeout={snap.timeout!r})"
        )

    # --- Read access ---

    @property
    def endpoint(self) -> str:
        with self._lock:
            return self._endpoint

    @property
    def mode(self) -> Mode:
        with self._lock:
            return self._mode

    @property
    def platform(self) -> Platform:
        with self._lock:
            return self._platform

    @property
    def timeout(self) -> Optional[float]:
        with self._lock:
            return self._timeout

    @property
    def environment(self) -> str:
        return self.mode.value

    def snapshot(self) -> ConfigSnapshot:
        """Capture all fields atomically."""
        with self._lock:
            return ConfigSnapshot(
                endpoint=self._endpoint,
                mode=self._mode,
                platform=self._platform,
                timeout=self._timeout,
            )

    def to_dict(self) -> Dict[str, Any]:
        snap = self.snapshot()
        return {
            "endpoint": snap.endpoint,
            "mode": snap.mode.value,
            "platform": snap.platform.value,
            "timeout": snap.timeout,
        }

    # --- Validating setters ---

    def set_endpoint(self, url: str) -> None:
        value = validate_endpoint(url)
        with self._lock:
            self._endpoint = value

    def set_mode(self, mode: Union[Mode, str]) -> None:
        value = validate_mode(mode)
        with self._lock:
            self._mode = value

    def set_platform(self, platform: Union[Platform, str]) -> None:
        value = validate_platform(platform)
        with self._lock:
            self._platform = value

    def set_timeout(self, timeout: Optional[float]) -> None:
        value = validate_timeout(timeout)
        with self._lock:
            self._timeout = value

    def update(self, values: Mapping[str, Any]) -> None:
        """
        Apply several settings at once.

        Every value is validated before any of them is applied, so a failing
        update leaves the configuration untouched.
        """
        staged: Dict[str, Any] = {}
        if values.get("endpoint") is not None:
            staged["_endpoint"] = validate_endpoint(values["endpoint"])
        if values.get("mode") is not None:
            staged["_mode"] = validate_mode(values["mode"])
        if values.get("platform") is not None:
            staged["_platform"] = validate_platform(values["platform"])
        if "timeout" in values:
            staged["_timeout"] = validate_timeout(values["timeout"])

        with self._lock:
            for attr, value in staged.items():
                setattr(self, attr, value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        """Build a configuration from a dict. Unknown keys are ignored."""
        cfg = cls()
        cfg.update(data)
        return cfg


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_endpoint(url: Any) -> str:
    """Accept only absolute http(s) URLs with a host."""
    if not isinstance(url, str) or not url.strip():
        raise ConfigurationError(f"Invalid endpoint URL: {url!r}")
    candidate = url.strip()
    try:
        parsed = urlparse(candidate)
    except ValueError as e:
        raise ConfigurationError(f"Invalid endpoint URL: {candidate} ({e})") from e
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not parsed.netloc or not parsed.hostname:
        raise ConfigurationError(f"Invalid endpoint URL: {candidate}")
    return candidate


def validate_mode(mode: Any) -> Mode:
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(str(mode).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Invalid mode {mode!r}. Use 'development' or 'production'."
        ) from None


def validate_platform(platform: Any) -> Platform:
    if isinstance(platform, Platform):
        return platform
    if not isinstance(platform, str):
        raise ConfigurationError(f"Invalid platform {platform!r}. Use 'web' or 'mobile'.")
    try:
        return Platform(platform)
    except ValueError:
        raise ConfigurationError(
            f"Invalid platform {platform!r}. Use 'web' or 'mobile'."
        ) from None


def validate_timeout(timeout: Any) -> Optional[float]:
    if timeout is None:
        return None
    if isinstance(timeout, bool):
        raise ConfigurationError(f"Invalid timeout: {timeout!r}")
    try:
        value = float(timeout)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid timeout: {timeout!r}") from None
    if value <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout!r}")
    return value


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def get_default_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def load_config(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> LoggerConfig:
    """
    Load configuration from a JSON file, then overlay environment variables.

    A missing or unreadable file yields defaults. Values that are present but
    invalid raise ConfigurationError.

    Args:
        path: JSON file to read. Defaults to <user data dir>/config.json.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        LoggerConfig: The resolved configuration.
    """
    config_path = path or get_default_config_path()
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                data.update(loaded)
            else:
                logger.warning(f"Ignoring config file {config_path}: expected a JSON object.")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read config file {config_path}: {e}. Using defaults.")
    else:
        logger.debug(f"Config file not found at {config_path}. Using defaults.")

    if env.get(ENV_ENDPOINT):
        data["endpoint"] = env[ENV_ENDPOINT]
    if env.get(ENV_MODE):
        data["mode"] = env[ENV_MODE]
    if env.get(ENV_PLATFORM):
        data["platform"] = env[ENV_PLATFORM]
    if env.get(ENV_TIMEOUT):
        data["timeout"] = env[ENV_TIMEOUT]

    return LoggerConfig.from_mapping(data)
