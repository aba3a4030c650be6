from __future__ import annotations

"""
Exception taxonomy.

Only misconfiguration is ever raised to the caller. Transport failures and
serialization problems are reported through outcomes and placeholders.
"""


class HttpLoggerError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(HttpLoggerError, ValueError):
    """Invalid endpoint, mode, platform, timeout, or unusable log directory."""
