from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory, creates log directories, and performs
serialized append-only writes so that concurrent log calls never interleave
their blocks inside the same file.
"""

import os
import threading
from typing import Dict, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "HttpLogger"
UNIX_APP_DIR_NAME = ".httplogger"
DEFAULT_LOG_SUBDIR = "logs"

_APPEND_LOCKS: Dict[str, threading.Lock] = {}
_REGISTRY_LOCK = threading.Lock()

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/HttpLogger
    - Linux/Mac: ~/.httplogger

    The directory is not created here; callers that write into it go through
    safe_mkdir.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_default_log_dir() -> str:
    """Default directory for the success/failure log files."""
    return os.path.join(get_user_data_dir(), DEFAULT_LOG_SUBDIR)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Expands environment variables and '~'. Reverts to fallback if the input
    is empty.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# WRITE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Recursively create a directory structure.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        return False, str(e)
    if not os.path.isdir(path):
        return False, f"Not a directory: {path}"
    return True, None


def append_text(path: str, text: str) -> None:
    """
    Append text to a file, serializing writers that target the same path.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    with _lock_for(path):
        with open(path, "a", encoding="utf-8", errors="backslashreplace") as f:
            f.write(text)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _lock_for(path: str) -> threading.Lock:
    """Return the process-wide lock guarding appends to a given file."""
    key = os.path.abspath(path)
    with _REGISTRY_LOCK:
        lock = _APPEND_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _APPEND_LOCKS[key] = lock
        return lock
