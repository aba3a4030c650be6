from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema for sending a single log entry and
translates the parsed namespace into configuration overrides and logger
construction arguments.
"""

import argparse
from typing import Any, Dict, List

from httplogger.domain.constants import VERSION, Mode, Platform, Severity

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the httplogger CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="httplogger",
        description="Send a log entry to a remote HTTP error collector.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    p.add_argument(
        "message",
        nargs="?",
        default=None,
        help="Text of the log entry.",
    )
    p.add_argument(
        "-l", "--level",
        default=Severity.INFO.value,
        choices=_choices(Severity),
        help="Severity of the entry (default: info).",
    )

    # --- Endpoint configuration ---
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: <user data dir>/config.json).",
    )
    p.add_argument("--endpoint", default=None, help="Collector URL.")
    p.add_argument("--mode", default=None, choices=_choices(Mode), help="Deployment mode.")
    p.add_argument("--platform", default=None, choices=_choices(Platform), help="Platform tag.")
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds.",
    )

    # --- Credentials ---
    p.add_argument("--app-id", dest="app_id", default=None, help="Application ID header.")
    p.add_argument("--secret-key", dest="secret_key", default=None, help="Secret key header.")

    # --- Local outcome files ---
    p.add_argument(
        "--log-dir",
        dest="log_dir",
        default=None,
        help="Append success/failure blocks to files in this directory.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the transmission outcome as JSON.",
    )
    p.add_argument(
        "--trace-file",
        dest="trace_file",
        default=None,
        help="Write internal diagnostics to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate diagnostic verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Extract configuration overrides given on the command line.

    Only options the user actually passed are included.
    """
    overrides: Dict[str, Any] = {}
    if args.endpoint:
        overrides["endpoint"] = args.endpoint
    if args.mode:
        overrides["mode"] = args.mode
    if args.platform:
        overrides["platform"] = args.platform
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    return overrides


def args_to_logger_kwargs(args: argparse.Namespace) -> Dict[str, Any]:
    """Keyword arguments for HttpLogger derived from the command line."""
    return {
        "app_id": args.app_id,
        "secret_key": args.secret_key,
        "log_to_file": bool(args.log_dir),
        "log_dir": args.log_dir,
    }

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _choices(enum_cls: Any) -> List[str]:
    return [member.value for member in enum_cls]
