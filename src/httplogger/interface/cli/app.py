from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Bootstraps diagnostic logging, resolves configuration (file, environment,
command-line overrides), sends one log entry, and reports the outcome.

Exit codes:
    0: The collector accepted the entry (or --dump-config succeeded).
    1: Delivery failed (transport error or HTTP status >= 400).
    2: Invalid configuration or usage.
"""

import json
import sys
from dataclasses import asdict
from typing import List, Optional

from httplogger.core.logger import HttpLogger
from httplogger.domain.config import load_config
from httplogger.domain.errors import ConfigurationError
from httplogger.domain.models import TransmissionOutcome
from httplogger.infra.logging import LoggingConfig, configure_logging, get_logger
from httplogger.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DELIVERY_FAILED = 1
EXIT_CONFIG_ERROR = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional argument list. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.trace_file))

    try:
        config = load_config(args.config_path)
        config.update(cli_args.args_to_overrides(args))
    except ConfigurationError as e:
        logger.error(f"Configuration rejected: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.dump_config:
        print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.message is None:
        parser.print_usage(sys.stderr)
        print("ERROR: a message is required.", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        http_logger = HttpLogger(config=config, **cli_args.args_to_logger_kwargs(args))
    except ConfigurationError as e:
        logger.error(f"Logger construction failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logger.debug(f"Sending '{args.level}' entry via {http_logger!r}")
    outcome = http_logger.log(args.message, args.level)

    if args.json_output:
        print(json.dumps(asdict(outcome), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(outcome)

    return EXIT_OK if outcome.ok else EXIT_DELIVERY_FAILED

# -----------------------------------------------------------------------------
# OUTPUT RENDERING
# -----------------------------------------------------------------------------

def _print_human_summary(outcome: TransmissionOutcome) -> None:
    if outcome.ok:
        print(f"Delivered (HTTP {outcome.status_code}).")
        return

    if outcome.error:
        print(f"Delivery failed: {outcome.error}", file=sys.stderr)
    else:
        print(f"Delivery rejected (HTTP {outcome.status_code}).", file=sys.stderr)
    if outcome.response_body:
        print(outcome.response_body, file=sys.stderr)
