"""Logging configuration for pingcheck."""

import logging
import os
import sys


def configure_logging() -> None:
    """Send diagnostics to stderr, leaving stdout to the plugin line.

    A monitoring server reads exactly one status line (plus resolution
    warnings) from stdout and the exit code, so log records must never land
    there. The default level is WARNING: a healthy check logs nothing, an
    unresolvable host logs one record. Setting PINGCHECK_LOG_LEVEL=DEBUG
    traces each reply, the cutoff used and the per-target attempt counts;
    unknown level names fall back to WARNING.

    Example, tracing a check by hand without disturbing its output:

        $ PINGCHECK_LOG_LEVEL=DEBUG pingcheck -w 50 -c 500 9.9.9.9 2>check.log
        pingcheck: OK - best rtt 9 ms (for 9.9.9.9) | '9.9.9.9'=0.009213s;0.05;0.5;0
    """
    log_level_str = os.environ.get("PINGCHECK_LOG_LEVEL", "WARNING").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    log_level = log_level_map.get(log_level_str, logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured: level=%s", logging.getLevelName(log_level))
