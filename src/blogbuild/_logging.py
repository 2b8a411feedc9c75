"""Logging configuration for blogbuild.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

The log level can be configured via the BLOGBUILD_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR). INFO is the default.
"""

import logging
import os
import sys

_PACKAGE_LOGGER = "blogbuild"


def configure_logging() -> None:
    """Configure logging for the blogbuild package.

    Call this once at application startup (the CLI does it).
    Subsequent calls are no-ops.
    """
    root_logger = logging.getLogger(_PACKAGE_LOGGER)

    if root_logger.handlers:
        return

    level_name = os.environ.get("BLOGBUILD_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Avoid duplicate messages through the root logger
    root_logger.propagate = False


def set_quiet_mode(quiet: bool) -> None:
    """Only show warnings and errors when quiet is set."""
    root_logger = logging.getLogger(_PACKAGE_LOGGER)
    if quiet:
        root_logger.setLevel(logging.WARNING)
        for handler in root_logger.handlers:
            handler.setLevel(logging.WARNING)
