"""Logging configuration for linkgraph.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

The package level comes from, in order of precedence:
    1. `linkgraph --verbose` (DEBUG) or `linkgraph --log-level LEVEL`
    2. the LINKGRAPH_LOG_LEVEL environment variable
    3. INFO

    - DEBUG: Per-post link resolution and index build details
    - INFO: Index builds and link check summaries (default)
    - WARNING: Skipped content files and other handled problems

`linkgraph serve` hands the same level to uvicorn so that server access logs
and package logs are filtered alike.
"""

import logging
import os
import sys

PACKAGE_LOGGER = "linkgraph"


def resolve_level(name: str | None) -> int:
    """Map a level name to a logging level, defaulting to INFO."""
    if not name:
        return logging.INFO
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(level: str | None = None) -> None:
    """Attach the stderr handler to the linkgraph logger.

    Called once by cli.main(); subsequent calls are no-ops.

    Args:
        level: Level name overriding LINKGRAPH_LOG_LEVEL.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))
    package_logger.addHandler(handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    package_logger.propagate = False
    set_log_level(level or os.environ.get("LINKGRAPH_LOG_LEVEL"))


def set_log_level(level: str | None) -> int:
    """Change the level of the linkgraph logger and its handlers.

    Returns:
        The numeric level applied.
    """
    numeric = resolve_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric)
    for handler in package_logger.handlers:
        handler.setLevel(numeric)
    return numeric


def uvicorn_log_level() -> str:
    """Current package level as a uvicorn --log-level name."""
    level = logging.getLogger(PACKAGE_LOGGER).getEffectiveLevel()
    return logging.getLevelName(level).lower()
