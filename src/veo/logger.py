"""
Logging configuration for veo
"""

import logging
import sys

NOISY_LOGGERS = ("requests", "urllib3", "charset_normalizer")


def resolve_level(verbose: bool = False, debug: bool = False, default: str = "WARNING") -> str:
    """Map the --verbose/--debug CLI flags to a log level name"""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return default


def setup_logging(level: str = "WARNING", verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for the CLI

    Diagnostics always go to stderr so that stdout stays clean for
    table or JSON output.

    Args:
        level: Log level used when neither flag is set
        verbose: Enable INFO level
        debug: Enable DEBUG level (request tracing)
    """
    level_name = resolve_level(verbose, debug, default=level)
    numeric_level = getattr(logging, level_name.upper(), logging.WARNING)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
