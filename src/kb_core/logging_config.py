"""Logging setup for the kb-core CLI."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Route loguru output to stderr.

    ``quiet`` keeps only warnings and errors (dropped categories, corrupt cache
    entries); ``verbose`` adds the debug trail of the search cache and tree builder.
    """
    logger.remove()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
