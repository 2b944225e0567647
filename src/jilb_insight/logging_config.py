"""
Logging for jilb-insight.

The analysis core only ever calls ``get_logger(__name__)``; nothing is printed
unless an application (normally the CLI) calls ``setup_logging``. Handlers are
attached to the ``jilb_insight`` logger, not the root logger, so embedding the
library does not change the host application's logging.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "jilb_insight"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level. ``quiet`` wins."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route jilb-insight log records to stderr through rich.

    Calling it again replaces the handlers installed by the previous call,
    so repeated CLI invocations in one process do not duplicate output.

    Args:
        verbose: Log classifier decisions (DEBUG): block closes, totals
        quiet: Only log errors
        log_file: Optional path that additionally receives plain-text records

    Returns:
        The configured ``jilb_insight`` logger
    """
    level = resolve_level(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # stdout is reserved for reports (JSON must stay parseable)
    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    # The file handler gets DEBUG even when the console is quieter
    logger.setLevel(logging.DEBUG if log_file else level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``jilb_insight`` namespace.

    Args:
        name: Module name (e.g. 'jilb_insight.analysis.control'). Names from
            outside the package are nested under ``jilb_insight``.

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
