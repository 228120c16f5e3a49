"""Logging configuration for the command line."""

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send panelcut log records to stderr.

    Warnings are always shown; ``verbose`` adds per-sheet and per-placement
    debug output.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("panelcut").setLevel(level)
