"""Shared Rich console and logging configuration.

Diagnostics, errors and log records go to stderr through one
:class:`rich.console.Console`; stdout is reserved for the resource
manifests printed by the conversion engine.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER: str = "ingress2gateway"

console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Attach a Rich handler to the package logger.

    WARNING and above are shown by default; *verbose* lowers the
    threshold to DEBUG.  Calling this repeatedly only adjusts the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=console, show_path=False, show_time=verbose)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
