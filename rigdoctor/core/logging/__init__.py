"""Logging setup for the rigdoctor CLI."""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: Union[int, str] = logging.WARNING, console: Optional[Console] = None) -> RichHandler:
    """Route root logging through rich, replacing a handler installed earlier."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    root.addHandler(handler)
    root.setLevel(level if isinstance(level, int) else level.upper())
    return handler
