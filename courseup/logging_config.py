"""
Logging setup.

Modules log through logging.getLogger(__name__); this module wires the root
logger to a rich console handler once per process.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO") -> None:
    global _configured
    if _configured:
        return

    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # uvicorn logs every request at INFO otherwise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
