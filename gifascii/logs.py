# logs.py
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Route the package's log records through a rich handler on stderr.

    Safe to call more than once; only the first call installs the handler.
    """
    global _configured
    if _configured:
        logging.getLogger("gifascii").setLevel(level)
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger = logging.getLogger("gifascii")
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    _configured = True
