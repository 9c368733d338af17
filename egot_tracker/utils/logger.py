from __future__ import annotations

import logging
import sys

from ..config.settings import settings

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("egot")
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Namespaced logger under "egot.<name>".
    """
    _configure_root()
    return logging.getLogger(f"egot.{name}")
