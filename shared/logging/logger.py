"""Logger lookup for the statistics layer.

A process that never calls ``configure_logging`` still gets readable output:
the first lookup installs a plain-text root handler.
"""

from __future__ import annotations

import logging

_PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    global _configured

    if auto_configure and not _configured:
        logging.basicConfig(level=logging.INFO, format=_PLAIN_FORMAT)
        _configured = True
    return logging.getLogger(name)


def mark_configured():
    """Called once a real handler is installed; disables the plain-text fallback."""
    global _configured
    _configured = True
