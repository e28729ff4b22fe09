"""Logger factory shared by the core modules."""

from __future__ import annotations

import logging

__all__ = ["LOGGER_ROOT", "get_logger"]

LOGGER_ROOT = "evs"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced below :data:`LOGGER_ROOT`."""

    if not name:
        return logging.getLogger(LOGGER_ROOT)
    if name == LOGGER_ROOT or name.startswith(f"{LOGGER_ROOT}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")
