"""Environment driven runtime settings."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Optional

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_ENUMERATOR_SERVICE",
    "DEFAULT_TIMEOUT_S",
    "camera_config_path",
    "enumerator_timeout_s",
    "log_level",
    "service_url",
]

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("/system/etc/automotive/evs_support_lib/camera_config.json")
DEFAULT_ENUMERATOR_SERVICE = "EvsEnumeratorV1_0"
DEFAULT_TIMEOUT_S = 2.0


def _coerce_float(value: Optional[str], default: float) -> float:
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        _log.warning("Invalid enumerator timeout value: %r", value)
        return default
    if not math.isfinite(parsed) or parsed <= 0:
        _log.warning("Out of range enumerator timeout value: %r", value)
        return default
    return parsed


def camera_config_path() -> Path:
    """Return the camera configuration path, honouring ``EVS_CAMERA_CONFIG``."""

    override = os.environ.get("EVS_CAMERA_CONFIG", "").strip()
    return Path(override) if override else DEFAULT_CONFIG_PATH


def enumerator_timeout_s() -> float:
    return _coerce_float(os.environ.get("EVS_ENUMERATOR_TIMEOUT_S"), DEFAULT_TIMEOUT_S)


def _env_key(service_name: str) -> str:
    cleaned = "".join(ch if ch.isalnum() else "_" for ch in service_name)
    return f"EVS_SERVICE_{cleaned.upper()}_URL"


def service_url(service_name: str) -> Optional[str]:
    """Return the base URL registered for *service_name*, if any.

    ``EVS_SERVICE_<NAME>_URL`` takes precedence; the default enumerator also
    honours ``EVS_ENUMERATOR_URL``.
    """

    url = os.environ.get(_env_key(service_name), "").strip()
    if not url and service_name == DEFAULT_ENUMERATOR_SERVICE:
        url = os.environ.get("EVS_ENUMERATOR_URL", "").strip()
    return url.rstrip("/") or None


def log_level(default: str = "WARNING") -> str:
    value = os.environ.get("EVS_LOG_LEVEL", "").strip().upper()
    if not value:
        return default
    if not isinstance(logging.getLevelName(value), int):
        _log.warning("Invalid log level: %r", value)
        return default
    return value
