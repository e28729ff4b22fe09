"""High level helpers answering "which camera serves this function now"."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from core.capabilities import CapabilityRegistry
from core.resolver import resolve_device_for_function

from .camera_config import load_registry
from .enumerator import EnumeratorClient, get_service
from .runtime import DEFAULT_ENUMERATOR_SERVICE

__all__ = ["REVERSE_FUNCTION", "get_camera_id_for_function", "get_rear_camera_id"]

log = logging.getLogger(__name__)

REVERSE_FUNCTION = "reverse"


def get_camera_id_for_function(
    function: str,
    *,
    config_path: Optional[Union[str, Path]] = None,
    enumerator: Optional[EnumeratorClient] = None,
    service_name: str = DEFAULT_ENUMERATOR_SERVICE,
    registry: Optional[CapabilityRegistry] = None,
) -> Optional[str]:
    """Return the first enumerated camera configured for *function*.

    When several cameras qualify the enumeration order decides.  A loaded
    *registry* takes precedence over *config_path*.  ``None`` is returned
    if the configuration or service is unavailable or nothing matches.
    """

    if registry is None:
        registry = load_registry(config_path)
        if registry is None:
            return None

    owns_client = enumerator is None
    if enumerator is None:
        log.info("Acquiring EVS Enumerator")
        enumerator = get_service(service_name)
        if enumerator is None:
            log.error("getService(%s) returned no service", service_name)
            return None
    try:
        cameras = enumerator.get_camera_list()
    finally:
        if owns_client:
            enumerator.close()

    camera_id = resolve_device_for_function(cameras, function, registry)
    if camera_id is not None:
        log.debug("Camera %s is matched with %s state", camera_id, function)
    return camera_id


def get_rear_camera_id(
    *,
    config_path: Optional[Union[str, Path]] = None,
    enumerator: Optional[EnumeratorClient] = None,
) -> Optional[str]:
    """Return the camera used for the rear-view (reverse) function."""

    return get_camera_id_for_function(
        REVERSE_FUNCTION, config_path=config_path, enumerator=enumerator
    )
