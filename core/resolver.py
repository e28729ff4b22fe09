"""Resolve a logical camera function to a currently enumerated device."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from .capabilities import CapabilityRegistry
from .logging import get_logger

__all__ = ["EnumeratedDevice", "resolve_device_for_function"]

_log = get_logger("core.resolver")


@dataclass(frozen=True, slots=True)
class EnumeratedDevice:
    """A device currently reported by the enumeration service."""

    device_id: str
    vendor_flags: int = 0
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)


def _device_id_of(device: Any) -> Optional[str]:
    if isinstance(device, EnumeratedDevice):
        return device.device_id or None
    if isinstance(device, str):
        return device or None
    if isinstance(device, Mapping):
        for key in ("device_id", "deviceId", "cameraId", "id"):
            value = device.get(key)
            if isinstance(value, str) and value:
                return value
        return None
    for attr in ("device_id", "camera_id", "id"):
        value = getattr(device, attr, None)
        if isinstance(value, str) and value:
            return value
    return None


def resolve_device_for_function(
    enumerated_devices: Iterable[Any],
    target_function: str,
    registry: CapabilityRegistry,
) -> Optional[str]:
    """Return the first enumerated device whose configuration serves *target_function*.

    Enumeration order decides the winner; registry order is irrelevant.
    A device matches when *target_function* is a substring of one of its
    configured tags.  Devices missing from the registry are skipped.
    ``None`` means no enumerated device currently serves the function.
    """

    for device in enumerated_devices:
        device_id = _device_id_of(device)
        if device_id is None:
            _log.debug("skipping enumerated device without id: %r", device)
            continue
        entry = registry.get(device_id)
        if entry is None:
            continue
        if entry.serves(target_function):
            _log.debug("resolve function=%s device=%s", target_function, device_id)
            return device_id
    _log.debug("resolve function=%s device=none", target_function)
    return None
