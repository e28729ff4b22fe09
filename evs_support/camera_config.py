"""Camera configuration file helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from core.capabilities import CapabilityRegistry, DeviceCapabilityEntry

from .runtime import camera_config_path

__all__ = ["CameraPlacement", "load_registry", "describe"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraPlacement:
    """Mounting position and optics of a configured camera."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    hfov: float = 0.0
    vfov: float = 0.0
    hflip: bool = False
    vflip: bool = False

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "CameraPlacement":
        values: dict[str, Any] = {}
        for name in ("x", "y", "z", "yaw", "pitch", "roll", "hfov", "vfov"):
            raw = metadata.get(name)
            if raw is None:
                continue
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                log.warning("Ignoring invalid camera %s value: %r", name, raw)
        for name in ("hflip", "vflip"):
            if name in metadata:
                values[name] = bool(metadata[name])
        return cls(**values)


def load_registry(path: Optional[Union[str, Path]] = None) -> Optional[CapabilityRegistry]:
    """Load the camera configuration into a fresh registry.

    Returns ``None`` when the configuration is missing or malformed.
    """

    config_file = Path(path) if path is not None else camera_config_path()
    registry = CapabilityRegistry()
    if not registry.initialize(config_file):
        log.error("Missing or improper configuration for the EVS application (%s)", config_file)
        return None
    return registry


def describe(entry: DeviceCapabilityEntry) -> str:
    placement = CameraPlacement.from_metadata(entry.metadata)
    functions = ",".join(entry.functions) or "-"
    return (
        f"{entry.device_id}(functions={functions}, "
        f"pos=({placement.x:g},{placement.y:g},{placement.z:g}), "
        f"rot=({placement.yaw:g},{placement.pitch:g},{placement.roll:g}), "
        f"fov=({placement.hfov:g},{placement.vfov:g}))"
    )
