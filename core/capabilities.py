"""Device capability registry.

The registry maps statically configured device identifiers to the logical
function tags ("reverse", "front", ...) they serve.  It is populated once
through :meth:`CapabilityRegistry.initialize` and is read-only afterwards.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .logging import get_logger

__all__ = [
    "ConfigLoadError",
    "DeviceCapabilityEntry",
    "CapabilityRegistry",
    "load_entries",
]

_ID_KEYS = ("deviceId", "cameraId", "device_id", "id")
_FUNCTION_KEYS = ("functions", "function")

_log = get_logger("core.capabilities")


class ConfigLoadError(RuntimeError):
    """Raised when a configuration source is missing or malformed."""


@dataclass(frozen=True, slots=True)
class DeviceCapabilityEntry:
    """One configured device and the function tags assigned to it."""

    device_id: str
    functions: Tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def serves(self, function: str) -> bool:
        """Return ``True`` when *function* occurs inside any assigned tag."""

        return any(function in tag for tag in self.functions)


def _read_source(source: Any) -> Any:
    if source is None:
        raise ConfigLoadError("no configuration source given")
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigLoadError(f"configuration {path} missing") from exc
        except (OSError, ValueError) as exc:
            raise ConfigLoadError(f"configuration {path} unreadable: {exc}") from exc
        return _decode(raw, str(path))
    read = getattr(source, "read", None)
    if callable(read):
        try:
            raw = read()
        except (OSError, ValueError) as exc:
            raise ConfigLoadError(f"configuration stream unreadable: {exc}") from exc
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ConfigLoadError(f"configuration stream not utf-8: {exc}") from exc
        return _decode(raw, "<stream>")
    return source


def _decode(raw: str, origin: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigLoadError(f"invalid_json:{origin}:{exc}") from exc


def _records(document: Any) -> Sequence[Any]:
    if isinstance(document, Mapping):
        if "cameras" not in document:
            raise ConfigLoadError("configuration has no 'cameras' list")
        document = document["cameras"]
    if isinstance(document, (str, bytes)) or not isinstance(document, Sequence):
        raise ConfigLoadError("configuration records must be a list")
    return document


def _coerce_id(record: Mapping[str, Any], index: int) -> Tuple[str, str]:
    for key in _ID_KEYS:
        if key in record:
            value = record[key]
            if not isinstance(value, str) or not value.strip():
                raise ConfigLoadError(f"invalid_device_id:record={index}")
            return key, value
    raise ConfigLoadError(f"missing_device_id:record={index}")


def _coerce_functions(record: Mapping[str, Any], index: int) -> Tuple[str, Tuple[str, ...]]:
    for key in _FUNCTION_KEYS:
        if key not in record:
            continue
        value = record[key]
        if isinstance(value, str):
            return key, (value,)
        if isinstance(value, (list, tuple)) and all(isinstance(tag, str) for tag in value):
            return key, tuple(value)
        raise ConfigLoadError(f"invalid_functions:record={index}")
    raise ConfigLoadError(f"missing_functions:record={index}")


def _parse_record(record: Any, index: int) -> DeviceCapabilityEntry:
    if not isinstance(record, Mapping):
        raise ConfigLoadError(f"invalid_record:record={index}")
    id_key, device_id = _coerce_id(record, index)
    fn_key, functions = _coerce_functions(record, index)
    metadata = {
        key: value for key, value in record.items() if key not in (id_key, fn_key)
    }
    return DeviceCapabilityEntry(
        device_id=device_id,
        functions=functions,
        metadata=MappingProxyType(metadata),
    )


def load_entries(source: Any) -> Tuple[DeviceCapabilityEntry, ...]:
    """Parse *source* into entries, raising :class:`ConfigLoadError` on failure.

    Duplicate device identifiers keep their first occurrence.
    """

    records = _records(_read_source(source))
    entries: List[DeviceCapabilityEntry] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        entry = _parse_record(record, index)
        if entry.device_id in seen:
            _log.warning(
                "duplicate device_id=%s record=%d ignored", entry.device_id, index
            )
            continue
        if not entry.functions:
            _log.debug("device_id=%s has no functions assigned", entry.device_id)
        seen.add(entry.device_id)
        entries.append(entry)
    return tuple(entries)


class CapabilityRegistry:
    """Immutable, load-once mapping of device IDs to their function tags."""

    def __init__(self) -> None:
        self._entries: Tuple[DeviceCapabilityEntry, ...] = ()
        self._by_id: Dict[str, DeviceCapabilityEntry] = {}
        self._initialized = False

    @classmethod
    def from_entries(cls, entries: Sequence[DeviceCapabilityEntry]) -> "CapabilityRegistry":
        """Build an initialized registry from already parsed entries."""

        unique: Dict[str, DeviceCapabilityEntry] = {}
        for entry in entries:
            unique.setdefault(entry.device_id, entry)
        registry = cls()
        registry._install(tuple(unique.values()))
        registry._initialized = True
        return registry

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, source: Any) -> bool:
        """Load the configuration *source*; return ``False`` on failure.

        A failed load leaves the registry empty.  Once a load succeeded the
        registry refuses further initialisation.
        """

        if self._initialized:
            _log.warning("capability registry already initialised; ignoring reload")
            return False
        try:
            entries = load_entries(source)
        except ConfigLoadError as exc:
            _log.error("Missing or improper camera configuration: %s", exc)
            self._install(())
            return False
        self._install(entries)
        self._initialized = True
        _log.info("capability registry loaded devices=%d", len(entries))
        return True

    def entries(self) -> Tuple[DeviceCapabilityEntry, ...]:
        """Return the configured entries in source order."""

        return self._entries

    def get(self, device_id: str) -> Optional[DeviceCapabilityEntry]:
        return self._by_id.get(device_id)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._by_id

    def __iter__(self) -> Iterator[DeviceCapabilityEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    def _install(self, entries: Tuple[DeviceCapabilityEntry, ...]) -> None:
        self._entries = entries
        self._by_id = {entry.device_id: entry for entry in entries}
