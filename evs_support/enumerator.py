"""Client for the named EVS camera enumeration service."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

import requests

from core.resolver import EnumeratedDevice

from .runtime import DEFAULT_ENUMERATOR_SERVICE, enumerator_timeout_s, service_url

__all__ = ["EnumeratorClient", "EnumeratorError", "get_service"]

log = logging.getLogger(__name__)


class EnumeratorError(RuntimeError):
    """Raised when the enumeration service cannot deliver a camera list."""


class EnumeratorClient:
    """Minimal HTTP client returning the service's camera list in order."""

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_s: Optional[float] = None,
        name: str = DEFAULT_ENUMERATOR_SERVICE,
    ) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_s if timeout_s is not None else enumerator_timeout_s()
        self.sess = session or requests.Session()

    def get_camera_list(self) -> List[EnumeratedDevice]:
        """Return the currently visible cameras; empty on any failure."""

        log.debug("Requesting camera list from %s", self.name)
        try:
            cameras = self._fetch()
        except EnumeratorError as exc:
            log.error("Camera list from %s unavailable: %s", self.name, exc)
            return []
        log.info("Camera list received %d cameras", len(cameras))
        for camera in cameras:
            log.debug("Found camera %s", camera.device_id)
        return cameras

    def close(self) -> None:
        self.sess.close()

    def __enter__(self) -> "EnumeratorClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    def _fetch(self) -> List[EnumeratedDevice]:
        url = f"{self.base_url}/cameras"
        try:
            response = self.sess.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise EnumeratorError(f"request failed: {exc}") from exc
        status = response.status_code
        if not 200 <= status < 300:
            raise EnumeratorError(f"HTTP {status} {(response.text or '')[:200]}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise EnumeratorError(f"invalid_json: {exc}") from exc
        return _parse_camera_list(payload)


def _parse_camera_list(payload: Any) -> List[EnumeratedDevice]:
    if isinstance(payload, dict):
        payload = payload.get("cameras")
    if not isinstance(payload, list):
        raise EnumeratorError("camera list payload must be a list")
    return [device for device in _iter_descriptors(payload) if device is not None]


def _iter_descriptors(items: Iterable[Any]) -> Iterable[Optional[EnumeratedDevice]]:
    for item in items:
        if isinstance(item, str):
            yield EnumeratedDevice(item) if item else None
            continue
        if not isinstance(item, dict):
            log.debug("Skipping camera descriptor %r", item)
            yield None
            continue
        camera_id = item.get("cameraId") or item.get("deviceId") or item.get("id")
        if not isinstance(camera_id, str) or not camera_id:
            log.debug("Skipping camera descriptor without id: %r", item)
            yield None
            continue
        flags = item.get("vendorFlags", 0)
        try:
            vendor_flags = int(flags)
        except (TypeError, ValueError, OverflowError):
            vendor_flags = 0
        extra = {
            key: value
            for key, value in item.items()
            if key not in ("cameraId", "deviceId", "id", "vendorFlags")
        }
        yield EnumeratedDevice(camera_id, vendor_flags=vendor_flags, metadata=extra)


def get_service(
    name: str = DEFAULT_ENUMERATOR_SERVICE,
    *,
    session: Optional[requests.Session] = None,
    timeout_s: Optional[float] = None,
) -> Optional[EnumeratorClient]:
    """Look up the enumeration service registered under *name*.

    Returns ``None`` when no location is configured for the service.
    """

    url = service_url(name)
    if not url:
        return None
    return EnumeratorClient(url, session=session, timeout_s=timeout_s, name=name)
