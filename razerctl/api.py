"""Stable public API for building tooling on top of razerctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from razerctl.core.errors import (
    AttributeReadError,
    ConfigLoadError,
    ConfigValidationError,
    DeviceAttributeError,
    DeviceNotFoundError,
    EnumerationError,
    InvalidAttributeError,
    MissingAttributeError,
    RazerctlError,
    UnknownAttributeError,
    UnsupportedValueError,
    WriteRejectedError,
)
from razerctl.core.device import RazerDevice
from razerctl.core.model import (
    AttributeReading,
    AttributesBundle,
    DeviceHandle,
    DeviceIdentity,
    DeviceSignature,
    PollRate,
    Resolution,
)
from razerctl.core.service import RazerService
from razerctl.stores.base import AttributeStore, DeviceBus

__all__ = [
    "RazerctlError",
    "ConfigLoadError",
    "ConfigValidationError",
    "EnumerationError",
    "DeviceNotFoundError",
    "DeviceAttributeError",
    "AttributeReadError",
    "MissingAttributeError",
    "InvalidAttributeError",
    "UnsupportedValueError",
    "WriteRejectedError",
    "UnknownAttributeError",
    "AttributeReading",
    "AttributesBundle",
    "DeviceHandle",
    "DeviceIdentity",
    "DeviceSignature",
    "PollRate",
    "Resolution",
    "RazerDevice",
    "AttributeStore",
    "DeviceBus",
    "Client",
]


class Client:
    """Public client for interacting with razerctl core capabilities.

    A `Client` instance wraps configuration loading, device location and
    attribute reads/writes behind a stable API intended for third-party tools
    (GUI/TUI/services/scripts). Pass `bus`/`store` to run against something
    other than the local udev database.
    """

    def __init__(
        self,
        *,
        bus: DeviceBus | None = None,
        store: AttributeStore | None = None,
        signature: DeviceSignature | None = None,
        config_path: Path | None = None,
    ) -> None:
        self._service = RazerService(bus=bus, store=store, signature=signature, config_path=config_path)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_devices(self) -> list[RazerDevice]:
        return self._service.list_devices()

    def open_device(self, serial: str) -> RazerDevice:
        return self._service.open_device(serial)

    def get_identity(self, serial: str) -> DeviceIdentity:
        return self._service.identity(serial)

    def query(self, serial: str) -> AttributesBundle:
        return self._service.query(serial)

    def get_attribute(self, serial: str, name: str) -> Any:
        return self._service.get_attribute(serial, name)

    def set_dpi(self, serial: str, x: int, y: int | None = None) -> Resolution:
        return self._service.set_dpi(serial, x, y)

    def set_poll_rate(self, serial: str, rate: PollRate | int) -> PollRate:
        return self._service.set_poll_rate(serial, rate)
