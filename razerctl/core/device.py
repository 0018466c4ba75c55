"""Typed access to the attributes of one located device."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from razerctl.core.codec import (
    ATTRIBUTES,
    CHARGE_LEVEL,
    DEVICE_SERIAL,
    DEVICE_TYPE,
    DPI,
    FIRMWARE_VERSION,
    IDENTITY_ATTRIBUTES,
    POLL_RATE,
    AttributeCodec,
    codec_for,
    writable_attributes,
)
from razerctl.core.errors import (
    AttributeReadError,
    DeviceAttributeError,
    UnknownAttributeError,
    WriteRejectedError,
)
from razerctl.core.model import (
    AttributeReading,
    AttributesBundle,
    DeviceHandle,
    DeviceIdentity,
    PollRate,
    Resolution,
)
from razerctl.stores.base import AttributeStore

LOGGER = logging.getLogger(__name__)


class RazerDevice:
    """Facade binding a device handle to its attribute store.

    Nothing is cached: every getter reads the store again, so changes made
    by the firmware (battery draining, a new firmware) show up immediately.
    """

    def __init__(self, handle: DeviceHandle, store: AttributeStore) -> None:
        self.handle = handle
        self.store = store
        self._write_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"RazerDevice({self.handle.sys_path!r})"

    def __str__(self) -> str:
        return f"Type: {self.get(DEVICE_TYPE)}\nSerial: {self.get(DEVICE_SERIAL)}"

    def _codec(self, name: str) -> AttributeCodec:
        codec = codec_for(name)
        if codec is None:
            available = ", ".join(ATTRIBUTES)
            raise UnknownAttributeError(name, f"unknown attribute. Available: {available}")
        return codec

    def identity(self) -> DeviceIdentity:
        device_type, serial, firmware_version = (self.get(name) for name in IDENTITY_ATTRIBUTES)
        return DeviceIdentity(device_type=device_type, serial=serial, firmware_version=firmware_version)

    def get(self, name: str) -> Any:
        codec = self._codec(name)
        try:
            raw = self.store.read_attribute(self.handle.node, name)
        except OSError as exc:
            raise AttributeReadError(name, f"read failed: {exc}") from exc
        return codec.decode(raw)

    def set(self, name: str, value: Any) -> None:
        codec = self._codec(name)
        if not codec.writable:
            allowed = ", ".join(writable_attributes())
            raise UnknownAttributeError(name, f"attribute is read-only. Writable: {allowed}")
        payload = codec.encode(value)
        with self._write_lock:
            try:
                self.store.write_attribute(self.handle.node, name, payload)
            except OSError as exc:
                raise WriteRejectedError(name, f"device refused {payload.hex()}: {exc}") from exc
        LOGGER.debug("%s: wrote %s=%s", self.handle.sys_path, name, payload.hex())

    def snapshot(self, names: Iterable[str] | None = None) -> AttributesBundle:
        readings: dict[str, AttributeReading] = {}
        for name in names if names is not None else ATTRIBUTES:
            try:
                readings[name] = AttributeReading(name=name, value=self.get(name))
            except DeviceAttributeError as exc:
                LOGGER.debug("%s: %s", self.handle.sys_path, exc)
                readings[name] = AttributeReading(name=name, error=exc)
        return AttributesBundle(readings=readings)

    @property
    def device_type(self) -> str:
        return self.get(DEVICE_TYPE)

    @property
    def serial(self) -> str:
        return self.get(DEVICE_SERIAL)

    @property
    def firmware_version(self) -> str:
        return self.get(FIRMWARE_VERSION)

    @property
    def charge_level(self) -> int | None:
        return self.get(CHARGE_LEVEL)

    @property
    def dpi(self) -> Resolution | None:
        return self.get(DPI)

    @property
    def poll_rate(self) -> PollRate | None:
        return self.get(POLL_RATE)

    def set_dpi(self, x: int, y: int | None = None) -> Resolution:
        resolution = Resolution(x=x, y=x if y is None else y)
        self.set(DPI, resolution)
        return resolution

    def set_poll_rate(self, rate: PollRate | int) -> PollRate:
        rate = ATTRIBUTES[POLL_RATE].coerce(rate)
        self.set(POLL_RATE, rate)
        return rate
