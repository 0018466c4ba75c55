"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from razerctl.core.config import load_config
from razerctl.core.device import RazerDevice
from razerctl.core.locator import DeviceLocator
from razerctl.core.model import AttributesBundle, DeviceIdentity, DeviceSignature, PollRate, Resolution
from razerctl.stores.base import AttributeStore, DeviceBus
from razerctl.stores.udev import UdevBus, UdevStore


class RazerService:
    """One scan-then-act cycle per call; no device state survives between calls."""

    def __init__(
        self,
        *,
        bus: DeviceBus | None = None,
        store: AttributeStore | None = None,
        signature: DeviceSignature | None = None,
        config_path: Path | None = None,
    ) -> None:
        if signature is None:
            loaded = load_config(config_path)
            signature = loaded.signature
            self.load_warnings = loaded.warnings
        else:
            self.load_warnings = ()
        self.store = store or UdevStore()
        self.locator = DeviceLocator(bus or UdevBus(), self.store, signature)

    def list_devices(self) -> list[RazerDevice]:
        return [RazerDevice(handle, self.store) for handle in self.locator.find_all()]

    def open_device(self, serial: str) -> RazerDevice:
        return RazerDevice(self.locator.find_by_serial(serial), self.store)

    def identity(self, serial: str) -> DeviceIdentity:
        return self.open_device(serial).identity()

    def query(self, serial: str) -> AttributesBundle:
        return self.open_device(serial).snapshot()

    def get_attribute(self, serial: str, name: str) -> Any:
        return self.open_device(serial).get(name)

    def set_dpi(self, serial: str, x: int, y: int | None = None) -> Resolution:
        return self.open_device(serial).set_dpi(x, y)

    def set_poll_rate(self, serial: str, rate: PollRate | int) -> PollRate:
        return self.open_device(serial).set_poll_rate(rate)
