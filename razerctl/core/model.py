"""Core data models used across locator, device, service, and CLI."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any

RAZER_VENDOR_ID = 0x1532
_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


@dataclass(frozen=True)
class DeviceSignature:
    vendor_id: int = RAZER_VENDOR_ID
    subsystem: str = "hid"
    id_property: str = "HID_ID"

    def matches(self, hid_id: str | None) -> bool:
        """Return True when the ``bus:vendor:product`` id belongs to this vendor."""
        if not hid_id:
            return False
        try:
            _bus, vendor, _product = hid_id.split(":")
            if not _HEX_RE.fullmatch(vendor):
                return False
            return int(vendor, 16) == self.vendor_id
        except ValueError:
            return False


@dataclass(frozen=True)
class DeviceHandle:
    node: Any
    sys_path: str
    hid_id: str


@dataclass(frozen=True)
class DeviceIdentity:
    device_type: str
    serial: str
    firmware_version: str

    def as_dict(self) -> dict[str, str]:
        return {
            "device_type": self.device_type,
            "serial": self.serial,
            "firmware_version": self.firmware_version,
        }


@dataclass(frozen=True)
class Resolution:
    x: int
    y: int

    def as_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return f"{self.x}:{self.y}"


class PollRate(enum.IntEnum):
    HZ_125 = 125
    HZ_500 = 500
    HZ_1000 = 1000


@dataclass(frozen=True)
class AttributeReading:
    name: str
    value: Any = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AttributesBundle:
    """Per-attribute results of one snapshot pass, in codec registry order."""

    readings: dict[str, AttributeReading] = field(default_factory=dict)

    def __getitem__(self, name: str) -> AttributeReading:
        return self.readings[name]

    def __contains__(self, name: object) -> bool:
        return name in self.readings

    def value(self, name: str) -> Any:
        return self.readings[name].value

    @property
    def errors(self) -> dict[str, Exception]:
        return {name: r.error for name, r in self.readings.items() if r.error is not None}

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {name: to_jsonable(r.value) for name, r in self.readings.items()}
        errors = self.errors
        if errors:
            result["errors"] = {
                name: {"kind": getattr(exc, "kind", type(exc).__name__), "message": str(exc)}
                for name, exc in errors.items()
            }
        return result


def to_jsonable(value: Any) -> Any:
    if isinstance(value, PollRate):
        return int(value)
    if hasattr(value, "as_dict"):
        return value.as_dict()
    return value
