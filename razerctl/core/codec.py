"""Wire codecs for the typed attributes a Razer device exposes.

Each codec turns the raw bytes read from the attribute store into a typed
value and, for writable attributes, turns a typed value back into the exact
bytes the firmware accepts. A store reporting no value (``None``) is absence,
which is never an error for optional attributes; anything reported that does
not fit the wire format is a hard error.
"""

from __future__ import annotations

import re
import struct
from typing import Any

from razerctl.core.errors import (
    InvalidAttributeError,
    MissingAttributeError,
    UnsupportedValueError,
)
from razerctl.core.model import PollRate, Resolution

_DECIMAL_RE = re.compile(r"[0-9]+")
_U8_MAX = 0xFF
_U16_MAX = 0xFFFF


class AttributeCodec:
    name: str = ""
    writable: bool = False
    mandatory: bool = False

    def decode(self, raw: bytes | None) -> Any:
        if raw is None:
            if self.mandatory:
                raise MissingAttributeError(self.name, "attribute not reported by device")
            return None
        return self.decode_value(raw)

    def decode_value(self, raw: bytes) -> Any:
        raise NotImplementedError

    def encode(self, value: Any) -> bytes:
        raise InvalidAttributeError(self.name, "attribute is read-only")

    def _ascii(self, raw: bytes) -> str:
        try:
            return bytes(raw).decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidAttributeError(self.name, f"expected ASCII text, got {bytes(raw)!r}") from exc

    def _unsigned(self, text: str, maximum: int, raw: bytes) -> int:
        if not _DECIMAL_RE.fullmatch(text):
            raise InvalidAttributeError(self.name, f"expected a decimal number, got {raw!r}")
        if len(text.lstrip("0")) > len(str(maximum)):
            raise InvalidAttributeError(self.name, f"value {text[:16]}... exceeds {maximum}")
        number = int(text)
        if number > maximum:
            raise InvalidAttributeError(self.name, f"value {number} exceeds {maximum}")
        return number


class ByteCountCodec(AttributeCodec):
    """Unsigned 8-bit decimal, e.g. ``charge_level``."""

    def __init__(self, name: str) -> None:
        self.name = name

    def decode_value(self, raw: bytes) -> int:
        return self._unsigned(self._ascii(raw), _U8_MAX, raw)


class ResolutionCodec(AttributeCodec):
    """Reads ``X:Y`` text but writes two packed big-endian u16 values.

    The driver reports the resolution as text yet only accepts the packed
    binary form on write, so the write never goes through the text path.
    """

    writable = True

    def __init__(self, name: str) -> None:
        self.name = name

    def decode_value(self, raw: bytes) -> Resolution:
        text = self._ascii(raw)
        x, sep, y = text.partition(":")
        if not sep:
            raise InvalidAttributeError(self.name, f"expected X:Y, got {raw!r}")
        return Resolution(
            x=self._unsigned(x, _U16_MAX, raw),
            y=self._unsigned(y, _U16_MAX, raw),
        )

    def encode(self, value: Resolution | tuple[int, int]) -> bytes:
        if isinstance(value, Resolution):
            x, y = value.x, value.y
        elif isinstance(value, tuple) and len(value) == 2:
            x, y = value
        else:
            raise UnsupportedValueError(self.name, f"expected a Resolution or an (x, y) pair, got {value!r}")
        for axis, number in (("x", x), ("y", y)):
            if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= _U16_MAX:
                raise UnsupportedValueError(self.name, f"{axis}={number!r} is outside 0..{_U16_MAX}")
        return struct.pack(">HH", x, y)


class PollRateCodec(AttributeCodec):
    """Decimal text restricted to the rates the hardware supports."""

    writable = True

    def __init__(self, name: str) -> None:
        self.name = name
        self._by_text = {str(int(rate)): rate for rate in PollRate}

    def decode_value(self, raw: bytes) -> PollRate:
        text = self._ascii(raw)
        rate = self._by_text.get(text)
        if rate is None:
            allowed = ", ".join(self._by_text)
            raise UnsupportedValueError(self.name, f"{text!r} is not one of {allowed}")
        return rate

    def coerce(self, value: PollRate | int | str) -> PollRate:
        if isinstance(value, PollRate):
            return value
        text = str(value).strip()
        rate = self._by_text.get(text)
        if rate is None:
            allowed = ", ".join(self._by_text)
            raise UnsupportedValueError(self.name, f"{value!r} is not one of {allowed}")
        return rate

    def encode(self, value: PollRate | int | str) -> bytes:
        return str(int(self.coerce(value))).encode("ascii")


class TextCodec(AttributeCodec):
    """UTF-8 identity text, mandatory on every reportable device."""

    mandatory = True

    def __init__(self, name: str) -> None:
        self.name = name

    def decode_value(self, raw: bytes) -> str:
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidAttributeError(self.name, f"expected UTF-8 text, got {bytes(raw)!r}") from exc


CHARGE_LEVEL = "charge_level"
DPI = "dpi"
POLL_RATE = "poll_rate"
DEVICE_TYPE = "device_type"
DEVICE_SERIAL = "device_serial"
FIRMWARE_VERSION = "firmware_version"

ATTRIBUTES: dict[str, AttributeCodec] = {
    DEVICE_TYPE: TextCodec(DEVICE_TYPE),
    DEVICE_SERIAL: TextCodec(DEVICE_SERIAL),
    FIRMWARE_VERSION: TextCodec(FIRMWARE_VERSION),
    CHARGE_LEVEL: ByteCountCodec(CHARGE_LEVEL),
    DPI: ResolutionCodec(DPI),
    POLL_RATE: PollRateCodec(POLL_RATE),
}

IDENTITY_ATTRIBUTES = (DEVICE_TYPE, DEVICE_SERIAL, FIRMWARE_VERSION)


def codec_for(name: str) -> AttributeCodec | None:
    return ATTRIBUTES.get(name)


def writable_attributes() -> tuple[str, ...]:
    return tuple(name for name, codec in ATTRIBUTES.items() if codec.writable)
