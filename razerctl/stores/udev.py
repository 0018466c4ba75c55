"""udev device bus and sysfs attribute store, backed by ``pyudev``."""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterator

import pyudev

from razerctl.core.errors import EnumerationError

LOGGER = logging.getLogger(__name__)


class UdevBus:
    def scan(self, subsystem: str) -> Iterator[pyudev.Device]:
        try:
            context = pyudev.Context()
            devices = list(context.list_devices(subsystem=subsystem))
        except ImportError as exc:
            raise EnumerationError(f"libudev is not available: {exc}") from exc
        except OSError as exc:
            raise EnumerationError(f"Could not enumerate '{subsystem}' devices: {exc}") from exc
        LOGGER.debug("udev reported %d %s device(s)", len(devices), subsystem)
        return iter(devices)


class UdevStore:
    """Reads and writes the sysfs attribute files of a udev device directly.

    Both directions bypass udev: its sysattr values are cached per device
    object, and its text-based setter cannot carry the raw binary payloads
    some driver attributes take.
    """

    def read_attribute(self, node: pyudev.Device, name: str) -> bytes | None:
        path = os.path.join(node.sys_path, name)
        try:
            with open(path, "rb") as fd:
                value = fd.read()
        except FileNotFoundError:
            LOGGER.debug("read %s -> not reported", path)
            return None
        value = value.removesuffix(b"\n")
        LOGGER.debug("read %s -> %r", path, value)
        return value

    def write_attribute(self, node: pyudev.Device, name: str, data: bytes) -> None:
        path = os.path.join(node.sys_path, name)
        LOGGER.debug("write %s <- %s", path, data.hex())
        with open(path, "wb", buffering=0) as fd:
            written = fd.write(data)
        if written != len(data):
            raise OSError(errno.EIO, f"short write ({written} of {len(data)} bytes)", path)
