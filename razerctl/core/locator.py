"""Locate vendor devices among the nodes reported by the device bus."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from razerctl.core.codec import DEVICE_SERIAL
from razerctl.core.errors import DeviceNotFoundError, EnumerationError
from razerctl.core.model import DeviceHandle, DeviceSignature
from razerctl.stores.base import AttributeStore, DeviceBus

LOGGER = logging.getLogger(__name__)


class DeviceLocator:
    def __init__(self, bus: DeviceBus, store: AttributeStore, signature: DeviceSignature) -> None:
        self.bus = bus
        self.store = store
        self.signature = signature

    def _candidates(self) -> Iterator[DeviceHandle]:
        try:
            nodes = list(self.bus.scan(self.signature.subsystem))
        except OSError as exc:
            raise EnumerationError(f"Could not enumerate '{self.signature.subsystem}' devices: {exc}") from exc

        for node in nodes:
            hid_id = node.properties.get(self.signature.id_property)
            if not self.signature.matches(hid_id):
                continue
            yield DeviceHandle(node=node, sys_path=node.sys_path, hid_id=hid_id)

    def _serial(self, handle: DeviceHandle) -> bytes | None:
        try:
            return self.store.read_attribute(handle.node, DEVICE_SERIAL)
        except OSError as exc:
            raise EnumerationError(f"Could not read {DEVICE_SERIAL} of {handle.sys_path}: {exc}") from exc

    def find_all(self) -> list[DeviceHandle]:
        handles: list[DeviceHandle] = []
        for handle in self._candidates():
            if self._serial(handle) is None:
                # sub-interfaces of a device carry no serial of their own
                LOGGER.debug("skipping %s: no %s", handle.sys_path, DEVICE_SERIAL)
                continue
            handles.append(handle)
        LOGGER.debug("found %d device(s) for vendor %04x", len(handles), self.signature.vendor_id)
        return handles

    def find_by_serial(self, serial: str) -> DeviceHandle:
        """Return the first device reporting ``serial``.

        Serials are not guaranteed unique by the bus; when two nodes report
        the same serial, whichever the scan yields first is returned.
        """
        wanted = serial.encode("utf-8")
        for handle in self._candidates():
            if self._serial(handle) == wanted:
                LOGGER.debug("serial %s -> %s", serial, handle.sys_path)
                return handle
        raise DeviceNotFoundError(serial)
