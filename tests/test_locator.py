from __future__ import annotations

import pytest

from fake_udev import FakeBus, FakeNode, FakeStore, razer_node
from razerctl.core.device import RazerDevice
from razerctl.core.errors import DeviceNotFoundError, EnumerationError
from razerctl.core.locator import DeviceLocator
from razerctl.core.model import DeviceSignature


def _locator(nodes: list[FakeNode], signature: DeviceSignature | None = None) -> DeviceLocator:
    return DeviceLocator(FakeBus(nodes), FakeStore(), signature or DeviceSignature())


@pytest.mark.parametrize(
    "hid_id, expected",
    [
        ("0003:00001532:0099", True),
        ("0005:00001532:00AB", True),
        ("0003:1532:0099", True),
        ("0003:0000046D:C52B", False),
        ("0003:00001532", False),
        ("0003:15_32:0099", False),
        ("0003: 1532:0099", False),
        ("0003:0x1532:0099", False),
        ("0003:+1532:0099", False),
        ("garbage", False),
        ("", False),
        (None, False),
    ],
)
def test_signature_matches_vendor_segment(hid_id, expected) -> None:
    assert DeviceSignature().matches(hid_id) is expected


def test_find_all_filters_vendor_and_serial() -> None:
    razer = razer_node("AB12")
    interface = razer_node(None)
    logitech = razer_node("LG01", hid_id="0003:0000046D:C52B")
    locator = _locator([razer, interface, logitech])

    handles = locator.find_all()

    assert [h.node for h in handles] == [razer]
    assert handles[0].hid_id == "0003:00001532:0099"


def test_find_all_only_scans_configured_subsystem() -> None:
    usb = razer_node("USB1")
    usb.subsystem = "usb"
    bus = FakeBus([usb])
    locator = DeviceLocator(bus, FakeStore(), DeviceSignature())

    assert locator.find_all() == []
    assert bus.scans == ["hid"]


def test_vendor_match_is_case_insensitive_for_substituted_signature() -> None:
    upper = razer_node("UP01", hid_id="0003:0000ABCD:0001")
    lower = razer_node("LO01", hid_id="0003:0000abcd:0002")
    razer = razer_node("RZ01")
    locator = _locator([upper, lower, razer], DeviceSignature(vendor_id=0xABCD))

    assert [h.node for h in locator.find_all()] == [upper, lower]


def test_find_by_serial_returns_exact_match() -> None:
    first = razer_node("AB12")
    second = razer_node("CD34")
    locator = _locator([first, second])

    handle = locator.find_by_serial("CD34")
    assert handle.node is second
    assert RazerDevice(handle, FakeStore()).identity().serial == "CD34"


def test_find_by_serial_does_not_match_prefix() -> None:
    locator = _locator([razer_node("AB123")])
    with pytest.raises(DeviceNotFoundError):
        locator.find_by_serial("AB12")


def test_find_by_serial_not_found_reports_serial() -> None:
    locator = _locator([razer_node("AB12", hid_id="0003:0000046D:C52B")])
    with pytest.raises(DeviceNotFoundError) as exc:
        locator.find_by_serial("AB12")
    assert exc.value.serial == "AB12"
    assert "AB12" in str(exc.value)


def test_find_by_serial_duplicate_serial_first_wins() -> None:
    first = razer_node("DUP", sys_path="/sys/devices/a")
    second = razer_node("DUP", sys_path="/sys/devices/b")
    locator = _locator([first, second])

    assert locator.find_by_serial("DUP").sys_path == "/sys/devices/a"


def test_bus_failure_raises_enumeration_error() -> None:
    class BrokenBus:
        def scan(self, subsystem: str):
            raise PermissionError(13, "Permission denied")

    locator = DeviceLocator(BrokenBus(), FakeStore(), DeviceSignature())
    with pytest.raises(EnumerationError):
        locator.find_all()
    with pytest.raises(EnumerationError):
        locator.find_by_serial("AB12")


def test_unreadable_serial_raises_enumeration_error() -> None:
    class UnreadableStore(FakeStore):
        def read_attribute(self, node, name):
            raise PermissionError(13, "Permission denied")

    locator = DeviceLocator(FakeBus([razer_node("AB12")]), UnreadableStore(), DeviceSignature())
    with pytest.raises(EnumerationError):
        locator.find_all()
