"""Attribute store and device bus interfaces."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol


class BusNode(Protocol):
    sys_path: str
    properties: Mapping[str, str]


class DeviceBus(Protocol):
    def scan(self, subsystem: str) -> Iterable[BusNode]:
        """Yield every node registered under a subsystem."""


class AttributeStore(Protocol):
    def read_attribute(self, node: Any, name: str) -> bytes | None:
        """Return the raw attribute value, or None if the node does not report it.

        Raise OSError when the attribute exists but cannot be read.
        """

    def write_attribute(self, node: Any, name: str, data: bytes) -> None:
        """Write raw bytes to an attribute in one call; raise OSError on refusal."""
