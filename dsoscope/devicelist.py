"""Entries of the device selection list."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DeviceListEntry:
    """A found USB device and whether it can be used."""

    id: int = 0
    name: str = ""
    can_connect: bool = False
    need_firmware: bool = False
    error_message: str = ""

    def status(self) -> str:
        if self.error_message:
            return self.error_message
        if self.can_connect:
            return "Ready"
        if self.need_firmware:
            return "Firmware upload"
        return "Cannot connect"