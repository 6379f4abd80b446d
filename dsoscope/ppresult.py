"""Results of the post processing chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass
class SampleValues:
    """An array of sample values and the interval between two of them."""

    samples: Sequence[float] = field(default_factory=list)
    interval: float = 0.0


@dataclass
class DataChannel:
    """The analysed data of one channel."""

    voltage: SampleValues = field(default_factory=SampleValues)  # time domain (V)
    spectrum: SampleValues = field(default_factory=SampleValues)  # frequency domain (dB)
    valid: bool = True  # not clipped, distorted, no dropouts
    vmin: float = 0.0  # minimum of the displayed part of the trace
    vmax: float = 0.0  # maximum of the displayed part of the trace
    rms: float = 0.0  # DC + AC rms value
    db_min: float = 0.0
    db_max: float = 0.0
    dc: float = 0.0
    ac: float = 0.0
    db: float = 0.0
    frequency: float = 0.0
    note: str = ""
    thd: float = 0.0
    pulse_width1: float = 0.0
    pulse_width2: float = 0.0
    voltage_unit: str = "V"


class PPResult:
    """Post processing result: analysed channel data and the graphs to draw."""

    def __init__(self, channel_count: int) -> None:
        self._analyzed_data = [DataChannel() for _ in range(channel_count)]
        self.software_trigger_triggered = False
        self.triggered_position = 0  # samples to skip to show a triggered trace
        self.pulse_width1 = 0.0
        self.pulse_width2 = 0.0
        self.tag = 0
        self.va_channel_spectrum: list[Any] = []
        self.va_channel_voltage: list[Any] = []
        self.va_channel_histogram: list[Any] = []

    def data(self, channel: int) -> DataChannel | None:
        """Return the data of a channel, or None if there is no such channel."""
        if not 0 <= channel < len(self._analyzed_data):
            return None
        return self._analyzed_data[channel]

    def modifiable_data(self, channel: int) -> DataChannel:
        """Return the data of a channel for modification; IndexError if absent."""
        if not 0 <= channel < len(self._analyzed_data):
            raise IndexError(f"no channel {channel}")
        return self._analyzed_data[channel]

    def sample_count(self) -> int:
        """Sample count of the first channel."""
        if not self._analyzed_data:
            raise IndexError("result has no channels")
        return len(self._analyzed_data[0].voltage.samples)

    def channel_count(self) -> int:
        return len(self._analyzed_data)