"""The post processing chain that turns raw samples into results."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Sequence

from dsoscope.ppresult import PPResult

logger = logging.getLogger(__name__)

MATH_CHANNEL = 2


@dataclass
class DsoSamples:
    """Raw samples of one acquisition, as delivered by the scope control."""

    data: list[Sequence[float]] = field(default_factory=list)
    samplerate: float = 1e6
    clipped: int = 0  # bit n set: channel n was clipped
    live_trigger: bool = False
    triggered_position: int = 0
    pulse_width1: float = 0.0
    pulse_width2: float = 0.0
    math_voltage_unit: str = "V"
    tag: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class Processor(ABC):
    """A step of the post processing chain."""

    @abstractmethod
    def process(self, result: PPResult) -> None:
        """Work on the result in place."""


def convert_data(source: DsoSamples, destination: PPResult) -> None:
    """Copy the relevant parts of the raw samples into a fresh result."""
    with source.lock:
        if source.triggered_position:
            destination.software_trigger_triggered = source.live_trigger
            destination.triggered_position = source.triggered_position
            destination.pulse_width1 = source.pulse_width1
            destination.pulse_width2 = source.pulse_width2
        else:
            destination.software_trigger_triggered = False
            destination.triggered_position = 0
            destination.pulse_width1 = 0.0
            destination.pulse_width2 = 0.0

        for channel, raw in enumerate(source.data):
            if len(raw) == 0:
                continue
            channel_data = destination.modifiable_data(channel)
            channel_data.voltage.interval = 1.0 / source.samplerate
            channel_data.voltage.samples = list(raw)
            channel_data.valid = not (source.clipped & (1 << channel))

        math_channel = destination.data(MATH_CHANNEL)
        if math_channel is not None:
            math_channel.voltage_unit = source.math_voltage_unit
        destination.tag = source.tag


class PostProcessing:
    """Feeds every input through the registered processors in order of registration.

    Callbacks connected with `connect` receive each finished result.
    """

    def __init__(self, channel_count: int, verbose_level: int = 0) -> None:
        self.channel_count = channel_count
        self.verbose_level = verbose_level
        self._processors: list[Processor] = []
        self._callbacks: list[Callable[[PPResult], object]] = []
        self._processing = True

    def register_processor(self, processor: Processor) -> None:
        self._processors.append(processor)

    def connect(self, callback: Callable[[PPResult], object]) -> None:
        """Call `callback` with every finished result."""
        self._callbacks.append(callback)

    def stop(self) -> None:
        self._processing = False

    def input(self, data: DsoSamples | None) -> PPResult | None:
        """Process one set of samples; return the result, or None if nothing was done."""
        if data is None or not self._processing:
            return None
        if self.verbose_level > 4:
            logger.debug("PostProcessing.input() %s", data.tag)
        result = PPResult(self.channel_count)
        convert_data(data, result)
        for processor in self._processors:
            processor.process(result)
        for callback in self._callbacks:
            callback(result)
        return result