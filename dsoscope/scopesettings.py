"""Settings of the oscilloscope: axes, trigger, channels and analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Sequence, TypeVar

T = TypeVar("T")


class CursorShape(IntEnum):
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2
    RECTANGULAR = 3


class GraphFormat(IntEnum):
    TY = 0
    XY = 1


class TriggerMode(IntEnum):
    AUTO = 0
    NORMAL = 1
    SINGLE = 2
    ROLL = 3


class Slope(Enum):
    POSITIVE = 0
    NEGATIVE = 1


def _default_cursor_pos() -> list[tuple[float, float]]:
    return [(-1.0, -1.0), (1.0, 1.0)]


@dataclass
class ScopeCursor:
    """Cursor shape and the two cursor positions in divs."""

    shape: CursorShape = CursorShape.NONE
    pos: list[tuple[float, float]] = field(default_factory=_default_cursor_pos)


@dataclass
class ScopeHorizontal:
    format: GraphFormat = GraphFormat.TY
    frequencybase: float = 1e3  # Hz/div
    cursor: ScopeCursor = field(default_factory=ScopeCursor)
    record_length: int = 0
    timebase: float = 1e-3  # s/div
    max_timebase: float = 1.0
    acquire_interval: float = 0.001  # minimal time between captured frames
    samplerate: float = 1e6
    dots_on_screen: int = 0
    calfreq: float = 1e3


@dataclass
class ScopeTrigger:
    mode: TriggerMode = TriggerMode.AUTO
    position: float = 0.5  # pretrigger position, middle of screen
    slope: Slope = Slope.POSITIVE
    source: int = 0
    smooth: int = 0


@dataclass
class ScopeChannel:
    name: str = ""
    used: bool = False
    visible: bool = False
    cursor: ScopeCursor = field(default_factory=ScopeCursor)


@dataclass
class ScopeSpectrum(ScopeChannel):
    offset: float = 0.0  # divs
    magnitude: float = 20.0  # dB/div


@dataclass
class ScopeAnalysis:
    spectrum_reference: float = 0.0  # dBV
    calculate_dummy_load: bool = False
    dummy_load: int = 50  # Ohm
    db_suffix_strings: tuple[str, str, str] = ("V", "u", "m")
    db_suffix_index: int = 0
    calculate_thd: bool = False
    show_note_value: bool = False

    def db_suffix(self, index: int | None = None) -> str:
        """Return the dB suffix at index, the current one if index is None, "" if invalid."""
        if index is None:
            return self.db_suffix_strings[self.db_suffix_index]
        if 0 <= index < len(self.db_suffix_strings):
            return self.db_suffix_strings[index]
        return ""


@dataclass
class ScopeVoltage(ScopeChannel):
    offset: float = 0.0  # divs
    trigger: float = 0.0  # V
    gain_step_index: int = 6
    coupling_or_math_index: int = 0
    inverted: bool = False
    probe_attn: float = 1.0


def _gain_steps() -> list[float]:
    return [2e-2, 5e-2, 1e-1, 2e-1, 5e-1, 1e0, 2e0, 5e0, 1e1]


def _math_gain_steps() -> list[float]:
    return [2e-2, 5e-2, 1e-1, 2e-1, 5e-1, 1e0, 2e0, 5e0, 1e1, 2e1, 5e1, 1e2, 2e2, 5e2, 1e3]


@dataclass
class ScopeSettings:
    """All scope settings; the last voltage channel is the math channel."""

    gain_steps: list[float] = field(default_factory=_gain_steps)
    math_gain_steps: list[float] = field(default_factory=_math_gain_steps)
    spectrum: list[ScopeSpectrum] = field(default_factory=list)
    voltage: list[ScopeVoltage] = field(default_factory=list)
    horizontal: ScopeHorizontal = field(default_factory=ScopeHorizontal)
    trigger: ScopeTrigger = field(default_factory=ScopeTrigger)
    analysis: ScopeAnalysis = field(default_factory=ScopeAnalysis)
    verbose_level: int = 0
    tool_tip_visible: int = 1
    do_not_translate: bool = False
    histogram: bool = False
    has_ac_coupling: bool = False
    has_ac_modification: bool = False
    live_calibration_active: bool = False

    def gain(self, channel: int) -> float:
        """Volts per div of a channel, including probe attenuation."""
        voltage = self.voltage[channel]
        steps = self.gain_steps if channel < len(self.voltage) - 1 else self.math_gain_steps
        return steps[voltage.gain_step_index] * voltage.probe_attn

    def any_used(self, channel: int) -> bool:
        return self.voltage[channel].used or self.spectrum[channel].used

    def coupling(self, channel: int, couplings: Sequence[T]) -> T:
        return couplings[self.voltage[channel].coupling_or_math_index]

    def count_channels(self) -> int:
        return len(self.voltage)

    def get_marker(self, marker: int, margin_left: float, margin_right: float) -> float:
        x = self.horizontal.cursor.pos[marker][0] if marker < 2 else 0.0
        return max(margin_left, min(x, margin_right))

    def set_marker(self, marker: int, value: float) -> None:
        if 0 <= marker < 2:
            _, y = self.horizontal.cursor.pos[marker]
            self.horizontal.cursor.pos[marker] = (value, y)