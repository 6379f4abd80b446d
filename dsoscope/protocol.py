"""Control commands and EEPROM calibration layout of the 6022 oscilloscope."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

ChannelID = int
RecordLengthID = int

GAIN_STEPS = 8
CHANNEL_NUMBER = 2


class ControlCode(IntEnum):
    """Vendor request codes understood by the scope firmware."""

    CONTROL_INTERNAL = 0xA0
    CONTROL_EEPROM = 0xA2
    CONTROL_MEMORY = 0xA3
    CONTROL_SETGAIN_CH1 = 0xE0
    CONTROL_SETGAIN_CH2 = 0xE1
    CONTROL_SETSAMPLERATE = 0xE2
    CONTROL_STARTSAMPLING = 0xE3
    CONTROL_SETNUMCHANNELS = 0xE4
    CONTROL_SETCOUPLING = 0xE5
    CONTROL_SETCALFREQ = 0xE6


class UsedChannels(IntEnum):
    """The enabled channels."""

    USED_NONE = 0
    USED_CH1 = 1
    USED_CH2 = 2
    USED_CH1CH2 = 3


CONTROL_NAMES = (
    "SETGAIN_CH1",
    "SETGAIN_CH2",
    "SETSAMPLERATE",
    "STARTSAMPLING",
    "SETNUMCHANNELS",
    "SETCOUPLING",
    "SETCALFREQ",
)


class ControlCommand:
    """A control transfer: request code, value and a payload of fixed size."""

    def __init__(self, code: ControlCode, size: int) -> None:
        self.code = int(code)
        self.data = bytearray(size)
        self.value = 0
        self.pending = False

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code=0x{self.code:02x}, value={self.value}, "
            f"data={self.data.hex(' ')}, pending={self.pending})"
        )


class ControlSetGainCh1(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETGAIN_CH1, 2)
        self.set_gain(1, 7)

    def set_gain(self, gain: int, index: int) -> None:
        self.data[0] = gain
        self.data[1] = index


class ControlSetGainCh2(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETGAIN_CH2, 2)
        self.set_gain(1, 7)

    def set_gain(self, gain: int, index: int) -> None:
        self.data[0] = gain
        self.data[1] = index


class ControlSetSamplerate(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETSAMPLERATE, 2)
        self.set_samplerate(1, 7)

    def set_samplerate(self, sample_id: int, index: int) -> None:
        self.data[0] = sample_id
        self.data[1] = index


class ControlSetNumChannels(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETNUMCHANNELS, 1)
        self.set_num_channels(2)

    def set_num_channels(self, value: int) -> None:
        self.data[0] = value


class ControlStartSampling(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_STARTSAMPLING, 1)
        self.data[0] = 0x01


class ControlStopSampling(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_STARTSAMPLING, 1)
        self.data[0] = 0x00


class ControlSetCalFreq(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETCALFREQ, 1)
        self.set_cal_freq(1)  # 1 kHz

    def set_cal_freq(self, value: int) -> None:
        self.data[0] = value


class ControlSetCoupling(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_SETCOUPLING, 1)
        self.ch1_coupling = 0x01
        self.ch2_coupling = 0x10
        self.data[0] = 0x11

    def set_coupling(self, channel: ChannelID, dc: bool) -> None:
        if channel == 0:
            self.ch1_coupling = 0x01 if dc else 0x00
        else:
            self.ch2_coupling = 0x10 if dc else 0x00
        self.data[0] = 0xFF & (self.ch2_coupling | self.ch1_coupling)


Steps = tuple[tuple[int, ...], ...]

_STEPS_SIZE = GAIN_STEPS * CHANNEL_NUMBER


def _parse_steps(block: bytes) -> Steps:
    return tuple(
        tuple(block[step * CHANNEL_NUMBER:(step + 1) * CHANNEL_NUMBER])
        for step in range(GAIN_STEPS)
    )


def _steps_bytes(steps: Steps) -> bytes:
    if len(steps) != GAIN_STEPS or any(len(row) != CHANNEL_NUMBER for row in steps):
        raise ValueError(f"steps must be {GAIN_STEPS} rows of {CHANNEL_NUMBER} values")
    return bytes(value for row in steps for value in row)


@dataclass(frozen=True)
class CalibrationValues:
    """Calibration block as stored in EEPROM; every value is an offset-binary byte.

    Each field holds 8 gain steps of 2 channel values.
    """

    offset_low_speed: Steps
    offset_high_speed: Steps
    gain: Steps
    fine_low_speed: Steps
    fine_high_speed: Steps

    SIZE: ClassVar[int] = 5 * _STEPS_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> "CalibrationValues":
        if len(data) != cls.SIZE:
            raise ValueError(f"calibration block must be {cls.SIZE} bytes, got {len(data)}")
        blocks = [
            _parse_steps(bytes(data[i:i + _STEPS_SIZE]))
            for i in range(0, cls.SIZE, _STEPS_SIZE)
        ]
        return cls(*blocks)

    def to_bytes(self) -> bytes:
        return b"".join(
            _steps_bytes(steps)
            for steps in (
                self.offset_low_speed,
                self.offset_high_speed,
                self.gain,
                self.fine_low_speed,
                self.fine_high_speed,
            )
        )


class ControlGetCalibration(ControlCommand):
    def __init__(self) -> None:
        super().__init__(ControlCode.CONTROL_EEPROM, CalibrationValues.SIZE)
        self.value = 8  # EEPROM offset of the calibration values
        self.data[0] = 0x01