"""Spectrum analysis settings and window functions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class WindowFunction(IntEnum):
    """Window functions applied to the samples before the DFT."""

    RECTANGULAR = 0
    HANN = 1
    HAMMING = 2
    COSINE = 3
    LANCZOS = 4
    TRIANGULAR = 5
    BARTLETT = 6
    BARTLETT_HANN = 7
    GAUSS = 8
    KAISER = 9
    BLACKMAN = 10
    NUTTALL = 11
    BLACKMAN_HARRIS = 12
    BLACKMAN_NUTTALL = 13
    FLATTOP = 14


LAST_WINDOW_FUNCTION = WindowFunction.FLATTOP

_WINDOW_NAMES = {
    WindowFunction.RECTANGULAR: "Rectangular",
    WindowFunction.HANN: "Hann",
    WindowFunction.HAMMING: "Hamming",
    WindowFunction.COSINE: "Cosine",
    WindowFunction.LANCZOS: "Lanczos",
    WindowFunction.TRIANGULAR: "Triangular",
    WindowFunction.BARTLETT: "Bartlett",
    WindowFunction.BARTLETT_HANN: "Bartlett-Hann",
    WindowFunction.GAUSS: "Gauss",
    WindowFunction.KAISER: "Kaiser",
    WindowFunction.BLACKMAN: "Blackman",
    WindowFunction.NUTTALL: "Nuttall",
    WindowFunction.BLACKMAN_HARRIS: "Blackman-Harris",
    WindowFunction.BLACKMAN_NUTTALL: "Blackman-Nuttall",
    WindowFunction.FLATTOP: "Flat top",
}


def window_function_string(window: WindowFunction) -> str:
    """Return the label of a window function, or "" for an unknown value."""
    try:
        return _WINDOW_NAMES[WindowFunction(window)]
    except ValueError:
        return ""


@dataclass
class AnalysisSettings:
    """Settings for the spectrum analysis."""

    spectrum_window: WindowFunction = WindowFunction.HAMMING
    spectrum_limit: float = -60.0  # minimum magnitude of the spectrum in dB
    reuse_fft_plan: bool = False