"""Spectrum, frequency and level analysis of the captured samples."""

from __future__ import annotations

import logging
import math

import numpy as np

from dsoscope.analysis import AnalysisSettings, WindowFunction
from dsoscope.graph import ScreenGeometry
from dsoscope.postprocessing import Processor
from dsoscope.ppresult import DataChannel, PPResult
from dsoscope.scopesettings import ScopeSettings
from dsoscope.windows import build_window

logger = logging.getLogger(__name__)

_INT_MAX = float(2**31 - 1)
_INT_MIN = float(-(2**31))

_NOTES = ("A", "A#", "B", "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#")


def calculate_note(frequency: float) -> str:
    """Return the musical note of an audio frequency with its deviation in cent.

    Frequencies outside 10 Hz .. 24 kHz give "".
    """
    if not 10 < frequency < 24000:
        return ""
    f = math.fmod(12 * math.log2(frequency / 440.0) + 120, 12.0)
    n = int(math.floor(f + 0.5))
    f -= n
    if n == 12:
        n = 0
    cent = int(100.0 * f)
    if cent:
        return f"♪ {_NOTES[n]}{'' if cent < 0 else '+'}{cent}"
    return f"♪ {_NOTES[n]}"


class SpectrumGenerator(Processor):
    """Calculates spectrum, levels, frequency, note and THD of every channel."""

    def __init__(
        self,
        scope: ScopeSettings,
        analysis: AnalysisSettings,
        geometry: ScreenGeometry | None = None,
    ) -> None:
        self.scope = scope
        self.analysis = analysis
        self.geometry = geometry or ScreenGeometry()
        self._window_function: WindowFunction | None = None
        self._window = np.zeros(0)

    def _window_for(self, sample_count: int) -> np.ndarray:
        function = self.analysis.spectrum_window
        if self._window_function != function or len(self._window) != sample_count:
            if self.scope.verbose_level > 5:
                logger.debug("SpectrumGenerator: calculate new window")
            self._window_function = function
            self._window = build_window(function, sample_count)
        return self._window

    def process(self, result: PPResult) -> None:
        for channel in range(result.channel_count()):
            channel_data = result.modifiable_data(channel)
            if len(channel_data.voltage.samples) < 2:
                channel_data.spectrum.interval = 0.0
                channel_data.spectrum.samples = []
                continue
            self._process_channel(channel, channel_data, result)

    def _displayed_range(self, channel_data: DataChannel, result: PPResult, sample_count: int) -> tuple[int, int]:
        horizontal_factor = channel_data.voltage.interval / self.scope.horizontal.timebase
        dots = int(self.geometry.divs_time / horizontal_factor + 0.99)
        pre_trig = int(self.scope.trigger.position * dots)
        left = int(result.triggered_position) - pre_trig
        right = left + dots
        left = max(left, 0)
        right = min(right, sample_count - 1)
        return left, right

    def _process_channel(self, channel: int, channel_data: DataChannel, result: PPResult) -> None:
        scope = self.scope
        samples = np.asarray(channel_data.voltage.samples, dtype=float)
        sample_count = len(samples)
        if scope.verbose_level > 5:
            logger.debug("SpectrumGenerator.process() %d sampleCount: %d", channel, sample_count)
        window = self._window_for(sample_count)

        channel_data.spectrum.interval = 1.0 / channel_data.voltage.interval / sample_count
        dft_length = sample_count // 2

        # peak-to-peak of the displayed part of the trace
        left, right = self._displayed_range(channel_data, result, sample_count)
        if left <= right:
            shown = samples[left:right + 1]
            channel_data.vmin = float(shown.min())
            channel_data.vmax = float(shown.max())
        else:
            channel_data.vmin = _INT_MAX
            channel_data.vmax = _INT_MIN

        dc = float(samples.mean())
        channel_data.dc = dc
        ac = samples - dc
        ac2 = float(np.mean(ac * ac))
        channel_data.ac = math.sqrt(ac2)
        channel_data.rms = math.sqrt(dc * dc + ac2)
        with np.errstate(divide="ignore"):
            channel_data.db = float(20.0 * np.log10(channel_data.rms)) - scope.analysis.spectrum_reference
        channel_data.pulse_width1 = result.pulse_width1
        channel_data.pulse_width2 = result.pulse_width2

        # magnitude square of the half spectrum; the last bin keeps its real part only
        transform = np.fft.rfft(window * ac)[: dft_length + 1]
        power = transform.real**2 + transform.imag**2
        power[dft_length] = transform[dft_length].real ** 2

        # autocorrelation = inverse transform of the power spectrum
        norm = 1.0 / dft_length / dft_length
        correlation = np.fft.irfft(power * norm, sample_count) * sample_count
        peak_corr_pos = self._correlation_peak(correlation, sample_count)

        # convert to dB relative to the reference level
        offset = -scope.analysis.spectrum_reference - 20 * math.log10(dft_length)
        limit = self.analysis.spectrum_limit
        with np.errstate(divide="ignore"):
            spectrum = 10 * np.log10(power) + offset
        spectrum = np.maximum(spectrum, limit)
        channel_data.spectrum.samples = spectrum
        channel_data.db_min = float(spectrum.min())
        channel_data.db_max = float(spectrum.max())
        peak_freq_pos = int(np.argmax(spectrum)) if channel_data.db_max > limit else 0

        peak_freq = channel_data.spectrum.interval * peak_freq_pos
        if (
            peak_freq_pos > peak_corr_pos
            or peak_freq_pos > 100
            or peak_corr_pos < 100
            or peak_corr_pos > sample_count // 4
        ):
            channel_data.frequency = peak_freq
        else:
            channel_data.frequency = 1.0 / (channel_data.voltage.interval * peak_corr_pos)
        if scope.verbose_level > 5:
            logger.debug(
                "SpectrumGenerator.process() %d freq: %d corr: %d", channel, peak_freq_pos, peak_corr_pos
            )

        channel_data.note = calculate_note(channel_data.frequency) if scope.analysis.show_note_value else ""

        if scope.analysis.calculate_thd:
            channel_data.thd = self._thd(channel_data, dft_length)

    @staticmethod
    def _correlation_peak(correlation: np.ndarray, sample_count: int) -> int:
        """Search from right to left for a maximum that is followed by a negative minimum."""
        peak = 0
        min_corr = 0.0
        max_corr = 0.0
        max_pos = 0
        for position in range(sample_count // 2, 1, -1):
            value = correlation[position]
            if value > max_corr:
                max_corr = value
                max_pos = position
                min_corr = 0.0
            elif value < min_corr:
                min_corr = value
                max_corr = 0.0
                peak = max_pos
        return peak

    @staticmethod
    def _thd(channel_data: DataChannel, dft_length: int) -> float:
        """Total harmonic distortion, -1 if the fundamental cannot be used."""
        spectrum = channel_data.spectrum.samples
        f1 = channel_data.frequency / channel_data.spectrum.interval
        if f1 < 1:
            return -1.0
        p1 = 10 ** (spectrum[int(math.floor(f1 + 0.5))] / 10)
        if p1 <= 0:
            return -1.0
        pn = 0.0
        fn = 2 * f1
        while fn < dft_length:
            pn += 10 ** (spectrum[int(math.floor(fn + 0.5))] / 10)
            fn += f1
        return math.sqrt(pn / p1)