"""Generation of the vertex arrays that draw the traces."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from dsoscope.ppresult import PPResult, SampleValues
from dsoscope.scopesettings import GraphFormat, ScopeSettings

BINS_PER_DIV = 50  # resolution of the histogram


class Interpolation(Enum):
    OFF = 0
    LINEAR = 1
    STEP = 2
    SINC = 3


@dataclass(frozen=True)
class ScreenGeometry:
    """Size of the scope screen in divs."""

    divs_time: float = 10.0
    divs_voltage: float = 8.0

    @property
    def margin_left(self) -> float:
        return -self.divs_time / 2

    @property
    def margin_right(self) -> float:
        return self.divs_time / 2


@dataclass
class ViewSettings:
    interpolation: Interpolation = Interpolation.LINEAR
    screen_width: int = 1000


def _empty_graph() -> np.ndarray:
    return np.zeros((0, 3), dtype=np.float32)


def _vertices(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    return np.column_stack((x, y, np.zeros_like(x))).astype(np.float32)


def _resize(graphs: list, size: int) -> None:
    del graphs[size:]
    graphs.extend(_empty_graph() for _ in range(size - len(graphs)))


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


class GraphGenerator:
    """Turns post processed samples into ready-to-draw vertex arrays."""

    SINC_WIDTH = 2  # two periods
    OVERSAMPLE = 5
    SINC_SIZE = SINC_WIDTH * OVERSAMPLE

    def __init__(
        self,
        scope: ScopeSettings,
        view: ViewSettings,
        geometry: ScreenGeometry | None = None,
    ) -> None:
        self.scope = scope
        self.view = view
        self.geometry = geometry or ScreenGeometry()
        self.ready = False
        pos = np.arange(1, self.SINC_SIZE + 1, dtype=float)
        t = pos * math.pi / self.OVERSAMPLE
        w = 0.54 + 0.46 * np.cos(pos * math.pi / self.SINC_SIZE)  # Hamming
        self._sinc = w * np.sin(t) / t

    def process(self, result: PPResult) -> None:
        if self.scope.horizontal.format == GraphFormat.TY:
            self.ready = True
            self._generate_ty_voltage(result)
            self._generate_ty_spectrum(result)
        else:
            self._generate_xy(result)

    def _volt_samples(self, channel: int, result: PPResult) -> SampleValues | None:
        data = result.data(channel)
        if not self.scope.voltage[channel].used or data is None or len(data.voltage.samples) == 0:
            return None
        return data.voltage

    def _spec_samples(self, channel: int, result: PPResult) -> SampleValues | None:
        data = result.data(channel)
        if not self.scope.spectrum[channel].used or data is None or len(data.spectrum.samples) == 0:
            return None
        return data.spectrum

    def _resample(self, samples: np.ndarray, slots: int) -> np.ndarray:
        """Upsample by OVERSAMPLE with a windowed sinc; `slots` input samples are used."""
        size = slots * self.OVERSAMPLE
        upsampled = np.zeros(size)
        taken = samples[:slots]
        upsampled[: len(taken) * self.OVERSAMPLE : self.OVERSAMPLE] = taken
        kernel = np.concatenate((self._sinc[::-1], [1.0], self._sinc))
        full = np.convolve(upsampled, kernel, mode="full")
        return full[self.SINC_SIZE : self.SINC_SIZE + size]

    def _generate_ty_voltage(self, result: PPResult) -> None:
        scope, geo = self.scope, self.geometry
        channels = len(scope.voltage)
        _resize(result.va_channel_voltage, channels)
        _resize(result.va_channel_histogram, channels)
        step = self.view.interpolation == Interpolation.STEP
        sinc = self.view.interpolation == Interpolation.SINC
        bin_count = int(BINS_PER_DIV * geo.divs_voltage)

        for channel in range(channels):
            source = self._volt_samples(channel, result)
            if source is None:
                result.va_channel_voltage[channel] = _empty_graph()
                result.va_channel_histogram[channel] = _empty_graph()
                continue

            samples = np.asarray(source.samples, dtype=float)
            horizontal_factor = source.interval / scope.horizontal.timebase
            dots = math.ceil(geo.divs_time / horizontal_factor)
            pre_trig_samples = int(scope.trigger.position * dots)
            leftmost_sample = int(result.triggered_position)
            if leftmost_sample:
                leftmost_sample -= pre_trig_samples + 1
            leftmost_position = 0
            if leftmost_sample < 0:
                leftmost_position = -leftmost_sample
                leftmost_sample = 0
            dots += 1  # n+1 dots for n lines

            gain = scope.gain(channel)
            offset = scope.voltage[channel].offset
            values = samples
            start = leftmost_sample

            if sinc and dots < self.view.screen_width:
                left = min(self.SINC_WIDTH, leftmost_sample)
                horizontal_factor /= self.OVERSAMPLE
                dots = int(geo.divs_time / horizontal_factor + 0.99 + 1)
                values = self._resample(samples[leftmost_sample:], left + dots + self.SINC_WIDTH)
                leftmost_position *= self.OVERSAMPLE
                start = left

            count = max(0, min(dots - leftmost_position, len(values) - 1 - start))
            positions = leftmost_position + np.arange(count)
            x = geo.margin_left + positions * horizontal_factor
            y_prev = values[start : start + count] / gain + offset
            y = values[start + 1 : start + 1 + count] / gain + offset

            if scope.histogram:
                shown = x < geo.margin_right - 1.1  # last div holds the histogram
                x_t, y_prev_t, y_t = x[shown], y_prev[shown], y[shown]
            else:
                x_t, y_prev_t, y_t = x, y_prev, y

            if step:
                xs = np.repeat(x_t, 2)
                ys = np.column_stack((y_prev_t, y_t)).ravel()
                result.va_channel_voltage[channel] = _vertices(xs, ys)
            else:
                result.va_channel_voltage[channel] = _vertices(x_t, y_t)

            histogram = _empty_graph()
            if scope.histogram:
                bins = _round_half_away(BINS_PER_DIV * (y + geo.divs_voltage / 2)).astype(int)
                bins = bins[(bins > 0) & (bins < bin_count)]
                counts = np.bincount(bins, minlength=bin_count)
                if scope.horizontal.format == GraphFormat.TY and counts.any():
                    filled = np.nonzero(counts)[0]
                    top = counts.max()
                    bar_y = filled / BINS_PER_DIV - geo.divs_voltage / 2 - channel / BINS_PER_DIV / 2
                    starts = np.full(len(filled), geo.margin_right)
                    ends = geo.margin_right - counts[filled] / top
                    xs = np.column_stack((starts, ends)).ravel()
                    ys = np.repeat(bar_y, 2)
                    histogram = _vertices(xs, ys)
            result.va_channel_histogram[channel] = histogram

    def _generate_ty_spectrum(self, result: PPResult) -> None:
        scope = self.scope
        self.ready = True
        _resize(result.va_channel_spectrum, len(scope.spectrum))
        for channel in range(len(scope.voltage)):
            source = self._spec_samples(channel, result)
            if source is None:
                result.va_channel_spectrum[channel] = _empty_graph()
                continue
            values = np.asarray(source.samples, dtype=float)
            horizontal_factor = source.interval / scope.horizontal.frequencybase
            x = np.arange(len(values)) * horizontal_factor - self.geometry.divs_time / 2
            spectrum = scope.spectrum[channel]
            y = values / spectrum.magnitude + spectrum.offset
            result.va_channel_spectrum[channel] = _vertices(x, y)

    def _generate_xy(self, result: PPResult) -> None:
        scope = self.scope
        channels = len(scope.voltage)
        _resize(result.va_channel_voltage, channels)
        result.va_channel_spectrum[:] = [_empty_graph() for _ in result.va_channel_spectrum]

        for channel in range(0, channels, 2):
            if channel + 1 == channels:
                result.va_channel_voltage[channel] = _empty_graph()
                continue
            x_channel, y_channel = channel, channel + 1
            x_source = self._volt_samples(x_channel, result)
            y_source = self._volt_samples(y_channel, result)
            if x_source is None or y_source is None:
                result.va_channel_voltage[x_channel] = _empty_graph()
                result.va_channel_voltage[y_channel] = _empty_graph()
                continue
            count = min(len(x_source.samples), len(y_source.samples))
            xs = np.asarray(x_source.samples[:count], dtype=float)
            ys = np.asarray(y_source.samples[:count], dtype=float)
            x_offset = (scope.trigger.position - 0.5) * self.geometry.divs_time
            y_offset = scope.voltage[y_channel].offset
            result.va_channel_voltage[y_channel] = _vertices(
                xs / scope.gain(x_channel) + x_offset,
                ys / scope.gain(y_channel) + y_offset,
            )