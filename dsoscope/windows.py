"""Tapering windows for the spectrum analysis."""

from __future__ import annotations

import math

import numpy as np

from dsoscope.analysis import WindowFunction


def besseli0(x: float) -> float:
    """Modified Bessel function of the first kind, order zero (series expansion)."""
    y = 1.0
    s = 1.0
    x2 = x * x
    n = 1.0
    while s > y * 1.0e-9:
        s *= x2 / 4.0 / (n * n)
        y += s
        n += 1
    return y


def _cosine_sum(n: np.ndarray, big_n: float, coefficients: tuple[float, ...]) -> np.ndarray:
    result = np.zeros_like(n)
    for k, a in enumerate(coefficients):
        sign = -1.0 if k % 2 else 1.0
        result = result + sign * a * np.cos(2 * k * math.pi * n / big_n)
    return result


def build_window(function: WindowFunction, sample_count: int) -> np.ndarray:
    """Return the window of the given length, scaled so that 1 V rms reads as 0 dBV.

    The scaling makes the area under every window equal to that of the
    rectangular window, times sqrt(0.5).
    """
    if sample_count < 1:
        raise ValueError("sample_count must be at least 1")
    function = WindowFunction(function)
    big_n = float(sample_count - 1)
    n = np.arange(sample_count, dtype=float)

    with np.errstate(divide="ignore", invalid="ignore"):
        if function == WindowFunction.HANN:
            window = 0.5 * (1.0 - np.cos(2.0 * math.pi * n / big_n))
        elif function == WindowFunction.HAMMING:
            a0 = 0.54
            window = a0 - (1 - a0) * np.cos(2.0 * math.pi * n / big_n)
        elif function == WindowFunction.COSINE:
            window = np.sin(math.pi * n / big_n)
        elif function == WindowFunction.LANCZOS:
            p = (2.0 * n / big_n - 1.0) * math.pi
            safe = np.where(p != 0, p, 1.0)
            window = np.where(p != 0, np.sin(safe) / safe, 1.0)
        elif function == WindowFunction.TRIANGULAR:
            window = 2.0 / sample_count * (sample_count // 2 - np.abs(n - big_n / 2.0))
        elif function == WindowFunction.BARTLETT:
            window = 2.0 / big_n * (big_n / 2 - np.abs(n - big_n / 2.0))
        elif function == WindowFunction.BARTLETT_HANN:
            window = 0.62 - 0.48 * np.abs(n / big_n - 0.5) - 0.38 * np.cos(2.0 * math.pi * n / big_n)
        elif function == WindowFunction.GAUSS:
            sigma = 0.3
            w = (n - big_n / 2.0) / (sigma * big_n / 2.0)
            window = np.exp(-(w * w) / 2)
        elif function == WindowFunction.KAISER:
            beta = math.pi * 2.75
            bb = besseli0(beta)
            window = np.array(
                [besseli0(beta * math.sqrt(4.0 * k * (big_n - k)) / big_n) / bb for k in range(sample_count)]
            )
        elif function == WindowFunction.BLACKMAN:
            alpha = 0.16
            window = (
                (1 - alpha) / 2
                - 0.5 * np.cos(2.0 * math.pi * n / big_n)
                + alpha / 2 * np.cos(4.0 * math.pi * n / big_n)
            )
        elif function == WindowFunction.NUTTALL:
            window = _cosine_sum(n, big_n, (0.355768, 0.487396, 0.144232, 0.012604))
        elif function == WindowFunction.BLACKMAN_HARRIS:
            window = _cosine_sum(n, big_n, (0.35875, 0.48829, 0.14128, 0.01168))
        elif function == WindowFunction.BLACKMAN_NUTTALL:
            window = _cosine_sum(n, big_n, (0.3635819, 0.4891775, 0.1365995, 0.0106411))
        elif function == WindowFunction.FLATTOP:
            window = _cosine_sum(n, big_n, (0.216, 0.417, 0.277, 0.084, 0.007))
        else:
            window = np.ones(sample_count)

        area = float(np.sum(window))
        scale = sample_count / area * math.sqrt(0.5)
        return window * scale