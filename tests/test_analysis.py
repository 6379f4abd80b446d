import pytest

from dsoscope.analysis import (
    LAST_WINDOW_FUNCTION,
    AnalysisSettings,
    WindowFunction,
    window_function_string,
)


@pytest.mark.parametrize(
    "window,label",
    [
        (WindowFunction.RECTANGULAR, "Rectangular"),
        (WindowFunction.HANN, "Hann"),
        (WindowFunction.BARTLETT_HANN, "Bartlett-Hann"),
        (WindowFunction.FLATTOP, "Flat top"),
    ],
)
def test_window_labels(window, label):
    assert window_function_string(window) == label


def test_every_window_has_distinct_label():
    labels = [window_function_string(w) for w in WindowFunction]
    assert all(labels)
    assert len(set(labels)) == len(labels)


def test_unknown_window_gives_empty_string():
    assert window_function_string(99) == ""


def test_enum_range():
    members = list(WindowFunction)
    assert window_function_string(members[0]) == "Rectangular"
    assert window_function_string(LAST_WINDOW_FUNCTION) == "Flat top"
    assert members[-1] == LAST_WINDOW_FUNCTION


def test_analysis_defaults():
    settings = AnalysisSettings()
    assert settings.spectrum_window == WindowFunction.HAMMING
    assert settings.spectrum_limit == -60.0
    assert settings.reuse_fft_plan is False