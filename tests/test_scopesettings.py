import pytest

from dsoscope.scopesettings import (
    CursorShape,
    GraphFormat,
    ScopeAnalysis,
    ScopeSettings,
    ScopeSpectrum,
    ScopeVoltage,
    TriggerMode,
)


def make_settings(channels=3):
    return ScopeSettings(
        voltage=[ScopeVoltage() for _ in range(channels)],
        spectrum=[ScopeSpectrum() for _ in range(channels)],
    )


def test_defaults():
    settings = make_settings()
    assert settings.horizontal.format == GraphFormat.TY
    assert settings.trigger.mode == TriggerMode.AUTO
    assert settings.trigger.position == 0.5
    assert settings.horizontal.cursor.shape == CursorShape.NONE
    assert settings.count_channels() == 3


def test_gain_default_step():
    settings = make_settings()
    assert settings.gain(0) == 2.0
    assert settings.gain(2) == 2.0


def test_gain_includes_probe():
    settings = make_settings()
    settings.voltage[1].probe_attn = 10.0
    settings.voltage[1].gain_step_index = 8
    assert settings.gain(1) == pytest.approx(settings.gain_steps[8] * 10.0)


def test_math_channel_uses_math_steps():
    settings = make_settings()
    settings.voltage[2].gain_step_index = 9
    assert settings.gain(2) == 20.0
    settings.voltage[0].gain_step_index = 9
    with pytest.raises(IndexError):
        settings.gain(0)


def test_any_used():
    settings = make_settings()
    assert not settings.any_used(0)
    settings.spectrum[0].used = True
    assert settings.any_used(0)
    settings.voltage[1].used = True
    assert settings.any_used(1)


def test_coupling_lookup():
    settings = make_settings()
    couplings = ["DC", "AC"]
    assert settings.coupling(0, couplings) == "DC"
    settings.voltage[0].coupling_or_math_index = 1
    assert settings.coupling(0, couplings) == "AC"


def test_markers_round_trip_and_clamp():
    settings = make_settings()
    settings.set_marker(0, 1.5)
    assert settings.get_marker(0, -5.0, 5.0) == 1.5
    settings.set_marker(1, 7.0)
    assert settings.get_marker(1, -5.0, 5.0) == 5.0
    settings.set_marker(0, -9.0)
    assert settings.get_marker(0, -5.0, 5.0) == -5.0
    assert settings.horizontal.cursor.pos[0][1] == -1.0


def test_marker_out_of_range_ignored():
    settings = make_settings()
    before = list(settings.horizontal.cursor.pos)
    settings.set_marker(2, 3.0)
    assert settings.horizontal.cursor.pos == before
    assert settings.get_marker(2, -5.0, 5.0) == 0.0


def test_cursor_positions_not_shared():
    a, b = make_settings(), make_settings()
    a.set_marker(0, 2.0)
    assert b.horizontal.cursor.pos[0] == (-1.0, -1.0)


def test_db_suffix():
    analysis = ScopeAnalysis()
    assert analysis.db_suffix() == "V"
    assert analysis.db_suffix(2) == "m"
    assert analysis.db_suffix(3) == ""
    assert analysis.db_suffix(-1) == ""
    analysis.db_suffix_index = 1
    assert analysis.db_suffix() == "u"