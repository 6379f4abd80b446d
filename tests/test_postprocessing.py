import pytest

from dsoscope.postprocessing import DsoSamples, PostProcessing, Processor, convert_data
from dsoscope.ppresult import PPResult


class Recorder(Processor):
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def process(self, result):
        self.log.append((self.name, result.tag))


def make_samples(**kwargs):
    defaults = dict(data=[[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]], samplerate=1e3, tag=5)
    defaults.update(kwargs)
    return DsoSamples(**defaults)


def test_convert_data_copies_samples_and_interval():
    result = PPResult(3)
    convert_data(make_samples(), result)
    assert list(result.data(1).voltage.samples) == [4.0, 5.0, 6.0]
    assert result.data(0).voltage.interval == pytest.approx(1e-3)
    assert result.tag == 5


def test_convert_data_skips_empty_channels():
    result = PPResult(3)
    convert_data(make_samples(data=[[], [1.0, 2.0], []]), result)
    assert len(result.data(0).voltage.samples) == 0
    assert result.data(0).voltage.interval == 0.0
    assert list(result.data(1).voltage.samples) == [1.0, 2.0]


def test_convert_data_clipped_bits_mark_invalid():
    result = PPResult(3)
    convert_data(make_samples(clipped=0b010), result)
    assert [result.data(c).valid for c in range(3)] == [True, False, True]


def test_convert_data_trigger_fields_copied_when_triggered():
    result = PPResult(3)
    source = make_samples(triggered_position=42, live_trigger=True, pulse_width1=0.5, pulse_width2=0.25)
    convert_data(source, result)
    assert result.triggered_position == 42
    assert result.software_trigger_triggered is True
    assert (result.pulse_width1, result.pulse_width2) == (0.5, 0.25)


def test_convert_data_trigger_fields_cleared_when_not_triggered():
    result = PPResult(3)
    source = make_samples(triggered_position=0, live_trigger=True, pulse_width1=0.5)
    convert_data(source, result)
    assert result.software_trigger_triggered is False
    assert result.pulse_width1 == 0.0


def test_convert_data_sets_math_unit():
    result = PPResult(3)
    convert_data(make_samples(math_voltage_unit="V²"), result)
    assert result.data(2).voltage_unit == "V²"
    assert result.data(0).voltage_unit == "V"


def test_processors_run_in_registration_order():
    log = []
    pp = PostProcessing(3)
    pp.register_processor(Recorder("a", log))
    pp.register_processor(Recorder("b", log))
    pp.input(make_samples(tag=9))
    assert log == [("a", 9), ("b", 9)]


def test_connected_callback_receives_result():
    received = []
    pp = PostProcessing(3)
    pp.connect(received.append)
    returned = pp.input(make_samples())
    assert received == [returned]
    assert received[0].channel_count() == 3


def test_stop_prevents_processing():
    log = []
    pp = PostProcessing(3)
    pp.register_processor(Recorder("a", log))
    pp.stop()
    assert pp.input(make_samples()) is None
    assert log == []


def test_input_none_is_ignored():
    received = []
    pp = PostProcessing(3)
    pp.connect(received.append)
    assert pp.input(None) is None
    assert received == []


def test_each_input_gets_fresh_result():
    pp = PostProcessing(3)
    first = pp.input(make_samples(tag=1))
    second = pp.input(make_samples(tag=2))
    assert first is not second
    assert (first.tag, second.tag) == (1, 2)


def test_processor_is_abstract():
    with pytest.raises(TypeError):
        Processor()