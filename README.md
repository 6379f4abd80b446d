# dsoscope

Signal post-processing for 6022-family USB digital storage oscilloscopes:
control-command payloads, scope settings, spectrum and level analysis, and
screen-ready vertex arrays for TY, spectrum and XY displays.

## Installation

```
pip install dsoscope
```

To run the tests:

```
pip install "dsoscope[test]"
pytest
```

## Modules

- `dsoscope.protocol` – `ControlCode` and `UsedChannels`; the
  `ControlCommand` payloads `ControlSetGainCh1`, `ControlSetGainCh2`,
  `ControlSetSamplerate`, `ControlSetNumChannels`, `ControlStartSampling`,
  `ControlStopSampling`, `ControlGetCalibration`, `ControlSetCalFreq` and
  `ControlSetCoupling`; and `CalibrationValues`, the 80-byte EEPROM
  calibration block (`from_bytes` / `to_bytes`, `ValueError` on a wrong size).
- `dsoscope.analysis` – `WindowFunction`, `AnalysisSettings`
  (window, spectrum limit) and `window_function_string`.
- `dsoscope.scopesettings` – `ScopeSettings` with `ScopeHorizontal`,
  `ScopeTrigger`, `ScopeVoltage`, `ScopeSpectrum` and `ScopeAnalysis`;
  `gain`, `any_used`, `coupling`, `count_channels`, `get_marker` and
  `set_marker`. The last voltage channel is treated as the math channel.
- `dsoscope.devicelist` – `DeviceListEntry` and its `status()` text
  ("Ready", "Firmware upload", "Cannot connect" or the error message).
- `dsoscope.ppresult` – `PPResult`, `DataChannel` and `SampleValues`,
  the container passed through the processing chain.
- `dsoscope.postprocessing` – `DsoSamples` (raw acquisition),
  the `Processor` base class, `convert_data`, and `PostProcessing`,
  which converts each input into a `PPResult`, runs the registered
  processors in order, calls connected callbacks and returns the result.
- `dsoscope.windows` – `build_window` (normalised tapering windows) and
  `besseli0`.
- `dsoscope.spectrum` – `SpectrumGenerator`, a processor that fills in
  min/max of the displayed trace, DC, AC, RMS, dB level, the dB spectrum,
  frequency, optional note and optional THD; and `calculate_note`.
- `dsoscope.graph` – `GraphGenerator`, a processor that builds
  `float32` vertex arrays (N×3) for voltage, spectrum and histogram,
  with `Interpolation` step or sinc modes, `ViewSettings` and
  `ScreenGeometry`.

## Example

```python
import numpy as np

from dsoscope.analysis import AnalysisSettings
from dsoscope.graph import GraphGenerator, ViewSettings
from dsoscope.postprocessing import DsoSamples, PostProcessing
from dsoscope.scopesettings import ScopeSettings, ScopeSpectrum, ScopeVoltage
from dsoscope.spectrum import SpectrumGenerator

scope = ScopeSettings(
    voltage=[ScopeVoltage(used=True) for _ in range(3)],
    spectrum=[ScopeSpectrum(used=True) for _ in range(3)],
)
scope.analysis.show_note_value = True

pipeline = PostProcessing(scope.count_channels())
pipeline.register_processor(SpectrumGenerator(scope, AnalysisSettings()))
pipeline.register_processor(GraphGenerator(scope, ViewSettings()))

samplerate = 1e6
t = np.arange(10000) / samplerate
block = DsoSamples(data=[np.sin(2 * np.pi * 1e3 * t), np.zeros(10000)], samplerate=samplerate)

result = pipeline.input(block)
print(result.data(0).frequency, result.data(0).rms, result.data(0).note)
print(result.va_channel_voltage[0].shape)
```

`calculate_note(440.0)` returns `"♪ A"`; off-pitch tones get their
deviation in cent appended with a sign.

## What this package does not do

It does not talk to a device: there is no USB access, firmware upload,
device discovery or acquisition loop. The `ControlCommand` classes only
build payloads. There is no graphical display, no file export and no
saving or loading of settings, and no command-line program.