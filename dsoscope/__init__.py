"""Oscilloscope control-command payloads, settings, spectrum analysis and graph generation."""

__version__ = "0.1.0"