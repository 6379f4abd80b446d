[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dsoscope"
version = "0.1.0"
description = "Signal post-processing, graph generation and control-command encoding for USB digital storage oscilloscopes"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["oscilloscope", "dso", "spectrum", "fft", "signal-processing", "thd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dsoscope"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
