[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seisstatics"
version = "0.1.0"
description = "Seismic first-break static correction tools: swath geometry, station files, unform trace files and stacked equations"
requires-python = ">=3.10"
dependencies = []
keywords = ["seismic", "statics", "first break", "geophysics", "static correction"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["seisstatics"]

[tool.pytest.ini_options]
addopts = "-ra"
