"""Seismic first-break static correction tools: station files, swath geometry,
unform trace files, line extraction and stacked equations."""

__version__ = "0.1.0"

__all__ = [
    "firstbreak",
    "linecheck",
    "points",
    "stationfile",
    "swath",
    "unform",
    "zdequation",
]