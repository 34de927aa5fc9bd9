"""Amplitude-threshold first-break picking on one trace."""

from __future__ import annotations

from typing import Sequence


def pick_first_break(samples: Sequence[float]) -> int:
    """Return the sample index just before the trace first drops below the threshold.

    The threshold is minus one fifth of the mean absolute amplitude. Returns -1
    for an empty trace or when no sample falls below it.
    """
    if not samples:
        return -1
    threshold = -(sum(abs(s) for s in samples) / len(samples)) / 5
    return next((i - 1 for i, s in enumerate(samples) if s < threshold), -1)