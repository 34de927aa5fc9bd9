"""Extraction of one line of static values from three data sets for comparison."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, Sequence

from seisstatics.points import Station
from seisstatics.stationfile import StationFile


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    return a - _cdiv(a, b) * b


class CheckTarget(IntEnum):
    """Whether shot or receiver statics are checked."""

    SHOT = 0
    RECEIVER = 1


class ShotLineMode(IntEnum):
    """How shot statics are drawn: along a shot line or along a shot point line."""

    SHOT_LINE = 0
    SHOT_POINT_LINE = 1


def _find(stations: Iterable[Station], ph: int) -> Station | None:
    return next((s for s in stations if s.ph == ph), None)


def extract_shot_line(
    stations: Sequence[Station], shot_line: int, shot_point_names: Iterable[int]
) -> list[Station]:
    """Return the stations of one shot line in shot point name order.

    A shot point with no station gives an all-zero record.
    """
    result = []
    for name in shot_point_names:
        found = _find(stations, shot_line * 1000 + name)
        result.append(Station() if found is None else replace(found))
    return result


def extract_shot_point_line(
    stations: Sequence[Station],
    shot_point: int,
    shot_line_from: int,
    shot_line_number: int,
) -> list[Station]:
    """Return one shot point across consecutive shot lines, pile numbers reduced to lines.

    A shot line with no station gives an all-zero record.
    """
    result = []
    for i in range(shot_line_number):
        found = _find(stations, (shot_line_from + i) * 1000 + shot_point)
        if found is None:
            result.append(Station())
        else:
            result.append(replace(found, ph=_cdiv(found.ph, 1000)))
    return result


def extract_receiver_line(stations: Iterable[Station], receiver_line: int) -> list[Station]:
    """Return the stations whose pile number lies on ``receiver_line``."""
    return [replace(s) for s in stations if _cdiv(s.ph, 1000) == receiver_line]


def extract_other_shot_line(stations: Iterable[Station], shot_line: int) -> list[Station]:
    """Return the stations of another method that lie on ``shot_line``."""
    return [replace(s) for s in stations if _cdiv(s.ph, 1000) == shot_line]


def extract_other_shot_point_line(
    stations: Iterable[Station], shot_point: int
) -> list[Station]:
    """Return the stations of another method at ``shot_point``, pile numbers reduced to lines."""
    return [
        replace(s, ph=_cdiv(s.ph, 1000))
        for s in stations
        if _cmod(s.ph, 1000) == shot_point
    ]


@dataclass
class LineSelection:
    """Which line of static values is checked."""

    target: CheckTarget = CheckTarget.SHOT
    mode: ShotLineMode = ShotLineMode.SHOT_LINE
    shot_name: int = 0
    receiver_name: int = 0

    def extract(
        self,
        middle: StationFile,
        final: StationFile,
        other: StationFile,
        shot_point_names: Sequence[int],
        shot_line_from: int,
        shot_line_number: int,
    ) -> dict[str, tuple[str, list[Station]]]:
        """Return the selected line from each data set as ``{key: (title, stations)}``.

        The keys are ``middle``, ``final`` and ``other``.
        """
        if self.target == CheckTarget.RECEIVER:
            line = self.receiver_name
            where = f"receiver line {line}"
            middle_line = extract_receiver_line(middle.receivers, line)
            final_line = extract_receiver_line(final.receivers, line)
            other_line = extract_receiver_line(other.receivers, line)
        elif self.mode == ShotLineMode.SHOT_LINE:
            name = self.shot_name
            where = f"shot line {name}"
            middle_line = extract_shot_line(middle.shots, name, shot_point_names)
            final_line = extract_shot_line(final.shots, name, shot_point_names)
            other_line = extract_other_shot_line(other.shots, name)
        else:
            name = self.shot_name
            where = f"shot point line {name}"
            middle_line = extract_shot_point_line(
                middle.shots, name, shot_line_from, shot_line_number
            )
            final_line = extract_shot_point_line(
                final.shots, name, shot_line_from, shot_line_number
            )
            other_line = extract_other_shot_point_line(other.shots, name)

        return {
            "middle": (f"Intermediate first-break statics: {where}", middle_line),
            "final": (f"Final first-break statics: {where}", final_line),
            "other": (f"Other method statics: {where}", other_line),
        }