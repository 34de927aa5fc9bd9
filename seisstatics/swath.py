"""Swath parameters: the two parameter files and receiver geometry per shot."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from seisstatics.points import Point, ReceiverPoint

NAME_BOX_COUNT = 50
_NAMES_PER_LINE = 10
_COMMON_FIELDS = (
    "shot_line_from",
    "shot_line_to",
    "distance1",
    "distance2",
    "distance3",
    "distance4",
    "initial_velocity",
    "first_receive_point_number",
    "fold_time",
)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder matching truncating division."""
    return a - _cdiv(a, b) * b


def swath_file_stem(swath: int) -> str:
    """Return the stem shared by the two parameter files of a swath."""
    return f"swath{swath}"


def make_ph(shot_line: int, shot_point: int) -> int:
    """Combine a shot line and a shot point name into a pile number."""
    return shot_line * 1000 + shot_point


@dataclass
class SurveySystem:
    """Geometry of the survey system shared by all swaths."""

    group_interval: int = 50
    receive_line_number: int = 1
    shot_point_number: int = 1
    shot_line_interval: int = 0
    group_number_of_small_number: int = 0
    gap_of_small_number: int = 0
    gap_of_big_number: int = 0
    shot_point_positions: list[float] = field(default_factory=list)
    receive_line_positions: list[float] = field(default_factory=list)


@dataclass
class SwathParameters:
    """Parameters of one swath and the values derived from them."""

    survey: SurveySystem = field(default_factory=SurveySystem)
    distance1: int = 0
    distance2: int = 0
    distance3: int = 0
    distance4: int = 0
    shot_line_from: int = 0
    shot_line_to: int = 0
    initial_velocity: int = 1500
    first_receive_point_number: int = 1
    fold_time: int = 2
    receive_line_names: list[int] = field(default_factory=lambda: [0] * NAME_BOX_COUNT)
    shot_point_names: list[int] = field(default_factory=lambda: [0] * NAME_BOX_COUNT)
    shot_line_number: int = 0
    group1: int = 0
    group2: int = 0
    group3: int = 0
    group4: int = 0
    total_receive_point_number: int = 0
    total_unform_receive_point_number: int = 0

    @classmethod
    def load(
        cls,
        swath: int,
        survey: SurveySystem,
        directory: str | os.PathLike[str] = ".",
    ) -> SwathParameters:
        """Read both parameter files of ``swath`` and compute the derived values."""
        stem = Path(directory) / swath_file_stem(swath)
        params = cls(survey=survey)
        params.read_common(f"{stem}.pa1")
        params.read_names(f"{stem}.pa2")
        params.calculate()
        return params

    def read_common(self, path: str | os.PathLike[str]) -> None:
        """Read the first parameter file; the shot line range is put in order."""
        with open(path, "r", encoding="ascii", errors="replace") as handle:
            tokens = handle.read().split()
        if len(tokens) < len(_COMMON_FIELDS):
            raise ValueError(f"{os.fspath(path)}: too few swath parameters")
        try:
            values = [int(t) for t in tokens[: len(_COMMON_FIELDS)]]
        except ValueError as exc:
            raise ValueError(f"{os.fspath(path)}: bad swath parameter") from exc
        for name, value in zip(_COMMON_FIELDS, values):
            setattr(self, name, value)
        if self.shot_line_from > self.shot_line_to:
            self.shot_line_from, self.shot_line_to = self.shot_line_to, self.shot_line_from

    def read_names(self, path: str | os.PathLike[str]) -> None:
        """Read the receiver line names and shot point names from the second file."""
        with open(path, "r", encoding="ascii", errors="replace") as handle:
            tokens = handle.read().split()
        values: list[int] = []
        for token in tokens[: 2 * NAME_BOX_COUNT]:
            try:
                values.append(int(token))
            except ValueError:
                break
        values += [0] * (2 * NAME_BOX_COUNT - len(values))
        self.receive_line_names = values[:NAME_BOX_COUNT]
        self.shot_point_names = values[NAME_BOX_COUNT:]

    def write_common(self, path: str | os.PathLike[str]) -> None:
        """Write the first parameter file, one value per line."""
        with open(path, "w", encoding="ascii") as handle:
            for name in _COMMON_FIELDS:
                handle.write(f"{getattr(self, name)}\n")

    def write_names(self, path: str | os.PathLike[str]) -> None:
        """Write the second parameter file, ten names per line."""
        with open(path, "w", encoding="ascii") as handle:
            for names in (self.receive_line_names, self.shot_point_names):
                padded = (list(names) + [0] * NAME_BOX_COUNT)[:NAME_BOX_COUNT]
                for start in range(0, NAME_BOX_COUNT, _NAMES_PER_LINE):
                    chunk = padded[start:start + _NAMES_PER_LINE]
                    handle.write(" ".join(str(n) for n in chunk) + "\n")

    def calculate(self) -> None:
        """Derive shot line count, unform groups and receiver point totals."""
        ss = self.survey
        gi = ss.group_interval
        self.shot_line_number = self.shot_line_to - self.shot_line_from + 1

        self.group1 = self.group2 = self.group3 = self.group4 = 0
        small = ss.group_number_of_small_number
        if self.distance1:
            self.group1 = small - _cdiv(self.distance1 - ss.gap_of_small_number, gi)
        if self.distance2:
            self.group2 = small - _cdiv(self.distance2 - ss.gap_of_small_number, gi)
        if self.distance3:
            self.group3 = small + _cdiv(self.distance3 - ss.gap_of_big_number, gi) + 1
        if self.distance4:
            self.group4 = small + _cdiv(self.distance4 - ss.gap_of_big_number, gi) + 1

        length = 0
        if self.distance1 and self.distance4:
            length = self.distance2 + self.distance3
        length += (self.shot_line_number - 1) * ss.shot_line_interval
        length += (self.distance1 - self.distance2) + (self.distance4 - self.distance3)
        length = _cdiv(length, gi) + 1
        self.total_receive_point_number = length * ss.receive_line_number

        rln = ss.receive_line_number
        total = rln * (self.group2 - self.group1 + self.group4 - self.group3 + 2)
        if self.group1 == 0:
            total -= rln
        if self.group4 == 0:
            total -= rln
        self.total_unform_receive_point_number = total

    def shot_stations(self) -> list[int]:
        """Return the theoretical pile numbers of every shot in the swath."""
        names = self.shot_point_names[: self.survey.shot_point_number]
        return [
            make_ph(line, name)
            for line in range(self.shot_line_from, self.shot_line_to + 1)
            for name in names
        ]

    def shot_position(self, shot_ph: int, zp: int, hp: int) -> Point:
        """Return a shot's position relative to the unform receiver rectangle."""
        ss = self.survey
        shot_line = _cdiv(shot_ph, 1000)
        point_name = shot_ph - shot_line * 1000

        x = -1.0
        for index, name in enumerate(self.shot_point_names):
            if name == point_name:
                x = ss.shot_point_positions[index]
                break
        x += hp

        y = (shot_line - self.shot_line_from) * ss.shot_line_interval + zp
        if self.distance1 == 0:
            y -= self.distance3
        else:
            y += self.distance1
        return Point(x, y)

    def receivers_for_shot(self, shot_ph: int) -> list[ReceiverPoint]:
        """Return the unform receiver points of one shot with numbers and positions."""
        ss = self.survey
        rln = ss.receive_line_number
        gi = ss.group_interval
        shot_line = _cdiv(shot_ph, 1000)

        receivers = [ReceiverPoint() for _ in range(self.total_unform_receive_point_number)]
        plused_total = _cdiv((shot_line - self.shot_line_from) * ss.shot_line_interval, gi) * rln

        per_line = 0
        if self.group1 != 0:
            per_line = self.group2 - self.group1 + 1
        if self.group3 != 0:
            per_line += self.group4 - self.group3 + 1

        def fill(groups: int, base: int, shift: int) -> None:
            for i in range(groups):
                row = base + i * rln
                for j in range(rln):
                    receivers[shift + i + j * per_line].number = row + j

        small_groups = self.group2 - self.group1 + 1
        big_groups = self.group4 - self.group3 + 1
        if self.distance1 == 0:
            fill(big_groups, plused_total, 0)
        elif self.distance3 == 0:
            fill(small_groups, plused_total, 0)
        else:
            fill(small_groups, plused_total, 0)
            plused_total += _cdiv(self.distance1 + self.distance3, gi) * rln
            fill(big_groups, plused_total, small_groups)

        for receiver in receivers:
            n = receiver.number
            receiver.pos = Point(
                ss.receive_line_positions[_cmod(n, rln)], _cdiv(n, rln) * gi
            )
        return receivers