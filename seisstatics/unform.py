"""Reader for unform (demultiplexed) trace files in 32-bit float format 4."""

from __future__ import annotations

import itertools
import os
import struct
from dataclasses import dataclass
from typing import Sequence

FILE_NUMBER_POSITION = 4
GROUP_HEAD = 128
GROUP_NAME_POSITION = 16
_TIME_INTERVAL_POSITION = 32
_MIN_INTERVAL = 2
_MAX_INTERVAL = 16
_MAX_TIME_LENGTH = 20000

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


def _float_bits_as_int(value: float) -> int:
    return _INT.unpack(_FLOAT.pack(value))[0]


def group_file_number(data: Sequence[float]) -> int:
    """Return the field file number stored in a trace header read as floats."""
    return _float_bits_as_int(data[FILE_NUMBER_POSITION // 4])


def group_number(data: Sequence[float]) -> int:
    """Return the field group number stored in a trace header read as floats."""
    return _float_bits_as_int(data[GROUP_NAME_POSITION])


@dataclass
class ShotInfo:
    """The run of groups in the file that belong to one shot."""

    file_number: int
    begin_group: int
    end_group: int

    @property
    def group_count(self) -> int:
        """Number of groups recorded for the shot."""
        return self.end_group - self.begin_group + 1


class UnformFile:
    """An open unform file with the layout of its groups and shots."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self._handle = open(path, "rb")
        try:
            self._load()
        except BaseException:
            self._handle.close()
            raise

    def _read_int(self, position: int) -> int | None:
        self._handle.seek(position)
        raw = self._handle.read(4)
        if len(raw) < 4:
            return None
        return _INT.unpack(raw)[0]

    def _load(self) -> None:
        self._handle.seek(0, os.SEEK_END)
        self.file_length = self._handle.tell()
        if self.file_length < _TIME_INTERVAL_POSITION + 8:
            raise ValueError(f"{self.path}: file too short for a trace header")

        self._handle.seek(_TIME_INTERVAL_POSITION)
        self.time_interval, self.time_length = struct.unpack("<ii", self._handle.read(8))
        if (
            not _MIN_INTERVAL <= self.time_interval <= _MAX_INTERVAL
            or not 0 <= self.time_length <= _MAX_TIME_LENGTH
        ):
            raise ValueError(f"{self.path}: not a float format 4 unform file")

        self.top_file_number = self._read_int(FILE_NUMBER_POSITION)
        self.points_per_group = self.time_length // self.time_interval
        self.data_per_group = self.points_per_group + GROUP_HEAD
        self.bytes_per_group = self.data_per_group * 4
        self.group_count = self.file_length // self.bytes_per_group
        if self.group_count == 0:
            raise ValueError(f"{self.path}: file shorter than one group")

        self.end_file_number = self._read_int(
            self.file_length - self.bytes_per_group + FILE_NUMBER_POSITION
        )
        self.shots = self._scan_shots()
        self.max_group_number = max((s.group_count for s in self.shots), default=0)

    @property
    def total_shot_number(self) -> int:
        """Number of shots found in the file."""
        return len(self.shots)

    def file_number(self, group: int) -> int | None:
        """Return the file number of ``group``, or None past the end of the file."""
        if group < 0:
            raise IndexError(f"group {group} is negative")
        position = group * self.bytes_per_group + FILE_NUMBER_POSITION
        if position > self.file_length:
            return None
        return self._read_int(position)

    def _scan_shots(self) -> list[ShotInfo]:
        first = self.file_number(0)

        probe = next(
            i for i in itertools.count(10, 10) if self.file_number(i) != first
        )
        first_end, per_shot = 0, 1
        for i in range(probe - 1, 0, -1):
            if self.file_number(i) == first:
                first_end, per_shot = i, i + 1
                break

        shots = [ShotInfo(first, 0, first_end)]
        while True:
            begin = shots[-1].end_group + 1
            number = self.file_number(begin)
            if number is None:
                break
            position = begin + per_shot
            if self.file_number(position) != number:
                end = begin
                for p in range(position - 1, 0, -1):
                    if self.file_number(p) == number:
                        end = p
                        break
            else:
                end = next(
                    p - 1
                    for p in itertools.count(position)
                    if self.file_number(p) != number
                )
            shots.append(ShotInfo(number, begin, end))
        return shots

    def read_groups(self, begin: int, count: int = 1) -> list[list[float]]:
        """Read up to ``count`` whole groups, headers included, from group ``begin``."""
        if begin < 0 or count < 0:
            raise ValueError("group range must not be negative")
        self._handle.seek(begin * self.bytes_per_group)
        raw = self._handle.read(self.bytes_per_group * count)
        complete = len(raw) // self.bytes_per_group
        layout = struct.Struct(f"<{self.data_per_group}f")
        return [
            list(layout.unpack_from(raw, k * self.bytes_per_group))
            for k in range(complete)
        ]

    def read_shot(self, shot: int) -> list[list[float]]:
        """Read all groups of shot number ``shot`` (counted from 0)."""
        info = self.shots[shot]
        groups = self.read_groups(info.begin_group, info.group_count)
        if not groups:
            raise ValueError(f"{self.path}: shot {shot} has no readable groups")
        return groups

    def close(self) -> None:
        """Close the underlying file."""
        self._handle.close()

    def __enter__(self) -> UnformFile:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()