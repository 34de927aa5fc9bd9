"""Text files of station static values and lookups on them."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from seisstatics.points import Station

_FIELDS = 4


def _as_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def read_stations(path: str | os.PathLike[str]) -> list[Station]:
    """Read whitespace-separated ``ph east north value`` records from a file.

    Raises ValueError when a record is incomplete or malformed.
    """
    with open(path, "r", encoding="ascii", errors="replace") as handle:
        tokens = handle.read().split()
    if len(tokens) % _FIELDS:
        raise ValueError(f"{os.fspath(path)}: incomplete station record at end of file")
    stations = []
    for start in range(0, len(tokens), _FIELDS):
        ph, east, north, value = tokens[start:start + _FIELDS]
        try:
            stations.append(
                Station(int(ph), float(east), float(north), _as_float32(float(value)))
            )
        except ValueError as exc:
            raise ValueError(
                f"{os.fspath(path)}: bad station record {ph} {east} {north} {value}"
            ) from exc
    return stations


def write_stations(path: str | os.PathLike[str], stations: Iterable[Station]) -> None:
    """Write station records, coordinates and values with one decimal."""
    with open(path, "w", encoding="ascii") as handle:
        for s in stations:
            handle.write(f"{s.ph} {s.east:.1f} {s.north:.1f} {s.value:.1f}\n")


def shell_sort_stations(stations: Iterable[Station]) -> list[Station]:
    """Return the stations ordered by pile number using the file's shell-sort passes.

    The passes shrink the gap by halving and stop each gap once a pass
    records no swap beyond the first row, exactly as the data files expect.
    """
    data = list(stations)
    offset = len(data) // 2
    while offset > 0:
        limit = len(data) - offset
        while True:
            switch = 0
            for row in range(limit):
                if data[row].ph > data[row + offset].ph:
                    data[row], data[row + offset] = data[row + offset], data[row]
                    switch = row
            limit = switch - offset
            if not switch:
                break
        if offset == 1:
            break
        offset = (offset + 1) // 2
    return data


def search_station(stations: Sequence[Station], ph: int) -> int | None:
    """Binary-search stations sorted by pile number; return the index or None."""
    if not stations:
        return None
    start, end = 0, len(stations) - 1
    while True:
        mid = start + (end - start) // 2
        if stations[mid].ph == ph:
            return mid
        if mid in (start, end):
            return end if stations[end].ph == ph else None
        if stations[mid].ph < ph:
            start = mid
        else:
            end = mid


@dataclass
class StationFile:
    """Shot and receiver station tables of one static-correction data set."""

    shots: list[Station] = field(default_factory=list)
    receivers: list[Station] = field(default_factory=list)

    def read_shot(self, path: str | os.PathLike[str]) -> None:
        """Load and sort the shot stations from ``path``."""
        self.shots = shell_sort_stations(read_stations(path))

    def read_rcv(self, path: str | os.PathLike[str]) -> None:
        """Load and sort the receiver stations from ``path``."""
        self.receivers = shell_sort_stations(read_stations(path))

    def write_shot(self, path: str | os.PathLike[str]) -> None:
        """Write the shot stations to ``path``."""
        write_stations(path, self.shots)

    def write_rcv(self, path: str | os.PathLike[str]) -> None:
        """Write the receiver stations to ``path``."""
        write_stations(path, self.receivers)

    def set_shot(self, stations: Iterable[Station]) -> None:
        """Replace the shot stations with copies of ``stations``."""
        self.shots = [Station(s.ph, s.east, s.north, s.value) for s in stations]

    def set_rcv(self, stations: Iterable[Station]) -> None:
        """Replace the receiver stations with copies of ``stations``."""
        self.receivers = [Station(s.ph, s.east, s.north, s.value) for s in stations]

    def find_shot(self, ph: int) -> Station | None:
        """Return the shot station with pile number ``ph``, if any."""
        index = search_station(self.shots, ph)
        return None if index is None else self.shots[index]

    def find_rcv(self, ph: int) -> Station | None:
        """Return the receiver station with pile number ``ph``, if any."""
        index = search_station(self.receivers, ph)
        return None if index is None else self.receivers[index]