"""Plane points, station records and receiver points."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import groupby
from typing import Iterable


@dataclass(order=True)
class Point:
    """A point in the survey plane, ordered by x and then by y."""

    x: float = 0.0
    y: float = 0.0

    def midpoint(self, other: Point) -> Point:
        """Return the point halfway between this point and ``other``."""
        return Point(self.x + (other.x - self.x) / 2, self.y + (other.y - self.y) / 2)

    def distance(self, other: Point) -> float:
        """Return the Euclidean distance to ``other``."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class Station:
    """One station record: pile number, coordinates and a static value."""

    ph: int = 0
    east: float = 0.0
    north: float = 0.0
    value: float = 0.0


@dataclass
class ReceiverPoint:
    """A receiver point with its sequence number, position, offset weight and pick."""

    number: int = 0
    pos: Point = field(default_factory=Point)
    weight: float = 0.0
    fbk: float = 0.0


def sort_points(points: Iterable[Point]) -> list[Point]:
    """Return the points sorted by x, then y, keeping equal points in input order."""
    return sorted(points, key=lambda p: (p.x, p.y))


def dedupe_points(points: Iterable[Point]) -> list[Point]:
    """Drop points equal to the one just before them."""
    return [point for point, _ in groupby(points)]