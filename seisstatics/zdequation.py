"""Stacked first-break equations built from pairs of receivers around a shot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from seisstatics.points import Point, ReceiverPoint

SHOT_LIMIT = 20
RCV_LIMIT = 800
DEFAULT_INITIAL_VELOCITY = 2000.0
DEFAULT_PRECISION = 0.70


@dataclass
class Couple:
    """Two receivers of one shot, at mirrored offsets, whose picks are summed."""

    receiver_a: int = -1
    receiver_b: int = -1


@dataclass
class ShotGather:
    """One shot with the receivers that recorded it."""

    shot_number: int = 0
    shot_pos: Point = field(default_factory=Point)
    receivers: list[ReceiverPoint] = field(default_factory=list)


@dataclass
class EquationRow:
    """One equation: ``(unknown index, coefficient)`` terms and a right-hand side."""

    terms: list[tuple[int, int]]
    rhs: float


def search_couple(receiver: int, couples: Sequence[Couple]) -> int:
    """Return the partner of ``receiver`` in ``couples``, or -1 if it is not paired."""
    return next((c.receiver_b for c in couples if c.receiver_a == receiver), -1)


def _pair_couples(
    weights: Sequence[float], small: float, big: float, upper: float, tolerance: float
) -> list[Couple]:
    """Pair each receiver between ``small`` and ``upper`` with one mirrored about ``big``.

    A shot whose receivers never pass ``upper`` gives no couples.
    """
    couples: list[Couple] = []
    for j, weight in enumerate(weights):
        dsmall = weight - small
        if dsmall < 0:
            continue
        if weight > upper:
            return couples
        for k in range(len(weights) - 1, 0, -1):
            dbig1 = big - weights[k]
            dbig2 = big - weights[k - 1]
            if dbig2 >= dsmall and dbig1 <= dsmall:
                d1 = abs(dsmall - dbig1)
                d2 = abs(dbig2 - dsmall)
                if min(d1, d2) > tolerance:
                    partner = -1
                else:
                    partner = k if d1 < d2 else k - 1
                couples.append(Couple(j, partner))
                break
    return []


class StackingEquations:
    """Builds the rows of the stacked first-break static equation system.

    Unknowns are numbered shots first, then receivers offset by the number
    of shot points.
    """

    def __init__(
        self,
        shot_point_number: int = 0,
        receiver_point_number: int = 0,
        initial_velocity: float = DEFAULT_INITIAL_VELOCITY,
    ) -> None:
        self.shot_point_number = shot_point_number
        self.receiver_point_number = receiver_point_number
        self.initial_velocity = float(initial_velocity)
        self.fold_time = 1
        self.precision = DEFAULT_PRECISION
        self.small_distance: float | None = None
        self.big_distance: float | None = None
        self.rows: list[EquationRow] = []
        self.closed = False

    def set_fold_time(self, fold_time: int) -> None:
        """Set how many times the couples are folded (1, 2 or 3 build equations)."""
        self.fold_time = fold_time

    def set_precision(self, precision: float) -> None:
        """Set the pairing precision, a fraction between 0 and 1."""
        if not 0 <= precision <= 1:
            raise ValueError(f"precision {precision} is outside [0, 1]")
        self.precision = precision

    def _calc_weight(self, gather: ShotGather) -> None:
        for receiver in gather.receivers:
            receiver.weight = gather.shot_pos.distance(receiver.pos)
            receiver.fbk -= receiver.weight / self.initial_velocity * 1000

    @staticmethod
    def _sort_receivers(gather: ShotGather) -> None:
        gather.receivers[:] = sorted(gather.receivers, key=lambda r: r.weight)

    def set_common_shot_group(self, gathers: Sequence[ShotGather]) -> None:
        """Fix the offset range common to a line of shots.

        Each gather's receivers get their offset weight, their pick is reduced
        by the travel time at the initial velocity, and they are sorted by offset.
        """
        small, big = -1000000.0, 1000000.0
        for gather in gathers:
            if not gather.receivers:
                raise ValueError(f"shot {gather.shot_number} has no receivers")
            self._calc_weight(gather)
            self._sort_receivers(gather)
            small = max(small, gather.receivers[0].weight)
            big = min(big, gather.receivers[-1].weight)
        self.small_distance = small
        self.big_distance = big

    def _calc_couples(
        self, gathers: Sequence[ShotGather]
    ) -> tuple[list[list[Couple]], list[list[Couple]], list[list[Couple]]]:
        for gather in gathers:
            self._calc_weight(gather)

        gap = 0.0
        for gather in gathers:
            self._sort_receivers(gather)
            weights = [r.weight for r in gather.receivers]
            for previous, current in zip(weights, weights[1:]):
                gap = max(gap, current - previous)
        tolerance = gap * (1 - self.precision)

        small = self.small_distance
        big = self.big_distance
        assert small is not None and big is not None
        mid = (big - small) / 2 + small
        quarter = (big - small) / 4 + small
        eighth = (big - small) / 8 + small

        all_weights = [[r.weight for r in g.receivers] for g in gathers]
        first = [_pair_couples(w, small, big, mid, tolerance) for w in all_weights]
        second: list[list[Couple]] = [[] for _ in gathers]
        third: list[list[Couple]] = [[] for _ in gathers]
        if self.fold_time >= 2:
            second = [_pair_couples(w, small, mid, quarter, tolerance) for w in all_weights]
        if self.fold_time >= 3:
            third = [_pair_couples(w, small, quarter, eighth, tolerance) for w in all_weights]
        return first, second, third

    def _make_row(self, gather: ShotGather, receivers: Sequence[int]) -> EquationRow:
        picked = [gather.receivers[r] for r in receivers]
        terms = [(gather.shot_number, len(picked))]
        terms += [(r.number + self.shot_point_number, 1) for r in picked]
        return EquationRow(terms, sum(r.fbk for r in picked))

    def append(self, gathers: Sequence[ShotGather]) -> list[EquationRow]:
        """Add the equations of a group of shots and return the new rows."""
        if self.closed:
            raise RuntimeError("the equation set is closed")
        if self.small_distance is None or self.big_distance is None:
            raise RuntimeError(
                "set a common shot group with set_common_shot_group() before appending"
            )
        if len(gathers) > SHOT_LIMIT:
            raise ValueError(f"at most {SHOT_LIMIT} shots can be appended at once")
        for gather in gathers:
            if len(gather.receivers) > RCV_LIMIT:
                raise ValueError(f"shot {gather.shot_number} has more than {RCV_LIMIT} receivers")

        first, second, third = self._calc_couples(gathers)
        rows: list[EquationRow] = []
        for index, gather in enumerate(gathers):
            if self.fold_time == 1:
                for couple in first[index]:
                    r = [couple.receiver_a, couple.receiver_b]
                    if -1 not in r:
                        rows.append(self._make_row(gather, r))
            elif self.fold_time == 2:
                for couple in second[index]:
                    r0, r1 = couple.receiver_a, couple.receiver_b
                    r = [r0, r1, search_couple(r0, first[index]), search_couple(r1, first[index])]
                    if -1 not in r:
                        rows.append(self._make_row(gather, r))
            elif self.fold_time == 3:
                for couple in third[index]:
                    r0, r1 = couple.receiver_a, couple.receiver_b
                    r2 = search_couple(r0, second[index])
                    r3 = search_couple(r1, second[index])
                    r = [
                        r0,
                        r1,
                        r2,
                        r3,
                        search_couple(r0, first[index]),
                        search_couple(r1, first[index]),
                        search_couple(r2, first[index]),
                        search_couple(r3, first[index]),
                    ]
                    if -1 not in r:
                        rows.append(self._make_row(gather, r))
        self.rows.extend(rows)
        return rows

    def close(self) -> None:
        """Finish the equation set; no more rows may be appended."""
        self.closed = True
        self.fold_time = 1
        self.initial_velocity = DEFAULT_INITIAL_VELOCITY