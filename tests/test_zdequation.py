import pytest

from seisstatics.points import Point, ReceiverPoint
from seisstatics.zdequation import (
    Couple,
    EquationRow,
    ShotGather,
    StackingEquations,
    search_couple,
)

VELOCITY = 2000.0


def make_gather(distances, shot_number=0, pick=1.0, number_base=0):
    receivers = [
        ReceiverPoint(
            number=number_base + i,
            pos=Point(float(d), 0.0),
            fbk=d / VELOCITY * 1000 + pick,
        )
        for i, d in enumerate(distances)
    ]
    return ShotGather(shot_number=shot_number, shot_pos=Point(0.0, 0.0), receivers=receivers)


DISTANCES = [100, 200, 300, 400, 500, 600, 700, 800, 900]


def build(fold, distances=DISTANCES, shot_points=10, shot_number=3):
    eq = StackingEquations(shot_points, 50, VELOCITY)
    eq.set_fold_time(fold)
    common = make_gather(distances, shot_number)
    eq.set_common_shot_group([common])
    gather = make_gather(distances, shot_number)
    return eq, gather, eq.append([gather])


def test_search_couple_finds_partner_or_minus_one():
    couples = [Couple(0, 7), Couple(1, 6), Couple(2, -1)]
    assert search_couple(1, couples) == 6
    assert search_couple(2, couples) == -1
    assert search_couple(5, couples) == -1


def test_common_shot_group_sorts_and_sets_range():
    eq = StackingEquations(0, 0, VELOCITY)
    gather = make_gather([300, 100, 200])
    eq.set_common_shot_group([gather])
    assert [r.weight for r in gather.receivers] == [100.0, 200.0, 300.0]
    assert eq.small_distance == 100.0
    assert eq.big_distance == 300.0
    assert all(r.fbk == pytest.approx(1.0) for r in gather.receivers)


def test_common_shot_group_reduces_pick_by_travel_time():
    eq = StackingEquations(0, 0, VELOCITY)
    gather = ShotGather(0, Point(0, 0), [ReceiverPoint(0, Point(100.0, 0.0), fbk=100.0)])
    eq.set_common_shot_group([gather])
    assert gather.receivers[0].fbk == pytest.approx(50.0)


def test_common_range_is_shared_by_all_shots():
    eq = StackingEquations(0, 0, VELOCITY)
    eq.set_common_shot_group([make_gather([100, 500, 900]), make_gather([200, 400, 800])])
    assert eq.small_distance == 200.0
    assert eq.big_distance == 800.0


def test_fold_one_pairs_mirror_about_common_range():
    eq, gather, rows = build(1)
    assert rows
    weights = {r.number + 10: r.weight for r in gather.receivers}
    for row in rows:
        assert row.terms[0] == (3, 2)
        receivers = row.terms[1:]
        assert len(receivers) == 2
        assert all(coef == 1 for _, coef in receivers)
        total = sum(weights[index] for index, _ in receivers)
        assert total == pytest.approx(eq.small_distance + eq.big_distance)
        assert row.rhs == pytest.approx(2.0)
    assert eq.rows == rows


def test_fold_two_rows_have_four_receivers():
    _, _, rows = build(2)
    assert rows
    for row in rows:
        assert row.terms[0] == (3, 4)
        assert len(row.terms) == 5
        assert row.rhs == pytest.approx(4.0)


def test_fold_three_rows_have_eight_receivers():
    _, _, rows = build(3)
    assert rows
    for row in rows:
        assert row.terms[0] == (3, 8)
        assert len(row.terms) == 9
        assert row.rhs == pytest.approx(8.0)


def test_receiver_unknowns_offset_by_shot_point_number():
    _, gather, rows = build(1, shot_points=25)
    numbers = {r.number for r in gather.receivers}
    for row in rows:
        for index, _ in row.terms[1:]:
            assert index - 25 in numbers


def test_append_requires_common_shot_group():
    eq = StackingEquations(0, 0, VELOCITY)
    with pytest.raises(RuntimeError):
        eq.append([make_gather(DISTANCES)])


def test_append_after_close_raises():
    eq, _, _ = build(1)
    eq.close()
    with pytest.raises(RuntimeError):
        eq.append([make_gather(DISTANCES)])


def test_set_precision_range():
    eq = StackingEquations()
    eq.set_precision(0.5)
    assert eq.precision == 0.5
    with pytest.raises(ValueError):
        eq.set_precision(1.5)
    with pytest.raises(ValueError):
        eq.set_precision(-0.1)


def test_common_shot_group_rejects_empty_gather():
    eq = StackingEquations()
    with pytest.raises(ValueError):
        eq.set_common_shot_group([ShotGather(1, Point(), [])])


def test_too_many_shots_rejected():
    eq = StackingEquations(0, 0, VELOCITY)
    eq.set_common_shot_group([make_gather(DISTANCES)])
    with pytest.raises(ValueError):
        eq.append([make_gather(DISTANCES) for _ in range(21)])


def test_equation_row_holds_terms():
    row = EquationRow([(0, 2), (5, 1)], 3.5)
    assert row.terms[1] == (5, 1)
    assert row.rhs == 3.5