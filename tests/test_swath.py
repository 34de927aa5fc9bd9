import pytest

from seisstatics.points import Point
from seisstatics.swath import (
    NAME_BOX_COUNT,
    SurveySystem,
    SwathParameters,
    make_ph,
    swath_file_stem,
)


def _survey():
    return SurveySystem(
        group_interval=50,
        receive_line_number=4,
        shot_point_number=3,
        shot_line_interval=200,
        group_number_of_small_number=10,
        gap_of_small_number=100,
        gap_of_big_number=100,
        shot_point_positions=[10.0, 20.0, 30.0],
        receive_line_positions=[0.0, 100.0, 200.0, 300.0],
    )


def _big_number_swath():
    params = SwathParameters(
        survey=_survey(),
        distance3=100,
        distance4=300,
        shot_line_from=5,
        shot_line_to=7,
    )
    params.shot_point_names[:3] = [101, 102, 103]
    params.calculate()
    return params


def test_make_ph_combines_line_and_point():
    assert make_ph(12, 345) == 12 * 1000 + 345


def test_file_stem_contains_swath_number():
    assert swath_file_stem(3).startswith("swath")
    assert swath_file_stem(3) != swath_file_stem(4)


def test_common_round_trip(tmp_path):
    params = SwathParameters(
        distance1=400, distance2=100, distance3=100, distance4=400,
        shot_line_from=3, shot_line_to=9, initial_velocity=1800,
        first_receive_point_number=2, fold_time=3,
    )
    path = tmp_path / "s.pa1"
    params.write_common(path)
    loaded = SwathParameters()
    loaded.read_common(path)
    assert (loaded.distance1, loaded.distance4) == (400, 400)
    assert (loaded.shot_line_from, loaded.shot_line_to) == (3, 9)
    assert loaded.initial_velocity == 1800
    assert loaded.fold_time == 3
    assert loaded.first_receive_point_number == 2


def test_read_common_orders_shot_lines(tmp_path):
    params = SwathParameters(shot_line_from=9, shot_line_to=3)
    path = tmp_path / "s.pa1"
    params.write_common(path)
    loaded = SwathParameters()
    loaded.read_common(path)
    assert loaded.shot_line_from < loaded.shot_line_to
    assert {loaded.shot_line_from, loaded.shot_line_to} == {3, 9}


def test_read_common_too_short(tmp_path):
    path = tmp_path / "s.pa1"
    path.write_text("1 2 3\n")
    with pytest.raises(ValueError):
        SwathParameters().read_common(path)


def test_read_common_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SwathParameters().read_common(tmp_path / "none.pa1")


def test_names_round_trip(tmp_path):
    params = SwathParameters()
    params.receive_line_names = list(range(1, NAME_BOX_COUNT + 1))
    params.shot_point_names = list(range(500, 500 + NAME_BOX_COUNT))
    path = tmp_path / "s.pa2"
    params.write_names(path)
    lines = path.read_text().splitlines()
    assert len(lines) == 2 * NAME_BOX_COUNT // 10
    assert all(len(line.split()) == 10 for line in lines)
    loaded = SwathParameters()
    loaded.read_names(path)
    assert loaded.receive_line_names == params.receive_line_names
    assert loaded.shot_point_names == params.shot_point_names


def test_load_reads_both_files(tmp_path):
    source = _big_number_swath()
    stem = tmp_path / swath_file_stem(2)
    source.write_common(f"{stem}.pa1")
    source.write_names(f"{stem}.pa2")
    loaded = SwathParameters.load(2, _survey(), tmp_path)
    assert loaded.shot_point_names == source.shot_point_names
    assert loaded.group3 == source.group3
    assert loaded.total_unform_receive_point_number == source.total_unform_receive_point_number


def test_calculate_big_number_example():
    params = _big_number_swath()
    assert params.group3 == 11
    assert params.group4 == 15
    assert params.total_unform_receive_point_number == 20
    assert params.group1 == params.group2 == 0
    assert params.shot_line_number == params.shot_line_to - params.shot_line_from + 1


def test_total_unform_is_multiple_of_lines():
    params = _big_number_swath()
    assert params.total_unform_receive_point_number % params.survey.receive_line_number == 0
    assert params.total_receive_point_number % params.survey.receive_line_number == 0


def test_shot_stations():
    params = _big_number_swath()
    stations = params.shot_stations()
    assert len(stations) == params.shot_line_number * params.survey.shot_point_number
    assert stations[0] == make_ph(5, 101)
    assert stations[-1] == make_ph(7, 103)
    assert stations == sorted(stations)


def test_shot_position_known_point():
    params = _big_number_swath()
    pos = params.shot_position(make_ph(5, 102), 0, 0)
    assert pos == Point(20.0, -params.distance3)


def test_shot_position_next_line_moves_by_interval():
    params = _big_number_swath()
    first = params.shot_position(make_ph(5, 101), 0, 0)
    second = params.shot_position(make_ph(6, 101), 0, 0)
    assert second.x == first.x
    assert second.y - first.y == params.survey.shot_line_interval


def test_shot_position_unknown_point_uses_offset():
    params = _big_number_swath()
    pos = params.shot_position(make_ph(5, 999), 5, 7)
    assert pos.x == 7 - 1


def test_receivers_for_first_shot_cover_all_numbers():
    params = _big_number_swath()
    receivers = params.receivers_for_shot(make_ph(5, 101))
    assert len(receivers) == params.total_unform_receive_point_number
    assert sorted(r.number for r in receivers) == list(range(len(receivers)))


def test_receiver_positions_follow_numbers():
    params = _big_number_swath()
    ss = params.survey
    for r in params.receivers_for_shot(make_ph(6, 102)):
        assert r.pos.x == ss.receive_line_positions[r.number % ss.receive_line_number]
        assert r.pos.y == r.number // ss.receive_line_number * ss.group_interval


def test_later_shot_line_shifts_numbers():
    params = _big_number_swath()
    first = params.receivers_for_shot(make_ph(5, 101))
    later = params.receivers_for_shot(make_ph(6, 101))
    shift = params.survey.shot_line_interval // params.survey.group_interval
    shift *= params.survey.receive_line_number
    assert [r.number for r in later] == [r.number + shift for r in first]


def test_two_direction_receivers_are_distinct():
    params = SwathParameters(
        survey=_survey(),
        distance1=300, distance2=100, distance3=100, distance4=300,
        shot_line_from=1, shot_line_to=2,
    )
    params.calculate()
    receivers = params.receivers_for_shot(make_ph(1, 101))
    numbers = [r.number for r in receivers]
    assert len(numbers) == params.total_unform_receive_point_number
    assert len(set(numbers)) == len(numbers)