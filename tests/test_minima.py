from datetime import datetime, timedelta

import pytest

from coast_forecast.minima import (
    AnnotatedMinimum,
    EmptyInputError,
    Sample,
    find_local_minima,
    is_local_minimum,
    mean_speed,
    neighbor_change_average,
)

START = datetime(2024, 4, 5, 0, 0)


def make_samples(speeds, step_hours=3):
    return [Sample(time=START + timedelta(hours=step_hours * i), speed=float(s)) for i, s in enumerate(speeds)]


@pytest.mark.parametrize("speeds", [[], [7], [7, 3]])
def test_short_series_returns_empty(speeds):
    assert find_local_minima(make_samples(speeds)) == []


def test_mean_of_empty_series_raises():
    with pytest.raises(EmptyInputError):
        mean_speed([])


def test_single_dip_is_retained_with_volatility():
    samples = make_samples([10, 4, 9])
    result = find_local_minima(samples)

    assert result == [AnnotatedMinimum(time=samples[1].time, speed=4.0, volatility=5.5)]


def test_flat_series_has_no_minima():
    assert find_local_minima(make_samples([5, 5, 5, 5])) == []


def test_plateau_does_not_qualify():
    assert find_local_minima(make_samples([5, 3, 3, 5])) == []


def test_repeated_dips_keep_time_order():
    samples = make_samples([20, 2, 20, 2, 20])
    result = find_local_minima(samples)

    assert [m.time for m in result] == [samples[1].time, samples[3].time]
    assert [m.speed for m in result] == [2.0, 2.0]
    assert all(m.volatility == pytest.approx(18.0) for m in result)


def test_candidate_above_mean_is_dropped():
    # mean is 8.4; the dip to 9 is a local minimum but not a calm one
    samples = make_samples([10, 3, 10, 9, 10])
    assert is_local_minimum(samples, 3)
    assert neighbor_change_average(samples, 3) == pytest.approx(3.0)

    result = find_local_minima(samples)

    assert len(result) == 1
    assert result[0].time == samples[1].time
    assert result[0].volatility == pytest.approx(5.0)


def test_candidate_equal_to_mean_is_dropped():
    # mean is exactly 4.0
    samples = make_samples([6, 4, 6, 0, 4])
    result = find_local_minima(samples)

    assert [m.time for m in result] == [samples[3].time]


def test_endpoints_never_qualify():
    samples = make_samples([1, 5, 2, 6, 0])
    assert not is_local_minimum(samples, 0)
    assert not is_local_minimum(samples, 4)
    assert [m.speed for m in find_local_minima(samples)] == [2.0]


@pytest.mark.parametrize(
    "window_size, expected",
    [(1, [5.5, 2.5]), (2, [4.0, 10 / 3]), (10, [4.0, 4.0])],
)
def test_window_size_changes_volatility(window_size, expected):
    samples = make_samples([10, 4, 9, 8, 12])
    result = find_local_minima(samples, window_size=window_size)

    assert [m.speed for m in result] == [4.0, 8.0]
    assert [m.volatility for m in result] == pytest.approx(expected)


@pytest.mark.parametrize("window_size", [0, -1, 1.5, True, "2"])
def test_invalid_window_size_raises(window_size):
    with pytest.raises(ValueError):
        find_local_minima(make_samples([10, 4, 9]), window_size=window_size)


def test_input_is_left_untouched():
    samples = make_samples([10, 4, 9, 2, 7])
    before = list(samples)

    result = find_local_minima(samples)

    assert samples == before
    assert all(isinstance(m, AnnotatedMinimum) for m in result)


def test_retained_minima_hold_the_documented_properties():
    speeds = [12, 8, 15, 15, 3, 9, 4, 4, 11, 6, 14, 2, 2, 18]
    samples = make_samples(speeds)
    average = mean_speed(samples)
    index_by_time = {s.time: i for i, s in enumerate(samples)}

    result = find_local_minima(samples)
    indices = [index_by_time[m.time] for m in result]

    assert indices == sorted(indices)
    for i, m in zip(indices, result):
        assert 0 < i < len(samples) - 1
        assert speeds[i] < speeds[i - 1] and speeds[i] < speeds[i + 1]
        assert m.speed < average
        assert m.volatility == pytest.approx(neighbor_change_average(samples, i))
