import math

import pytest
import torch

from streamstats.config import StatsConfig
from streamstats.errors import InvalidInputError
from streamstats.running_stats import RunningStats
from streamstats.utils.stats_utils import (
    as_floats,
    div,
    mean_confidence_interval,
    normal_mean_bounds,
    sqrt,
    z_from_confidence,
)


def test_div_follows_ieee():
    assert div(1.0, 4.0) == 0.25
    assert math.isnan(div(0.0, 0.0))
    assert math.isnan(div(math.nan, 0.0))
    assert div(2.0, 0.0) == math.inf
    assert div(-2.0, 0.0) == -math.inf
    assert div(2.0, -0.0) == -math.inf


def test_sqrt_never_raises():
    assert sqrt(4.0) == 2.0
    assert math.isnan(sqrt(-1.0))
    assert math.isnan(sqrt(math.nan))


def test_as_floats():
    assert as_floats([1, 2.5]) == [1.0, 2.5]
    assert as_floats(x for x in (3, 4)) == [3.0, 4.0]
    assert as_floats(torch.tensor([1.0, 2.0])) == [1.0, 2.0]
    with pytest.raises(InvalidInputError):
        as_floats(torch.zeros(2, 2))
    with pytest.raises(InvalidInputError):
        as_floats(3.0)


def test_as_floats_rejects_scalar_tensor():
    with pytest.raises(InvalidInputError):
        as_floats(torch.tensor(3.0))
    assert as_floats(torch.tensor([3.0])) == [3.0]
    assert as_floats(torch.zeros(0)) == []


def test_z_from_confidence():
    assert z_from_confidence(0.95) == pytest.approx(1.959963984540054)
    with pytest.raises(InvalidInputError):
        z_from_confidence(1.0)


def test_normal_mean_bounds():
    # se = sqrt(4 / 16) = 0.5
    low, high, se = normal_mean_bounds(10.0, 4.0, 16, 2.0)
    assert se == pytest.approx(0.5)
    assert low == pytest.approx(9.0)
    assert high == pytest.approx(11.0)

    assert normal_mean_bounds(10.0, math.nan, 1, 2.0) == (10.0, 10.0, 0.0)


def test_mean_confidence_interval():
    d = RunningStats()
    d.append_array([1.0, 2.0, 3.0, 4.0, 5.0])
    low, high, se = mean_confidence_interval(d)
    assert se == pytest.approx(math.sqrt(2.5 / 5))
    assert low < 3.0 < high
    assert high - 3.0 == pytest.approx(3.0 - low)
    assert high - 3.0 == pytest.approx(1.959963984540054 * se)

    empty = RunningStats()
    assert mean_confidence_interval(empty) == (0.0, 0.0, 0.0)


def test_mean_confidence_interval_uses_config():
    d = RunningStats()
    d.append_array([1.0, 2.0, 3.0, 4.0, 5.0])
    low, high, se = mean_confidence_interval(d, StatsConfig(ci_confidence=0.99))
    assert high - 3.0 == pytest.approx(2.5758293035489004 * se)

    narrow = mean_confidence_interval(d, StatsConfig(ci_confidence=0.5))
    assert narrow[1] - narrow[0] < high - low
