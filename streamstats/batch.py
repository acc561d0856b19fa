"""
Descriptive statistics over a fixed collection of values.

Every function is pure: it takes the values (list, tuple, any iterable or a
1-D tensor) and returns one statistic. Central moments are computed with an
explicit two-pass method, first the mean and then the sums of the 2nd, 3rd
and 4th powers of the deviations. Formulas and the nan policy for small
counts are the same as RunningStats.
"""

import math
from typing import Any, Dict, Iterable, List, Tuple

from .utils.stats_utils import NAN, as_floats, div, sqrt


def _moments(xs: List[float]) -> Tuple[int, float, float, float, float]:
    """(n, mean, M2, M3, M4) by two passes over xs."""
    n = len(xs)
    if n == 0:
        return 0, 0.0, 0.0, 0.0, 0.0
    mean = math.fsum(xs) / n
    m2 = m3 = m4 = 0.0
    for x in xs:
        d = x - mean
        d2 = d * d
        m2 += d2
        m3 += d2 * d
        m4 += d2 * d2
    return n, mean, m2, m3, m4


def _population_variance(n: int, m2: float) -> float:
    return NAN if n < 2 else m2 / n


def _sample_variance(n: int, m2: float) -> float:
    return NAN if n < 2 else m2 / (n - 1)


def _population_skew(n: int, m2: float, m3: float) -> float:
    return NAN if n < 2 else div(math.sqrt(n) * m3, m2**1.5)


def _sample_skew(n: int, m2: float, m3: float) -> float:
    if n < 3:
        return NAN
    return math.sqrt(n * (n - 1)) / (n - 2) * _population_skew(n, m2, m3)


def _population_kurtosis(n: int, m2: float, m4: float) -> float:
    return NAN if n < 2 else div(n * m4, m2 * m2) - 3.0


def _sample_kurtosis(n: int, m2: float, m4: float) -> float:
    if n < 4:
        return NAN
    return (n - 1) / ((n - 2) * (n - 3)) * ((n + 1) * _population_kurtosis(n, m2, m4) + 6.0)


def stats_count(values: Iterable[float]) -> int:
    return len(as_floats(values))


def stats_min(values: Iterable[float]) -> float:
    xs = as_floats(values)
    return min(xs) if xs else 0.0


def stats_max(values: Iterable[float]) -> float:
    xs = as_floats(values)
    return max(xs) if xs else 0.0


def stats_sum(values: Iterable[float]) -> float:
    return math.fsum(as_floats(values))


def stats_mean(values: Iterable[float]) -> float:
    xs = as_floats(values)
    if not xs:
        return 0.0
    return stats_sum(xs) / len(xs)


def stats_population_variance(values: Iterable[float]) -> float:
    n, _, m2, _, _ = _moments(as_floats(values))
    return _population_variance(n, m2)


def stats_sample_variance(values: Iterable[float]) -> float:
    n, _, m2, _, _ = _moments(as_floats(values))
    return _sample_variance(n, m2)


def stats_population_standard_deviation(values: Iterable[float]) -> float:
    return sqrt(stats_population_variance(values))


def stats_sample_standard_deviation(values: Iterable[float]) -> float:
    return sqrt(stats_sample_variance(values))


def stats_population_skew(values: Iterable[float]) -> float:
    n, _, m2, m3, _ = _moments(as_floats(values))
    return _population_skew(n, m2, m3)


def stats_sample_skew(values: Iterable[float]) -> float:
    n, _, m2, m3, _ = _moments(as_floats(values))
    return _sample_skew(n, m2, m3)


def stats_population_kurtosis(values: Iterable[float]) -> float:
    n, _, m2, _, m4 = _moments(as_floats(values))
    return _population_kurtosis(n, m2, m4)


def stats_sample_kurtosis(values: Iterable[float]) -> float:
    n, _, m2, _, m4 = _moments(as_floats(values))
    return _sample_kurtosis(n, m2, m4)


def describe(values: Iterable[float]) -> Dict[str, Any]:
    """All statistics from a single two-pass computation, keyed like RunningStats.to_dict()."""
    xs = as_floats(values)
    n, _, m2, m3, m4 = _moments(xs)
    pop_var = _population_variance(n, m2)
    sample_var = _sample_variance(n, m2)
    return {
        "count": n,
        "min": min(xs) if xs else 0.0,
        "max": max(xs) if xs else 0.0,
        "sum": stats_sum(xs),
        "mean": stats_mean(xs),
        "population_variance": pop_var,
        "sample_variance": sample_var,
        "population_standard_deviation": sqrt(pop_var),
        "sample_standard_deviation": sqrt(sample_var),
        "population_skew": _population_skew(n, m2, m3),
        "sample_skew": _sample_skew(n, m2, m3),
        "population_kurtosis": _population_kurtosis(n, m2, m4),
        "sample_kurtosis": _sample_kurtosis(n, m2, m4),
    }
