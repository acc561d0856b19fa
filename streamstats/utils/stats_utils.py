import math
from statistics import NormalDist
from typing import Any, Iterable, List, Optional

import torch

from ..config import StatsConfig, get_default_config
from ..errors import InvalidInputError

NAN = float("nan")


def div(a: float, b: float) -> float:
    """IEEE-754 style division: 0/0 -> nan, a/0 -> +-inf."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return NAN
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def sqrt(x: float) -> float:
    """math.sqrt that yields nan instead of raising on negatives."""
    if math.isnan(x) or x < 0.0:
        return NAN
    return math.sqrt(x)


def as_floats(values: Any) -> List[float]:
    """Materialize a sequence, iterable or 1-D tensor as a list of python floats."""
    if isinstance(values, torch.Tensor):
        if values.dim() != 1:
            raise InvalidInputError(
                f"Expected a 1-D tensor, got shape {tuple(values.shape)}"
            )
        return [float(v) for v in values.tolist()]
    if isinstance(values, Iterable):
        return [float(v) for v in values]
    raise InvalidInputError(f"Expected a sequence of numbers, got {type(values)!r}")


def z_from_confidence(ci_confidence: float) -> float:
    """Two-sided normal z for given confidence, e.g. 0.95 -> 1.9599..."""
    if not (0.0 < ci_confidence < 1.0):
        raise InvalidInputError("ci_confidence must be in (0, 1)")
    alpha = 1.0 - float(ci_confidence)
    return NormalDist().inv_cdf(1.0 - alpha / 2.0)


def normal_mean_bounds(
    mean: float, var: float, n: int, z: float
) -> tuple[float, float, float]:
    """Return (low, high, se) for mean under normal approx."""
    if n <= 1 or not var > 0.0 or z <= 0.0:
        return mean, mean, 0.0
    se = math.sqrt(var / n)
    return mean - z * se, mean + z * se, se


def mean_confidence_interval(
    stats, config: Optional[StatsConfig] = None
) -> tuple[float, float, float]:
    """(low, high, se) for the mean of a RunningStats at config.ci_confidence."""
    config = config or get_default_config()
    z = z_from_confidence(config.ci_confidence)
    return normal_mean_bounds(stats.mean, stats.sample_variance, stats.count, z)
