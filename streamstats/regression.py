"""
Simple (one predictor) ordinary least squares, streamed or batch.

Both paths reduce the data to the same sufficient statistics: the count, the
means of x and y and the co-moment sums Sxx, Syy and Sxy. Slope, intercept
and R^2 need two points; the standard errors need a third for the residual
degrees of freedom. Below those counts the values are nan.
"""

import math
from typing import Iterable, NamedTuple

from .errors import InvalidInputError
from .utils.stats_utils import NAN, as_floats, div, sqrt


class RegressionResult(NamedTuple):
    slope: float
    intercept: float
    r_squared: float
    count: int
    slope_std_err: float
    intercept_std_err: float


def _solve(
    n: int, mean_x: float, mean_y: float, sxx: float, syy: float, sxy: float
) -> RegressionResult:
    if n < 2:
        return RegressionResult(NAN, NAN, NAN, n, NAN, NAN)

    slope = div(sxy, sxx)
    intercept = mean_y - slope * mean_x
    r_squared = div(sxy * sxy, sxx * syy)

    if n < 3:
        return RegressionResult(slope, intercept, r_squared, n, NAN, NAN)

    ss_res = syy - slope * sxy
    if ss_res < 0.0:
        # rounding on an exact fit
        ss_res = 0.0
    s2 = ss_res / (n - 2)
    slope_std_err = sqrt(div(s2, sxx))
    intercept_std_err = sqrt(s2 * (1.0 / n + div(mean_x * mean_x, sxx)))
    return RegressionResult(
        slope, intercept, r_squared, n, slope_std_err, intercept_std_err
    )


class RunningRegression:
    """
    Streamed linear regression of y on x.

    Co-moments are updated with Welford's recurrence so the fit stays stable
    for large offsets in x or y. Not thread-safe.
    """

    def __init__(self) -> None:
        self.n = 0
        self.mean_x = 0.0
        self.mean_y = 0.0
        self.Sxx = 0.0
        self.Syy = 0.0
        self.Sxy = 0.0

    def update(self, x: float, y: float) -> None:
        x, y = float(x), float(y)
        self.n += 1
        dx = x - self.mean_x
        dy = y - self.mean_y
        self.mean_x += dx / self.n
        self.mean_y += dy / self.n
        self.Sxx += dx * (x - self.mean_x)
        self.Syy += dy * (y - self.mean_y)
        self.Sxy += dx * (y - self.mean_y)

    def append_array(self, x_data: Iterable[float], y_data: Iterable[float]) -> None:
        xs, ys = as_floats(x_data), as_floats(y_data)
        if len(xs) != len(ys):
            raise InvalidInputError(
                f"x and y must have the same length, got {len(xs)} and {len(ys)}"
            )
        for x, y in zip(xs, ys):
            self.update(x, y)

    def to_result(self) -> RegressionResult:
        return _solve(
            self.n, self.mean_x, self.mean_y, self.Sxx, self.Syy, self.Sxy
        )

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * float(x)

    @property
    def count(self) -> int:
        return self.n

    @property
    def slope(self) -> float:
        return self.to_result().slope

    @property
    def intercept(self) -> float:
        return self.to_result().intercept

    @property
    def r_squared(self) -> float:
        return self.to_result().r_squared

    @property
    def slope_standard_error(self) -> float:
        return self.to_result().slope_std_err

    @property
    def intercept_standard_error(self) -> float:
        return self.to_result().intercept_std_err


def linear_regression(
    x_data: Iterable[float], y_data: Iterable[float]
) -> RegressionResult:
    """
    Fit y = slope * x + intercept over paired arrays.

    Returns (slope, intercept, r_squared, count, slope_std_err, intercept_std_err).
    Raises InvalidInputError for empty or mismatched inputs.
    """
    xs, ys = as_floats(x_data), as_floats(y_data)
    if len(xs) != len(ys):
        raise InvalidInputError(
            f"x and y must have the same length, got {len(xs)} and {len(ys)}"
        )
    if not xs:
        raise InvalidInputError("Cannot fit a regression on empty input")

    n = len(xs)
    mean_x = math.fsum(xs) / n
    mean_y = math.fsum(ys) / n
    sxx = syy = sxy = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        sxx += dx * dx
        syy += dy * dy
        sxy += dx * dy
    return _solve(n, mean_x, mean_y, sxx, syy, sxy)
