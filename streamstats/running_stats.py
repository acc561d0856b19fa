import math
from typing import Any, Dict, Iterable

from .utils.stats_utils import NAN, as_floats, div, sqrt


class RunningStats:
    """
    Single-pass descriptive statistics with O(1) memory.

    Keeps count, min, max, sum and the second, third and fourth central moment
    sums (M2, M3, M4) of the values seen so far. Moments are updated with the
    Welford/Terriberry recurrence so no sample is ever stored.

    Statistics that are undefined for the current count are reported as nan:
    variance needs 2 values, sample skew 3, sample kurtosis 4. Skew and
    kurtosis stay nan for constant streams since they divide by M2.

    Not thread-safe. Keep one accumulator per thread and combine them with
    merge().
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.n = 0
        self._min = 0.0
        self._max = 0.0
        self._sum = 0.0
        self._mean = 0.0
        self.M2 = 0.0  # sum of squares of diffs
        self.M3 = 0.0
        self.M4 = 0.0

    def update(self, x: float) -> None:
        x = float(x)
        n1 = self.n
        self.n += 1
        n = self.n

        if n == 1:
            self._min = x
            self._max = x
        else:
            if x < self._min:
                self._min = x
            if x > self._max:
                self._max = x
        self._sum += x

        delta = x - self._mean
        delta_n = delta / n
        delta_n2 = delta_n * delta_n
        term1 = delta * delta_n * n1

        # M4 and M3 read the pre-update lower moments, order matters
        self.M4 += (
            term1 * delta_n2 * (n * n - 3 * n + 3)
            + 6 * delta_n2 * self.M2
            - 4 * delta_n * self.M3
        )
        self.M3 += term1 * delta_n * (n - 2) - 3 * delta_n * self.M2
        self.M2 += term1
        self._mean += delta_n

    append = update

    def append_array(self, values: Iterable[float]) -> None:
        """Update with every value in order. Accepts sequences and 1-D tensors."""
        for v in as_floats(values):
            self.update(v)

    def merge(self, other: "RunningStats") -> "RunningStats":
        """Fold another accumulator's moments into this one. Returns self."""
        if other.n == 0:
            return self
        if self.n == 0:
            self._load(other)
            return self

        na, nb = self.n, other.n
        n = na + nb
        delta = other._mean - self._mean
        delta2 = delta * delta
        delta3 = delta2 * delta
        delta4 = delta2 * delta2

        M2a, M3a, M4a = self.M2, self.M3, self.M4
        M2b, M3b, M4b = other.M2, other.M3, other.M4

        self.M4 = (
            M4a
            + M4b
            + delta4 * na * nb * (na * na - na * nb + nb * nb) / (n * n * n)
            + 6.0 * delta2 * (na * na * M2b + nb * nb * M2a) / (n * n)
            + 4.0 * delta * (na * M3b - nb * M3a) / n
        )
        self.M3 = (
            M3a
            + M3b
            + delta3 * na * nb * (na - nb) / (n * n)
            + 3.0 * delta * (na * M2b - nb * M2a) / n
        )
        self.M2 = M2a + M2b + delta2 * na * nb / n
        self._mean += delta * nb / n

        self.n = n
        self._sum += other._sum
        self._min = min(self._min, other._min)
        self._max = max(self._max, other._max)
        return self

    def _load(self, other: "RunningStats") -> None:
        self.n = other.n
        self._min, self._max, self._sum = other._min, other._max, other._sum
        self._mean = other._mean
        self.M2, self.M3, self.M4 = other.M2, other.M3, other.M4

    def copy(self) -> "RunningStats":
        clone = RunningStats()
        clone._load(self)
        return clone

    def __add__(self, other: "RunningStats") -> "RunningStats":
        if not isinstance(other, RunningStats):
            return NotImplemented
        return self.copy().merge(other)

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"RunningStats(count={self.n}, mean={self.mean!r}, M2={self.M2!r})"

    @property
    def count(self) -> int:
        return self.n

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def mean(self) -> float:
        if self.n == 0:
            return 0.0
        return self._sum / self.n

    @property
    def population_variance(self) -> float:
        if self.n < 2:
            return NAN
        return self.M2 / self.n

    @property
    def sample_variance(self) -> float:
        if self.n < 2:
            return NAN
        return self.M2 / (self.n - 1)

    @property
    def population_standard_deviation(self) -> float:
        return sqrt(self.population_variance)

    @property
    def sample_standard_deviation(self) -> float:
        return sqrt(self.sample_variance)

    @property
    def population_skew(self) -> float:
        if self.n < 2:
            return NAN
        return div(math.sqrt(self.n) * self.M3, self.M2**1.5)

    @property
    def sample_skew(self) -> float:
        n = self.n
        if n < 3:
            return NAN
        return math.sqrt(n * (n - 1)) / (n - 2) * self.population_skew

    @property
    def population_kurtosis(self) -> float:
        if self.n < 2:
            return NAN
        return div(self.n * self.M4, self.M2 * self.M2) - 3.0

    @property
    def sample_kurtosis(self) -> float:
        n = self.n
        if n < 4:
            return NAN
        return (n - 1) / ((n - 2) * (n - 3)) * ((n + 1) * self.population_kurtosis + 6.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "min": self.min,
            "max": self.max,
            "sum": self.sum,
            "mean": self.mean,
            "population_variance": self.population_variance,
            "sample_variance": self.sample_variance,
            "population_standard_deviation": self.population_standard_deviation,
            "sample_standard_deviation": self.sample_standard_deviation,
            "population_skew": self.population_skew,
            "sample_skew": self.sample_skew,
            "population_kurtosis": self.population_kurtosis,
            "sample_kurtosis": self.sample_kurtosis,
        }
