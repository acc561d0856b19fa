"""
Exact standard-normal random variates.

Three methods are provided, all exact and differing only in speed:

    NormalGenerator.bmt()      # Box-Muller transformation
    NormalGenerator.polar()    # polar Box-Muller, no sin/cos
    NormalGenerator.zig()      # Ziggurat method of J. A. Doornik

The Box-Muller methods produce values in pairs; the single-value entry points
hand out the first and keep the second for the next call. Each generator owns
its spare values, so independent streams need independent generators.
normal() uses the configured method, Ziggurat by default.

Ziggurat reference: J. A. Doornik, "An Improved Ziggurat Method to Generate
Normal Random Samples", 2005.
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from .config import GeneratorConfig, NormalMethod, StatsConfig
from .uniform import RandomUniformSource, UniformSource


# Doornik's constants; the three only describe a valid table together
ZIGGURAT_BLOCKS = 128  # number of blocks
ZIGGURAT_TAIL_START = 3.442619855899  # start of the right tail
# (R * phi(R) + Pr(X>=R)) * sqrt(2\pi)
ZIGGURAT_VOLUME = 9.91256303526217e-3


def box_muller_transformation(x1: float, x2: float) -> Tuple[float, float]:
    """Map two independent uniforms in (0, 1) to two independent standard normals."""
    radius = math.sqrt(-2.0 * math.log(x1))
    theta = 2.0 * math.pi * x2
    return radius * math.cos(theta), radius * math.sin(theta)


@dataclass(frozen=True)
class ZigguratTable:
    """
    x holds block edges such that every block has the same area;
    r[i] = x[i + 1] / x[i] is the fast acceptance threshold for block i.
    """

    blocks: int
    tail_start: float
    volume: float
    x: Tuple[float, ...]
    r: Tuple[float, ...]


def build_ziggurat_table() -> ZigguratTable:
    """Compute a fresh table from the fixed constants."""
    blocks, tail_start, volume = ZIGGURAT_BLOCKS, ZIGGURAT_TAIL_START, ZIGGURAT_VOLUME
    f = math.exp(-0.5 * tail_start * tail_start)
    x = [0.0] * (blocks + 1)
    x[0] = volume / f  # bottom block: V / f(R)
    x[1] = tail_start
    x[blocks] = 0.0
    for i in range(2, blocks):
        x[i] = math.sqrt(-2.0 * math.log(volume / x[i - 1] + f))
        f = math.exp(-0.5 * x[i] * x[i])
    r = [x[i + 1] / x[i] for i in range(blocks)]
    return ZigguratTable(blocks, tail_start, volume, tuple(x), tuple(r))


@lru_cache(maxsize=None)
def ziggurat_table() -> ZigguratTable:
    """The process-wide table, built on first use and shared read-only afterwards."""
    return build_ziggurat_table()


class NormalGenerator:
    """
    Standard-normal sampler over a uniform source.

    Holds the spare value of the last Box-Muller pair (one per method) and a
    reference to the shared read-only Ziggurat table. Not thread-safe.
    """

    def __init__(
        self,
        source: Optional[UniformSource] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.source = source if source is not None else RandomUniformSource(self.config.seed)
        self.table = ziggurat_table()
        self._mask = self.table.blocks - 1
        self.reset_spare()

    @classmethod
    def from_config(
        cls, config: StatsConfig, source: Optional[UniformSource] = None
    ) -> "NormalGenerator":
        return cls(source=source, config=config.generator)

    def reset_spare(self) -> None:
        self._use_bmt_spare = False
        self._bmt_spare = 0.0
        self._use_polar_spare = False
        self._polar_spare = 0.0

    # Box-Muller

    def bmt_pair(self) -> Tuple[float, float]:
        # 1 - u lies in (0, 1], keeps log() finite
        x1 = 1.0 - self.source.uniform()
        x2 = self.source.uniform()
        return box_muller_transformation(x1, x2)

    def bmt(self) -> float:
        if self._use_bmt_spare:
            self._use_bmt_spare = False
            return self._bmt_spare
        r, self._bmt_spare = self.bmt_pair()
        self._use_bmt_spare = True
        return r

    # polar Box-Muller

    def uniform_m1_to_1(self) -> float:
        """Uniform value in (-1, 1), never 0."""
        v = 0.0
        while v == 0.0:
            v = 2.0 * self.source.uniform() - 1.0
        return v

    def polar_pair(self) -> Tuple[float, float]:
        while True:
            x = self.uniform_m1_to_1()
            y = self.uniform_m1_to_1()
            d = x * x + y * y
            if 0.0 < d < 1.0:
                break
        f = math.sqrt(-2.0 * math.log(d) / d)
        return f * x, f * y

    def polar(self) -> float:
        if self._use_polar_spare:
            self._use_polar_spare = False
            return self._polar_spare
        r, self._polar_spare = self.polar_pair()
        self._use_polar_spare = True
        return r

    # Ziggurat

    def normal_tail(self, d_min: float, negative: bool) -> float:
        """Exact sample from the normal tail beyond d_min."""
        while True:
            x = math.log(1.0 - self.source.uniform()) / d_min
            y = math.log(1.0 - self.source.uniform())
            if -2.0 * y >= x * x:
                break
        if negative:
            return x - d_min
        return d_min - x

    def zig(self) -> float:
        zx, zr = self.table.x, self.table.r
        while True:
            u = 2.0 * self.source.uniform() - 1.0
            i = self.source.uniform_uint32() & self._mask
            # first try the rectangular boxes
            if abs(u) < zr[i]:
                return u * zx[i]
            # bottom box: sample from the tail
            if i == 0:
                return self.normal_tail(self.table.tail_start, u < 0.0)
            # is this a sample from the wedges?
            x = u * zx[i]
            f0 = math.exp(-0.5 * (zx[i] * zx[i] - x * x))
            f1 = math.exp(-0.5 * (zx[i + 1] * zx[i + 1] - x * x))
            if f1 + self.source.uniform() * (f0 - f1) < 1.0:
                return x

    def normal(self, method: Optional[NormalMethod] = None) -> float:
        method = NormalMethod(method or self.config.method)
        samplers = {
            NormalMethod.ziggurat: self.zig,
            NormalMethod.box_muller: self.bmt,
            NormalMethod.polar: self.polar,
        }
        return samplers[method]()

    def sample(self, n: int, method: Optional[NormalMethod] = None) -> List[float]:
        if n < 0:
            raise ValueError("n must be non-negative")
        return [self.normal(method) for _ in range(n)]
