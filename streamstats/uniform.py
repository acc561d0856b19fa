"""
Uniform random sources consumed by the normal generators.

A source supplies floats in [0, 1) and unsigned 32-bit integers. Seeding is
up to the caller; pass a seed for reproducible streams.
"""

import random
from typing import List, Optional, Protocol, runtime_checkable

import torch

UINT32_MAX = 0xFFFFFFFF


@runtime_checkable
class UniformSource(Protocol):
    def uniform(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def uniform_uint32(self) -> int:
        """Uniform integer in [0, 2**32)."""
        ...


class RandomUniformSource:
    """Uniform source backed by random.Random (Mersenne Twister)."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def uniform(self) -> float:
        return self.rng.random()

    def uniform_uint32(self) -> int:
        return self.rng.getrandbits(32)


class TorchUniformSource:
    """
    Uniform source backed by a torch.Generator.

    Values are drawn in blocks of buffer_size and handed out one at a time,
    so the per-call cost stays close to the python-level source.
    """

    def __init__(self, seed: Optional[int] = None, buffer_size: int = 4096) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self.generator = torch.Generator(device="cpu")
        if seed is None:
            self.generator.seed()
        else:
            self.generator.manual_seed(int(seed))
        self.buffer_size = int(buffer_size)
        self._floats: List[float] = []
        self._ints: List[int] = []

    def uniform(self) -> float:
        if not self._floats:
            block = torch.rand(
                self.buffer_size, generator=self.generator, dtype=torch.float64
            )
            # popped from the end
            self._floats = block.tolist()[::-1]
        return self._floats.pop()

    def uniform_uint32(self) -> int:
        if not self._ints:
            # int64 holds the full uint32 range
            block = torch.randint(
                0,
                UINT32_MAX + 1,
                (self.buffer_size,),
                generator=self.generator,
                dtype=torch.int64,
            )
            self._ints = block.tolist()[::-1]
        return self._ints.pop()
