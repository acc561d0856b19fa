import pytest

from streamstats.uniform import (
    UINT32_MAX,
    RandomUniformSource,
    TorchUniformSource,
    UniformSource,
)


@pytest.mark.parametrize("cls", [RandomUniformSource, TorchUniformSource])
def test_ranges(cls):
    src = cls(seed=42)
    assert isinstance(src, UniformSource)
    for _ in range(1000):
        u = src.uniform()
        assert 0.0 <= u < 1.0
        k = src.uniform_uint32()
        assert 0 <= k <= UINT32_MAX
        assert isinstance(k, int)


@pytest.mark.parametrize("cls", [RandomUniformSource, TorchUniformSource])
def test_seed_is_reproducible(cls):
    a, b = cls(seed=9), cls(seed=9)
    assert [a.uniform() for _ in range(20)] == [b.uniform() for _ in range(20)]
    assert [a.uniform_uint32() for _ in range(20)] == [b.uniform_uint32() for _ in range(20)]


def test_torch_buffer_refills():
    small = TorchUniformSource(seed=1, buffer_size=3)
    values = [small.uniform() for _ in range(10)]
    assert len(set(values)) == 10

    ints = [small.uniform_uint32() for _ in range(7)]
    assert len(ints) == 7


def test_torch_rejects_empty_buffer():
    with pytest.raises(ValueError):
        TorchUniformSource(buffer_size=0)


def test_uint32_uses_high_bits():
    src = RandomUniformSource(seed=3)
    assert any(src.uniform_uint32() > 0x7FFFFFFF for _ in range(100))
