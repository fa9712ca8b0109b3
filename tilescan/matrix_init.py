"""Seeded random matrix generation built on a Mersenne Twister."""

from __future__ import annotations

import math
from typing import Iterator, List, Union

_MASK32 = 0xFFFFFFFF
_N = 624
_M = 397
_TWO_32 = 4294967296.0


class Mt19937:
    """32-bit Mersenne Twister producing the standard mt19937 sequence."""

    def __init__(self, seed: int = 5489) -> None:
        state = [seed % (1 << 32)]
        for i in range(1, _N):
            prev = state[-1]
            state.append((1812433253 * (prev ^ (prev >> 30)) + i) & _MASK32)
        self._state = state
        self._index = _N

    def _twist(self) -> None:
        mt = self._state
        for i in range(_N):
            y = (mt[i] & 0x80000000) | (mt[(i + 1) % _N] & 0x7FFFFFFF)
            value = mt[(i + _M) % _N] ^ (y >> 1)
            if y & 1:
                value ^= 0x9908B0DF
            mt[i] = value
        self._index = 0

    def next_u32(self) -> int:
        """Return the next 32-bit output."""
        if self._index >= _N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & _MASK32

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next_u32()


def _uniform_int(rng: Mt19937, low: int, high: int) -> int:
    span = high - low + 1
    if span == 1 << 32:
        return low + rng.next_u32()
    product = rng.next_u32() * span
    if product & _MASK32 < span:
        threshold = ((1 << 32) - span) % span
        while product & _MASK32 < threshold:
            product = rng.next_u32() * span
    return low + (product >> 32)


def _uniform_real(rng: Mt19937, low: float, high: float) -> float:
    total = float(rng.next_u32())
    total += float(rng.next_u32()) * _TWO_32
    fraction = total / (_TWO_32 * _TWO_32)
    if fraction >= 1.0:
        fraction = math.nextafter(1.0, 0.0)
    return fraction * (high - low) + low


def generate_random_matrix(
    num_rows: int,
    num_cols: int,
    seed: int,
    low: Union[int, float] = -10,
    high: Union[int, float] = 10,
) -> List[Union[int, float]]:
    """Return ``num_rows * num_cols`` values in row-major order.

    Integer bounds give integers in ``[low, high]``; a float bound gives
    floats in ``[low, high)``.
    """
    if low > high:
        raise ValueError("low must not exceed high")
    rng = Mt19937(seed)
    count = num_rows * num_cols
    if isinstance(low, float) or isinstance(high, float):
        return [_uniform_real(rng, float(low), float(high)) for _ in range(count)]
    if high - low + 1 > 1 << 32:
        raise ValueError("integer range wider than 32 bits")
    return [_uniform_int(rng, low, high) for _ in range(count)]