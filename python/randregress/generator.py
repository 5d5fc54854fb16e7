"""Seeded pseudo-random generator whose outputs the harness pins down.

:class:`Rand` is a thin, typed surface over numpy's ``PCG64`` bit generator.
Every public method is an operation the regression harness drives, so adding,
removing or renaming one must go together with the operation registry in
:mod:`randregress.operations` and a regenerated golden table.

Example::

    from randregress.generator import Rand

    r = Rand(1)
    r.intn(10)    # numpy.int64 in [0, 10)
    r.perm(5)     # list[int], a permutation of range(5)
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from .kinds import NATIVE_BITS, check_bits, fits_signed, fits_unsigned, max_signed, max_unsigned, signed_type, unsigned_type

_MAX_INT31 = (1 << 31) - 1
_MAX_INT63 = (1 << 63) - 1
_MAX_UINT32 = (1 << 32) - 1
_MAX_UINT64 = (1 << 64) - 1


class Rand:
    """A seeded source of random values.

    Methods are not safe for concurrent use; every call advances the internal
    state, so the sequence of calls determines every later value.

    Arguments:
        seed: Seed for the ``PCG64`` bit generator.
        bits: Native word size to emulate (32 or 64). Native-width methods
            (`int`, `intn`, `uintn`) return values of that width; defaults to
            the word size of the running interpreter.
    """

    __slots__ = ('_rng', '_bits')

    def __init__(self, seed: int, *, bits: int | None = None) -> None:
        self._rng = np.random.Generator(np.random.PCG64(seed))
        self._bits = check_bits(bits or NATIVE_BITS)

    @property
    def bits(self) -> int:
        """The emulated native word size."""
        return self._bits

    # -- Floats ----------------------------------------------------------------

    def exp_float64(self) -> np.float64:
        """Exponentially distributed float64 with rate 1."""
        return np.float64(self._rng.standard_exponential())

    def float32(self) -> np.float32:
        """Uniform float32 in [0.0, 1.0)."""
        return np.float32(self._rng.random(dtype=np.float32))

    def float64(self) -> np.float64:
        """Uniform float64 in [0.0, 1.0)."""
        return np.float64(self._rng.random())

    def norm_float64(self) -> np.float64:
        """Standard normally distributed float64."""
        return np.float64(self._rng.standard_normal())

    # -- Signed integers -------------------------------------------------------

    def int(self) -> np.signedinteger:
        """Non-negative native-width integer.

        A 63-bit value is always drawn; narrower word sizes keep its low bits,
        so the stream stays in step across architectures.
        """
        value = self._rng.integers(0, _MAX_INT63, dtype=np.int64, endpoint=True)
        return signed_type(self._bits)(int(value) & max_signed(self._bits))

    def int32(self) -> np.int32:
        """Non-negative 31-bit integer as an int32."""
        return np.int32(self._rng.integers(0, _MAX_INT31, dtype=np.int32, endpoint=True))

    def int32n(self, n: int) -> np.int32:
        """Int32 in [0, n). Raises ValueError if n <= 0."""
        _check_bound('int32n', n, _MAX_INT31)
        return np.int32(self._rng.integers(0, n, dtype=np.int32))

    def int64(self) -> np.int64:
        """Non-negative 63-bit integer as an int64."""
        return np.int64(self._rng.integers(0, _MAX_INT63, dtype=np.int64, endpoint=True))

    def int64n(self, n: int) -> np.int64:
        """Int64 in [0, n). Raises ValueError if n <= 0."""
        _check_bound('int64n', n, _MAX_INT63)
        return np.int64(self._rng.integers(0, n, dtype=np.int64))

    def intn(self, n: int) -> np.signedinteger:
        """Native-width integer in [0, n). Raises ValueError if n <= 0 or n does not fit."""
        if not fits_signed(n, self._bits):
            raise ValueError(f'invalid argument to intn: {n} does not fit in {self._bits} bits')
        _check_bound('intn', n, max_signed(self._bits))
        return signed_type(self._bits)(self._rng.integers(0, n, dtype=np.int64))

    # -- Unsigned integers -----------------------------------------------------

    def uint32(self) -> np.uint32:
        """Uniform 32-bit unsigned integer."""
        return np.uint32(self._rng.integers(0, _MAX_UINT32, dtype=np.uint32, endpoint=True))

    def uint32n(self, n: int) -> np.uint32:
        """Uint32 in [0, n). Raises ValueError if n == 0."""
        _check_bound('uint32n', n, _MAX_UINT32)
        return np.uint32(self._rng.integers(0, n, dtype=np.uint32))

    def uint64(self) -> np.uint64:
        """Uniform 64-bit unsigned integer."""
        return np.uint64(self._rng.integers(0, _MAX_UINT64, dtype=np.uint64, endpoint=True))

    def uint64n(self, n: int) -> np.uint64:
        """Uint64 in [0, n). Raises ValueError if n == 0."""
        _check_bound('uint64n', n, _MAX_UINT64)
        return np.uint64(self._rng.integers(0, n, dtype=np.uint64))

    def uintn(self, n: int) -> np.unsignedinteger:
        """Native-width unsigned integer in [0, n). Raises ValueError if n == 0 or n does not fit."""
        if not fits_unsigned(n, self._bits):
            raise ValueError(f'invalid argument to uintn: {n} does not fit in {self._bits} bits')
        _check_bound('uintn', n, max_unsigned(self._bits))
        return unsigned_type(self._bits)(self._rng.integers(0, n, dtype=np.uint64))

    # -- Sequences -------------------------------------------------------------

    def perm(self, n: int) -> list[int]:
        """A permutation of the integers [0, n)."""
        if n < 0:
            raise ValueError(f'invalid argument to perm: {n}')
        return [int(x) for x in self._rng.permutation(n)]

    def shuffle(self, n: int, swap: Callable[[int, int], None]) -> None:
        """Pseudo-randomize the order of n elements via Fisher-Yates.

        `swap` exchanges the elements with indexes i and j.
        """
        if n < 0:
            raise ValueError(f'invalid argument to shuffle: {n}')
        for i in range(n - 1, 0, -1):
            j = int(self._rng.integers(0, i + 1, dtype=np.int64))
            swap(i, j)

    def __repr__(self) -> str:
        return f'Rand(bits={self._bits})'


def _check_bound(name: str, n: int, limit: int) -> None:
    if n <= 0 or n > limit:
        raise ValueError(f'invalid argument to {name}: {n}')
