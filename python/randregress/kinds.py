"""Parameter and result kinds, and native word-size helpers."""

from __future__ import annotations

import enum

import numpy as np

NATIVE_BITS = np.dtype(np.intp).itemsize * 8


class ParamKind(enum.Enum):
    """Argument kind accepted by a generator operation."""

    NONE = 'none'
    INT = 'int'
    UINT = 'uint'
    INT32 = 'int32'
    INT64 = 'int64'
    UINT32 = 'uint32'
    UINT64 = 'uint64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'


class ResultKind(enum.Enum):
    """Value kind produced by a generator operation."""

    FLOAT64 = 'float64'
    FLOAT32 = 'float32'
    INT = 'int'
    UINT = 'uint'
    INT32 = 'int32'
    INT64 = 'int64'
    UINT32 = 'uint32'
    UINT64 = 'uint64'
    INT_SEQUENCE = 'int_sequence'


def check_bits(bits: int) -> int:
    """Validate an emulated native word size."""
    if bits not in (32, 64):
        raise ValueError(f'unsupported native word size: {bits}')
    return bits


def max_signed(bits: int) -> int:
    return (1 << (bits - 1)) - 1


def max_unsigned(bits: int) -> int:
    return (1 << bits) - 1


def fits_signed(value: int, bits: int) -> bool:
    """Return True when `value` survives a round trip through a signed `bits`-wide integer."""
    return -(1 << (bits - 1)) <= value <= max_signed(bits)


def fits_unsigned(value: int, bits: int) -> bool:
    return 0 <= value <= max_unsigned(bits)


def signed_type(bits: int) -> type[np.signedinteger]:
    return np.int32 if bits == 32 else np.int64


def unsigned_type(bits: int) -> type[np.unsignedinteger]:
    return np.uint32 if bits == 32 else np.uint64


RESULT_TYPES: dict[ResultKind, tuple[type, ...]] = {
    ResultKind.FLOAT64: (np.float64,),
    ResultKind.FLOAT32: (np.float32,),
    ResultKind.INT: (np.int32, np.int64),
    ResultKind.UINT: (np.uint32, np.uint64),
    ResultKind.INT32: (np.int32,),
    ResultKind.INT64: (np.int64,),
    ResultKind.UINT32: (np.uint32,),
    ResultKind.UINT64: (np.uint64,),
    ResultKind.INT_SEQUENCE: (list,),
}
