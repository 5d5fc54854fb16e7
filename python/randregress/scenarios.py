"""Boundary-value argument tables.

The tables are ordered and cycled by repeat index, so their contents and order
are part of the golden data. Append-only changes still shift every later
position of the affected operations; treat edits here like golden edits.
"""

from __future__ import annotations

from .kinds import ParamKind

INT32S: tuple[int, ...] = (
    1,
    10,
    32,
    1 << 20,
    (1 << 20) + 1,
    1000000000,
    1 << 30,
    (1 << 31) - 2,
    (1 << 31) - 1,
)

UINT32S: tuple[int, ...] = INT32S + (
    (1 << 32) - 2,
    (1 << 32) - 1,
)

INT64S: tuple[int, ...] = INT32S + (
    1000000000000000000,
    1 << 60,
    (1 << 63) - 2,
    (1 << 63) - 1,
)

UINT64S: tuple[int, ...] = INT64S + (
    (1 << 64) - 2,
    (1 << 64) - 1,
)

PERM_SIZES: tuple[int, ...] = (0, 1, 5, 8, 9, 10, 16)

# Native-width kinds draw from the 64-bit tables; the feeder narrows or
# substitutes when a value does not fit.
SCENARIOS: dict[ParamKind, tuple[int, ...]] = {
    ParamKind.INT: INT64S,
    ParamKind.UINT: UINT64S,
    ParamKind.INT32: INT32S,
    ParamKind.INT64: INT64S,
    ParamKind.UINT32: UINT32S,
    ParamKind.UINT64: UINT64S,
}


def has_table(kind: ParamKind) -> bool:
    return kind in SCENARIOS


def scenario(table: tuple[int, ...], repeat: int) -> int:
    """Return the scenario value for `repeat`, cycling through `table`."""
    return table[repeat % len(table)]
