"""Deterministic argument selection for one-argument operations."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import EnumerationError
from .kinds import ParamKind, check_bits, fits_signed, fits_unsigned
from .operations import Operation
from .scenarios import PERM_SIZES, SCENARIOS, scenario

# Operations whose INT parameter is an element count, fed from PERM_SIZES.
PERMUTATION_OPERATIONS = frozenset({'perm'})

# Fixed-width counterparts invoked when a native-width argument does not fit.
WIDE_COUNTERPARTS: dict[ParamKind, str] = {
    ParamKind.INT: 'int64n',
    ParamKind.UINT: 'uint64n',
}


@dataclass(frozen=True)
class Argument:
    """The argument chosen for one repeat of an operation.

    When `substitute` is set, the value does not fit the native word size and
    the named fixed-width operation must be called in its place, with its
    result discarded.
    """

    value: int
    substitute: str | None = None

    @property
    def literal(self) -> str:
        return str(self.value)


class ArgumentFeeder:
    """Cycles through the scenario tables for a given native word size."""

    __slots__ = ('_bits',)

    def __init__(self, bits: int) -> None:
        self._bits = check_bits(bits)

    @property
    def bits(self) -> int:
        return self._bits

    def argument(self, op: Operation, repeat: int) -> Argument | None:
        """Return the argument for repeat `repeat` of `op`, or None if it takes none."""
        if not op.takes_argument:
            return None
        if op.param is ParamKind.INT and op.name in PERMUTATION_OPERATIONS:
            return Argument(scenario(PERM_SIZES, repeat))

        table = SCENARIOS.get(op.param)
        if table is None:
            raise EnumerationError(f'unexpected argument type {op.param.value} for r.{op.name}')
        value = scenario(table, repeat)

        if op.param is ParamKind.INT and not fits_signed(value, self._bits):
            return Argument(value, substitute=WIDE_COUNTERPARTS[ParamKind.INT])
        if op.param is ParamKind.UINT and not fits_unsigned(value, self._bits):
            return Argument(value, substitute=WIDE_COUNTERPARTS[ParamKind.UINT])
        return Argument(value)
