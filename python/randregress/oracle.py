"""Positional comparison of an output log against a golden table."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .errors import CursorError
from .golden import GoldenEntry
from .invoker import Invocation
from .kinds import ResultKind, check_bits, max_signed

_MISSING = object()


@dataclass(frozen=True)
class Failure:
    """A reported (non-fatal) difference at one golden position."""

    position: int
    call: str
    got: Any
    want: Any = _MISSING

    @property
    def missing(self) -> bool:
        return self.want is _MISSING

    def __str__(self) -> str:
        if self.missing:
            return f'r.{self.call} = {_show(self.got)}, missing golden value'
        return f'r.{self.call} = {_show(self.got)}, want {_show(self.want)}'


@dataclass
class CheckReport:
    """Outcome of one checking pass."""

    failures: list[Failure] = field(default_factory=list)
    checked: int = 0
    skipped: int = 0
    cursor: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def passed(self) -> int:
        return self.checked - sum(1 for f in self.failures if not f.missing)


def truncate_top_bit(value: np.int64, bits: int) -> np.int64:
    """Clear everything above the native signed range of a recorded int64.

    Applies to every native `int` result, which covers both `int()` and
    `intn(n)`. They are recorded on 64-bit hosts; narrower hosts produce the
    same value with the upper bits (including their sign bit) dropped.
    """
    return np.int64(int(value) & max_signed(bits))


def same_value(got: Any, want: Any) -> bool:
    """Exact comparison: same type and identical bytes, element-wise for sequences."""
    if isinstance(want, list) or isinstance(got, list):
        return isinstance(got, list) and isinstance(want, list) and got == want
    return type(got) is type(want) and got.tobytes() == want.tobytes()


def check(log: Sequence[Invocation], entries: Sequence[GoldenEntry], *, bits: int) -> CheckReport:
    """Compare `log` with `entries` position by position.

    Args:
        log: Output log from one invocation pass.
        entries: Golden entries, in recorded order.
        bits: Native word size the log was produced with.

    Returns:
        CheckReport with every mismatch and missing golden value.

    Raises:
        CursorError: If the pass ends before every golden entry was consumed.
    """
    check_bits(bits)
    report = CheckReport()
    p = 0
    for inv in log:
        if inv.skipped:
            report.skipped += 1
            p += 1
            continue
        if p >= len(entries):
            report.failures.append(Failure(p, inv.call, inv.value))
            p += 1
            continue
        want = entries[p].value
        # other recorded types fall through and fail the exact comparison
        if inv.kind is ResultKind.INT and type(want) is np.int64:
            want = truncate_top_bit(want, bits)
        if not same_value(inv.value, want):
            report.failures.append(Failure(p, inv.call, inv.value, want))
        report.checked += 1
        p += 1

    report.cursor = p
    if p < len(entries):
        raise CursorError(f'golden table has {len(entries)} entries but the pass consumed only {p}')
    return report


def _show(value: Any) -> str:
    if isinstance(value, list):
        return repr(value)
    return f'{type(value).__name__}({value})'
