"""Sequential invocation of every operation against one generator."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import ArchitectureError, EnumerationError
from .feeder import ArgumentFeeder
from .kinds import RESULT_TYPES, ResultKind, check_bits
from .operations import Operation

REPEATS = 20


@dataclass(frozen=True)
class Invocation:
    """One position of the output log.

    Skipped invocations hold no value; they still occupy a golden position.
    """

    operation: str
    repeat: int
    argument: str
    kind: ResultKind
    value: Any = None
    skipped: bool = False

    @property
    def call(self) -> str:
        return f'{self.operation}({self.argument})'


def normalize(kind: ResultKind, value: Any) -> Any:
    """Widen native-width integers to their canonical 64-bit types.

    Fixed-width kinds keep their declared type; sequences become plain lists.
    """
    if kind is ResultKind.INT:
        return np.int64(value)
    if kind is ResultKind.UINT:
        return np.uint64(value)
    if kind is ResultKind.INT_SEQUENCE:
        return [int(x) for x in value]
    return value


def check_result_type(op: Operation, value: Any) -> None:
    """Raise EnumerationError unless `value` has a type `op.result` allows."""
    if type(value) not in RESULT_TYPES[op.result]:
        raise EnumerationError(f'r.{op.name} returned {type(value).__name__}, registered as {op.result.value}')


class Invoker:
    """Drives a generator through every operation, `repeats` times each.

    Arguments:
        factory: Builds a freshly seeded generator.
        operations: Enumerated operations, in golden order.
        bits: Native word size the generator runs with.
        repeats: Invocations per operation.
        reseed_per_operation: Build a fresh generator before each operation
            instead of sharing one across the whole pass.
    """

    def __init__(
        self,
        factory: Callable[[], Any],
        operations: Sequence[Operation],
        *,
        bits: int,
        repeats: int = REPEATS,
        reseed_per_operation: bool = False,
    ) -> None:
        self._factory = factory
        self._operations = list(operations)
        self._feeder = ArgumentFeeder(check_bits(bits))
        self._repeats = repeats
        self._reseed = reseed_per_operation

    @property
    def expected_length(self) -> int:
        return len(self._operations) * self._repeats

    def run(self, *, update: bool = False) -> list[Invocation]:
        """Run one full pass and return the ordered output log.

        Raises:
            ArchitectureError: If `update` is set on a narrow word size.
            EnumerationError: If an operation's first result does not have the
                type its registered result kind calls for.
        """
        if update and self._feeder.bits < 64:
            raise ArchitectureError(f'must record golden data on a 64-bit host, not {self._feeder.bits}-bit')

        log: list[Invocation] = []
        generator = self._factory()
        for op in self._operations:
            if self._reseed:
                generator = self._factory()
            method = op.bind(generator)
            verified = False
            for repeat in range(self._repeats):
                arg = self._feeder.argument(op, repeat)
                literal = arg.literal if arg is not None else ''
                if arg is None:
                    value = method()
                elif arg.substitute is not None:
                    # what a 64-bit host would consume, to keep the stream in sync
                    getattr(generator, arg.substitute)(arg.value)
                    log.append(Invocation(op.name, repeat, literal, op.result, skipped=True))
                    continue
                else:
                    value = method(arg.value)
                if not verified:
                    check_result_type(op, value)
                    verified = True
                log.append(Invocation(op.name, repeat, literal, op.result, normalize(op.result, value)))
        return log
