"""Operation registry and enumeration.

Every public method of the generator must appear in :data:`REGISTRY`. The
registry fixes each operation's parameter and result kind; discovery through
`inspect` only checks that nothing was added, removed or reshaped without a
matching registry change, because any silent skip would shift the golden
cursor of every later operation.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .errors import EnumerationError
from .kinds import ParamKind, ResultKind
from .scenarios import has_table


@dataclass(frozen=True)
class Operation:
    """One registered generator operation.

    `result` is None for operations that produce nothing (they are never
    invoked by the harness).
    """

    name: str
    param: ParamKind
    result: ResultKind | None

    @property
    def takes_argument(self) -> bool:
        return self.param is not ParamKind.NONE

    def bind(self, instance: Any) -> Callable[..., Any]:
        """Return the invocation closure for this operation on `instance`."""
        return getattr(instance, self.name)


REGISTRY: tuple[Operation, ...] = (
    Operation('exp_float64', ParamKind.NONE, ResultKind.FLOAT64),
    Operation('float32', ParamKind.NONE, ResultKind.FLOAT32),
    Operation('float64', ParamKind.NONE, ResultKind.FLOAT64),
    Operation('int', ParamKind.NONE, ResultKind.INT),
    Operation('int32', ParamKind.NONE, ResultKind.INT32),
    Operation('int32n', ParamKind.INT32, ResultKind.INT32),
    Operation('int64', ParamKind.NONE, ResultKind.INT64),
    Operation('int64n', ParamKind.INT64, ResultKind.INT64),
    Operation('intn', ParamKind.INT, ResultKind.INT),
    Operation('norm_float64', ParamKind.NONE, ResultKind.FLOAT64),
    Operation('perm', ParamKind.INT, ResultKind.INT_SEQUENCE),
    Operation('shuffle', ParamKind.NONE, None),
    Operation('uint32', ParamKind.NONE, ResultKind.UINT32),
    Operation('uint32n', ParamKind.UINT32, ResultKind.UINT32),
    Operation('uint64', ParamKind.NONE, ResultKind.UINT64),
    Operation('uint64n', ParamKind.UINT64, ResultKind.UINT64),
    Operation('uintn', ParamKind.UINT, ResultKind.UINT),
)


def public_methods(generator_type: type) -> list[str]:
    """Return the sorted names of public methods defined on `generator_type`.

    Properties and other non-function attributes are not operations.
    """
    return [name for name, _ in inspect.getmembers(generator_type, inspect.isfunction) if not name.startswith('_')]


def _arity(generator_type: type, name: str) -> int:
    signature = inspect.signature(getattr(generator_type, name))
    params = [p for p in signature.parameters.values() if p.name != 'self']
    if any(p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params):
        raise EnumerationError(f'unexpected variadic signature for r.{name}{signature}')
    return len(params)


def enumerate_operations(generator_type: type, registry: Iterable[Operation] = REGISTRY) -> list[Operation]:
    """Return the operations the harness drives on `generator_type`, in lexical order.

    Args:
        generator_type: The generator class to inspect.
        registry: Declared operations; defaults to :data:`REGISTRY`.

    Returns:
        Operations that produce a result and take zero or one scenario-backed argument.

    Raises:
        EnumerationError: If the method surface and the registry disagree, or an
            operation's argument shape cannot be fed from the scenario tables.
    """
    declared = {op.name: op for op in registry}
    discovered = public_methods(generator_type)

    stale = sorted(set(declared) - set(discovered))
    if stale:
        raise EnumerationError(f'registered operations missing from {generator_type.__name__}: {", ".join(stale)}')

    operations: list[Operation] = []
    for name in discovered:
        op = declared.get(name)
        if op is None:
            raise EnumerationError(
                f'{generator_type.__name__}.{name} is not registered; '
                'add it to the operation registry and regenerate the golden table'
            )
        if op.result is None:
            continue

        arity = _arity(generator_type, name)
        if arity > 1:
            raise EnumerationError(f'unexpected argument count {arity} for r.{name}')
        if arity != int(op.takes_argument):
            raise EnumerationError(f'r.{name} takes {arity} argument(s) but is registered with {op.param.value}')
        if op.takes_argument and not has_table(op.param):
            raise EnumerationError(f'unexpected argument type {op.param.value} for r.{name}')
        operations.append(op)
    return operations
