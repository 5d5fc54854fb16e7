"""Golden regression harness for a seeded pseudo-random generator."""

from .errors import (
    AnchorNotFoundError,
    ArchitectureError,
    CursorError,
    EnumerationError,
    GoldenIOError,
    HarnessError,
)
from .generator import Rand
from .golden import GoldenEntry, GoldenTable
from .invoker import REPEATS, Invocation, Invoker
from .kinds import NATIVE_BITS, ParamKind, ResultKind
from .operations import REGISTRY, Operation, enumerate_operations
from .oracle import CheckReport, Failure, check

__all__ = [
    'NATIVE_BITS',
    'REGISTRY',
    'REPEATS',
    'AnchorNotFoundError',
    'ArchitectureError',
    'CheckReport',
    'CursorError',
    'EnumerationError',
    'Failure',
    'GoldenEntry',
    'GoldenIOError',
    'GoldenTable',
    'HarnessError',
    'Invocation',
    'Invoker',
    'Operation',
    'ParamKind',
    'Rand',
    'ResultKind',
    'check',
    'enumerate_operations',
]
