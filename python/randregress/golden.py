"""Golden table artifact: loading, canonical rendering and rewriting.

The golden table is a JSON document with a fixed header and one entry per
line, grouped by operation::

    {
      "seed": 1,
      "repeats": 20,
      "entries": [
        {"type": "float64", "value": 0.5, "op": "exp_float64", "arg": "", "repeat": 0},
        ...
      ]
    }

Do NOT edit entries by hand. If the generator has to change, find a way that
keeps the recorded outputs, or regenerate the whole table with ``--update``.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
from typing_extensions import Self

from .errors import GoldenIOError
from .invoker import Invocation

SCALAR_TYPES: dict[str, type[np.generic]] = {
    'float64': np.float64,
    'float32': np.float32,
    'int64': np.int64,
    'uint64': np.uint64,
    'int32': np.int32,
    'uint32': np.uint32,
}
SEQUENCE_TYPE = 'ints'


@dataclass(frozen=True)
class GoldenEntry:
    """One recorded output. `operation` and `argument` are informational only."""

    value: Any
    operation: str = ''
    argument: str = ''

    @property
    def type_name(self) -> str:
        return type_name(self.value)


@dataclass(frozen=True)
class GoldenTable:
    """A loaded golden artifact."""

    seed: int
    repeats: int
    entries: tuple[GoldenEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def load(cls, path: Path) -> Self:
        return cls(**load_table(path))


def type_name(value: Any) -> str:
    """Return the persisted type tag for an output value."""
    if isinstance(value, list):
        return SEQUENCE_TYPE
    for name, scalar_type in SCALAR_TYPES.items():
        if type(value) is scalar_type:
            return name
    raise TypeError(f'cannot record value of type {type(value).__name__}')


def encode_value(value: Any) -> tuple[str, Any]:
    """Return `(type tag, JSON value)` for an output value.

    Floats keep the shortest repr that round-trips; float32 values are stored
    as their exact float64 widening.
    """
    name = type_name(value)
    if name == SEQUENCE_TYPE:
        return name, [int(x) for x in value]
    if name in ('float64', 'float32'):
        return name, float(value)
    return name, int(value)


def decode_value(name: str, raw: Any) -> Any:
    """Inverse of :func:`encode_value`. Raises ValueError for unknown tags or shapes."""
    if name == SEQUENCE_TYPE:
        if not isinstance(raw, list) or not all(isinstance(x, int) and not isinstance(x, bool) for x in raw):
            raise ValueError(f'expected a list of ints, got {raw!r}')
        return list(raw)
    scalar_type = SCALAR_TYPES.get(name)
    if scalar_type is None:
        raise ValueError(f'unknown golden value type {name!r}')
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise ValueError(f'expected a number for {name}, got {raw!r}')
    if name.startswith('float'):
        return scalar_type(float(raw))
    if not isinstance(raw, int):
        raise ValueError(f'expected an integer for {name}, got {raw!r}')
    return scalar_type(raw)


def load_table(path: Path) -> dict[str, Any]:
    """Read a golden artifact into `seed`, `repeats` and `entries` fields.

    Raises:
        GoldenIOError: If the file cannot be read or is not a well-formed golden table.
    """
    try:
        document = json.loads(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise GoldenIOError(f'cannot read golden table {path}: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise GoldenIOError(f'cannot decode golden table {path}: {exc}') from exc

    try:
        entries = tuple(
            GoldenEntry(decode_value(record['type'], record['value']), record.get('op', ''), record.get('arg', ''))
            for record in document['entries']
        )
        return {'seed': int(document['seed']), 'repeats': int(document['repeats']), 'entries': entries}
    except (KeyError, TypeError, ValueError) as exc:
        raise GoldenIOError(f'malformed golden table {path}: {exc}') from exc


def render_entry(inv: Invocation) -> str:
    name, value = encode_value(inv.value)
    record = {'type': name, 'value': value, 'op': inv.operation, 'arg': inv.argument, 'repeat': inv.repeat}
    return json.dumps(record)


def render_table(log: Sequence[Invocation], *, seed: int, repeats: int) -> str:
    """Render a freshly captured log as a complete golden artifact.

    One entry per line, with a blank line between operations.

    Raises:
        ValueError: If the log contains skipped positions, which only narrow
            word sizes produce and which can never be recorded.
    """
    groups: list[list[str]] = []
    previous = None
    for inv in log:
        if inv.skipped:
            raise ValueError(f'cannot record skipped invocation r.{inv.call}')
        if inv.operation != previous:
            groups.append([])
            previous = inv.operation
        groups[-1].append(f'    {render_entry(inv)}')

    header = f'{{\n  "seed": {seed},\n  "repeats": {repeats},\n  "entries": ['
    if not groups:
        return header + ']\n}\n'
    body = ',\n\n'.join(',\n'.join(group) for group in groups)
    return f'{header}\n{body}\n  ]\n}}\n'


def write_table(path: Path, text: str) -> None:
    """Replace the golden artifact at `path` with `text`."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
    except OSError as exc:
        raise GoldenIOError(f'cannot write golden table {path}: {exc}') from exc
