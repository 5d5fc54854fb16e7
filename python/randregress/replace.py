"""Anchored replacement of a block inside a Python source file."""

from __future__ import annotations

import ast
from pathlib import Path

from .errors import AnchorNotFoundError, GoldenIOError, HarnessError

END_DELIMITER = '# ---'


def splice_block(source: str, block: str, *, end: str = END_DELIMITER, filename: str = '<source>') -> str:
    """Substitute `block` for the span it replaces inside `source`.

    The first line of `block` is the anchor: it must match exactly one whole
    line of `source`. The span runs from that line up to, but not including,
    the first following line equal to `end`. Text outside the span is kept
    byte for byte.

    Raises:
        AnchorNotFoundError: If the anchor is missing or ambiguous, or no
            closing delimiter follows it.
    """
    anchor = block.split('\n', 1)[0]
    if not block.endswith('\n'):
        block += '\n'

    # Pad so anchors on the first line and delimiters on an unterminated last
    # line are still whole-line matches.
    trailing = '' if source.endswith('\n') else '\n'
    padded = '\n' + source + trailing

    marker = f'\n{anchor}\n'
    count = padded.count(marker)
    if count == 0:
        raise AnchorNotFoundError(anchor, filename)
    if count > 1:
        raise AnchorNotFoundError(anchor, filename, reason=f'found {count} copies of')

    i = padded.index(marker)
    j = padded.find(f'\n{end}\n', i + len(anchor) + 1)
    if j < 0:
        raise AnchorNotFoundError(end, filename, reason='cannot find closing delimiter')

    spliced = padded[: i + 1] + block + padded[j + 1 :]
    spliced = spliced[1:]
    if trailing:
        spliced = spliced[: -len(trailing)]
    return spliced


def format_source(source: str, *, filename: str = '<source>') -> str:
    """Canonicalize rewritten Python source.

    The result must still parse; trailing whitespace is dropped from every line
    and the file ends with exactly one newline.
    """
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as exc:
        raise HarnessError(f'rewritten {filename} does not parse: {exc}') from exc
    lines = [line.rstrip() for line in source.split('\n')]
    while lines and not lines[-1]:
        lines.pop()
    return '\n'.join(lines) + '\n'


def replace_block(path: Path, block: str, *, end: str = END_DELIMITER) -> None:
    """Rewrite `path` with `block` spliced in place of its anchored span.

    This lets the harness refresh an expected-output block without touching
    any other part of the file.
    """
    try:
        source = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise GoldenIOError(f'cannot read {path}: {exc}') from exc

    updated = format_source(splice_block(source, block, end=end, filename=str(path)), filename=str(path))

    try:
        path.write_text(updated, encoding='utf-8')
    except OSError as exc:
        raise GoldenIOError(f'cannot write {path}: {exc}') from exc
