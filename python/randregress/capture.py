"""Capture a demonstration's output and keep its expected-output block current."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .replace import END_DELIMITER, replace_block

OUTPUT_ANCHOR = '# Output:'
LINE_PREFIX = '# '

Demo = Callable[[TextIO], None]


def normalize_output(text: str) -> str:
    """Normalize captured output for comparison and recording.

    - Normalize CRLF to LF
    - Strip trailing whitespace from each line
    - Strip trailing empty lines
    """
    lines = [line.rstrip() for line in text.replace('\r\n', '\n').split('\n')]
    while lines and not lines[-1]:
        lines.pop()
    return '\n'.join(lines)


def capture_output(demo: Demo) -> str:
    """Run `demo` once against an in-memory writer and return what it wrote."""
    buf = io.StringIO()
    demo(buf)
    return buf.getvalue()


def render_example_block(output: str) -> str:
    """Render captured output as an anchored comment block (without its delimiter).

    Blank lines inside the output become a bare `#` so the block stays contiguous.
    """
    lines = [OUTPUT_ANCHOR]
    normalized = normalize_output(output)
    if normalized:
        lines.extend(f'{LINE_PREFIX}{line}'.rstrip() for line in normalized.split('\n'))
    return '\n'.join(lines) + '\n'


def read_example_block(source: str) -> str:
    """Return the expected output recorded in `source`, or '' if none is recorded."""
    lines = source.split('\n')
    try:
        start = lines.index(OUTPUT_ANCHOR)
    except ValueError:
        return ''
    expected: list[str] = []
    for line in lines[start + 1 :]:
        if line == END_DELIMITER or not line.startswith(LINE_PREFIX.rstrip()):
            break
        expected.append(line[len(LINE_PREFIX) :])
    return normalize_output('\n'.join(expected))


def update_example(path: Path, demo: Demo) -> str:
    """Re-record the expected-output block of `path` from a fresh `demo` run.

    Returns the captured output.
    """
    output = capture_output(demo)
    replace_block(path, render_example_block(output), end=END_DELIMITER)
    return output
