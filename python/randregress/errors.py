"""Fatal harness errors.

Everything here stops a run immediately. Value mismatches are not exceptions;
they are collected as :class:`randregress.oracle.Failure` records instead.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base exception for all fatal harness errors.

    Catching `HarnessError` will catch enumeration, architecture, cursor,
    anchor and golden I/O errors.
    """


class EnumerationError(HarnessError):
    """Raised when the generator exposes an operation the harness cannot drive.

    Covers unregistered methods, stale registry entries, unsupported argument
    shapes and argument kinds that have no scenario table.
    """


class ArchitectureError(HarnessError):
    """Raised when golden data would be recorded on a narrow word size."""


class CursorError(HarnessError):
    """Raised when a checking pass ends before the golden table is exhausted."""


class AnchorNotFoundError(HarnessError):
    """Raised when an anchored replace cannot locate its span uniquely."""

    def __init__(self, anchor: str, path: str, reason: str = 'cannot find') -> None:
        self.anchor = anchor
        self.path = path
        super().__init__(f'{reason} {anchor!r} in {path}')


class GoldenIOError(HarnessError):
    """Raised when a golden artifact or source file cannot be read, decoded or written."""
