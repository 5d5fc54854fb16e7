"""Progress logging and result reporting for the harness."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

from .config import HarnessConfig
from .oracle import CheckReport, Failure

# ANSI color codes
_COLORS = {
    'green': '\033[32m',
    'red': '\033[31m',
    'yellow': '\033[33m',
    'dim': '\033[2m',
    'bold': '\033[1m',
    'reset': '\033[0m',
}


def log(message: str, *, verbose: bool, force: bool = False) -> None:
    """Write a progress message to stderr."""
    if force or verbose:
        print(f'[rand-regress] {message}', file=sys.stderr)


def _color(text: str, color: str) -> str:
    """Wrap text in ANSI color codes if stdout is a TTY."""
    if not sys.stdout.isatty():
        return text
    return f'{_COLORS.get(color, "")}{text}{_COLORS["reset"]}'


def _value_json(value: Any) -> Any:
    if isinstance(value, list):
        return value
    return {'type': type(value).__name__, 'value': str(value)}


def failure_json(failure: Failure) -> dict[str, Any]:
    return {
        'position': failure.position,
        'call': failure.call,
        'got': _value_json(failure.got),
        'want': None if failure.missing else _value_json(failure.want),
        'message': str(failure),
    }


def build_json_report(report: CheckReport, config: HarnessConfig) -> dict[str, Any]:
    """Build a JSON-serializable report from a checking pass."""
    return {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'seed': config.seed,
        'repeats': config.repeats,
        'bits': config.bits,
        'golden': str(config.golden_path),
        'checked': report.checked,
        'skipped': report.skipped,
        'cursor': report.cursor,
        'passed': report.passed,
        'failed': len(report.failures),
        'ok': report.ok,
        'failures': [failure_json(f) for f in report.failures],
    }


def print_terminal_summary(report: CheckReport, config: HarnessConfig) -> None:
    """Print a human-readable summary of a checking pass."""
    width = 60
    print()
    print('=' * width)
    print(_color(' GOLDEN REGRESSION RESULTS', 'bold'))
    print('=' * width)
    print()

    for failure in report.failures:
        print(f'  {_color(f"{failure.position:>5}", "dim")}  {_color("FAIL", "red")}  {failure}')
    if report.failures:
        print()

    print('-' * width)
    parts = [
        f' {_color("PASS:", "green")} {report.passed}',
        f' {_color("FAIL:", "red")} {len(report.failures)}',
    ]
    if report.skipped:
        parts.append(f' {_color("SKIP:", "yellow")} {report.skipped}')
    parts.append(f' Positions: {report.cursor}')
    print(' '.join(parts))
    print(f' seed={config.seed} repeats={config.repeats} bits={config.bits}')
    print('-' * width)
    print()
