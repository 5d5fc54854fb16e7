"""Golden regression harness for the seeded generator.

Drives every generator operation through a fixed sequence of boundary-value
arguments and compares each output, position by position, with the recorded
golden table. A fixed seed must keep producing the same values across code
changes; the golden table is never edited by hand, only regenerated.

Usage:
    rand-regress [--golden PATH] [--json] [--verbose]
    rand-regress --update
    rand-regress --update-example

See --help for all options.
"""

from __future__ import annotations

import argparse
import json
import sys
import textwrap
from collections.abc import Iterable

from .capture import update_example
from .config import DEFAULT_EXAMPLE_PATH, DEFAULT_GOLDEN_PATH, DEFAULT_SEED, HarnessConfig
from .errors import GoldenIOError, HarnessError
from .example import example_rand
from .generator import Rand
from .golden import GoldenTable, render_table, write_table
from .invoker import REPEATS, Invocation, Invoker
from .kinds import NATIVE_BITS
from .operations import REGISTRY, Operation, enumerate_operations
from .oracle import CheckReport, check
from .report import build_json_report, log, print_terminal_summary

UPDATED_MESSAGE = 'UPDATED; ignore non-zero exit status'

# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def build_invoker(
    config: HarnessConfig,
    generator_type: type = Rand,
    registry: Iterable[Operation] = REGISTRY,
) -> Invoker:
    """Enumerate the generator's operations and wire up an invoker for `config`."""
    operations = enumerate_operations(generator_type, registry)
    return Invoker(
        lambda: generator_type(config.seed, bits=config.bits),
        operations,
        bits=config.bits,
        repeats=config.repeats,
        reseed_per_operation=config.reseed_per_operation,
    )


def run_pass(config: HarnessConfig, *, update: bool = False) -> list[Invocation]:
    """Run one full invocation pass and return its output log."""
    invoker = build_invoker(config)
    log(f'running {invoker.expected_length} invocations (seed={config.seed}, bits={config.bits})', verbose=config.verbose)
    return invoker.run(update=update)


def check_golden(config: HarnessConfig) -> CheckReport:
    """Check a fresh pass against the golden table at `config.golden_path`.

    Raises:
        GoldenIOError: If the table cannot be loaded or was recorded with a
            different seed or repeat count.
        CursorError: If the pass leaves golden entries unconsumed.
    """
    table = GoldenTable.load(config.golden_path)
    if (table.seed, table.repeats) != (config.seed, config.repeats):
        raise GoldenIOError(
            f'{config.golden_path} was recorded with seed={table.seed} repeats={table.repeats}, '
            f'not seed={config.seed} repeats={config.repeats}'
        )
    log(f'loaded {len(table)} golden entries from {config.golden_path}', verbose=config.verbose)
    return check(run_pass(config), table.entries, bits=config.bits)


def regenerate_golden(config: HarnessConfig) -> int:
    """Recompute the golden table and rewrite it wholesale. Returns the entry count.

    Raises:
        ArchitectureError: If `config.bits` is narrower than 64.
    """
    entries = run_pass(config, update=True)
    write_table(config.golden_path, render_table(entries, seed=config.seed, repeats=config.repeats))
    log(f'wrote {len(entries)} golden entries to {config.golden_path}', verbose=config.verbose, force=True)
    return len(entries)


def regenerate_example(config: HarnessConfig) -> str:
    """Re-record the expected output block of the example module."""
    output = update_example(config.example_path, example_rand)
    log(f'rewrote example output in {config.example_path}', verbose=config.verbose, force=True)
    return output


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='rand-regress',
        description='Golden regression harness for the seeded generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              rand-regress
              rand-regress --verbose --json > results.json
              rand-regress --update
              rand-regress --update-example
        """),
    )
    parser.add_argument(
        '--golden',
        default=str(DEFAULT_GOLDEN_PATH),
        help=f'Golden table to check or rewrite (default: {DEFAULT_GOLDEN_PATH})',
    )
    parser.add_argument(
        '--example',
        default=str(DEFAULT_EXAMPLE_PATH),
        help='Example module whose output block --update-example rewrites',
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=DEFAULT_SEED,
        help=f'Generator seed (default: {DEFAULT_SEED})',
    )
    parser.add_argument(
        '--repeats',
        type=int,
        default=REPEATS,
        help=f'Invocations per operation (default: {REPEATS})',
    )
    parser.add_argument(
        '--bits',
        type=int,
        choices=(32, 64),
        default=NATIVE_BITS,
        help=f'Native word size to emulate (default: {NATIVE_BITS})',
    )
    parser.add_argument(
        '--reseed-per-operation',
        action='store_true',
        help='Seed a fresh generator before each operation instead of sharing one',
    )
    parser.add_argument(
        '--update',
        action='store_true',
        help='Regenerate the golden table instead of checking it',
    )
    parser.add_argument(
        '--update-example',
        action='store_true',
        help='Rewrite the example output block, then exit non-zero',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print JSON results to stdout',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Log progress to stderr',
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the harness.

    Returns:
        Exit code: 0 if every golden entry matched (or the table was
        regenerated), 1 on reported failures or after rewriting the example,
        2 on a fatal harness error.
    """
    args = parse_args(argv)
    try:
        config = HarnessConfig.from_args(args)
    except ValueError as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 2

    try:
        if args.update or args.update_example:
            if args.update:
                regenerate_golden(config)
            if args.update_example:
                regenerate_example(config)
                print(UPDATED_MESSAGE)
                return 1
            return 0

        report = check_golden(config)
    except HarnessError as exc:
        print(f'error: {type(exc).__name__}: {exc}', file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(build_json_report(report, config), indent=2))
    else:
        print_terminal_summary(report, config)
    return 0 if report.ok else 1

