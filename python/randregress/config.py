"""Harness configuration and defaults."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from typing_extensions import Self

from .invoker import REPEATS
from .kinds import NATIVE_BITS, check_bits

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_GOLDEN_PATH = PACKAGE_DIR / 'golden' / 'regress.json'
DEFAULT_EXAMPLE_PATH = PACKAGE_DIR / 'example.py'
DEFAULT_SEED = 1


@dataclass
class HarnessConfig:
    """Settings for one harness run.

    `bits` is the native word size the generator emulates; golden data may
    only be recorded at 64 bits.
    """

    seed: int = DEFAULT_SEED
    repeats: int = REPEATS
    bits: int = NATIVE_BITS
    golden_path: Path = DEFAULT_GOLDEN_PATH
    example_path: Path = DEFAULT_EXAMPLE_PATH
    reseed_per_operation: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        check_bits(self.bits)
        if self.repeats < 1:
            raise ValueError(f'repeats must be positive, got {self.repeats}')
        self.golden_path = Path(self.golden_path)
        self.example_path = Path(self.example_path)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> Self:
        return cls(
            seed=args.seed,
            repeats=args.repeats,
            bits=args.bits,
            golden_path=Path(args.golden),
            example_path=Path(args.example),
            reseed_per_operation=args.reseed_per_operation,
            verbose=args.verbose,
        )
