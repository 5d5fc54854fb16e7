"""Demonstration of the generator, with its recorded output.

The block below `example_rand` is the expected output of one run. It is
checked by the test suite and rewritten by ``rand-regress --update-example``.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .generator import Rand

EXAMPLE_SEED = 99


def example_rand(out: TextIO | None = None) -> None:
    """Print a few values from each common operation of a seeded generator.

    Writes to `sys.stdout` as it is at call time unless `out` is given.
    """
    if out is None:
        out = sys.stdout
    r = Rand(EXAMPLE_SEED)

    def show(name: str, *values: Any) -> None:
        cells = [f'{name:<14}'] + [f'{_cell(v):<22}' for v in values]
        print(''.join(cells).rstrip(), file=out)

    show('float32', r.float32(), r.float32(), r.float32())
    show('float64', r.float64(), r.float64(), r.float64())
    show('exp_float64', r.exp_float64(), r.exp_float64(), r.exp_float64())
    show('norm_float64', r.norm_float64(), r.norm_float64(), r.norm_float64())
    show('int32', r.int32(), r.int32(), r.int32())
    show('int64', r.int64(), r.int64(), r.int64())
    show('uint32', r.uint32(), r.uint32(), r.uint32())
    show('intn(10)', r.intn(10), r.intn(10), r.intn(10))
    show('int32n(10)', r.int32n(10), r.int32n(10), r.int32n(10))
    show('int64n(10)', r.int64n(10), r.int64n(10), r.int64n(10))
    show('perm', r.perm(5), r.perm(5), r.perm(5))


def _cell(value: Any) -> str:
    if isinstance(value, list):
        return repr(value)
    return str(value)


# Output:
# float32       0.9581739             0.5060306             0.7576514
# float64       0.5119159596920518    0.972186372136213     0.6149031419691238
# exp_float64   1.1914007908644189    0.6815114049284186    0.40643619730646346
# norm_float64  -1.046967562282426    0.9317920227947954    0.6749804835796053
# int32         1213525038            644403501             528034840
# int64         2854064919775487319   3607073117575088225   2492816738964092256
# uint32        3895495242            1503302760            3325949860
# intn(10)      9                     6                     3
# int32n(10)    6                     7                     7
# int64n(10)    0                     0                     2
# perm          [3, 2, 0, 1, 4]       [4, 0, 2, 3, 1]       [0, 2, 4, 3, 1]
# ---
