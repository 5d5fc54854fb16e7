import numpy as np
import pytest
from inline_snapshot import snapshot

from randregress import ArchitectureError, EnumerationError, Rand
from randregress.invoker import REPEATS, Invocation, Invoker, check_result_type, normalize
from randregress.kinds import ParamKind, ResultKind, signed_type
from randregress.operations import Operation, enumerate_operations


class Counter:
    """Stand-in generator: every call returns the next value of a counter."""

    def __init__(self, seed: int, *, bits: int = 64) -> None:
        self.n = seed
        self.bits = bits
        self.calls: list[tuple[str, int | None]] = []

    def _next(self, name: str, arg: int | None = None) -> int:
        self.calls.append((name, arg))
        self.n += 1
        return self.n

    def count(self):
        return np.uint32(self._next('count'))

    def below(self, n):
        return signed_type(self.bits)(self._next('below', n) % n)

    def int64n(self, n):
        return np.int64(self._next('int64n', n) % n)


COUNT = Operation('count', ParamKind.NONE, ResultKind.UINT32)
BELOW = Operation('below', ParamKind.INT, ResultKind.INT)


def make_invoker(bits: int = 64, repeats: int = 3, reseed: bool = False):
    made: list[Counter] = []

    def factory() -> Counter:
        made.append(Counter(0, bits=bits))
        return made[-1]

    invoker = Invoker(factory, [COUNT, BELOW], bits=bits, repeats=repeats, reseed_per_operation=reseed)
    return invoker, made


def test_log_order_and_length():
    invoker, _ = make_invoker()
    log = invoker.run()
    assert invoker.expected_length == 6
    assert [inv.call for inv in log] == snapshot(
        ['count()', 'count()', 'count()', 'below(1)', 'below(10)', 'below(32)']
    )
    assert [inv.repeat for inv in log] == [0, 1, 2, 0, 1, 2]


def test_one_generator_shared_by_default():
    invoker, made = make_invoker()
    log = invoker.run()
    assert len(made) == 1
    assert [int(inv.value) for inv in log[:3]] == [1, 2, 3]
    assert int(log[4].value) == 5 % 10


def test_reseed_per_operation():
    invoker, made = make_invoker(reseed=True)
    log = invoker.run()
    assert len(made) == 3
    assert [int(inv.value) for inv in log[:3]] == [1, 2, 3]
    assert int(log[5].value) == 3 % 32


def test_native_results_are_normalized():
    invoker, _ = make_invoker(bits=32)
    log = invoker.run()
    assert all(type(inv.value) is np.uint32 for inv in log[:3])
    assert all(type(inv.value) is np.int64 for inv in log[3:])


def test_narrow_host_skips_wide_arguments():
    invoker, made = make_invoker(bits=32, repeats=14)
    log = invoker.run()
    skipped = [inv for inv in log if inv.skipped]
    assert [inv.repeat for inv in skipped] == [9, 10, 11, 12]
    assert all(inv.value is None for inv in skipped)
    assert skipped[0].call == 'below(1000000000000000000)'
    # the wide counterpart still ran, so the stream advanced
    assert [c for c in made[0].calls if c[0] == 'int64n'] == [
        ('int64n', 10**18),
        ('int64n', 2**60),
        ('int64n', 2**63 - 2),
        ('int64n', 2**63 - 1),
    ]
    assert len(log) == invoker.expected_length


def test_update_on_narrow_host():
    invoker, made = make_invoker(bits=32)
    with pytest.raises(ArchitectureError, match='must record golden data on a 64-bit host'):
        invoker.run(update=True)
    assert made == []


def test_real_generator_pass_length():
    operations = enumerate_operations(Rand)
    invoker = Invoker(lambda: Rand(1, bits=64), operations, bits=64)
    log = invoker.run(update=True)
    assert len(log) == len(operations) * REPEATS == 320
    assert not any(inv.skipped for inv in log)


def test_normalize():
    assert type(normalize(ResultKind.INT, np.int32(5))) is np.int64
    assert type(normalize(ResultKind.UINT, np.uint32(5))) is np.uint64
    assert type(normalize(ResultKind.INT32, np.int32(5))) is np.int32
    assert normalize(ResultKind.INT_SEQUENCE, np.array([2, 0, 1])) == [2, 0, 1]


def test_invocation_call():
    inv = Invocation('perm', 0, '5', ResultKind.INT_SEQUENCE, [0])
    assert inv.call == 'perm(5)'
    assert Invocation('float64', 0, '', ResultKind.FLOAT64).call == 'float64()'


def test_result_kind_must_match_returned_type():
    op = Operation('uintn', ParamKind.UINT, ResultKind.INT)
    invoker = Invoker(lambda: Rand(1, bits=64), [op], bits=64, repeats=2)
    with pytest.raises(EnumerationError, match=r'r\.uintn returned uint64, registered as int'):
        invoker.run()


def test_check_result_type():
    check_result_type(COUNT, np.uint32(1))
    check_result_type(BELOW, np.int32(1))
    check_result_type(Operation('perm', ParamKind.INT, ResultKind.INT_SEQUENCE), [0])
    with pytest.raises(EnumerationError, match='r.count returned int64, registered as uint32'):
        check_result_type(COUNT, np.int64(1))
