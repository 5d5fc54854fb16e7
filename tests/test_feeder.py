import pytest

from randregress import EnumerationError
from randregress.feeder import Argument, ArgumentFeeder
from randregress.kinds import ParamKind, ResultKind
from randregress.operations import Operation
from randregress.scenarios import INT32S, PERM_SIZES, UINT64S

INTN = Operation('intn', ParamKind.INT, ResultKind.INT)
UINTN = Operation('uintn', ParamKind.UINT, ResultKind.UINT)
INT32N = Operation('int32n', ParamKind.INT32, ResultKind.INT32)
UINT64N = Operation('uint64n', ParamKind.UINT64, ResultKind.UINT64)
PERM = Operation('perm', ParamKind.INT, ResultKind.INT_SEQUENCE)
FLOAT64 = Operation('float64', ParamKind.NONE, ResultKind.FLOAT64)


def test_no_argument():
    assert ArgumentFeeder(64).argument(FLOAT64, 3) is None


def test_cycles_through_table():
    feeder = ArgumentFeeder(64)
    values = [feeder.argument(INT32N, i).value for i in range(11)]
    assert values == list(INT32S) + list(INT32S[:2])


def test_perm_uses_sizes():
    feeder = ArgumentFeeder(64)
    assert [feeder.argument(PERM, i).value for i in range(len(PERM_SIZES))] == list(PERM_SIZES)


def test_wide_host_never_substitutes():
    feeder = ArgumentFeeder(64)
    assert all(feeder.argument(INTN, i).substitute is None for i in range(20))
    assert all(feeder.argument(UINTN, i).substitute is None for i in range(20))
    assert feeder.argument(UINTN, 14) == Argument(UINT64S[14])


def test_narrow_host_substitutes_wide_values():
    feeder = ArgumentFeeder(32)
    assert feeder.argument(INTN, 8) == Argument(2**31 - 1)
    assert feeder.argument(INTN, 9) == Argument(10**18, substitute='int64n')
    assert feeder.argument(INTN, 12) == Argument(2**63 - 1, substitute='int64n')
    assert feeder.argument(INTN, 13) == Argument(1)
    assert feeder.argument(UINTN, 8) == Argument(2**31 - 1)
    assert feeder.argument(UINTN, 14) == Argument(2**64 - 1, substitute='uint64n')


def test_narrow_host_fixed_width_kinds_are_unchanged():
    feeder = ArgumentFeeder(32)
    assert feeder.argument(UINT64N, 14) == Argument(2**64 - 1)


def test_perm_is_never_substituted():
    feeder = ArgumentFeeder(32)
    assert all(feeder.argument(PERM, i).substitute is None for i in range(20))


def test_literal():
    assert Argument(2**64 - 1).literal == '18446744073709551615'


def test_kind_without_table():
    op = Operation('scale', ParamKind.FLOAT32, ResultKind.FLOAT32)
    with pytest.raises(EnumerationError, match=r'unexpected argument type float32 for r\.scale'):
        ArgumentFeeder(64).argument(op, 0)


def test_bad_word_size():
    with pytest.raises(ValueError, match='unsupported native word size: 8'):
        ArgumentFeeder(8)
