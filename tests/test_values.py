import pytest

from sorodecode.core.values import ScVals, i128_from_int, symbol_token, u128_from_int, val_type


def test_i128_halves_round_to_int() -> None:
    assert ScVals.I128(hi=0, lo=10000).value == 10000
    assert ScVals.I128(hi=-1, lo=(1 << 64) - 1).value == -1
    assert ScVals.U128(hi=1, lo=0).value == 1 << 64


def test_i128_from_int_negative() -> None:
    v = i128_from_int(-5)
    assert v.hi == -1
    assert v.lo == (1 << 64) - 5
    assert v.value == -5


def test_int128_out_of_range() -> None:
    with pytest.raises(ValueError):
        u128_from_int(-1)
    with pytest.raises(ValueError):
        i128_from_int(1 << 127)


def test_val_type_tags() -> None:
    assert val_type(ScVals.Void()) == "void"
    assert val_type(ScVals.Symbol("x")) == "symbol"
    assert val_type(ScVals.Vec()) == "vec"
    assert val_type(ScVals.Map()) == "map"
    assert val_type(ScVals.Timepoint(0)) == "timepoint"
    assert val_type(ScVals.Duration(0)) == "duration"
    assert val_type(ScVals.U256(1 << 200)) == "u256"
    assert val_type(ScVals.I256(-1)) == "i256"


def test_symbol_token_only_for_symbols() -> None:
    assert symbol_token(ScVals.Symbol("approve")) == "approve"
    assert symbol_token(ScVals.String("approve")) is None


def test_values_are_hashable_trees() -> None:
    a = ScVals.Vec((ScVals.U32(1), ScVals.Map(((ScVals.Symbol("k"), ScVals.Bool(True)),))))
    b = ScVals.Vec((ScVals.U32(1), ScVals.Map(((ScVals.Symbol("k"), ScVals.Bool(True)),))))
    assert a == b
    assert hash(a) == hash(b)
