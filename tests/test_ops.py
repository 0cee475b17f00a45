"""Tests for primitive operations and error reporting."""

import math

import pytest

import mewlix
from mewlixtest import shelf


numbers = mewlix.numbers


def _code(func, *args):
    with pytest.raises(mewlix.MewlixError) as info:
        func(*args)
    return info.value.code


@pytest.mark.parametrize("func,a,b,expected", [
    (numbers.add, 1, 2, 3),
    (numbers.sub, 1, 2, -1),
    (numbers.mul, 3, 4, 12),
    (numbers.div, 7, 2, 3.5),
    (numbers.floordiv, 7, 2, 3),
    (numbers.floordiv, -7, 2, -4),
    (numbers.mod, -15, 4, 1),
    (numbers.mod, 15, -4, -1),
    (numbers.mod, 15, 4, 3),
    (numbers.pow, 2, 10, 1024),
])
def test_arithmetic(func, a, b, expected):
    assert func(a, b) == expected


def test_unary():
    assert numbers.minus(3) == -3
    assert numbers.plus(-3) == -3


@pytest.mark.parametrize("func", [numbers.div, numbers.floordiv, numbers.mod])
def test_divide_by_zero(func):
    assert _code(func, 1, 0) is mewlix.ErrorCode.DivideByZero
    assert _code(func, 1, 0.0) is mewlix.ErrorCode.DivideByZero


def test_zero_to_negative_power():
    assert _code(numbers.pow, 0, -1) is mewlix.ErrorCode.DivideByZero


@pytest.mark.parametrize("a,b", [
    (True, 1),
    ("1", 1),
    (1, None),
    (shelf([1]), 1),
])
def test_arithmetic_checks_types(a, b):
    assert _code(numbers.add, a, b) is mewlix.ErrorCode.TypeMismatch


@pytest.mark.parametrize("value,expected", [
    (None, False),
    (mewlix.undefined, False),
    (False, False),
    (True, True),
    (0, True),
    ("", True),
    (shelf([]), True),
    (mewlix.Box(), True),
])
def test_to_bool(value, expected):
    assert mewlix.conversion.to_bool(value) is expected


@pytest.mark.parametrize("value,expected", [
    (True, 1),
    (False, 0),
    (4, 4),
    (2.5, 2.5),
    ("12", 12),
    (" 3.5 ", 3.5),
    ("", 0),
    ("-7", -7),
    ("+3", 3),
    (".5", 0.5),
    ("5.", 5.0),
    ("1e3", 1000.0),
    ("0x1F", 31),
    ("0b101", 5),
    ("0o17", 15),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
])
def test_to_number(value, expected):
    assert mewlix.conversion.to_number(value) == expected


@pytest.mark.parametrize("value", [
    "cat", "nan", "inf", "1_000", "0b12", "-0x10", "1e", "..5", "Infinityx",
    None, shelf([]), mewlix.Box(),
])
def test_to_number_fails(value):
    assert _code(mewlix.conversion.to_number, value) is mewlix.ErrorCode.BadConversion


def test_boolean_short_circuit():
    def explode():
        raise AssertionError("evaluated")

    assert mewlix.boolean.or_(0, explode) == 0
    assert mewlix.boolean.and_(None, explode) is None
    assert mewlix.boolean.or_(False, lambda: "b") == "b"
    assert mewlix.boolean.and_(True, lambda: "b") == "b"
    assert mewlix.boolean.ternary(None, explode, lambda: "no") == "no"
    assert mewlix.boolean.not_(None) is True


def test_concat():
    assert mewlix.strings.concat("n: ", 1) == "n: 1"
    assert mewlix.strings.concat(shelf([1, "a"]), None) == '[1, "a"]nothing'


def test_length():
    assert mewlix.collections.length("cat") == 3
    assert mewlix.collections.length(shelf([1, 2])) == 2
    assert _code(mewlix.collections.length, mewlix.Box()) is mewlix.ErrorCode.TypeMismatch


def test_contains():
    contains = mewlix.collections.contains
    assert contains("at", "cat")
    assert contains(shelf([1]), shelf([shelf([1]), 2]))
    assert not contains(3, shelf([1, 2]))
    assert contains("a", mewlix.Box.create({"a": None}))
    assert contains("name", mewlix.library("lib", {"name": 1}))
    assert contains("Red", mewlix.CatTree("Color", ["Red"]))
    assert _code(contains, 1, mewlix.Box()) is mewlix.ErrorCode.TypeMismatch
    assert _code(contains, "a", 5) is mewlix.ErrorCode.TypeMismatch


def test_can_chase():
    assert mewlix.internal.can_chase("abc") == "abc"
    assert _code(mewlix.internal.can_chase, 5) is mewlix.ErrorCode.TypeMismatch


def test_pounce_error():
    box = mewlix.internal.pounce_error(mewlix.MewlixError(mewlix.ErrorCode.InvalidOp, "x"))
    assert box.get("name") == "InvalidOp"
    assert box.get("id") == 1
    assert box.get("message") == "x"

    box = mewlix.internal.pounce_error(ValueError("bad"))
    assert box.get("name") == "ExternalError"
    assert box.get("id") == 6
    assert box.get("message") == "bad"
    assert mewlix.internal.pounce_error(ValueError()).get("message") is None


def test_assert():
    assert mewlix.internal.assert_(0, "fine") is None
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.internal.assert_(None, "no cats")
    assert info.value.code is mewlix.ErrorCode.CatOnComputer
    assert info.value.message == "Assertion failed: no cats"


def test_error_codes():
    assert [code.id for code in mewlix.ErrorCode] == list(range(8))
    error = mewlix.MewlixError(mewlix.ErrorCode.InvalidOp, "x")
    assert str(error) == "[InvalidOp] x"
    assert error.message == "x"
    with pytest.raises(TypeError):
        mewlix.MewlixError("InvalidOp", "x")


def test_pow_edge_cases():
    assert math.isnan(numbers.pow(-8, 1 / 3))
    assert numbers.pow(10.0, 400) == math.inf
    assert numbers.pow(-10.0, 401) == -math.inf
    assert numbers.pow(-10.0, 400) == math.inf
    assert numbers.pow(4, 0.5) == 2
    assert mewlix.type_of(numbers.pow(-2, 0.5)) == "number"


def test_floordiv_non_finite():
    assert numbers.floordiv(math.inf, 1) == math.inf
    assert numbers.floordiv(-math.inf, 2) == -math.inf
    assert math.isnan(numbers.floordiv(math.nan, 1))
    assert numbers.floordiv(1, math.inf) == 0
