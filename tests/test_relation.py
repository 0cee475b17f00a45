"""Tests for relation equality and ordering."""

import math

import pytest

import mewlix
from mewlix import Ordering
from mewlixtest import shelf


@pytest.mark.parametrize("a,b,expected", [
    (314, "314", False),
    (314, 314, True),
    (314, 314.0, True),
    ("314", "314", True),
    (True, True, True),
    (True, 1, False),
    (1, True, False),
    (False, False, True),
    (False, None, False),
    (False, mewlix.undefined, False),
    (False, 0, False),
    (None, mewlix.undefined, True),
    (mewlix.undefined, None, True),
    ("", 0, False),
    ("", mewlix.undefined, False),
    (0, None, False),
    ("null", None, False),
])
def test_equal_primitives(a, b, expected):
    assert mewlix.equal(a, b) is expected
    assert mewlix.equal(b, a) is expected


@pytest.mark.parametrize("a,b,expected", [
    ([1, 2, 3], [1, 2, 3], True),
    ([1, 2, 3], [1, 2], False),
    ([1, 2], [1, 2, 3], False),
    ([1, 2, 3], [1, 3, 4], False),
    ([], [], True),
    ([1, 2, 3], [], False),
    ([], [1, 2, 3], False),
    ([None], [mewlix.undefined], True),
])
def test_equal_shelves(a, b, expected):
    assert mewlix.equal(shelf(a), shelf(b)) is expected


def test_equal_nested_shelves():
    a = shelf([shelf([1]), shelf([]), "x"])
    b = shelf([shelf([1]), shelf([]), "x"])
    assert mewlix.equal(a, b)


def test_equal_is_reflexive():
    box = mewlix.Box({"a": 1})
    for value in [1, "a", True, None, shelf([1, 2]), box, len]:
        assert mewlix.equal(value, value)


def test_boxes_compare_by_identity():
    a = mewlix.Box({"a": 1})
    b = mewlix.Box({"a": 1})
    assert mewlix.equal(a, a)
    assert not mewlix.equal(a, b)


@pytest.mark.parametrize("a,b,expected", [
    (413, 314, Ordering.Greater),
    (413, 413, Ordering.Equal),
    (314, 413, Ordering.Less),
    (1.5, 2, Ordering.Less),
    ("abc", "cde", Ordering.Less),
    ("abc", "abc", Ordering.Equal),
    ("cde", "abc", Ordering.Greater),
    ("Z", "a", Ordering.Less),
    (True, False, Ordering.Greater),
    (True, True, Ordering.Equal),
    (False, True, Ordering.Less),
])
def test_ordering_primitives(a, b, expected):
    assert mewlix.ordering(a, b) is expected


@pytest.mark.parametrize("a,b,expected", [
    ([1, 2], [1, 2, 3], Ordering.Less),
    ([1, 3, 4], [1, 2, 3], Ordering.Greater),
    ([1, 2, 3], [1, 2], Ordering.Greater),
    ([1, 2, 3], [1, 3, 4], Ordering.Less),
    ([1, 2, 3], [1, 2, 3], Ordering.Equal),
    ([], [], Ordering.Equal),
    ([], [1], Ordering.Less),
    (["b"], ["a", "z"], Ordering.Greater),
])
def test_ordering_shelves(a, b, expected):
    assert mewlix.ordering(shelf(a), shelf(b)) is expected


@pytest.mark.parametrize("predicate,a,b,expected", [
    ("greater", [1, 3, 4], [1, 2, 3], True),
    ("less", [1, 2, 3], [1, 2], False),
    ("less_or_equal", [1, 2, 3], [1, 2, 3], True),
    ("greater_or_equal", [1, 2, 3], [1, 3, 4], False),
    ("greater", [], [], False),
    ("less", [], [], False),
    ("not_equal", [1], [2], True),
])
def test_compare_predicates(predicate, a, b, expected):
    func = getattr(mewlix.compare, predicate)
    assert func(mewlix.ordering(shelf(a), shelf(b))) is expected


def test_ordering_total():
    values = [-1, 0, 2.5, 10]
    for a in values:
        for b in values:
            results = [mewlix.ordering(a, b) is o for o in Ordering]
            assert results.count(True) == 1


@pytest.mark.parametrize("a,b", [
    (1, "1"),
    (True, 1),
    (None, None),
    (shelf([1]), 1),
    (mewlix.Box(), mewlix.Box()),
    (shelf([1]), shelf(["a"])),
])
def test_ordering_type_mismatch(a, b):
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.ordering(a, b)
    assert info.value.code is mewlix.ErrorCode.TypeMismatch


@pytest.mark.parametrize("a,b,expected", [
    (math.nan, 1, Ordering.Greater),
    (1, math.nan, Ordering.Less),
    (math.inf, math.nan, Ordering.Less),
    (math.nan, math.nan, Ordering.Equal),
    (math.nan, -math.inf, Ordering.Greater),
])
def test_ordering_nan_sorts_last(a, b, expected):
    assert mewlix.ordering(a, b) is expected


def test_ordering_total_with_nan():
    values = [-math.inf, -1, 0, 2.5, math.inf, math.nan]
    for a in values:
        for b in values:
            results = [mewlix.ordering(a, b) is o for o in Ordering]
            assert results.count(True) == 1
            assert mewlix.ordering(a, b).value == -mewlix.ordering(b, a).value


def test_sort_with_nan():
    std = mewlix.Mewlix().std
    output = std.sort(shelf([math.nan, 3, -1])).to_array()
    assert output[:2] == [-1, 3]
    assert math.isnan(output[2])
