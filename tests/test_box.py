"""Tests for boxes and cat trees."""

import pytest

import mewlix


@pytest.mark.parametrize("mapping,checks", [
    ({"a": 1, "b": 2}, [("a", 1, True), ("b", 2, True), ("c", 3, False)]),
    ({"c": 3}, [("a", 1, False), ("c", 3, True), ("z", 9, False)]),
    ({}, []),
])
def test_create(mapping, checks):
    box = mewlix.Box.create(mapping)
    for key, value, included in checks:
        assert (key in box.bindings) is included
        if included:
            assert box.get(key) == value


def test_get_missing_is_nothing():
    assert mewlix.is_nothing(mewlix.Box().get("missing"))


def test_set_mutates_in_place():
    box = mewlix.Box()
    assert box.set("name", "jake") == "jake"
    box.set("name", "princess")
    assert box.get("name") == "princess"
    assert box.keys() == ["name"]


def test_set_requires_string_key():
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.Box().set(1, "x")
    assert info.value.code is mewlix.ErrorCode.TypeMismatch


@pytest.mark.parametrize("mapping", [{"a": 1, "b": 2}, {"c": 3}, {".": 6}, {}])
def test_pairs(mapping):
    pairs = mewlix.Box.create(mapping).pairs()
    assert len(pairs) == len(mapping)
    found = {pair.get("key"): pair.get("value") for pair in pairs}
    assert found == mapping


def test_pairs_keep_insertion_order():
    box = mewlix.Box([("z", 1), ("a", 2)])
    assert [pair.get("key") for pair in box.pairs().to_array()] == ["z", "a"]


def test_cat_tree():
    tree = mewlix.CatTree("Color", ["Red", "Green"])
    red = tree.get("Red")
    assert red.get("value") == 0
    assert tree.get("Green").get("value") == 1
    assert red.get("parent") == "Color"
    assert mewlix.purrify(red) == "Color.Red"
    assert mewlix.purrify(tree) == "cat tree Color; Red; Green; ~meow"
    assert tree.contains("Green")
    assert not tree.contains("Blue")


def test_cat_tree_duplicate_fruit():
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.CatTree("Color", ["Red", "Red"])
    assert info.value.code is mewlix.ErrorCode.InvalidOp
