"""Cat trees: named enumerations of cat fruits"""

__all__ = ["CatTree", "CatFruit"]

import mewlix


class CatFruit(mewlix.Box):
    """One member of a cat tree.

    A fruit is a box with the fields `key`, `value` (its position in the
    tree, counting from 0) and `parent` (the name of the tree).
    """
    __slots__ = ()

    def __init__(self, key, value, parent):
        super().__init__([("key", key), ("value", value), ("parent", parent)])

    @property
    def key(self):
        return self.bindings["key"]

    @property
    def value(self):
        return self.bindings["value"]

    def __repr__(self):
        return f"CatFruit<{self.bindings['parent']}.{self.key}>"


class CatTree:
    """A named enumeration.

    Args:
        name: (str) Tree name
        keys: (Iterable[str]) Fruit names, in order

    Attributes:
        name: (str) Tree name
        fruits: (dict[str, CatFruit]) Fruits by key
    """
    __slots__ = ("name", "fruits")

    def __init__(self, name, keys=()):
        mewlix.ensure.string("cat tree", name)
        self.name = name
        self.fruits = {}
        for index, key in enumerate(keys):
            mewlix.ensure.string(f"cat tree {name}", key)
            if key in self.fruits:
                raise mewlix.MewlixError(
                    mewlix.ErrorCode.InvalidOp,
                    f"cat tree {name}: Duplicate fruit '{key}'!",
                )
            self.fruits[key] = CatFruit(key, index, name)

    def get(self, key):
        return self.fruits.get(key)

    def contains(self, key):
        return key in self.fruits

    def __iter__(self):
        return iter(self.fruits.values())

    def __repr__(self):
        return f"CatTree<{self.name}>"

    def __str__(self):
        return mewlix.purrify(self)
