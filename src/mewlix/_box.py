"""Box: the mutable string-keyed record of Mewlix"""

__all__ = ["Box"]

import mewlix


class Box:
    """Record mapping unique string keys to runtime values.

    Boxes are mutable through `set`, there is no way to delete a key. The
    insertion order of keys is kept for iteration and `pairs`, but plays no
    part in equality, which is by identity.

    Args:
        entries: (Mapping | Iterable[tuple[str, object]] | None) Initial fields

    Attributes:
        bindings: (dict) The fields, shared with views of clowder instances
    """
    __slots__ = ("bindings", "__weakref__")

    def __init__(self, entries=None):
        self.bindings = {}
        if entries is None:
            return
        if hasattr(entries, "items"):
            entries = entries.items()
        for key, value in entries:
            self.set(key, value)

    @classmethod
    def create(cls, mapping=None):
        """Build a box from a Python mapping, used by compiled box literals."""
        return cls(mapping or {})

    def get(self, key):
        """Field value, or nothing when the key is unknown."""
        return self.bindings.get(key)

    def set(self, key, value):
        """Assign a field in place.

        Returns:
            The assigned value
        """
        mewlix.ensure.string("box", key)
        self.bindings[key] = value
        return value

    def contains(self, key):
        return key in self.bindings

    def keys(self):
        return list(self.bindings)

    def pairs(self):
        """Fields as a shelf of `{key, value}` boxes in insertion order."""
        return mewlix.Shelf.from_array(
            Box([("key", key), ("value", value)]) for key, value in self.bindings.items()
        )

    def __iter__(self):
        return iter(self.bindings)

    def __repr__(self):
        return f"{type(self).__name__}({self.bindings!r})"

    def __str__(self):
        return mewlix.purrify(self)
