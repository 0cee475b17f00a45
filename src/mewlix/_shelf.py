"""Shelf: the persistent stack used for every sequence in Mewlix"""

__all__ = ["Shelf", "ShelfNode", "ShelfBottom"]

import mewlix


class Shelf:
    """Immutable singly linked stack.

    A shelf is either a `ShelfBottom` (empty) or a `ShelfNode` holding a value
    on top of another shelf. Pushing creates a new node that shares the
    existing shelf as its tail, so shelves are never modified once built.

    The head of a shelf is the most recently pushed value. When converting
    from a Python list the last item becomes the head, and `to_array` gives
    the items back in their original order. Iterating a shelf walks from
    the head down to the bottom.
    """
    __slots__ = ()

    @property
    def is_empty(self):
        """(bool) Shelf is the bottom."""
        return isinstance(self, ShelfBottom)

    def push(self, value):
        """Put a value on top of this shelf.

        Returns:
            (ShelfNode) New shelf, this one is untouched
        """
        return ShelfNode(value, self)

    def peek(self):
        raise NotImplementedError

    def pop(self):
        raise NotImplementedError

    def __len__(self):
        raise NotImplementedError

    def __iter__(self):
        node = self
        while isinstance(node, ShelfNode):
            yield node.value
            node = node.tail

    def contains(self, value):
        """(bool) Any item is relation-equal to value."""
        return any(mewlix.equal(value, item) for item in self)

    def to_array(self):
        """Items in front-to-back order, the head last.

        Returns:
            (list) New list of the shelf items
        """
        output = list(self)
        output.reverse()
        return output

    @classmethod
    def from_array(cls, items):
        """Build a shelf whose head is the last item of the iterable."""
        shelf = ShelfBottom()
        for item in items:
            shelf = ShelfNode(item, shelf)
        return shelf

    @classmethod
    def create(cls, items=()):
        """Alias of `from_array` used by compiled code for shelf literals."""
        return cls.from_array(items)

    @staticmethod
    def concat(a, b):
        """Stack all items of shelf b on top of shelf a.

        The front-to-back sequence of the result is a's items then b's.
        """
        if b.is_empty:
            return a
        if a.is_empty:
            return b
        output = a
        for item in b.to_array():
            output = output.push(item)
        return output

    @staticmethod
    def reverse(shelf):
        output = ShelfBottom()
        for item in shelf:
            output = output.push(item)
        return output

    def __repr__(self):
        return f"Shelf({self.to_array()!r})"

    def __str__(self):
        return mewlix.purrify(self)


class ShelfNode(Shelf):
    """A value on top of another shelf.

    Args:
        value: Item on top
        tail: (Shelf) Shelf underneath, shared and never copied

    Attributes:
        value: Item on top
        tail: (Shelf) Shelf underneath
    """
    __slots__ = ("value", "tail", "_len")

    def __init__(self, value, tail):
        if not isinstance(tail, Shelf):
            raise mewlix.MewlixError(
                mewlix.ErrorCode.CriticalError,
                f"Shelf node tail must be a shelf, got {type(tail).__name__}",
            )
        self.value = value
        self.tail = tail
        self._len = len(tail) + 1

    def peek(self):
        return self.value

    def pop(self):
        return self.tail

    def __len__(self):
        return self._len


class ShelfBottom(Shelf):
    """The empty shelf.

    Peeking the bottom gives nothing and popping it gives the bottom back,
    so walking off the end of a shelf is never an error.
    """
    __slots__ = ()

    def peek(self):
        return None

    def pop(self):
        return self

    def __len__(self):
        return 0

    def contains(self, value):
        return False

    def to_array(self):
        return []
