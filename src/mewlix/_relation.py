"""Equality and total ordering over runtime values"""

__all__ = ["Ordering", "equal", "ordering", "compare"]

import enum
import math
import types

import mewlix


class Ordering(enum.Enum):
    """Result of comparing two ordered values."""

    Less = -1
    Equal = 0
    Greater = 1

    @property
    def operator(self):
        return {-1: "<", 0: "==", 1: ">"}[self.value]

    def is_one_of(self, *orderings):
        return self in orderings


def equal(a, b):
    """Relation equality between two runtime values.

    Both nothing sentinels equal each other and nothing else. Shelves are
    compared element by element; boxes, clowder instances, templates and
    functions compare by identity. Primitives compare by value without any
    coercion, so `True` never equals `1`.
    """
    if mewlix.is_nothing(a) or mewlix.is_nothing(b):
        return mewlix.is_nothing(a) and mewlix.is_nothing(b)

    if isinstance(a, mewlix.Shelf) and isinstance(b, mewlix.Shelf):
        return _shelf_equal(a, b)

    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    if mewlix.is_number(a) and mewlix.is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def _shelf_equal(a, b):
    # Iterative to avoid recursion limits on long shelves
    while True:
        if a.is_empty or b.is_empty:
            return a.is_empty and b.is_empty
        if a is b:
            return True
        if not equal(a.peek(), b.peek()):
            return False
        a, b = a.pop(), b.pop()


def _is_nan(value):
    return isinstance(value, float) and math.isnan(value)


def ordering(a, b):
    """Compare two values of the same orderable kind.

    Numbers compare numerically, strings by code point, booleans with
    `False < True`, and shelves lexicographically over their front-to-back
    sequence, where a shorter shelf with an equal prefix is less.
    NaN sorts after every other number and is equal to itself here, so
    the order stays total.

    Returns:
        (Ordering) Relation of a to b
    Raises:
        MewlixError: TypeMismatch for values of different or unordered kinds
    """
    kind_a = mewlix.type_of(a)
    kind_b = mewlix.type_of(b)
    if kind_a != kind_b:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.TypeMismatch,
            f'compare: Cannot compare values of different types: "{kind_a}" and "{kind_b}"!',
        )

    if kind_a == "number" and (_is_nan(a) or _is_nan(b)):
        if _is_nan(a) and _is_nan(b):
            return Ordering.Equal
        return Ordering.Greater if _is_nan(a) else Ordering.Less

    if kind_a in ("number", "string", "boolean"):
        if a == b:
            return Ordering.Equal
        return Ordering.Less if a < b else Ordering.Greater

    if kind_a == "shelf":
        for x, y in zip(a.to_array(), b.to_array()):
            result = ordering(x, y)
            if result is not Ordering.Equal:
                return result
        return ordering(len(a), len(b))

    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'compare: Cannot compare values of type "{kind_a}"!',
    )


compare = types.SimpleNamespace(
    less=lambda x: x is Ordering.Less,
    greater=lambda x: x is Ordering.Greater,
    equal=lambda x: x is Ordering.Equal,
    not_equal=lambda x: x is not Ordering.Equal,
    less_or_equal=lambda x: x is not Ordering.Greater,
    greater_or_equal=lambda x: x is not Ordering.Less,
)
