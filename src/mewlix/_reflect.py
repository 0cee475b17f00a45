"""Nothing values, runtime type names and type guards"""

__all__ = ["undefined", "is_nothing", "is_number", "type_of", "instance_of", "ensure"]

import types

import mewlix


class _Undefined:
    """Marker for a value that was never given, like an omitted argument.

    There is only one instance, `undefined`. It behaves like `None` for every
    relation and conversion in the runtime.
    """
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "undefined"

    def __bool__(self):
        return False


undefined = _Undefined()


def is_nothing(value):
    """(bool) Value is one of the two nothing sentinels."""
    return value is None or value is undefined


def is_number(value):
    """(bool) Value is a runtime number (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_of(value):
    """Name of the runtime type of a value, as seen by Mewlix programs.

    Returns:
        (str) One of "nothing", "boolean", "number", "string", "shelf",
        "clowder instance", "cat fruit", "box", "clowder", "cat tree",
        "yarn ball", "function" or "unrecognized"
    """
    if is_nothing(value):
        return "nothing"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, mewlix.Shelf):
        return "shelf"
    if isinstance(value, mewlix.ClowderInstance):
        return "clowder instance"
    if isinstance(value, mewlix.CatFruit):
        return "cat fruit"
    if isinstance(value, mewlix.Box):
        return "box"
    if isinstance(value, mewlix.Clowder):
        return "clowder"
    if isinstance(value, mewlix.CatTree):
        return "cat tree"
    if isinstance(value, mewlix.YarnBall):
        return "yarn ball"
    if callable(value):
        return "function"
    return "unrecognized"


def instance_of(instance, template):
    """Check whether a clowder instance comes from a template or its children.

    Raises:
        MewlixError: TypeMismatch when the arguments are not an instance and
            a clowder
    """
    ensure.box("is", instance)
    ensure.clowder("is", template)
    if not isinstance(instance, mewlix.ClowderInstance):
        return False
    return instance.template.inherits(template)


def _typecheck(predicate, expected):
    def check(source, value):
        if predicate(value):
            return
        raise mewlix.MewlixError(
            mewlix.ErrorCode.TypeMismatch,
            f"{source}: Expected {expected}, got {type_of(value)}: {mewlix.purrify(value)}!",
        )
    check.__name__ = f"ensure_{expected}"
    return check


ensure = types.SimpleNamespace(
    number=_typecheck(is_number, "number"),
    string=_typecheck(lambda x: isinstance(x, str), "string"),
    boolean=_typecheck(lambda x: isinstance(x, bool), "boolean"),
    shelf=_typecheck(lambda x: isinstance(x, mewlix.Shelf), "shelf"),
    box=_typecheck(lambda x: isinstance(x, mewlix.Box), "box"),
    clowder=_typecheck(lambda x: isinstance(x, mewlix.Clowder), "clowder"),
    func=_typecheck(lambda x: type_of(x) == "function", "function"),
)
