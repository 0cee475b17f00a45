"""Human readable rendering of runtime values"""

__all__ = ["purrify", "format_number", "CIRCULAR"]

import contextlib
import contextvars
import json
import math

import mewlix


# Rendered in place of a box that is already being rendered further up
CIRCULAR = "<circular>"

# Ids of the bindings of the boxes on the active rendering path, shared by
# every view of a clowder instance. This is a context variable so a `purr`
# method that calls purrify again still sees the outer path.
_active = contextvars.ContextVar("mewlix_purrify_active", default=frozenset())


def format_number(number):
    """Render a number the way Mewlix programs print it.

    Integral floats print without a decimal point, and the non-finite
    values print as NaN and Infinity.
    """
    if isinstance(number, float):
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        if number.is_integer() and abs(number) < 1e21:
            return str(int(number))
    return repr(number)


def purrify(value):
    """Convert any runtime value to display text.

    Strings are returned as they are. Strings nested inside shelves and
    boxes are quoted. Boxes and instances that contain themselves render
    the repeat as `<circular>` rather than recursing.

    Returns:
        (str) Display text
    """
    if isinstance(value, str):
        return value
    if mewlix.is_nothing(value):
        return "nothing"
    if isinstance(value, bool):
        return "true" if value else "false"
    if mewlix.is_number(value):
        return format_number(value)

    if isinstance(value, mewlix.Shelf):
        items = ", ".join(_purrify_item(item) for item in value.to_array())
        return f"[{items}]"

    if isinstance(value, mewlix.Box):
        if id(value.bindings) in _active.get():
            return CIRCULAR
        with _visiting(value):
            return _purrify_box(value)

    if isinstance(value, mewlix.Clowder):
        return f"<clowder '{value.name}'>"
    if isinstance(value, mewlix.CatTree):
        keys = " ".join(f"{key};" for key in value.fruits)
        return f"cat tree {value.name}; {keys} ~meow"
    if isinstance(value, mewlix.YarnBall):
        return f"<yarn ball '{value.key}'>"
    if callable(value):
        return "<function>"
    return str(value)


@contextlib.contextmanager
def _visiting(box):
    token = _active.set(_active.get() | {id(box.bindings)})
    try:
        yield
    finally:
        _active.reset(token)


def _purrify_item(value):
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return purrify(value)


def _purrify_box(box):
    if isinstance(box, mewlix.CatFruit):
        return f"{box.get('parent')}.{box.get('key')}"

    if isinstance(box, mewlix.ClowderInstance):
        purr = box.method("purr")
        if purr is not None:
            return purrify(purr())

    pairs = ", ".join(f"{key}: {_purrify_item(value)}" for key, value in box.bindings.items())
    text = f"📦 [ {pairs} ]" if pairs else "📦 [ ]"
    if isinstance(box, mewlix.ClowderInstance):
        return f"{box.template.name} {text}"
    return text
