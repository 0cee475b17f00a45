"""JSON serialization of runtime values.

Encoding walks the value graph directly. Shelves become arrays in their
front-to-back order, boxes and clowder instances become objects of their
fields. A box reached again while it is still being encoded is written as
`null`, so self referencing values always produce finite text.

Decoding parses text with a Lark grammar and builds shelves, boxes and
primitives straight from the parse tree.
"""

__all__ = ["to_json", "from_json", "from_python"]

import json
import math
import re
from pathlib import Path

from lark import Lark, Transformer, LarkError

import mewlix


_lark_parser: Lark | None = None

_EXPONENT_RE = re.compile(r"e([+-])0*(\d)")


def _get_parser() -> Lark:
    """Get the singleton Lark parser for JSON text."""
    global _lark_parser
    if _lark_parser is None:
        grammar_path = Path(__file__).parent / "lark" / "json.lark"
        _lark_parser = Lark(
            grammar_path.read_text(encoding="utf-8"),
            parser="lalr",
            transformer=JsonTransformer(),
        )
    return _lark_parser


class JsonTransformer(Transformer):
    """Build runtime values from the JSON parse tree."""

    def string(self, children):
        (token,) = children
        return _unquote(token)

    def number(self, children):
        (token,) = children
        text = str(token)
        if any(c in text for c in ".eE"):
            return float(text)
        return int(text)

    def true(self, _):
        return True

    def false(self, _):
        return False

    def null(self, _):
        return None

    def array(self, children):
        return mewlix.Shelf.from_array(children)

    def pair(self, children):
        key, value = children
        return _unquote(key), value

    def object(self, children):
        return mewlix.Box(children)


def _unquote(token):
    # The grammar only delimits the literal, escapes and control characters
    # are validated here
    try:
        return json.loads(str(token))
    except ValueError as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.BadConversion,
            f"from_json: Invalid string literal {token}: {e}",
        ) from e


def from_json(text):
    """Parse JSON text into runtime values.

    Arrays become shelves whose head is the last array item, objects become
    boxes and `null` becomes nothing.

    Raises:
        MewlixError: BadConversion when the text is not valid JSON
    """
    mewlix.ensure.string("from_json", text)
    try:
        return _get_parser().parse(text)
    except mewlix.MewlixError:
        raise
    except LarkError as e:
        # Errors raised inside the transformer arrive wrapped by Lark
        cause = getattr(e, "orig_exc", None)
        if isinstance(cause, mewlix.MewlixError):
            raise cause from e
        raise mewlix.MewlixError(
            mewlix.ErrorCode.BadConversion,
            f"from_json: Invalid JSON text: {e}",
        ) from e


def to_json(value):
    """Serialize a runtime value to compact JSON text.

    Raises:
        MewlixError: TypeMismatch for values with no JSON form (functions,
            clowders, yarn balls), BadConversion for NaN and infinities
    """
    return _encode(value, set())


def _encode(value, active):
    if mewlix.is_nothing(value):
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if mewlix.is_number(value):
        return _encode_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)

    if isinstance(value, mewlix.Shelf):
        return "[" + ",".join(_encode(item, active) for item in value.to_array()) + "]"

    if isinstance(value, mewlix.Box):
        if id(value.bindings) in active:
            return "null"
        active.add(id(value.bindings))
        try:
            fields = (
                f"{json.dumps(key, ensure_ascii=False)}:{_encode(item, active)}"
                for key, item in value.bindings.items()
            )
            return "{" + ",".join(fields) + "}"
        finally:
            active.discard(id(value.bindings))

    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'to_json: Cannot serialize value of type "{mewlix.type_of(value)}"!',
    )


def _encode_number(number):
    if isinstance(number, float):
        if not math.isfinite(number):
            raise mewlix.MewlixError(
                mewlix.ErrorCode.BadConversion,
                f"to_json: Cannot serialize non-finite number {mewlix.format_number(number)}!",
            )
        return _EXPONENT_RE.sub(r"e\1\2", mewlix.format_number(number))
    return str(number)


def from_python(value):
    """Convert plain Python containers into runtime values.

    Lists and tuples become shelves, dicts become boxes. Other values are
    returned unchanged.
    """
    if isinstance(value, (list, tuple)):
        return mewlix.Shelf.from_array(from_python(item) for item in value)
    if isinstance(value, dict):
        return mewlix.Box((key, from_python(item)) for key, item in value.items())
    return value
