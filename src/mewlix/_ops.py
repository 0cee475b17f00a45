"""Primitive operations compiled Mewlix code calls into"""

__all__ = ["numbers", "boolean", "strings", "collections", "conversion", "internal"]

import math
import re
import types

import mewlix


_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY_RE = re.compile(r"[+-]?Infinity")
_RADIX_RE = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


def _ensure_numbers(operator, *values):
    for value in values:
        mewlix.ensure.number(operator, value)


def _ensure_divisor(operator, a, b):
    if b == 0:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.DivideByZero,
            f"{operator}: Attempted to divide {mewlix.purrify(a)} by {mewlix.purrify(b)}!",
        )


def _add(a, b):
    _ensure_numbers("+", a, b)
    return a + b


def _sub(a, b):
    _ensure_numbers("-", a, b)
    return a - b


def _mul(a, b):
    _ensure_numbers("*", a, b)
    return a * b


def _div(a, b):
    _ensure_numbers("/", a, b)
    _ensure_divisor("/", a, b)
    return a / b


def _floordiv(a, b):
    _ensure_numbers("//", a, b)
    _ensure_divisor("//", a, b)
    quotient = a / b
    if not math.isfinite(quotient):
        return quotient
    return math.floor(quotient)


def _mod(a, b):
    _ensure_numbers("%", a, b)
    _ensure_divisor("%", a, b)
    # Python's % already takes the sign of the divisor
    return a % b


def _pow(a, b):
    _ensure_numbers("^", a, b)
    try:
        result = a ** b
    except ZeroDivisionError as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.DivideByZero,
            f"^: Cannot raise {mewlix.purrify(a)} to negative power {mewlix.purrify(b)}!",
        ) from e
    except OverflowError:
        # Odd integer powers keep the sign of the base
        odd = float(b).is_integer() and int(b) % 2 == 1
        return -math.inf if a < 0 and odd else math.inf
    if isinstance(result, complex):
        # Fractional power of a negative base
        return math.nan
    return result


def _plus(a):
    _ensure_numbers("+", a)
    return +a


def _minus(a):
    _ensure_numbers("-", a)
    return -a


numbers = types.SimpleNamespace(
    add=_add, sub=_sub, mul=_mul, div=_div, floordiv=_floordiv,
    mod=_mod, pow=_pow, plus=_plus, minus=_minus,
)


def to_bool(value):
    """Truthiness: only nothing and false are false, `0` and `""` are true."""
    if mewlix.is_nothing(value):
        return False
    if isinstance(value, bool):
        return value
    return True


def to_number(value):
    """Convert a value to a number.

    Text follows the numeric literal syntax of Mewlix programs: decimal
    numbers with an optional sign, fraction and exponent, `Infinity`, and
    unsigned `0x`/`0o`/`0b` integers. Surrounding whitespace is ignored and
    blank text is 0.

    Raises:
        MewlixError: BadConversion for anything that isn't a number, a boolean
            or numeric text
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if mewlix.is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _DECIMAL_RE.fullmatch(text):
            if any(c in text for c in ".eE"):
                return float(text)
            return int(text)
        if _INFINITY_RE.fullmatch(text):
            return -math.inf if text.startswith("-") else math.inf
        match = _RADIX_RE.fullmatch(text)
        if match:
            try:
                return int(match.group(2), _RADIX_BASES[match.group(1).lower()])
            except ValueError:
                # Digits outside the base, like 0b12
                pass
    raise mewlix.MewlixError(
        mewlix.ErrorCode.BadConversion,
        f"Value cannot be converted to a number: {mewlix.purrify(value)}",
    )


conversion = types.SimpleNamespace(to_bool=to_bool, to_number=to_number)


boolean = types.SimpleNamespace(
    not_=lambda a: not to_bool(a),
    or_=lambda a, fb: a if to_bool(a) else fb(),
    and_=lambda a, fb: fb() if to_bool(a) else a,
    ternary=lambda condition, fa, fb: fa() if to_bool(condition) else fb(),
)


strings = types.SimpleNamespace(
    concat=lambda a, b: mewlix.purrify(a) + mewlix.purrify(b),
)


def _length(value):
    if isinstance(value, (mewlix.Shelf, str)):
        return len(value)
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'...?: Can\'t calculate length for value of type "{mewlix.type_of(value)}": '
        f"{mewlix.purrify(value)}",
    )


def _contains(value, container):
    if isinstance(container, mewlix.Shelf):
        return container.contains(value)

    if not isinstance(value, str):
        raise mewlix.MewlixError(
            mewlix.ErrorCode.TypeMismatch,
            f'in: Expected string for lookup in "{mewlix.type_of(container)}"; '
            f'got "{mewlix.type_of(value)}": {mewlix.purrify(value)}',
        )
    if isinstance(container, str):
        return value in container
    if isinstance(container, (mewlix.Box, mewlix.YarnBall, mewlix.CatTree)):
        return container.contains(value)

    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'in: Cannot perform lookup in value of type "{mewlix.type_of(container)}": '
        f"{mewlix.purrify(container)}",
    )


collections = types.SimpleNamespace(length=_length, contains=_contains)


def _can_chase(value):
    if isinstance(value, (str, mewlix.Shelf)):
        return value
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f"Expected string or shelf; received value of type '{mewlix.type_of(value)}': "
        f"{mewlix.purrify(value)}",
    )


def _pounce_error(error):
    """Describe a caught exception as a box for a program's catch block."""
    if isinstance(error, mewlix.MewlixError):
        code, message = error.code, error.message
    else:
        code, message = mewlix.ErrorCode.ExternalError, str(error) or None
    return mewlix.Box([("name", code.name), ("id", code.id), ("message", message)])


def _assert(expr, message):
    if to_bool(expr):
        return
    raise mewlix.MewlixError(
        mewlix.ErrorCode.CatOnComputer,
        f"Assertion failed: {mewlix.purrify(message)}",
    )


internal = types.SimpleNamespace(
    can_chase=_can_chase,
    pounce_error=_pounce_error,
    assert_=_assert,
)
