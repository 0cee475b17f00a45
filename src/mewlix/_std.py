"""The `std` and `std.curry` yarn balls.

Every shelf operation here uses the head-first view of a shelf: index 0
is the most recently pushed item. All names are snake_case because they
are visible to Mewlix programs as they are.
"""

__all__ = ["create_std", "create_std_curry"]

import datetime
import functools
import logging
import math
import random
import time

import mewlix
from mewlix import Shelf, ShelfBottom, Box, ensure, undefined
from mewlix._ops import to_bool, to_number


log = logging.getLogger("mewlix")


def _to_index(value, length):
    """Integer position from a number, non-finite values land past either end."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return length + 1 if value > 0 else -(length + 1)
    return int(value)


def _length_of(value):
    return len(value) if isinstance(value, (str, Shelf)) else 0


def _ensure_finite(source, value):
    if not math.isfinite(value):
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"{source}: Expected a finite number, got {_purr(value)}!",
        )


def _purr(value):
    return mewlix.purrify(value)


def _cat(shelf):
    ensure.shelf("std.cat", shelf)
    return "".join(mewlix.purrify(value) for value in shelf.to_array())


def _trim(text):
    ensure.string("std.trim", text)
    return text.strip()


def _tear(text, start, end):
    ensure.string("std.tear", text)
    ensure.number("std.tear", start)
    ensure.number("std.tear", end)
    # Same as a JavaScript substring, arguments are clamped and swapped
    start = min(max(_to_index(start, len(text)), 0), len(text))
    end = min(max(_to_index(end, len(text)), 0), len(text))
    if start > end:
        start, end = end, start
    return text[start:end]


def _push_down(text):
    ensure.string("std.push_down", text)
    return text.lower()


def _push_up(text):
    ensure.string("std.push_up", text)
    return text.upper()


def _poke(value, index=0):
    ensure.number("std.poke", index)
    index = _to_index(index, _length_of(value))

    if isinstance(value, str):
        if index < 0:
            index = max(0, len(value) + index)
        return value[index] if index < len(value) else None

    if isinstance(value, Shelf):
        if index < 0:
            index = max(0, len(value) + index)
        for _ in range(index):
            value = value.pop()
        return value.peek()

    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'std.poke: Can\'t index into value of type "{mewlix.type_of(value)}": {_purr(value)}',
    )


def _char(value):
    ensure.number("std.char", value)
    _ensure_finite("std.char", value)
    if value < 0 or value > 65535:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"std.char: Value outside of valid character range: {_purr(value)}",
        )
    return chr(int(value))


def _bap(value):
    ensure.string("std.bap", value)
    if not value:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            "std.bap: Expected character; received empty string!",
        )
    code = ord(value[0])
    if code > 0xFFFF:
        # First UTF-16 code unit, the high surrogate
        code = 0xD800 + ((code - 0x10000) >> 10)
    return code


def _nuzzle(value):
    return to_bool(value)


def _empty(value):
    if isinstance(value, str):
        return value == ""
    if isinstance(value, Shelf):
        return value.is_empty
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'std.empty: Can\'t check emptiness of value of type "{mewlix.type_of(value)}": '
        f"{_purr(value)}",
    )


def _join(a, b):
    if isinstance(a, str) and isinstance(b, str):
        return a + b
    if isinstance(a, Shelf) and isinstance(b, Shelf):
        return Shelf.concat(a, b)
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f"std.join: Values of type '{mewlix.type_of(a)}' and '{mewlix.type_of(b)}' "
        "can't be concatenated!",
    )


def _take(value, amount):
    ensure.number("std.take", amount)
    amount = max(_to_index(amount, _length_of(value)), 0)
    if isinstance(value, str):
        return value[:amount]
    if isinstance(value, Shelf):
        items = []
        for item in value:
            if len(items) >= amount:
                break
            items.append(item)
        items.reverse()
        return Shelf.from_array(items)
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'std.take: Can\'t perform \'take\' operation on value of type "{mewlix.type_of(value)}": '
        f"{_purr(value)}",
    )


def _drop(value, amount):
    ensure.number("std.drop", amount)
    amount = max(_to_index(amount, _length_of(value)), 0)
    if isinstance(value, str):
        return value[amount:]
    if isinstance(value, Shelf):
        for _ in range(amount):
            if value.is_empty:
                break
            value = value.pop()
        return value
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'std.drop: Can\'t perform \'drop\' operation on value of type "{mewlix.type_of(value)}": '
        f"{_purr(value)}",
    )


def _reverse(value):
    if isinstance(value, str):
        return value[::-1]
    if isinstance(value, Shelf):
        return Shelf.reverse(value)
    raise mewlix.MewlixError(
        mewlix.ErrorCode.TypeMismatch,
        f'std.reverse: Can\'t reverse value of type "{mewlix.type_of(value)}": {_purr(value)}',
    )


def _sort(shelf):
    ensure.shelf("std.sort", shelf)
    key = functools.cmp_to_key(lambda a, b: mewlix.ordering(a, b).value)
    return Shelf.from_array(sorted(shelf.to_array(), key=key))


def _shuffle(shelf):
    ensure.shelf("std.shuffle", shelf)
    items = shelf.to_array()
    random.shuffle(items)
    return Shelf.from_array(items)


def _split_at(shelf, count):
    """Lift up to count items off the top of a shelf.

    Returns:
        (tuple[Shelf, Shelf]) Lifted items, reversed, and the rest
    """
    top = ShelfBottom()
    bottom = shelf
    while count > 0 and not bottom.is_empty:
        top = top.push(bottom.peek())
        bottom = bottom.pop()
        count -= 1
    return top, bottom


def _insert(shelf, value, index=0):
    ensure.shelf("std.insert", shelf)
    ensure.number("std.insert", index)
    index = _to_index(index, len(shelf))
    count = index if index >= 0 else len(shelf) + index + 1

    top, bottom = _split_at(shelf, count)
    bottom = bottom.push(value)
    for item in top:
        bottom = bottom.push(item)
    return bottom


def _remove(shelf, index=0):
    ensure.shelf("std.remove", shelf)
    ensure.number("std.remove", index)
    index = _to_index(index, len(shelf))
    count = index if index >= 0 else len(shelf) + index

    top, bottom = _split_at(shelf, count)
    bottom = bottom.pop()
    for item in top:
        bottom = bottom.push(item)
    return bottom


def _find(predicate, shelf):
    ensure.func("std.find", predicate)
    ensure.shelf("std.find", shelf)
    for index, value in enumerate(shelf):
        if to_bool(predicate(value)):
            return index
    return None


def _map(callback, shelf):
    ensure.func("std.map", callback)
    ensure.shelf("std.map", shelf)
    return Shelf.from_array([callback(value) for value in shelf.to_array()])


def _filter(predicate, shelf):
    ensure.func("std.filter", predicate)
    ensure.shelf("std.filter", shelf)
    return Shelf.from_array([value for value in shelf.to_array() if to_bool(predicate(value))])


def _fold(callback, initial, shelf):
    ensure.func("std.fold", callback)
    ensure.shelf("std.fold", shelf)
    accumulator = initial
    for value in shelf:
        accumulator = callback(accumulator, value)
    return accumulator


def _any(predicate, shelf):
    ensure.func("std.any", predicate)
    ensure.shelf("std.any", shelf)
    return any(to_bool(predicate(value)) for value in shelf)


def _all(predicate, shelf):
    ensure.func("std.all", predicate)
    ensure.shelf("std.all", shelf)
    return all(to_bool(predicate(value)) for value in shelf)


def _tuple(a, b):
    return Box([("first", a), ("second", b)])


def _collection_key(value):
    # Python dicts merge True with 1 and never find NaN again
    if isinstance(value, bool):
        return ("boolean", value)
    if mewlix.is_nothing(value):
        return ("nothing",)
    if isinstance(value, float) and math.isnan(value):
        return ("nan",)
    return value


def _table():
    """Box holding a hash map, keys compared by value for primitives.

    Fields: `add(key, value)`, `has(key)`, `get(key)`, `remove(key)` and
    `clear()`. The mutating fields give the table box back for chaining.
    """
    table = {}
    box = Box()

    def add(key, value):
        table[_collection_key(key)] = value
        return box

    def remove(key):
        table.pop(_collection_key(key), None)
        return box

    def clear():
        table.clear()
        return box

    box.set("add", add)
    box.set("has", lambda key: _collection_key(key) in table)
    box.set("get", lambda key: table.get(_collection_key(key)))
    box.set("remove", remove)
    box.set("clear", clear)
    return box


def _set():
    """Box holding a hash set with `add`, `has`, `remove` and `clear`."""
    values = set()
    box = Box()

    def add(value):
        values.add(_collection_key(value))
        return box

    def remove(value):
        values.discard(_collection_key(value))
        return box

    def clear():
        values.clear()
        return box

    box.set("add", add)
    box.set("has", lambda value: _collection_key(value) in values)
    box.set("remove", remove)
    box.set("clear", clear)
    return box


def _zip(a, b):
    ensure.shelf("std.zip", a)
    ensure.shelf("std.zip", b)
    pairs = [_tuple(x, y) for x, y in zip(a, b)]
    pairs.reverse()
    return Shelf.from_array(pairs)


def _repeat(number, callback):
    ensure.number("std.repeat", number)
    ensure.func("std.repeat", callback)
    _ensure_finite("std.repeat", number)
    for i in range(math.ceil(number)):
        callback(i)


def _foreach(callback, shelf):
    ensure.func("std.foreach", callback)
    ensure.shelf("std.foreach", shelf)
    for value in shelf:
        callback(value)


def _count(start=0, end=undefined):
    if mewlix.is_nothing(end):
        start, end = 0, start
    ensure.number("std.count", start)
    ensure.number("std.count", end)
    _ensure_finite("std.count", start)
    _ensure_finite("std.count", end)
    start = math.floor(start)
    end = math.floor(end)

    step = 1 if start < end else -1
    output = ShelfBottom()
    for i in range(end, start - step, -step):
        output = output.push(i)
    return output


def _to_bytes(text):
    ensure.string("std.to_bytes", text)
    return Shelf.from_array(text.encode("utf-8"))


def _from_bytes(shelf):
    ensure.shelf("std.from_bytes", shelf)
    items = shelf.to_array()
    for item in items:
        ensure.number("std.from_bytes", item)
    try:
        return bytes(int(item) for item in items).decode("utf-8")
    except (ValueError, OverflowError, UnicodeDecodeError) as e:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.BadConversion,
            f"std.from_bytes: Invalid UTF-8 byte sequence: {e}",
        ) from e


def _slap(value):
    return to_number(value)


def _round(value):
    ensure.number("std.round", value)
    if not math.isfinite(value):
        return value
    # Halves round up, like JavaScript's Math.round
    return math.floor(value + 0.5)


def _floor(value):
    ensure.number("std.floor", value)
    if not math.isfinite(value):
        return value
    return math.floor(value)


def _ceiling(value):
    ensure.number("std.ceiling", value)
    if not math.isfinite(value):
        return value
    return math.ceil(value)


def _min(a, b):
    ensure.number("std.min", a)
    ensure.number("std.min", b)
    return min(a, b)


def _max(a, b):
    ensure.number("std.max", a)
    ensure.number("std.max", b)
    return max(a, b)


def _clamp(value, low, high):
    ensure.number("std.clamp", value)
    ensure.number("std.clamp", low)
    ensure.number("std.clamp", high)
    return low if value < low else (high if value > high else value)


def _abs(value):
    ensure.number("std.abs", value)
    return abs(value)


def _sqrt(value):
    ensure.number("std.sqrt", value)
    if value < 0:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"std.sqrt: Cannot calculate square root of negative number {_purr(value)}!",
        )
    return math.sqrt(value)


def _logn(value, base=undefined):
    ensure.number("std.logn", value)
    if value <= 0:
        kind = "natural logarithm" if mewlix.is_nothing(base) else f"logarithm to base {_purr(base)}"
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"std.logn: Cannot calculate {kind} of {_purr(value)}!",
        )
    if mewlix.is_nothing(base):
        return math.log(value)
    ensure.number("std.logn", base)
    if base <= 0 or base == 1:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"std.logn: Invalid base for logarithm: {_purr(base)}!",
        )
    return math.log(value) / math.log(base)


def _trig(name, func):
    def trig(value):
        ensure.number(f"std.{name}", value)
        try:
            return func(value)
        except ValueError:
            return math.nan
    trig.__name__ = name
    return trig


def _atan2(y, x):
    ensure.number("std.atan2", y)
    ensure.number("std.atan2", x)
    return math.atan2(y, x)


def _truncate(value, places=0):
    ensure.number("std.truncate", value)
    ensure.number("std.truncate", places)
    if places < 0:
        raise mewlix.MewlixError(
            mewlix.ErrorCode.InvalidOp,
            f"std.truncate: Value of places should be greater than 0; received {_purr(places)}",
        )
    if not math.isfinite(value):
        return value
    if math.isnan(places):
        return math.nan
    try:
        modifier = 10.0 ** places
    except OverflowError:
        return value
    scaled = value * modifier
    if not math.isfinite(scaled):
        return value
    return math.trunc(scaled) / modifier


def _random():
    return random.random()


def _random_int(low, high=undefined):
    if mewlix.is_nothing(high):
        low, high = 0, low
    ensure.number("std.random_int", low)
    ensure.number("std.random_int", high)
    _ensure_finite("std.random_int", low)
    _ensure_finite("std.random_int", high)
    return math.floor(random.random() * (high - low + 1) + low)


def _to_int32(value):
    if not math.isfinite(value):
        return 0
    value = int(value) & 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _itty(value):
    ensure.number("std.itty", value)
    return ~_to_int32(value)


def _bitty(a, b):
    ensure.number("std.bitty", a)
    ensure.number("std.bitty", b)
    return _to_int32(_to_int32(a) | _to_int32(b))


def _kitty(a, b):
    ensure.number("std.kitty", a)
    ensure.number("std.kitty", b)
    return _to_int32(_to_int32(a) & _to_int32(b))


def _date():
    now = datetime.datetime.now()
    return Box([
        ("day", now.isoweekday() % 7 + 1),
        ("month", now.month),
        ("year", now.year),
        ("hours", now.hour),
        ("minutes", now.minute),
        ("seconds", now.second),
    ])


def _time():
    return int(time.time() * 1000)


def _log(value):
    log.info("[Mewlix] %s", mewlix.purrify(value))


def _error_box():
    return Box((code.name, code.id) for code in mewlix.ErrorCode)


def create_std(runtime):
    """Build the standard library yarn ball for a runtime.

    Args:
        runtime: (Mewlix) Runtime whose output hook `meowf` writes to
    Returns:
        (YarnBall) The `std` yarn ball
    """
    def meowf(value):
        return runtime.meow(mewlix.purrify(value))

    fields = {
        "purr": _purr,
        "cat": _cat,
        "trim": _trim,
        "tear": _tear,
        "push_down": _push_down,
        "push_up": _push_up,
        "poke": _poke,
        "char": _char,
        "bap": _bap,
        "nuzzle": _nuzzle,
        "empty": _empty,
        "join": _join,
        "take": _take,
        "drop": _drop,
        "reverse": _reverse,
        "sort": _sort,
        "shuffle": _shuffle,
        "insert": _insert,
        "remove": _remove,
        "find": _find,
        "map": _map,
        "filter": _filter,
        "fold": _fold,
        "any": _any,
        "all": _all,
        "zip": _zip,
        "repeat": _repeat,
        "foreach": _foreach,
        "tuple": _tuple,
        "table": _table,
        "set": _set,
        "count": _count,
        "to_bytes": _to_bytes,
        "from_bytes": _from_bytes,
        "slap": _slap,
        "round": _round,
        "floor": _floor,
        "ceiling": _ceiling,
        "min": _min,
        "max": _max,
        "clamp": _clamp,
        "abs": _abs,
        "pi": math.pi,
        "e": math.e,
        "sqrt": _sqrt,
        "logn": _logn,
        "acos": _trig("acos", math.acos),
        "asin": _trig("asin", math.asin),
        "atan": _trig("atan", math.atan),
        "cos": _trig("cos", math.cos),
        "sin": _trig("sin", math.sin),
        "tan": _trig("tan", math.tan),
        "atan2": _atan2,
        "truncate": _truncate,
        "random": _random,
        "random_int": _random_int,
        "itty": _itty,
        "bitty": _bitty,
        "kitty": _kitty,
        "date": _date,
        "time": _time,
        "meowf": meowf,
        "to_json": mewlix.to_json,
        "from_json": mewlix.from_json,
        "log": _log,
        "error": _error_box(),
    }
    return mewlix.library("std", fields)


def _curry(func, arity):
    def curried(*args):
        if len(args) >= arity:
            return func(*args)
        return lambda *more: curried(*args, *more)
    curried.__name__ = func.__name__
    return curried


# Functions of std.curry that take their arguments one call at a time
_CURRIED = {
    "tear": 3, "poke": 2, "join": 2, "take": 2, "drop": 2, "insert": 3,
    "remove": 2, "find": 2, "map": 2, "filter": 2, "fold": 3, "any": 2,
    "all": 2, "zip": 2, "repeat": 2, "foreach": 2, "tuple": 2, "min": 2,
    "max": 2, "clamp": 3, "logn": 2, "atan2": 2, "truncate": 2,
    "random_int": 2, "count": 2, "bitty": 2, "kitty": 2,
}


def create_std_curry(std):
    """Build `std.curry` from a `std` yarn ball."""
    fields = {name: _curry(std.get(name), arity) for name, arity in _CURRIED.items()}
    return mewlix.curry_library("std.curry", std, fields)
