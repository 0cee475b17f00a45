"""Yarn balls and the namespace that loads them"""

__all__ = ["YarnBall", "Namespace", "library", "curry_library", "wrap"]

import asyncio
import inspect

import mewlix


class YarnBall:
    """Export table of a loaded module.

    Each field is backed by a getter that runs the first time the field is
    read; the value is kept from then on. Fields can never be assigned.

    Args:
        key: (str) Module key the yarn ball was loaded from
        exports: (Mapping[str, Callable] | Iterable[tuple[str, Callable]])
            Field getters taking no arguments
    """
    __slots__ = ("_key", "_getters", "_values")

    def __init__(self, key, exports=()):
        if hasattr(exports, "items"):
            exports = exports.items()
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_getters", dict(exports))
        object.__setattr__(self, "_values", {})

    @property
    def key(self):
        return self._key

    def fields(self):
        """(list[str]) Exported field names."""
        return list(self._getters)

    def contains(self, field):
        return field in self._getters

    def get(self, field):
        """Field value, or nothing for a field that isn't exported."""
        if field not in self._values:
            getter = self._getters.get(field)
            if getter is None:
                return None
            self._values[field] = getter()
        return self._values[field]

    def set(self, field, value):
        raise mewlix.MewlixError(
            mewlix.ErrorCode.TypeMismatch,
            f"Cannot set field '{field}': Yarn ball fields are read-only!",
        )

    def __getattr__(self, name):
        if name.startswith("__") or name not in self._getters:
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name, value):
        self.set(name, value)

    def __delattr__(self, name):
        self.set(name, None)

    def __repr__(self):
        return f"YarnBall<{self._key}>"

    def __str__(self):
        return mewlix.purrify(self)


def library(key, fields=None):
    """Yarn ball exporting fixed values."""
    return YarnBall(key, {name: (lambda v=value: v) for name, value in (fields or {}).items()})


def curry_library(key, base, fields=None):
    """Yarn ball overriding some fields of another one.

    Fields of `base` that aren't replaced read through to it.
    """
    exports = {name: (lambda v=value: v) for name, value in (fields or {}).items()}
    for name in base.fields():
        if name not in exports:
            exports[name] = lambda n=name: base.get(n)
    return YarnBall(key, exports)


def wrap(key, value):
    """Turn an injected host object into a yarn ball.

    Raises:
        MewlixError: InvalidImport for anything but a yarn ball or a mapping
    """
    if isinstance(value, YarnBall):
        return value
    if isinstance(value, dict):
        return library(key, value)
    raise mewlix.MewlixError(
        mewlix.ErrorCode.InvalidImport,
        f'Special import "{key}" isn\'t a yarn ball or a mapping!',
    )


class Namespace:
    """Registry of module loaders and their resolved yarn balls.

    Loaders are functions taking no arguments that return a yarn ball, or
    an awaitable of one. A loader runs at most once per key: the first
    `get_module` call stores the pending load in the cache, and every later
    or concurrent call awaits that same load.

    A failed load stays in the cache; the failure is raised again to every
    caller and the loader is not run a second time.

    Args:
        name: (str) Name for diagnostics

    Attributes:
        name: (str) Name for diagnostics
        modules: (dict[str, Callable]) Registered loaders
        cache: (dict[str, asyncio.Future]) Started loads by key
    """

    def __init__(self, name="default"):
        self.name = name
        self.modules = {}
        self.cache = {}

    def add_module(self, key, loader):
        """Register the loader for a module key.

        Raises:
            MewlixError: InvalidImport when the key is already registered,
                TypeMismatch when the loader isn't a function
        """
        mewlix.ensure.string("add_module", key)
        mewlix.ensure.func("add_module", loader)
        if key in self.modules:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.InvalidImport,
                f'Duplicate key: A module with the key "{key}" has already been imported!',
            )
        self.modules[key] = loader

    def inject_module(self, key, value):
        """Register an already built yarn ball or mapping under a key."""
        wrapped = wrap(key, value)
        self.add_module(key, lambda: wrapped)

    async def get_module(self, key):
        """Resolve a module key to its yarn ball.

        Raises:
            MewlixError: InvalidImport for an unknown key or a loader that
                doesn't give a yarn ball, ExternalError when the loader fails
                with a non runtime exception
        """
        loader = self.modules.get(key)
        if loader is None:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.InvalidImport,
                f'The module "{key}" doesn\'t exist or hasn\'t been properly loaded!',
            )

        pending = self.cache.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._load(key, loader))
            self.cache[key] = pending
        # Shielded so a cancelled caller never cancels the shared load
        return await asyncio.shield(pending)

    async def _load(self, key, loader):
        try:
            result = loader()
            if inspect.isawaitable(result):
                result = await result
        except mewlix.MewlixError:
            raise
        except Exception as e:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.ExternalError,
                f'Loading module "{key}" failed: {type(e).__name__}: {e}',
            ) from e

        if not isinstance(result, YarnBall):
            raise mewlix.MewlixError(
                mewlix.ErrorCode.InvalidImport,
                f'Module "{key}" didn\'t produce a yarn ball, got {mewlix.type_of(result)}!',
            )
        return result

    def is_loaded(self, key):
        """(bool) A load for the key has finished without failing."""
        pending = self.cache.get(key)
        return (
            pending is not None
            and pending.done()
            and not pending.cancelled()
            and pending.exception() is None
        )

    def reset(self):
        """Forget every loader and cached yarn ball."""
        self.modules.clear()
        self.cache.clear()

    def __contains__(self, key):
        return key in self.modules

    def __repr__(self):
        return f"Namespace<{self.name}>"
