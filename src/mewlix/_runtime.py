"""The runtime object compiled programs and hosts share"""

__all__ = ["Mewlix"]

import inspect

import mewlix


class Mewlix:
    """A Mewlix runtime.

    Holds the module namespace, the standard library and the two host I/O
    hooks. Hosts (a terminal, a canvas, a test harness) install `meow` to
    emit a line of program output and `listen` to read a line of input.
    Until then both hooks fail with CriticalError.

    Args:
        namespace: (Namespace | None) Module namespace to use, a new one
            when not given

    Attributes:
        modules: (Namespace) Module namespace
        std: (YarnBall) The `std` yarn ball
        std_curry: (YarnBall) The `std.curry` yarn ball
    """

    def __init__(self, namespace=None):
        self.modules = namespace if namespace is not None else mewlix.Namespace("default")
        self._meow = None
        self._listen = None
        self.std = mewlix.create_std(self)
        self.std_curry = mewlix.create_std_curry(self.std)
        self._inject_std()

    def _inject_std(self):
        self.modules.inject_module("std", self.std)
        self.modules.inject_module("std.curry", self.std_curry)

    def reset(self):
        """Clear every module except the standard library."""
        self.modules.reset()
        self._inject_std()

    # Host hooks

    def set_meow(self, func):
        mewlix.ensure.func("set_meow", func)
        self._meow = func

    def set_listen(self, func):
        mewlix.ensure.func("set_listen", func)
        self._listen = func

    def meow(self, text):
        """Emit a line of program output through the host."""
        if self._meow is None:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.CriticalError,
                "meow: Core function 'meow' hasn't been implemented!",
            )
        return self._meow(mewlix.purrify(text))

    async def listen(self, question=None):
        """Read a line of program input through the host.

        The host hook may be a plain function or a coroutine function.
        """
        if self._listen is None:
            raise mewlix.MewlixError(
                mewlix.ErrorCode.CriticalError,
                "listen: Core function 'listen' hasn't been implemented!",
            )
        answer = self._listen(None if question is None else mewlix.purrify(question))
        if inspect.isawaitable(answer):
            answer = await answer
        return answer

    # Value construction used by compiled code

    def shelf(self, *items):
        return mewlix.Shelf.from_array(items)

    def box(self, mapping=None):
        return mewlix.Box.create(mapping)

    def clowder(self, name, parent=None, methods=None):
        return mewlix.Clowder(name, parent, methods)

    def cat_tree(self, name, keys=()):
        return mewlix.CatTree(name, keys)

    def inject(self, key, value):
        self.modules.inject_module(key, value)

    # Entry points

    async def run(self, func):
        """Run a program entry function and return what it gives.

        Hosts can replace this to wrap the program, for example to report
        errors in their own interface.
        """
        result = func()
        if inspect.isawaitable(result):
            result = await result
        return result

    async def main(self, entrypoint="main"):
        """Resolve the entry point yarn ball of a program."""
        return await self.run(lambda: self.modules.get_module(entrypoint))

    def __repr__(self):
        return f"Mewlix<{self.modules.name}>"
