"""Clowders: class templates with single inheritance, and their instances"""

__all__ = ["wake", "Clowder", "ClowderInstance", "instantiate"]

import types

import mewlix


# Method name of the initializer run when a clowder is instantiated
wake = "wake"


class Clowder:
    """A clowder template.

    Templates hold a method table and an optional parent template. Methods
    are plain functions taking the instance (`this`) as the first argument.
    Method lookup walks the table of the template, then the parent chain.

    The parent chain is fixed when the template is created and is checked to
    be finite, so instantiating or dispatching can never loop forever.

    Args:
        name: (str) Clowder name
        parent: (Clowder | None) Parent template
        methods: (Mapping[str, Callable] | None) Method table

    Raises:
        MewlixError: TypeMismatch for a bad parent or method, CriticalError
            for a parent chain that loops
    """
    __slots__ = ("_name", "_parent", "_methods")

    def __init__(self, name, parent=None, methods=None):
        mewlix.ensure.string("clowder", name)
        if parent is not None and not isinstance(parent, Clowder):
            raise mewlix.MewlixError(
                mewlix.ErrorCode.TypeMismatch,
                f"clowder {name}: Parent must be a clowder, got {mewlix.type_of(parent)}!",
            )

        table = {}
        for key, method in (methods or {}).items():
            if not callable(method):
                raise mewlix.MewlixError(
                    mewlix.ErrorCode.TypeMismatch,
                    f"clowder {name}: Method '{key}' is not a function!",
                )
            table[key] = method

        self._name = name
        self._parent = parent
        self._methods = table

        seen = {id(self)}
        node = parent
        while node is not None:
            if id(node) in seen:
                raise mewlix.MewlixError(
                    mewlix.ErrorCode.CriticalError,
                    f"clowder {name}: Inheritance chain contains a cycle!",
                )
            seen.add(id(node))
            node = node._parent

    @property
    def name(self):
        return self._name

    @property
    def parent(self):
        return self._parent

    @property
    def methods(self):
        """(MappingProxyType) Read-only view of the template's own methods."""
        return types.MappingProxyType(self._methods)

    def chain(self):
        """Iterate this template and then each ancestor."""
        node = self
        while node is not None:
            yield node
            node = node._parent

    def resolve(self, key):
        """Find a method by name along the chain, with the template defining it.

        Returns:
            (tuple[Clowder, Callable] | tuple[None, None]) Owner and method
        """
        for template in self.chain():
            method = template._methods.get(key)
            if method is not None:
                return template, method
        return None, None

    def lookup(self, key):
        """(Callable | None) Unbound method function found along the chain."""
        return self.resolve(key)[1]

    def inherits(self, template):
        """(bool) Template is this clowder or one of its ancestors."""
        return any(node is template for node in self.chain())

    def __call__(self, *args):
        """Create and wake a new instance."""
        instance = ClowderInstance(self)
        instance.wake(*args)
        return instance

    def __repr__(self):
        return f"Clowder<{self._name}>"

    def __str__(self):
        return mewlix.purrify(self)


class ClowderInstance(mewlix.Box):
    """An instance of a clowder template.

    Fields live in a bindings dict. The `outside()` view of an instance
    shares that same dict but dispatches methods against the parent
    template, so a field set at any level is seen by every level.

    Methods fetched with `get` are bound to the view they came from. A
    parent method reached through `outside()` that looks up another method
    on `this` resolves it against the parent's table, never the child's.
    Inside a method, `this.outside()` is the parent of the template that
    defines the method, so an inherited `wake` delegates one level up from
    where it is written.

    Args:
        template: (Clowder) Template to dispatch against
        bindings: (dict | None) Shared field storage, new when not given
        views: (dict | None) Shared cache of the views of one instance
        home: (Clowder | None) Template whose parent `outside()` gives,
            the dispatch template when not given

    Attributes:
        template: (Clowder) Template of this view
        bindings: (dict) Field storage
    """
    __slots__ = ("template", "_home", "_views")

    def __init__(self, template, bindings=None, views=None, home=None):
        super().__init__()
        if bindings is not None:
            self.bindings = bindings
        self.template = template
        self._home = home if home is not None else template
        if views is None:
            views = {(template, template): self}
        self._views = views

    def _view(self, template, home=None):
        key = (template, home if home is not None else template)
        view = self._views.get(key)
        if view is None:
            view = ClowderInstance(template, self.bindings, self._views, key[1])
            self._views[key] = view
        return view

    def method(self, key):
        """Method found along this view's chain, bound for calling.

        Fields are not consulted.

        Returns:
            (MethodType | None) Bound method, or nothing
        """
        owner, method = self.template.resolve(key)
        if method is None:
            return None
        return types.MethodType(method, self._view(self.template, owner))

    def get(self, key):
        """Field value, else the bound method, else nothing."""
        if key in self.bindings:
            return self.bindings[key]
        return self.method(key)

    def contains(self, key):
        return key in self.bindings or self.template.lookup(key) is not None

    def outside(self):
        """View of this instance as its parent clowder.

        Returns:
            (ClowderInstance | None) Parent view, or nothing without a parent
        """
        parent = self._home.parent
        if parent is None:
            return None
        return self._view(parent)

    def wake(self, *args):
        """Run the initializer found along this view's chain.

        Templates without any `wake` method get a default that does nothing.
        """
        method = self.method(wake)
        if method is None:
            return self
        return method(*args)

    def __repr__(self):
        return f"ClowderInstance<{self.template.name}>({self.bindings!r})"


def instantiate(template):
    """Constructor function for a template, used by compiled `new` calls.

    Returns:
        (Callable) Function that creates and wakes an instance
    """
    mewlix.ensure.clowder("new", template)
    return template
