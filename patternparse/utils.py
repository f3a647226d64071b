"""
Small helpers shared by the registry and the pattern entries.

- Unset: "argument omitted" marker for parameters where None is a real value
  (a pattern description, a registry's program name, a decorator callback).
- coalesce(value, default): swap Unset for a default, keep every other value.
- rename(...): give generated callables (the @register decorator) a readable name.
- mirror("name"): read-only property over "self._name"; lists, dicts and sets are
  exposed as tuple / MappingProxyType / frozenset so callers cannot edit a
  registry's pattern list through its public view.

    >>> coalesce(Unset, "-h")
    '-h'
    >>> coalesce("", "-h")
    ''
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: one falsy instance, repr "Unset", no subclasses.
    """

    def __or__(self, other, /):
        # lets `str | Unset` be used in isinstance() checks
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return 'default' when 'object' is Unset, else 'object' (None and "" included).
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns the callable;
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")

        def decorator(callable):
            if not builtins.callable(callable):
                raise TypeError("@rename() must decorate a callable")
            return rename(callable, name)

        return rename(decorator, "rename")

    if len(parameters) != 2:
        raise TypeError("rename() takes 1 or 2 arguments (%d given)" % len(parameters))

    callable, name = parameters
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__qualname__ = callable.__name__ = name
    except (AttributeError, TypeError):
        # builtins and other C callables keep their names
        raise TypeError("rename() cannot rename %r" % callable) from None
    return callable


def _freeze(object):
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a frozen view of 'self._<name>'.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
