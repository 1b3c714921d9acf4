"""
Progparams utilities.

Helpers the schema and parse layers lean on:
- Unset: the "argument omitted" marker. Slot defaults, the parse() token
  source and fault messages all need to tell "not given" apart from a given
  None, 0, "" or False.
- coalesce(): turn Unset back into a concrete fallback at the point of use.
- rename(): name the callables built on the fly (the @param decorator, mirror
  getters) so tracebacks and rich reprs show something readable.
- mirror(): read-only public properties over the "_name" fields of Params,
  Slot and Descriptor; containers come out as tuples, frozensets or mapping
  proxies.

    >>> coalesce(Unset, 10)
    10
    >>> coalesce(0, 10)
    0
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker (one instance per process, falsy, sealed).

    Params.add(default=Unset) keeps the kind's own default, Params.parse(Unset)
    reads sys.argv, and a fault built without a message renders an empty line.
    """

    def __or__(self, other, /):
        """Allow `str | Unset` in isinstance checks."""
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


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` itself.

    Only the marker is replaced: a slot default of 0 or a usage of "" survives.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Give a callable a fixed __name__ and __qualname__.

    rename(function, "name") renames in place and returns the function;
    rename("name") returns a decorator doing the same. Bad arguments and
    callables whose names are read-only raise TypeError.
    """
    match parameters:
        case (target, str() as name):
            if not builtins.callable(target):
                raise TypeError("rename() first argument must be callable")
            try:
                target.__name__ = target.__qualname__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return target
        case (_, _):
            raise TypeError("rename() second argument must be a string")
        case (str() as name,):
            def decorator(target):
                if not builtins.callable(target):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(target, name)
            return rename(decorator, "rename")
        case (_,):
            raise TypeError("@rename() argument must be a string")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    # shallow: only the outer container is made read-only
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Property reading `self._<name>`; Descriptor.names comes back as a tuple,
    never the list a caller could append to.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
