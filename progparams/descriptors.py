r"""
Progparams descriptors: the schema unit for one logical parameter.

Overview
- Slot: typed destination holder. Either caller-owned (built by the caller and
  read back after parsing, write-through) or library-owned (allocated by
  Params.add and read back with Params.get). A slot may also forward every
  stored value to a bound callback.
- Descriptor: one parameter, i.e. its aliases, its class (option or positional),
  its required flag, the mutable found flag and exactly one Slot.

Name rules (sanitized on construction)
- Option aliases carry the option marker:
  • short: "-x"   (one character, neither '-', '=' nor whitespace)
  • long:  "--name" (no '=' nor whitespace)
  The lone "-", the terminator "--" and single-dash multi-character names are
  rejected since the parser could never match them.
- Positional descriptors carry exactly one bare placeholder name (e.g. "destination").
- All names of one descriptor share the same class; mixing is a ConfigurationError.
- Duplicates within one descriptor are rejected.

Quick example
    >>> count = Slot(Kind.SIZE, 10)
    >>> Descriptor(("-c", "--count"), slot=count).positional
    False
"""
import functools
import operator
import re

from .faults import FaultCode, ConfigurationError, getdoc
from .kinds import admit, kindof
from .utils import Unset, coalesce, mirror

MARKER = "-"
TERMINATOR = MARKER * 2


def classify(name, /):
    """
    Return True when the name (or token) carries the option marker.
    """
    return name.startswith(MARKER)


class Slot:
    """
    Typed destination holder for one descriptor.

    The kind is fixed at construction and never changes. The value starts at the
    given default (or the kind's default: False, "", 0, 0.0) and is replaced by
    store() during parsing. When a callback is bound, store() forwards the value
    to it after updating the slot. A default the kind cannot hold (a str for
    SIZE, a bool for INTEGER, a negative SIZE) raises ConfigurationError.
    """

    __introspectable__ = ("kind", "value")

    def __init__(self, type=str, default=Unset, /, *, callback=Unset):
        if callback is not Unset and not callable(callback):
            raise TypeError("slot 'callback' must be callable")
        self._kind = kindof(type)
        self._value = self._kind.default if default is Unset else admit(self._kind, default)
        self._callback = callback

    kind = mirror("kind")
    value = mirror("value")

    @property
    def callback(self):
        return coalesce(self._callback)

    def store(self, value, /):
        self._value = value
        if self._callback is not Unset:
            self._callback(value)

    def __repr__(self):
        return "slot(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


def _fault(message, code, hint, **context):
    return ConfigurationError(
        message,
        title=code.name.lower().replace("_", " "),
        code=code,
        hint=hint,
        docs=getdoc(code),
        **context
    )


def _sanitize_names(names, /):
    """
    Internal: validate the alias collection of a descriptor.

    Returns
    - tuple[tuple[str, ...], bool]: the names (registration order kept) and
      whether the descriptor is positional.

    Raises
    - TypeError: when names is not an iterable of strings.
    - ConfigurationError: empty collection, malformed alias, duplicated alias,
      mixed option/bare names, or more than one positional name.
    """
    if isinstance(names, str):
        raise TypeError("descriptor names must be an iterable of strings, not a string")
    names = tuple(names)
    if not names:
        raise _fault(
            "a parameter must declare at least one name",
            FaultCode.EMPTY_NAMES,
            "pass an option alias (for example: '-c', '--count') or a positional placeholder name",
        )

    for name in names:
        if not isinstance(name, str):
            raise TypeError("descriptor names must be strings")

    positional = not classify(names[0])

    for name in names:
        if classify(name) == positional:
            raise _fault(
                "parameter %r mixes option aliases and positional names" % (names,),
                FaultCode.MIXED_NAMES,
                "declare options and positionals as separate parameters",
                names=names,
            )
        if positional:
            valid = bool(name.strip())
        else:
            valid = bool(re.fullmatch(r"-[^-=\s]|--[^=\s]+", name))
        if not valid:
            raise _fault(
                "malformed parameter name %r" % name,
                FaultCode.MALFORMED_ALIAS,
                "use '-x' for short options, '--name' for long options, or a bare placeholder for positionals",
                name=name,
            )

    if len(set(names)) != len(names):
        raise _fault(
            "parameter %r repeats an alias" % (names,),
            FaultCode.DUPLICATED_ALIAS,
            "keep a single copy of each alias",
            names=names,
        )

    if positional and len(names) > 1:
        raise _fault(
            "positional parameter %r can only have one name" % (names,),
            FaultCode.POSITIONAL_ALIASES,
            "positionals are matched by order; keep a single placeholder name",
            names=names,
        )

    return names, positional


class Descriptor:
    """
    Schema unit for one logical parameter.

    Fields
    - names: aliases in declaration order (read-only tuple).
    - positional: True when the names carry no option marker.
    - required: checked by the post-scan audit.
    - found: set the first time any alias matches during a parse pass.
    - slot: the owned Slot; kind mirrors slot.kind.
    """

    __introspectable__ = ("names", "positional", "required", "found", "slot")

    def __init__(self, names, /, required=False, slot=Unset):
        self._names, self._positional = _sanitize_names(names)
        if slot is Unset:
            slot = Slot()
        elif not isinstance(slot, Slot):
            raise TypeError("descriptor 'slot' must be a Slot")
        self._required = bool(required)
        self._slot = slot
        self.found = False

    names = mirror("names")
    positional = mirror("positional")
    required = mirror("required")
    slot = mirror("slot")

    @property
    def kind(self):
        return self._slot.kind

    @property
    def name(self):
        """The first declared name, used in messages."""
        return self._names[0]

    def assign(self, value, /):
        """Store a converted value into the slot and mark the descriptor found."""
        self._slot.store(value)
        self.found = True

    def __repr__(self):
        return "descriptor(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "MARKER",
    "TERMINATOR",
    "classify",
    "Slot",
    "Descriptor",
)
