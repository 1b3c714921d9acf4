"""
Value kinds and conversions.

Every descriptor carries an explicit Kind tag next to its slot. The tag decides
how resolved value text is converted, what a fresh slot starts with, and which
type Params.get() accepts back. Conversions delegate to int()/float(); their
ValueError is chained into ConversionError.
"""
from enum import Enum

from .faults import FaultCode, ConfigurationError, ConversionError, getdoc


class Kind(Enum):
    FLAG = "flag"
    STRING = "string"
    INTEGER = "integer"
    SIZE = "size"
    FLOAT = "float"

    @property
    def default(self):
        """Initial value of a library-owned slot of this kind."""
        return _DEFAULTS[self]

    @property
    def valued(self):
        """Whether parameters of this kind take a value (every kind except FLAG)."""
        return self is not Kind.FLAG


_DEFAULTS = {
    Kind.FLAG: False,
    Kind.STRING: "",
    Kind.INTEGER: 0,
    Kind.SIZE: 0,
    Kind.FLOAT: 0.0,
}

# exact types only; issubclass(bool, int) must not leak into the mapping
_TYPES = {
    bool: Kind.FLAG,
    str: Kind.STRING,
    int: Kind.INTEGER,
    float: Kind.FLOAT,
}


def kindof(object, /):
    """
    Map a Python type (bool, str, int, float) or a Kind to its Kind tag.

    Raises ConfigurationError for anything else.
    """
    if isinstance(object, Kind):
        return object
    try:
        return _TYPES[object]
    except (KeyError, TypeError):
        raise ConfigurationError(
            "unsupported parameter type %r" % (object,),
            title="unsupported type",
            code=FaultCode.UNSUPPORTED_TYPE,
            hint="use bool, str, int, float or a Kind member (for example: Kind.SIZE)",
            docs=getdoc(FaultCode.UNSUPPORTED_TYPE),
        ) from None


_ADMITS = {
    Kind.FLAG: lambda value: isinstance(value, bool),
    Kind.STRING: lambda value: isinstance(value, str),
    Kind.INTEGER: lambda value: isinstance(value, int) and not isinstance(value, bool),
    Kind.SIZE: lambda value: isinstance(value, int) and not isinstance(value, bool) and value >= 0,
    Kind.FLOAT: lambda value: isinstance(value, int | float) and not isinstance(value, bool),
}


def admit(kind, value, /):
    """
    Check a ready-made value (a slot default) against a kind and return it.

    FLOAT widens integers to float so the slot never holds an int. Anything the
    kind cannot hold raises ConfigurationError.
    """
    if not _ADMITS[kind](value):
        raise ConfigurationError(
            "default %r cannot be held by a %s parameter" % (value, kind.value),
            title="invalid default",
            code=FaultCode.INVALID_DEFAULT,
            hint="use a %s default (for example: %r)" % (kind.value, kind.default),
            docs=getdoc(FaultCode.INVALID_DEFAULT),
            kind=kind,
            value=value,
        )
    return float(value) if kind is Kind.FLOAT else value


def _integer(text):
    return int(text)


def _size(text):
    value = int(text)
    if value < 0:
        raise ValueError("invalid literal for an unsigned integer: %r" % text)
    return value


_CONVERTERS = {
    Kind.FLAG: lambda text: True,
    Kind.STRING: str,
    Kind.INTEGER: _integer,
    Kind.SIZE: _size,
    Kind.FLOAT: float,
}


def convert(kind, text, /, *, alias=None):
    """
    Convert resolved value text into a value of the given kind.

    - FLAG ignores the text (presence only) and yields True.
    - STRING yields the text verbatim.
    - INTEGER/SIZE/FLOAT parse the text; SIZE rejects negative numbers.

    Raises ConversionError chained to the underlying ValueError.
    """
    try:
        return _CONVERTERS[kind](text)
    except ValueError as exception:
        subject = "%r" % alias if alias else "positional"
        raise ConversionError(
            "value %r of %s is not a valid %s" % (text, subject, kind.value),
            title="invalid value",
            code=FaultCode.CONVERSION_FAILED,
            hint="pass a %s literal (for example: %s)" % (kind.value, _EXAMPLES[kind]),
            docs=getdoc(FaultCode.CONVERSION_FAILED),
            alias=alias,
            kind=kind,
            value=text,
        ) from exception


_EXAMPLES = {
    Kind.INTEGER: "-3",
    Kind.SIZE: "10",
    Kind.FLOAT: "2.5",
}


__all__ = (
    "Kind",
    "kindof",
    "admit",
    "convert",
)
