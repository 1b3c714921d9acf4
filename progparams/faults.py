"""
Progparams faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the library
  can raise. Codes are grouped by domain to keep copy consistent and make
  logs/searches predictable.
- ParamsException: base type that carries a message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- ConfigurationError: invalid schema registration or lookup misuse.
  • ExhaustedError: more positional tokens than declared positionals.
- UnknownOptionError: strict-mode unmatched option token or cluster character.
- MissingValueError: value-taking option with no value available.
- ConversionError: value text invalid for the declared kind.
- MissingRequiredError: post-scan audit failure.
- NotFoundError / TypeMismatchError: failures of Params.get().

Integration
- The parser raises faults synchronously (fail-fast); it never prints.
- Drivers call trigger(fault, shell=True, ...) to render through rich and exit.
"""
import os.path
import re
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - schema (211xx)
      • EMPTY_NAMES, MIXED_NAMES, MALFORMED_ALIAS, DUPLICATED_ALIAS,
        POSITIONAL_ALIASES, UNSUPPORTED_TYPE, INVALID_DEFAULT, SHARED_SLOT
    - tokens (212xx)
      • UNEXPECTED_POSITIONAL, UNKNOWN_OPTION
    - values (213xx)
      • MISSING_VALUE, CONVERSION_FAILED
    - audit (214xx)
      • MISSING_REQUIRED
    - access (215xx)
      • PARAMETER_NOT_FOUND, TYPE_MISMATCH

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- schema errors ---
    EMPTY_NAMES                 = 21101
    MIXED_NAMES                 = 21102
    MALFORMED_ALIAS             = 21103
    DUPLICATED_ALIAS            = 21104
    POSITIONAL_ALIASES          = 21105
    UNSUPPORTED_TYPE            = 21106
    INVALID_DEFAULT             = 21107
    SHARED_SLOT                 = 21108

    # --- token errors ---
    UNEXPECTED_POSITIONAL       = 21201
    UNKNOWN_OPTION              = 21202

    # --- value errors ---
    MISSING_VALUE               = 21301
    CONVERSION_FAILED           = 21302

    # --- audit errors ---
    MISSING_REQUIRED            = 21401

    # --- access errors ---
    PARAMETER_NOT_FOUND         = 21501
    TYPE_MISMATCH               = 21502

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog():
    main = __import__("__main__")
    try:
        return main.__prog__
    except AttributeError:
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "progparams"


class ParamsException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text

            # footer
            "usage-label": "bold #6B6F7A",  # muted label
            "usage": "#E6E6F0",  # near-white usage line
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), styles[style] if colorful else "")

        title = self.options.get("title") or re.sub(r"(?<!^)(?=[A-Z])", " ", type(self).__name__).lower()
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            text(_prog(), "prog-name"),
            " — ",
            text(code, "code"),
            " | ",
            text(title.title(), "error-title"),
            " ]"
        )
        renders = [text(coalesce(self.message, ""), "error-message")]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))
        if usage := self.options.get("usage"):
            renders.append(Text.assemble(text("usage: ", "usage-label"), text(usage, "usage")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConfigurationError(ParamsException): ...
class ExhaustedError(ConfigurationError): ...
class UnknownOptionError(ParamsException): ...
class MissingValueError(ParamsException): ...
class ConversionError(ParamsException): ...
class MissingRequiredError(ParamsException): ...
class NotFoundError(ParamsException): ...
class TypeMismatchError(ParamsException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParamsException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits
      with status 1; otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to show (e.g., token/index/alias).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParamsException",
    "ConfigurationError",
    "ExhaustedError",
    "UnknownOptionError",
    "MissingValueError",
    "ConversionError",
    "MissingRequiredError",
    "NotFoundError",
    "TypeMismatchError",
    "FaultCode",
    "trigger",
    "getdoc",
)
