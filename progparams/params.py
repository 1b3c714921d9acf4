"""
Progparams dispatcher: declare a schema, then parse a token stream into it.

What this module provides
- Params: owns a Registry and runs the parse loop.
  • add(target, *names, required=False, default=Unset): register a parameter.
    target is a caller-owned Slot (write-through) or a type/Kind, in which case
    a library-owned slot is allocated and returned.
  • param(*names, type=str, ...): decorator variant binding a callback that
    receives every converted value.
  • get(alias, type): read a slot back; the requested type must match the tag.
  • parse(tokens): one fail-fast pass over the tokens, then the required audit.
- invoke(params, tokens): driver helper that renders faults (shell mode) instead
  of raising them.

Token grammar
- "-x", "-xVALUE", "-x VALUE", clustered "-abc"
- "--name", "--name=VALUE", "--name VALUE"
- "--" switches every following token to positional, verbatim
- bare tokens, "" and "-" are positional

Per-token priority
1. "--" while still scanning options → positional-only from here on.
2. positional-only, "", "-", or no leading "-" → next positional descriptor.
3. single "-" → short cluster, character by character; a character whose
   parameter takes a value ends the cluster.
4. "--" prefix → long option, split at the first "=".

Strict mode raises on unknown options and on extra positionals; lenient mode
skips them. Neither mode hides conversion, missing-value or required faults.

Quick start
    from progparams import Params, Kind

    params = Params()
    params.add(bool, "-a")
    params.add(Kind.SIZE, "-c", "--count", default=10)
    params.add(float, "-i", "--interval", default=1.0)
    params.add(str, "destination", required=True)
    params.parse(["-a", "-c", "10", "-i", "2.5", "192.168.0.1"])
    params.get("--count", Kind.SIZE)  # 10
"""
import difflib
import shlex
import sys
from collections.abc import Iterable

from .descriptors import MARKER, TERMINATOR, Slot, classify
from .faults import *
from .kinds import convert, kindof
from .registry import Registry
from .resolver import resolve
from .utils import Unset, coalesce, mirror, rename


def _tokenize(tokens):
    """
    Normalize the parse input into a list of tokens.

    - Unset: sys.argv[1:]
    - str: shell-like string, split with shlex.split
    - Iterable[str]: taken verbatim (empty strings are tokens too)
    """
    if tokens is Unset:
        return sys.argv[1:]
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if isinstance(tokens, Iterable):
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Params:
    """
    Parameter schema plus the parse loop that fills it.

    Configuration (fixed at construction)
    - strict: raise UnknownOptionError / ExhaustedError instead of skipping.
    - shell, fancy, colorful: rendering options used by invoke().
    - usage: optional usage line shown under rendered faults.
    """

    __introspectable__ = ("strict", "shell", "fancy", "colorful", "usage", "registry")

    def __init__(self, strict=True, *, shell=False, fancy=False, colorful=True, usage=Unset):
        if not isinstance(usage, str | Unset):
            raise TypeError("params 'usage' must be a string")
        self._strict = bool(strict)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._usage = coalesce(usage)
        self._registry = Registry()

    strict = mirror("strict")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    usage = mirror("usage")
    registry = mirror("registry")

    def add(self, target, /, *names, required=False, default=Unset):
        """
        Register a parameter and return its slot.

        - target: Slot → caller-owned, written through during parsing.
          Its own default stands; passing 'default' too is a TypeError.
        - target: bool | str | int | float | Kind → a library-owned slot of
          that kind is allocated (starting at 'default' or the kind's default).
        - names: option aliases ("-c", "--count") or one positional placeholder.
        """
        if isinstance(target, Slot):
            if default is not Unset:
                raise TypeError("add() cannot apply a 'default' to a caller-owned slot")
            slot = target
        else:
            slot = Slot(target, default)
        self._registry.register(names, required, slot)
        return slot

    def param(self, *names, type=str, required=False, default=Unset):
        """
        Decorator form of add(): the decorated callable receives every value
        stored into the parameter. Returns the slot.

            @params.param("-c", "--count", type=Kind.SIZE)
            def on_count(count): ...
        """
        @rename("param")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@param() must be applied to a callable")
            return self.add(Slot(type, default, callback=callback), *names, required=required)
        return wrapper

    def get(self, alias, type, /):
        """
        Return the slot value of the parameter named alias.

        Raises NotFoundError for an unknown name and TypeMismatchError when the
        requested type does not carry the same kind tag as the parameter,
        including types no parameter can hold (list, dict, ...).
        """
        descriptor = self._registry.lookup(alias)
        try:
            kind = kindof(type)
        except ConfigurationError:
            raise TypeMismatchError(
                "parameter %r holds a %s, not a %r" % (alias, descriptor.kind.value, type),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint="request it as Kind.%s" % descriptor.kind.name,
                docs=getdoc(FaultCode.TYPE_MISMATCH),
                alias=alias,
                expected=descriptor.kind,
                requested=type,
            ) from None
        if kind is not descriptor.kind:
            raise TypeMismatchError(
                "parameter %r holds a %s, not a %s" % (alias, descriptor.kind.value, kind.value),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint="request it as Kind.%s" % descriptor.kind.name,
                docs=getdoc(FaultCode.TYPE_MISMATCH),
                alias=alias,
                expected=descriptor.kind,
                requested=kind,
            )
        return descriptor.slot.value

    def parse(self, tokens=Unset, /):
        """
        Run one pass over the tokens, then audit required parameters.

        The first fault aborts the pass; slots written before it keep their
        values. Re-parsing with the same Params accumulates state and is not
        supported.
        """
        tokens = _tokenize(tokens)
        index = 0
        positional = False
        while index < len(tokens):
            token = tokens[index]
            if token == TERMINATOR and not positional:
                positional = True
                index += 1
            elif positional or token == MARKER or not classify(token):
                index += self._parse_positional(tokens, index)
            elif not token.startswith(TERMINATOR):
                index += self._parse_cluster(tokens, index)
            else:
                index += self._parse_long(tokens, index)
        self._registry.audit_required()

    def _parse_positional(self, tokens, index):
        try:
            descriptor = self._registry.next_positional()
        except ExhaustedError as fault:
            if not self._strict:
                return 1
            raise ExhaustedError(
                "unexpected positional %r at token %d" % (tokens[index], index + 1),
                **fault.options | {"token": tokens[index], "index": index}
            ) from None
        text, consumed = resolve(descriptor, tokens, index)
        descriptor.assign(convert(descriptor.kind, text, alias=descriptor.name))
        return consumed

    def _parse_cluster(self, tokens, index):
        token = tokens[index]
        for offset in range(1, len(token)):
            alias = MARKER + token[offset]
            if alias not in self._registry:
                if self._strict:
                    raise self._unknown(alias, token, index)
                continue
            # TODO: reject schemas where a value-taking short option can sit inside a cluster
            descriptor = self._registry.lookup(alias)
            text, consumed = resolve(descriptor, tokens, index, offset)
            descriptor.assign(convert(descriptor.kind, text, alias=alias))
            if consumed:
                return consumed
        return 1

    def _parse_long(self, tokens, index):
        token = tokens[index]
        alias = token.partition("=")[0]
        if alias not in self._registry:
            if self._strict:
                raise self._unknown(alias, token, index)
            return 1
        descriptor = self._registry.lookup(alias)
        text, consumed = resolve(descriptor, tokens, index)
        descriptor.assign(convert(descriptor.kind, text, alias=alias))
        return max(consumed, 1)

    def _unknown(self, alias, token, index):
        options = [name for name in self._registry.by_name if classify(name)]
        suggestions = difflib.get_close_matches(alias, options, 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "known options: %s" % (", ".join(map(repr, options)) or "none")
        return UnknownOptionError(
            "unknown option %r in %r at token %d" % (alias, token, index + 1),
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
            alias=alias,
            token=token,
            index=index,
            suggestions=suggestions,
        )

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "params(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def invoke(params, tokens=Unset, /):
    """
    Parse with shell-style fault handling.

    - params.shell False: faults propagate unchanged (same as params.parse).
    - params.shell True: the fault is rendered on stderr through rich, with the
      params' usage line when one was given, and the process exits with status 1.
    """
    if not isinstance(params, Params):
        raise TypeError("invoke() first argument must be a Params instance")
    try:
        params.parse(tokens)
    except ParamsException as fault:
        if not params.shell:
            raise
        trigger(fault, shell=True, fancy=params.fancy, colorful=params.colorful, usage=params.usage)


__all__ = (
    "Params",
    "invoke",
)
