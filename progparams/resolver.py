"""
Value resolution: which text belongs to a matched parameter, and how many
tokens it takes.

Every resolver returns (text, consumed) where consumed counts the matched token
itself. Flags never take a value and report (None, 0); the dispatcher then moves
on by one token. Attachment priority is fixed:

    embedded '=' (long) > embedded suffix (short) > following token

so "-fbar" means "-f bar" only when "-f" takes a value, and four flags only when
"-f" is a flag. The value text itself is never inspected.
"""
from .faults import FaultCode, MissingValueError, getdoc
from .utils import Unset


def _following(descriptor, alias, tokens, index):
    try:
        return tokens[index + 1]
    except IndexError:
        raise MissingValueError(
            "option %r at token %d requires a value" % (alias, index + 1),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value after %s (for example: %s <%s>)" % (alias, alias, descriptor.kind.value),
            docs=getdoc(FaultCode.MISSING_VALUE),
            alias=alias,
            index=index,
            descriptor=descriptor,
        ) from None


def resolve_positional(tokens, index, /):
    return tokens[index], 1


def resolve_long(descriptor, tokens, index, /):
    """
    '--name=value' yields the text after the first '='; '--name value' takes the
    following token.
    """
    if not descriptor.kind.valued:
        return None, 0
    alias, separator, value = tokens[index].partition("=")
    if separator:
        return value, 1
    return _following(descriptor, alias, tokens, index), 2


def resolve_short(descriptor, tokens, index, offset, /):
    """
    Resolve the cluster character at `offset` of tokens[index].

    Whatever follows that character in the token is the value ('-c10');
    otherwise the value is the following token ('-c 10'). No '=' splitting:
    '-c=10' yields '=10'.
    """
    if not descriptor.kind.valued:
        return None, 0
    token = tokens[index]
    if remainder := token[offset + 1:]:
        return remainder, 1
    return _following(descriptor, "-" + token[offset], tokens, index), 2


def resolve(descriptor, tokens, index, /, offset=Unset):
    """
    Route to the resolver matching the descriptor class and token form.

    - positional descriptor → resolve_positional
    - option, offset Unset  → resolve_long
    - option, offset given  → resolve_short
    """
    if descriptor.positional:
        return resolve_positional(tokens, index)
    if offset is Unset:
        return resolve_long(descriptor, tokens, index)
    return resolve_short(descriptor, tokens, index, offset)


__all__ = (
    "resolve",
    "resolve_positional",
    "resolve_long",
    "resolve_short",
)
