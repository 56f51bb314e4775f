"""
Switchyard token parser: bind the tokens left after resolution to a command's flags and arguments.

Token grammar
- `--<name>`: long flag; <name> is looked up among every name and alias of the command.
- `-<x>`: short flag; exactly one character after a single dash.
- anything else (including `-`, `--`, `-abc`, `--name=value` is a flag named
  'name=value') is positional.

Binding rules
- boolean flag   → binds "true", consumes only itself.
- other flag     → consumes the following token as its value, whatever it looks like.
- repeated flag  → the last occurrence wins.
- positional     → fills the next declared argument; a multiple argument absorbs
                   this and every later positional token, while flags keep being
                   recognised between them.

Faults (raised, parsing stops at the first one)
- UnknownFlagError, MissingFlagValueError, UnexpectedArgumentError.

Absent flags and unfilled arguments are simply not bound; the Context decides
what a missing lookup means.
"""
import difflib
import logging
from types import MappingProxyType

from .faults import MissingFlagValueError, UnexpectedArgumentError, UnknownFlagError
from .utils import ordinal

logger = logging.getLogger(__name__)


class Bindings:
    """
    Read-only result of one parse: flag values by canonical flag name and
    argument values by argument name (a tuple for multiple arguments).

    Two bindings are equal when they hold the same values.
    """
    __slots__ = ("_flags", "_arguments")

    def __init__(self, flags=(), arguments=()):
        self._flags = dict(flags)
        self._arguments = dict(arguments)

    @property
    def flags(self):
        return MappingProxyType(self._flags)

    @property
    def arguments(self):
        return MappingProxyType(self._arguments)

    def __eq__(self, other):
        if not isinstance(other, Bindings):
            return NotImplemented
        return self._flags == other._flags and self._arguments == other._arguments

    def __hash__(self):
        return hash((frozenset(self._flags.items()), frozenset(self._arguments.items())))

    def __repr__(self):
        return "bindings(flags=%r, arguments=%r)" % (self._flags, self._arguments)

    def __rich_repr__(self):
        yield "flags", self._flags
        yield "arguments", self._arguments


def _flagname(token):
    """
    Return the flag name spelled by a token, or None when the token is positional.
    """
    if token.startswith("--"):
        return token[2:] or None
    if token.startswith("-") and len(token) == 2:
        return token[1]
    return None


def _unknown(command, token, name, position):
    """
    Build the fault for a flag token that names nothing on the command.
    """
    suggestions = difflib.get_close_matches(name, command._lookup.keys(), 5)
    try:
        suggestion = suggestions[0]
        hint = "did you mean %r? check the flags accepted by '%s'" % (
            ("-" if len(suggestion) == 1 else "--") + suggestion,
            command.route,
        )
    except IndexError:
        hint = "check the flags accepted by '%s'" % command.route
    return UnknownFlagError(
        "unknown flag %r at %s position" % (token, ordinal(position)),
        command=command,
        token=token,
        name=name,
        index=position,
        suggestions=suggestions,
        hint=hint,
    )


def parse(command, tokens, /, *, offset=0):
    """
    Bind tokens to the flags and arguments declared on command.

    Parameters
    - command: Command
      the resolved target command.
    - tokens: Iterable[str]
      the tokens left after resolution.
    - offset: int (keyword-only)
      number of tokens consumed before these ones (command names); only used to
      report 1-based positions relative to the whole invocation.

    Returns
    - Bindings

    Raises
    - UnknownFlagError: a flag token names no flag or alias of command.
    - MissingFlagValueError: a non-boolean flag is the last token.
    - UnexpectedArgumentError: a positional token finds no argument left to fill.
    """
    tokens = tuple(tokens)
    flags = {}
    arguments = {}

    pending = iter(command.arguments)
    collector = None
    index = 0

    while index < len(tokens):
        token = tokens[index]
        position = offset + index + 1

        if (name := _flagname(token)) is not None:
            try:
                flag = command.lookup(name)
            except KeyError:
                raise _unknown(command, token, name, position) from None

            if flag.boolean:
                flags[flag.name] = "true"
                index += 1
            elif index + 1 < len(tokens):
                flags[flag.name] = tokens[index + 1]
                index += 2
            else:
                raise MissingFlagValueError(
                    "flag %r at %s position expects a value" % (token, ordinal(position)),
                    command=command,
                    token=token,
                    name=flag.name,
                    index=position,
                    hint="pass the value after a space (for example: %s <value>)" % token,
                )
            logger.debug("bound flag %r to %r", flag.name, flags[flag.name])
            continue

        if collector is not None:
            collector.append(token)
        elif (argument := next(pending, None)) is None:
            raise UnexpectedArgumentError(
                "unexpected argument %r at %s position" % (token, ordinal(position)),
                command=command,
                token=token,
                index=position,
                hint="remove this extra value; '%s' takes %s" % (
                    command.route,
                    "no arguments" if not command.arguments else
                    "at most %d argument(s)" % len(command.arguments),
                ),
            )
        elif argument.multiple:
            collector = arguments[argument.name] = [token]
        else:
            arguments[argument.name] = token
        index += 1

    for name, value in arguments.items():
        if isinstance(value, list):
            arguments[name] = tuple(value)

    logger.debug("parsed %d token(s) for %r: flags=%r arguments=%r", len(tokens), command.route, flags, arguments)
    return Bindings(flags, arguments)


__all__ = (
    "Bindings",
    "parse",
)
