"""
Switchyard faults (errors raised while resolving, parsing and dispatching) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a fault (raise it, or render it on a console).

UX goals
- Position-first messages: parse faults include the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The core raises faults; nothing is printed by the parser or the app driver.
- Entry points (see switchyard.apps.invoke) call trigger(fault, shell=True, console=...)
  to render them via rich instead of raising.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - flags (1111x)
      • UNKNOWN_FLAG, MISSING_FLAG_VALUE
    - positionals (1112x)
      • UNEXPECTED_ARGUMENT
    - lookups (1115x)
      • NOT_FOUND
    - dispatch (1116x)
      • NO_HANDLER
    - conversions (1117x)
      • UNCASTABLE_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- flag errors (1111x) ---
    UNKNOWN_FLAG        = 11112
    MISSING_FLAG_VALUE  = 11117

    # --- positional errors (1112x) ---
    UNEXPECTED_ARGUMENT = 11121

    # --- lookup errors (1115x) ---
    NOT_FOUND           = 11151

    # --- dispatch errors (1116x) ---
    NO_HANDLER          = 11161

    # --- conversion errors (1117x) ---
    UNCASTABLE_VALUE    = 11171

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base class of every fault raised by switchyard.

    the message is the one-sentence body; options carry the rendering metadata
    (code, title, hint) and whatever context the raiser had at hand (token,
    index, command, name, ...). options are exposed as a read-only mapping.
    """
    code = Unset
    title = "fault"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*((message,) if message else ()))
        self.message = message
        self.options = MappingProxyType({"code": type(self).code, "title": type(self).title} | options)

    def __str__(self):
        return self.message or ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        command = self.options.get("command")
        prog = text(
            getattr(main, "__prog__", command.root.name if command is not None else "switchyard"),
            styler("prog-name")
        )

        code = self.options["code"]
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        renders = [header, text(self.message, styler("error-message"))]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        self.options["console"].print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownFlagError(CommandException):
    code = FaultCode.UNKNOWN_FLAG
    title = "unknown flag"


class MissingFlagValueError(CommandException):
    code = FaultCode.MISSING_FLAG_VALUE
    title = "missing flag value"


class UnexpectedArgumentError(CommandException):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"


class NotFoundError(CommandException, LookupError):
    code = FaultCode.NOT_FOUND
    title = "not found"


class NoHandlerError(CommandException):
    code = FaultCode.NO_HANDLER
    title = "no handler"


class ConversionError(CommandException, ValueError):
    code = FaultCode.UNCASTABLE_VALUE
    title = "uncastable value"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into a copy of the fault via __replace__(**options) before triggering.
    - with shell=True the fault is printed on options["console"]; otherwise it is raised.

    typical options
    - shell, console, colorful, and any context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    if options.get("shell", False) and "console" not in options:
        raise TypeError("trigger() shell mode requires a console")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "UnknownFlagError",
    "MissingFlagValueError",
    "UnexpectedArgumentError",
    "NotFoundError",
    "NoHandlerError",
    "ConversionError",
    "FaultCode",
    "trigger",
)
