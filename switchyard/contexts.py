"""
Switchyard execution context: the read-only view handed to a command handler.

A Context pairs the Bindings of one invocation with the streams of the App
that dispatched it. Lookups raise NotFoundError for anything that was not
bound, whether the name was declared and left absent or never declared at
all; pass a default to turn the absence into a value instead:

    def build(ctx):
        target = ctx.argument("target")                  # NotFoundError if missing
        verbose = ctx.flag("verbose", "false") == "true"  # boolean flags default to absent
        print("building", target, file=ctx.stdout)
"""
from rich.console import Console

from .faults import NotFoundError
from .utils import *


class Context:
    """
    Per-invocation view over bindings and I/O streams.

    Streams are borrowed from the App (never opened or closed here). The
    context keeps no mutable parsing state; it can be discarded once the
    handler returns.
    """
    __slots__ = ("_command", "_bindings", "_streams", "_console")

    def __init__(self, command, bindings, streams, /):
        self._command = command
        self._bindings = bindings
        self._streams = streams
        self._console = None

    @property
    def command(self):
        """
        The resolved command being dispatched.
        """
        return self._command

    @property
    def bindings(self):
        return self._bindings

    @property
    def stdin(self):
        return self._streams.stdin

    @property
    def stdout(self):
        return self._streams.stdout

    @property
    def stderr(self):
        return self._streams.stderr

    @property
    def console(self):
        """
        A rich Console writing to stdout, created on first use.
        """
        if self._console is None:
            self._console = Console(file=self.stdout, highlight=False)
        return self._console

    def flag(self, name, default=Unset, /):
        """
        Return the value bound to a flag.

        The flag may be named by its canonical name or any of its aliases.
        Boolean flags are bound to "true" when present and are otherwise absent.

        Raises
        - NotFoundError when the flag was not bound (or is not declared) and no
          default was given.
        """
        try:
            key = self._command.lookup(name).name
        except KeyError:
            key = name
        try:
            return self._bindings.flags[key]
        except KeyError:
            if default is not Unset:
                return default
        raise NotFoundError(
            "flag %r was not found" % name,
            command=self._command,
            name=name,
            hint="check the flag spelling, or give it on the command line",
        )

    def argument(self, name, default=Unset, /):
        """
        Return the value bound to an argument: a string, or a tuple of strings
        for a multiple argument.

        Raises
        - NotFoundError when the argument was not bound (or is not declared) and
          no default was given.
        """
        try:
            return self._bindings.arguments[name]
        except KeyError:
            if default is not Unset:
                return default
        raise NotFoundError(
            "argument %r was not found" % name,
            command=self._command,
            name=name,
            hint="check the argument name, or give a value for it on the command line",
        )

    def __repr__(self):
        return "context(command=%r, bindings=%r)" % (self._command.route, self._bindings)


__all__ = (
    "Context",
)
