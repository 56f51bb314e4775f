"""
Switchyard app driver: resolve, parse and dispatch one invocation.

What this module provides
- App: owns the root command and the three streams every Context borrows.
  App.run(tokens) walks IDLE → RESOLVING → PARSING → DISPATCHING and ends in
  SUCCEEDED or FAILED (see State); faults and handler errors propagate to the
  caller unchanged, and the handler's return value is returned.
- Streams: the (stdin, stdout, stderr) configuration passed to contexts.
- invoke(obj, prompt): entry-point helper that runs an App (or a bare Command),
  renders faults with rich on stderr and returns a process exit status.

Typical entry point
    app = App(root)

    if __name__ == "__main__":
        sys.exit(invoke(app))
"""
import logging
import shlex
import sys
from collections import namedtuple
from collections.abc import Iterable
from enum import Enum

from rich.console import Console

from .commands import Command, resolve
from .contexts import Context
from .faults import CommandException, NoHandlerError, trigger
from .parsing import parse
from .utils import *

logger = logging.getLogger(__name__)

Streams = namedtuple("Streams", ("stdin", "stdout", "stderr"))


class State(Enum):
    """
    Driver states; App.state holds the last one reached by App.run.
    """
    IDLE = "idle"
    RESOLVING = "resolving"
    PARSING = "parsing"
    DISPATCHING = "dispatching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _tokenize(prompt):
    """
    Normalize a prompt into a tuple of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string, split via shlex.split.
    - Iterable[str]: pre-tokenized sequence, kept verbatim.

    Raises
    - TypeError: when prompt is none of the above, or an item is not a string.
    """
    if prompt is Unset:
        return tuple(sys.argv[1:])
    if isinstance(prompt, str):
        return tuple(shlex.split(prompt))
    if isinstance(prompt, Iterable):
        tokens = tuple(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("run() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("run() argument must be a string or an iterable of strings")


class App:
    """
    Process-wide configuration and driver for a command tree.

    Parameters
    - root: Command
      The command selected by an empty invocation.
    - stdin, stdout, stderr: file-like | Unset (keyword-only)
      Streams handed to every Context; Unset picks the process streams as they
      are when the App is built.
    - colorful: bool (keyword-only)
      Style faults rendered by invoke().
    """

    def __init__(self, root, /, *, stdin=Unset, stdout=Unset, stderr=Unset, colorful=False):
        if not isinstance(root, Command):
            raise TypeError("app 'root' must be a command")
        self._root = root
        self._streams = Streams(
            coalesce(stdin, sys.stdin),
            coalesce(stdout, sys.stdout),
            coalesce(stderr, sys.stderr),
        )
        self._colorful = bool(colorful)
        self._state = State.IDLE

    @property
    def root(self):
        return self._root

    @property
    def streams(self):
        return self._streams

    @property
    def colorful(self):
        return self._colorful

    @property
    def state(self):
        """
        The last state reached by run() (IDLE before the first run).
        """
        return self._state

    def run(self, tokens=Unset, /):
        """
        Resolve, parse and dispatch one invocation.

        Parameters
        - tokens: Unset | str | Iterable[str]
          Unset reads sys.argv[1:]; a string is split shell-style.

        Returns
        - whatever the handler returns.

        Raises
        - UnknownFlagError / MissingFlagValueError / UnexpectedArgumentError on
          parse faults (no handler is called).
        - NoHandlerError when the resolved command has no handler.
        - anything the handler raises, unchanged.
        """
        self._state = State.IDLE
        tokens = _tokenize(tokens)
        try:
            self._state = State.RESOLVING
            target, remaining = resolve(self._root, tokens)

            self._state = State.PARSING
            bindings = parse(target, remaining, offset=len(tokens) - len(remaining))

            self._state = State.DISPATCHING
            if target.handler is None:
                if target.children:
                    hint = "run '%s <command>' with one of: %s" % (target.route, ", ".join(target.children))
                else:
                    hint = "give '%s' a handler" % target.route
                raise NoHandlerError(
                    "command %r has nothing to run" % target.route,
                    command=target,
                    hint=hint,
                )

            logger.debug("dispatching %r with %r", target.route, bindings)
            result = target.handler(Context(target, bindings, self._streams))
        except BaseException:
            self._state = State.FAILED
            raise
        self._state = State.SUCCEEDED
        return result


def invoke(object, prompt=Unset, /):
    """
    Run an App (or a bare Command wrapped in a default App) from an entry point.

    Behavior
    - On success returns 0.
    - On a CommandException (parse, lookup, dispatch or conversion fault) renders
      the fault on the app's stderr with rich and returns 1.
    - Any other exception raised by a handler propagates.

    Raises
    - TypeError when object is neither an App nor a Command.
    """
    if isinstance(object, Command):
        object = App(object)
    if not isinstance(object, App):
        raise TypeError("invoke() first argument must be an app or a command")

    try:
        object.run(prompt)
    except CommandException as fault:
        trigger(
            fault,
            shell=True,
            colorful=object.colorful,
            console=Console(file=object.streams.stderr, highlight=False),
        )
        return 1
    return 0


__all__ = (
    "App",
    "Streams",
    "State",
    "invoke",
)
