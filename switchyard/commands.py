"""
Switchyard command layer: declare, compose, and resolve command trees.

What this module provides
- Command: a named node of a command tree with:
  • ordered Flag and Argument declarations (validated eagerly),
  • a single name → flag table covering every name and alias,
  • child commands attached through add(), each holding a non-owning
    back-reference to its parent,
  • an optional handler called with a Context once tokens are bound.

- Factories and helpers:
  • command(...): create a Command from a handler function, or a decorator that does.
  • resolve(root, tokens): walk child names to find the target command.

Core ideas
- Declarations are frozen once built: collections are exposed as read-only
  views and there is no API to change flags, arguments or the handler.
- Resolution is exact-string and child names are unique per level, so a token
  path maps to at most one command.
- A command without a handler is a grouping node; dispatching to it fails
  with NoHandlerError (see switchyard.apps).

Quick start
    from switchyard import Command, Flag, Argument, command

    root = Command("tool", "a small tool")

    @root.command(flags=[Flag("loud", "l", boolean=True)], arguments=[Argument("name")])
    def greet(ctx):
        '''say hello'''
        print("hello,", ctx.argument("name"), file=ctx.stdout)

    root.resolve(["greet", "-l", "you"])  # (greet, ("-l", "you"))

See also
- switchyard.parsing for binding the remaining tokens.
- switchyard.apps for the run loop.
"""
import functools
import inspect
import logging
import operator
import re
import weakref

from .arguments import Argument, Flag
from .helps import helper
from .utils import *

logger = logging.getLogger(__name__)

_NAME = re.compile(r"[^\s-]\S*")


class CommandType(type):
    """
    Metaclass that gives Command classes read-only introspection.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      for consistent, human-friendly labels in messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='build', descr=None, children=('run',))
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers; children are shown by name
            to keep the output flat.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                object = getattr(self, name)
                yield name, tuple(object) if name == "children" else object
        self.__rich_repr__ = __rich_repr__

        return self


def _process_flags(cls, name, flags):
    """
    Validate flags and build the name/alias → flag table.

    Errors
    - TypeError when an item is not a Flag.
    - ValueError when a name or alias is used by more than one flag.
    """
    flags = list(flags)
    lookup = {}
    for flag in flags:
        if not isinstance(flag, Flag):
            raise TypeError(f"{cls.__typename__} {name!r} flags must be flags, got {flag!r}")
        for alias in flag.names:
            if lookup.setdefault(alias, flag) is not flag:
                raise ValueError(f"{cls.__typename__} {name!r} flag name {alias!r} is already in use")
    return flags, lookup


def _process_arguments(cls, name, arguments):
    """
    Validate positional arguments: unique names, and a multiple argument only in last place.

    Errors
    - TypeError when an item is not an Argument, or a multiple argument is not the last one.
    - ValueError when a name is used twice.
    """
    arguments = list(arguments)
    seen = set()
    for index, argument in enumerate(arguments):
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} {name!r} arguments must be arguments, got {argument!r}")
        if argument.name in seen:
            raise ValueError(f"{cls.__typename__} {name!r} argument name {argument.name!r} is already in use")
        seen.add(argument.name)
        if argument.multiple and index != len(arguments) - 1:
            raise TypeError(
                f"{cls.__typename__} {name!r} multiple argument {argument.name!r} must be the last argument"
            )
    return arguments


class Command(metaclass=CommandType):
    """
    A node of the command tree.

    Responsibilities
    - Declaration: name, description, ordered flags and arguments, optional handler.
    - Composition: parent/child hierarchy built with add(); the parent owns its
      children while each child keeps a weak reference back to its parent.
    - Resolution: resolve(tokens) walks children by exact name.

    Lifecycle
    - Constructed top-down; flags/arguments are validated and the alias table
      is built immediately, so declaration mistakes surface at import time.
    - Frozen in practice once parsing begins: only add() mutates a command.
    """

    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "arguments",
        "children",
    )

    __displayable__ = (
        "name",
        "descr",
        "children",
    )

    def __new__(cls, name, /, descr=Unset, flags=(), arguments=(), handler=Unset, *, children=()):
        """
        Construct a Command.

        Parameters
        - name: str
          Token that selects this command under its parent (non-empty, no
          whitespace, no leading dash).
        - descr: Unset | str
          Short description for help; Unset becomes None.
        - flags: Iterable[Flag]
          Declared flags; names and aliases must be unique across all of them.
        - arguments: Iterable[Argument]
          Declared positionals, in binding order; only the last may be multiple.
        - handler: Unset | None | Callable[[Context], Any]
          Called once per dispatch; absent for grouping commands.
        - children: Iterable[Command] (keyword-only)
          Commands attached with add() right after construction.

        Raises
        - TypeError/ValueError on invalid metadata or declaration conflicts.
        """
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        if not _NAME.fullmatch(name):
            raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word without leading dash, got {name!r}")

        if not isinstance(descr, str | Unset | None):
            raise TypeError(f"{cls.__typename__} {name!r} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} 'descr' cannot be empty")

        if not callable(handler) and handler not in (Unset, None):
            raise TypeError(f"{cls.__typename__} {name!r} 'handler' must be callable")

        self = super().__new__(cls)
        self._name = name
        self._descr = coalesce(descr)
        self._flags, self._lookup = _process_flags(cls, name, flags)
        self._arguments = _process_arguments(cls, name, arguments)
        self._handler = coalesce(handler)
        self._parent = None
        self._children = {}

        for child in children:
            self.add(child)
        return self

    @property
    def handler(self):
        """
        The callable invoked on dispatch, or None for grouping commands.
        """
        return self._handler

    @property
    def parent(self):
        """
        The command this one was added to, or None for a root (or when the
        parent no longer exists).
        """
        return self._parent() if self._parent is not None else None

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def route(self):
        """
        Space-joined names from the root to this command (e.g. 'tool remote add').
        """
        return " ".join(step.name for step in self.path)

    def lookup(self, name, /):
        """
        Return the flag declared under a name or alias (without dashes).

        Raises
        - KeyError when no flag of this command answers to that name.
        """
        return self._lookup[name]

    def add(self, child, /):
        """
        Attach a child command and set its parent back-reference.

        Returns
        - the child, so calls can be chained.

        Raises
        - TypeError: child is not a Command.
        - ValueError: child already has a parent, a sibling has the same name,
          or attaching it would create a cycle.
        """
        if not isinstance(child, Command):
            raise TypeError(f"{type(self).__typename__} child must be a command")
        if child.parent is not None:
            raise ValueError(
                f"{type(self).__typename__} {child.name!r} is already attached to {child.parent.route!r}"
            )
        if any(step is child for step in self.path):
            raise ValueError(f"{type(self).__typename__} {child.name!r} cannot be attached to itself or its descendants")
        if self._children.setdefault(child.name, child) is not child:
            typeof = "subcommand" if self.parent else "command"
            raise ValueError(f"{type(self).__typename__} {typeof} name {child.name!r} is already in use")
        child._parent = weakref.ref(self)
        return child

    def command(self, source=Unset, /, **kwargs):
        """
        Create a child command from a handler and attach it here.

        Same invocation modes as the module-level command(...):
        - self.command(handler, **metadata) -> Command
        - @self.command(**metadata) -> decorator
        """
        create = command(**kwargs)

        @rename("command")
        def wrapper(source, /):
            return self.add(create(source))

        return wrapper(source) if source is not Unset else wrapper

    def resolve(self, tokens, /):
        """
        Shortcut for resolve(self, tokens).
        """
        return resolve(self, tokens)

    def help(self, name="help", /):
        """
        Build a help command for this command.

        The result is a regular Command (not attached yet); add it as a child
        to make `<route> help [child ...]` print this command's help.

            tool.add(tool.help())
        """
        return Command(
            name,
            "show help for this command or one of its subcommands",
            arguments=[Argument("command", multiple=True, descr="subcommand path to describe")],
            handler=helper,
        )


def resolve(root, tokens, /):
    """
    Walk the command tree from root by leading tokens.

    Each leading token that equals the name of a child of the current command
    is consumed and the walk descends into that child; the walk stops at the
    first token that names no child (or when tokens run out).

    Returns
    - tuple(target, remaining): the deepest command reached and a tuple of the
      tokens that were not consumed as command names.
    """
    if not isinstance(root, Command):
        raise TypeError("resolve() first argument must be a command")
    tokens = tuple(tokens)

    current, index = root, 0
    while index < len(tokens):
        try:
            current = current._children[tokens[index]]
        except KeyError:
            break
        index += 1

    logger.debug("resolved %r to %r with %d remaining token(s)", tokens, current.route, len(tokens) - index)
    return current, tokens[index:]


def command(source=Unset, /, **kwargs):
    """
    Create a Command from a handler function, or return a decorator that does.

    Invocation modes
    - Direct:     cmd = command(handler, name="x", flags=[...])
    - Decorator:  @command(flags=[...])
                  def x(ctx): ...

    Defaults
    - name: the function's __name__ (underscores become dashes).
    - descr: the function's docstring, when it has one.

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source) or isinstance(source, Command):
            raise TypeError("@command() must be applied to a callable")
        options = dict(kwargs)
        name = options.pop("name", Unset)
        if name is Unset:
            name = getattr(source, "__name__", Unset)
            if not isinstance(name, str):
                raise TypeError("command() requires a name for callables without __name__")
            name = name.strip("_").replace("_", "-")
        options.setdefault("descr", inspect.getdoc(source) or Unset)
        return Command(name, handler=source, **options)

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
    "resolve",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del CommandType
