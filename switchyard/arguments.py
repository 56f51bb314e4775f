r"""
Switchyard argument declarations.

Overview
- Specs
  • Flag: named option bound by a `--name` or `-x` token, with optional aliases.
    A boolean flag is presence-only; any other flag consumes the following token.
  • Argument: positional, value-bearing declaration. The last argument of a
    command may be `multiple` and then absorbs every remaining positional token.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes selected
    fields via read-only properties declared in __introspectable__/__displayable__.

Metadata (sanitized on construction)
- Shared
  • name: non-empty string matching r"[^\W_][\w-]*" (no leading dashes).
  • descr: Unset | str | Text (short help), non-empty when provided.
  • hidden: bool (suppresses from help).
- Flag only
  • aliases: strings following the same rule as name; unique within the flag.
  • boolean: bool.
- Argument only
  • multiple: bool.

Specs are immutable once built: fields live in private slots and are only
reachable through the mirrored read-only properties.

Quick example:
    >>> from switchyard.arguments import Flag, Argument
    >>> Flag("verbose", "v", boolean=True, descr="say more")
    flag(name='verbose', aliases=('v',), boolean=True, descr='say more')
    >>> Argument("files", multiple=True)
    argument(name='files', multiple=True, descr=None)

Public API
- Classes: Flag, Argument
"""
import functools
import operator
import re

from rich.text import Text

from .utils import *

_NAME = re.compile(r"[^\W_][\w-]*")


class ArgumentType(type):
    """
    Metaclass that turns specs into immutable, introspectable declarations.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and help output.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
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
            - flag(name='verbose', aliases=('v',), boolean=True, descr=None)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, field="name", /):
    """
    Internal: validate a flag/argument name or alias and return it.

    Raises
    - TypeError: when the name is not a string.
    - ValueError: when empty, dashed, or containing characters outside r"[\w-]".
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    if not name:
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    if name.startswith("-"):
        raise ValueError(f"{cls.__typename__} {field!r} must be given without leading dashes, got {name!r}")
    if not _NAME.fullmatch(name):
        raise ValueError(f"{cls.__typename__} {field!r} is not a valid name: {name!r}")
    return name


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared metadata (name, descr, hidden).

    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string (or rich Text) after trimming.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    metadata["name"] = _sanitize_name(cls, metadata["name"])

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)
    metadata["hidden"] = bool(metadata["hidden"])


class Flag(metaclass=ArgumentType):
    """
    Named option declaration.

    A Flag is bound on the command line by `--<name>` or `--<alias>`; any
    one-character name or alias can also be spelled `-<x>`. A boolean flag binds
    the literal string "true" on presence and consumes nothing else; any other
    flag consumes the following token, whatever it looks like, as its value.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - names: (name, *aliases), canonical name first.
    """

    __slots__ = ("_name", "_aliases", "_boolean", "_descr", "_hidden")

    __introspectable__ = (
        "name",
        "aliases",
        "boolean",
        "descr",
        "hidden",
    )

    __displayable__ = (
        "name",
        "aliases",
        "boolean",
        "descr",
    )

    def __new__(cls, name, /, *aliases, boolean=False, descr=Unset, hidden=False):
        """
        Construct a Flag spec with the provided metadata.

        Parameters
        - name: str
          Canonical name, used as the binding key (e.g. "verbose").
        - aliases: zero or more str
          Alternate names (e.g. "v"). One-character names are usable as `-v`.
        - boolean: bool
          Presence-only flag; binds "true" and consumes no value token.
        - descr: Unset | str
          Short description for help. If Unset, becomes None.
        - hidden: bool
          Suppress from help output.

        Raises
        - TypeError / ValueError on invalid names or descriptions, and
          ValueError when an alias repeats the name or another alias.
        """
        metadata = {
            "name": name,
            "aliases": aliases,
            "boolean": bool(boolean),
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)

        seen = {metadata["name"]}
        for alias in aliases:
            if _sanitize_name(cls, alias, "alias") in seen:
                raise ValueError(f"{cls.__typename__} name {alias!r} is duplicated")
            seen.add(alias)

        self = super().__new__(cls)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    @property
    def names(self):
        """
        All accepted spellings (without dashes), canonical name first.
        """
        return (self.name, *self.aliases)


class Argument(metaclass=ArgumentType):
    """
    Positional, value-bearing declaration.

    Arguments are filled in declaration order, one token each. A `multiple`
    argument instead absorbs every remaining positional token into a tuple;
    only the last argument of a command may be `multiple` (checked by Command).
    """

    __slots__ = ("_name", "_multiple", "_descr", "_hidden")

    __introspectable__ = (
        "name",
        "multiple",
        "descr",
        "hidden",
    )

    __displayable__ = (
        "name",
        "multiple",
        "descr",
    )

    def __new__(cls, name, /, *, multiple=False, descr=Unset, hidden=False):
        """
        Construct an Argument spec with the provided metadata.

        Parameters
        - name: str
          Binding key for the value(s).
        - multiple: bool
          Collect all remaining positional tokens.
        - descr: Unset | str
          Short description for help. If Unset, becomes None.
        - hidden: bool
          Suppress from help output.
        """
        metadata = {
            "name": name,
            "multiple": bool(multiple),
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")


__all__ = (
    "Flag",
    "Argument",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
