"""
Conversion helpers over bound values.

Bindings only hold strings; handlers convert them where they use them:

    count = convert.integer(ctx.flag("count", "1"))
    sizes = convert.integer(ctx.argument("sizes"))     # tuple in, tuple out
    force = convert.boolean(ctx.flag("force", "false"))

Every helper raises ConversionError (a ValueError) naming the offending value.
integer(), number() and boolean() map over tuples, so values of multiple
arguments convert in one call.
"""
import functools

from .faults import ConversionError

_TRUTHS = {"true": True, "1": True, "yes": True, "on": True,
           "false": False, "0": False, "no": False, "off": False}


def _elementwise(kind):
    """
    Let a single-value converter accept a tuple and convert each item.
    """
    def decorator(function):
        @functools.wraps(function)
        def wrapper(value, /):
            if isinstance(value, tuple):
                return tuple(map(wrapper, value))
            if not isinstance(value, str):
                raise TypeError(f"{function.__name__}() argument must be a string or a tuple of strings")
            try:
                return function(value)
            except ValueError:
                raise ConversionError(
                    "cannot read %r as %s" % (value, kind),
                    value=value,
                    hint="pass %s instead" % kind,
                ) from None
        return wrapper
    return decorator


@_elementwise("an integer")
def integer(value, /):
    return int(value.strip())


@_elementwise("a number")
def number(value, /):
    return float(value.strip())


@_elementwise("a boolean (true/false, yes/no, on/off, 1/0)")
def boolean(value, /):
    try:
        return _TRUTHS[value.strip().lower()]
    except KeyError:
        raise ValueError(value) from None


def listing(value, separator=",", /):
    """
    Split a value into a tuple of stripped, non-empty items.

    listing("a, b,,c") -> ("a", "b", "c")
    """
    if not isinstance(value, str):
        raise TypeError("listing() argument must be a string")
    if not separator:
        raise ValueError("listing() separator cannot be empty")
    return tuple(item for item in map(str.strip, value.split(separator)) if item)


__all__ = (
    "integer",
    "number",
    "boolean",
    "listing",
)
