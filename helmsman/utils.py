"""
Helmsman utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the schema, parsing and rendering layers.
- Public-but-internal leaning: stable enough for consumers, written primarily
  for the arguments/commands/commander modules.

Overview
- UnsetType / Unset
  • Singleton sentinel for “value not provided”, distinct from None.
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default while preserving None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr);
    container values are handed out as fresh copies.

- pluralize(word, count)
  • Tiny English pluralizer for counted nouns in fault messages.

- pad(text, width)
  • Left-justify text into a fixed column, truncating with "..." when it does not fit.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> pad("inventory", 12)
    'inventory   '
    >>> pad("a-very-long-command-name", 12)
    'a-very-lo...'
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


COMMAND_PADDING = 20


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values such as None, 0, "" or [] are preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values so callers never alias internal state.

    Behavior
    - tuple: a new tuple with each element processed (tuples stay tuples).
    - other Sequence (non-string): a new list.
    - Mapping: a new dict with processed values, keys preserved.
    - Set: a new set.
    - Anything else: returned as-is.
    """
    if isinstance(object, tuple):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Sequence) and not isinstance(object, str | bytes):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance and returns a fresh copy
    for container types.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(word, count, /):
    """
    Return "<count> <word>" with a best-effort English plural.

    Only the regular rules used by fault messages are covered
    (s/sh/ch/x/z → +es, consonant+y → -ies, otherwise +s).

    Examples
    - pluralize("argument", 1) -> "1 argument"
    - pluralize("argument", 3) -> "3 arguments"
    - pluralize("entry", 2)    -> "2 entries"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() first argument must be a string")
    if not isinstance(count, int):
        raise TypeError("pluralize() second argument must be an integer")
    if count == 1 or not word:
        return f"{count} {word}"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        plural = word + "es"
    elif word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        plural = word[:-1] + "ies"
    else:
        plural = word + "s"
    return f"{count} {plural}"


def pad(text, width=COMMAND_PADDING, /):
    """
    Left-justify text into a column of the given width.

    Text longer than the column is cut and suffixed with "..." so the result
    always has exactly width characters.
    """
    if not isinstance(text, str):
        raise TypeError("pad() first argument must be a string")
    if not isinstance(width, int) or width < 4:
        raise ValueError("pad() second argument must be an integer greater than 3")
    if len(text) > width:
        text = text[:width - 3] + "..."
    return text.ljust(width)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a meaningful user value, then materialize
it with coalesce(value, default).
"""


__all__ = (
    # Public API surface for consumers of helmsman.utils.

    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "pad",

    # Types
    "UnsetType",

    # Constants
    "Unset",
    "COMMAND_PADDING",
)
