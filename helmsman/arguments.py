r"""
Helmsman parameter specifications.

Overview
- Specs
  • Argument: positional, typed parameter (optionally absorbing the overflow
    of positional tokens when it is the last one and allows multiple values).
  • Flag: named parameter with a long name (--type), a short name (-t) or
    both; boolean flags are presence-only switches.
  • Suggestion: (value, display) pair produced by completion.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the sanitized metadata listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction; specs are immutable afterwards)
- Shared
  • type: ArgType | int | float | str | bool | Unset. Argument falls back to
    STRING and Flag to BOOL, unless it can be inferred from choices (or, for
    flags, from the default value).
  • descr: Unset | str | Text, non-empty when provided.
  • choices: Iterable of scalars (enum members are unwrapped to their value);
    duplicates rejected; every member must match the type.
  • completer: Unset | Callable[[str], Iterable[str]].
  • multiple: bool (values are collected into a list).
- Flag only
  • name (length >= 2) and/or short (exactly one character).
  • default: scalar, or a list/tuple of scalars when multiple.
  • required: bool.

Validation highlights
- Boolean flags cannot declare choices, a completer, or allow multiple values;
  their default is False unless given.
- Boolean arguments cannot allow multiple values.
- validate() re-runs every check and returns the spec unchanged, so calling it
  any number of times is harmless.

Quick example:
    >>> from helmsman.arguments import Argument, Flag
    >>> Argument("resource-type", choices=("process", "group"))
    argument(name='resource-type', type=<ArgType.STRING: 'string'>, ...)
    >>> Flag("output", "o", choices=("json", "yaml", "table"), default="table")
    flag(name='output', short='o', type=<ArgType.STRING: 'string'>, ...)
"""
import functools
import logging
import operator
import re
from collections.abc import Iterable
from enum import Enum
from typing import NamedTuple

from rich.text import Text

from .argtypes import ArgType, render
from .faults import SchemaError
from .utils import *

logger = logging.getLogger(__name__)


class Suggestion(NamedTuple):
    """Completion candidate: the text to insert and the label to display."""
    value: str
    display: str


class ArgumentType(type):
    """
    Metaclass for parameter specs.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages and reprs.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the matching "_name" field.
    - Provide stable __repr__/__rich_repr__ implementations; __displayable__
      (if set) narrows the fields shown.
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
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _unwrap(value):
    return value.value if isinstance(value, Enum) else value


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by Argument and Flag.

    Responsibilities
    - descr: Unset | str | Text; trimmed, non-empty when provided, None when Unset.
    - choices: iterable of scalars; enum members unwrapped; duplicates rejected;
      normalized to a tuple.
    - completer: Unset | callable; None when Unset.
    - multiple: coerced to bool.

    Side effects
    - Mutates the provided metadata dict in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset | None):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise SchemaError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of values")
    sanitized = []
    for choice in map(_unwrap, choices):
        if choice in sanitized:
            raise SchemaError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sanitized)

    if not callable(completer := metadata["completer"]) and completer not in (Unset, None):
        raise TypeError(f"{cls.__typename__} 'completer' must be callable")
    metadata["completer"] = coalesce(completer)

    metadata["multiple"] = bool(metadata["multiple"])


def _sanitize_type(cls, metadata, /, fallback):
    """
    Internal: resolve the effective ArgType and check choices against it.

    Resolution order for an unspecified type
    1. the type inferred from the first choice,
    2. (flags) the type inferred from the default (first element when multiple),
    3. the fallback (STRING for arguments, BOOL for flags).

    Integer choices of a FLOAT parameter are widened to float.
    """
    try:
        argtype = ArgType(metadata["type"])
    except ValueError:
        raise TypeError(f"{cls.__typename__} 'type' must be an ArgType or one of int, float, str, bool") from None

    if argtype is ArgType.UNSPECIFIED:
        sample = Unset
        if metadata["choices"]:
            sample = metadata["choices"][0]
        elif metadata.get("default", Unset) is not Unset:
            sample = metadata["default"]
            if metadata["multiple"] and isinstance(sample, list | tuple):
                sample = sample[0] if sample else Unset
        argtype = ArgType.infer(_unwrap(sample)) if sample is not Unset else fallback
        if argtype is ArgType.UNSPECIFIED:
            raise SchemaError(f"{cls.__typename__} type cannot be inferred from {sample!r}")

    for choice in metadata["choices"]:
        if not argtype.accepts(choice):
            raise SchemaError(f"value in 'choices' {choice!r} did not match the {cls.__typename__} type {str(argtype)!r}")
    if argtype is ArgType.FLOAT:
        metadata["choices"] = tuple(map(float, metadata["choices"]))

    metadata["type"] = argtype


def _sanitize_default(cls, metadata, /):
    """
    Internal: validate a flag default against its type, arity and choices.

    - None and Unset both mean “no default”; boolean flags then default to False.
    - multiple: the default must be a list/tuple; it is stored as a tuple.
    - every default value must match the type and, when choices exist, be one of them.
    """
    argtype = metadata["type"]
    default = metadata["default"]

    if default is None or default is Unset:
        metadata["default"] = False if argtype is ArgType.BOOL else Unset
        return

    if metadata["multiple"]:
        if not isinstance(default, list | tuple):
            raise SchemaError(f"{cls.__typename__} default must be a list of values when multiple values are allowed")
        values = tuple(map(_unwrap, default))
    else:
        values = (_unwrap(default),)

    for value in values:
        if not argtype.accepts(value):
            raise SchemaError(f"{cls.__typename__} default {value!r} did not match the {cls.__typename__} type {str(argtype)!r}")
    if argtype is ArgType.FLOAT:
        values = tuple(map(float, values))
    for value in values:
        if metadata["choices"] and render(value) not in map(render, metadata["choices"]):
            raise SchemaError(f"{cls.__typename__} default {value!r} is not one of its choices")

    metadata["default"] = values if metadata["multiple"] else values[0]


def _sanitize_flag(cls, metadata, /):
    """
    Internal: validate flag names and the boolean-flag restrictions.

    - at least one of name/short is required.
    - name: at least two characters, no leading '-', no whitespace, '=', quotes, '|' or '>'.
    - short: exactly one such character.
    - boolean flags cannot declare choices, a completer, or multiple values.
    """
    name = metadata["name"]
    short = metadata["short"]
    if not isinstance(name, str | Unset | None) or not isinstance(short, str | Unset | None):
        raise TypeError(f"{cls.__typename__} names must be strings")
    name, short = coalesce(name) or None, coalesce(short) or None

    if name is None and short is None:
        raise SchemaError(f"{cls.__typename__} must specify at least one of a name or short name")
    if name is not None:
        if len(name) < 2:
            raise SchemaError(f"{cls.__typename__} name cannot be shorter than 2 characters")
        if not re.fullmatch(r"[^\s\-=|>'\"][^\s=|>'\"]*", name):
            raise SchemaError(f"{cls.__typename__} name {name!r} is not a valid flag name")
    if short is not None:
        if len(short) != 1:
            raise SchemaError(f"{cls.__typename__} short name must be exactly 1 character long")
        if short in "-=|>'\" \t":
            raise SchemaError(f"{cls.__typename__} short name {short!r} is not a valid flag name")
    metadata["name"], metadata["short"] = name, short

    metadata["required"] = bool(metadata["required"])

    if metadata["type"] is ArgType.BOOL:
        if metadata["choices"]:
            raise SchemaError(f"{cls.__typename__} 'choices' are not compatible with boolean flags")
        if metadata["completer"] is not None:
            raise SchemaError(f"{cls.__typename__} 'completer' is not compatible with boolean flags")
        if metadata["multiple"]:
            raise SchemaError(f"{cls.__typename__} 'multiple' is not compatible with boolean flags")


def _suggest_values(spec, prefix, /):
    """
    Internal: value completions for an argument or flag.

    Choices win over the completer; neither yields no suggestion. A failing
    completer yields no suggestion either.
    """
    if spec.choices:
        return [
            Suggestion(value, value)
            for value in map(render, spec.choices)
            if value.startswith(prefix)
        ]
    if spec.completer is not None:
        try:
            values = list(spec.completer(prefix))
        except Exception as error:
            logger.debug("completer for %r failed: %s", spec.name, error)
            return []
        return [Suggestion(str(value), str(value)) for value in values]
    return []


class Argument(metaclass=ArgumentType):
    """
    Positional parameter specification.

    An Argument binds the Nth positional token of a command to a typed value.
    Only the last argument of a command may allow multiple values; it then
    collects every overflow token into a list.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      on instances, mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "name",
        "type",
        "descr",
        "choices",
        "completer",
        "multiple",
    )

    def __new__(
            cls,
            name,
            /,
            type=Unset,
            descr=Unset,
            choices=(),
            completer=Unset,
            *,
            multiple=False
    ):
        """
        Construct an Argument spec with the provided metadata.

        Parameters
        - name: str
          Key under which the value is stored; must be non-empty.
        - type: ArgType | int | float | str | bool | Unset
          Value type; defaults to the type of the choices, else STRING.
        - descr: Unset | str
          Short description for help.
        - choices: Iterable
          Allowed values, matched by their string form.
        - completer: Unset | Callable[[str], Iterable[str]]
          Completion source used when there are no choices.
        - multiple: bool
          Collect this and every following positional token into a list.

        Raises
        - TypeError: when a field has the wrong Python type.
        - SchemaError: when the combination of fields is invalid.
        """
        metadata = {
            "name": name,
            "type": type,
            "descr": descr,
            "choices": choices,
            "completer": completer,
            "multiple": multiple,
        }
        cls._sanitize(metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @classmethod
    def _sanitize(cls, metadata, /):
        if not isinstance(name := metadata["name"], str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise SchemaError(f"{cls.__typename__} must have a non-empty name")
        metadata["name"] = name

        _sanitize_metadata(cls, metadata)
        _sanitize_type(cls, metadata, ArgType.STRING)

        if metadata["multiple"] and metadata["type"] is ArgType.BOOL:
            raise SchemaError(f"{cls.__typename__} 'multiple' is not compatible with boolean arguments")

    def validate(self):
        """
        Re-run every registration check; returns self unchanged.
        """
        self._sanitize({name: getattr(self, "_" + name) for name in type(self).__introspectable__})
        return self

    @property
    def key(self):
        """Name under which the parsed value is stored."""
        return self._name

    @property
    def invocation(self):
        return f"<{self._name}...>" if self._multiple else f"<{self._name}>"

    def suggest(self, prefix, /):
        return _suggest_values(self, prefix)


class Flag(metaclass=ArgumentType):
    """
    Named parameter specification.

    A flag is reachable through --name and/or -s. Boolean flags take no value:
    their presence stores the inverse of their default. Every other flag
    consumes the next token (or the inline value of --name=value / -s=value).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      on instances, mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "name",
        "short",
        "type",
        "descr",
        "default",
        "choices",
        "completer",
        "multiple",
        "required",
    )

    def __new__(
            cls,
            name=Unset,
            short=Unset,
            type=Unset,
            descr=Unset,
            default=Unset,
            choices=(),
            completer=Unset,
            *,
            multiple=False,
            required=False
    ):
        """
        Construct a Flag spec with the provided metadata.

        Parameters
        - name: Unset | str
          Long name, used as --name; at least two characters.
        - short: Unset | str
          Short name, used as -s; exactly one character.
        - type: ArgType | int | float | str | bool | Unset
          Value type; inferred from choices or default, else BOOL.
        - descr: Unset | str
          Short description for help.
        - default: Any
          Value applied when the flag is absent (False for boolean flags).
        - choices: Iterable
          Allowed values, matched by their string form.
        - completer: Unset | Callable[[str], Iterable[str]]
          Completion source used when there are no choices.
        - multiple: bool
          Repeated occurrences accumulate into a list.
        - required: bool
          Classification fails when the flag is absent and has no default.

        Raises
        - TypeError: when a field has the wrong Python type.
        - SchemaError: when the combination of fields is invalid.
        """
        metadata = {
            "name": name,
            "short": short,
            "type": type,
            "descr": descr,
            "default": default,
            "choices": choices,
            "completer": completer,
            "multiple": multiple,
            "required": required,
        }
        cls._sanitize(metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @classmethod
    def _sanitize(cls, metadata, /):
        _sanitize_metadata(cls, metadata)
        _sanitize_type(cls, metadata, ArgType.BOOL)
        _sanitize_flag(cls, metadata)
        _sanitize_default(cls, metadata)

    def validate(self):
        """
        Re-run every registration check; returns self unchanged.
        """
        self._sanitize({name: getattr(self, "_" + name) for name in type(self).__introspectable__})
        return self

    @property
    def key(self):
        """Name under which the parsed value is stored (long name first)."""
        return self._name or self._short

    @property
    def names(self):
        """Every lookup key of the flag (long name, then short name)."""
        return tuple(name for name in (self._name, self._short) if name)

    @property
    def invocation(self):
        """
        Command-line spelling of the flag: "-t, --type", "--sort" or "-t".
        """
        if self._name and self._short:
            return f"-{self._short}, --{self._name}"
        if self._name:
            return f"--{self._name}"
        return f"-{self._short}"

    @property
    def padded(self):
        """
        Invocation aligned so long names line up whether or not a short name exists.
        """
        if self._short:
            return self.invocation
        return " " * len("-x, ") + self.invocation

    def suggest(self, prefix, /):
        return _suggest_values(self, prefix)


__all__ = (
    # Public API surface for consumers of helmsman.arguments.
    # These names are re-exported from the package __init__.

    # Classes (specifications)
    "Argument",
    "Flag",

    # Completion
    "Suggestion",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports.
del ArgumentType
