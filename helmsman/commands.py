"""
Helmsman command layer: declare command trees, validate them, parse a stage.

What this module provides
- Command: declarative specification of one command: name, description,
  flags, positional arguments and either subcommands (a router) or a handler
  (a leaf). Specifications stay editable (subcommands can be attached later).
- command(...): build a leaf Command from a handler function, directly or as
  a decorator; Command.command(...) does the same and mounts the result as a
  subcommand.
- Node: the validated, immutable form of a command tree. Command.validate()
  returns a fresh Node tree every time it is called and never touches the
  specification, so a specification can be validated any number of times.
  Every Node owns read-only indices (children, switches, parameters) and
  implements token classification, completion and help rendering.

Core ideas
- Validation happens once, at registration: name clashes, incompatible
  attributes and tree-shape problems raise SchemaError tagged with the route
  of the offending command.
- Flags propagate strictly downward: a node sees every flag of its ancestors
  (passed as `inherited`), siblings never see each other's flags.
- Every node carries an automatic boolean `--help` flag.
- Parse faults are position-first (“at third position”) and name the
  offending flag or argument by its invocation form.

Quick start
    from helmsman import Command, Flag, command

    farm = Command("farm", descr="interact with the farm")

    @farm.command(flags=[Flag("type", "t", choices=("mammal", "bird"), required=True)])
    def add(node, args, captured, stdout):
        \"\"\"add an animal to the farm\"\"\"
        print(f"added a {args.getstring('type')}", file=stdout)

    tree = farm.validate()
    node = tree.children["add"]
    node.classify(["-t", "mammal"], tree.flags)   # {'type': 'mammal', 'help': False}
"""
import difflib
import functools
import inspect
import operator
import re
from collections.abc import Iterable
from types import MappingProxyType

from rich.text import Text

from .argtypes import ArgMap, ArgType, render
from .arguments import Argument, Flag, Suggestion
from .faults import *
from .utils import *

HELP = Flag("help", descr="display contextual help")


class CommandType(type):
    """
    Metaclass for Command and Node.

    Responsibilities
    - Derive __typename__ from the class name (used in messages).
    - Expose the names listed in __introspectable__ as read-only properties.
    - Provide stable __repr__/__rich_repr__ implementations limited to
      __displayable__ (or __introspectable__ when unset).
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


def _ishelp(flag):
    return flag.name == HELP.name and flag.descr == HELP.descr


def _merge(inherited, flags):
    """
    Build the key → flag lookup of a node: inherited flags first, own flags
    overriding on a clash (only the automatic help flag can clash).
    """
    switches = {}
    for flag in (*inherited, *flags):
        for name in flag.names:
            switches[name] = flag
    return switches


def _spelling(name):
    return f"--{name}" if len(name) > 1 else f"-{name}"


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class Command(metaclass=CommandType):
    """
    Declarative command specification.

    A command is either a router (it has subcommands) or a leaf (it has a
    handler and optionally positional arguments); both may declare flags,
    which every descendant inherits.

    The handler is called as handler(node, args, captured, stdout):
    - node: the validated Node being executed (node.commander is the owner).
    - args: the ArgMap produced by classification.
    - captured: bytes written by the previous pipeline stage (b"" if none).
    - stdout: text stream the handler writes its output to.
    A handler reports failure by raising.
    """

    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "arguments",
        "subcommands",
        "handler",
    )

    __displayable__ = (
        "name",
        "descr",
        "flags",
        "arguments",
        "subcommands",
    )

    def __new__(
            cls,
            name,
            /,
            descr=Unset,
            flags=(),
            arguments=(),
            subcommands=(),
            handler=Unset
    ):
        """
        Construct a Command spec.

        Parameters
        - name: str
          Word that selects the command; non-empty, no whitespace, quotes,
          '|' or '>', and not starting with '-'.
        - descr: Unset | str | Text
          One-line description used by help and listings.
        - flags: Iterable[Flag]
        - arguments: Iterable[Argument]
        - subcommands: Iterable[Command]
        - handler: Unset | Callable[[Node, ArgMap, bytes, TextIO], Any]

        Raises
        - TypeError: when a field has the wrong Python type.
        - SchemaError: when the name or description is unusable.

        Notes
        - The router/leaf shape is checked by validate(), since subcommands
          may be attached after construction.
        """
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise SchemaError(f"{cls.__typename__} 'name' cannot be empty")
        elif not re.fullmatch(r"[^\s\-|>'\"][^\s|>'\"]*", name):
            raise SchemaError(f"{cls.__typename__} name {name!r} is not a valid command name")

        if not isinstance(descr, str | Text | Unset | None):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise SchemaError(f"{cls.__typename__} 'descr' cannot be empty")

        for field, values, kind in (
                ("flags", flags, Flag),
                ("arguments", arguments, Argument),
                ("subcommands", subcommands, Command),
        ):
            if not isinstance(values, Iterable) or isinstance(values, str):
                raise TypeError(f"{cls.__typename__} {field!r} must be an iterable")
            if not all(isinstance(value, kind) for value in values):
                raise TypeError(f"{cls.__typename__} {field!r} must only contain {kind.__name__} objects")

        if not callable(handler) and handler not in (Unset, None):
            raise TypeError(f"{cls.__typename__} 'handler' must be callable")

        self = super().__new__(cls)
        self._name = name
        self._descr = coalesce(descr)
        self._flags = tuple(flags)
        self._arguments = tuple(arguments)
        self._subcommands = list(subcommands)
        self._handler = coalesce(handler)
        return self

    def command(self, source=Unset, /, **kwargs):
        """
        Create or attach a subcommand under this command.

        Modes
        - Command instance: self.command(child) mounts it and returns it.
        - Callback: self.command(func, **kwargs) wraps func with command(...).
        - Decorator: @self.command(**kwargs) over a handler function.
        """
        def attach(child):
            self._subcommands.append(child)
            return child

        if isinstance(source, Command):
            if kwargs:
                raise TypeError("command() does not accept metadata when attaching a command")
            return attach(source)

        @rename("command")
        def wrapper(source, /):
            return attach(command(source, **kwargs))

        return wrapper(source) if source is not Unset else wrapper

    def validate(self, inherited=(), /, *, parent=None, commander=None):
        """
        Validate this specification and return a new immutable Node tree.

        Parameters
        - inherited: Iterable[str]
          Flag names and short names visible from the ancestors. The set is
          copied, never mutated, so siblings stay independent.
        - parent: Node | None
          Node that the result hangs under (None for a root command).
        - commander: Commander | None
          Owner exposed to handlers as node.commander.

        Steps
        1. reject a command that mixes subcommands with arguments or a
           handler, or that has neither subcommands nor a handler.
        2. append the automatic help flag unless an equivalent one exists.
        3. check every argument name against inherited flags, own flags (help
           included) and the other arguments.
        4. check every flag name against inherited names (help excepted) and
           own names, and propagate the names downward.
        5. validate each subcommand with a copy of the names; reject
           duplicate subcommand names.

        Raises
        - SchemaError: with the route of the offending command in the message.
        """
        inherited = set(inherited)
        route = " ".join((*(step.name for step in parent.path), self.name) if parent else (self.name,))

        if self._subcommands and self._arguments:
            raise SchemaError(f"command {route!r} cannot contain both subcommands and positional arguments")
        if self._subcommands and self._handler is not None:
            raise SchemaError(f"command {route!r} cannot contain both subcommands and a handler")
        if not self._subcommands and self._handler is None:
            raise SchemaError(f"command {route!r} does not implement a handler")

        flags = self._flags
        if not any(map(_ishelp, flags)):
            flags = (*flags, HELP)

        owned = {name for flag in flags for name in flag.names}
        parameters = {}
        for index, argument in enumerate(self._arguments, 1):
            if argument.name in inherited:
                raise SchemaError(f"argument name {argument.name!r} on command {route!r} is already defined as parent command flag")
            if argument.name in owned:
                raise SchemaError(f"argument name {argument.name!r} on command {route!r} is already defined as a flag")
            if argument.name in parameters:
                raise SchemaError(f"argument name {argument.name!r} on command {route!r} is defined multiple times")
            if argument.multiple and index < len(self._arguments):
                raise SchemaError(f"argument {argument.name!r} on command {route!r} allows multiple values but is not the last argument")
            try:
                parameters[argument.name] = argument.validate()
            except SchemaError as error:
                raise SchemaError(f"command {route!r} - {error}") from error

        switches = {}
        for flag in flags:
            try:
                flag.validate()
            except SchemaError as error:
                raise SchemaError(f"command {route!r} - {error}") from error
            for name in flag.names:
                label = "flag name" if len(name) > 1 else "flag short name"
                if name in inherited and not _ishelp(flag):
                    raise SchemaError(f"{label} {name!r} on command {route!r} is already defined as parent command flag")
                if name in switches:
                    raise SchemaError(f"{label} {name!r} on command {route!r} is defined multiple times")
                switches[name] = flag
            inherited.update(flag.names)

        node = Node(self, flags, parameters, switches, parent, commander)

        children = {}
        for subcommand in self._subcommands:
            if subcommand.name in children:
                raise SchemaError(f"sub-command {subcommand.name!r} under {route!r} is defined multiple times")
            children[subcommand.name] = subcommand.validate(set(inherited), parent=node, commander=commander)
        node._children = MappingProxyType(children)

        return node


class Node(metaclass=CommandType):
    """
    Validated, immutable command node.

    Nodes are produced by Command.validate(); they snapshot the specification
    (later edits to the Command do not leak in) and own the lookup indices:
    - children: name → Node
    - switches: own flag name and short name → Flag
    - parameters: argument name → Argument
    """

    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "arguments",
        "children",
        "switches",
        "parameters",
        "handler",
        "parent",
        "commander",
    )

    __displayable__ = (
        "name",
        "descr",
        "flags",
        "arguments",
        "children",
    )

    def __init__(self, spec, flags, parameters, switches, parent, commander):
        self._name = spec.name
        self._descr = spec.descr
        self._flags = tuple(flags)
        self._arguments = tuple(parameters.values())
        self._handler = spec.handler
        self._children = MappingProxyType({})
        self._switches = MappingProxyType(dict(switches))
        self._parameters = MappingProxyType(dict(parameters))
        self._parent = parent
        self._commander = commander

    @property
    def path(self):
        """Ancestry from the root command to this node, inclusive."""
        path = [node := self]
        while node._parent is not None:
            path.append(node := node._parent)
        return tuple(reversed(path))

    @property
    def route(self):
        """Words that select this node, e.g. 'farm add'."""
        return " ".join(node._name for node in self.path)

    @property
    def leaf(self):
        return not self._children

    @property
    def inherited(self):
        """Flags of every ancestor, root first."""
        return tuple(flag for node in self.path[:-1] for flag in node._flags)

    @property
    def invocation(self):
        """
        Usage line: route, then <subcommand>, [flags...] and one <arg> per argument.
        """
        parts = [self.route]
        if self._children:
            parts.append("<subcommand>")
        if self._flags:
            parts.append("[flags...]")
        parts.extend(argument.invocation for argument in self._arguments)
        return " ".join(parts)

    def _fault(self, kind, message, /, **options):
        return kind(message, route=self.route, **options)

    def _resolve(self, switches, token, position):
        """
        Split a flag token into (flag, inline value or None).

        Accepted shapes: -x, -x=value, --name, --name=value.
        """
        if token.startswith("--"):
            name, separator, value = token[2:].partition("=")
            if len(name) == 1:
                raise self._fault(
                    MalformedFlagError,
                    f"malformed flag {token!r} at {_ordinal(position)} position",
                    hint=f"did you mean '-{name}'?",
                    token=token,
                    index=position,
                )
        else:
            name, separator, value = token[1:].partition("=")
            if len(name) > 1:
                raise self._fault(
                    MalformedFlagError,
                    f"malformed flag {token!r} at {_ordinal(position)} position",
                    hint=f"did you mean '--{name}'?",
                    token=token,
                    index=position,
                )
        if not name:
            raise self._fault(
                MalformedFlagError,
                f"missing flag name in {token!r} at {_ordinal(position)} position",
                hint="use '--' on its own to pass the following tokens as positional arguments",
                token=token,
                index=position,
            )

        try:
            flag = switches[name]
        except KeyError:
            spelling = _spelling(name)
            suggestions = difflib.get_close_matches(spelling, map(_spelling, switches), 3)
            if suggestions:
                hint = f"did you mean {suggestions[0]!r}? you can also run '{self.route} --help' to see all flags"
            else:
                hint = f"try '{self.route} --help' to see all available flags"
            raise self._fault(
                UnknownFlagError,
                f"unrecognized flag {spelling!r} at {_ordinal(position)} position",
                hint=hint,
                token=token,
                index=position,
                suggestions=suggestions,
            ) from None

        return flag, (value if separator else None)

    def _bind(self, values, spec, text, position, label):
        """
        Coerce text for a flag or argument and store it under its key.
        """
        try:
            value = spec.type.parse(text)
        except ValueError as error:
            raise self._fault(
                UncastableValueError,
                f"invalid value {text!r} for {label} at {_ordinal(position)} position: {error}",
                hint=f"{label} expects a {spec.type} value",
                token=text,
                index=position,
            ) from None

        if spec.choices and render(value) not in map(render, spec.choices):
            choices = ", ".join(map(render, spec.choices))
            raise self._fault(
                InvalidChoiceError,
                f"invalid value {text!r} for {label} at {_ordinal(position)} position",
                hint=f"choose one of: {choices}",
                token=text,
                index=position,
                choices=spec.choices,
            )

        if spec.multiple:
            values.setdefault(spec.key, []).append(value)
        else:
            values[spec.key] = value

    def classify(self, tokens, inherited=(), /):
        """
        Turn the tokens that follow this node's route into an ArgMap.

        Parameters
        - tokens: Sequence[str]: tokens left after resolution.
        - inherited: Iterable[Flag]: ancestor flags, root first.

        Scan rules
        - a flag that waits for its value takes the next token, whatever it is.
        - `--` turns every following token into a positional.
        - `-x`, `-x=value`, `--name`, `--name=value` select flags; boolean flags
          without an inline value store the inverse of their default.
        - other tokens bind to the declared arguments in order; the last
          argument absorbs the overflow when it allows multiple values.

        After the scan, absent flags receive their default; a required flag
        without one, a flag still waiting for its value, or a missing
        positional argument is a fault.

        Raises
        - ParseError subclasses (see helmsman.faults).
        """
        switches = _merge(tuple(inherited), self._flags)
        offset = len(self.path)
        values = ArgMap()
        pending = None
        literal = False
        position = 0

        for index, token in enumerate(tokens, offset + 1):
            if pending is not None:
                self._bind(values, pending, token, index, f"flag {pending.invocation!r}")
                pending = None
                continue

            if not literal:
                if token == "--":
                    literal = True
                    continue
                if token.startswith("-"):
                    flag, value = self._resolve(switches, token, index)
                    if value is not None:
                        self._bind(values, flag, value, index, f"flag {flag.invocation!r}")
                    elif flag.type is ArgType.BOOL:
                        values[flag.key] = not flag.default
                    else:
                        pending = flag
                    continue

            if not self._arguments:
                raise self._fault(
                    UnexpectedPositionalError,
                    f"command {self.route!r} does not accept any positional arguments, got {token!r} at {_ordinal(index)} position",
                    hint=f"try '{self.route} --help' to see the expected input",
                    token=token,
                    index=index,
                )
            if position >= len(self._arguments):
                if not self._arguments[-1].multiple:
                    raise self._fault(
                        TooManyPositionalsError,
                        f"too many positional arguments provided, unexpected {token!r} at {_ordinal(index)} position",
                        hint=f"'{self.route}' takes {pluralize('positional argument', len(self._arguments))}",
                        token=token,
                        index=index,
                    )
                argument = self._arguments[-1]
            else:
                argument = self._arguments[position]
            self._bind(values, argument, token, index, f"argument {argument.invocation!r}")
            position += 1

        if pending is not None:
            raise self._fault(
                MissingFlagValueError,
                f"missing value for flag {pending.invocation!r}",
                hint=f"pass a {pending.type} value after {pending.invocation.split(', ')[-1]!r}",
                flag=pending,
            )

        for argument in self._arguments[position:]:
            if argument.multiple:
                values.setdefault(argument.key, [])
                continue
            raise self._fault(
                MissingPositionalError,
                f"missing positional argument {argument.invocation!r} for command {self.route!r}",
                hint=f"usage: {self.invocation}",
                argument=argument,
            )

        for flag in dict.fromkeys(switches.values()):
            if flag.key in values:
                continue
            if flag.default is not Unset:
                values[flag.key] = list(flag.default) if flag.multiple else flag.default
            elif flag.required:
                raise self._fault(
                    MissingRequiredFlagError,
                    f"command {self.route!r} is missing required flag {flag.invocation!r}",
                    hint=f"usage: {self.invocation}",
                    flag=flag,
                )

        return values

    def suggest(self, tokens, inherited=(), /):
        """
        Completion candidates for the last token of a partially typed stage.

        The last element of tokens is the word under the cursor (possibly "").
        Candidates come from, in order of precedence: the value set of a flag
        waiting for its value, flag names (`-`/`--` prefixes), subcommand
        names, then the value set of the next positional argument.

        Returns
        - list[Suggestion], or None when nothing applies.
        """
        switches = _merge(tuple(inherited), self._flags)
        flags = list(dict.fromkeys(switches.values()))
        position = 0
        literal = False
        pending = None

        for index, token in enumerate(tokens):
            final = index == len(tokens) - 1
            if pending is not None:
                if final:
                    return pending.suggest(token)
                pending = None
                continue

            if not literal and token.startswith("-"):
                if token == "--" and not final:
                    literal = True
                    continue
                double = token.startswith("--")
                body = token[2:] if double else token[1:]
                name, separator, value = body.partition("=")
                if separator:
                    if final and (flag := switches.get(name)) is not None:
                        head = token[:len(token) - len(value)]
                        return [Suggestion(head + hit.value, hit.display) for hit in flag.suggest(value)]
                    continue
                if final:
                    dashes = "--" if double else "-"
                    return [
                        Suggestion(dashes + key, f"{flag.invocation}  {flag.descr or ''}".rstrip())
                        for flag in flags
                        if (key := flag.name if double else flag.short) and key.startswith(name)
                    ]
                if (flag := switches.get(name)) is not None and flag.type is not ArgType.BOOL:
                    pending = flag
                continue

            if self._children:
                if not final:
                    return None
                return [
                    Suggestion(name, name)
                    for name in self._children
                    if name.startswith(token)
                ]

            if not self._arguments:
                return None

            if position >= len(self._arguments):
                if not self._arguments[-1].multiple:
                    return None
                argument = self._arguments[-1]
            else:
                argument = self._arguments[position]

            if final:
                return argument.suggest(token)
            position += 1

        return None

    def _helper(self, inherited=(), *, colorful=True, styles=None):
        """
        Build the help text of this node as a rich Text.

        Layout
        - "Invocation:" and the usage line.
        - "Subcommands:", "Arguments:", "Inherited flags:", "Flags:" sections,
          each row padded to COMMAND_PADDING.

        Palette keys
        - section-label, invocation, subcommand, argument-name, flag-name,
          description, choice, default

        Customization
        - styles (or a __styles__ mapping in __main__) overrides palette entries.
        - When colorful is False, styling is suppressed.
        """
        palette = {
            "section-label": "bold #FFFFFF",
            "invocation": "bold #36C5F0",
            "subcommand": "bold #36C5F0",
            "argument-name": "bold #FFD600",
            "flag-name": "bold #22C55E",
            "description": "#9CA3AF",
            "choice": "#FF4D94",
            "default": "italic #A3A3A3",
        } | getattr(__import__("__main__"), "__styles__", {}) | dict(styles or {})

        def styler(style):
            return palette.get(style, "") if colorful else ""

        def row(name, style, details):
            line = Text("  ")
            line.append(pad(name), styler(style))
            line.append_text(Text(" - ").join(details))
            return line

        def describe(spec, *, quoted):
            details = []
            if spec.descr:
                details.append(Text(str(spec.descr), styler("description")))
            if spec.choices:
                template = '"%s"' if quoted else "%s"
                choices = ", ".join(template % render(choice) for choice in spec.choices)
                details.append(Text.assemble("one of ", (choices, styler("choice"))))
            return details

        lines = [
            Text("Invocation:", styler("section-label")),
            Text(self.invocation, styler("invocation")),
        ]

        if self._children:
            lines += [Text(), Text("Subcommands:", styler("section-label"))]
            for name, child in self._children.items():
                details = [Text(str(child.descr), styler("description"))] if child.descr else []
                lines.append(row(name, "subcommand", details))

        if self._arguments:
            lines += [Text(), Text("Arguments:", styler("section-label"))]
            for argument in self._arguments:
                lines.append(row(argument.name, "argument-name", describe(argument, quoted=False)))

        owned = set(self._switches)
        visible = [flag for flag in dict.fromkeys(inherited) if not owned.intersection(flag.names)]
        for label, flags in (("Inherited flags:", visible), ("Flags:", self._flags)):
            if not flags:
                continue
            lines += [Text(), Text(label, styler("section-label"))]
            for flag in flags:
                details = describe(flag, quoted=True)
                if flag.type is not ArgType.BOOL and flag.default is not Unset:
                    defaults = flag.default if flag.multiple else (flag.default,)
                    if defaults:
                        shown = ", ".join(f'"{render(value)}"' for value in defaults)
                        details.append(Text(f"defaults to {shown}", styler("default")))
                if flag.required:
                    details.append(Text("required", styler("default")))
                lines.append(row(flag.padded, "flag-name", details))

        return Text("\n").join(lines)

    def helpstring(self, inherited=(), /):
        """Plain-text help (see _helper for the layout)."""
        return self._helper(inherited, colorful=False).plain

    def render(self, inherited=(), /, *, colorful=True, styles=None):
        """Styled help as a rich renderable."""
        return self._helper(inherited, colorful=colorful, styles=styles)


def command(source=Unset, /, **kwargs):
    """
    Create a leaf Command from a handler, or return a decorator that does.

    Invocation modes
    - Direct:    cmd = command(func, name="x", flags=[...])
    - Decorator: @command(name="x", flags=[...]) over a function
    - Bare:      @command over a function

    Defaults
    - name: the function name with underscores turned into hyphens.
    - descr: the first line of the function docstring.

    Accepted keywords: name, descr, flags, arguments.
    """
    if unknown := set(kwargs) - {"name", "descr", "flags", "arguments"}:
        raise TypeError(f"command() got unexpected keyword arguments: {', '.join(sorted(unknown))}")

    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        name = kwargs.get("name", Unset)
        if name is Unset:
            name = source.__name__.strip("_").replace("_", "-")
        descr = kwargs.get("descr", Unset)
        if descr is Unset and (doc := inspect.getdoc(source)):
            descr = doc.strip().splitlines()[0]
        return Command(
            name,
            descr=descr,
            flags=kwargs.get("flags", ()),
            arguments=kwargs.get("arguments", ()),
            handler=source,
        )

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    # Public API surface for consumers of helmsman.commands.
    # These names are re-exported from the package __init__.
    "Command",
    "Node",
    "command",
    "HELP",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports.
del CommandType
