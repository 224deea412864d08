"""
Helmsman faults (schema errors, line faults) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
  Codes are grouped by domain so logs and searches stay predictable.
- SchemaError: registration-time mistakes (bad names, incompatible attributes).
  Always fatal to startup, never rendered.
- ShellFault: base type for everything that can go wrong while running a line.
  Carries message + options and knows how to render itself through rich.
- SessionExit: the end-of-session sentinel raised by the built-in `exit`.
- trigger(): central entry point to surface a fault (raise or render).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages for token problems (“at third position”).
- One-sentence bodies, a short title and a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The commander raises faults while resolving/classifying/executing a line and
  calls trigger(fault, shell=True, ...) from its submit entry point.
- In non-shell mode faults are raised; in shell mode they are rendered to stderr.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - routing (111xx)
      • UNKNOWN_COMMAND, UNKNOWN_SUBCOMMAND
    - flags (112xx)
      • MALFORMED_FLAG, UNKNOWN_FLAG, MISSING_FLAG_VALUE, MISSING_REQUIRED_FLAG
    - values (113xx)
      • UNCASTABLE_VALUE, INVALID_CHOICE
    - positionals (114xx)
      • UNEXPECTED_POSITIONAL, TOO_MANY_POSITIONALS, MISSING_POSITIONAL
    - pipeline (115xx)
      • EMPTY_STAGE, MISPLACED_REDIRECT, MALFORMED_REDIRECT
    - execution (116xx)
      • DELEGATED_ERROR, ROUTER_COMMAND
    - capture (117xx)
      • CAPTURE_FAILURE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND       = 11101
    UNKNOWN_SUBCOMMAND    = 11102

    # --- flag errors ---
    MALFORMED_FLAG        = 11201
    UNKNOWN_FLAG          = 11202
    MISSING_FLAG_VALUE    = 11203
    MISSING_REQUIRED_FLAG = 11204

    # --- value errors ---
    UNCASTABLE_VALUE      = 11301
    INVALID_CHOICE        = 11302

    # --- positional errors ---
    UNEXPECTED_POSITIONAL = 11401
    TOO_MANY_POSITIONALS  = 11402
    MISSING_POSITIONAL    = 11403

    # --- pipeline errors ---
    EMPTY_STAGE           = 11501
    MISPLACED_REDIRECT    = 11502
    MALFORMED_REDIRECT    = 11503

    # --- execution errors ---
    DELEGATED_ERROR       = 11601
    ROUTER_COMMAND        = 11602

    # --- capture errors ---
    CAPTURE_FAILURE       = 11701

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SchemaError(ValueError):
    """
    raised while registering commands, flags or arguments.

    schema errors describe programming mistakes in the command tree and are
    never rendered as line faults: they surface once, at construction time.
    """


class SessionExit(Exception):
    """
    raised to end the interactive session (see the built-in `exit` command).
    """


class ShellFault(Exception):
    """
    base type for every fault produced while running one input line.

    the fault carries a message plus an immutable options mapping. options
    usually hold `code`, `title` and `hint`, and optionally rendering context
    (`prog`, `colorful`, `fancy`, `styles`, `console`) merged in by trigger().
    """
    _code = FaultCode.DELEGATED_ERROR
    _title = "shell fault"

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError(f"{type(self).__name__}() argument must be a string")
        super().__init__(*(() if message is Unset else (message,)))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", type(self)._code)

    @property
    def title(self):
        return self.options.get("title", type(self)._title)

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}) | dict(self.options.get("styles", {})))

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

        prog = text(getattr(main, "__prog__", self.options.get("prog", "helmsman")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            width = self.options.get("console", console).width - 4
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class ParseError(ShellFault):
    _code = FaultCode.UNKNOWN_COMMAND
    _title = "parse error"


class UnknownCommandError(ParseError):
    _code = FaultCode.UNKNOWN_COMMAND
    _title = "unknown command"


class UnknownSubcommandError(ParseError):
    _code = FaultCode.UNKNOWN_SUBCOMMAND
    _title = "unknown subcommand"


class MalformedFlagError(ParseError):
    _code = FaultCode.MALFORMED_FLAG
    _title = "malformed flag"


class UnknownFlagError(ParseError):
    _code = FaultCode.UNKNOWN_FLAG
    _title = "unknown flag"


class MissingFlagValueError(ParseError):
    _code = FaultCode.MISSING_FLAG_VALUE
    _title = "missing flag value"


class MissingRequiredFlagError(ParseError):
    _code = FaultCode.MISSING_REQUIRED_FLAG
    _title = "missing required flag"


class UncastableValueError(ParseError):
    _code = FaultCode.UNCASTABLE_VALUE
    _title = "invalid value"


class InvalidChoiceError(ParseError):
    _code = FaultCode.INVALID_CHOICE
    _title = "invalid choice"


class UnexpectedPositionalError(ParseError):
    _code = FaultCode.UNEXPECTED_POSITIONAL
    _title = "unexpected positional argument"


class TooManyPositionalsError(ParseError):
    _code = FaultCode.TOO_MANY_POSITIONALS
    _title = "too many positional arguments"


class MissingPositionalError(ParseError):
    _code = FaultCode.MISSING_POSITIONAL
    _title = "missing positional argument"


class EmptyStageError(ParseError):
    _code = FaultCode.EMPTY_STAGE
    _title = "empty pipeline stage"


class MisplacedRedirectError(ParseError):
    _code = FaultCode.MISPLACED_REDIRECT
    _title = "misplaced redirect"


class MalformedRedirectError(ParseError):
    _code = FaultCode.MALFORMED_REDIRECT
    _title = "malformed redirect"


class ExecutionError(ShellFault):
    _code = FaultCode.DELEGATED_ERROR
    _title = "command failed"


class RouterCommandError(ExecutionError):
    _code = FaultCode.ROUTER_COMMAND
    _title = "subcommand required"


class CaptureError(ShellFault):
    _code = FaultCode.CAPTURE_FAILURE
    _title = "output capture failed"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ShellFault).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.

    typical options
    - shell, prog, fancy, colorful, styles, console, and any other context the
      reporter may want to carry (e.g., token/index/flag).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SchemaError",
    "SessionExit",
    "ShellFault",
    "ParseError",
    "UnknownCommandError",
    "UnknownSubcommandError",
    "MalformedFlagError",
    "UnknownFlagError",
    "MissingFlagValueError",
    "MissingRequiredFlagError",
    "UncastableValueError",
    "InvalidChoiceError",
    "UnexpectedPositionalError",
    "TooManyPositionalsError",
    "MissingPositionalError",
    "EmptyStageError",
    "MisplacedRedirectError",
    "MalformedRedirectError",
    "ExecutionError",
    "RouterCommandError",
    "CaptureError",
    "trigger",
    "getdoc",
)
