"""
built-in commands appended to every commander.

- help: list the root commands with their descriptions, sorted by name.
- grep: keep the lines of the previous stage that contain a pattern.
- clear: clear the terminal through the line reader (or the output stream).
- exit: end the session by raising SessionExit.

handlers reach the session through node.commander and write to the stream
they are given, so their output can be piped like any other command.
"""
from .arguments import Argument, Flag
from .commands import Command
from .faults import SessionExit
from .utils import pad

__all__ = (
    "HelpCommand",
    "GrepCommand",
    "ClearCommand",
    "ExitCommand",
    "builtins",
)

PATTERN = "pattern"
INSENSITIVE = "insensitive"


def _help(node, args, captured, stdout):
    commands = node.commander.commands
    print("Command list:", file=stdout)
    for name in sorted(commands):
        print(f"  {pad(name)}{commands[name].descr or ''}".rstrip(), file=stdout)


def _grep(node, args, captured, stdout):
    pattern = args.getstring(PATTERN)
    insensitive = args.getbool(INSENSITIVE)
    if insensitive:
        pattern = pattern.casefold()
    for line in captured.decode("utf-8", errors="replace").splitlines():
        if pattern in (line.casefold() if insensitive else line):
            print(line, file=stdout)


def _clear(node, args, captured, stdout):
    node.commander.clear(stdout)


def _exit(node, args, captured, stdout):
    raise SessionExit("exit requested")


HelpCommand = Command(
    "help",
    descr="display contextual command help",
    handler=_help,
)

GrepCommand = Command(
    "grep",
    descr="filter and pattern match input",
    arguments=[
        Argument(PATTERN, str, descr="search pattern"),
    ],
    flags=[
        Flag(INSENSITIVE, "i", bool, descr="case insensitive matching"),
    ],
    handler=_grep,
)

ClearCommand = Command(
    "clear",
    descr="clear the terminal",
    handler=_clear,
)

ExitCommand = Command(
    "exit",
    descr="exit the shell",
    handler=_exit,
)


def builtins():
    """specifications of the built-in commands, in registration order."""
    return HelpCommand, GrepCommand, ClearCommand, ExitCommand
