"""
Session configuration.

Config gathers everything a Commander needs besides the line reader:
the prompt, the root commands, the optional input dump file, rendering
switches and the logging level. It is sanitized on construction and
read-only afterwards.
"""
import logging
import os
from collections.abc import Iterable, Mapping

from .commands import Command
from .faults import SchemaError
from .utils import Unset, coalesce, mirror

__all__ = (
    "Config",
)


class Config:
    """
    Immutable, self-validating session configuration.

    Fields
    - prompt: str: text shown before each line (default "» ").
    - commands: Iterable[Command]: the root commands, in registration order.
    - dump: None | str | PathLike: when set, every submitted line is appended there.
    - suggestion: str: prompt_toolkit style applied to completion entries.
    - styles: Mapping[str, str]: palette overrides for help and fault rendering.
    - loglevel: None | int | str: when set, the helmsman logger is configured at that level.
    - prog: str: program name shown in fault headers.
    - colorful: bool: style help and faults.
    - fancy: bool: frame faults in a panel.
    """
    prompt = mirror("prompt")
    commands = mirror("commands")
    dump = mirror("dump")
    suggestion = mirror("suggestion")
    styles = mirror("styles")
    loglevel = mirror("loglevel")
    prog = mirror("prog")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            commands=(),
            /,
            prompt=Unset,
            dump=None,
            suggestion=Unset,
            styles=Unset,
            loglevel=None,
            prog=Unset,
            *,
            colorful=True,
            fancy=False
    ):
        if not isinstance(commands, Iterable) or isinstance(commands, str):
            raise TypeError("config 'commands' must be an iterable of commands")
        commands = tuple(commands)
        if not all(isinstance(command, Command) for command in commands):
            raise TypeError("config 'commands' must only contain Command objects")

        if not isinstance(prompt, str | Unset):
            raise TypeError("config 'prompt' must be a string")

        if not isinstance(dump, str | os.PathLike | None):
            raise TypeError("config 'dump' must be a path")
        elif isinstance(dump, str) and not dump.strip():
            raise SchemaError("config 'dump' cannot be empty")

        if not isinstance(suggestion, str | Unset):
            raise TypeError("config 'suggestion' must be a string")

        if not isinstance(styles, Mapping | Unset):
            raise TypeError("config 'styles' must be a mapping")

        if isinstance(loglevel, str):
            try:
                loglevel = logging.getLevelNamesMapping()[loglevel.upper()]
            except KeyError:
                raise SchemaError(f"config 'loglevel' {loglevel!r} is not a logging level") from None
        elif not isinstance(loglevel, int | None) or isinstance(loglevel, bool):
            raise TypeError("config 'loglevel' must be a logging level")

        if not isinstance(prog, str | Unset):
            raise TypeError("config 'prog' must be a string")
        elif isinstance(prog, str) and not (prog := prog.strip()):
            raise SchemaError("config 'prog' cannot be empty")

        self._commands = commands
        self._prompt = coalesce(prompt, "» ")
        self._dump = dump
        self._suggestion = coalesce(suggestion, "fg:ansigreen")
        self._styles = dict(coalesce(styles, {}))
        self._loglevel = loglevel
        self._prog = coalesce(prog, "helmsman")
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    def __repr__(self):
        return (
            f"config(prompt={self._prompt!r}, commands={[command.name for command in self._commands]!r}, "
            f"dump={self._dump!r}, loglevel={self._loglevel!r}, prog={self._prog!r})"
        )
