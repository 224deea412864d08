"""
Helmsman commander: the session object that owns a validated command tree.

What this module provides
- Commander: validates the configured root commands (plus the built-ins)
  once, then runs input lines through the pipeline and answers completion
  requests for the line reader.

Line lifecycle
1. tokenize the line into stages (see helmsman.tokenizer).
2. check the stage layout: no empty stage, a redirect only as the last stage
   and with exactly one destination token.
3. prepare every stage: resolve the command, honour `--help`, reject routers
   and classify the remaining tokens. Any fault aborts the line before a
   single handler runs.
4. run the stages in order. Every stage but the final one writes into an
   in-memory sink; its escape-stripped text becomes the captured input of
   the next stage. The final stage writes to the commander's stdout, or into
   the redirect destination when the line ends with `> path`.

Entry points
- execute(line): raises faults (embedding code and tests).
- submit(line): renders faults to stderr and keeps the session alive.
- suggest(before, after, line): completion candidates for the line reader.
- run(): interactive loop over the line reader.
"""
import difflib
import io
import logging
import os
import sys
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from . import internals, logs
from .arguments import Suggestion
from .config import Config
from .faults import *
from .reader import Reader
from .tokenizer import Flow, tokenize
from .utils import Unset, coalesce

__all__ = (
    "Commander",
)

logger = logging.getLogger(__name__)


class Stage(NamedTuple):
    node: object
    inherited: tuple
    args: object
    help: bool


def _strip(output):
    """Remove terminal escape sequences line by line, keeping line endings."""
    lines = []
    for line in output.splitlines(keepends=True):
        body = line.splitlines()[0]
        lines.append(Text.from_ansi(body).plain + line[len(body):])
    return "".join(lines)


class Commander:
    """
    Interactive command session.

    Parameters
    - config: Config holding the prompt, root commands, dump file and rendering switches.
    - reader: line reader used by run() and clear(); a prompt_toolkit Reader
      is created on first use when omitted.
    - stdout / stderr: text streams for command output and fault reports;
      the process streams are looked up at write time when omitted.

    Raises
    - SchemaError: when a command tree is invalid or a root name is taken twice.
    """

    def __init__(self, config=Unset, /, *, reader=None, stdout=None, stderr=None):
        config = coalesce(config, Config())
        if not isinstance(config, Config):
            raise TypeError("commander 'config' must be a Config object")
        self._config = config
        self._reader = reader
        self._stdout = stdout
        self._stderr = stderr

        if config.loglevel is not None:
            logs.configure(config.loglevel)

        commands = {}
        for spec in (*config.commands, *internals.builtins()):
            if spec.name in commands:
                raise SchemaError(f"command {spec.name!r} is defined multiple times")
            commands[spec.name] = spec.validate(commander=self)
        self._commands = MappingProxyType(commands)
        logger.debug("registered %d commands: %s", len(commands), ", ".join(commands))

    @property
    def config(self):
        return self._config

    @property
    def commands(self):
        """Root name → validated Node, built-ins included."""
        return self._commands

    @property
    def reader(self):
        return self._reader

    @reader.setter
    def reader(self, reader):
        self._reader = reader

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self):
        return self._stderr if self._stderr is not None else sys.stderr

    def locate(self, tokens, /):
        """
        Walk the command tree along the leading tokens.

        Returns
        - (node, inherited, remaining): the deepest matched Node (or None),
          the flags of every matched ancestor in root-to-leaf order, and the
          tokens left after the matched route.
        """
        tokens = list(tokens)
        inherited = []
        node = None
        children = self._commands
        while tokens and tokens[0] in children:
            if node is not None:
                inherited.extend(node.flags)
            node = children[tokens.pop(0)]
            if node.leaf:
                break
            children = node.children
        return node, tuple(inherited), tokens

    def _prepare(self, tokens):
        node, inherited, remaining = self.locate(tokens)
        if node is None:
            name = tokens[0]
            suggestions = difflib.get_close_matches(name, self._commands, 3)
            if suggestions:
                hint = f"did you mean {suggestions[0]!r}?"
            else:
                hint = "run 'help' to list the available commands"
            raise UnknownCommandError(
                f"unknown command {name!r}",
                hint=hint,
                token=name,
                index=1,
                suggestions=suggestions,
            )
        logger.debug("resolved %r with remaining tokens %r", node.route, remaining)

        if "--help" in remaining:
            return Stage(node, inherited, None, True)

        if not node.leaf:
            for index, token in enumerate(remaining, len(node.path) + 1):
                if token.startswith("-"):
                    continue
                suggestions = difflib.get_close_matches(token, node.children, 3)
                if suggestions:
                    hint = f"did you mean '{node.route} {suggestions[0]}'?"
                else:
                    hint = f"try '{node.route} --help' to see all subcommands"
                raise UnknownSubcommandError(
                    f"unknown subcommand {token!r} for command {node.route!r}",
                    hint=hint,
                    route=node.route,
                    token=token,
                    index=index,
                    suggestions=suggestions,
                )
            raise RouterCommandError(
                f"command {node.route!r} requires a subcommand",
                hint=f"choose one of: {', '.join(node.children)}",
                route=node.route,
            )

        args = node.classify(remaining, inherited)
        logger.debug("classified %r as %r", node.route, args)
        return Stage(node, inherited, args, args.get("help") is True)

    def _invoke(self, stage, captured, sink):
        node = stage.node
        if stage.help:
            Console(file=sink, highlight=False, soft_wrap=True).print(
                node.render(stage.inherited, colorful=self._config.colorful, styles=self._config.styles)
            )
            return
        try:
            node.handler(node, stage.args, captured, sink)
        except (ShellFault, SessionExit):
            raise
        except Exception as error:
            raise ExecutionError(
                f"command {node.route!r} failed: {error}",
                route=node.route,
            ) from error

    def execute(self, line, /):
        """
        Run one input line and raise any fault it produces.

        Raises
        - ShellFault subclasses for parse, execution and capture faults.
        - SessionExit when the line asks to end the session.
        """
        groups = tokenize(line)
        logger.debug("tokenized %r into %d stages", line, len(groups))
        if not groups:
            return

        target = None
        for index, group in enumerate(groups):
            if not group.tokens:
                following = groups[index + 1].flow if index + 1 < len(groups) else Flow.PIPE
                source = "redirect" if following is Flow.REDIRECT else "pipe"
                raise EmptyStageError(
                    f"nothing to {source} from at stage {index + 1}",
                    hint="every '|' and '>' must follow a command",
                    index=index + 1,
                )
            if group.flow is not Flow.REDIRECT:
                continue
            if index != len(groups) - 1:
                raise MisplacedRedirectError(
                    "output redirection must be the last stage of a line",
                    hint="move '> path' to the end of the line",
                    index=index + 1,
                )
            if len(group.tokens) != 1:
                raise MalformedRedirectError(
                    f"output redirection expects exactly one destination, got {len(group.tokens)}",
                    hint="quote a destination that contains spaces",
                    index=index + 1,
                )
            target = group.tokens[0]

        if target is not None:
            groups = groups[:-1]
        stages = [self._prepare(list(group.tokens)) for group in groups]

        captured = b""
        for index, stage in enumerate(stages):
            final = index == len(stages) - 1
            if final and target is None:
                self._invoke(stage, captured, self.stdout)
                continue
            sink = io.StringIO()
            self._invoke(stage, captured, sink)
            captured = _strip(sink.getvalue()).encode("utf-8")
            logger.debug("captured %d bytes from %r", len(captured), stage.node.route)

        if target is not None:
            path = os.path.expanduser(target)
            try:
                with open(path, "wb") as file:
                    file.write(captured)
            except OSError as error:
                raise CaptureError(
                    f"could not write output to {target!r}: {error.strerror or error}",
                    hint="check that the destination directory exists and is writable",
                    token=target,
                ) from error
            logger.debug("wrote %d bytes to %s", len(captured), path)

    def submit(self, line, /):
        """
        Run one input line, reporting faults instead of raising them.

        The line is appended to the dump file first when one is configured.
        SessionExit is not intercepted.
        """
        if self._config.dump is not None:
            try:
                with open(self._config.dump, "a", encoding="utf-8") as file:
                    file.write(line + "\n")
            except OSError as error:
                logger.warning("could not append to dump file %s: %s", self._config.dump, error)

        try:
            self.execute(line)
        except ShellFault as fault:
            logger.debug("reporting %s: %s", type(fault).__name__, fault)
            trigger(
                fault,
                shell=True,
                prog=self._config.prog,
                colorful=self._config.colorful,
                fancy=self._config.fancy,
                styles=self._config.styles,
                console=Console(file=self.stderr, highlight=False),
            )

    def suggest(self, before, after="", line=None, /):
        """
        Completion candidates for the word under the cursor.

        Only the text before the cursor is considered; after and line are
        accepted for reader adapters that pass the whole buffer.

        Returns
        - list[Suggestion], or None when nothing applies.
        """
        tokens, flow = tokenize(before, partial=True)[-1]
        if flow is Flow.REDIRECT:
            return None

        *route, word = tokens
        node, inherited, remaining = self.locate(route)
        if node is None:
            if route:
                return None
            return [Suggestion(name, name) for name in sorted(self._commands) if name.startswith(word)]
        return node.suggest([*remaining, word], inherited)

    def clear(self, stdout=None, /):
        """Clear the terminal through the reader, or the given stream."""
        if self._reader is not None and callable(getattr(self._reader, "clear", None)):
            self._reader.clear()
        else:
            Console(file=coalesce(stdout, self.stdout)).clear()

    def run(self):
        """
        Read and submit lines until end of input or `exit`.

        Ctrl-C discards the line being typed.
        """
        if self._reader is None:
            self._reader = Reader(self)
        while True:
            try:
                line = self._reader.read()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            try:
                self.submit(line)
            except SessionExit:
                break
        logger.debug("session ended")
