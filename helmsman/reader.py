"""
prompt_toolkit line reader for the interactive loop.

Reader owns a PromptSession whose completer forwards every completion
request to Commander.suggest(); the commander itself stays free of any
terminal dependency and can be driven by another reader exposing read()
and clear().
"""
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .tokenizer import QUOTES, WHITESPACE

__all__ = (
    "Reader",
    "CommandCompleter",
)

logger = logging.getLogger(__name__)

OPERATORS = frozenset("|>")


def _fragment(before):
    """Raw text of the word under the cursor, quote characters included."""
    start, quote = 0, None
    for index, char in enumerate(before):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char in WHITESPACE or char in OPERATORS:
            start = index + 1
    return before[start:]


def _quote(value, quote='"'):
    """
    Quote a candidate so that it tokenizes back into a single token.

    Values without whitespace, operators or quotes are returned unchanged.
    A value holding the quote character itself switches to the other quote
    for that stretch ('it"s' → "it"'"'"s").
    """
    if not any(char in WHITESPACE or char in OPERATORS or char in QUOTES for char in value):
        return value
    other = "'" if quote == '"' else '"'
    regions = []
    for char in value:
        mark = other if char == quote else quote
        if regions and regions[-1][0] == mark:
            regions[-1][1].append(char)
        else:
            regions.append((mark, [char]))
    return "".join(f"{mark}{''.join(chars)}{mark}" for mark, chars in regions)


class CommandCompleter(Completer):
    """
    Completer that asks the commander for candidates.

    The word under the cursor runs from the last unquoted whitespace, `|`
    or `>` to the cursor, an opening quote included; every candidate
    replaces that word and is quoted again when it would not survive
    tokenization as one token.
    """

    def __init__(self, commander):
        self._commander = commander

    def get_completions(self, document, complete_event):
        before = document.text_before_cursor
        word = _fragment(before)
        quote = word[0] if word[:1] in QUOTES else '"'
        suggestions = self._commander.suggest(before, document.text_after_cursor, document.text)
        logger.debug("completing %r with %d candidates", word, len(suggestions or ()))
        for suggestion in suggestions or ():
            yield Completion(
                _quote(suggestion.value, quote),
                start_position=-len(word),
                display=suggestion.display,
                style=self._commander.config.suggestion,
            )


class Reader:
    """
    Line reader backed by a prompt_toolkit PromptSession.

    read() raises EOFError at end of input (Ctrl-D) and KeyboardInterrupt
    on Ctrl-C, both handled by Commander.run().
    """

    def __init__(self, commander, /, *, history=None):
        self._commander = commander
        self._session = PromptSession(
            history=history or InMemoryHistory(),
            completer=CommandCompleter(commander),
            complete_while_typing=False,
        )

    @property
    def session(self):
        return self._session

    def read(self):
        return self._session.prompt(self._commander.config.prompt)

    def clear(self):
        clear()
