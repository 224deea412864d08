"""
Line tokenizer: quoting and flow-control splitting.

tokenize(line) scans the line once, left to right, and returns a list of
TokenGroup (one per pipeline stage). Rules:

- space and tab outside quotes separate tokens and are otherwise dropped.
- a ' or " outside an active quote opens a quoted region that the same
  character closes; quote characters never reach the tokens. quotes may sit
  in the middle of a token (ab"c d"e → abc de) and an empty quoted region
  still produces a token ('' → "").
- | and > outside quotes close the current group and open a new one whose
  flow is the operator just consumed.
- an empty trailing group is dropped; empty groups elsewhere are kept so the
  pipeline can reject them ("nothing to pipe from").

with partial=True the line is treated as text typed so far: the last group
is always kept and always ends with the word under the cursor, which is ""
after whitespace or an operator.
"""
from enum import Enum
from typing import NamedTuple

__all__ = (
    "Flow",
    "TokenGroup",
    "tokenize",
)

WHITESPACE = frozenset(" \t")
QUOTES = frozenset("'\"")


class Flow(Enum):
    """Operator that precedes a token group."""
    NONE = ""
    PIPE = "|"
    REDIRECT = ">"


class TokenGroup(NamedTuple):
    tokens: tuple[str, ...]
    flow: Flow = Flow.NONE


def tokenize(line, /, *, partial=False):
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")

    groups = []
    tokens = []
    token = []
    flow = Flow.NONE
    quote = None
    pending = False  # a token is open (possibly empty, when it started with quotes)

    def flush():
        nonlocal token, pending
        if pending:
            tokens.append("".join(token))
        token, pending = [], False

    for char in line:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                token.append(char)
            continue

        if char in WHITESPACE:
            flush()
        elif char in QUOTES:
            quote, pending = char, True
        elif char in ("|", ">"):
            flush()
            groups.append(TokenGroup(tuple(tokens), flow))
            tokens, flow = [], Flow(char)
        else:
            token.append(char)
            pending = True

    if partial:
        tokens.append("".join(token))
        groups.append(TokenGroup(tuple(tokens), flow))
        return groups

    flush()
    if tokens:
        groups.append(TokenGroup(tuple(tokens), flow))
    return groups
