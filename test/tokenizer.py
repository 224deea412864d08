"""
Tokenizer behavioral tests (quoting, whitespace, flow-control splitting).

Scope
- Validate whitespace splitting and quote handling inside and across tokens.
- Validate pipe/redirect grouping and the flow tag of every group.
- Validate the partial mode used by completion.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (tokenize, TokenGroup, Flow).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import tokenize, TokenGroup, Flow


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testWhitespaceAndQuotes(self):
        self.assertEqual(
            tokenize("  a   'b c'  d"),
            [TokenGroup(("a", "b c", "d"), Flow.NONE)],
        )

    def testTabsSeparateTokens(self):
        self.assertEqual(tokenize("a\tb"), [TokenGroup(("a", "b"))])

    def testPipeAndRedirectGroups(self):
        groups = tokenize("ls | grep x > out.txt")
        self.assertEqual([group.tokens for group in groups], [("ls",), ("grep", "x"), ("out.txt",)])
        self.assertEqual([group.flow for group in groups], [Flow.NONE, Flow.PIPE, Flow.REDIRECT])

    def testOperatorsWithoutSpaces(self):
        groups = tokenize("ls|grep x>out")
        self.assertEqual([group.tokens for group in groups], [("ls",), ("grep", "x"), ("out",)])

    def testQuotesInsideToken(self):
        self.assertEqual(tokenize('ab"c d"e'), [TokenGroup(("abc de",))])

    def testEmptyQuotesYieldEmptyToken(self):
        self.assertEqual(tokenize("a '' b"), [TokenGroup(("a", "", "b"))])

    def testQuotedOperatorsAreLiteral(self):
        self.assertEqual(tokenize("echo 'a|b' \"c>d\""), [TokenGroup(("echo", "a|b", "c>d"))])

    def testOtherQuoteInsideQuote(self):
        self.assertEqual(tokenize("say \"it's\""), [TokenGroup(("say", "it's"))])

    def testUnterminatedQuoteRunsToEnd(self):
        self.assertEqual(tokenize("say 'hello world"), [TokenGroup(("say", "hello world"))])

    def testBlankLine(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("   \t "), [])

    def testLeadingPipeKeepsEmptyGroup(self):
        self.assertEqual(
            tokenize("| grep x"),
            [TokenGroup((), Flow.NONE), TokenGroup(("grep", "x"), Flow.PIPE)],
        )

    def testDoublePipeKeepsEmptyGroup(self):
        groups = tokenize("a || b")
        self.assertEqual([group.tokens for group in groups], [("a",), (), ("b",)])
        self.assertEqual([group.flow for group in groups], [Flow.NONE, Flow.PIPE, Flow.PIPE])

    def testTrailingOperatorIsDropped(self):
        self.assertEqual(tokenize("a |"), [TokenGroup(("a",))])

    def testNonStringRaises(self):
        with self.assertRaises(TypeError):
            tokenize(b"ls")  # type: ignore[arg-type]


class TestPartialTokenize(TestCase):
    """The word under the cursor always ends the last group."""

    def testEmptyLine(self):
        self.assertEqual(tokenize("", partial=True), [TokenGroup(("",))])

    def testTrailingSpaceOpensEmptyWord(self):
        self.assertEqual(tokenize("farm ", partial=True), [TokenGroup(("farm", ""))])

    def testWordInProgress(self):
        self.assertEqual(tokenize("farm ad", partial=True), [TokenGroup(("farm", "ad"))])

    def testAfterOperator(self):
        self.assertEqual(
            tokenize("a |", partial=True),
            [TokenGroup(("a",)), TokenGroup(("",), Flow.PIPE)],
        )

    def testOpenQuote(self):
        self.assertEqual(tokenize("grep 'a b", partial=True), [TokenGroup(("grep", "a b"))])


if __name__ == "__main__":
    unittest.main()
