"""
Built-in command tests (help, grep, clear, exit) and the interactive loop.

Scope
- Validate the command listing and grep filtering.
- Validate that clear goes through the line reader and exit ends the session.
- Validate Commander.run() with a scripted reader.

Conventions
- Test method names follow CamelCase per project convention.
- The line reader is replaced by a scripted stand-in.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from helmsman import Commander, Config, Command, SessionExit
from helmsman.utils import pad


class ScriptedReader:
    """Replays lines; exceptions in the script are raised instead."""

    def __init__(self, *lines):
        self.lines = list(lines)
        self.cleared = 0

    def read(self):
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    def clear(self):
        self.cleared += 1


def echo(node, args, captured, stdout):
    print("Alpha line", file=stdout)
    print("beta line", file=stdout)
    print("gamma", file=stdout)


class BuiltinTestCase(TestCase):

    def setUp(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.reader = ScriptedReader()
        self.commander = Commander(
            Config([Command("echo", descr="print three lines", handler=echo)]),
            reader=self.reader,
            stdout=self.stdout,
            stderr=self.stderr,
        )


class TestHelpCommand(BuiltinTestCase):

    def testListsCommandsSorted(self):
        self.commander.execute("help")
        lines = self.stdout.getvalue().splitlines()
        self.assertEqual(lines[0], "Command list:")
        self.assertEqual([line.split()[0] for line in lines[1:]], ["clear", "echo", "exit", "grep", "help"])
        self.assertIn(f"  {pad('echo')}print three lines", lines)

    def testHelpIsPipeable(self):
        self.commander.execute("help | grep exit")
        self.assertEqual(self.stdout.getvalue(), f"  {pad('exit')}exit the shell\n")


class TestGrepCommand(BuiltinTestCase):

    def testSubstringMatch(self):
        self.commander.execute("echo | grep line")
        self.assertEqual(self.stdout.getvalue(), "Alpha line\nbeta line\n")

    def testCaseSensitiveByDefault(self):
        self.commander.execute("echo | grep alpha")
        self.assertEqual(self.stdout.getvalue(), "")

    def testInsensitive(self):
        self.commander.execute("echo | grep --insensitive ALPHA")
        self.assertEqual(self.stdout.getvalue(), "Alpha line\n")

    def testQuotedPattern(self):
        self.commander.execute("echo | grep 'a line'")
        self.assertEqual(self.stdout.getvalue(), "Alpha line\nbeta line\n")

    def testWithoutInput(self):
        self.commander.execute("grep x")
        self.assertEqual(self.stdout.getvalue(), "")


class TestClearCommand(BuiltinTestCase):

    def testClearUsesReader(self):
        self.commander.execute("clear")
        self.assertEqual(self.reader.cleared, 1)

    def testClearWithoutReader(self):
        stdout = io.StringIO()
        Commander(stdout=stdout).execute("clear")
        self.assertEqual(stdout.getvalue(), "")


class TestExitCommand(BuiltinTestCase):

    def testExitRaises(self):
        with self.assertRaises(SessionExit):
            self.commander.execute("exit")


class TestRun(BuiltinTestCase):

    def testRunUntilEndOfInput(self):
        self.reader.lines = ["echo | grep gamma", "nope", "echo | grep beta"]
        self.commander.run()
        self.assertEqual(self.stdout.getvalue(), "gamma\nbeta line\n")
        self.assertIn("nope", self.stderr.getvalue())

    def testInterruptDiscardsLine(self):
        self.reader.lines = [KeyboardInterrupt(), "echo | grep gamma"]
        self.commander.run()
        self.assertEqual(self.stdout.getvalue(), "gamma\n")

    def testExitStopsLoop(self):
        self.reader.lines = ["exit", "echo"]
        self.commander.run()
        self.assertEqual(self.stdout.getvalue(), "")
        self.assertEqual(self.reader.lines, ["echo"])


if __name__ == "__main__":
    unittest.main()
