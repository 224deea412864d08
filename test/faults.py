"""
Fault model tests (codes, options, triggering, rendering).

Scope
- Validate fault codes, titles and hints.
- Validate trigger() raising outside shell mode and rendering inside it.
- Validate that option overrides keep the original cause.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman.faults import (
    FaultCode,
    ShellFault,
    ParseError,
    UnknownFlagError,
    ExecutionError,
    RouterCommandError,
    CaptureError,
    trigger,
    getdoc,
)


class TestFaults(TestCase):

    def testHierarchy(self):
        self.assertTrue(issubclass(UnknownFlagError, ParseError))
        self.assertTrue(issubclass(RouterCommandError, ExecutionError))
        self.assertTrue(issubclass(CaptureError, ShellFault))

    def testCodesAndTitles(self):
        fault = UnknownFlagError("unrecognized flag '--x'", hint="try --help")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_FLAG)
        self.assertEqual(fault.title, "unknown flag")
        self.assertEqual(fault.hint, "try --help")
        self.assertEqual(str(fault), "unrecognized flag '--x'")

    def testOptionsOverrideClassDefaults(self):
        fault = ShellFault("x", code=FaultCode.CAPTURE_FAILURE, title="custom")
        self.assertEqual(fault.code, FaultCode.CAPTURE_FAILURE)
        self.assertEqual(fault.title, "custom")

    def testMessageMustBeAString(self):
        with self.assertRaises(TypeError):
            ShellFault(42)  # type: ignore[arg-type]

    def testNormalizeWithoutHostMapping(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.UNKNOWN_COMMAND))
        with self.assertRaises(TypeError):
            getdoc(11101)

    def testReplaceKeepsCause(self):
        cause = RuntimeError("boom")
        fault = ExecutionError("failed")
        fault.__cause__ = cause
        replaced = copy.replace(fault, prog="demo")
        self.assertIs(replaced.__cause__, cause)
        self.assertEqual(replaced.options["prog"], "demo")
        self.assertIsInstance(replaced, ExecutionError)


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(UnknownFlagError):
            trigger(UnknownFlagError("unrecognized flag '--x'"))

    def testRendersInShell(self):
        output = io.StringIO()
        trigger(
            UnknownFlagError("unrecognized flag '--x'", hint="try --help"),
            shell=True,
            prog="demo",
            colorful=False,
            console=Console(file=output, width=100),
        )
        report = output.getvalue()
        self.assertIn("demo", report)
        self.assertIn("11202", report)
        self.assertIn("Unknown Flag", report)
        self.assertIn("unrecognized flag '--x'", report)
        self.assertIn("try --help", report)

    def testFancyRendering(self):
        output = io.StringIO()
        trigger(
            CaptureError("disk full"),
            shell=True,
            fancy=True,
            console=Console(file=output, width=100),
        )
        self.assertIn("disk full", output.getvalue())

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


if __name__ == "__main__":
    unittest.main()
