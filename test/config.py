"""
Configuration and logging setup tests.

Scope
- Validate Config defaults and field sanitization.
- Validate that a configured log level attaches a single rich handler.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import logging
import unittest
from unittest import TestCase

from rich.logging import RichHandler

from helmsman import Config, Command, Commander, SchemaError
from helmsman import logs


class TestConfig(TestCase):

    def testDefaults(self):
        config = Config()
        self.assertEqual(config.prompt, "» ")
        self.assertEqual(config.commands, ())
        self.assertIsNone(config.dump)
        self.assertEqual(config.suggestion, "fg:ansigreen")
        self.assertEqual(config.styles, {})
        self.assertIsNone(config.loglevel)
        self.assertEqual(config.prog, "helmsman")
        self.assertTrue(config.colorful)
        self.assertFalse(config.fancy)

    def testCommandsAreFrozen(self):
        leaf = Command("status", handler=print)
        commands = [leaf]
        config = Config(commands)
        commands.append(Command("other", handler=print))
        self.assertEqual(config.commands, (leaf,))

    def testCommandsMustBeCommands(self):
        with self.assertRaises(TypeError):
            Config(["status"])  # type: ignore[list-item]
        with self.assertRaises(TypeError):
            Config("status")  # type: ignore[arg-type]

    def testPromptMustBeAString(self):
        with self.assertRaises(TypeError):
            Config(prompt=1)  # type: ignore[arg-type]

    def testLogLevelNames(self):
        self.assertEqual(Config(loglevel="debug").loglevel, logging.DEBUG)
        self.assertEqual(Config(loglevel=logging.INFO).loglevel, logging.INFO)
        with self.assertRaises(SchemaError):
            Config(loglevel="chatty")
        with self.assertRaises(TypeError):
            Config(loglevel=True)

    def testEmptyValuesRejected(self):
        with self.assertRaises(SchemaError):
            Config(dump="  ")
        with self.assertRaises(SchemaError):
            Config(prog=" ")

    def testStylesAreCopied(self):
        styles = {"code": "bold"}
        config = Config(styles=styles)
        styles["code"] = "italic"
        self.assertEqual(config.styles, {"code": "bold"})


class TestLogging(TestCase):

    def setUp(self):
        self.logger = logging.getLogger("helmsman")
        self.level = self.logger.level
        self.handlers = list(self.logger.handlers)

    def tearDown(self):
        self.logger.handlers[:] = self.handlers
        self.logger.setLevel(self.level)

    def testConfigureOnce(self):
        first = logs.configure(logging.DEBUG)
        second = logs.configure(logging.INFO)
        self.assertIs(first, second)
        self.assertIsInstance(first, RichHandler)
        self.assertEqual(sum(isinstance(handler, RichHandler) for handler in self.logger.handlers), 1)
        self.assertEqual(self.logger.level, logging.INFO)

    def testCommanderAppliesLogLevel(self):
        Commander(Config(loglevel="debug"))
        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertTrue(any(isinstance(handler, RichHandler) for handler in self.logger.handlers))

    def testCommanderLeavesLoggingAlone(self):
        Commander()
        self.assertEqual(self.logger.handlers, self.handlers)


if __name__ == "__main__":
    unittest.main()
