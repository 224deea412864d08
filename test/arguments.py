"""
Argument and Flag specification tests (sanitization, inference, suggestions).

Scope
- Validate name rules for flags and arguments.
- Validate type inference from choices/defaults and the boolean-flag rules.
- Validate defaults against type, arity and choices.
- Validate invocation forms and value suggestions.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Argument, Flag, Suggestion, ArgType).
"""

from __future__ import annotations

import unittest
from enum import Enum
from unittest import TestCase

from helmsman import Argument, Flag, Suggestion, ArgType, SchemaError


class Kind(str, Enum):
    MAMMAL = "mammal"
    BIRD = "bird"


class TestFlagSpec(TestCase):
    """Flag construction rules."""

    def testNameOrShortRequired(self):
        with self.assertRaises(SchemaError):
            Flag()

    def testNameTooShort(self):
        with self.assertRaises(SchemaError):
            Flag("x")

    def testShortTooLong(self):
        with self.assertRaises(SchemaError):
            Flag(short="ab")

    def testNameWithDashesRejected(self):
        with self.assertRaises(SchemaError):
            Flag("--type")

    def testNameWithOperatorRejected(self):
        with self.assertRaises(SchemaError):
            Flag("a|b")
        with self.assertRaises(SchemaError):
            Flag(short="=")

    def testNonStringNameRaises(self):
        with self.assertRaises(TypeError):
            Flag(42)  # type: ignore[arg-type]

    def testUnspecifiedTypeIsBool(self):
        flag = Flag("verbose", "v")
        self.assertIs(flag.type, ArgType.BOOL)
        self.assertIs(flag.default, False)

    def testTypeInferredFromChoices(self):
        self.assertIs(Flag("output", choices=("json", "yaml")).type, ArgType.STRING)
        self.assertIs(Flag("level", choices=(1, 2)).type, ArgType.INT)

    def testTypeInferredFromDefault(self):
        self.assertIs(Flag("count", default=3).type, ArgType.INT)
        self.assertIs(Flag("ratio", default=0.5).type, ArgType.FLOAT)

    def testFloatWidensIntegers(self):
        flag = Flag("ratio", type=float, default=1, choices=(1, 2.5))
        self.assertEqual(flag.default, 1.0)
        self.assertIsInstance(flag.default, float)
        self.assertEqual(flag.choices, (1.0, 2.5))

    def testEnumChoicesAreUnwrapped(self):
        flag = Flag("kind", choices=Kind, default=Kind.BIRD)
        self.assertEqual(flag.choices, ("mammal", "bird"))
        self.assertEqual(flag.default, "bird")
        self.assertIs(flag.type, ArgType.STRING)

    def testChoicesMustMatchType(self):
        with self.assertRaises(SchemaError):
            Flag("level", type=int, choices=("a",))

    def testDuplicateChoicesRejected(self):
        with self.assertRaises(SchemaError):
            Flag("output", choices=("json", "json"))

    def testDefaultMustMatchType(self):
        with self.assertRaises(SchemaError):
            Flag("level", type=int, default="high")

    def testDefaultMustBeAChoice(self):
        with self.assertRaises(SchemaError):
            Flag("output", choices=("json", "yaml"), default="table")

    def testMultipleDefaultMustBeAList(self):
        with self.assertRaises(SchemaError):
            Flag("tag", type=str, multiple=True, default="a")
        self.assertEqual(Flag("tag", type=str, multiple=True, default=["a", "b"]).default, ("a", "b"))

    def testBoolFlagRestrictions(self):
        with self.assertRaises(SchemaError):
            Flag("verbose", type=bool, multiple=True)
        with self.assertRaises(SchemaError):
            Flag("verbose", type=bool, completer=lambda prefix: [])

    def testRequiredIsCoercedToBool(self):
        self.assertIs(Flag("type", type=str, required=1).required, True)

    def testInvocationForms(self):
        self.assertEqual(Flag("type", "t", str).invocation, "-t, --type")
        self.assertEqual(Flag("sort", type=str).invocation, "--sort")
        self.assertEqual(Flag(short="t", type=str).invocation, "-t")

    def testPaddedAlignsLongNames(self):
        self.assertEqual(Flag("sort", type=str).padded, "    --sort")
        self.assertEqual(Flag("type", "t", str).padded, "-t, --type")

    def testKeyPrefersLongName(self):
        self.assertEqual(Flag("type", "t", str).key, "type")
        self.assertEqual(Flag(short="t", type=str).key, "t")
        self.assertEqual(Flag("type", "t", str).names, ("type", "t"))

    def testValidateIsIdempotent(self):
        flag = Flag("output", "o", choices=("json", "yaml"), default="json")
        self.assertIs(flag.validate(), flag)
        self.assertIs(flag.validate().validate(), flag)
        self.assertEqual(flag.default, "json")

    def testRepr(self):
        self.assertTrue(repr(Flag("sort", type=str)).startswith("flag(name='sort'"))


class TestArgumentSpec(TestCase):
    """Argument construction rules."""

    def testEmptyNameRejected(self):
        with self.assertRaises(SchemaError):
            Argument("  ")

    def testNonStringNameRaises(self):
        with self.assertRaises(TypeError):
            Argument(1)  # type: ignore[arg-type]

    def testDefaultTypeIsString(self):
        self.assertIs(Argument("pattern").type, ArgType.STRING)

    def testTypeInferredFromChoices(self):
        self.assertIs(Argument("size", choices=(1, 2, 3)).type, ArgType.INT)

    def testBoolCannotBeMultiple(self):
        with self.assertRaises(SchemaError):
            Argument("switches", type=bool, multiple=True)

    def testInvocation(self):
        self.assertEqual(Argument("file").invocation, "<file>")
        self.assertEqual(Argument("files", multiple=True).invocation, "<files...>")

    def testBadCompleterRaises(self):
        with self.assertRaises(TypeError):
            Argument("host", completer="localhost")  # type: ignore[arg-type]

    def testChoicesMustMatchType(self):
        with self.assertRaises(SchemaError):
            Argument("size", type=int, choices=("a",))


class TestValueSuggestions(TestCase):
    """Choices first, then the completer."""

    def testChoicesByPrefix(self):
        flag = Flag("output", "o", choices=("json", "yaml", "table"))
        self.assertEqual(flag.suggest("j"), [Suggestion("json", "json")])
        self.assertEqual([hit.value for hit in flag.suggest("")], ["json", "yaml", "table"])

    def testCompleter(self):
        hosts = ("alpha", "beta", "alpine")
        argument = Argument("host", completer=lambda prefix: [host for host in hosts if host.startswith(prefix)])
        self.assertEqual([hit.value for hit in argument.suggest("al")], ["alpha", "alpine"])

    def testNothingToSuggest(self):
        self.assertEqual(Argument("pattern").suggest("x"), [])

    def testFailingCompleterSuggestsNothing(self):
        def offline(prefix):
            raise RuntimeError("inventory service unreachable")

        self.assertEqual(Argument("host", completer=offline).suggest("al"), [])
        self.assertEqual(Flag("host", "H", str, completer=offline).suggest(""), [])


if __name__ == "__main__":
    unittest.main()
