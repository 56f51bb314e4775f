"""
Parsing module behavioral tests (binding tokens to flags and arguments).

Scope
- Validate the token grammar: long flags, short flags, positionals.
- Validate binding rules: boolean flags, valued flags, single and multiple arguments.
- Validate faults: unknown flags, missing values, unexpected arguments,
  including the 1-based position they report.
- Validate Bindings as a value object.

Conventions
- Test method names follow CamelCase per project convention.
- Commands are built per test; the parser never needs a tree.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from switchyard import (
    Argument,
    Bindings,
    Command,
    Flag,
    MissingFlagValueError,
    UnexpectedArgumentError,
    UnknownFlagError,
    parse,
)


class TestParseFlags(TestCase):
    """Flag tokens."""

    def setUp(self):
        self.command = Command(
            "tool",
            flags=[
                Flag("verbose", "v", boolean=True),
                Flag("output", "o"),
                Flag("one"),
            ],
        )

    def testBooleanFlagBindsTrue(self):
        self.assertEqual(parse(self.command, ["--verbose"]).flags, {"verbose": "true"})

    def testShortAliasBindsCanonicalName(self):
        self.assertEqual(parse(self.command, ["-v"]).flags, {"verbose": "true"})
        self.assertEqual(parse(self.command, ["-o", "out.txt"]).flags, {"output": "out.txt"})

    def testLongAliasBindsCanonicalName(self):
        self.assertEqual(parse(self.command, ["--o", "out.txt"]).flags, {"output": "out.txt"})

    def testValuedFlagTakesNextTokenVerbatim(self):
        self.assertEqual(parse(self.command, ["--one", "--verbose"]).flags, {"one": "--verbose"})
        self.assertEqual(parse(self.command, ["--one", "-"]).flags, {"one": "-"})

    def testRepeatedFlagLastOccurrenceWins(self):
        bindings = parse(self.command, ["--output", "a", "-o", "b"])
        self.assertEqual(bindings.flags, {"output": "b"})

    def testAbsentFlagsAreUnbound(self):
        self.assertEqual(parse(self.command, []), Bindings())

    def testMissingFlagValue(self):
        with self.assertRaises(MissingFlagValueError) as context:
            parse(self.command, ["--one"])
        fault = context.exception
        self.assertEqual(fault.options["name"], "one")
        self.assertEqual(fault.options["index"], 1)
        self.assertIn("first position", str(fault))

    def testUnknownLongFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            parse(self.command, ["--verbose", "--nope"])
        fault = context.exception
        self.assertEqual(fault.options["token"], "--nope")
        self.assertEqual(fault.options["index"], 2)
        self.assertEqual(str(fault), "unknown flag '--nope' at second position")

    def testUnknownShortFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            parse(self.command, ["-x"])
        self.assertEqual(context.exception.options["name"], "x")

    def testUnknownFlagSuggestsCloseName(self):
        with self.assertRaises(UnknownFlagError) as context:
            parse(self.command, ["--verbos"])
        self.assertIn("verbose", context.exception.options["suggestions"])
        self.assertIn("--verbose", context.exception.options["hint"])

    def testEqualsSpellingIsNotSplit(self):
        with self.assertRaises(UnknownFlagError) as context:
            parse(self.command, ["--output=x"])
        self.assertEqual(context.exception.options["name"], "output=x")

    def testOffsetShiftsReportedPosition(self):
        with self.assertRaises(UnknownFlagError) as context:
            parse(self.command, ["--nope"], offset=2)
        self.assertEqual(context.exception.options["index"], 3)
        self.assertIn("third position", str(context.exception))


class TestParseArguments(TestCase):
    """Positional tokens."""

    def testArgumentsBindInOrder(self):
        c = Command("cp", arguments=[Argument("source"), Argument("dest")])
        self.assertEqual(parse(c, ["a", "b"]).arguments, {"source": "a", "dest": "b"})

    def testUnfilledArgumentsAreUnbound(self):
        c = Command("cp", arguments=[Argument("source"), Argument("dest")])
        self.assertEqual(parse(c, ["a"]).arguments, {"source": "a"})

    def testMultipleArgumentCollectsRest(self):
        c = Command("rm", arguments=[Argument("files", multiple=True)])
        self.assertEqual(parse(c, ["a", "b", "c"]).arguments, {"files": ("a", "b", "c")})

    def testMultipleArgumentSingleValueIsTuple(self):
        c = Command("rm", arguments=[Argument("files", multiple=True)])
        self.assertEqual(parse(c, ["a"]).arguments, {"files": ("a",)})

    def testEmptyMultipleArgumentIsUnbound(self):
        c = Command("rm", arguments=[Argument("files", multiple=True)])
        self.assertNotIn("files", parse(c, []).arguments)

    def testFlagsInterleaveWithArguments(self):
        c = Command(
            "tool",
            flags=[Flag("f")],
            arguments=[Argument("a"), Argument("b", multiple=True)],
        )
        bindings = parse(c, ["x", "--f", "v", "y", "z"])
        self.assertEqual(bindings.flags, {"f": "v"})
        self.assertEqual(bindings.arguments, {"a": "x", "b": ("y", "z")})

    def testDashTokensArePositional(self):
        c = Command("tool", arguments=[Argument("items", multiple=True)])
        self.assertEqual(
            parse(c, ["-", "-abc", "--"]).arguments,
            {"items": ("-", "-abc", "--")},
        )

    def testUnexpectedArgument(self):
        c = Command("tool")
        with self.assertRaises(UnexpectedArgumentError) as context:
            parse(c, ["extra"])
        fault = context.exception
        self.assertEqual(fault.options["token"], "extra")
        self.assertEqual(fault.options["index"], 1)
        self.assertEqual(str(fault), "unexpected argument 'extra' at first position")

    def testUnexpectedArgumentAfterFilledSlots(self):
        c = Command("tool", flags=[Flag("v", boolean=True)], arguments=[Argument("one")])
        with self.assertRaises(UnexpectedArgumentError) as context:
            parse(c, ["a", "-v", "b"])
        self.assertEqual(context.exception.options["index"], 3)


class TestParseProperties(TestCase):
    """Whole-parse guarantees."""

    def setUp(self):
        self.command = Command(
            "tool",
            flags=[Flag("verbose", "v", boolean=True), Flag("level", "l")],
            arguments=[Argument("target"), Argument("rest", multiple=True)],
        )

    def testParseIsDeterministic(self):
        tokens = ["-v", "t", "--level", "3", "r1", "r2"]
        self.assertEqual(parse(self.command, tokens), parse(self.command, tokens))

    def testParseAcceptsAnyIterable(self):
        self.assertEqual(
            parse(self.command, iter(["t", "-v"])),
            Bindings({"verbose": "true"}, {"target": "t"}),
        )

    def testBoundFlagKeysAreCanonical(self):
        bindings = parse(self.command, ["-v", "-l", "2"])
        for key in bindings.flags:
            self.assertEqual(self.command.lookup(key).name, key)


class TestBindings(TestCase):
    """Bindings value object."""

    def testBindingsAreReadOnly(self):
        bindings = Bindings({"a": "1"}, {"b": "2"})
        with self.assertRaises(TypeError):
            bindings.flags["a"] = "3"
        with self.assertRaises(TypeError):
            bindings.arguments["c"] = "3"

    def testBindingsEqualityAndHash(self):
        one = Bindings({"a": "1"}, {"b": ("x", "y")})
        two = Bindings([("a", "1")], [("b", ("x", "y"))])
        self.assertEqual(one, two)
        self.assertEqual(hash(one), hash(two))
        self.assertNotEqual(one, Bindings({"a": "1"}))

    def testBindingsRepr(self):
        self.assertEqual(
            repr(Bindings({"a": "1"}, {"b": "2"})),
            "bindings(flags={'a': '1'}, arguments={'b': '2'})",
        )


if __name__ == "__main__":
    unittest.main()
