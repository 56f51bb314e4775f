"""
Arguments module behavioral tests (Flag and Argument declarations).

Scope
- Validate construction and normalization of Flag and Argument specs.
- Validate name/alias rules and description rules.
- Validate immutability and stable representations.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Flag, Argument).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from switchyard import Flag, Argument


class TestFlag(TestCase):
    """Behavioral tests for Flag specifications."""

    def testFlagDefaults(self):
        f = Flag("output")
        self.assertEqual(f.name, "output")
        self.assertEqual(f.aliases, ())
        self.assertFalse(f.boolean)
        self.assertIsNone(f.descr)
        self.assertFalse(f.hidden)

    def testFlagNamesListCanonicalFirst(self):
        f = Flag("verbose", "v", "loud", boolean=True)
        self.assertEqual(f.names, ("verbose", "v", "loud"))
        self.assertTrue(f.boolean)

    def testFlagDescrIsTrimmed(self):
        self.assertEqual(Flag("x", descr="  the x flag ").descr, "the x flag")

    def testFlagDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Flag("x", descr="   ")

    def testFlagDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Flag("x", descr=None)

    def testFlagNameMustBeString(self):
        with self.assertRaises(TypeError):
            Flag(1)

    def testFlagNameEmptyRejected(self):
        with self.assertRaises(ValueError):
            Flag("")

    def testFlagNameWithDashesRejected(self):
        with self.assertRaises(ValueError):
            Flag("--verbose")
        with self.assertRaises(ValueError):
            Flag("verbose", "-v")

    def testFlagNameWithSpacesRejected(self):
        with self.assertRaises(ValueError):
            Flag("dry run")

    def testFlagDashedWordsAccepted(self):
        self.assertEqual(Flag("dry-run").name, "dry-run")

    def testFlagDuplicatedAliasRejected(self):
        with self.assertRaises(ValueError):
            Flag("verbose", "v", "v")
        with self.assertRaises(ValueError):
            Flag("verbose", "verbose")

    def testFlagIsReadOnly(self):
        f = Flag("verbose")
        with self.assertRaises(AttributeError):
            f.name = "quiet"
        with self.assertRaises(AttributeError):
            f.boolean = True

    def testFlagRepr(self):
        self.assertEqual(
            repr(Flag("verbose", "v", boolean=True)),
            "flag(name='verbose', aliases=('v',), boolean=True, descr=None)",
        )


class TestArgument(TestCase):
    """Behavioral tests for Argument specifications."""

    def testArgumentDefaults(self):
        a = Argument("target")
        self.assertEqual(a.name, "target")
        self.assertFalse(a.multiple)
        self.assertIsNone(a.descr)
        self.assertFalse(a.hidden)

    def testArgumentMultiple(self):
        self.assertTrue(Argument("files", multiple=True).multiple)

    def testArgumentMultipleIsKeywordOnly(self):
        with self.assertRaises(TypeError):
            Argument("files", True)

    def testArgumentNameRules(self):
        with self.assertRaises(TypeError):
            Argument(None)
        with self.assertRaises(ValueError):
            Argument("")
        with self.assertRaises(ValueError):
            Argument("-files")

    def testArgumentIsReadOnly(self):
        a = Argument("files")
        with self.assertRaises(AttributeError):
            a.multiple = True

    def testArgumentRepr(self):
        self.assertEqual(
            repr(Argument("files", multiple=True)),
            "argument(name='files', multiple=True, descr=None)",
        )


if __name__ == "__main__":
    unittest.main()
