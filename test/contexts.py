"""
Contexts module behavioral tests (handler-side lookups).

Scope
- Validate flag lookups by canonical name and alias.
- Validate argument lookups for single and multiple arguments.
- Validate defaults and NotFoundError for anything left unbound.
- Validate stream and console exposure.

Conventions
- Test method names follow CamelCase per project convention.
- Contexts are built directly from parse() results and in-memory streams.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from switchyard import Argument, Command, Context, Flag, NotFoundError, Streams, parse


class TestContext(TestCase):

    def setUp(self):
        self.command = Command(
            "tool",
            flags=[Flag("verbose", "v", boolean=True), Flag("level", "l")],
            arguments=[Argument("target"), Argument("rest", multiple=True)],
        )
        self.streams = Streams(io.StringIO("input"), io.StringIO(), io.StringIO())

    def context(self, *tokens):
        return Context(self.command, parse(self.command, tokens), self.streams)

    def testFlagByCanonicalName(self):
        self.assertEqual(self.context("-l", "3").flag("level"), "3")

    def testFlagByAlias(self):
        ctx = self.context("-v")
        self.assertEqual(ctx.flag("v"), "true")
        self.assertEqual(ctx.flag("verbose"), "true")

    def testAbsentFlagRaises(self):
        with self.assertRaises(NotFoundError) as context:
            self.context().flag("verbose")
        self.assertEqual(context.exception.options["name"], "verbose")
        self.assertIs(context.exception.options["command"], self.command)

    def testUndeclaredFlagRaises(self):
        with self.assertRaises(NotFoundError):
            self.context("-v").flag("quiet")

    def testAbsentFlagDefault(self):
        self.assertEqual(self.context().flag("verbose", "false"), "false")
        self.assertIsNone(self.context().flag("level", None))

    def testArgumentLookups(self):
        ctx = self.context("t", "a", "b")
        self.assertEqual(ctx.argument("target"), "t")
        self.assertEqual(ctx.argument("rest"), ("a", "b"))

    def testAbsentArgumentRaises(self):
        with self.assertRaises(NotFoundError):
            self.context("t").argument("rest")

    def testAbsentArgumentDefault(self):
        self.assertEqual(self.context("t").argument("rest", ()), ())

    def testNotFoundIsLookupError(self):
        with self.assertRaises(LookupError):
            self.context().argument("target")

    def testStreamsAreBorrowed(self):
        ctx = self.context()
        self.assertIs(ctx.stdin, self.streams.stdin)
        self.assertIs(ctx.stdout, self.streams.stdout)
        self.assertIs(ctx.stderr, self.streams.stderr)
        self.assertEqual(ctx.stdin.read(), "input")

    def testConsoleWritesToStdout(self):
        ctx = self.context()
        self.assertIs(ctx.console, ctx.console)
        ctx.console.print("hello")
        self.assertIn("hello", self.streams.stdout.getvalue())

    def testContextExposesCommandAndBindings(self):
        ctx = self.context("t")
        self.assertIs(ctx.command, self.command)
        self.assertEqual(ctx.bindings.arguments, {"target": "t"})


if __name__ == "__main__":
    unittest.main()
