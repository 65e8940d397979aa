"""
Matcher behavioral tests (getopt_index over one option table).

Scope
- Validate matches for presence and argument-taking options.
- Validate help, stray, missing-argument and end results.
- Validate ledger exclusivity, parsed-option skipping and first-match-wins.

Conventions
- Test method names follow CamelCase per project convention.
- Each test builds its own context and table so parsed bits never leak.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from tabargs import ConsoleSink, Context, OptionTable, flag, option
from tabargs.matcher import GetOpt, getopt_index, strip_dashes


class TestGetoptIndex(TestCase):
    """Behavioral tests for getopt_index()."""

    def setUp(self):
        self.context = Context(ConsoleSink(Console(file=io.StringIO(), color_system=None, width=200)))
        self.table = OptionTable([flag("verbose"), option("name", capacity=16)])

    def testStripDashes(self):
        self.assertEqual(strip_dashes("--name"), "name")
        self.assertEqual(strip_dashes("-name"), "name")
        self.assertEqual(strip_dashes("name"), "name")

    def testPresenceOption(self):
        found = getopt_index(self.context, ["prog", "--verbose"], self.table)
        self.assertEqual(found.result, GetOpt.OK)
        self.assertEqual(found.index, 0)
        self.assertIsNone(found.argument)
        self.assertEqual(self.context.cursor, 2)
        self.assertTrue(self.context.ledger[1])
        self.assertTrue(self.table[0].parsed)

    def testSingleDash(self):
        found = getopt_index(self.context, ["prog", "-verbose"], self.table)
        self.assertEqual(found.result, GetOpt.OK)

    def testRequiredArgument(self):
        found = getopt_index(self.context, ["prog", "--name", "Ada"], self.table)
        self.assertEqual(found.result, GetOpt.OK)
        self.assertEqual(found.index, 1)
        self.assertEqual(found.argument, "Ada")
        self.assertEqual(self.context.cursor, 3)
        self.assertTrue(self.context.ledger[1])
        self.assertTrue(self.context.ledger[2])

    def testMissingArgumentAtEnd(self):
        found = getopt_index(self.context, ["prog", "--name"], self.table)
        self.assertEqual(found.result, GetOpt.MISSING_ARG)
        self.assertFalse(self.context.ledger[1])

    def testDashedArgumentIsMissing(self):
        found = getopt_index(self.context, ["prog", "--name", "--verbose"], self.table)
        self.assertEqual(found.result, GetOpt.MISSING_ARG)
        self.assertEqual(found.position, 1)

    def testStrayArgument(self):
        found = getopt_index(self.context, ["prog", "stray"], self.table)
        self.assertEqual(found.result, GetOpt.STRAY_ARG)
        self.assertEqual(found.argument, "stray")
        self.assertEqual(found.position, 1)

    def testStrayAfterConsumedOption(self):
        argv = ["prog", "--verbose", "stray"]
        self.assertEqual(getopt_index(self.context, argv, self.table).result, GetOpt.OK)
        self.assertEqual(getopt_index(self.context, argv, self.table).result, GetOpt.STRAY_ARG)

    def testHelpIsConsumed(self):
        argv = ["prog", "--verbose", "-help"]
        self.assertEqual(getopt_index(self.context, argv, self.table).result, GetOpt.OK)
        found = getopt_index(self.context, argv, self.table)
        self.assertEqual(found.result, GetOpt.HELP)
        self.assertTrue(self.context.ledger[2])

    def testEnd(self):
        found = getopt_index(self.context, ["prog", "--other"], self.table)
        self.assertEqual(found.result, GetOpt.END)
        self.assertEqual(self.context.cursor, 2)
        self.assertFalse(self.context.ledger[1])

    def testValueOfForeignOptionIsDeferred(self):
        found = getopt_index(self.context, ["prog", "--other", "value"], self.table)
        self.assertEqual(found.result, GetOpt.END)
        self.assertEqual(self.context.deferred, {2})
        self.assertFalse(self.context.ledger[2])

    def testConsumedPositionsAreSkipped(self):
        self.context.ledger.mark(1)
        found = getopt_index(self.context, ["prog", "stray", "--verbose"], self.table)
        self.assertEqual(found.result, GetOpt.OK)
        self.assertEqual(found.position, 2)

    def testParsedOptionsAreSkipped(self):
        self.table[0].parsed = True
        found = getopt_index(self.context, ["prog", "--verbose"], self.table)
        self.assertEqual(found.result, GetOpt.END)

    def testFirstMatchWins(self):
        table = OptionTable([flag("dup"), flag("dup")])
        argv = ["prog", "--dup", "--dup"]
        self.assertEqual(getopt_index(self.context, argv, table).index, 0)
        found = getopt_index(self.context, argv, table)
        self.assertEqual(found.index, 1)
        self.assertEqual(found.position, 2)


if __name__ == "__main__":
    unittest.main()
