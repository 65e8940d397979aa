"""
Help renderer behavioral tests.

Scope
- Validate the general help layout: header, introduction, one sub-header per group.
- Validate that groups made only of FUNCTION options are listed in general help
  and hidden from handler help.
- Validate handler help with and without a linked group.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured from an in-memory rich console without color.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from tabargs import (
    ConsoleSink,
    Context,
    OptionGroup,
    NAME_WIDTH,
    flag,
    option,
    handler,
    register,
    print_help,
    print_option,
)


class TestPrintHelp(TestCase):
    """Behavioral tests for print_help() and print_option()."""

    def setUp(self):
        self.output = io.StringIO()
        self.sink = ConsoleSink(Console(file=self.output, color_system=None, width=200))
        self.context = Context(self.sink)

        @handler("hello", "say hello")
        def hello():
            pass

        @handler("bye", "say goodbye")
        def bye():
            pass

        self.program = OptionGroup("Program Options", [flag("verbose", "print more"), option("name", "who to greet")])
        self.commands = OptionGroup("Commands", [hello, bye])
        self.greeting = OptionGroup("Hello Options", [flag("loud", "shout")], help="Greets --name.")
        register(self.context, self.program)
        register(self.context, self.commands)
        register(self.context, self.greeting, "hello")

    def lines(self):
        return self.output.getvalue().splitlines()

    def testOptionLine(self):
        print_option(self.sink, self.program.table[1])
        line, = self.lines()
        self.assertEqual(line, "    " + "--name".ljust(NAME_WIDTH) + " [arg] who to greet")

    def testGeneralHelp(self):
        print_help(self.context)
        output = self.output.getvalue()
        self.assertTrue(self.lines()[0].startswith("═[ Help ]═"))
        self.assertIn("[fnc] tag", output)
        self.assertIn("─[ Program Options ]", output)
        self.assertIn("─[ Commands ]", output)
        self.assertIn("--hello", output)
        self.assertNotIn("--loud", output)

    def testGeneralHelpListsFunctionGroups(self):
        print_help(self.context)
        self.assertIn("─[ Commands ]", self.output.getvalue())
        self.assertIn("--bye", self.output.getvalue())

        self.output.seek(0)
        self.output.truncate()
        print_help(self.context, "hello")
        self.assertNotIn("─[ Commands ]", self.output.getvalue())
        self.assertNotIn("--bye", self.output.getvalue())

    def testHandlerHelp(self):
        print_help(self.context, "hello")
        output = self.output.getvalue()
        self.assertIn("The following are options for the following function:", output)
        self.assertIn("─[ Extended Help ]", output)
        self.assertIn("Greets --name.", output)
        self.assertIn("--loud", output)
        self.assertIn("─[ Program Options ]", output)
        self.assertNotIn("─[ Commands ]", output)
        self.assertNotIn("--bye", output)

    def testHandlerHelpWithoutOptions(self):
        print_help(self.context, "bye")
        output = self.output.getvalue()
        self.assertIn("The following function does not have specific arguments:", output)
        self.assertIn("--bye", output)
        self.assertNotIn("Extended Help", output)


if __name__ == "__main__":
    unittest.main()
