"""
Registry behavioral tests (registration, validation, handler linking).

Scope
- Validate append, idempotent re-registration and capacity faults.
- Validate arg/kind and destination-type checks at registration.
- Validate linking a group to a FUNCTION option by handler id.

Conventions
- Test method names follow CamelCase per project convention.
- Contexts run outside shell mode, so faults are raised to the test.
- Sink output is captured in an in-memory rich console.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from tabargs import (
    ArgKind,
    ValueKind,
    FlagCell,
    TextBuffer,
    Handler,
    Option,
    OptionGroup,
    ConsoleSink,
    Context,
    flag,
    option,
    handler,
    register,
    MalformedOptionError,
    InvalidDestinationError,
    RegistryFullError,
    UnresolvedHandlerError,
    SetupError,
)


def quiet(**options):
    output = io.StringIO()
    return Context(ConsoleSink(Console(file=output, color_system=None, width=200)), **options), output


class TestRegister(TestCase):
    """Behavioral tests for register()."""

    def setUp(self):
        self.context, self.output = quiet()
        self.program = OptionGroup("Program Options", [flag("verbose"), option("name", capacity=16)])

    def testAppends(self):
        register(self.context, self.program)
        self.assertEqual(self.context.groups, (self.program,))

    def testDuplicateIsNoop(self):
        register(self.context, self.program)
        register(self.context, self.program)
        self.assertEqual(len(self.context.groups), 1)

    def testCapacity(self):
        context, _ = quiet(capacity=1)
        register(context, self.program)
        register(context, self.program)
        with self.assertRaises(RegistryFullError):
            register(context, OptionGroup("Other", [flag("other")]))
        self.assertEqual(len(context.groups), 1)

    def testRejectsNonGroups(self):
        with self.assertRaises(TypeError):
            register(self.context, [flag("verbose")])

    def testRequiredArgumentFlagIsMalformed(self):
        bad = Option("verbose", arg=ArgKind.REQUIRED_ARGUMENT, kind=ValueKind.FLAG, destination=FlagCell())
        with self.assertRaises(MalformedOptionError):
            register(self.context, OptionGroup("Bad", [bad]))
        self.assertEqual(self.context.groups, ())

    def testNoArgumentStringIsMalformed(self):
        bad = Option("name", kind=ValueKind.STRING, destination=TextBuffer())
        with self.assertRaises(MalformedOptionError):
            register(self.context, OptionGroup("Bad", [bad]))

    def testNoneKindIsMalformed(self):
        bad = Option("nothing", arg=ArgKind.REQUIRED_ARGUMENT, kind=ValueKind.NONE)
        with self.assertRaises(SetupError):
            register(self.context, OptionGroup("Bad", [bad]))

    def testWrongDestinationType(self):
        bad = Option("count", arg=ArgKind.REQUIRED_ARGUMENT, kind=ValueKind.INT, destination=TextBuffer())
        with self.assertRaises(InvalidDestinationError):
            register(self.context, OptionGroup("Bad", [bad]))
        self.assertIn("cannot write through TextBuffer", self.output.getvalue())

    def testUnboundDestinationAccepted(self):
        unbound = Option("count", arg=ArgKind.REQUIRED_ARGUMENT, kind=ValueKind.INT)
        group = OptionGroup("Unbound", [unbound])
        register(self.context, group)
        self.assertEqual(self.context.groups, (group,))


class TestLinking(TestCase):
    """Behavioral tests for handler-linked registration."""

    def setUp(self):
        self.context, _ = quiet()

        @handler("hello")
        def hello():
            pass

        self.hello = hello
        self.commands = OptionGroup("Commands", [hello])
        self.greeting = OptionGroup("Hello Options", [flag("loud")])
        register(self.context, self.commands)

    def testLinkById(self):
        register(self.context, self.greeting, "hello")
        self.assertIs(self.hello.linked, self.greeting)
        self.assertEqual(self.context.groups, (self.commands,))

    def testLinkByHandler(self):
        register(self.context, self.greeting, Handler("hello"))
        self.assertIs(self.hello.linked, self.greeting)
        self.assertIs(self.context.find_handler("hello"), self.hello)

    def testUnresolvedHandler(self):
        with self.assertRaises(UnresolvedHandlerError):
            register(self.context, self.greeting, "goodbye")
        self.assertIsNone(self.hello.linked)

    def testLinkedGroupIsValidated(self):
        bad = OptionGroup("Bad", [Option("loud", kind=ValueKind.STRING, destination=TextBuffer())])
        with self.assertRaises(MalformedOptionError):
            register(self.context, bad, "hello")
        self.assertIsNone(self.hello.linked)


if __name__ == "__main__":
    unittest.main()
