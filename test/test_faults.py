"""
Faults behavioral tests (codes, options, rendering, triggering).

Scope
- Validate fault codes and exit statuses.
- Validate read-only options, attribute access and __replace__ merging.
- Validate rich rendering of the header, message and hint.
- Validate trigger(): raise outside shell mode, exit inside it.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from tabargs import (
    FaultCode,
    ArgsFault,
    ParseError,
    SetupError,
    StrayArgumentError,
    RegistryFullError,
    HelpRequested,
    trigger,
)


class TestFaults(TestCase):
    """Behavioral tests for ArgsFault and its subclasses."""

    def testCodesAndFamilies(self):
        self.assertEqual(StrayArgumentError.code, FaultCode.STRAY_ARGUMENT)
        self.assertEqual(int(FaultCode.REGISTRY_FULL), 21103)
        self.assertTrue(issubclass(StrayArgumentError, ParseError))
        self.assertTrue(issubclass(RegistryFullError, SetupError))
        self.assertEqual(StrayArgumentError.status, 1)
        self.assertEqual(HelpRequested.status, 0)

    def testOptionsAreReadOnly(self):
        fault = StrayArgumentError("stray argument 'x'", token="x")
        self.assertEqual(fault.token, "x")
        self.assertEqual(str(fault), "stray argument 'x'")
        with self.assertRaises(TypeError):
            fault.options["token"] = "y"
        with self.assertRaises(AttributeError):
            fault.position

    def testReplaceMergesOptions(self):
        fault = StrayArgumentError("stray", token="x")
        copy = fault.__replace__(position=2)
        self.assertIsInstance(copy, StrayArgumentError)
        self.assertEqual(copy.token, "x")
        self.assertEqual(copy.position, 2)
        self.assertNotIn("position", fault.options)

    def testRender(self):
        output = io.StringIO()
        console = Console(file=output, color_system=None, width=200)
        console.print(StrayArgumentError("stray argument 'x'", title="stray argument", hint="remove it"))
        rendered = output.getvalue()
        self.assertIn("21111", rendered)
        self.assertIn("Stray Argument", rendered)
        self.assertIn("stray argument 'x'", rendered)
        self.assertIn("→ remove it", rendered)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(StrayArgumentError) as context:
            trigger(StrayArgumentError("stray"), token="x")
        self.assertEqual(context.exception.token, "x")

    def testExitsInShell(self):
        with self.assertRaises(SystemExit) as context:
            trigger(StrayArgumentError("stray"), shell=True)
        self.assertEqual(context.exception.code, 1)

    def testHelpExitsWithSuccess(self):
        with self.assertRaises(SystemExit) as context:
            trigger(HelpRequested("help"), shell=True)
        self.assertEqual(context.exception.code, 0)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testBaseFaultHasNoCode(self):
        self.assertFalse(ArgsFault.code)


if __name__ == "__main__":
    unittest.main()
