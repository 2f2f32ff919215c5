# python
"""
Faults module behavioral tests.

Scope
- Validate fault codes and their host normalization through __main__.__codes__.
- Validate that faults carry message + read-only options and expose their context.
- Validate trigger(): raising, warning, shell rendering and exit.
- Validate rich rendering (plain and fancy) and getdoc().

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with a rich Console writing to a StringIO without colors.
"""

from __future__ import annotations

import __main__
import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from pxargs.faults import (
    ArgumentFault,
    ArgumentWarning,
    ConfigurationError,
    ConversionError,
    MissingValueError,
    UntaggedArgumentWarning,
    DuplicatedTagWarning,
    FaultCode,
    trigger,
    getdoc,
)


def render(fault):
    buffer = io.StringIO()
    Console(file=buffer, color_system=None, width=200).print(fault)
    return buffer.getvalue()


class TestFaultCode(TestCase):

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "21121")

    def testNormalizeUsesHostMapping(self):
        with mock.patch.object(__main__, "__codes__", {FaultCode.MISSING_VALUE: "PX-MISSING"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "PX-MISSING")
            self.assertEqual(FaultCode.UNCONVERTIBLE_VALUE.normalize(), "21111")

    def testCodesAreUnique(self):
        self.assertEqual(len(set(FaultCode)), len(FaultCode.__members__))


class TestFaults(TestCase):

    def testHierarchy(self):
        for cls in (ConfigurationError, ConversionError, MissingValueError):
            self.assertTrue(issubclass(cls, ArgumentFault))
            self.assertTrue(issubclass(cls, Exception))
        for cls in (UntaggedArgumentWarning, DuplicatedTagWarning):
            self.assertTrue(issubclass(cls, ArgumentWarning))
            self.assertTrue(issubclass(cls, Warning))

    def testMessageIsStr(self):
        self.assertEqual(str(MissingValueError("value 'count' does not have a value")), "value 'count' does not have a value")

    def testDefaultOptions(self):
        fault = MissingValueError("missing")
        self.assertEqual(fault.code, FaultCode.MISSING_VALUE)
        self.assertEqual(fault.options["title"], "missing value")
        self.assertFalse(fault.options["shell"])

    def testOptionsAreReadOnly(self):
        fault = ConversionError("bad", token="x")
        with self.assertRaises(TypeError):
            fault.options["token"] = "y"

    def testConversionContext(self):
        fault = ConversionError("bad", token="x", position=4, argument="count")
        self.assertEqual((fault.token, fault.position, fault.argument), ("x", 4, "count"))

    def testConfigurationDefaultCodeIsNeutral(self):
        fault = ConfigurationError("broken")
        self.assertEqual(fault.code, FaultCode.INVALID_CONFIGURATION)
        self.assertIn("21100", render(fault))

    def testCodeOverride(self):
        fault = ConfigurationError("already parsed", code=FaultCode.ALREADY_PARSED)
        self.assertEqual(fault.code, FaultCode.ALREADY_PARSED)


class TestTrigger(TestCase):

    def testRaisesReplacedFault(self):
        with self.assertRaises(ConversionError) as context:
            trigger(ConversionError("bad", token="x"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")
        self.assertEqual(context.exception.token, "x")

    def testPreservesCause(self):
        fault = ConversionError("bad")
        fault.__cause__ = ValueError("inner")
        with self.assertRaises(ConversionError) as context:
            trigger(fault)
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testWarnsForWarnings(self):
        with self.assertWarns(DuplicatedTagWarning):
            trigger(DuplicatedTagWarning("shared"))

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())

    def testShellModeRendersAndExits(self):
        buffer = io.StringIO()
        with mock.patch("pxargs.faults.console", Console(file=buffer, color_system=None, width=200)):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingValueError("no value"), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("Missing Value", buffer.getvalue())

    def testShellModeWarningsDoNotExit(self):
        buffer = io.StringIO()
        with mock.patch("pxargs.faults.console", Console(file=buffer, color_system=None, width=200)):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                trigger(UntaggedArgumentWarning("no tag"), shell=True, prog="tool")
        self.assertIn("no tag", buffer.getvalue())


class TestRendering(TestCase):

    def testHeaderMessageAndHint(self):
        output = render(ConversionError("cannot convert 'x'", prog="tool", hint="expects an int"))
        self.assertIn("[ tool — 21111 | Unconvertible Value ]", output)
        self.assertIn("cannot convert 'x'", output)
        self.assertIn("→ expects an int", output)

    def testHintIsOptional(self):
        output = render(MissingValueError("no value", prog="tool"))
        self.assertNotIn("→", output)

    def testProgOverriddenByHost(self):
        with mock.patch.object(__main__, "__prog__", "hosted", create=True):
            output = render(MissingValueError("no value", prog="tool"))
        self.assertIn("[ hosted —", output)

    def testFancyUsesPanel(self):
        output = render(ConfigurationError("conflict", prog="tool", fancy=True))
        self.assertIn("╭", output)
        self.assertIn("conflict", output)

    def testPlainRendering(self):
        output = render(DuplicatedTagWarning("shared", prog="tool", colorful=False))
        self.assertIn("Duplicated Tag", output)


class TestGetdoc(TestCase):

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.DUPLICATED_TAG))

    def testHostDocs(self):
        with mock.patch.object(__main__, "__docs__", {FaultCode.DUPLICATED_TAG: "two arguments share a tag"}, create=True):
            self.assertEqual(getdoc(FaultCode.DUPLICATED_TAG), "two arguments share a tag")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


if __name__ == '__main__':
    unittest.main()
