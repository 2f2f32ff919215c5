# python
"""
Package surface tests.

Scope
- version metadata and the names re-exported at package level.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

import pxargs
from pxargs.utils import Unset


class TestPackage(TestCase):

    def testVersionInfoMatchesVersion(self):
        self.assertEqual(".".join(map(str, pxargs.version_info[:3])), pxargs.__version__)
        self.assertEqual(pxargs.version_info.releaselevel, "final")

    def testExportsResolve(self):
        for name in pxargs.__all__:
            self.assertTrue(hasattr(pxargs, name), name)

    def testPublicApi(self):
        for name in ("CommandLine", "Flag", "Value", "MultiValue", "accept", "ConversionError", "trigger"):
            self.assertIn(name, pxargs.__all__)
        self.assertIs(pxargs.Unset, Unset)

    def testDocumentedUsage(self):
        line = pxargs.CommandLine("tool")
        count = line.add_value("count", int).set_tag("-c").set_default(1)
        self.assertTrue(line.parse(["-c", "3"]).is_valid())
        self.assertEqual(count.get_value(), 3)


if __name__ == '__main__':
    unittest.main()
