# python
"""
Utilities behavioral tests.

Scope
- Unset sentinel semantics (singleton, falsy, repr, sealed, copy-stable).
- coalesce(), rename(), mirror() and ordinal().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from pxargs.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):
                pass

    def testCopiesKeepIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)


class TestCoalesce(TestCase):

    def testUnsetBecomesDefault(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self):
        for value in (None, 0, "", []):
            self.assertIs(coalesce(value, "fallback"), value)


class TestRename(TestCase):

    def testFunctionForm(self):
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual((work.__name__, work.__qualname__), ("job", "job"))

    def testDecoratorForm(self):
        @rename("job")
        def work():
            pass

        self.assertEqual(work.__name__, "job")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(3, "job")

    def testRejectsWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    def setUp(self):
        class Holder:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = [1, [2]]
                self._label = Unset

        self.holder = Holder()

    def testContainersAreCopied(self):
        view = self.holder.items
        view.append(3)
        view[1].append(9)
        self.assertEqual(self.holder._items, [1, [2]])

    def testUnsetReadsAsNone(self):
        self.assertIsNone(self.holder.label)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.items = []

    def testRequiresName(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual([ordinal(number) for number in (1, 2, 3, 10)], ["first", "second", "third", "tenth"])

    def testSuffixes(self):
        self.assertEqual(
            [ordinal(number) for number in (11, 12, 13, 21, 22, 23, 24, 101, 111)],
            ["11th", "12th", "13th", "21st", "22nd", "23rd", "24th", "101st", "111th"],
        )

    def testRejectsZero(self):
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == '__main__':
    unittest.main()
