# python
"""
Utilities behavioral tests (Unset sentinel, coalesce, rename, mglob).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from signet.utils import Unset, UnsetType, coalesce, mglob, rename


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testDecoratorForm(self):
        @rename("other")
        def function():
            pass

        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            rename(1)  # type: ignore[arg-type]


class TestMglob(TestCase):
    """Behavioral tests for mglob()."""

    def testConcreteNameIsReturned(self):
        self.assertEqual(mglob("signet.blocks"), ["signet.blocks"])

    def testWildcardExpandsSubmodules(self):
        modules = mglob("signet.*")
        self.assertIn("signet.blocks", modules)
        self.assertIn("signet.commands", modules)
        self.assertEqual(modules, sorted(modules))
        self.assertNotIn("signet", modules)

    def testDoubleStarSpansAnyDepth(self):
        self.assertEqual(mglob("signet.**.layout"), ["signet.layout"])
        self.assertIn("signet", mglob("signet.**"))

    def testUnknownPackageYieldsNothing(self):
        self.assertEqual(mglob("signet_missing_package.*"), [])

    def testWildcardPrefixRejected(self):
        with self.assertRaises(ValueError):
            mglob("*.commands")
        with self.assertRaises(ValueError):
            mglob("  ")


if __name__ == "__main__":
    unittest.main()
