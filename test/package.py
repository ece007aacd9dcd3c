# python
"""
Package surface tests.

Scope
- Validate that the package imports and aggregates every module's exports.
- Validate that exported names resolve to the public callables and types.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import importlib
import unittest
from unittest import TestCase


class TestPackage(TestCase):
    """Behavioral tests for the signet package namespace."""

    def testImport(self):
        signet = importlib.import_module("signet")
        self.assertEqual(signet.__title__, "signet")
        self.assertEqual(signet.version_info.releaselevel, "final")

    def testExportsAreAggregated(self):
        signet = importlib.import_module("signet")
        for name in ("blocks", "descriptors", "compile_signature", "FaultCode", "routes", "Registry"):
            self.assertIn(name, signet.__all__)

    def testExportsResolve(self):
        signet = importlib.import_module("signet")
        for name in signet.__all__:
            self.assertTrue(hasattr(signet, name), name)

    def testFunctionsShadowTheirModules(self):
        signet = importlib.import_module("signet")
        self.assertEqual(list(signet.blocks("{a}")), ["a"])
        self.assertEqual([option.name for option in signet.descriptors("{a : A}")], ["a"])


if __name__ == "__main__":
    unittest.main()
