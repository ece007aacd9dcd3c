# python
"""
Block extractor behavioral tests.

Scope
- Validate top-level block extraction order and nested-block preservation.
- Validate leniency: unclosed, empty and too-deep candidates are skipped, never raised.
- Validate span positions (braces included).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from signet import blocks, spans


class TestBlocks(TestCase):
    """Behavioral tests for blocks()."""

    def testBlocksInOrder(self):
        self.assertEqual(list(blocks("{a : b} {c}")), ["a : b", "c"])

    def testBlocksIgnoreTextBetween(self):
        self.assertEqual(list(blocks("x {a} y {b} z")), ["a", "b"])

    def testNestedBlocksStayVerbatim(self):
        self.assertEqual(list(blocks("{a | {b} {c}} tail")), ["a | {b} {c}"])

    def testTooDeepCandidateResumesInside(self):
        self.assertEqual(list(blocks("{a {b {c}}}")), ["b {c}"])

    def testEmptyBlockIsSkipped(self):
        self.assertEqual(list(blocks("{} {a}")), ["a"])

    def testDoubleBraceStartsAtInnerBlock(self):
        self.assertEqual(list(blocks("{{a}}")), ["a"])

    def testUnclosedBlockIsSkipped(self):
        self.assertEqual(list(blocks("{a : b")), [])

    def testUnclosedOuterKeepsLaterBlocks(self):
        self.assertEqual(list(blocks("{a {b}")), ["b"])

    def testNoBlocks(self):
        self.assertEqual(list(blocks("plain text")), [])
        self.assertEqual(list(blocks("")), [])

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            list(blocks(42))  # type: ignore[arg-type]


class TestSpans(TestCase):
    """Behavioral tests for spans()."""

    def testSpansIncludeBraces(self):
        text = "x {a} {b | {c}}"
        self.assertEqual(list(spans(text)), [(2, 5), (6, 15)])
        self.assertEqual(text[6:15], "{b | {c}}")

    def testSpansSkipMalformed(self):
        self.assertEqual(list(spans("{ {a}")), [(2, 5)])


if __name__ == "__main__":
    unittest.main()
