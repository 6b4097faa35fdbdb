"""
Token stream behavioral tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandeer import TokenStream, isflag


class TestIsFlag(TestCase):
    """Behavioral tests for the flag-shape predicate."""

    def testDashedTokensAreFlags(self):
        for token in ("-v", "--verbose", "--", "-1", "--unknown-thing"):
            with self.subTest(token=token):
                self.assertTrue(isflag(token))

    def testLoneDashIsNotAFlag(self):
        self.assertFalse(isflag("-"))

    def testPlainTokensAreNotFlags(self):
        for token in ("file", "", "a-b", "x-"):
            with self.subTest(token=token):
                self.assertFalse(isflag(token))


class TestTokenStream(TestCase):
    """Behavioral tests for TokenStream."""

    def testPeekDoesNotConsume(self):
        stream = TokenStream(["a", "b"])
        self.assertEqual(stream.peek(), "a")
        self.assertEqual(stream.peek(), "a")
        self.assertEqual(len(stream), 2)

    def testNextConsumesInOrder(self):
        stream = TokenStream(["a", "b"])
        self.assertEqual(next(stream), "a")
        self.assertEqual(next(stream), "b")
        with self.assertRaises(StopIteration):
            next(stream)

    def testPeekOnEmptyIsNone(self):
        self.assertIsNone(TokenStream([]).peek())

    def testPeekIsFlag(self):
        stream = TokenStream(["-v", "-", "file"])
        self.assertTrue(stream.peek_is_flag())
        next(stream)
        self.assertFalse(stream.peek_is_flag())
        next(stream)
        self.assertFalse(stream.peek_is_flag())
        next(stream)
        self.assertFalse(stream.peek_is_flag())

    def testRemainingIsANonConsumingSnapshot(self):
        stream = TokenStream(["a", "b", "c"])
        next(stream)
        self.assertEqual(stream.remaining(), ("b", "c"))
        self.assertEqual(stream.remaining(), ("b", "c"))
        self.assertEqual(len(stream), 2)

    def testIterationDrains(self):
        stream = TokenStream(["a", "b"])
        self.assertEqual(list(stream), ["a", "b"])
        self.assertFalse(stream)

    def testTruthinessFollowsContent(self):
        self.assertTrue(TokenStream(["a"]))
        self.assertFalse(TokenStream([]))

    def testStreamCopiesItsInput(self):
        tokens = ["a"]
        stream = TokenStream(tokens)
        tokens.append("b")
        self.assertEqual(stream.remaining(), ("a",))

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            TokenStream(["a", 1])
        with self.assertRaises(TypeError):
            TokenStream("a b")


if __name__ == "__main__":
    unittest.main()
