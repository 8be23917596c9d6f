"""
Tests for the internal helpers (Unset sentinel, coalesce, guarded storage).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from gnuparse.utils import Unset, UnsetType, coalesce, StorageGuard, view


class Guarded(StorageGuard):
    items = view("items")

    def __new__(cls, items):
        with super().__new__(cls) as self:
            setattr(self, "-items", items)
        return self


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestStorageGuard(TestCase):
    """Behavioral tests for build-phase-only storage."""

    def testViewReturnsImmutableCopies(self):
        guarded = Guarded(["a", "b"])
        self.assertEqual(guarded.items, ("a", "b"))
        self.assertEqual(Guarded({"k": 1}).items["k"], 1)
        with self.assertRaises(TypeError):
            Guarded({"k": 1}).items["k"] = 2
        self.assertEqual(Guarded({1, 2}).items, frozenset({1, 2}))

    def testLockedAfterBuild(self):
        guarded = Guarded("value")
        with self.assertRaises(AttributeError):
            setattr(guarded, "-items", "other")
        with self.assertRaises(AttributeError):
            guarded.other = 1


if __name__ == "__main__":
    unittest.main()
