"""
Tests for the internal helpers.

This module verifies semantic guarantees of patternparse.utils:
- The Unset sentinel: singleton identity, falsy semantics, representation, finality.
- coalesce(): only Unset is replaced, falsy values are preserved.
- rename(): both the direct and the decorator forms, and their argument checks.
- mirror(): read-only properties handing out frozen container snapshots.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from patternparse.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        # falsy, but not equal to the other falsy values
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, 0)
        self.assertNotEqual(Unset, "")

    def testRepresentation(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(3, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass


class CoalesceTest(TestCase):
    """
    Test suite for coalesce().
    """

    def testUnsetReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalsyValuesPreserved(self) -> None:
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")


class RenameTest(TestCase):
    """
    Test suite for rename().
    """

    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testDecoratorIsNamedRename(self) -> None:
        self.assertEqual(rename("renamed").__name__, "rename")

    def testRejectsNonCallable(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "renamed")
        with self.assertRaises(TypeError):
            rename("renamed")(42)

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(42)

    def testRejectsBuiltins(self) -> None:
        with self.assertRaises(TypeError):
            rename(len, "size")

    def testArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(lambda: None, "a", "b")


class MirrorTest(TestCase):
    """
    Test suite for mirror().
    """

    class Holder:
        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        name = mirror("name")

        def __init__(self):
            self._items = [1, 2]
            self._table = {"a": 1}
            self._tags = {"x"}
            self._name = "holder"

    def testContainersAreFrozen(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.name, "holder")

    def testSnapshotsFollowBackingField(self) -> None:
        holder = self.Holder()
        holder._items.append(3)
        self.assertEqual(holder.items, (1, 2, 3))

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().items = ()

    def testPropertyIsNamed(self) -> None:
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testRejectsNonStringName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(42)


if __name__ == "__main__":
    unittest.main()
