"""
Utilities behavioral tests (sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from progparams.utils import Unset, UnsetType, coalesce, mirror, rename


class TestUnset(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionWithStr(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class TestCoalesce(TestCase):

    def testUnsetFallsBack(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testFalseyValuesArePreserved(self):
        self.assertEqual(coalesce(0, 10), 0)
        self.assertEqual(coalesce("", "x"), "")
        self.assertIsNone(coalesce(None, "x"))

    def testDefaultIsNone(self):
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testFunctionForm(self):
        def original():
            pass

        rename(original, "renamed")
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            rename(42, "name")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            rename(lambda: None, 3)
        with self.assertRaises(TypeError):
            rename(3)

    def testDecoratorRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename("renamed")(42)

    def testWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """mirror() exposes backing fields through immutable views."""

    def setUp(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")
            scalar = mirror("scalar")

            def __init__(self):
                self._items = ["a", "b"]
                self._table = {"k": 1}
                self._scalar = 3

        self.holder = Holder()

    def testSequenceBecomesTuple(self):
        self.assertEqual(self.holder.items, ("a", "b"))

    def testMappingBecomesProxy(self):
        self.assertIsInstance(self.holder.table, MappingProxyType)

    def testScalarPassesThrough(self):
        self.assertEqual(self.holder.scalar, 3)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.holder.scalar = 4


if __name__ == "__main__":
    unittest.main()
