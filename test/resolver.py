"""
Resolver behavioral tests (value text and token consumption).

Conventions
- Test method names follow CamelCase per project convention.
- Consumption counts the matched token itself.
"""
import unittest
from unittest import TestCase

from progparams.descriptors import Descriptor, Slot
from progparams.faults import MissingValueError
from progparams.kinds import Kind
from progparams.resolver import resolve, resolve_long, resolve_positional, resolve_short


class TestResolver(TestCase):

    def setUp(self):
        self.count = Descriptor(["-c", "--count"], slot=Slot(Kind.SIZE))
        self.flag = Descriptor(["-a", "--audible"], slot=Slot(bool))
        self.destination = Descriptor(["destination"])

    def testPositionalTakesWholeToken(self):
        self.assertEqual(resolve_positional(["-x", "y"], 0), ("-x", 1))

    def testLongEmbeddedValue(self):
        self.assertEqual(resolve_long(self.count, ["--count=10"], 0), ("10", 1))

    def testLongSplitsAtFirstEquals(self):
        self.assertEqual(resolve_long(self.count, ["--count=a=b"], 0), ("a=b", 1))

    def testLongEmptyEmbeddedValue(self):
        self.assertEqual(resolve_long(self.count, ["--count="], 0), ("", 1))

    def testLongFollowingToken(self):
        self.assertEqual(resolve_long(self.count, ["--count", "10"], 0), ("10", 2))

    def testLongMissingValue(self):
        with self.assertRaises(MissingValueError) as context:
            resolve_long(self.count, ["x", "--count"], 1)
        self.assertEqual(context.exception.options["alias"], "--count")

    def testShortAttachedValue(self):
        self.assertEqual(resolve_short(self.count, ["-c10"], 0, 1), ("10", 1))

    def testShortAttachedValueInsideCluster(self):
        self.assertEqual(resolve_short(self.count, ["-ac10"], 0, 2), ("10", 1))

    def testShortKeepsEquals(self):
        self.assertEqual(resolve_short(self.count, ["-c=10"], 0, 1), ("=10", 1))

    def testShortFollowingToken(self):
        self.assertEqual(resolve_short(self.count, ["-ac", "5"], 0, 2), ("5", 2))

    def testShortMissingValue(self):
        with self.assertRaises(MissingValueError) as context:
            resolve_short(self.count, ["-ac"], 0, 2)
        self.assertEqual(context.exception.options["alias"], "-c")

    def testFlagsNeverConsume(self):
        self.assertEqual(resolve_long(self.flag, ["--audible"], 0), (None, 0))
        self.assertEqual(resolve_long(self.flag, ["--audible=yes"], 0), (None, 0))
        self.assertEqual(resolve_short(self.flag, ["-ab"], 0, 1), (None, 0))

    def testFlagAtEndDoesNotNeedValue(self):
        self.assertEqual(resolve_long(self.flag, ["--audible"], 0), (None, 0))

    def testRouting(self):
        self.assertEqual(resolve(self.destination, ["dest"], 0), ("dest", 1))
        self.assertEqual(resolve(self.count, ["--count", "3"], 0), ("3", 2))
        self.assertEqual(resolve(self.count, ["-c3"], 0, 1), ("3", 1))


if __name__ == "__main__":
    unittest.main()
