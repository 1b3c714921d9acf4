"""
Registry behavioral tests (ownership, lookup, positional cursor, audit).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from progparams.descriptors import Slot
from progparams.faults import (
    ConfigurationError,
    ExhaustedError,
    FaultCode,
    MissingRequiredError,
    NotFoundError,
)
from progparams.registry import Registry


class TestRegistry(TestCase):

    def setUp(self):
        self.registry = Registry()

    def testRegisterReturnsStableIndices(self):
        self.assertEqual(self.registry.register(["-a"]), 0)
        self.assertEqual(self.registry.register(["-c", "--count"]), 1)
        self.assertEqual(self.registry.register(["destination"]), 2)
        self.assertEqual(len(self.registry), 3)

    def testAliasesShareOneIndex(self):
        self.registry.register(["-c", "--count"])
        self.assertEqual(self.registry.by_name["-c"], self.registry.by_name["--count"])
        self.assertIs(self.registry.lookup("-c"), self.registry.lookup("--count"))

    def testPositionalsKeepRegistrationOrder(self):
        self.registry.register(["first"])
        self.registry.register(["-a"])
        self.registry.register(["second"])
        self.assertEqual(self.registry.positionals, [0, 2])

    def testPositionalNameIsIndexed(self):
        self.registry.register(["destination"])
        self.assertIn("destination", self.registry)

    def testDuplicateAliasRejected(self):
        self.registry.register(["-c", "--count"])
        with self.assertRaises(ConfigurationError) as context:
            self.registry.register(["--count"])
        self.assertIs(context.exception.code, FaultCode.DUPLICATED_ALIAS)
        self.assertEqual(len(self.registry), 1)

    def testRegisterKeepsSlot(self):
        slot = Slot(int)
        self.registry.register(["-n"], slot=slot)
        self.assertIs(self.registry.lookup("-n").slot, slot)

    def testSharedSlotRejected(self):
        slot = Slot(int)
        self.registry.register(["-a"], slot=slot)
        with self.assertRaises(ConfigurationError) as context:
            self.registry.register(["-b"], slot=slot)
        self.assertIs(context.exception.code, FaultCode.SHARED_SLOT)
        self.assertIs(context.exception.options["owner"], self.registry.lookup("-a"))
        self.assertEqual(len(self.registry), 1)
        self.assertNotIn("-b", self.registry)

    def testEqualSlotsAreNotShared(self):
        self.registry.register(["-a"], slot=Slot(int))
        self.registry.register(["-b"], slot=Slot(int))
        self.assertIsNot(self.registry.lookup("-a").slot, self.registry.lookup("-b").slot)

    def testLookupUnknown(self):
        with self.assertRaises(NotFoundError) as context:
            self.registry.lookup("--missing")
        self.assertEqual(context.exception.options["alias"], "--missing")

    def testNextPositionalInOrderThenExhausted(self):
        self.registry.register(["first"])
        self.registry.register(["second"])
        self.assertEqual(self.registry.next_positional().name, "first")
        self.assertEqual(self.registry.next_positional().name, "second")
        with self.assertRaises(ExhaustedError) as context:
            self.registry.next_positional()
        self.assertIsInstance(context.exception, ConfigurationError)

    def testAuditPassesWhenRequiredFound(self):
        self.registry.register(["destination"], required=True)
        self.registry.next_positional().assign("here")
        self.registry.audit_required()

    def testAuditIgnoresOptionalParameters(self):
        self.registry.register(["-a"])
        self.registry.register(["destination"])
        self.registry.audit_required()

    def testAuditScansOptionsBeforePositionals(self):
        self.registry.register(["destination"], required=True)
        self.registry.register(["-n"], required=True)
        with self.assertRaises(MissingRequiredError) as context:
            self.registry.audit_required()
        self.assertEqual(context.exception.options["descriptor"].name, "-n")

    def testAuditNamesFirstMissingPositional(self):
        self.registry.register(["first"], required=True)
        self.registry.register(["second"], required=True)
        self.registry.next_positional().assign("x")
        with self.assertRaises(MissingRequiredError) as context:
            self.registry.audit_required()
        self.assertEqual(context.exception.options["descriptor"].name, "second")


if __name__ == "__main__":
    unittest.main()
