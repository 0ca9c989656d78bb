"""Tests for the context and printing module."""
import unittest
import doctest

import bvsized.context
import bvsized.printing
from bvsized.context import Cache, Validation
from bvsized.core import BitVector


class TestContext(unittest.TestCase):
    """Tests of the context managers."""

    def test_nested_contexts(self):
        self.assertTrue(Validation.current_context)
        with Validation(False):
            self.assertFalse(Validation.current_context)
            with Validation(True):
                self.assertTrue(Validation.current_context)
            self.assertFalse(Validation.current_context)
        self.assertTrue(Validation.current_context)

        with Cache(False):
            self.assertFalse(Cache.current_context)
        self.assertTrue(Cache.current_context)

    def test_invalid_contexts(self):
        with self.assertRaises(AssertionError):
            Cache(None)
        with self.assertRaises(AssertionError):
            Validation("yes")

    def test_operand_conversion(self):
        x = BitVector(1, 8)
        self.assertEqual(x + 1, BitVector(2, 8))
        with Validation(False):
            self.assertEqual(x + x, BitVector(2, 8))
            with self.assertRaises(AttributeError):
                x + 1


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    tests.addTests(doctest.DocTestSuite(bvsized.printing))
    tests.addTests(doctest.DocTestSuite(bvsized.context))
    return tests
