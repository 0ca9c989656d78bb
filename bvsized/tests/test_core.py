"""Tests for the core module."""
import doctest
import unittest

from hypothesis import given, settings
from hypothesis.strategies import integers

from bvsized.core import (
    BitVector, WidthMismatchError, bit, bitvectify, lowmask, max_signed,
    max_unsigned, min_signed, min_unsigned, mkbv, truncbits, zero
)

MAX_SIZE = 64


class TestMasking(unittest.TestCase):
    """Tests of lowmask and truncbits."""

    def test_lowmask(self):
        self.assertEqual(lowmask(0), 0)
        self.assertEqual(lowmask(1), 0b1)
        self.assertEqual(lowmask(8), 0xff)
        self.assertEqual(lowmask(100), 2 ** 100 - 1)
        self.assertEqual(lowmask(-1), 0)

    @given(
        integers(min_value=0, max_value=MAX_SIZE),
        integers(),
    )
    def test_truncbits(self, width, x):
        t = truncbits(width, x)
        self.assertTrue(0 <= t < 2 ** width)
        self.assertEqual(t, x % (2 ** width))
        self.assertEqual(truncbits(width, t), t)


class TestBitVector(unittest.TestCase):
    """Tests of the BitVector class."""

    def test_invalid_args(self):
        with self.assertRaises(AssertionError):
            BitVector("1", 8)
        with self.assertRaises(AssertionError):
            BitVector(0.5, 8)
        with self.assertRaises(AssertionError):
            BitVector(-1, 8)
        with self.assertRaises(AssertionError):
            BitVector(9, 2)
        with self.assertRaises(AssertionError):
            BitVector(1, 0)
        with self.assertRaises(AssertionError):
            BitVector(0, -1)
        with self.assertRaises(AssertionError):
            BitVector(0, "8")

    def test_initialization(self):
        x = BitVector(0, 8)

        self.assertTrue(x.is_Atom)
        self.assertEqual(x.atoms(), {x})

        with self.assertRaises(AttributeError):
            x.val = 0
        with self.assertRaises(AttributeError):
            x.width += 1

    def test_zero_width(self):
        z = BitVector(0, 0)
        self.assertEqual(z.width, 0)
        self.assertEqual(mkbv(0xff, 0), z)
        self.assertEqual(z.signed_val, 0)
        self.assertEqual(zero(0), z)

    def test_comparisons(self):
        x, y = BitVector(1, 8), BitVector(2, 8)
        x9 = BitVector(1, 9)

        self.assertTrue((x != y) & (x != x9))
        self.assertEqual(x, BitVector(1, 8))
        self.assertEqual(hash(x), hash(BitVector(1, 8)))
        self.assertEqual(x, 1)
        self.assertNotEqual(x, "1")
        self.assertEqual(len({x, BitVector(1, 8), x9}), 2)

    def test_bool(self):
        self.assertTrue(BitVector(1, 1))
        self.assertFalse(BitVector(0, 1))
        with self.assertRaises(AttributeError):
            bool(BitVector(1, 8))

    def test_getitem(self):
        x = BitVector(0b10110100, 8)

        self.assertEqual(x[7:4], BitVector(0b1011, 4))
        self.assertEqual(x[:4], BitVector(0b1011, 4))
        self.assertEqual(x[3:], BitVector(0b0100, 4))
        self.assertEqual(x[:], x)
        self.assertEqual(x[2], BitVector(1, 1))
        self.assertEqual(x[0], BitVector(0, 1))
        # bits beyond the width are zeros
        self.assertEqual(x[11:6], BitVector(0b000010, 6))
        self.assertEqual(x[20], BitVector(0, 1))

        with self.assertRaises(IndexError):
            x[1:2]
        with self.assertRaises(IndexError):
            x[-1]
        with self.assertRaises(TypeError):
            x["0"]
        with self.assertRaises(TypeError):
            iter(x)

    def test_printing(self):
        self.assertEqual(str(BitVector(3, 12)), "0x003")
        self.assertEqual(repr(BitVector(3, 5)), "0b00011")
        self.assertEqual(BitVector(3, 5).vrepr(), "BitVector(0b00011, width=5)")
        self.assertEqual(BitVector(0o17, 6).oct(), "0o17")


class TestConstruction(unittest.TestCase):
    """Tests of the bit-vector constructors."""

    @given(
        integers(min_value=0, max_value=MAX_SIZE),
        integers(),
    )
    def test_mkbv(self, width, x):
        bv = mkbv(x, width)
        self.assertEqual(bv.width, width)
        self.assertTrue(0 <= bv.val < 2 ** width)
        self.assertEqual(bv.val, x % (2 ** width))

    def test_mkbv_truncation(self):
        self.assertEqual(mkbv(0xA, 4), 0xA)
        self.assertEqual(mkbv(0xA, 2), 0x2)
        self.assertEqual(mkbv(-1, 4), 0xf)
        self.assertEqual(mkbv(2 ** 70 + 3, 8), 3)

        with self.assertRaises(TypeError):
            mkbv(1.5, 8)
        with self.assertRaises(TypeError):
            mkbv("1", 8)

    def test_bounds(self):
        for width in range(0, 17):
            self.assertEqual(zero(width), BitVector(0, width))
            self.assertEqual(min_unsigned(width), BitVector(0, width))
            self.assertEqual(max_unsigned(width), 2 ** width - 1)
            if width == 0:
                self.assertEqual(min_signed(width), 0)
                self.assertEqual(max_signed(width), 0)
            else:
                self.assertEqual(min_signed(width), 2 ** (width - 1))
                self.assertEqual(max_signed(width), 2 ** (width - 1) - 1)
                self.assertEqual(min_signed(width).signed_val, -2 ** (width - 1))
                self.assertEqual(max_signed(width).signed_val, 2 ** (width - 1) - 1)
            for bv in [max_unsigned(width), min_signed(width), max_signed(width)]:
                self.assertEqual(bv.width, width)

    def test_bit(self):
        self.assertEqual(bit(0, 8), BitVector(1, 8))
        self.assertEqual(bit(7, 8), BitVector(0x80, 8))
        self.assertEqual(bit(8, 8), BitVector(0, 8))
        self.assertEqual(bit(-1, 8), BitVector(0, 8))
        self.assertEqual(bit(-1, 0), BitVector(0, 0))

    def test_bitvectify(self):
        self.assertEqual(bitvectify(2, 8), BitVector(2, 8))
        self.assertEqual(bitvectify(-2, 8), BitVector(0xfe, 8))
        self.assertEqual(bitvectify(BitVector(2, 8), 8), BitVector(2, 8))

        with self.assertRaises(WidthMismatchError):
            bitvectify(BitVector(2, 8), 9)
        with self.assertRaises(TypeError):
            bitvectify("x", 8)


class TestInterpretation(unittest.TestCase):
    """Tests of the unsigned and signed readings."""

    @given(
        integers(min_value=1, max_value=MAX_SIZE),
        integers(),
    )
    @settings(deadline=None)
    def test_signed_val(self, width, x):
        bv = mkbv(x, width)
        s = bv.signed_val

        self.assertTrue(-2 ** (width - 1) <= s <= 2 ** (width - 1) - 1)
        self.assertEqual(s % (2 ** width), bv.val)
        self.assertEqual(mkbv(s, width), bv)
        self.assertEqual(int(bv), bv.val)

    def test_signed_val_examples(self):
        self.assertEqual(BitVector(0x8, 4).signed_val, -8)
        self.assertEqual(BitVector(0x7, 4).signed_val, 7)
        self.assertEqual(BitVector(0x1, 1).signed_val, -1)
        self.assertEqual(BitVector(0xff, 8).val, 0xff)


# noinspection PyUnusedLocal,PyUnusedLocal
def load_tests(loader, tests, ignore):
    """Add doctests."""
    import bvsized.core
    tests.addTests(doctest.DocTestSuite(bvsized.core))
    return tests
