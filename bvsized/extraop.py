"""Provide additional bit-vector operators."""
from bvsized import core
from bvsized import operation


class TestBit(operation.Operation):
    """Test whether a bit of the bit-vector is set.

    ``TestBit(x, i)`` returns the 1-bit bit-vector holding the bit
    ``i`` of ``x``. Positions beyond the width and negative positions
    read as 0.

        >>> from bvsized.core import BitVector
        >>> from bvsized.extraop import TestBit
        >>> TestBit(BitVector(0b0100, 4), 2)
        0b1
        >>> TestBit(BitVector(0b0100, 4), 9)
        0b0

    """

    arity = [1, 1]
    operand_types = [core.BitVector, int]

    @classmethod
    def output_width(cls, x, i):
        return 1

    @classmethod
    def eval(cls, x, i):
        if i < 0:
            return 0
        return (x.val >> i) & 1


class PopCount(operation.Operation):
    """Count the number of 1's in the bit-vector.

    This operation is also known as the hamming weight of a bit-vector.
    The output width is the minimum width holding any count.

        >>> from bvsized.core import BitVector
        >>> from bvsized.extraop import PopCount
        >>> PopCount(BitVector(0b1010, 4))
        0b010
        >>> PopCount(BitVector(0b101, 3))
        0b10

    """

    arity = [1, 0]

    @classmethod
    def output_width(cls, x):
        return x.width.bit_length()

    @classmethod
    def eval(cls, x):
        return bin(x.val).count("1")


class TruncBits(operation.Operation):
    """Clear all but the lower bits, keeping the width.

    ``TruncBits(x, n)`` keeps the *n* lower bits of ``x``; a negative
    *n* clears every bit.

        >>> from bvsized.core import BitVector
        >>> from bvsized.extraop import TruncBits
        >>> TruncBits(BitVector(0xff, 8), 4)
        0x0f
        >>> TruncBits(BitVector(0xff, 8), 12)
        0xff

    """

    arity = [1, 1]
    operand_types = [core.BitVector, int]

    @classmethod
    def output_width(cls, x, n):
        return x.width

    @classmethod
    def eval(cls, x, n):
        return core.truncbits(n, x.val)
