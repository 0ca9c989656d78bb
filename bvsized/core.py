"""Provide the bit-vector type and the masking primitive."""
from sympy import Atom


class WidthMismatchError(ValueError):
    """Raised when an operator receives bit-vectors of incompatible widths."""


class DivisionByZeroError(ZeroDivisionError):
    """Raised by the division and remainder operators on a zero divisor."""


def lowmask(n):
    """Return the integer with the *n* lower bits set.

        >>> from bvsized.core import lowmask
        >>> bin(lowmask(4))
        '0b1111'
        >>> lowmask(0), lowmask(-3)
        (0, 0)

    """
    return (1 << max(n, 0)) - 1


def truncbits(n, x):
    """Truncate the integer *x* to its *n* lower bits.

    Negative integers are masked in two's complement, so the result
    always lies in ``[0, 2**n)``.

        >>> from bvsized.core import truncbits
        >>> hex(truncbits(4, 0x1f))
        '0xf'
        >>> hex(truncbits(8, -1))
        '0xff'

    """
    return x & lowmask(n)


class BitVector(Atom):
    """Represent fixed-width bit-vectors.

    A bit-vector :math:`(x_{n-1}, \\dots, x_1, x_0)` of width :math:`n`
    stores the non-negative integer
    :math:`x_0 + 2 x_1 + \\dots + 2^{n-1} x_{n-1}`. The same bits
    can be read as a two's complement signed integer with `signed_val`.

    Bit-vectors are immutable and always hold a value in
    :math:`[0, 2^n)`. The constructor checks this invariant; use
    `mkbv` to build a bit-vector from an arbitrary integer with
    silent truncation.

    Args:
        val: the unsigned integer value.
        width: the bit-width (0 allowed).

    ::

        >>> from bvsized.core import BitVector
        >>> BitVector(3, 12)
        0x003
        >>> BitVector(0b11, 12)
        0x003
        >>> BitVector(3, 12).vrepr()
        'BitVector(0b000000000011, width=12)'

    Bit-vectors support the usual Python operators (&, +, <<, etc.),
    see `operation` for the full list of operators.

        >>> BitVector(0xf, 4) + 1
        0x0
        >>> BitVector(0b0110, 4)[2:1]
        0b11

    """

    __slots__ = ["_val", "_width"]

    def __new__(cls, val, width):
        assert isinstance(width, int) and 0 <= width
        assert isinstance(val, int) and 0 <= val < 2 ** width
        obj = Atom.__new__(cls)
        obj._val = val
        obj._width = width
        return obj

    def __int__(self):
        return self.val

    def __hash__(self):
        return super().__hash__()

    def __eq__(self, other):
        """Override == operator."""
        if isinstance(other, int):
            return self.val == other
        elif isinstance(other, BitVector) and self.width == other.width:
            return self.val == other.val
        else:
            return False

    def __bool__(self):
        if self.width == 1:
            return self.val == 1
        else:
            raise AttributeError("only 1-bit bit-vectors implement bool()")

    def _hashable_content(self):
        """Return a tuple of information about self to compute its hash."""
        return self.val, self.width

    def __getnewargs__(self):
        return self.val, self.width

    @classmethod
    def class_key(cls):
        """Return the key (identifier) of the class for sorting."""
        return 1, 0, cls.__name__

    @property
    def val(self):
        """The unsigned integer represented by the bit-vector."""
        return self._val

    @property
    def width(self):
        """The bit-width of the bit-vector."""
        return self._width

    @property
    def signed_val(self):
        """The two's complement integer represented by the bit-vector.

            >>> from bvsized.core import BitVector
            >>> BitVector(0xf, 4).signed_val
            -1
            >>> BitVector(0x7, 4).signed_val
            7

        """
        if self.width > 0 and (self.val >> (self.width - 1)) & 1:
            return self.val - (1 << self.width)
        else:
            return self.val

    # Bitwise operators

    def __invert__(self):
        """Override ~ operator."""
        from bvsized import operation
        return operation.BvNot(self)

    def __and__(self, other):
        """Override & operator."""
        from bvsized import operation
        return operation.BvAnd(self, other)

    __rand__ = __and__

    def __or__(self, other):
        """Override | operator."""
        from bvsized import operation
        return operation.BvOr(self, other)

    __ror__ = __or__

    def __xor__(self, other):
        """Override ^ operator."""
        from bvsized import operation
        return operation.BvXor(self, other)

    __rxor__ = __xor__

    # Relational operators

    def __lt__(self, other):
        """Override < operator."""
        from bvsized import operation
        return operation.BvUlt(self, other)

    def __le__(self, other):
        """Override <= operator."""
        from bvsized import operation
        return operation.BvUle(self, other)

    def __gt__(self, other):
        """Override > operator."""
        from bvsized import operation
        return operation.BvUgt(self, other)

    def __ge__(self, other):
        """Override >= operator."""
        from bvsized import operation
        return operation.BvUge(self, other)

    # Shifts

    def __lshift__(self, other):
        """Override << operator."""
        from bvsized import operation
        return operation.BvShl(self, _shift_amount(other))

    def __rshift__(self, other):
        """Override >> operator."""
        from bvsized import operation
        return operation.BvLshr(self, _shift_amount(other))

    # Arithmetic operators

    def __neg__(self):
        """Override unary minus - operator."""
        from bvsized import operation
        return operation.BvNeg(self)

    def __abs__(self):
        """Override abs()."""
        from bvsized import operation
        return operation.BvAbs(self)

    def __add__(self, other):
        """Override + operator."""
        from bvsized import operation
        return operation.BvAdd(self, other)

    __radd__ = __add__

    def __sub__(self, other):
        """Override - operator."""
        from bvsized import operation
        return operation.BvSub(self, other)

    def __rsub__(self, other):
        """Override reflected - operator."""
        from bvsized import operation
        return operation.BvSub(other, self)

    def __mul__(self, other):
        """Override * operator."""
        from bvsized import operation
        return operation.BvMul(self, other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        """Override / operator."""
        from bvsized import operation
        return operation.BvUdiv(self, other)

    def __rtruediv__(self, other):
        """Override reflected / operator."""
        from bvsized import operation
        return operation.BvUdiv(other, self)

    def __mod__(self, other):
        """Override % operator."""
        from bvsized import operation
        return operation.BvUrem(self, other)

    def __rmod__(self, other):
        """Override reflected % operator."""
        from bvsized import operation
        return operation.BvUrem(other, self)

    def __getitem__(self, key):
        """Override [] operator.

        ``bv[i:j]`` extracts the bits from position ``i`` down to
        position ``j`` (both included) and ``bv[i]`` extracts the bit
        ``i``. Omitted indices default to the most and the least
        significant bit. Positions beyond the width read as 0.
        """
        from bvsized import operation

        if isinstance(key, slice):
            assert key.step is None or key.step == 1

            i = key.start if key.start is not None else self.width - 1
            j = key.stop if key.stop is not None else 0
            if j < 0 or i < j:
                raise IndexError("invalid slice [{}:{}]".format(i, j))

            return operation.Extract(self, i - j + 1, j)
        elif isinstance(key, int):
            if key < 0:
                raise IndexError("index out of range")
            return operation.Extract(self, 1, key)
        else:
            raise TypeError("invalid index")

    def __iter__(self):
        # Necessary since __getitem__ is defined
        raise TypeError("BitVector is not iterable")

    def __str__(self):
        """Return the non-verbose string representation."""
        from bvsized import printing
        return (printing.BvStrPrinter()).doprint(self)

    __repr__ = __str__

    def vrepr(self):
        """Return a verbose string representation."""
        from bvsized import printing
        return (printing.BvReprPrinter()).doprint(self)

    def testbit(self, i):
        """Return True if the bit at position *i* is set.

            >>> from bvsized.core import BitVector
            >>> BitVector(0b100, 3).testbit(2)
            True

        """
        from bvsized import extraop
        return bool(extraop.TestBit(self, i))

    def popcount(self):
        """Return the number of bits set.

            >>> from bvsized.core import BitVector
            >>> BitVector(0b1011, 4).popcount()
            3

        """
        from bvsized import extraop
        return int(extraop.PopCount(self))

    def bin(self):
        """Return the binary representation.

            >>> from bvsized.core import BitVector
            >>> print(BitVector(3, 4).bin())
            0b0011
            >>> print(BitVector(4, 6).bin())
            0b000100

        """
        width = self.width + 2  # 2 due to '0b'
        return format(self.val, r'0=#{}b'.format(width))

    def hex(self):
        """Return the hexadecimal representation.

            >>> from bvsized.core import BitVector
            >>> print(BitVector(3, 4).hex())
            0x3

        """
        assert self.width % 4 == 0
        width = (self.width // 4) + 2
        return format(self.val, '0=#{}x'.format(width))

    def oct(self):
        """Return the octal representation.

            >>> from bvsized.core import BitVector
            >>> print(BitVector(4, 6).oct())
            0o04

        """
        assert self.width % 3 == 0
        width = (self.width // 3) + 2
        return format(self.val, '0=#{}o'.format(width))


def _shift_amount(n):
    if isinstance(n, BitVector):
        return n.val
    return n


def mkbv(x, width):
    """Return the bit-vector of given width holding the integer *x*.

    Any integer, negative or wider than *width*, is silently
    truncated to its *width* lower bits.

        >>> from bvsized.core import mkbv
        >>> mkbv(0xA, 4)
        0xa
        >>> mkbv(0xA, 2)
        0b10
        >>> mkbv(-1, 8)
        0xff

    """
    if not isinstance(x, int):
        msg = "cannot convert '{}' to a bit-vector"
        raise TypeError(msg.format(type(x).__name__))
    return BitVector(truncbits(width, x), width)


def bitvectify(t, width):
    """Convert the argument *t* to a bit-vector of bit-width *width*.

        >>> from bvsized.core import bitvectify
        >>> print(bitvectify(0, 8).vrepr())
        BitVector(0b00000000, width=8)
        >>> print(bitvectify(-1, 4).vrepr())
        BitVector(0b1111, width=4)

    """
    if isinstance(t, int):
        return mkbv(t, width)
    elif isinstance(t, BitVector):
        if t.width != width:
            msg = "expected a bit-vector of width {}, got width {}"
            raise WidthMismatchError(msg.format(width, t.width))
        return t
    else:
        msg = "cannot convert '{}' to a bit-vector"
        raise TypeError(msg.format(type(t).__name__))


def zero(width):
    """Return the bit-vector with all bits clear."""
    return BitVector(0, width)


min_unsigned = zero


def bit(position, width):
    """Return the bit-vector with only the bit at *position* set.

    *position* should lie in ``[0, width)``; other positions are
    masked away and give the zero bit-vector.

        >>> from bvsized.core import bit
        >>> bit(3, 8)
        0x08

    """
    if position < 0 or position >= width:
        return zero(width)
    return BitVector(1 << position, width)


def max_unsigned(width):
    """Return the largest unsigned value, ``2**width - 1``."""
    return mkbv(lowmask(width), width)


def min_signed(width):
    """Return the smallest two's complement value, ``2**(width - 1)``.

        >>> from bvsized.core import min_signed
        >>> min_signed(8)
        0x80
        >>> min_signed(8).signed_val
        -128

    """
    return bit(width - 1, width)


def max_signed(width):
    """Return the largest two's complement value, ``2**(width - 1) - 1``."""
    return mkbv(lowmask(width - 1), width)
