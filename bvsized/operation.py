"""Provide the common bit-vector operators."""
from sympy.core import cache

from bvsized import context
from bvsized import core


def _cacheit(func):
    """Cache functions if `Cache` context is enabled."""
    cfunc = cache.cacheit(func)

    def cached_func(*args, **kwargs):
        if context.Cache.current_context:
            return cfunc(*args, **kwargs)
        else:
            return func(*args, **kwargs)

    return cached_func


class Operation(object):
    """Represent bit-vector operators.

    A bit-vector operator takes some bit-vector operands (i.e. `BitVector`)
    and some scalar operands (i.e. `int`), and returns a single
    bit-vector. Calling an operator class evaluates it: the result
    is a `BitVector`, never an `Operation` instance.

    This class is not meant to be instantiated but to provide a base
    class for the different bit-vector operators.

    Attributes:
        arity: a pair of number specifying the number of bit-vector operands
            (at least one) and scalar operands.
        is_symmetric: True if the operator is symmetric with respect to
            its operands. Operators with scalar operands cannot be symmetric.
        is_simple: True if the operator is *simple*, that is, all its
            operands are bit-vector of the same width. Simple operators allow
            *Automatic Constant Conversion*, that is, instead of passing
            all arguments as bit-vector types, it is possible to pass
            arguments as plain integers (truncated to the common width).

            ::

                >>> from bvsized.core import BitVector
                >>> (BitVector(1, 8) + 1).vrepr()
                'BitVector(0b00000010, width=8)'
                >>> (BitVector(1, 8) + -1).vrepr()
                'BitVector(0b00000000, width=8)'

        operand_types: a list specifying the types of the operands (optional
            if all operands are bit-vectors)

    The widths of the operands are checked by `condition`; a failed
    check raises `WidthMismatchError`.

        >>> from bvsized.core import BitVector
        >>> BitVector(1, 8) + BitVector(1, 4)
        Traceback (most recent call last):
         ...
        bvsized.core.WidthMismatchError: BvAdd.condition(0x01, 0x1) did not hold

    """

    is_simple = False
    is_symmetric = False

    @_cacheit
    def __new__(cls, *args, **options):
        val_op = options.pop("validate_operands",
                             context.Validation.current_context)

        if val_op:
            args = cls._parse_args(*args)

        if not cls.condition(*args):
            msg = "{}.condition({}) did not hold"
            args_str = ", ".join(str(a) for a in args)
            raise core.WidthMismatchError(msg.format(cls.__name__, args_str))

        width = cls.output_width(*args)
        return core.BitVector(cls.eval(*args), width)

    @classmethod
    def _parse_args(cls, *args):
        # Automatic Constant Conversion
        if cls.is_simple:
            for a in args:
                if isinstance(a, core.BitVector):
                    w = a.width
                    break
            else:
                msg = "{} expects at least 1 bit-vector operand"
                raise TypeError(msg.format(cls.__name__))

            args = [core.mkbv(a, w) if isinstance(a, int) else a for a in args]

        if len(args) != sum(cls.arity):
            msg = "{} expects {} operands but {} were given"
            raise TypeError(msg.format(cls.__name__, sum(cls.arity), len(args)))

        if hasattr(cls, "operand_types"):
            operand_types = cls.operand_types
        else:
            operand_types = [core.BitVector for _ in args]
        for arg_type, arg in zip(operand_types, args):
            if not isinstance(arg, arg_type):
                msg = "{} expects a {} operand, got '{}'"
                raise TypeError(msg.format(
                    cls.__name__, arg_type.__name__, type(arg).__name__))

        return args

    @classmethod
    def condition(cls, *args):
        """Check if the operands verify the restrictions of the operator."""
        return True

    @classmethod
    def output_width(cls, *args):
        """Return the bit-width of the resulting bit-vector."""
        raise NotImplementedError("subclasses need to override this method")

    @classmethod
    def eval(cls, *args):
        """Evaluate the operator with given operands.

        Return the integer value of the result, already truncated
        to the output width. This is an internal method. To evaluate
        a bit-vector operator, use the operator ``()``.
        """
        raise NotImplementedError("subclasses need to override this method")


class _BinaryOperation(Operation):
    """Base class of the simple operators with two operands."""

    arity = [2, 0]
    is_simple = True

    @classmethod
    def condition(cls, x, y):
        return x.width == y.width

    @classmethod
    def output_width(cls, x, y):
        return x.width


class _Relation(_BinaryOperation):
    """Base class of the relational operators (1-bit output)."""

    @classmethod
    def output_width(cls, x, y):
        return 1


# Bitwise operators

class BvNot(Operation):
    """Bitwise negation operation.

    It overrides the operator ~. See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvNot
        >>> BvNot(BitVector(0b1010101, 7))
        0b0101010
        >>> ~BitVector(0b1010101, 7)
        0b0101010

    """

    arity = [1, 0]

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def eval(cls, x):
        return core.truncbits(x.width, ~x.val)


class BvAnd(_BinaryOperation):
    """Bitwise AND (logical conjunction) operation.

    It overrides the operator & and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvAnd
        >>> BvAnd(BitVector(5, 8), BitVector(3, 8))
        0x01
        >>> BvAnd(BitVector(5, 8), 3)
        0x01
        >>> BitVector(5, 8) & 3
        0x01

    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return x.val & y.val


class BvOr(_BinaryOperation):
    """Bitwise OR (logical disjunction) operation.

    It overrides the operator | and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvOr
        >>> BvOr(BitVector(5, 8), BitVector(3, 8))
        0x07
        >>> BitVector(5, 8) | 3
        0x07

    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return x.val | y.val


class BvXor(_BinaryOperation):
    """Bitwise XOR (exclusive-or) operation.

    It overrides the operator ^ and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvXor
        >>> BvXor(BitVector(5, 8), BitVector(3, 8))
        0x06
        >>> BitVector(5, 8) ^ 3
        0x06

    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return x.val ^ y.val


# Relational operators

class BvComp(_Relation):
    """Equality operator.

    Provides Automatic Constant Conversion. See `Operation` for more
    information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvComp
        >>> BvComp(BitVector(1, 8), BitVector(2, 8))
        0b0
        >>> BvComp(BitVector(2, 8), 2)
        0b1

    The operator == also compares values but it returns either True
    or False and it does not raise on operands of different width.
    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return int(x.val == y.val)


class BvUlt(_Relation):
    """Unsigned less than operator.

    It overrides < and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvUlt
        >>> BvUlt(BitVector(1, 8), BitVector(2, 8))
        0b1
        >>> BitVector(0xff, 8) < 1
        0b0

    """

    @classmethod
    def eval(cls, x, y):
        return int(x.val < y.val)


class BvUle(_Relation):
    """Unsigned less than or equal operator.

    It overrides <= and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> BitVector(2, 8) <= 2
        0b1

    """

    @classmethod
    def eval(cls, x, y):
        return int(x.val <= y.val)


class BvUgt(_Relation):
    """Unsigned greater than operator.

    It overrides > and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> BitVector(1, 8) > 2
        0b0

    """

    @classmethod
    def eval(cls, x, y):
        return int(x.val > y.val)


class BvUge(_Relation):
    """Unsigned greater than or equal operator.

    It overrides >= and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> BitVector(2, 8) >= 2
        0b1

    """

    @classmethod
    def eval(cls, x, y):
        return int(x.val >= y.val)


class BvSlt(_Relation):
    """Signed less than operator.

    Operands are compared by their two's complement value.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvSlt
        >>> BvSlt(BitVector(0xff, 8), BitVector(1, 8))
        0b1
        >>> BvSlt(BitVector(1, 8), -1)
        0b0

    """

    @classmethod
    def eval(cls, x, y):
        return int(x.signed_val < y.signed_val)


class BvSle(_Relation):
    """Signed less than or equal operator."""

    @classmethod
    def eval(cls, x, y):
        return int(x.signed_val <= y.signed_val)


class BvSgt(_Relation):
    """Signed greater than operator."""

    @classmethod
    def eval(cls, x, y):
        return int(x.signed_val > y.signed_val)


class BvSge(_Relation):
    """Signed greater than or equal operator."""

    @classmethod
    def eval(cls, x, y):
        return int(x.signed_val >= y.signed_val)


# Shifts operators

class _ShiftOperation(Operation):
    """Base class of the operators taking a bit-vector and an amount."""

    arity = [1, 1]
    operand_types = [core.BitVector, int]

    @classmethod
    def output_width(cls, x, r):
        return x.width


class BvShl(_ShiftOperation):
    """Shift left operation.

    It overrides <<. The shift amount is an integer (or a bit-vector
    used by its unsigned value); negative amounts shift by zero.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvShl
        >>> BvShl(BitVector(0b10001, 5), 1)
        0b00010
        >>> BitVector(0b10001, 5) << 1
        0b00010
        >>> BitVector(0b10001, 5) << -1
        0b10001

    """

    @classmethod
    def eval(cls, x, r):
        r = max(r, 0)
        if r >= x.width:
            return 0
        return core.truncbits(x.width, x.val << r)


class BvLshr(_ShiftOperation):
    """Logical right shift operation.

    It overrides >>. Negative amounts shift by zero.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvLshr
        >>> BvLshr(BitVector(0b10001, 5), 1)
        0b01000
        >>> BitVector(0b10001, 5) >> 1
        0b01000

    """

    @classmethod
    def eval(cls, x, r):
        r = max(r, 0)
        if r >= x.width:
            return 0
        return x.val >> r


class BvAshr(_ShiftOperation):
    """Arithmetic right shift operation.

    The vacated high bits are filled with the sign bit.
    Negative amounts shift by zero.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvAshr
        >>> BvAshr(BitVector(0b10001, 5), 1)
        0b11000
        >>> BvAshr(BitVector(0b01001, 5), 1)
        0b00100

    """

    @classmethod
    def eval(cls, x, r):
        r = min(max(r, 0), x.width)
        return core.truncbits(x.width, x.signed_val >> r)


class RotateLeft(_ShiftOperation):
    """Circular left rotation operation.

    The rotation amount is taken modulo the width. Rotating a
    bit-vector of width 0 returns it unchanged.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import RotateLeft
        >>> RotateLeft(BitVector(150, 8), 2)
        0x5a
        >>> RotateLeft(BitVector(150, 8), 10)
        0x5a

    """

    @classmethod
    def eval(cls, x, r):
        if x.width == 0:
            return x.val
        r = r % x.width
        return int(BvOr(BvShl(x, r), BvLshr(x, x.width - r)))


class RotateRight(_ShiftOperation):
    """Circular right rotation operation.

    The rotation amount is taken modulo the width. Rotating a
    bit-vector of width 0 returns it unchanged.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import RotateRight
        >>> RotateRight(BitVector(150, 8), 3)
        0xd2
        >>> RotateRight(BitVector(150, 8), -5)
        0xd2

    """

    @classmethod
    def eval(cls, x, r):
        if x.width == 0:
            return x.val
        r = r % x.width
        return int(BvOr(BvShl(x, x.width - r), BvLshr(x, r)))


# Width-changing operators

class Extract(Operation):
    """Extraction of bits.

    ``Extract(t, width, pos)`` returns the *width* bits of ``t``
    starting at position *pos* (position 0 corresponding to the
    least significant bit).

    No bounds checking is done: the bits beyond the width of ``t``
    are read as zeros. A negative *pos* is treated as 0.

    It overrides the operation [], that is, ``t[i:j]`` is equivalent
    to ``Extract(t, i - j + 1, j)`` and ``t[i]`` to ``Extract(t, 1, i)``.

    Warning:
        In python, given a list ``l``, ``l[i:j]`` denotes the elements
        from position ``i`` up to (but no included) position ``j``.
        Note that with bit-vectors, the order of the arguments is
        swapped and both end points are included.

    ::

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import Extract
        >>> Extract(BitVector(0xAABCDEF0, 32), 8, 12)
        0xcd
        >>> BitVector(0b11100, 5)[4:2]
        0b111
        >>> Extract(BitVector(0xf, 4), 8, 2)
        0x03

    """

    arity = [1, 2]
    operand_types = [core.BitVector, int, int]

    @classmethod
    def condition(cls, t, width, pos):
        return width >= 0

    @classmethod
    def output_width(cls, t, width, pos):
        return width

    @classmethod
    def eval(cls, t, width, pos):
        # the logical shift never needs truncation
        shifted = t.val >> max(pos, 0)
        return core.truncbits(width, shifted)


class Concat(Operation):
    """Concatenation operation.

    Given the bit-vectors :math:`(x_{n-1}, \\dots, x_0)` and
    :math:`(y_{m-1}, \\dots, y_0)`, ``Concat(x, y)`` returns the bit-vector
    :math:`(x_{n-1}, \\dots, x_0, y_{m-1}, \\dots, y_0)`.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import Concat
        >>> Concat(BitVector(0xAA, 8), BitVector(0xBCDEF0, 24))
        0xaabcdef0

    """

    arity = [2, 0]

    @classmethod
    def output_width(cls, x, y):
        return x.width + y.width

    @classmethod
    def eval(cls, x, y):
        return (x.val << y.width) | y.val


class ZeroExtend(Operation):
    """Change the width preserving the unsigned value.

    ``ZeroExtend(x, width)`` returns a bit-vector of the given width.
    If the new width is smaller than the width of ``x``, this
    performs a truncation.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import ZeroExtend
        >>> ZeroExtend(BitVector(0x12, 8), 12)
        0x012
        >>> ZeroExtend(BitVector(0x12, 8), 4)
        0x2

    """

    arity = [1, 1]
    operand_types = [core.BitVector, int]

    @classmethod
    def condition(cls, x, width):
        return width >= 0

    @classmethod
    def output_width(cls, x, width):
        return width

    @classmethod
    def eval(cls, x, width):
        return core.truncbits(width, x.val)


class SignExtend(Operation):
    """Change the width preserving the signed value.

    ``SignExtend(x, width)`` returns a bit-vector of the given width.
    If the new width is smaller than the width of ``x``, this
    performs a truncation.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import SignExtend
        >>> SignExtend(BitVector(0x80, 8), 12)
        0xf80
        >>> SignExtend(BitVector(0x7f, 8), 12)
        0x07f

    """

    arity = [1, 1]
    operand_types = [core.BitVector, int]

    @classmethod
    def condition(cls, x, width):
        return width >= 0

    @classmethod
    def output_width(cls, x, width):
        return width

    @classmethod
    def eval(cls, x, width):
        return core.truncbits(width, x.signed_val)


# Arithmetic operators

def _check_divisor(op, y):
    if y.val == 0:
        raise core.DivisionByZeroError("{} by zero".format(op.__name__))


def _quot(x, y):
    """Integer division rounding toward zero."""
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


class BvNeg(Operation):
    """Unary minus operation.

    It overrides the unary operator -. See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvNeg
        >>> BvNeg(BitVector(1, 8))
        0xff
        >>> -BitVector(0x8, 4)
        0x8

    """

    arity = [1, 0]

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def eval(cls, x):
        return core.truncbits(x.width, -x.val)


class BvAbs(Operation):
    """Absolute value of the two's complement value.

    It overrides abs(). The absolute value of the smallest signed
    value does not fit and wraps back to itself.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvAbs
        >>> BvAbs(BitVector(0xfb, 8))
        0x05
        >>> abs(BitVector(0x80, 8))
        0x80

    """

    arity = [1, 0]

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def eval(cls, x):
        return core.truncbits(x.width, abs(x.signed_val))


class SignBit(Operation):
    """Return the most significant bit as a bit-vector of the same width.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import SignBit
        >>> SignBit(BitVector(0x80, 8))
        0x01
        >>> SignBit(BitVector(0x7f, 8))
        0x00

    """

    arity = [1, 0]

    @classmethod
    def output_width(cls, x):
        return x.width

    @classmethod
    def eval(cls, x):
        if x.width == 0:
            return 0
        return (x.val >> (x.width - 1)) & 1


class BvAdd(_BinaryOperation):
    """Modular addition operation.

    It overrides the operator + and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvAdd
        >>> BvAdd(BitVector(1, 8), BitVector(2, 8))
        0x03
        >>> BitVector(0xff, 8) + 2
        0x01

    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return core.truncbits(x.width, x.val + y.val)


class BvSub(_BinaryOperation):
    """Modular subtraction operation.

    It overrides the operator - and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvSub
        >>> BvSub(BitVector(1, 8), BitVector(2, 8))
        0xff
        >>> BitVector(1, 8) - 2
        0xff

    """

    @classmethod
    def eval(cls, x, y):
        return core.truncbits(x.width, x.val - y.val)


class BvMul(_BinaryOperation):
    """Modular multiplication operation.

    It overrides the operator * and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvMul
        >>> BvMul(BitVector(4, 8), BitVector(3, 8))
        0x0c
        >>> BitVector(0x10, 8) * 0x10
        0x00

    """

    is_symmetric = True

    @classmethod
    def eval(cls, x, y):
        return core.truncbits(x.width, x.val * y.val)


class BvUdiv(_BinaryOperation):
    """Unsigned and truncated division operation.

    It overrides the operator / and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvUdiv
        >>> BvUdiv(BitVector(0x0c, 8), BitVector(3, 8))
        0x04
        >>> BitVector(0x0c, 8) / 3
        0x04
        >>> BitVector(0x0c, 8) / 0
        Traceback (most recent call last):
         ...
        bvsized.core.DivisionByZeroError: BvUdiv by zero

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        return x.val // y.val


class BvUrem(_BinaryOperation):
    """Unsigned remainder operation.

    It overrides the operator % and provides Automatic Constant Conversion.
    See `Operation` for more information.

        >>> from bvsized.core import BitVector
        >>> from bvsized.operation import BvUrem
        >>> BvUrem(BitVector(0x0d, 8), BitVector(3, 8))
        0x01
        >>> BitVector(0x0d, 8) % 3
        0x01

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        return x.val % y.val


class BvSquot(_BinaryOperation):
    """Signed division operation rounding toward zero.

    Both operands are read as two's complement integers.

        >>> from bvsized.core import mkbv
        >>> from bvsized.operation import BvSquot
        >>> BvSquot(mkbv(-7, 8), mkbv(2, 8)).signed_val
        -3

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        return core.truncbits(x.width, _quot(x.signed_val, y.signed_val))


class BvSdiv(_BinaryOperation):
    """Signed division operation rounding toward negative infinity.

    Both operands are read as two's complement integers.
    The result differs from `BvSquot` when the quotient is negative
    and the division is not exact.

        >>> from bvsized.core import mkbv
        >>> from bvsized.operation import BvSdiv
        >>> BvSdiv(mkbv(-7, 8), mkbv(2, 8)).signed_val
        -4
        >>> BvSdiv(mkbv(-128, 8), mkbv(-1, 8)).signed_val
        -128

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        return core.truncbits(x.width, x.signed_val // y.signed_val)


class BvSrem(_BinaryOperation):
    """Signed remainder operation, paired with `BvSquot`.

    The sign of a non-zero result follows the dividend.

        >>> from bvsized.core import mkbv
        >>> from bvsized.operation import BvSrem
        >>> BvSrem(mkbv(-7, 8), mkbv(2, 8)).signed_val
        -1
        >>> BvSrem(mkbv(7, 8), mkbv(-2, 8)).signed_val
        1

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        a, b = x.signed_val, y.signed_val
        return core.truncbits(x.width, a - b * _quot(a, b))


class BvSmod(_BinaryOperation):
    """Signed remainder operation, paired with `BvSdiv`.

    The sign of a non-zero result follows the divisor.

        >>> from bvsized.core import mkbv
        >>> from bvsized.operation import BvSmod
        >>> BvSmod(mkbv(-7, 8), mkbv(2, 8)).signed_val
        1
        >>> BvSmod(mkbv(7, 8), mkbv(-2, 8)).signed_val
        -1

    """

    @classmethod
    def eval(cls, x, y):
        _check_divisor(cls, y)
        return core.truncbits(x.width, x.signed_val % y.signed_val)
