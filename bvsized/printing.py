"""Manage the representation of bit-vectors."""
from sympy.printing import repr as sympy_repr
from sympy.printing import str as sympy_str


# noinspection PyPep8Naming,PyMethodMayBeStatic
class BvStrPrinter(sympy_str.StrPrinter):
    """Printing class that handles the `str` method of `BitVector`.

    Bit-vectors whose width is a multiple of 4 are printed in
    hexadecimal, other bit-vectors in binary, padded to the width.

        >>> from bvsized.core import BitVector
        >>> from bvsized.printing import BvStrPrinter
        >>> BvStrPrinter().doprint(BitVector(0xa, 8))
        '0x0a'
        >>> BvStrPrinter().doprint(BitVector(0b10, 3))
        '0b010'

    """

    def _print_BitVector(self, bv):
        if bv.width % 4 == 0:
            return bv.hex()
        else:
            return bv.bin()


# noinspection PyPep8Naming,PyMethodMayBeStatic
class BvReprPrinter(sympy_repr.ReprPrinter):
    """Printing class that handles the `BitVector.vrepr` method.

        >>> from bvsized.core import BitVector
        >>> from bvsized.printing import BvReprPrinter
        >>> BvReprPrinter().doprint(BitVector(0xa, 8))
        'BitVector(0b00001010, width=8)'

    """

    def _print_BitVector(self, bv):
        return "{}({}, width={})".format(type(bv).__name__, bv.bin(), bv.width)
