"""Provide context managers to modify the default behaviour."""
import contextlib


class StatefulContext(contextlib.AbstractContextManager):
    """Base class for context managers with history."""

    current_context = None

    def __init__(self, new_context):
        """Initialize the context."""
        self.new_context = new_context

    def __enter__(self):
        self.previous_context = type(self).current_context
        type(self).current_context = self.new_context

    def __exit__(self, *args):
        type(self).current_context = self.previous_context


class Cache(StatefulContext):
    """Control the Cache context.

    Control whether or not the results of bit-vector operators are
    memoized. By default, the cache is enabled.

        >>> from bvsized.core import BitVector
        >>> from bvsized.context import Cache
        >>> with Cache(False):
        ...     BitVector(1, 8) + BitVector(1, 8)
        0x02

    """

    current_context = True

    def __init__(self, new_context):
        """Initialize the context."""
        assert new_context in [True, False]
        super().__init__(new_context)


class Validation(StatefulContext):
    """Control the Validation context.

    Control whether or not arguments of bit-vector operators are validated.
    By default, validation of arguments is enabled.

    Note that when it is disabled, Automatic Constant Conversion is no longer
    available (see `Operation`). The widths of the operands are checked
    in both cases.

    When the Validation context is disabled, the `Cache` context is
    also disabled.

        >>> from bvsized.core import BitVector
        >>> from bvsized.context import Validation
        >>> BitVector(1, 8) + 1
        0x02
        >>> with Validation(False):
        ...     BitVector(1, 5) + 2
        Traceback (most recent call last):
         ...
        AttributeError: 'int' object has no attribute 'width'

    Note:
        Disabling `Validation` speeds up long sequences of operations.
    """

    current_context = True

    def __init__(self, new_context):
        """Initialize the context."""
        assert new_context in [True, False]
        super().__init__(new_context)

    def __enter__(self):
        if self.new_context is False:
            self.cache_context = Cache(False)
            self.cache_context.__enter__()
        super().__enter__()

    def __exit__(self, *args):
        if self.new_context is False:
            self.cache_context.__exit__()
        super().__exit__()
