"""
errors.py

Exceptions raised by huffcodec. Each one also derives from the closest
built-in exception.
"""


class HuffmanError(Exception):
    """Base class for all huffcodec errors."""


class InvalidArgumentError(HuffmanError, ValueError):
    """An argument is of the wrong type or blank."""


class EmptyInputError(HuffmanError, ValueError):
    """A tree was requested for an input with no symbols."""


class EmptyQueueError(HuffmanError, IndexError):
    """The priority queue has no elements."""


class StreamCorruptionError(HuffmanError, ValueError):
    """An encoded stream is truncated or does not match the tree."""


class UnsupportedOperationError(HuffmanError, NotImplementedError):
    """The operation is not supported by this object."""


class UnimplementedPathError(HuffmanError, NotImplementedError):
    """The requested code path has no implementation."""


class IOFailureError(HuffmanError, OSError):
    """Reading or writing an external resource failed."""
