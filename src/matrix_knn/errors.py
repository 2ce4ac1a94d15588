"""Exceptions raised by the nearest neighbor search."""


class KnnError(Exception):
    """Base class for all errors raised by this package."""
    pass


class InvalidArgumentCountError(KnnError):
    """Raised when fewer than the required inputs are supplied."""
    pass


class InvalidInputError(KnnError, ValueError):
    """Raised when an input has the wrong type or shape."""
    pass
