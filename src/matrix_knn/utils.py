"""Utility functions for coercing search inputs."""

import numbers

import numpy as np

from .errors import InvalidInputError


def as_vector(values) -> np.ndarray:
    """Convert a sequence of numbers into a 1-D float vector."""
    if isinstance(values, (str, bytes)):
        raise InvalidInputError("The query should be a numeric array.")
    try:
        vector = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("The query should be a numeric array.") from e
    if vector.ndim != 1:
        raise InvalidInputError(
            f"The query should be a 1-D numeric array, got {vector.ndim} dimensions."
        )
    return vector


def as_k(value) -> int:
    """Convert the number of neighbors to a non-negative int.

    Integral floats such as 2.0 are accepted, booleans are not.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(f"k should be a non-negative integer, got {value!r}.")
    if not isinstance(value, numbers.Integral):
        if not float(value).is_integer():
            raise InvalidInputError(f"k should be a non-negative integer, got {value!r}.")
    k = int(value)
    if k < 0:
        raise InvalidInputError(f"k should be a non-negative integer, got {k}.")
    return k
