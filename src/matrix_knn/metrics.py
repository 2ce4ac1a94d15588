"""This module contains the distance metrics used by the nearest neighbor search."""

from enum import Enum
from typing import Optional, Union

import numpy as np

from .errors import InvalidInputError


def _as_pair(a, b) -> tuple[np.ndarray, np.ndarray]:
    """Convert two vectors to float arrays of equal length."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise InvalidInputError(
            f"Vectors must have the same dimensionality, got {a.size} and {b.size}."
        )
    return a, b


def euclidean(a: np.ndarray, b: np.ndarray) -> float:
    """This function calculates the Euclidean (L2) distance."""
    a, b = _as_pair(a, b)
    return float(np.sqrt(np.sum((a - b) ** 2)))

def manhattan(a: np.ndarray, b: np.ndarray) -> float:
    """This function calculates the Manhattan (L1) distance."""
    a, b = _as_pair(a, b)
    return float(np.sum(np.abs(a - b)))

def canberra(a: np.ndarray, b: np.ndarray) -> float:
    """This function calculates the Canberra distance.

    Each term is |a_i - b_i| / (|a_i| + |b_i|). Terms where both a_i and b_i
    are zero contribute 0 instead of 0/0.

    Args:
        a (np.ndarray): The first vector.
        b (np.ndarray): The second vector.

    Returns:
        float: The Canberra distance.
    """
    a, b = _as_pair(a, b)
    # Terms with infinite inputs are NaN
    with np.errstate(invalid="ignore"):
        numerator = np.abs(a - b)
        denominator = np.abs(a) + np.abs(b)
        terms = np.divide(
            numerator,
            denominator,
            out=np.zeros_like(numerator),
            where=(numerator != 0) | (denominator != 0),
        )
    return float(np.sum(terms))

def earth_movers(a: np.ndarray, b: np.ndarray) -> float:
    """This function calculates the 1-D Earth Mover's distance.

    The vectors are treated as histograms over the same bins, so the distance
    is the sum of the absolute differences of their running totals.

    Args:
        a (np.ndarray): The first histogram.
        b (np.ndarray): The second histogram.

    Returns:
        float: The Earth Mover's distance.
    """
    a, b = _as_pair(a, b)
    return float(np.sum(np.abs(np.cumsum(a - b))))


class DistanceMetric(Enum):
    """The supported distance metrics, keyed by their name token."""

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CANBERRA = "canberra"
    EARTH_MOVERS = "earthMovers"

    @classmethod
    def from_name(cls, name: Optional[Union[str, "DistanceMetric"]]) -> "DistanceMetric":
        """Select a metric by its case-insensitive name.

        Args:
            name (str | DistanceMetric | None): The metric name. None selects
                the default metric.

        Returns:
            DistanceMetric: The matching metric.
        """
        if name is None:
            return DEFAULT_METRIC
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise InvalidInputError(f"The distance metric must be a name, got {name!r}.")

        token = name.strip().lower()
        for metric in cls:
            if metric.value.lower() == token:
                return metric

        raise InvalidInputError(
            f"Invalid distance metric: {name}. "
            f"Please choose between {', '.join(METRIC_NAMES)}."
        )

    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        """Calculate the distance between two vectors of equal length."""
        return _METRIC_FUNCTIONS[self](a, b)


_METRIC_FUNCTIONS = {
    DistanceMetric.EUCLIDEAN: euclidean,
    DistanceMetric.MANHATTAN: manhattan,
    DistanceMetric.CANBERRA: canberra,
    DistanceMetric.EARTH_MOVERS: earth_movers,
}

DEFAULT_METRIC = DistanceMetric.EUCLIDEAN

METRIC_NAMES = [metric.value for metric in DistanceMetric]


def get_distance_metric(name: Optional[str] = None) -> DistanceMetric:
    """Get the distance metric for a name, defaulting to euclidean."""
    return DistanceMetric.from_name(name)
