"""Exact k-nearest-neighbor search over the rows of a numeric matrix."""

from .data.matrix import KnnResult, Matrix
from .errors import InvalidArgumentCountError, InvalidInputError, KnnError
from .metrics import DistanceMetric, get_distance_metric
from .models import Neighbor, knn, knn_from_values, nearest_neighbors

__all__ = [
    "DistanceMetric",
    "InvalidArgumentCountError",
    "InvalidInputError",
    "KnnError",
    "KnnResult",
    "Matrix",
    "Neighbor",
    "get_distance_metric",
    "knn",
    "knn_from_values",
    "nearest_neighbors",
]
