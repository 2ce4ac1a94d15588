"""k-Nearest Neighbors (kNN) search for finding the k rows of a matrix closest to a query vector."""

import heapq
import logging
import math
import numbers
from typing import NamedTuple, Optional, Union

import numpy as np

from ..data.matrix import KnnResult, Matrix
from ..errors import InvalidArgumentCountError, InvalidInputError
from ..metrics import DistanceMetric
from ..utils import as_k, as_vector


class Neighbor(NamedTuple):
    """A candidate row and its distance to the query."""

    row: int
    distance: float


def _check_inputs(
    matrix: Matrix, query, k, distance_metric
) -> tuple[np.ndarray, int, DistanceMetric]:
    """Validate the search inputs before any distance is computed."""
    if not isinstance(matrix, Matrix):
        raise InvalidInputError("The first parameter for knn should be a matrix.")

    query = as_vector(query)
    k = as_k(k)
    metric = DistanceMetric.from_name(distance_metric)

    if matrix.num_rows > 0 and len(query) != matrix.num_columns:
        raise InvalidInputError(
            f"The query has {len(query)} values but the matrix rows have "
            f"{matrix.num_columns}."
        )

    return query, k, metric


def _select(matrix: Matrix, query: np.ndarray, k: int, metric: DistanceMetric) -> list[Neighbor]:
    """Scan every row and keep the k closest in a bounded max-heap."""
    if k == 0:
        return []

    # Entries are negated (nan, distance, row) keys, so heap[0] is the worst kept
    # candidate. NaN distances rank after all others and ties go to the earlier row.
    heap = []
    for row in range(matrix.num_rows):
        distance = metric.compute(query, matrix.row(row))
        is_nan = math.isnan(distance)
        entry = (-int(is_nan), -0.0 if is_nan else -distance, -row, distance)
        if len(heap) < k:
            heapq.heappush(heap, entry)
        elif entry > heap[0]:
            heapq.heapreplace(heap, entry)

    return [Neighbor(-entry[2], entry[3]) for entry in sorted(heap, reverse=True)]


def nearest_neighbors(
    matrix: Matrix,
    query: np.ndarray,
    k: int,
    distance_metric: Union[str, DistanceMetric, None] = "euclidean",
) -> list[Neighbor]:
    """Find the k rows of a matrix nearest to a query vector.

    Args:
        matrix (Matrix): The matrix whose rows are searched.
        query (np.ndarray): The query vector.
        k (int): The number of nearest neighbors to find.
        distance_metric (str | DistanceMetric, optional): The distance metric to use.
            Defaults to "euclidean".

    Returns:
        list[Neighbor]: The row indices and distances of the nearest rows, ordered
            by ascending distance.
    """
    query, k, metric = _check_inputs(matrix, query, k, distance_metric)
    return _select(matrix, query, k, metric)


def knn(
    matrix: Matrix,
    query: np.ndarray,
    k: int,
    distance_metric: Union[str, DistanceMetric, None] = "euclidean",
) -> KnnResult:
    """Find the k nearest rows of a matrix to a query vector.

    Args:
        matrix (Matrix): The matrix whose rows are searched.
        query (np.ndarray): The query vector. Its length must match the number
            of columns in the matrix.
        k (int): The number of nearest neighbors to find.
        distance_metric (str | DistanceMetric, optional): The distance metric to use.
            Defaults to "euclidean".

    Returns:
        KnnResult: A new matrix with the min(k, n) nearest rows in ascending
            distance order, their row labels, the column labels of the input,
            and the matching distances.
    """
    query, k, metric = _check_inputs(matrix, query, k, distance_metric)
    logging.debug(
        f"Searching {matrix.num_rows} rows for the {k} nearest using {metric.value}"
    )
    neighbors = _select(matrix, query, k, metric)

    rows = np.array([neighbor.row for neighbor in neighbors], dtype=int)
    row_labels = None
    if matrix.row_labels is not None:
        row_labels = [matrix.row_labels[row] for row in rows]

    return KnnResult(
        matrix.data[rows],
        [neighbor.distance for neighbor in neighbors],
        row_labels=row_labels,
        column_labels=matrix.column_labels,
    )


def knn_from_values(*values, **named_params) -> KnnResult:
    """Run kNN on loosely typed arguments as passed by an expression evaluator.

    Args:
        *values: The matrix, a list of numbers for the query, and k.
        **named_params: Optionally `distance`, the name of the distance metric.

    Returns:
        KnnResult: The nearest rows, see `knn`.
    """
    distance_metric: Optional[Union[str, DistanceMetric]] = None
    if named_params:
        if len(named_params) > 1:
            raise InvalidInputError(
                "knn expects only one named parameter 'distance'."
            )
        name, value = next(iter(named_params.items()))
        if name.lower() != "distance":
            raise InvalidInputError(
                "knn expects only one named parameter 'distance'."
            )
        distance_metric = value

    if len(values) < 3:
        raise InvalidArgumentCountError(
            "knn expects three parameters a Matrix, numeric array and k"
        )

    matrix, query, k = values[:3]
    if not isinstance(matrix, Matrix):
        raise InvalidInputError("The first parameter for knn should be a matrix.")
    if not isinstance(query, (list, tuple, np.ndarray)):
        raise InvalidInputError("The second parameter for knn should be a numeric array.")
    if not isinstance(k, numbers.Number):
        raise InvalidInputError("The third parameter for knn should be k.")

    return knn(matrix, query, k, distance_metric)
