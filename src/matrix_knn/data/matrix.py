"""This module contains the matrix types searched and returned by kNN, and their loaders."""

import logging
from types import MappingProxyType
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..errors import InvalidInputError


class Matrix:
    """A dense numeric matrix with optional row and column labels.

    Args:
        data: The rows of the matrix. Every row must have the same length.
        row_labels (Sequence[str], optional): One label per row.
        column_labels (Sequence[str], optional): One label per column.
    """

    def __init__(
        self,
        data,
        row_labels: Optional[Sequence[str]] = None,
        column_labels: Optional[Sequence[str]] = None,
    ) -> None:
        try:
            array = np.array(data, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(
                "The matrix should be a rectangular array of numbers."
            ) from e

        # An empty sequence of rows has no known dimensionality
        if array.size == 0 and array.ndim == 1:
            array = array.reshape(0, 0)
        if array.ndim != 2:
            raise InvalidInputError(
                f"The matrix should have 2 dimensions, got {array.ndim}."
            )

        self.data = array
        self.row_labels = self._check_labels(row_labels, self.num_rows, "row")
        self.column_labels = self._check_labels(column_labels, self.num_columns, "column")

    @staticmethod
    def _check_labels(labels, expected: int, kind: str) -> Optional[list]:
        if labels is None:
            return None
        labels = list(labels)
        if len(labels) != expected:
            raise InvalidInputError(
                f"Expected {expected} {kind} labels, got {len(labels)}."
            )
        return labels

    @property
    def num_rows(self) -> int:
        return self.data.shape[0]

    @property
    def num_columns(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def row(self, index: int) -> np.ndarray:
        """Get a read-only view of a single row."""
        view = self.data[index].view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self.num_rows

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"

    def to_frame(self) -> pd.DataFrame:
        """Convert the matrix to a dataframe indexed by the row labels."""
        return pd.DataFrame(self.data, index=self.row_labels, columns=self.column_labels)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Matrix":
        """Create a matrix from a dataframe.

        The index becomes the row labels unless it is the default range index,
        and the columns become the column labels.

        Args:
            df (pd.DataFrame): A dataframe with only numeric columns.

        Returns:
            Matrix: The matrix holding the values of the dataframe.
        """
        try:
            data = df.to_numpy(dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError("All columns of the dataframe should be numeric.") from e

        row_labels = None
        if not isinstance(df.index, pd.RangeIndex):
            row_labels = [str(label) for label in df.index]
        column_labels = [str(column) for column in df.columns]

        return cls(data, row_labels=row_labels, column_labels=column_labels)

    @classmethod
    def from_csv(cls, path: str, index_col: Optional[str] = None) -> "Matrix":
        """Load a matrix from a CSV file with a header row.

        Args:
            path (str): CSV file to read the matrix from.
            index_col (str, optional): The column holding the row labels.
                Defaults to None, in which case the rows are unlabeled.

        Returns:
            Matrix: The loaded matrix.
        """
        df = pd.read_csv(path, index_col=index_col)
        logging.info(f"Loaded {len(df)} rows with {len(df.columns)} columns from {path}")
        return cls.from_frame(df)


class KnnResult(Matrix):
    """The nearest rows of a matrix together with their distances to the query."""

    def __init__(
        self,
        data,
        distances,
        row_labels: Optional[Sequence[str]] = None,
        column_labels: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(data, row_labels=row_labels, column_labels=column_labels)
        self.distances = np.array(distances, dtype=float).reshape(-1)
        if len(self.distances) != self.num_rows:
            raise InvalidInputError(
                f"Expected {self.num_rows} distances, got {len(self.distances)}."
            )

    @property
    def attributes(self) -> MappingProxyType:
        """The distances as a named attribute mapping."""
        return MappingProxyType({"distances": self.distances.tolist()})

    def to_frame(self, distance_column: str = "distance") -> pd.DataFrame:
        """Convert the result to a dataframe with a leading distance column."""
        df = super().to_frame()
        df.insert(0, distance_column, self.distances)
        return df
