import numpy as np
import pandas as pd
import pytest

from matrix_knn import InvalidInputError, KnnResult, Matrix


def test_matrix_copies_its_data():
    rows = [[1.0, 2.0], [3.0, 4.0]]
    matrix = Matrix(rows)
    rows[0][0] = 10.0

    assert matrix.shape == (2, 2)
    assert matrix.data[0, 0] == 1.0


def test_ragged_rows_are_rejected():
    with pytest.raises(InvalidInputError):
        Matrix([[1.0, 2.0], [3.0]])


def test_non_numeric_rows_are_rejected():
    with pytest.raises(InvalidInputError):
        Matrix([["a", "b"]])


def test_vector_is_not_a_matrix():
    with pytest.raises(InvalidInputError):
        Matrix([1.0, 2.0])


@pytest.mark.parametrize(
    "labels",
    [{"row_labels": ["a"]}, {"column_labels": ["x", "y", "z"]}],
)
def test_label_lengths_must_match(labels):
    with pytest.raises(InvalidInputError):
        Matrix([[1.0, 2.0], [3.0, 4.0]], **labels)


def test_empty_matrix():
    matrix = Matrix([])

    assert matrix.num_rows == 0
    assert len(matrix) == 0


def test_row_is_read_only():
    matrix = Matrix([[1.0, 2.0]])

    with pytest.raises(ValueError):
        matrix.row(0)[0] = 5.0


def test_from_frame_uses_labels():
    df = pd.DataFrame({"x": [1, 2], "y": [3, 4]}, index=["a", "b"])

    matrix = Matrix.from_frame(df)

    assert matrix.row_labels == ["a", "b"]
    assert matrix.column_labels == ["x", "y"]
    np.testing.assert_array_equal(matrix.data, [[1.0, 3.0], [2.0, 4.0]])


def test_from_frame_ignores_default_index():
    matrix = Matrix.from_frame(pd.DataFrame({"x": [1.0, 2.0]}))

    assert matrix.row_labels is None


def test_from_frame_rejects_text_columns():
    with pytest.raises(InvalidInputError):
        Matrix.from_frame(pd.DataFrame({"x": ["a", "b"]}))


def test_from_csv(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("name,x,y\na,0,0\nb,1,1\n")

    matrix = Matrix.from_csv(str(path), index_col="name")

    assert matrix.row_labels == ["a", "b"]
    assert matrix.column_labels == ["x", "y"]
    assert matrix.shape == (2, 2)


def test_result_frame_has_distance_column():
    result = KnnResult([[1.0, 2.0]], [0.5], row_labels=["a"], column_labels=["x", "y"])

    df = result.to_frame()

    assert list(df.columns) == ["distance", "x", "y"]
    assert df.loc["a", "distance"] == 0.5


def test_result_attributes_are_read_only():
    result = KnnResult([[1.0]], [2.0])

    assert result.attributes == {"distances": [2.0]}
    with pytest.raises(TypeError):
        result.attributes["distances"] = []


def test_result_needs_one_distance_per_row():
    with pytest.raises(InvalidInputError):
        KnnResult([[1.0], [2.0]], [1.0])
