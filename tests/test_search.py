import logging
import sys

import pytest

from matrix_knn.metrics import DistanceMetric
from matrix_knn.search import build_parser, cli, format_result, main


@pytest.fixture
def matrix_file(tmp_path):
    path = tmp_path / "points.csv"
    path.write_text("name,x,y\norigin,0,0\nnear,1,1\nfar,5,5\n")
    return str(path)


def test_parser_defaults(matrix_file):
    args = build_parser().parse_args([matrix_file, "--query", "0", "0"])

    assert args.query == [0.0, 0.0]
    assert args.k == 10
    assert args.distance_metric is DistanceMetric.EUCLIDEAN
    assert args.index_col is None


def test_parser_rejects_unknown_metric(matrix_file):
    with pytest.raises(SystemExit):
        build_parser().parse_args([matrix_file, "--query", "0", "--distance_metric", "cosine"])


def test_main_logs_table(matrix_file, caplog):
    args = build_parser().parse_args(
        [matrix_file, "--query", "0", "0", "--k", "2", "--index_col", "name",
         "--distance_metric", "manhattan"]
    )

    with caplog.at_level(logging.INFO):
        result = main(args)

    assert result.row_labels == ["origin", "near"]
    assert result.distances.tolist() == [0.0, 2.0]
    table = caplog.records[-1].getMessage()
    assert "origin" in table
    assert "near" in table
    assert "far" not in table


def test_format_result_without_labels(tmp_path):
    path = tmp_path / "unlabeled.csv"
    path.write_text("x,y\n0,0\n5,5\n")
    args = build_parser().parse_args([str(path), "--query", "5", "5", "--k", "1"])
    result = main(args)

    table = format_result(result)

    assert "Distance" in table
    assert "x" in table
    assert result.row_labels is None
    assert result.data.tolist() == [[5.0, 5.0]]


@pytest.mark.parametrize(
    "name, expected",
    [("MANHATTAN", DistanceMetric.MANHATTAN), ("earthmovers", DistanceMetric.EARTH_MOVERS)],
)
def test_metric_name_is_case_insensitive(matrix_file, name, expected):
    args = build_parser().parse_args(
        [matrix_file, "--query", "0", "0", "--k", "2", "--distance_metric", name]
    )

    result = main(args)

    assert args.distance_metric is expected
    assert result.num_rows == 2
    assert result.distances[0] == 0.0


def test_cli(matrix_file, monkeypatch, caplog):
    monkeypatch.setattr(
        sys,
        "argv",
        ["matrix-knn", matrix_file, "--query", "1", "1", "--k", "1", "--index_col", "name"],
    )

    with caplog.at_level(logging.INFO):
        cli()

    assert "args=" in caplog.text
    table = caplog.records[-1].getMessage()
    assert "near" in table
    assert "origin" not in table
