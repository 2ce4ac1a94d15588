"""This module runs a kNN search over a matrix stored in a CSV file."""


import argparse
import logging

from tabulate import tabulate

from .data.matrix import KnnResult, Matrix
from .metrics import METRIC_NAMES, get_distance_metric
from .models import knn

DEFAULT_K = 10


def format_result(result: KnnResult) -> str:
    """Format the nearest rows as a table of label, distance and row values.

    Args:
        result (KnnResult): The result of a kNN search.

    Returns:
        str: The table, one line per neighbor.
    """
    labels = result.row_labels
    if labels is None:
        labels = ["" for _ in range(result.num_rows)]
    columns = result.column_labels
    if columns is None:
        columns = [str(column) for column in range(result.num_columns)]

    rows = [
        [label, round(distance, 6), *values]
        for label, distance, values in zip(labels, result.distances, result.data.tolist())
    ]
    return tabulate(
        rows,
        headers=["Label", "Distance", *columns],
        tablefmt="pretty",
    )


def main(args: argparse.Namespace) -> KnnResult:
    """Finds the nearest rows of the matrix file to the query."""
    # Load the matrix.
    logging.info("Loading the matrix...")
    matrix = Matrix.from_csv(args.matrix_file, args.index_col)

    # Search the matrix.
    logging.info(
        f"Searching for the {args.k} nearest rows using {args.distance_metric.value}..."
    )
    result = knn(matrix, args.query, args.k, args.distance_metric)

    # Print the results.
    logging.info(f"\n{format_result(result)}")
    return result


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    # Required arguments.
    parser.add_argument(
        "matrix_file",
        help="The CSV file containing the matrix, one row per line.",
    )
    parser.add_argument(
        "--query",
        help="The query vector.",
        type=float,
        nargs="+",
        required=True,
    )

    # Search arguments.
    parser.add_argument(
        "--k",
        help="The number of nearest neighbors.",
        type=int,
        default=DEFAULT_K,
    )
    parser.add_argument(
        "--distance_metric",
        help=f"The distance metric to use, one of {', '.join(METRIC_NAMES)} (any case).",
        type=get_distance_metric,
        default="euclidean",
    )

    # Dataset arguments.
    parser.add_argument(
        "--index_col",
        help="The column holding the row labels.",
        default=None,
    )

    # Logging arguments.
    parser.add_argument(
        "--logging_level",
        help="The logging level.",
        type=int,
        default=logging.INFO,
    )
    return parser


def cli() -> None:
    # Parse the arguments.
    args = build_parser().parse_args()

    # Set up logging.
    logging.basicConfig(
        level=args.logging_level,
        format="%(asctime)s %(message)s",
        datefmt="%H:%M:%S",
    )

    # Print command line arguments.
    logging.info(f"{args=}")

    main(args)


if __name__ == "__main__":
    cli()
