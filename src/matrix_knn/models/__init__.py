"""This module contains the search models used in the project."""

from .knn import Neighbor, knn, knn_from_values, nearest_neighbors
