"""
k-means++ clustering of fixed-dimension vectors, and the weighted random
selection routines its seeding step is built on.
"""

from .version import __version__
from .errors import KMeansError, InvalidParameterError, EmptyPoolError, DimensionMismatchError
from .random_source import (
    RandomSource,
    NumpyRandomSource,
    LinearCongruentialRandomSource,
    check_random_source,
)
from .weighted import select_weighted_index, random_element, sample_weighted
from .seeding import initial_centers
from .refinement import Cluster, refine
from .kmeans import KMeans, clusterize
from .config import ClusteringConfig

__all__ = [
    "__version__",
    # Errors
    "KMeansError",
    "InvalidParameterError",
    "EmptyPoolError",
    "DimensionMismatchError",
    # Randomness
    "RandomSource",
    "NumpyRandomSource",
    "LinearCongruentialRandomSource",
    "check_random_source",
    # Weighted selection
    "select_weighted_index",
    "random_element",
    "sample_weighted",
    # Clustering
    "initial_centers",
    "Cluster",
    "refine",
    "KMeans",
    "clusterize",
    "ClusteringConfig",
]
