"""
k-means++ initialisation.

See https://en.wikipedia.org/wiki/K-means%2B%2B for a description of the
algorithm.
"""

from typing import List

import numpy as np

from .errors import InvalidParameterError
from .random_source import RandomState, check_random_source
from .vector_math import as_points, pairwise_squared_distances, power_of_two_scale
from .weighted import select_weighted_index


def initial_centers(points, k: int, rng: RandomState = None) -> List[np.ndarray]:
    """
    Choose up to *k* well spread initial centers from *points*.

    The first center is drawn uniformly at random. Every following center is
    drawn from the points not chosen yet, with probability proportional to the
    squared distance to the nearest center chosen so far.

    Args:
        points: Collection of equal-length vectors
        k: Number of centers wanted
        rng: Source of randomness (see check_random_source)

    Returns:
        List of min(k, len(points)) center vectors, in selection order

    Raises:
        InvalidParameterError: If k <= 0
    """
    if k <= 0:
        raise InvalidParameterError(f"k must be > 0, got {k}")
    X = as_points(points)
    n_samples = X.shape[0]
    if n_samples == 0:
        return []
    rng = check_random_source(rng)
    # Distances are taken on exactly rescaled points so they stay finite
    S = X / power_of_two_scale(X)

    # Choose first center randomly
    first = rng.integer(0, n_samples)
    centers = [X[first].copy()]
    remaining = [i for i in range(n_samples) if i != first]

    # Squared distance of every remaining point to its nearest center so far
    nearest_sq = pairwise_squared_distances(S[remaining], S[first:first + 1])[:, 0]

    while len(centers) < k and remaining:
        position = select_weighted_index(nearest_sq.tolist(), rng)
        chosen = remaining.pop(position)
        nearest_sq = np.delete(nearest_sq, position)
        centers.append(X[chosen].copy())

        if remaining:
            new_sq = pairwise_squared_distances(S[remaining], S[chosen:chosen + 1])[:, 0]
            nearest_sq = np.minimum(nearest_sq, new_sq)

    return centers
