"""
Lloyd's iteration: alternate nearest-center assignment and mean recomputation
until the centers stop moving.
"""

from dataclasses import dataclass
import math
from typing import List, Optional, Sequence, Tuple
import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning

from .errors import DimensionMismatchError, InvalidParameterError
from .vector_math import (
    as_points,
    mean,
    pairwise_squared_distances,
    power_of_two_scale,
    squared_distance,
)


@dataclass(frozen=True, eq=False)
class Cluster:
    """
    One cluster of a finished clustering.

    Attributes:
        center: Mean of the members, shape (n_features,)
        members: The points assigned to this cluster, shape (n_members, n_features),
            in input order
    """

    center: np.ndarray
    members: np.ndarray

    def __post_init__(self):
        # Own read-only copies; the caller's arrays are left untouched
        for name in ("center", "members"):
            value = np.array(getattr(self, name), dtype=np.float64)
            value.flags.writeable = False
            object.__setattr__(self, name, value)

    def __len__(self) -> int:
        return self.members.shape[0]


def validate_converge_distance(converge_distance: float) -> float:
    converge_distance = float(converge_distance)
    if not math.isfinite(converge_distance) or converge_distance < 0:
        raise InvalidParameterError(
            f"converge_distance must be finite and >= 0, got {converge_distance}"
        )
    return converge_distance


def validate_max_iters(max_iters: Optional[int]) -> Optional[int]:
    if max_iters is not None and max_iters <= 0:
        raise InvalidParameterError(f"max_iters must be > 0 or None, got {max_iters}")
    return max_iters


def assign_clusters(X: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Index of the nearest center for every point; ties go to the lowest index."""
    scale = power_of_two_scale(X, centers)
    return np.argmin(pairwise_squared_distances(X / scale, centers / scale), axis=1)


def update_centers(X: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Mean of each cluster's members. An empty cluster keeps its previous center."""
    new_centers = centers.copy()
    for k in range(centers.shape[0]):
        mask = labels == k
        if np.any(mask):
            new_centers[k] = mean(X[mask])
    return new_centers


def lloyd(
    X: np.ndarray,
    centers: np.ndarray,
    converge_distance: float,
    max_iters: Optional[int] = 300,
    verbose: bool = False,
) -> Tuple[np.ndarray, np.ndarray, int]:
    """
    Run Lloyd's iteration on prepared arrays.

    The loop stops once the summed squared movement of all centers is at most
    converge_distance ** 2. The centers returned are the means computed from
    the labels returned, so both always describe the same clustering.

    Args:
        X: Points, shape (n_samples, n_features)
        centers: Starting centers, shape (n_clusters, n_features)
        converge_distance: Movement threshold
        max_iters: Iteration cap, or None for no cap
        verbose: Whether to print progress information

    Returns:
        Tuple of (centers, labels, n_iter)
    """
    # Work on exactly rescaled coordinates so squared movements stay finite
    scale = power_of_two_scale(X, centers)
    X = X / scale
    centers = centers / scale
    ratio = converge_distance / scale
    threshold = ratio * ratio

    iteration = 0
    while True:
        iteration += 1
        labels = assign_clusters(X, centers)
        new_centers = update_centers(X, labels, centers)

        move_distance_sq = sum(
            squared_distance(old, new) for old, new in zip(centers, new_centers)
        )

        if verbose:
            print(f"Iteration {iteration}, center movement: {math.sqrt(move_distance_sq) * scale:.6f}")

        if move_distance_sq <= threshold:
            if verbose:
                print(f"Converged after {iteration} iterations")
            return new_centers * scale, labels, iteration

        if max_iters is not None and iteration >= max_iters:
            warnings.warn(
                f"Centers still moved {math.sqrt(move_distance_sq) * scale:.6g} after "
                f"{max_iters} iterations; returning the last assignment",
                ConvergenceWarning,
            )
            return new_centers * scale, labels, iteration

        centers = new_centers


def build_clusters(X: np.ndarray, centers: np.ndarray, labels: np.ndarray) -> List[Cluster]:
    return [
        Cluster(center=centers[k], members=X[labels == k])
        for k in range(centers.shape[0])
    ]


def refine(
    points,
    centers: Sequence,
    converge_distance: float,
    max_iters: Optional[int] = 300,
    verbose: bool = False,
) -> List[Cluster]:
    """
    Refine *centers* against *points* with Lloyd's algorithm.

    Args:
        points: Collection of equal-length vectors
        centers: Starting centers, typically from initial_centers
        converge_distance: Stop once the centers' summed squared movement in
            one iteration is at most converge_distance ** 2
        max_iters: Iteration cap; None iterates until convergence.
            Hitting the cap emits a ConvergenceWarning.
        verbose: Whether to print progress information

    Returns:
        One Cluster per center, in the order of *centers*. Every point is a
        member of exactly one cluster.

    Raises:
        InvalidParameterError: If converge_distance is negative or max_iters <= 0
        DimensionMismatchError: If points and centers differ in dimension
    """
    converge_distance = validate_converge_distance(converge_distance)
    max_iters = validate_max_iters(max_iters)
    X = as_points(points)
    C = as_points(centers)
    if X.shape[0] == 0:
        return []
    if C.shape[0] == 0:
        raise InvalidParameterError("At least one center is required to refine a non-empty collection")
    if X.shape[1] != C.shape[1]:
        raise DimensionMismatchError(
            f"Points have dimension {X.shape[1]} but centers have dimension {C.shape[1]}"
        )

    final_centers, labels, _ = lloyd(X, C, converge_distance, max_iters, verbose)
    return build_clusters(X, final_centers, labels)
