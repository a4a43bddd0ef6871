"""
k-means++ clustering of fixed-dimension vectors.

clusterize() is the functional entry point; KMeans wraps it in an estimator
with fit/predict and keeps the best of several initialisations.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np
from sklearn.exceptions import NotFittedError

from .errors import DimensionMismatchError, InvalidParameterError
from .random_source import RandomSource, RandomState, check_random_source
from .refinement import (
    Cluster,
    assign_clusters,
    build_clusters,
    lloyd,
    validate_converge_distance,
    validate_max_iters,
)
from .seeding import initial_centers
from .vector_math import as_points, power_of_two_scale


def _fit_single(
    X: np.ndarray,
    max_clusters: int,
    converge_distance: float,
    rng: RandomSource,
    max_iters: Optional[int],
    verbose: bool,
) -> Tuple[np.ndarray, np.ndarray, int]:
    """Seed with k-means++ then refine; returns (centers, labels, n_iter)."""
    centers = np.array(initial_centers(X, max_clusters, rng))
    return lloyd(X, centers, converge_distance, max_iters, verbose)


def _inertia(X: np.ndarray, centers: np.ndarray, labels: np.ndarray) -> float:
    """Within-cluster sum of squares."""
    scale = power_of_two_scale(X, centers)
    scaled = float(np.sum((X / scale - centers[labels] / scale) ** 2))
    return scaled * scale * scale


def clusterize(
    points,
    max_clusters: int,
    converge_distance: float,
    rng: RandomState = None,
    max_iters: Optional[int] = 300,
    verbose: bool = False,
) -> List[Cluster]:
    """
    Partition *points* into at most *max_clusters* clusters using k-means++.

    Args:
        points: Collection of equal-length vectors, or an array of shape
            (n_samples, n_features)
        max_clusters: Number of clusters wanted. Fewer are returned when there
            are fewer points.
        converge_distance: Keep iterating until the centers' summed squared
            movement is at most converge_distance ** 2
        rng: Source of randomness for seeding (see check_random_source)
        max_iters: Iteration cap; None iterates until convergence
        verbose: Whether to print progress information

    Returns:
        List of min(max_clusters, len(points)) Cluster objects. An empty
        input gives an empty list.

    Raises:
        InvalidParameterError: If max_clusters <= 0 or converge_distance < 0
        DimensionMismatchError: If the vectors differ in length
    """
    if max_clusters <= 0:
        raise InvalidParameterError(f"max_clusters must be > 0, got {max_clusters}")
    converge_distance = validate_converge_distance(converge_distance)
    max_iters = validate_max_iters(max_iters)
    X = as_points(points)
    if X.shape[0] == 0:
        return []
    rng = check_random_source(rng)

    centers, labels, _ = _fit_single(X, max_clusters, converge_distance, rng, max_iters, verbose)
    return build_clusters(X, centers, labels)


class KMeans:
    """
    k-means++ clustering estimator.

    Features:
    - k-means++ seeding through an injectable RandomSource
    - Lloyd refinement until the centers stop moving
    - Optional restarts keeping the run with the lowest inertia
    """

    def __init__(
        self,
        n_clusters: int,
        converge_distance: float = 1e-4,
        max_iters: Optional[int] = 300,
        n_init: int = 1,
        random_state: RandomState = None,
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Maximum number of clusters
            converge_distance: Convergence threshold on center movement
            max_iters: Maximum number of iterations per run (None for no cap)
            n_init: Number of different initializations to try
            random_state: Seed, numpy Generator or RandomSource
            verbose: Whether to print progress information
        """
        if n_clusters <= 0:
            raise InvalidParameterError(f"n_clusters must be > 0, got {n_clusters}")
        if n_init <= 0:
            raise InvalidParameterError(f"n_init must be > 0, got {n_init}")
        self.n_clusters = n_clusters
        self.converge_distance = validate_converge_distance(converge_distance)
        self.max_iters = validate_max_iters(max_iters)
        self.n_init = n_init
        self.random_state = random_state
        self.verbose = verbose

        # Results
        self.clusters_: Optional[List[Cluster]] = None
        self.cluster_centers_: Optional[np.ndarray] = None
        self.labels_: Optional[np.ndarray] = None
        self.inertia_: Optional[float] = None
        self.n_iter_: Optional[int] = None

    @classmethod
    def from_config(cls, config) -> "KMeans":
        """Build an estimator from a ClusteringConfig."""
        return cls(**config.to_kwargs())

    def fit(self, X) -> "KMeans":
        """
        Fit K-means clustering to the data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            self
        """
        X = as_points(X)
        if X.shape[0] == 0:
            raise InvalidParameterError("Cannot fit KMeans on an empty collection")
        rng = check_random_source(self.random_state)

        if self.verbose:
            print(f"Fitting K-means with {self.n_clusters} clusters on {X.shape[0]} samples...")

        best_inertia = float('inf')
        best_centers = None
        best_labels = None
        best_n_iter = 0

        # Try multiple initializations
        for init_run in range(self.n_init):
            if self.verbose and self.n_init > 1:
                print(f"Initialization {init_run + 1}/{self.n_init}")

            centers, labels, n_iter = _fit_single(
                X, self.n_clusters, self.converge_distance, rng, self.max_iters, self.verbose
            )
            inertia = _inertia(X, centers, labels)

            if best_centers is None or inertia < best_inertia:
                best_inertia = inertia
                best_centers = centers
                best_labels = labels
                best_n_iter = n_iter

        self.clusters_ = build_clusters(X, best_centers, best_labels)
        self.cluster_centers_ = best_centers
        self.labels_ = best_labels
        self.inertia_ = best_inertia
        self.n_iter_ = best_n_iter

        if self.verbose:
            print(f"Final inertia: {self.inertia_:.2f}")

        return self

    def _check_fitted(self) -> None:
        if self.cluster_centers_ is None:
            raise NotFittedError("Model must be fitted before use; call fit() first")

    def predict(self, X) -> np.ndarray:
        """
        Predict cluster labels for new data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Index of the nearest fitted center for every sample
        """
        self._check_fitted()
        X = as_points(X)
        if X.shape[0] == 0:
            return np.empty(0, dtype=np.intp)
        if X.shape[1] != self.cluster_centers_.shape[1]:
            raise DimensionMismatchError(
                f"Model was fitted on {self.cluster_centers_.shape[1]} features, got {X.shape[1]}"
            )
        return assign_clusters(X, self.cluster_centers_)

    def fit_predict(self, X) -> np.ndarray:
        return self.fit(X).labels_

    def get_cluster_info(self) -> Dict:
        """Get information about the clustering results."""
        self._check_fitted()

        cluster_sizes = np.array([len(cluster) for cluster in self.clusters_])

        return {
            'n_clusters': len(self.clusters_),
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'cluster_sizes': dict(enumerate(cluster_sizes.tolist())),
            'empty_clusters': int(np.sum(cluster_sizes == 0)),
            'avg_cluster_size': float(np.mean(cluster_sizes)),
            'std_cluster_size': float(np.std(cluster_sizes)),
            'min_cluster_size': int(np.min(cluster_sizes)),
            'max_cluster_size': int(np.max(cluster_sizes))
        }
