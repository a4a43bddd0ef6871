"""
Elementwise vector arithmetic and squared Euclidean distances.

Vectors are 1-D float64 numpy arrays and point collections are 2-D arrays of
shape (n_samples, n_features). Every binary operation checks that both
operands share a dimension and raises DimensionMismatchError otherwise.
"""

from typing import Sequence, Union

import numpy as np

from .errors import DimensionMismatchError, EmptyPoolError

VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(v: VectorLike) -> np.ndarray:
    """Convert *v* to a 1-D float64 array."""
    arr = np.asarray(v, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"Expected a 1-D vector, got shape {arr.shape}")
    return arr


def as_points(points) -> np.ndarray:
    """
    Convert a collection of vectors to a (n_samples, n_features) float64 array.

    An empty collection becomes an array of shape (0, 0).

    Raises:
        DimensionMismatchError: If the vectors have differing lengths or the
            input is not a flat collection of vectors.
    """
    if isinstance(points, np.ndarray):
        arr = points.astype(np.float64, copy=False)
    else:
        points = list(points)
        if not points:
            return np.empty((0, 0), dtype=np.float64)
        lengths = {len(p) for p in points}
        if len(lengths) != 1:
            raise DimensionMismatchError(
                f"All vectors must share one dimension, got lengths {sorted(lengths)}"
            )
        arr = np.asarray(points, dtype=np.float64)

    if arr.size == 0 and arr.ndim == 1:
        return np.empty((0, 0), dtype=np.float64)
    if arr.ndim != 2:
        raise DimensionMismatchError(f"Expected a 2-D collection of vectors, got shape {arr.shape}")
    return arr


def _check_same_dimension(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape[-1] != b.shape[-1]:
        raise DimensionMismatchError(
            f"Dimension mismatch: {a.shape[-1]} != {b.shape[-1]}"
        )


def zero(dimension: int) -> np.ndarray:
    return np.zeros(dimension, dtype=np.float64)


def add(a: VectorLike, b: VectorLike) -> np.ndarray:
    a, b = as_vector(a), as_vector(b)
    _check_same_dimension(a, b)
    return a + b


def subtract(a: VectorLike, b: VectorLike) -> np.ndarray:
    a, b = as_vector(a), as_vector(b)
    _check_same_dimension(a, b)
    return a - b


def divide(a: VectorLike, scalar: float) -> np.ndarray:
    return as_vector(a) / scalar


def squared_distance(a: VectorLike, b: VectorLike) -> float:
    """Return sum((a_i - b_i) ** 2)."""
    diff = subtract(b, a)
    return float(np.dot(diff, diff))


def mean(vectors) -> np.ndarray:
    """
    Elementwise sum of *vectors* divided by their count.

    Raises:
        EmptyPoolError: If *vectors* is empty; the mean of nothing is undefined.
    """
    arr = as_points(vectors)
    if arr.shape[0] == 0:
        raise EmptyPoolError("Cannot take the mean of an empty collection")
    return arr.sum(axis=0) / arr.shape[0]


def power_of_two_scale(*arrays: np.ndarray) -> float:
    """
    Largest power of two not above the largest absolute value in *arrays*.

    Dividing by it maps coordinates into (-2, 2) without rounding, so squared
    distances of the scaled data cannot overflow. Returns 1.0 when every
    value is zero.
    """
    largest = max((float(np.max(np.abs(a))) for a in arrays if a.size), default=0.0)
    if largest == 0.0:
        return 1.0
    _, exponent = np.frexp(largest)
    return float(np.ldexp(1.0, int(exponent) - 1))


def pairwise_squared_distances(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Squared distances between every point and every center.

    Args:
        points: Array of shape (n_samples, n_features)
        centers: Array of shape (n_centers, n_features)

    Returns:
        Array of shape (n_samples, n_centers)
    """
    _check_same_dimension(points, centers)
    # Broadcast to (n_samples, n_centers, n_features)
    diffs = points[:, np.newaxis, :] - centers[np.newaxis, :, :]
    return np.sum(diffs ** 2, axis=2)
