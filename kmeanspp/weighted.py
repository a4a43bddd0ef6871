"""
Weighted random selection.

Weights are non-negative relative probabilities; they need not sum to one.
The weights [1, 1, 2] give a 25% chance of index 0, 25% of index 1 and 50% of
index 2.
"""

import math
from typing import Callable, List, Sequence, TypeVar

from .errors import EmptyPoolError, InvalidParameterError
from .random_source import RandomState, check_random_source

T = TypeVar("T")


def _validate_weights(weights: Sequence[float]) -> List[float]:
    values = [float(w) for w in weights]
    for index, w in enumerate(values):
        if not math.isfinite(w) or w < 0:
            raise InvalidParameterError(
                f"Weights must be finite and non-negative, got {w} at index {index}"
            )
    return values


def select_weighted_index(weights: Sequence[float], rng: RandomState = None) -> int:
    """
    Draw one index with probability proportional to its weight.

    A value r is drawn uniformly from [0, sum(weights)) and the first index
    whose running total of weights exceeds r is returned. When every weight
    is zero the draw falls back to a uniform choice over all indices.

    Args:
        weights: Non-negative relative probabilities
        rng: Source of randomness (see check_random_source)

    Returns:
        Index in range(len(weights))

    Raises:
        EmptyPoolError: If *weights* is empty
        InvalidParameterError: If a weight is negative or not finite
    """
    values = _validate_weights(weights)
    if not values:
        raise EmptyPoolError("Cannot select from an empty list of weights")
    rng = check_random_source(rng)

    largest = max(values)
    if largest == 0.0:
        return rng.integer(0, len(values))
    # Exact power-of-two rescale keeps the running total finite
    _, exponent = math.frexp(largest)
    scale = math.ldexp(1.0, exponent - 1)
    values = [w / scale for w in values]

    total = math.fsum(values)
    r = rng.uniform(0.0, total)
    accumulated = 0.0
    last_positive = 0
    for index, w in enumerate(values):
        accumulated += w
        if w > 0:
            last_positive = index
            if r < accumulated:
                return index

    # Rounding left the running total at or below r
    return last_positive


def random_element(items: Sequence[T], weight_of: Callable[[T], float], rng: RandomState = None) -> T:
    """
    Return one of *items*, chosen with probability proportional to weight_of(item).

    Raises:
        EmptyPoolError: If *items* is empty
    """
    items = list(items)
    if not items:
        raise EmptyPoolError("Cannot choose an element from an empty collection")
    index = select_weighted_index([weight_of(item) for item in items], rng)
    return items[index]


def sample_weighted(
    items: Sequence[T],
    weight_of: Callable[[T], float],
    count: int,
    rng: RandomState = None,
) -> List[T]:
    """
    Draw up to *count* items without replacement, weighted by weight_of(item).

    Each draw is a select_weighted_index over the items not chosen yet, so an
    item is never returned twice. Results are in selection order; when
    *count* is at least len(items) the whole collection is returned in its
    original order without consuming any randomness.

    Args:
        items: The pool to sample from
        weight_of: Maps an item to its non-negative weight
        count: Maximum number of items to return
        rng: Source of randomness (see check_random_source)

    Returns:
        List of min(count, len(items)) items

    Raises:
        InvalidParameterError: If *count* is negative or a weight is invalid
    """
    if count < 0:
        raise InvalidParameterError(f"count must be >= 0, got {count}")
    items = list(items)
    weights = _validate_weights([weight_of(item) for item in items])
    if count >= len(items):
        return items

    rng = check_random_source(rng)
    remaining_items = list(items)
    remaining_weights = list(weights)
    result = []
    while len(result) < count and remaining_items:
        index = select_weighted_index(remaining_weights, rng)
        # Remaining pool keeps its original order
        del remaining_weights[index]
        result.append(remaining_items.pop(index))
    return result
