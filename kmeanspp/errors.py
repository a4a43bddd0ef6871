"""
Exception types raised by the clustering and weighted sampling routines.
"""


class KMeansError(Exception):
    """Base class for every error raised by this package."""


class InvalidParameterError(KMeansError, ValueError):
    """A numeric parameter is out of its valid range (k <= 0, negative weight, ...)."""


class EmptyPoolError(KMeansError, ValueError):
    """Weighted selection was asked to choose from nothing."""


class DimensionMismatchError(KMeansError, ValueError):
    """Vectors taking part in one computation do not share a dimension."""
