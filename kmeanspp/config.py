"""
Clustering configuration.

Usage:
    from kmeanspp.config import ClusteringConfig
    from kmeanspp import KMeans

    config = ClusteringConfig(max_clusters=8, converge_distance=1e-3, random_state=42)
    model = KMeans.from_config(config).fit(X)
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .errors import InvalidParameterError
from .random_source import RandomState
from .refinement import validate_converge_distance, validate_max_iters


@dataclass
class ClusteringConfig:
    """Parameters of one k-means++ clustering job."""
    max_clusters: int
    converge_distance: float = 1e-4
    max_iters: Optional[int] = 300
    n_init: int = 1
    random_state: RandomState = None
    verbose: bool = False

    def __post_init__(self):
        """Validate parameter ranges."""
        if self.max_clusters <= 0:
            raise InvalidParameterError(f"max_clusters must be > 0, got {self.max_clusters}")
        if self.n_init <= 0:
            raise InvalidParameterError(f"n_init must be > 0, got {self.n_init}")
        self.converge_distance = validate_converge_distance(self.converge_distance)
        validate_max_iters(self.max_iters)

    def to_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the KMeans constructor."""
        kwargs = {f.name: getattr(self, f.name) for f in fields(self)}
        kwargs["n_clusters"] = kwargs.pop("max_clusters")
        return kwargs
