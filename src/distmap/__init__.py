"""
distmap – public API
"""
from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .core import (
    CacheStats,
    DistanceMap,
    DistanceMapConfig,
    EmptyCandidateSetError,
    LookupPolicy,
    Measurable,
    SortMode,
    get_metric,
    register_metric,
)
from .elements import VectorElement
from .metrics import cached_pairs_frame, get_dissimilarity_matrix

__all__ = [
    "CacheStats",
    "DistanceMap",
    "DistanceMapConfig",
    "EmptyCandidateSetError",
    "LookupPolicy",
    "Measurable",
    "SortMode",
    "VectorElement",
    "cached_pairs_frame",
    "get_dissimilarity_matrix",
    "get_metric",
    "register_metric",
    "__version__",
]

try:
    __version__ = _pkg_version(__name__)
except PackageNotFoundError:
    __version__ = "0.0.0"
