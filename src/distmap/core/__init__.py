from ._config import CacheStats, DistanceMapConfig, LookupPolicy, SortMode
from ._registry import available_metrics, get_metric, register_metric
from .base import EmptyCandidateSetError, Measurable
from .distance_map import DistanceMap
