"""
core/distance_map.py
====================

Memoising cache for pairwise distances between expensive-to-measure elements.

• Every *registered* element owns an inner ``{other: distance}`` map.
• A distance is computed once per unordered pair and written into both
  directions (the *symmetric fill*).
• ``get_distance`` registers its second argument on demand when the first is
  already registered (see :class:`LookupPolicy` for the alternatives).
• Nearest-neighbour and sampling queries are built on top of the lookup and
  never touch the storage directly.

The map is single-threaded.  Embedders sharing it between threads must hold
one lock around every call, lookups included, since a lookup may fill.
"""

from __future__ import annotations

import functools
import logging
import math
from typing import Callable, Dict, Generic, Hashable, Iterable, Iterator, List, Optional, TypeVar

import numpy as np

from ._config import CacheStats, DistanceMapConfig, LookupPolicy, SortMode
from .base import EmptyCandidateSetError

_LOG = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def _measure(a, b) -> float:
    """Default distance function: defer to the element's own contract."""
    return a.distance_to(b)


def _truncated_compare(d1: float, d2: float) -> int:
    """``int(d1 - d2)``: differences below 1.0 in magnitude compare equal."""
    diff = d1 - d2
    if math.isnan(diff):
        return 0
    if math.isinf(diff):
        return 1 if diff > 0 else -1
    return int(diff)


# --------------------------------------------------------------------------- #
#                           DistanceMap (public)                              #
# --------------------------------------------------------------------------- #


class DistanceMap(Generic[T]):
    """
    Registry of elements plus a lazily filled, symmetric distance cache.

    Parameters
    ----------
    config
        :class:`DistanceMapConfig` with the lookup policy, the ordering used by
        :meth:`get_close_elements` and the seed for :meth:`get_random_element`.
        Defaults to ``DistanceMapConfig()``.
    distance_fn
        Callable ``(a, b) -> float``.  Defaults to ``a.distance_to(b)``, i.e.
        the :class:`~distmap.core.base.Measurable` contract.
    """

    def __init__(
        self,
        config          : DistanceMapConfig | None          = None,
        *,
        distance_fn     : Callable[[T, T], float] | None    = None,
    ) -> None:
        self.config     : DistanceMapConfig             = config or DistanceMapConfig()
        self._distance  : Callable[[T, T], float]       = distance_fn or _measure
        self._cache     : Dict[T, Dict[T, float]]       = {}
        self._stats     : CacheStats                    = CacheStats()
        self._rng       : np.random.Generator           = np.random.default_rng(self.config.random_state)

        if self.config.lookup_policy is LookupPolicy.legacy:
            _LOG.warning(
                "DistanceMap uses the legacy lookup policy: distances between two "
                "registered elements are never cached."
            )

    # ------------------------------------------------------------------ #
    # lookup                                                             #
    # ------------------------------------------------------------------ #
    def get_distance(self, a: Optional[T], b: Optional[T]) -> float:
        """
        Distance between *a* and *b*, served from the cache when possible.

        Returns ``math.inf`` if either argument is ``None``.  When the lookup
        policy sends the pair through the cache and *b* is unregistered, *b*
        is **registered as a side effect** before both directions are stored.
        Pairs the policy bypasses are computed directly and leave no trace.
        """
        if a is None or b is None:
            return math.inf

        if self._bypasses(a, b):
            self._stats.bypasses += 1
            _LOG.debug("Bypassing cache for %r -> %r", a, b)
            return self._distance(a, b)

        row = self._cache[a]
        if b in row:
            self._stats.hits += 1
            return row[b]

        distance = self._distance(a, b)
        if b not in self._cache:
            _LOG.debug("Auto-registering %r", b)
            self.add(b)

        # symmetric fill
        row[b] = distance
        self._cache[b][a] = distance
        self._stats.misses += 1
        _LOG.debug("Cached distance %r <-> %r = %s", a, b, distance)
        return distance

    def _bypasses(self, a: T, b: T) -> bool:
        policy = self.config.lookup_policy
        if a not in self._cache:
            return True
        if policy is LookupPolicy.legacy:
            return b in self._cache
        if policy is LookupPolicy.strict:
            return b not in self._cache
        return False

    def get_cached(self, a: T, b: T) -> float | None:
        """Cached distance from *a* to *b*, or ``None``; never computes."""
        row = self._cache.get(a)
        if row is None:
            return None
        return row.get(b)

    def cached_neighbors(self, element: T) -> Dict[T, float]:
        """Copy of *element*'s inner map (empty if unregistered)."""
        return dict(self._cache.get(element, {}))

    # ------------------------------------------------------------------ #
    # registry                                                           #
    # ------------------------------------------------------------------ #
    def has_element(self, element: T) -> bool:
        return element in self._cache

    def size(self) -> int:
        return len(self._cache)

    def get_list(self) -> List[T]:
        """Snapshot of the registered elements; do not rely on the order."""
        return list(self._cache)

    def add(self, element: T) -> None:
        """Register *element* with an empty inner map, replacing any previous one."""
        self._cache[element] = {}

    def remove(self, element: T) -> None:
        """
        Unregister *element* and purge every cached distance to it.

        O(n) in the number of registered elements.  A no-op for an element
        that is not registered.
        """
        self._cache.pop(element, None)
        for row in self._cache.values():
            row.pop(element, None)

    def update(self, element: T) -> None:
        """Forget every distance involving *element*; it stays registered."""
        self.remove(element)
        self.add(element)

    def clear(self) -> None:
        _LOG.info("Clearing distance map with %d elements", len(self._cache))
        self._cache.clear()

    # ------------------------------------------------------------------ #
    # neighbour queries                                                  #
    # ------------------------------------------------------------------ #
    def get_closest_element(self, target: T) -> T | None:
        """
        Registered element nearest to *target*, or ``None``.

        *target* is skipped by identity only: a distinct object that compares
        equal to it is still a candidate.  Ties go to the first candidate in
        registry order, which callers should treat as arbitrary.
        """
        minimum = math.inf
        closest = None
        for element in self.get_list():
            if element is target:
                continue
            distance = self.get_distance(target, element)
            if distance < minimum:
                minimum = distance
                closest = element
        return closest

    def get_adjacent_element(self, target: T) -> T | None:
        """*target*'s closest element if the relation is mutual, else ``None``."""
        closest = self.get_closest_element(target)
        if closest is not None and self.get_closest_element(closest) is target:
            return closest
        return None

    def get_close_elements(
        self,
        target      : T,
        ratio       : float,
        *,
        sort_mode   : SortMode | str | None = None,
    ) -> List[T]:
        """
        Registered elements ordered by distance to *target*, cut to a ratio.

        *target* itself is not excluded.  The result holds
        ``max(floor(n * ratio), min(2, n))`` elements for ``n`` registered.

        Parameters
        ----------
        target
            Reference element; need not be registered.
        ratio
            Fraction of the registry to keep, at most 1.  Zero or negative
            ratios still return ``min(2, n)`` elements.
        sort_mode
            Overrides ``config.sort_mode`` for this call.  ``truncated``
            compares ``int(d1 - d2)`` so distances closer than 1.0 keep their
            registry order; ``strict`` sorts on the exact values.
        """
        if ratio > 1.0:
            raise ValueError(f"ratio must not exceed 1 (got {ratio}).")
        mode = self.config.sort_mode if sort_mode is None else SortMode.from_string(sort_mode)

        scored = [(element, self.get_distance(target, element)) for element in self.get_list()]
        if mode is SortMode.strict:
            scored.sort(key=lambda pair: pair[1])
        else:
            scored.sort(key=functools.cmp_to_key(lambda p, q: _truncated_compare(p[1], q[1])))

        n = len(scored)
        count = max(math.floor(n * ratio), min(2, n))
        return [element for element, _ in scored[:count]]

    # ------------------------------------------------------------------ #
    # sampling                                                           #
    # ------------------------------------------------------------------ #
    def get_random_element(self, excluded: Iterable[T] | None = None) -> T:
        """
        Uniformly pick a registered element not contained in *excluded*.

        Raises
        ------
        EmptyCandidateSetError
            If no registered element survives the exclusion.
        """
        keys = self.get_list()
        if excluded is not None:
            excluded = list(excluded)
            keys = [key for key in keys if key not in excluded]
        if not keys:
            raise EmptyCandidateSetError(
                f"No eligible element among {len(self._cache)} registered."
            )
        return keys[int(self._rng.integers(len(keys)))]

    # ------------------------------------------------------------------ #
    # bookkeeping                                                        #
    # ------------------------------------------------------------------ #
    @property
    def stats(self) -> CacheStats:
        """Hit/miss/bypass counters since construction or ``reset_stats``."""
        return self._stats

    def reset_stats(self) -> None:
        self._stats.reset()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, element: object) -> bool:
        return self.has_element(element)

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_list())

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return (
            f"{cls}(n={len(self._cache)}, policy={self.config.lookup_policy.value}, "
            f"sort={self.config.sort_mode.value})"
        )


__all__ = [
    "DistanceMap",
]
