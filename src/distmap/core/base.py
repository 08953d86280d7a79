from __future__ import annotations          # <- future-proof typing
from abc import ABC, abstractmethod


class Measurable(ABC):
    """
    Common interface for every element a :class:`DistanceMap` can cache.

    Subclasses must report a non-negative, symmetric distance to another
    instance of the same type and be hashable.  Neither property is checked
    by the cache; the symmetric fill simply relies on them.
    """

    @abstractmethod
    def distance_to(self, other: "Measurable") -> float:
        """Return the (possibly expensive) distance from *self* to *other*."""
        ...


class EmptyCandidateSetError(LookupError):
    """Raised when a sampling query has no eligible element to pick from."""


__all__ = [
    "Measurable",
    "EmptyCandidateSetError",
]
