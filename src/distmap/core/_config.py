from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class _ChoiceEnum(str, Enum):
    """String enum with the coercion helpers shared by every option below."""

    # -------- convenience helpers ------------------------------------
    @classmethod
    def from_string(cls, value: str):
        """Coerce an arbitrary string into a member (raises on unknown)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown {cls.__name__} '{value}'. Valid choices: {valid}"
            ) from exc

    @classmethod
    def choices(cls) -> list[str]:
        """Return the plain-string choices – useful for CLI or argparse."""
        return [m.value for m in cls]


class LookupPolicy(_ChoiceEnum):
    """
    Decides which ``get_distance(a, b)`` calls go through the cache.

    * ``auto_register`` – bypass only when *a* is unregistered; an
      unregistered *b* is registered on demand.  This is a **behavioural
      change** from the historical condition below, which never memoised a
      pair of already registered elements.
    * ``legacy`` – historical condition, kept verbatim: bypass when *a* is
      unregistered **or** *b* is already registered.
    * ``strict`` – bypass when either side is unregistered; never registers.
    """

    auto_register = "auto_register"
    legacy        = "legacy"
    strict        = "strict"


class SortMode(_ChoiceEnum):
    """
    Ordering used by ``get_close_elements``.

    * ``truncated`` – compares ``int(d1 - d2)``: differences below 1.0 tie.
    * ``strict``    – plain floating-point ordering.
    """

    truncated = "truncated"
    strict    = "strict"


@dataclass(slots=True)
class DistanceMapConfig:
    """
    Tunable parameters for :class:`DistanceMap`.

    Notes
    -----
    * ``lookup_policy`` and ``sort_mode`` accept either the enum member or
      its string value; strings are coerced in ``__post_init__``.
    * ``random_state`` seeds the numpy ``Generator`` behind
      ``get_random_element``.
    """

    lookup_policy   : LookupPolicy | str    = LookupPolicy.auto_register
    sort_mode       : SortMode | str        = SortMode.truncated
    random_state    : Optional[int]         = None

    def __post_init__(self) -> None:
        self.validate()

    # guard rails ------------------------------------------------------------

    def validate(self) -> None:
        self.lookup_policy = LookupPolicy.from_string(self.lookup_policy)
        self.sort_mode = SortMode.from_string(self.sort_mode)
        if self.random_state is not None and (
            isinstance(self.random_state, bool) or not isinstance(self.random_state, int)
        ):
            raise ValueError(
                f"random_state must be an int or None (got {type(self.random_state).__name__})."
            )


@dataclass(slots=True)
class CacheStats:
    """Running counters of how ``get_distance`` calls were served."""

    hits        : int = 0   # answered from the cache
    misses      : int = 0   # computed, then stored symmetrically
    bypasses    : int = 0   # computed, not stored

    @property
    def computations(self) -> int:
        """Number of calls made to the underlying distance function."""
        return self.misses + self.bypasses

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.bypasses = 0
