from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from ..core._registry import get_metric
from ..core.base import Measurable
from ..metrics.distance_metrics import as_vector


@dataclass(eq=False)
class VectorElement(Measurable):
    """
    A feature vector that measures itself with a registered metric.

    Equality and hashing stay identity-based, so two elements holding the
    same values are still distinct registry keys.

    Parameters
    ----------
    values
        1-D array-like of features; stored as a float ``np.ndarray``.
    metric
        Name understood by :func:`~distmap.core._registry.get_metric`.
    label
        Optional name shown by ``repr``; exported frames hold the element
        itself, so it reaches them through ``repr`` only.
    metric_kwargs
        Extra keyword arguments for the metric (e.g. ``VI`` for mahalanobis).
    """

    values          : np.ndarray
    metric          : str                   = "euclidean"
    label           : str | None            = None
    metric_kwargs   : Dict[str, Any]        = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.values = as_vector(self.values)
        # resolve eagerly so a typo fails at construction, not at first query
        self._metric_fn = get_metric(self.metric)

    def distance_to(self, other: "VectorElement") -> float:
        if self.values.shape != other.values.shape:
            raise ValueError(
                f"Cannot measure vectors of shape {self.values.shape} and {other.values.shape}."
            )
        return self._metric_fn(self.values, other.values, **self.metric_kwargs)

    def __repr__(self) -> str:
        name = self.label if self.label is not None else np.array2string(self.values, precision=3)
        return f"VectorElement({name}, metric={self.metric})"
