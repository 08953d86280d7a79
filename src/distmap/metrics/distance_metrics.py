"""
Vector metrics available to :class:`~distmap.elements.VectorElement`.

Each function takes two 1-D arrays and returns a scalar distance.  They are
thin wrappers around :mod:`scipy.spatial.distance`, registered by name so an
element can refer to its metric with a plain string.
"""
import numpy as np
from scipy.spatial import distance as _sd

from ..core._registry import register_metric


def as_vector(values) -> np.ndarray:
    """Coerce *values* to a 1-D float array (raises on higher ranks)."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-D vector, got shape {arr.shape}")
    return arr


@register_metric("euclidean")
def euclidean_distance(u: np.ndarray, v: np.ndarray) -> float:
    return float(_sd.euclidean(as_vector(u), as_vector(v)))


@register_metric("sqeuclidean")
def squared_euclidean_distance(u: np.ndarray, v: np.ndarray) -> float:
    """
    Squared Euclidean distance.

    Not a metric in the strict sense (no triangle inequality) but still
    symmetric, which is all the cache relies on.
    """
    return float(_sd.sqeuclidean(as_vector(u), as_vector(v)))


@register_metric("cityblock", "manhattan")
def manhattan_distance(u: np.ndarray, v: np.ndarray) -> float:
    return float(_sd.cityblock(as_vector(u), as_vector(v)))


@register_metric("cosine")
def cosine_distance(u: np.ndarray, v: np.ndarray) -> float:
    """
    Cosine distance, ``1 - cos(u, v)``.

    Zero vectors have no direction; scipy yields NaN for them and so do we.
    """
    return float(_sd.cosine(as_vector(u), as_vector(v)))


@register_metric("mahalanobis")
def mahalanobis_distance(u: np.ndarray, v: np.ndarray, VI: np.ndarray | None = None) -> float:
    """
    Mahalanobis distance.

    Args:
        u, v (np.ndarray): Input vectors.
        VI (np.ndarray): Inverse covariance matrix, required.

    Returns:
        float: The Mahalanobis distance between *u* and *v*.
    """
    if VI is None:
        raise TypeError("mahalanobis distance requires the inverse covariance matrix 'VI'")
    return float(_sd.mahalanobis(as_vector(u), as_vector(v), np.asarray(VI, dtype=float)))
