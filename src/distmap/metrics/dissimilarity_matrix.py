import logging
from typing import Sequence

import numpy as np
import pandas as pd

from ..core.distance_map import DistanceMap

_LOG = logging.getLogger(__name__)


def get_dissimilarity_matrix(dmap: DistanceMap, elements: Sequence | None = None) -> np.ndarray:
    """
    Compute the pairwise dissimilarity matrix through a distance map.

    Parameters
    ----------
    dmap : DistanceMap
        Cache used (and filled) for every off-diagonal entry.
    elements : sequence, optional
        Rows/columns of the matrix, in order.  Defaults to ``dmap.get_list()``.

    Returns
    -------
    dissimilarity_matrix : ndarray, shape (n_elements, n_elements)
        Symmetric matrix with a zero diagonal.  Only the upper triangle is
        looked up; the lower one is mirrored from it.
    """
    items = dmap.get_list() if elements is None else list(elements)
    n = len(items)
    D = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1, n):
            D[i, j] = D[j, i] = dmap.get_distance(items[i], items[j])
    _LOG.info("Dissimilarity matrix shape %s", D.shape)
    return D


def cached_pairs_frame(dmap: DistanceMap) -> pd.DataFrame:
    """
    Tabulate what the cache currently holds.

    Returns:
        DataFrame with columns ``source``, ``target`` and ``distance``, one row
        per cached unordered pair (the symmetric twin is not repeated).
    """
    rows = []
    seen: set = set()
    for source in dmap.get_list():
        for target, distance in dmap.cached_neighbors(source).items():
            if (target, source) in seen:
                continue
            seen.add((source, target))
            rows.append({"source": source, "target": target, "distance": distance})
    return pd.DataFrame(rows, columns=["source", "target", "distance"])
