# _registry.py
from __future__ import annotations
from typing import Callable

MetricFn = Callable[..., float]

_METRICS: dict[str, MetricFn] = {}


def register_metric(name: str, *aliases: str):
    def _decorator(fn: MetricFn):
        for key in (name, *aliases):
            _METRICS[key.lower()] = fn
        return fn
    return _decorator


def get_metric(name: str) -> MetricFn:
    """
    Look up a registered vector metric.

    Parameters
    ----------
    name : str
        The key (or alias) used in ``@register_metric`` (case-insensitive).

    Returns
    -------
    callable
        ``fn(u, v, **kwargs) -> float`` operating on two 1-D arrays.
    """
    _load_builtins()
    try:
        return _METRICS[name.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown metric '{name}'. Available: {available_metrics()}") from exc


def available_metrics() -> list[str]:
    _load_builtins()
    return sorted(_METRICS)


def _load_builtins() -> None:
    # built-ins register themselves on import
    from ..metrics import distance_metrics  # noqa: F401

