"""
Pytest configuration and fixtures.
"""
import math
from unittest.mock import MagicMock

import pytest

from distmap import DistanceMap, DistanceMapConfig, Measurable


class Point(Measurable):
    """2-D point with Euclidean distance and value-based equality."""

    def __init__(self, name: str, x: float, y: float):
        self.name = name
        self.x = x
        self.y = y

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __eq__(self, other):
        return isinstance(other, Point) and (self.name, self.x, self.y) == (other.name, other.x, other.y)

    def __hash__(self):
        return hash((self.name, self.x, self.y))

    def __repr__(self):
        return f"Point({self.name})"


class Node:
    """Named element hashed by identity."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Node({self.name})"


def table_distance(table: dict[frozenset, float]):
    """Build a distance function reading symmetric entries from *table*, keyed by name."""

    def _fn(a, b):
        a, b = getattr(a, "name", a), getattr(b, "name", b)
        if a == b:
            return 0.0
        return table[frozenset((a, b))]

    return _fn


@pytest.fixture
def points():
    """Four points on a plane: A-B close, C and D further out."""
    return {
        "A": Point("A", 0.0, 0.0),
        "B": Point("B", 3.0, 4.0),
        "C": Point("C", 10.0, 0.0),
        "D": Point("D", 0.0, 12.0),
    }


@pytest.fixture
def counting_distance():
    """Euclidean distance function instrumented with a call counter."""
    return MagicMock(side_effect=lambda a, b: a.distance_to(b))


@pytest.fixture
def dmap(points, counting_distance):
    """Distance map with A, B, C and D registered."""
    m = DistanceMap(DistanceMapConfig(random_state=7), distance_fn=counting_distance)
    for p in points.values():
        m.add(p)
    return m


@pytest.fixture
def triangle():
    """Nodes A, B, C with d(A,B)=1, d(A,C)=5, d(B,C)=5, returned with their map."""
    fn = table_distance({
        frozenset("AB"): 1.0,
        frozenset("AC"): 5.0,
        frozenset("BC"): 5.0,
    })
    nodes = {name: Node(name) for name in "ABC"}
    m = DistanceMap(distance_fn=fn)
    for node in nodes.values():
        m.add(node)
    return m, nodes
