from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from roomgraph.geometry.contract import POINT_EQUAL_EPS


@dataclass(frozen=True)
class Point:
    """2D point in world units."""
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple (x, y)."""
        return (self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Segment:
    """Undirected line segment between two points."""
    a: Point
    b: Point

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> "Segment":
        return cls(Point(float(x1), float(y1)), Point(float(x2), float(y2)))

    @property
    def length(self) -> float:
        return distance(self.a, self.b)

    def is_finite(self) -> bool:
        return self.a.is_finite() and self.b.is_finite()


def distance(p: Point, q: Point) -> float:
    return math.hypot(p.x - q.x, p.y - q.y)


def almost_equal(p: Point, q: Point, eps: float = POINT_EQUAL_EPS) -> bool:
    """Loose equality with tolerance."""
    return distance(p, q) <= eps
