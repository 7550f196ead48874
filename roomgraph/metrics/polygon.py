from __future__ import annotations

from typing import Sequence

from roomgraph.geometry.primitives import Point


def signed_area(poly: Sequence[Point]) -> float:
    """Shoelace area; positive for counter-clockwise vertex order.

    ``poly`` is an open ring (no repeated closing vertex). Fewer than three
    vertices give 0.0.
    """
    n = len(poly)
    if n < 3:
        return 0.0

    acc = 0.0
    for i in range(n):
        p = poly[i]
        q = poly[(i + 1) % n]
        acc += p.x * q.y - q.x * p.y
    return 0.5 * acc


def centroid(poly: Sequence[Point], area: float) -> Point:
    """Area-weighted centroid of an open ring.

    ``area`` must be the *signed* area of ``poly``; its sign cancels the
    orientation of the cross terms.
    """
    n = len(poly)
    if n < 3 or area == 0.0:
        return Point(0.0, 0.0)

    cx = 0.0
    cy = 0.0
    for i in range(n):
        p = poly[i]
        q = poly[(i + 1) % n]
        cross = p.x * q.y - q.x * p.y
        cx += (p.x + q.x) * cross
        cy += (p.y + q.y) * cross

    factor = 1.0 / (6.0 * area)
    return Point(cx * factor, cy * factor)
