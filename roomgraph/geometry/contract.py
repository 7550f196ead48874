"""
Graph Reconstruction Contract

Single source of truth for the tolerances and sentinels used by the room graph.
All modules should import from here instead of hardcoding.
"""

from __future__ import annotations

# Snapping
DEFAULT_SNAP_SIZE = 1e-3  # world units per grid cell

# Rooms
AREA_EPSILON = 1e-6  # |signed area| at or below this is a degenerate loop
MIN_ROOM_VERTICES = 3

# Point comparison
POINT_EQUAL_EPS = 1e-6

# Half-edge links
UNRESOLVED = -1
