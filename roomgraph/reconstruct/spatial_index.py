from __future__ import annotations

import math
from typing import Dict, List, Tuple

from roomgraph.geometry.contract import DEFAULT_SNAP_SIZE
from roomgraph.geometry.primitives import Point
from roomgraph.reconstruct.halfedge import Node


GridKey = Tuple[int, int]


class SpatialIndex:
    """Snap grid mapping quantized coordinates to node identities.

    Points falling in the same grid cell resolve to the same node. Nodes keep
    the coordinates of the first point that created them, not the cell centre.
    """

    def __init__(self, snap_size: float = DEFAULT_SNAP_SIZE) -> None:
        self._snap_size = float(snap_size)
        self._cells: Dict[GridKey, int] = {}

    @property
    def snap_size(self) -> float:
        return self._snap_size

    def __len__(self) -> int:
        return len(self._cells)

    def clear(self) -> None:
        self._cells.clear()

    def key_for(self, p: Point) -> GridKey:
        # floor(v + 0.5) rounds halves away from the lower cell, unlike round()
        s = self._snap_size
        return (int(math.floor(p.x / s + 0.5)), int(math.floor(p.y / s + 0.5)))

    def lookup(self, p: Point) -> int | None:
        return self._cells.get(self.key_for(p))

    def find_or_create(self, p: Point, nodes: List[Node]) -> int:
        """Return the node registered for ``p``'s cell, appending a new one on a miss."""
        key = self.key_for(p)
        node_id = self._cells.get(key)
        if node_id is not None:
            return node_id

        node_id = len(nodes)
        nodes.append(Node(id=node_id, pos=p))
        self._cells[key] = node_id
        return node_id
