"""
Build Metrics Collection

Diagnostic counters collected while a room graph is built. They never affect
the result; they explain what was excluded and why.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BuildMetrics:
    """
    Counters for one ``RoomGraph.build`` call.

    Every excluded input or traced loop is accounted for in exactly one
    counter, so ``segments_total == segments_accepted + segments_degenerate +
    segments_non_finite`` and ``cycles_closed == rooms + cycles_too_small +
    cycles_degenerate + cycles_clockwise``.
    """

    # Input statistics
    segments_total: int = 0
    segments_accepted: int = 0
    segments_degenerate: int = 0
    segments_non_finite: int = 0

    # Graph statistics
    nodes: int = 0
    half_edges: int = 0
    dead_end_nodes: int = 0
    unlinked_half_edges: int = 0

    # Cycle statistics
    cycles_traced: int = 0
    cycles_closed: int = 0
    cycles_open: int = 0
    cycles_too_small: int = 0
    cycles_degenerate: int = 0
    cycles_clockwise: int = 0
    rooms: int = 0

    # Performance metrics (in seconds)
    time_graph: float = 0.0
    time_linking: float = 0.0
    time_walk: float = 0.0
    time_total: float = 0.0

    warnings: list[str] = field(default_factory=list)

    @property
    def segments_dropped(self) -> int:
        return self.segments_degenerate + self.segments_non_finite

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for serialization."""
        return {
            "input": {
                "total": self.segments_total,
                "accepted": self.segments_accepted,
                "dropped": {
                    "degenerate": self.segments_degenerate,
                    "non_finite": self.segments_non_finite,
                },
            },
            "graph": {
                "nodes": self.nodes,
                "half_edges": self.half_edges,
                "dead_end_nodes": self.dead_end_nodes,
                "unlinked_half_edges": self.unlinked_half_edges,
            },
            "cycles": {
                "traced": self.cycles_traced,
                "closed": self.cycles_closed,
                "open": self.cycles_open,
                "rejected": {
                    "too_small": self.cycles_too_small,
                    "degenerate": self.cycles_degenerate,
                    "clockwise": self.cycles_clockwise,
                },
                "rooms": self.rooms,
            },
            "performance": {
                "graph": self.time_graph,
                "linking": self.time_linking,
                "walk": self.time_walk,
                "total": self.time_total,
            },
            "warnings": {
                "total": len(self.warnings),
                "list": list(self.warnings),
            },
        }

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of key counts."""
        return {
            "rooms": self.rooms,
            "segments_dropped": self.segments_dropped,
            "dead_end_nodes": self.dead_end_nodes,
            "unlinked_half_edges": self.unlinked_half_edges,
            "open_cycles": self.cycles_open,
            "total_time_seconds": self.time_total,
        }
