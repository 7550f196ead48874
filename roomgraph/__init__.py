"""roomgraph - closed room polygons from unordered wall segments

Segments go in through ``RoomGraph.build``; rooms (counter-clockwise polygon,
area, centroid) come out through ``RoomGraph.rooms``.
"""

from .geometry.primitives import Point, Segment, almost_equal, distance
from .reconstruct.cycle_walker import Room
from .room_graph import GraphState, RoomGraph, find_rooms

__all__ = [
    "Point",
    "Segment",
    "Room",
    "RoomGraph",
    "GraphState",
    "find_rooms",
    "distance",
    "almost_equal",
]

__version__ = "0.1.0"
