"""Canonical JSON schema for segment input and room output."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from roomgraph.geometry.primitives import Point, Segment
from roomgraph.metrics.build_metrics import BuildMetrics
from roomgraph.reconstruct.cycle_walker import Room


class Point2D(BaseModel):
    """2D point in world units."""
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) < 2:
                raise ValueError("point needs two coordinates")
            # Z from 3D sources is dropped
            return {"x": value[0], "y": value[1]}
        return value

    @classmethod
    def from_point(cls, p: Point) -> "Point2D":
        return cls(x=p.x, y=p.y)

    def to_point(self) -> Point:
        return Point(self.x, self.y)


class SegmentModel(BaseModel):
    """Undirected segment; accepts ``{"a": .., "b": ..}`` or ``[a, b]``."""
    a: Point2D
    b: Point2D

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("segment needs exactly two endpoints")
            return {"a": value[0], "b": value[1]}
        return value

    @classmethod
    def from_segment(cls, seg: Segment) -> "SegmentModel":
        return cls(a=Point2D.from_point(seg.a), b=Point2D.from_point(seg.b))

    def to_segment(self) -> Segment:
        return Segment(self.a.to_point(), self.b.to_point())


class SegmentsDocument(BaseModel):
    """Segment input file."""
    segments: List[SegmentModel] = Field(default_factory=list)
    units: Optional[str] = None
    source: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"segments": value}
        return value

    def to_segments(self) -> List[Segment]:
        return [seg.to_segment() for seg in self.segments]


class RoomModel(BaseModel):
    """Room polygon, counter-clockwise, without closing vertex."""
    index: int = Field(..., ge=1, description="1-based room number in build order")
    polygon: List[Point2D] = Field(..., min_length=3)
    center: Point2D
    area: float = Field(..., gt=0.0)

    @classmethod
    def from_room(cls, index: int, room: Room) -> "RoomModel":
        return cls(
            index=index,
            polygon=[Point2D.from_point(p) for p in room.polygon],
            center=Point2D.from_point(room.center),
            area=room.area,
        )


class RoomsDocument(BaseModel):
    """Rooms extracted by one build."""
    rooms: List[RoomModel] = Field(default_factory=list)
    metrics: dict[str, Any] = Field(default_factory=dict)
    source: Optional[str] = None


def rooms_document(
    rooms: Sequence[Room],
    metrics: BuildMetrics | None = None,
    source: str | None = None,
) -> RoomsDocument:
    return RoomsDocument(
        rooms=[RoomModel.from_room(i, room) for i, room in enumerate(rooms, start=1)],
        metrics=metrics.to_dict() if metrics is not None else {},
        source=source,
    )
