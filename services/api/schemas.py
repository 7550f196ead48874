from __future__ import annotations

from pydantic import BaseModel, Field

from roomgraph.schema import RoomModel, SegmentModel


class RoomsRequest(BaseModel):
    segments: list[SegmentModel] = Field(default_factory=list)
    snap_size: float | None = Field(None, gt=0.0, allow_inf_nan=False)


class RoomsResponse(BaseModel):
    count: int
    rooms: list[RoomModel]
    metrics: dict[str, object] = Field(default_factory=dict)
