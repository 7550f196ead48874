from __future__ import annotations

from fastapi import APIRouter
from loguru import logger

from roomgraph.room_graph import RoomGraph
from roomgraph.schema import rooms_document
from roomgraph.settings import get_settings
from services.api.schemas import RoomsRequest, RoomsResponse


router = APIRouter(prefix="/v1", tags=["rooms"])


@router.post("/rooms", response_model=RoomsResponse)
async def detect_rooms(payload: RoomsRequest) -> RoomsResponse:
    settings = get_settings()
    snap_size = payload.snap_size if payload.snap_size is not None else settings.graph.snap_size

    graph = RoomGraph(snap_size=snap_size, area_epsilon=settings.graph.area_epsilon)
    graph.build(seg.to_segment() for seg in payload.segments)

    doc = rooms_document(graph.rooms, graph.metrics)
    logger.info(
        "Detected {rooms} rooms from {segments} segments",
        rooms=len(doc.rooms),
        segments=len(payload.segments),
    )
    return RoomsResponse(count=len(doc.rooms), rooms=doc.rooms, metrics=doc.metrics)
