"""Room labels: a room number at the centroid and its area just below."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from ezdxf.document import Drawing
from ezdxf.enums import TextEntityAlignment
from loguru import logger

from roomgraph.exceptions import LabelExportError
from roomgraph.geometry.primitives import Point
from roomgraph.reconstruct.cycle_walker import Room
from roomgraph.settings import LabelSettings


@dataclass(frozen=True)
class RoomLabel:
    room_index: int
    text: str
    position: Point
    height: float
    color: int
    centered: bool = False


def layout_labels(rooms: Sequence[Room], settings: LabelSettings | None = None) -> List[RoomLabel]:
    """Two labels per room, numbered from 1 in room order."""
    if settings is None:
        settings = LabelSettings()

    gap = settings.text_height * settings.line_gap_ratio
    labels: List[RoomLabel] = []
    for index, room in enumerate(rooms, start=1):
        center = room.center
        labels.append(
            RoomLabel(
                room_index=index,
                text=str(index),
                position=center,
                height=settings.text_height,
                color=settings.id_color,
            )
        )
        labels.append(
            RoomLabel(
                room_index=index,
                text=settings.area_format.format(area=room.area, index=index),
                position=Point(center.x, center.y - gap),
                height=settings.text_height * settings.area_height_ratio,
                color=settings.area_color,
                centered=True,
            )
        )
    return labels


def write_labels(doc: Drawing, labels: Sequence[RoomLabel], layer: str = "ROOM_LABELS") -> int:
    """Add labels as TEXT entities to the drawing's modelspace; returns the count written."""
    try:
        if layer not in doc.layers:
            doc.layers.add(layer)
        msp = doc.modelspace()
        for label in labels:
            text = msp.add_text(
                label.text,
                height=label.height,
                dxfattribs={"layer": layer, "color": label.color},
            )
            align = TextEntityAlignment.MIDDLE if label.centered else TextEntityAlignment.LEFT
            text.set_placement(label.position.to_tuple(), align=align)
    except Exception as exc:
        raise LabelExportError(f"Failed to write room labels: {exc}", {"layer": layer}) from exc

    logger.info("Wrote {count} room labels to layer {layer}", count=len(labels), layer=layer)
    return len(labels)


def save_drawing(doc: Drawing, path: Path) -> None:
    try:
        doc.saveas(str(path))
    except OSError as exc:
        raise LabelExportError(f"Cannot save labelled drawing: {path}", {"path": str(path)}) from exc
