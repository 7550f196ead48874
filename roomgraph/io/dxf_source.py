"""Read wall segments from DXF drawings.

Only ``LINE`` entities are collected; polylines, arcs and blocks are ignored.
Z coordinates are dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import ezdxf
from ezdxf.document import Drawing
from loguru import logger

from roomgraph.exceptions import SegmentSourceError
from roomgraph.geometry.primitives import Segment


def read_drawing(path: Path) -> Drawing:
    try:
        return ezdxf.readfile(str(path))
    except IOError as exc:
        raise SegmentSourceError(f"Cannot read DXF file: {path}", {"path": str(path)}) from exc
    except ezdxf.DXFStructureError as exc:
        raise SegmentSourceError(f"Invalid or corrupt DXF file: {path}", {"path": str(path)}) from exc


def segments_from_drawing(doc: Drawing, layers: Iterable[str] | None = None) -> List[Segment]:
    """Collect modelspace ``LINE`` entities, optionally restricted to ``layers``."""
    wanted = {name.upper() for name in layers} if layers else None

    segments: List[Segment] = []
    skipped = 0
    for line in doc.modelspace().query("LINE"):
        if wanted is not None and line.dxf.layer.upper() not in wanted:
            skipped += 1
            continue
        start = line.dxf.start
        end = line.dxf.end
        segments.append(Segment.from_coords(start.x, start.y, end.x, end.y))

    if not segments:
        logger.warning("No LINE entities selected (layers={layers})", layers=sorted(wanted) if wanted else "all")
    else:
        logger.info("Collected {count} LINE segments ({skipped} on other layers)", count=len(segments), skipped=skipped)
    return segments


def load_dxf_segments(path: Path, layers: Iterable[str] | None = None) -> List[Segment]:
    return segments_from_drawing(read_drawing(path), layers)
