from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Sequence

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from roomgraph.exceptions import ExportError, SegmentSourceError, SegmentValidationError
from roomgraph.geometry.primitives import Segment
from roomgraph.schema import RoomsDocument, SegmentModel, SegmentsDocument


def parse_segments(payload: Any) -> List[Segment]:
    """Validate a decoded JSON payload and return its segments.

    Accepts ``{"segments": [...]}`` or a bare list; each segment is either
    ``{"a": {"x": .., "y": ..}, "b": {...}}`` or ``[[x1, y1], [x2, y2]]``.
    """
    try:
        doc = SegmentsDocument.model_validate(payload)
    except PydanticValidationError as exc:
        errors = exc.errors()
        first = errors[0] if errors else {}
        raise SegmentValidationError(
            f"Invalid segment payload: {len(errors)} error(s)",
            {
                "location": ".".join(str(part) for part in first.get("loc", ())),
                "reason": str(first.get("msg", "")),
            },
        ) from exc
    return doc.to_segments()


def load_segments(path: Path) -> List[Segment]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SegmentSourceError(f"Cannot read segment file: {path}", {"path": str(path)}) from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SegmentSourceError(f"Segment file is not valid JSON: {exc}", {"path": str(path)}) from exc

    segments = parse_segments(payload)
    logger.info("Loaded {count} segments from {path}", count=len(segments), path=str(path))
    return segments


def dump_segments(segments: Sequence[Segment], path: Path) -> None:
    doc = SegmentsDocument(segments=[SegmentModel.from_segment(s) for s in segments])
    _write_text(path, doc.model_dump_json(indent=2, exclude_none=True))


def write_rooms_document(doc: RoomsDocument, path: Path) -> None:
    _write_text(path, doc.model_dump_json(indent=2))
    logger.info("Saved {count} rooms to {path}", count=len(doc.rooms), path=str(path))


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Cannot write {path}: {exc}", {"path": str(path)}) from exc
