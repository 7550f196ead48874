"""CLI for room detection."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

import ezdxf
from ezdxf.document import Drawing
from loguru import logger

from roomgraph.exceptions import RoomGraphError
from roomgraph.geometry.primitives import Segment
from roomgraph.io.dxf_source import read_drawing, segments_from_drawing
from roomgraph.io.labels import layout_labels, save_drawing, write_labels
from roomgraph.io.segments_json import load_segments, write_rooms_document
from roomgraph.logging_config import setup_logging
from roomgraph.room_graph import RoomGraph
from roomgraph.schema import rooms_document
from roomgraph.settings import Settings, get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roomgraph", description="Detect closed rooms in wall linework")
    parser.add_argument("input", type=Path, help="Segments as .json or a .dxf drawing (LINE entities)")
    parser.add_argument("--layer", action="append", dest="layers", help="DXF layer to read (repeatable, default: all)")
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--snap-size", type=float, help="Endpoint snap grid size in drawing units")
    parser.add_argument("--output", type=Path, help="Write the rooms document as JSON")
    parser.add_argument("--labels-dxf", type=Path, help="Write a DXF copy with room number and area labels")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.load(args.config) if args.config else get_settings()
    except RoomGraphError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    setup_logging(
        level=(args.log_level or settings.logging.level).upper(),
        json_format=args.json_logs or settings.logging.json_format,
        log_file=settings.logging.log_file,
    )

    try:
        return _run(args, settings)
    except RoomGraphError as exc:
        logger.error("{type}: {message}", type=type(exc).__name__, message=exc.message, details=exc.details)
        return 1


def _run(args: argparse.Namespace, settings: Settings) -> int:
    is_dxf = args.input.suffix.lower() == ".dxf"
    drawing = None
    if is_dxf:
        drawing = read_drawing(args.input)
        segments = segments_from_drawing(drawing, args.layers)
    else:
        segments = load_segments(args.input)

    if not segments:
        print("No valid segments.")
        return 0

    graph = RoomGraph(
        snap_size=args.snap_size if args.snap_size is not None else settings.graph.snap_size,
        area_epsilon=settings.graph.area_epsilon,
    )
    graph.build(segments)
    rooms = graph.rooms

    print(f"Rooms found: {len(rooms)}")
    for warning in graph.metrics.warnings:
        logger.warning(warning)

    if args.output:
        write_rooms_document(rooms_document(rooms, graph.metrics, source=str(args.input)), args.output)

    if args.labels_dxf:
        if drawing is None:
            drawing = _drawing_from_segments(segments)
        write_labels(drawing, layout_labels(rooms, settings.labels), layer=settings.labels.layer)
        save_drawing(drawing, args.labels_dxf)
        logger.info("Saved labelled drawing to {path}", path=str(args.labels_dxf))

    return 0


def _drawing_from_segments(segments: List[Segment]) -> Drawing:
    doc = ezdxf.new()
    msp = doc.modelspace()
    for seg in segments:
        msp.add_line(seg.a.to_tuple(), seg.b.to_tuple())
    return doc


if __name__ == "__main__":
    sys.exit(main())
