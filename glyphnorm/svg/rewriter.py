"""Document rewriter — normalize an SVG icon onto a square `0 0 S S` canvas.

resolve frame → for each <path>: parse → transform → serialize → splice,
then replace the root element's sizing attributes. A document whose
dimensions cannot be resolved (or scaled) is returned unchanged; a path whose
`d` does not parse, or whose coordinates overflow once scaled, is left as-is
and reported.
"""

from __future__ import annotations

import logging
import math

from glyphnorm.engine.affine import transform_path
from glyphnorm.engine.dimensions import resolve_frame
from glyphnorm.engine.geometry import Transform
from glyphnorm.engine.path_parser import parse_path
from glyphnorm.engine.path_serializer import serialize_path
from glyphnorm.errors import CoordinateOverflow, MalformedPathData, UnknownDimensions
from glyphnorm.models.results import FrameInfo, MalformedPath, NormalizationResult
from glyphnorm.svg.document import IconDocument
from glyphnorm.utils.numbers import format_number

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 24


def rewrite_document(
    svg_text: str,
    size: float = DEFAULT_SIZE,
    precision: int | None = None,
) -> NormalizationResult:
    """Normalize one SVG document and report what was done."""
    if not (math.isfinite(size) and size > 0):
        raise ValueError(f"Target size must be a positive number, got {size!r}")

    doc = IconDocument.parse(svg_text)
    if not doc.has_root:
        logger.warning("No <svg> element found, passing document through")
        return NormalizationResult(svg=svg_text, status="passthrough", size=size)

    try:
        frame = resolve_frame(doc.attribute_map())
    except UnknownDimensions as e:
        logger.warning("Passing document through: %s", e)
        return NormalizationResult(
            svg=svg_text, status="passthrough", size=size, paths_total=len(doc.paths)
        )

    try:
        transform = Transform.from_frame(frame, size)
    except ValueError as e:
        logger.warning("Passing document through, frame %s cannot be scaled to %s: %s", frame, size, e)
        return NormalizationResult(
            svg=svg_text, status="passthrough", size=size, paths_total=len(doc.paths)
        )
    logger.debug("Transform for %s: %s", frame, transform)

    # (offset, length, replacement)
    splices: list[tuple[int, int, str]] = []
    malformed: list[MalformedPath] = []

    for element in doc.paths:
        try:
            commands = parse_path(element.d)
        except MalformedPathData as e:
            logger.warning("Path %d left unchanged: %s", element.index, e)
            malformed.append(MalformedPath(index=element.index, position=e.position, message=str(e)))
            continue
        try:
            new_commands = transform_path(commands, transform)
        except CoordinateOverflow as e:
            logger.warning("Path %d left unchanged: %s", element.index, e)
            malformed.append(MalformedPath(index=element.index, message=str(e), reason="overflow"))
            continue
        new_d = serialize_path(new_commands, precision)
        start, end = element.d_span
        splices.append((start, end - start, new_d))

    root_start, root_end = doc.root_span
    splices.append((root_start, root_end - root_start, _patch_root_tag(doc, size)))

    result = _apply_splices(svg_text, splices)

    logger.info(
        "Normalized to %s: %d/%d paths rewritten, %d malformed",
        format_number(size),
        len(doc.paths) - len(malformed),
        len(doc.paths),
        len(malformed),
    )
    return NormalizationResult(
        svg=result,
        status="normalized",
        size=size,
        frame=FrameInfo(
            origin_x=frame.origin_x,
            origin_y=frame.origin_y,
            width=frame.width,
            height=frame.height,
        ),
        paths_total=len(doc.paths),
        paths_rewritten=len(doc.paths) - len(malformed),
        malformed_paths=malformed,
    )


def normalize_svg(svg_text: str, size: float = DEFAULT_SIZE) -> str:
    """Core entry point: SVG text in, normalized SVG text out. Never raises for bad paths or numbers."""
    return rewrite_document(svg_text, size).svg


def _patch_root_tag(doc: IconDocument, size: float) -> str:
    """Root tag without viewBox/width/height, plus the canonical trio."""
    tag = doc.root_tag
    root_start = doc.root_span[0]

    # Drop sizing attributes back to front so earlier offsets stay valid
    for attr in reversed(doc.sizing_attributes()):
        start, end = attr.span[0] - root_start, attr.span[1] - root_start
        tag = tag[:start] + tag[end:]

    close = len(tag) - 2 if tag.endswith("/>") else len(tag) - 1
    insert_at = close
    while insert_at > 0 and tag[insert_at - 1].isspace():
        insert_at -= 1

    s = format_number(size)
    sizing = f' width="{s}" height="{s}" viewBox="0 0 {s} {s}"'
    return tag[:insert_at] + sizing + tag[insert_at:]


def _apply_splices(text: str, splices: list[tuple[int, int, str]]) -> str:
    # Back to front so earlier splices don't shift later offsets
    for offset, length, replacement in sorted(splices, key=lambda s: s[0], reverse=True):
        text = text[:offset] + replacement + text[offset + length:]
    return text
