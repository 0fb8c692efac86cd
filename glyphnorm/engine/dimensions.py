"""Dimension resolver — decide the source coordinate system of a document.

Priority:
  1. viewBox="min_x min_y w h" with w > 0 and h > 0
  2. width + height, unitless or px, both > 0 (origin at 0,0)
  3. otherwise UnknownDimensions
A viewBox always wins over width/height, even when their aspect ratios differ.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping

from glyphnorm.engine.geometry import SourceFrame
from glyphnorm.errors import UnknownDimensions

logger = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(_NUMBER)
_VIEWBOX_SEP_RE = re.compile(r"[\s,]+")
_LENGTH_RE = re.compile(r"\s*(" + _NUMBER + r")\s*(?:px)?\s*", re.IGNORECASE)


def parse_viewbox(value: str) -> tuple[float, float, float, float] | None:
    """Four finite numbers with positive width/height, else None."""
    parts = [p for p in _VIEWBOX_SEP_RE.split(value.strip()) if p]
    if len(parts) != 4 or not all(_NUMBER_RE.fullmatch(p) for p in parts):
        return None
    min_x, min_y, width, height = (float(p) for p in parts)
    if not all(math.isfinite(v) for v in (min_x, min_y, width, height)):
        return None
    if width <= 0 or height <= 0:
        return None
    return min_x, min_y, width, height


def parse_length(value: str) -> float | None:
    """A positive finite length, unitless or in px. Other units are rejected."""
    match = _LENGTH_RE.fullmatch(value)
    if not match:
        return None
    length = float(match.group(1))
    if not math.isfinite(length) or length <= 0:
        return None
    return length


def resolve_frame(attributes: Mapping[str, str]) -> SourceFrame:
    """Resolve the SourceFrame from root element attributes (names case-insensitive)."""
    attrs = {name.lower(): value for name, value in attributes.items()}

    viewbox = attrs.get("viewbox")
    if viewbox is not None:
        parsed = parse_viewbox(viewbox)
        if parsed is not None:
            min_x, min_y, width, height = parsed
            logger.debug("Frame from viewBox: %s", parsed)
            return SourceFrame(origin_x=min_x, origin_y=min_y, width=width, height=height)
        logger.debug("Ignoring unusable viewBox %r", viewbox)

    raw_width, raw_height = attrs.get("width"), attrs.get("height")
    if raw_width is not None and raw_height is not None:
        width, height = parse_length(raw_width), parse_length(raw_height)
        if width is not None and height is not None:
            logger.debug("Frame from width/height: %gx%g", width, height)
            return SourceFrame(origin_x=0.0, origin_y=0.0, width=width, height=height)

    raise UnknownDimensions(
        f"No usable viewBox or width/height (viewBox={viewbox!r}, "
        f"width={raw_width!r}, height={raw_height!r})"
    )
