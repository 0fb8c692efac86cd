"""glyphnorm — normalize SVG icons onto a square viewBox for icon-font builds."""

from glyphnorm.engine.batch import normalize_batch
from glyphnorm.errors import CoordinateOverflow, GlyphNormError, MalformedPathData, UnknownDimensions
from glyphnorm.svg.rewriter import normalize_svg, rewrite_document

__version__ = "0.1.0"

__all__ = [
    "CoordinateOverflow",
    "GlyphNormError",
    "MalformedPathData",
    "UnknownDimensions",
    "normalize_batch",
    "normalize_svg",
    "rewrite_document",
]
