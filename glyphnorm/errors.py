"""Exceptions raised by the normalization core."""

from __future__ import annotations


class GlyphNormError(Exception):
    """Base class for all glyphnorm errors."""


class UnknownDimensions(GlyphNormError):
    """Neither a usable viewBox nor a usable width/height pair was found."""


class MalformedPathData(GlyphNormError, ValueError):
    """A path `d` attribute does not follow the SVG path grammar."""

    def __init__(self, message: str, position: int = -1) -> None:
        self.position = position
        if position >= 0:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class CoordinateOverflow(GlyphNormError, ArithmeticError):
    """A transformed coordinate does not fit in a float."""
