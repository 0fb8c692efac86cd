"""SourceFrame and Transform — the two coordinate-system values of a normalization."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceFrame:
    """Source coordinate system of a document: origin plus a positive extent."""

    origin_x: float
    origin_y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("origin_x", "origin_y", "width", "height"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"SourceFrame.{name} must be finite")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"SourceFrame extent must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class Transform:
    """Re-origin then scale: p' = (p - translate) * scale."""

    scale_x: float = 1.0
    scale_y: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def __post_init__(self) -> None:
        for name in ("scale_x", "scale_y", "translate_x", "translate_y"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Transform.{name} must be finite, got {getattr(self, name)!r}")
        if self.scale_x == 0 or self.scale_y == 0:
            raise ValueError("Transform scale factors must be non-zero")

    @classmethod
    def from_frame(cls, frame: SourceFrame, size: float) -> Transform:
        return cls(
            scale_x=size / frame.width,
            scale_y=size / frame.height,
            translate_x=frame.origin_x,
            translate_y=frame.origin_y,
        )

    @property
    def flips_orientation(self) -> bool:
        """True when exactly one axis is mirrored."""
        return (self.scale_x < 0) != (self.scale_y < 0)

    def apply_point(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.translate_x) * self.scale_x, (y - self.translate_y) * self.scale_y

    def apply_vector(self, dx: float, dy: float) -> tuple[float, float]:
        return dx * self.scale_x, dy * self.scale_y
