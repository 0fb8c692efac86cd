"""Normalization result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class FrameInfo(BaseModel):
    origin_x: float
    origin_y: float
    width: float
    height: float


class MalformedPath(BaseModel):
    index: int = Field(..., description="Position of the <path> among the document's paths")
    position: int = Field(-1, description="Offset inside the d attribute, -1 if unknown")
    message: str = ""
    reason: Literal["syntax", "overflow"] = "syntax"


class NormalizationResult(BaseModel):
    svg: str
    status: Literal["normalized", "passthrough"] = "normalized"
    size: float = 24.0
    frame: FrameInfo | None = None
    paths_total: int = 0
    paths_rewritten: int = 0
    malformed_paths: list[MalformedPath] = Field(default_factory=list)


class BatchItem(BaseModel):
    name: str
    status: Literal["normalized", "passthrough", "skipped", "failed"]
    result: NormalizationResult | None = None
    error: str | None = None


class BatchReport(BaseModel):
    items: list[BatchItem] = Field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def malformed_paths(self) -> int:
        return sum(len(item.result.malformed_paths) for item in self.items if item.result)
