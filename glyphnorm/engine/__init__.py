"""Path-data engine: parse, transform and serialize SVG path commands."""

from glyphnorm.engine.affine import transform_path
from glyphnorm.engine.commands import CommandType, PathCommand, PathData
from glyphnorm.engine.dimensions import resolve_frame
from glyphnorm.engine.geometry import SourceFrame, Transform
from glyphnorm.engine.path_parser import parse_path
from glyphnorm.engine.path_serializer import serialize_path

__all__ = [
    "CommandType",
    "PathCommand",
    "PathData",
    "SourceFrame",
    "Transform",
    "parse_path",
    "resolve_frame",
    "serialize_path",
    "transform_path",
]
