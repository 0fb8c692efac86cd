"""Affine transformer — re-origin then scale every operand of a path.

Command structure is kept as-is (type, relativity, count); only numbers change.
Absolute pairs are translated and scaled, relative pairs only scaled. Arcs
need their ellipse re-derived because a non-uniform scale does not commute
with the arc's rotation.
"""

from __future__ import annotations

import logging
import math

from glyphnorm.engine.commands import CommandType, PathCommand, PathData
from glyphnorm.engine.geometry import Transform
from glyphnorm.errors import CoordinateOverflow
from glyphnorm.utils.ellipse import endpoint_to_center, scale_ellipse

logger = logging.getLogger(__name__)


def transform_path(path: PathData, transform: Transform) -> PathData:
    """Return a new PathData with every coordinate expressed in the target frame.

    Raises CoordinateOverflow when a transformed value leaves the float range.
    """
    result: PathData = []
    # Current point and subpath start, in source coordinates
    x = y = 0.0
    start_x = start_y = 0.0

    for index, cmd in enumerate(path):
        ops = cmd.operands
        kind = cmd.type

        if kind is CommandType.CLOSE_PATH:
            result.append(cmd)
            x, y = start_x, start_y
            continue

        if kind is CommandType.HORIZONTAL_LINE_TO:
            (value,) = ops
            if cmd.relative:
                new_ops: tuple[float, ...] = (value * transform.scale_x,)
                x += value
            else:
                new_ops = ((value - transform.translate_x) * transform.scale_x,)
                x = value

        elif kind is CommandType.VERTICAL_LINE_TO:
            (value,) = ops
            if cmd.relative:
                new_ops = (value * transform.scale_y,)
                y += value
            else:
                new_ops = ((value - transform.translate_y) * transform.scale_y,)
                y = value

        elif kind is CommandType.ARC_TO:
            end_x, end_y = (x + ops[5], y + ops[6]) if cmd.relative else (ops[5], ops[6])
            new_ops = _transform_arc(x, y, end_x, end_y, cmd, transform)
            x, y = end_x, end_y

        else:
            # A relative moveto that opens the path is measured from the origin
            absolute = not cmd.relative or (index == 0 and kind is CommandType.MOVE_TO)
            apply = transform.apply_point if absolute else transform.apply_vector
            coords: list[float] = []
            for i in range(0, len(ops), 2):
                coords.extend(apply(ops[i], ops[i + 1]))
            new_ops = tuple(coords)
            if cmd.relative:
                x += ops[-2]
                y += ops[-1]
            else:
                x, y = ops[-2], ops[-1]
            if kind is CommandType.MOVE_TO:
                start_x, start_y = x, y

        if not all(math.isfinite(v) for v in new_ops):
            raise CoordinateOverflow(f"Command {index} ({cmd.letter}) overflows after scaling")
        result.append(PathCommand(kind, cmd.relative, new_ops))

    return result


def _transform_arc(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    cmd: PathCommand,
    transform: Transform,
) -> tuple[float, ...]:
    rx, ry, rotation, large_arc, sweep, end_x, end_y = cmd.operands

    center = endpoint_to_center(x1, y1, x2, y2, rx, ry, rotation, bool(large_arc), bool(sweep))
    if center is not None:
        # Effective radii after SVG's out-of-range correction
        rx, ry = center.rx, center.ry

    new_rx, new_ry, new_rotation = scale_ellipse(
        rx, ry, rotation, transform.scale_x, transform.scale_y
    )
    if transform.flips_orientation:
        sweep = 1.0 - sweep

    if cmd.relative:
        new_x, new_y = transform.apply_vector(end_x, end_y)
    else:
        new_x, new_y = transform.apply_point(end_x, end_y)

    logger.debug(
        "Arc r=(%g, %g) rot=%g -> r=(%g, %g) rot=%g",
        rx, ry, rotation, new_rx, new_ry, new_rotation,
    )
    return (new_rx, new_ry, new_rotation, large_arc, sweep, new_x, new_y)
