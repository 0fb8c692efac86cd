"""Typed path commands — one value per drawing command in a `d` attribute."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class CommandType(str, enum.Enum):
    MOVE_TO = "M"
    LINE_TO = "L"
    HORIZONTAL_LINE_TO = "H"
    VERTICAL_LINE_TO = "V"
    CUBIC_CURVE_TO = "C"
    SMOOTH_CUBIC_CURVE_TO = "S"
    QUADRATIC_CURVE_TO = "Q"
    SMOOTH_QUADRATIC_CURVE_TO = "T"
    ARC_TO = "A"
    CLOSE_PATH = "Z"

    @property
    def arity(self) -> int:
        return ARITY[self]


ARITY: dict[CommandType, int] = {
    CommandType.MOVE_TO: 2,
    CommandType.LINE_TO: 2,
    CommandType.HORIZONTAL_LINE_TO: 1,
    CommandType.VERTICAL_LINE_TO: 1,
    CommandType.CUBIC_CURVE_TO: 6,
    CommandType.SMOOTH_CUBIC_CURVE_TO: 4,
    CommandType.QUADRATIC_CURVE_TO: 4,
    CommandType.SMOOTH_QUADRATIC_CURVE_TO: 2,
    CommandType.ARC_TO: 7,
    CommandType.CLOSE_PATH: 0,
}

# Operand slots of ArcTo holding large_arc_flag and sweep_flag
ARC_FLAG_SLOTS = (3, 4)


@dataclass(frozen=True)
class PathCommand:
    """A single drawing command.

    `operands` holds exactly `type.arity` numbers in SVG order, e.g. for ArcTo:
    rx, ry, x_axis_rotation, large_arc_flag, sweep_flag, x, y.
    """

    type: CommandType
    relative: bool = False
    operands: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if len(self.operands) != self.type.arity:
            raise ValueError(
                f"{self.type.name} takes {self.type.arity} operands, got {len(self.operands)}"
            )
        if self.type is CommandType.ARC_TO:
            for slot in ARC_FLAG_SLOTS:
                if self.operands[slot] not in (0, 1):
                    raise ValueError(f"Arc flag must be 0 or 1, got {self.operands[slot]!r}")
        if not all(math.isfinite(v) for v in self.operands):
            raise ValueError(f"Non-finite operand in {self.type.name}: {self.operands!r}")

    @property
    def letter(self) -> str:
        return self.type.value.lower() if self.relative else self.type.value


PathData = list[PathCommand]
