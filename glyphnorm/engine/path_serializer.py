"""Path serializer — list of PathCommand → compact `d` string."""

from __future__ import annotations

from glyphnorm.engine.commands import CommandType, PathCommand, PathData
from glyphnorm.utils.numbers import format_number


def _letter_implied(previous: PathCommand | None, cmd: PathCommand) -> bool:
    """True when the parser would re-derive `cmd`'s letter from `previous`."""
    if previous is None or previous.relative != cmd.relative:
        return False
    if cmd.type in (CommandType.MOVE_TO, CommandType.CLOSE_PATH):
        return False
    if previous.type is cmd.type:
        return True
    return previous.type is CommandType.MOVE_TO and cmd.type is CommandType.LINE_TO


def serialize_path(path: PathData, precision: int | None = None) -> str:
    """Render commands back to path data.

    Letter case follows each command's `relative` flag. Numbers are separated
    by a space, except before a minus sign; letters need no separator.
    """
    parts: list[str] = []
    previous: PathCommand | None = None

    for cmd in path:
        need_separator = _letter_implied(previous, cmd)
        if not need_separator:
            parts.append(cmd.letter)
        for value in cmd.operands:
            token = format_number(value, precision)
            if need_separator and not token.startswith("-"):
                parts.append(" ")
            parts.append(token)
            need_separator = True
        previous = cmd

    return "".join(parts)
