"""Path data parser — `d` attribute string → list of PathCommand.

A hand-written scanner rather than regex splitting: SVG lets numbers run
together ("10-5" is 10 and -5, "1.5.5" is 1.5 and .5) and lets arc flags touch
their neighbours ("a1 1 0 0010 10"), which is where split-based parsers go wrong.
"""

from __future__ import annotations

import math

from glyphnorm.engine.commands import ARC_FLAG_SLOTS, CommandType, PathCommand, PathData
from glyphnorm.errors import MalformedPathData

_WHITESPACE = frozenset(" \t\n\r\f")
_DIGITS = frozenset("0123456789")
_NUMBER_START = frozenset("0123456789+-.")
_LETTERS = {t.value: t for t in CommandType}


class _Scanner:
    """Cursor over one path string. Lives for a single parse_path call."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.end = len(text)

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self) -> str:
        return self.text[self.pos]

    def at_number_start(self) -> bool:
        return self.pos < self.end and self.text[self.pos] in _NUMBER_START

    def skip_whitespace(self) -> None:
        while self.pos < self.end and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def skip_separator(self) -> bool:
        """Whitespace, at most one comma, whitespace. True if a comma was consumed."""
        self.skip_whitespace()
        if self.pos < self.end and self.text[self.pos] == ",":
            self.pos += 1
            self.skip_whitespace()
            return True
        return False

    def read_number(self) -> float:
        text, end = self.text, self.end
        start = i = self.pos
        if i < end and text[i] in "+-":
            i += 1

        int_digits = 0
        while i < end and text[i] in _DIGITS:
            i += 1
            int_digits += 1

        frac_digits = 0
        if i < end and text[i] == ".":
            i += 1
            while i < end and text[i] in _DIGITS:
                i += 1
                frac_digits += 1

        if int_digits == 0 and frac_digits == 0:
            if start >= end:
                raise MalformedPathData("Unexpected end of path data, expected a number", start)
            raise MalformedPathData(f"Expected a number, found {text[start]!r}", start)

        # Exponent only when digits follow, otherwise 'e' belongs to the next token
        if i < end and text[i] in "eE":
            j = i + 1
            if j < end and text[j] in "+-":
                j += 1
            if j < end and text[j] in _DIGITS:
                while j < end and text[j] in _DIGITS:
                    j += 1
                i = j

        value = float(text[start:i])
        if not math.isfinite(value):
            raise MalformedPathData(f"Number out of range: {text[start:i]!r}", start)
        self.pos = i
        return value

    def read_flag(self) -> float:
        if self.pos >= self.end:
            raise MalformedPathData("Unexpected end of path data, expected an arc flag", self.pos)
        ch = self.text[self.pos]
        if ch not in "01":
            raise MalformedPathData(f"Arc flag must be 0 or 1, found {ch!r}", self.pos)
        self.pos += 1
        return float(ch)


def _read_operands(scanner: _Scanner, command: CommandType) -> tuple[float, ...]:
    values: list[float] = []
    for slot in range(command.arity):
        if slot:
            scanner.skip_separator()
        if command is CommandType.ARC_TO and slot in ARC_FLAG_SLOTS:
            values.append(scanner.read_flag())
        else:
            values.append(scanner.read_number())
    return tuple(values)


def parse_path(d: str) -> PathData:
    """Parse path data into commands, one per operand group.

    Implicit repetitions ("L1 2 3 4") become separate commands of the same
    type and relativity; repetitions after a moveto become linetos.

    Raises MalformedPathData on any grammar violation.
    """
    scanner = _Scanner(d)
    commands: PathData = []

    scanner.skip_whitespace()
    while not scanner.at_end():
        position = scanner.pos
        ch = scanner.peek()
        command = _LETTERS.get(ch.upper()) if ch.isalpha() else None
        if command is None:
            if ch.isalpha():
                raise MalformedPathData(f"Unknown command {ch!r}", position)
            raise MalformedPathData(f"Expected a command letter, found {ch!r}", position)
        if not commands and command is not CommandType.MOVE_TO:
            raise MalformedPathData("Path data must begin with a moveto", position)

        relative = ch.islower()
        scanner.pos += 1
        scanner.skip_whitespace()

        if command is CommandType.CLOSE_PATH:
            commands.append(PathCommand(command, relative))
            continue

        current = command
        while True:
            commands.append(PathCommand(current, relative, _read_operands(scanner, current)))
            if current is CommandType.MOVE_TO:
                current = CommandType.LINE_TO
            comma = scanner.skip_separator()
            if not scanner.at_number_start():
                # A comma only ever separates two numbers
                if comma:
                    found = repr(scanner.peek()) if not scanner.at_end() else "end of path data"
                    raise MalformedPathData(f"Expected a number after ',', found {found}", scanner.pos)
                break

    return commands
