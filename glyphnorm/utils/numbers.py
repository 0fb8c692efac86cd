"""Number formatting for path data and attributes. No engine imports."""

from __future__ import annotations

import numpy as np


def format_number(value: float, precision: int | None = None) -> str:
    """Shortest positional form of `value`: no exponent, no trailing zeros.

    With `precision`, at most that many fractional digits are kept (rounded).
    Negative zero prints as "0".
    """
    text = np.format_float_positional(float(value), precision=precision, unique=True, trim="-")
    if text == "-0":
        return "0"
    return text
