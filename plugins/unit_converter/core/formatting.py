"""Display formatting for converted values."""

from __future__ import annotations

import math

_SCIENTIFIC_UPPER = 1e6
_SCIENTIFIC_LOWER = 1e-3
_DECIMALS = 6


def format_value(value: float) -> str:
    """Render ``value`` for display.

    Magnitudes of at least one million, or non-zero magnitudes below 0.001,
    use scientific notation with six fractional digits. Everything else is
    rounded to six decimals with trailing zeros removed.
    """

    if value == 0:
        return "0"
    magnitude = abs(value)
    if not math.isfinite(value) or magnitude >= _SCIENTIFIC_UPPER or magnitude < _SCIENTIFIC_LOWER:
        return f"{value:.{_DECIMALS}e}"
    return f"{value:.{_DECIMALS}f}".rstrip("0").rstrip(".")


__all__ = ["format_value"]
