"""Split free-text input such as ``"400 km to m"`` into value and units."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional

from .catalog import Category
from .resolver import resolve_unit

_TO_CLAUSE_RE = re.compile(r"^(.+?)\s+to\s+(.+)$", re.IGNORECASE)
_VALUE_UNIT_RE = re.compile(r"^([\d.,]+)\s*(.*)$", re.ASCII)
_DECIMAL_PREFIX_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+", re.ASCII)


@dataclass(frozen=True, slots=True)
class ParsedExpression:
    """Value and units recognised in a single input string."""

    value: float
    unit: str
    target_unit: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "unit": self.unit, "target_unit": self.target_unit}


def _parse_number(token: str) -> Optional[float]:
    match = _DECIMAL_PREFIX_RE.match(token.replace(",", ""))
    if not match:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None


def _parse_value_and_unit(text: str, category: Category) -> Optional[tuple[float, str]]:
    match = _VALUE_UNIT_RE.match(text.strip())
    if not match:
        return None
    value = _parse_number(match.group(1))
    if value is None:
        return None
    unit = resolve_unit(match.group(2), category)
    if unit is None:
        return None
    return value, unit


def parse_input(text: str | None, category: Category) -> Optional[ParsedExpression]:
    """Parse ``text`` against the units of ``category``.

    A ``"<value> <unit> to <unit>"`` form is tried first. When either side of
    it fails to resolve, the whole input is reparsed as a plain value and
    unit, so a malformed target clause never produces an error. ``None`` is
    returned when no value or unit can be recognised.
    """

    if not text or not text.strip():
        return None

    to_match = _TO_CLAUSE_RE.match(text)
    if to_match:
        source = _parse_value_and_unit(to_match.group(1), category)
        target = resolve_unit(to_match.group(2), category)
        if source is not None and target is not None:
            return ParsedExpression(value=source[0], unit=source[1], target_unit=target)

    source = _parse_value_and_unit(text, category)
    if source is None:
        return None
    return ParsedExpression(value=source[0], unit=source[1])


__all__ = ["ParsedExpression", "parse_input"]
