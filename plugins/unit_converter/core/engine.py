"""Numeric conversion between units of one category."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from .catalog import Category, Strategy
from .parser import ParsedExpression

# Celsius is the pivot: each key maps to (to_celsius, from_celsius).
_TEMPERATURE_FORMULAS: dict[str, tuple[Callable[[float], float], Callable[[float], float]]] = {
    "c": (lambda v: v, lambda c: c),
    "f": (lambda v: (v - 32) * 5 / 9, lambda c: c * 9 / 5 + 32),
    "k": (lambda v: v - 273.15, lambda c: c + 273.15),
    "r": (lambda v: (v - 491.67) * 5 / 9, lambda c: c * 9 / 5 + 491.67),
}


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """One converted value, ready for formatting."""

    unit: str
    name: str
    value: float


def _convert_temperature(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    source = _TEMPERATURE_FORMULAS.get(from_unit)
    target = _TEMPERATURE_FORMULAS.get(to_unit)
    if source is None or target is None:
        return None
    if from_unit == to_unit:
        return value
    return target[1](source[0](value))


def _convert_linear(value: float, from_factor: float, to_factor: float) -> float:
    return value * from_factor / to_factor


def convert_value(
    value: float, from_unit: str, to_unit: str, category: Category
) -> Optional[float]:
    """Convert ``value`` from ``from_unit`` to ``to_unit`` within ``category``.

    Returns ``None`` when either key is not declared in the category, for
    temperature keys without a formula, or when the result is not finite.
    """

    source = category.units.get(from_unit)
    target = category.units.get(to_unit)
    if source is None or target is None:
        return None
    if category.strategy is Strategy.TEMPERATURE:
        result = _convert_temperature(value, from_unit, to_unit)
    elif from_unit == to_unit:
        result = value
    else:
        result = _convert_linear(value, source.factor, target.factor)
    if result is None or not math.isfinite(result):
        return None
    return result


def convert_all(parsed: ParsedExpression, category: Category) -> List[ConversionResult]:
    """Convert a parsed input to every other unit, or just its target unit."""

    if parsed.target_unit is not None:
        keys = [parsed.target_unit]
    else:
        keys = [key for key in category.units if key != parsed.unit]
    results: List[ConversionResult] = []
    for key in keys:
        converted = convert_value(parsed.value, parsed.unit, key, category)
        if converted is None:
            continue
        results.append(ConversionResult(unit=key, name=category.units[key].name, value=converted))
    return results


__all__ = ["ConversionResult", "convert_all", "convert_value"]
