"""Facade for the unit converter core utilities."""

from __future__ import annotations

from typing import Dict, List, Optional

from .catalog import (
    Catalog,
    CatalogError,
    Category,
    DEFAULT_CATALOG_PATH,
    Strategy,
    Unit,
    build_catalog,
    load_catalog,
)
from .engine import ConversionResult, convert_all, convert_value
from .formatting import format_value
from .parser import ParsedExpression, parse_input
from .resolver import resolve_unit


class UnknownCategoryError(LookupError):
    """Raised when a category name is not present in the catalog."""


def get_category(catalog: Catalog, name: str) -> Category:
    """Return the category called ``name`` or raise :class:`UnknownCategoryError`."""

    category = catalog.get(name)
    if category is None:
        raise UnknownCategoryError(f"Unknown unit category '{name}'.")
    return category


def list_categories(catalog: Catalog) -> List[str]:
    """Return the category names in declaration order."""

    return list(catalog.keys())


def list_units(catalog: Catalog, name: str) -> List[Dict[str, object]]:
    """Return metadata for the units belonging to category ``name``."""

    return [
        {"key": unit.key, "name": unit.name, "factor": unit.factor}
        for unit in get_category(catalog, name)
    ]


def describe_category(catalog: Catalog, name: str) -> Dict[str, object]:
    category = get_category(catalog, name)
    first_key = next(iter(category.units), None)
    return {
        "name": category.name,
        "title": category.title,
        "strategy": category.strategy.value,
        "count": len(category),
        "example": f"100 {first_key}" if first_key else None,
        "units": list_units(catalog, name),
    }


def parse(text: str | None, category: Category) -> Optional[ParsedExpression]:
    return parse_input(text, category)


def convert(
    value: float, from_unit: str, to_unit: str, category: Category
) -> Optional[float]:
    return convert_value(value, from_unit, to_unit, category)


def convert_input(catalog: Catalog, name: str, text: str | None) -> Dict[str, object]:
    """Parse ``text`` in category ``name`` and convert it to the other units.

    Unrecognised input yields ``parsed: None`` and an empty result list.
    """

    category = get_category(catalog, name)
    parsed = parse_input(text, category)
    if parsed is None:
        return {
            "category": category.name,
            "parsed": None,
            "detected": None,
            "target": None,
            "mode": "all",
            "results": [],
        }
    target = category.units[parsed.target_unit] if parsed.target_unit else None
    results = [
        {
            "unit": result.unit,
            "name": result.name,
            "value": result.value,
            "formatted": format_value(result.value),
        }
        for result in convert_all(parsed, category)
    ]
    return {
        "category": category.name,
        "parsed": parsed.to_dict(),
        "detected": {
            "value": parsed.value,
            "unit": parsed.unit,
            "name": category.units[parsed.unit].name,
        },
        "target": {"unit": target.key, "name": target.name} if target else None,
        "mode": "single" if target else "all",
        "results": results,
    }


__all__ = [
    "Catalog",
    "CatalogError",
    "Category",
    "ConversionResult",
    "DEFAULT_CATALOG_PATH",
    "ParsedExpression",
    "Strategy",
    "Unit",
    "UnknownCategoryError",
    "build_catalog",
    "convert",
    "convert_all",
    "convert_input",
    "convert_value",
    "describe_category",
    "format_value",
    "get_category",
    "list_categories",
    "list_units",
    "load_catalog",
    "parse",
    "parse_input",
    "resolve_unit",
]
