"""Static unit catalog loaded from a YAML (or JSON) document."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import yaml

from common.logging import get_logger

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "units.yml"
TEMPERATURE_CATEGORY = "temperature"
TEMPERATURE_KEYS = frozenset({"c", "f", "k", "r"})

logger = get_logger("apd_units.catalog")


class CatalogError(ValueError):
    """Raised when a catalog document is malformed."""


class Strategy(str, Enum):
    """Conversion rule applied to every unit of a category."""

    LINEAR = "linear"
    TEMPERATURE = "temperature"


@dataclass(frozen=True, slots=True)
class Unit:
    """A single convertible unit."""

    key: str
    name: str
    factor: float
    category: str


@dataclass(frozen=True, slots=True)
class Category:
    """An ordered, read-only group of mutually convertible units."""

    name: str
    units: Mapping[str, Unit]
    strategy: Strategy = Strategy.LINEAR

    @property
    def title(self) -> str:
        return self.name[:1].upper() + self.name[1:]

    def __contains__(self, key: object) -> bool:
        return key in self.units

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units.values())

    def __len__(self) -> int:
        return len(self.units)


Catalog = Mapping[str, Category]


def strategy_for(name: str) -> Strategy:
    """Return the conversion strategy tag for the category called ``name``."""

    return Strategy.TEMPERATURE if name == TEMPERATURE_CATEGORY else Strategy.LINEAR


def _coerce_factor(raw: Any, *, category: str, key: str, strategy: Strategy) -> float:
    numeric = isinstance(raw, (int, float)) and not isinstance(raw, bool)
    if strategy is Strategy.TEMPERATURE:
        # Temperature factors are ignored by the engine.
        return float(raw) if numeric else 1.0
    if not numeric:
        raise CatalogError(f"Unit '{category}.{key}' must declare a numeric factor.")
    factor = float(raw)
    if not math.isfinite(factor) or factor <= 0:
        raise CatalogError(f"Unit '{category}.{key}' factor must be a positive finite number.")
    return factor


def _build_category(name: str, body: Any) -> Category:
    if not isinstance(body, Mapping) or not isinstance(body.get("units"), Mapping):
        raise CatalogError(f"Category '{name}' must contain a 'units' mapping.")
    strategy = strategy_for(name)
    units: dict[str, Unit] = {}
    seen: dict[str, str] = {}
    for raw_key, spec in body["units"].items():
        key = str(raw_key)
        folded = key.lower()
        if folded in seen:
            raise CatalogError(
                f"Category '{name}' declares '{key}' and '{seen[folded]}', which collide ignoring case."
            )
        seen[folded] = key
        if not isinstance(spec, Mapping) or not isinstance(spec.get("name"), str):
            raise CatalogError(f"Unit '{name}.{key}' must declare a display name.")
        factor = _coerce_factor(spec.get("factor"), category=name, key=key, strategy=strategy)
        units[key] = Unit(key=key, name=spec["name"], factor=factor, category=name)
    if strategy is Strategy.TEMPERATURE:
        unsupported = sorted(set(units) - TEMPERATURE_KEYS)
        if unsupported:
            logger.warning(
                "Temperature units %s have no formula and will never convert", ", ".join(unsupported)
            )
    return Category(name=name, units=MappingProxyType(units), strategy=strategy)


def build_catalog(document: Any) -> Catalog:
    """Validate a parsed catalog document and freeze it."""

    if not isinstance(document, Mapping):
        raise CatalogError("Catalog document must be a mapping of categories.")
    categories = {str(name): _build_category(str(name), body) for name, body in document.items()}
    return MappingProxyType(categories)


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Read and validate the catalog stored at ``path``.

    ``None`` selects the catalog bundled with the plugin. The file may be YAML
    or JSON since the loader uses :func:`yaml.safe_load`.
    """

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as exc:
        raise CatalogError(f"Cannot read unit catalog '{catalog_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Unit catalog '{catalog_path}' is not valid YAML/JSON.") from exc
    catalog = build_catalog(document or {})
    logger.info("Loaded %d unit categories from %s", len(catalog), catalog_path)
    return catalog


__all__ = [
    "Catalog",
    "CatalogError",
    "Category",
    "DEFAULT_CATALOG_PATH",
    "Strategy",
    "TEMPERATURE_KEYS",
    "Unit",
    "build_catalog",
    "load_catalog",
    "strategy_for",
]
