"""Command line interface for the Unit Converter plugin."""

from __future__ import annotations

import argparse
import json
from typing import Any

from .core import (
    Catalog,
    CatalogError,
    UnknownCategoryError,
    convert_input,
    describe_category,
    list_categories,
    load_catalog,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def command_categories(catalog: Catalog, args: argparse.Namespace) -> None:
    names = list_categories(catalog)
    _print({"categories": names, "count": len(names)})


def command_units(catalog: Catalog, args: argparse.Namespace) -> None:
    _print(describe_category(catalog, args.category))


def command_convert(catalog: Catalog, args: argparse.Namespace) -> None:
    _print(convert_input(catalog, args.category, " ".join(args.text)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="APD unit converter CLI")
    parser.add_argument("--catalog", default=None, help="Path to a YAML/JSON unit catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    categories_parser = subparsers.add_parser("categories", help="List unit categories")
    categories_parser.set_defaults(func=command_categories)

    units_parser = subparsers.add_parser("units", help="List the units of a category")
    units_parser.add_argument("--category", required=True, help="Category name (e.g. length)")
    units_parser.set_defaults(func=command_units)

    convert_parser = subparsers.add_parser("convert", help="Convert a value such as '400 km to m'")
    convert_parser.add_argument("--category", required=True, help="Category name (e.g. length)")
    convert_parser.add_argument("text", nargs="+", help="Value with unit, optionally 'to <unit>'")
    convert_parser.set_defaults(func=command_convert)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        catalog = load_catalog(args.catalog)
        args.func(catalog, args)
    except (CatalogError, UnknownCategoryError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
