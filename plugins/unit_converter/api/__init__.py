"""Unit converter API with standardized responses."""

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, Flask, Response, current_app, request
from flask.blueprints import BlueprintSetupState
from pydantic import FiniteFloat

from common.errors import NotFoundAppError, ValidationAppError
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    Catalog,
    UnknownCategoryError,
    convert_input,
    convert_value,
    describe_category,
    format_value,
    get_category,
    list_categories,
    load_catalog,
    resolve_unit,
)

CATALOG_EXTENSION = "unit_catalog"


class ConvertPayload(SchemaModel):
    category: str
    input: str


class ValuePayload(SchemaModel):
    category: str
    value: FiniteFloat
    from_unit: str
    to_unit: str


api_bp = Blueprint("unit_converter_api", __name__, url_prefix="/api/unit_converter")


def resolve_catalog_path(app: Flask) -> Path | None:
    """Pick the catalog file from the config object, then ``config.yml``."""

    plugin_config = app.config.get("PLUGIN_SETTINGS", {}).get("unit_converter", {}) or {}
    configured = app.config.get("UNIT_CATALOG_PATH") or plugin_config.get("catalog")
    if not configured:
        return None
    path = Path(str(configured)).expanduser()
    if not path.is_absolute():
        path = Path(app.root_path).parent / path
    return path


@api_bp.record_once
def _load_catalog(state: BlueprintSetupState) -> None:
    state.app.extensions[CATALOG_EXTENSION] = load_catalog(resolve_catalog_path(state.app))


def _catalog() -> Catalog:
    return current_app.extensions[CATALOG_EXTENSION]


def _unknown_category(exc: UnknownCategoryError) -> Response:
    return fail(NotFoundAppError(message=str(exc), code="unit.unknown_category"))


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="unit.invalid_request",
            details={"errors": getattr(exc, "details", None)},
        )
    )


@api_bp.get("/categories")
def categories() -> Response:
    catalog = _catalog()
    items = [
        {"name": name, "title": catalog[name].title, "count": len(catalog[name])}
        for name in list_categories(catalog)
    ]
    return ok({"categories": items, "count": len(items)})


@api_bp.get("/categories/<name>/units")
def units_endpoint(name: str) -> Response:
    try:
        data = describe_category(_catalog(), name)
    except UnknownCategoryError as exc:
        return _unknown_category(exc)
    return ok(data)


@api_bp.post("/convert")
def convert_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ConvertPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        result = convert_input(_catalog(), payload.category, payload.input)
    except UnknownCategoryError as exc:
        return _unknown_category(exc)
    return ok(result)


@api_bp.post("/convert/value")
def convert_value_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ValuePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        category = get_category(_catalog(), payload.category)
    except UnknownCategoryError as exc:
        return _unknown_category(exc)

    from_key = resolve_unit(payload.from_unit, category)
    to_key = resolve_unit(payload.to_unit, category)
    if from_key is None or to_key is None:
        unknown = payload.from_unit if from_key is None else payload.to_unit
        return fail(
            ValidationAppError(
                message=f"Unknown unit '{unknown}' in {category.name}.",
                code="unit.invalid_unit",
            )
        )
    result = convert_value(payload.value, from_key, to_key, category)
    if result is None:
        return fail(
            ValidationAppError(
                message=f"Cannot convert {payload.value} {from_key} to {to_key} in {category.name}.",
                code="unit.not_convertible",
            )
        )
    return ok(
        {
            "category": category.name,
            "value": result,
            "formatted": format_value(result),
            "from_unit": from_key,
            "to_unit": to_key,
        }
    )


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "categories",
    "units_endpoint",
    "convert_endpoint",
    "convert_value_endpoint",
    "resolve_catalog_path",
]
