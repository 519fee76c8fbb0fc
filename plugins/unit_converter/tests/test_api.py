import json

import pytest

from app import config as config_module
from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def test_categories_endpoint_lists_categories():
    client = _client()
    response = client.get("/api/unit_converter/categories")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    names = [item["name"] for item in payload["data"]["categories"]]
    assert names[0] == "length"
    assert payload["data"]["count"] == len(names)
    assert response.headers.get("X-Request-ID")


def test_units_endpoint_describes_category():
    client = _client()
    response = client.get("/api/unit_converter/categories/length/units")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["title"] == "Length"
    assert data["example"] == "100 m"
    assert data["units"][1]["key"] == "km"


def test_units_endpoint_unknown_category():
    client = _client()
    response = client.get("/api/unit_converter/categories/luminosity/units")
    assert response.status_code == 404
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "unit.unknown_category"


def test_convert_endpoint_with_target():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"category": "length", "input": "400 km to m"},
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["mode"] == "single"
    assert data["detected"]["name"] == "Kilometer"
    assert len(data["results"]) == 1
    assert data["results"][0]["value"] == 400_000
    assert data["results"][0]["formatted"] == "400000"


def test_convert_endpoint_unrecognised_input_is_not_an_error():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"category": "mass", "input": "abc"},
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["parsed"] is None
    assert data["results"] == []


def test_convert_endpoint_rejects_bad_payload():
    client = _client()
    response = client.post("/api/unit_converter/convert", json={"category": "mass"})
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "unit.invalid_request"
    assert payload["error"]["details"]["errors"]


def test_convert_endpoint_unknown_category():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"category": "luminosity", "input": "1 cd"},
    )
    assert response.status_code == 404


def test_value_endpoint_resolves_unit_text():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert/value",
        json={"category": "temperature", "value": 100, "from_unit": "c", "to_unit": "Fahrenheit"},
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["value"] == 212
    assert data["formatted"] == "212"
    assert data["to_unit"] == "f"


def test_value_endpoint_rejects_unknown_unit():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert/value",
        json={"category": "length", "value": 1, "from_unit": "m", "to_unit": "bogus"},
    )
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "unit.invalid_unit"


def test_wrong_method_returns_json_envelope():
    client = _client()
    response = client.get("/api/unit_converter/convert")
    assert response.status_code == 405
    assert response.get_json()["error"]["code"] == "http.405"


def test_catalog_path_from_config(tmp_path):
    path = tmp_path / "units.yml"
    path.write_text(
        "distance:\n  units:\n    leg: {name: League, factor: 4828.032}\n",
        encoding="utf-8",
    )
    app = create_app("TestingConfig")
    app.config["UNIT_CATALOG_PATH"] = str(path)

    from plugins.unit_converter.api import resolve_catalog_path

    assert resolve_catalog_path(app) == path
    app.config["UNIT_CATALOG_PATH"] = None
    app.config["PLUGIN_SETTINGS"] = {"unit_converter": {"catalog": "custom/units.yml"}}
    assert resolve_catalog_path(app).parts[-2:] == ("custom", "units.yml")


def _reject_constant(token):
    raise ValueError(f"non-standard JSON constant {token}")


def _strict_json(response):
    return json.loads(response.get_data(as_text=True), parse_constant=_reject_constant)


def test_convert_value_overflow_is_rejected():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert/value",
        json={"category": "length", "value": 1e308, "from_unit": "km", "to_unit": "nm"},
    )
    assert response.status_code == 400
    payload = _strict_json(response)
    assert payload["error"]["code"] == "unit.not_convertible"


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_convert_value_rejects_non_finite_value(constant):
    client = _client()
    body = '{"category": "length", "value": %s, "from_unit": "m", "to_unit": "km"}' % constant
    response = client.post(
        "/api/unit_converter/convert/value", data=body, content_type="application/json"
    )
    assert response.status_code == 400
    payload = _strict_json(response)
    assert payload["error"]["code"] == "unit.invalid_request"


def test_convert_huge_input_skips_overflowing_units():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"category": "length", "input": "9" * 300 + " km"},
    )
    assert response.status_code == 200
    payload = _strict_json(response)
    units = [item["unit"] for item in payload["data"]["results"]]
    assert "m" in units
    assert "nm" not in units


def test_app_loads_catalog_from_config_override(tmp_path, monkeypatch):
    path = tmp_path / "units.yml"
    path.write_text(
        "distance:\n  units:\n    leg: {name: League, factor: 4828.032}\n"
        "    m: {name: Meter, factor: 1.0}\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(config_module.TestingConfig, "UNIT_CATALOG_PATH", str(path))
    client = create_app("TestingConfig").test_client()

    payload = client.get("/api/unit_converter/categories").get_json()
    assert [item["name"] for item in payload["data"]["categories"]] == ["distance"]
    converted = client.post(
        "/api/unit_converter/convert", json={"category": "distance", "input": "1 leg to m"}
    ).get_json()
    assert converted["data"]["results"][0]["value"] == pytest.approx(4828.032)
