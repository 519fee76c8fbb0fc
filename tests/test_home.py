from app import create_app


def test_home_lists_plugins():
    app = create_app("TestingConfig")
    client = app.test_client()
    response = client.get("/")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    titles = [item["title"] for item in payload["data"]["plugins"]]
    assert "Unit Converter" in titles
    assert response.headers.get("Content-Security-Policy")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"


def test_unknown_route_returns_json_error():
    app = create_app("TestingConfig")
    client = app.test_client()
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "http.404"


def test_catalog_loaded_once_per_app():
    app = create_app("TestingConfig")
    catalog = app.extensions["unit_catalog"]
    assert "length" in catalog
    assert create_app("TestingConfig").extensions["unit_catalog"] is not catalog
