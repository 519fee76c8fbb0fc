import pytest

from plugins.unit_converter.core import build_catalog, load_catalog


@pytest.fixture(scope="session")
def catalog():
    return load_catalog()


@pytest.fixture
def length(catalog):
    return catalog["length"]


@pytest.fixture
def mass(catalog):
    return catalog["mass"]


@pytest.fixture
def temperature(catalog):
    return catalog["temperature"]


@pytest.fixture
def odd_temperature():
    """Temperature category that declares a key without a formula."""

    return build_catalog(
        {
            "temperature": {
                "units": {
                    "c": {"name": "Celsius"},
                    "x": {"name": "Mystery degrees"},
                    "k": {"name": "Kelvin"},
                }
            }
        }
    )["temperature"]
