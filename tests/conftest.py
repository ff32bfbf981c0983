import pytest
from shapely.geometry import MultiPolygon, box

from globe_quiz.features import CountryFeature


def square(iso, admin, minx, miny, maxx, maxy, **props):
    return CountryFeature(iso=iso, admin=admin, geometry=box(minx, miny, maxx, maxy), **props)


@pytest.fixture
def make_feature():
    return square


@pytest.fixture
def south_africa():
    return square("ZA", "South Africa", 0, 0, 20, 20, name_en="South Africa",
                  pop_est=58_558_270, continent="Africa", subregion="Southern Africa")


@pytest.fixture
def lesotho():
    # enclave inside south_africa
    return square("LS", "Lesotho", 5, 5, 7, 7, name_en="Lesotho",
                  pop_est=2_125_268, continent="Africa", subregion="Southern Africa")


@pytest.fixture
def germany():
    return square("DE", "Germany", 40, 40, 50, 50, name_en="Germany",
                  pop_est=83_132_799, continent="Europe", subregion="Western Europe")


@pytest.fixture
def france():
    # mainland plus an overseas island
    geometry = MultiPolygon([box(-60, 0, -50, 10), box(30, 40, 38, 48)])
    return CountryFeature(iso="FR", admin="France", geometry=geometry, name_en="France",
                          pop_est=67_059_887, continent="Europe")


@pytest.fixture
def no_code():
    return square("-99", "Somaliland", 100, 0, 110, 10)


@pytest.fixture
def features(south_africa, lesotho, germany, france, no_code):
    return (south_africa, lesotho, germany, france, no_code)
