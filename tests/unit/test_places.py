"""Static coordinate table tests."""

from tripbudget.data.places import (
    get_place_coords,
    known_aliases,
    known_places,
    normalize_place_name,
    resolve_place,
)


def test_table_is_populated_with_valid_coordinates():
    places = known_places()
    assert len(places) > 50
    for name, coords in places.items():
        assert name == name.lower()
        assert -90 <= coords.lat <= 90
        assert -180 <= coords.lng <= 180


def test_known_cities_present():
    for city in ("mumbai", "delhi", "bangalore", "tokyo", "paris", "london", "new york", "sydney"):
        assert get_place_coords(city) is not None


def test_aliases_share_coordinates():
    assert get_place_coords("Bangalore") == get_place_coords("Bengaluru")
    assert get_place_coords("mysore") == get_place_coords("Mysuru")
    assert get_place_coords("Visakhapatnam") == get_place_coords("vizag")


def test_every_alias_points_at_a_known_place():
    places = known_places()
    for alias, target in known_aliases().items():
        assert target in places, alias


def test_lookup_is_case_and_whitespace_insensitive():
    assert resolve_place("  MUMBAI  ") == "mumbai"
    assert normalize_place_name("  New   York ") == "new york"
    assert resolve_place("new   york") == "new york"


def test_comma_suffix_and_embedded_names_resolve():
    assert resolve_place("Goa, India") == "goa"
    assert resolve_place("Paris, France") == "paris"
    assert resolve_place("old city of jaipur") == "jaipur"


def test_unknown_and_empty_names_return_none():
    assert get_place_coords("FakeCity42") is None
    assert get_place_coords("") is None
    assert get_place_coords(None) is None
