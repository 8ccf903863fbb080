import pytest

from shared.helper.HelperSearch import get_total


def test_bare_integer_total():
    assert get_total({"hits": {"total": 42, "hits": []}}) == 42


def test_structured_total():
    assert get_total({"hits": {"total": {"value": 17, "relation": "eq"}}}) == 17


def test_structured_total_ignores_relation():
    assert get_total({"hits": {"total": {"value": 10000, "relation": "gte"}}}) == 10000


def test_structured_total_without_value():
    assert get_total({"hits": {"total": {}}}) == 0


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"hits": {}},
        {"hits": None},
        {"hits": {"total": None}},
        {"hits": {"total": "lots"}},
        {"hits": {"total": True}},
        {"hits": {"total": {"value": None}}},
        {"hits": {"total": ["3"]}},
    ],
)
def test_malformed_total_is_zero(raw):
    assert get_total(raw) == 0


def test_numeric_string_total():
    assert get_total({"hits": {"total": " 12 "}}) == 12


@pytest.mark.parametrize(
    "raw",
    [
        {"hits": {"total": -5}},
        {"hits": {"total": {"value": -1, "relation": "eq"}}},
        {"hits": {"total": "-3"}},
    ],
)
def test_negative_total_is_zero(raw):
    assert get_total(raw) == 0
