"""Tests for _types module."""
import pytest

from dustsweeper._types import compare, parse_zone_key, zone_key


def test_compare_operators():
    assert compare(5, ">=", 5)
    assert compare(5, ">", 4)
    assert compare(3, "<=", 3)
    assert compare(3, "<", 4)
    assert compare(2, "==", 2)
    assert compare(2, "!=", 3)
    assert not compare(1, ">=", 2)


def test_compare_unknown_op():
    with pytest.raises(ValueError, match="Unknown operator"):
        compare(1, "=>", 2)


def test_zone_key():
    assert zone_key(0) == "zone_0"
    assert zone_key(7) == "zone_7"


def test_parse_zone_key():
    assert parse_zone_key("zone_3") == 3
    assert parse_zone_key("3") == 3
    assert parse_zone_key(5) == 5


def test_parse_zone_key_rejects_garbage():
    with pytest.raises(ValueError):
        parse_zone_key("zone_x")
