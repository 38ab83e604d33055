"""Tests for the null-safe optional chain (helpers/optional.py)."""

from __future__ import annotations

from svcutils.helpers.optional import ABSENT, Absent, Present, opt


class Address:
    def __init__(self, city: str | None) -> None:
        self.city = city


class TestOpt:
    data = {"user": {"address": Address("Hue"), "tags": ["a", "b"]}}

    def test_deep_navigation(self) -> None:
        assert opt(self.data).get("user").get("address").get("city").value == "Hue"

    def test_index_navigation(self) -> None:
        assert opt(self.data).get("user").get("tags").get(1).value == "b"

    def test_missing_segment_is_absent(self) -> None:
        chain = opt(self.data).get("user").get("phone").get("number")
        assert isinstance(chain, Absent)
        assert chain.value is None

    def test_none_value_is_absent(self) -> None:
        assert opt({"user": {"address": Address(None)}}).get("user").get("address").get("city") is ABSENT

    def test_falsy_values_are_present(self) -> None:
        assert opt(0) == Present(0)
        assert opt({"n": ""}).get("n").value == ""

    def test_or_else(self) -> None:
        assert opt(None).or_else("fallback") == "fallback"
        assert opt("x").or_else("fallback") == "x"

    def test_map(self) -> None:
        assert opt("7").map(int).value == 7
        assert opt(None).map(int) is ABSENT

    def test_integer_mapping_keys(self) -> None:
        assert opt({1: "x"}).get(1).value == "x"
        assert opt({"1": "y"}).get(1).value is None

    def test_negative_and_out_of_range_index(self) -> None:
        assert opt(["a", "b"]).get(-1).value == "b"
        assert opt(["a", "b"]).get(5) is ABSENT
        assert opt("text").get(0) is ABSENT

    def test_dotted_string_name(self) -> None:
        assert opt({"a": {"b": 1}}).get("a.b").value == 1

    def test_truthiness(self) -> None:
        assert opt(False)
        assert not opt(None)
