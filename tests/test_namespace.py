"""The package root works as one flat helper namespace."""

from __future__ import annotations

import svcutils as u


def test_helpers_reachable_from_root() -> None:
    assert u.pack([1], []) == [(1, None)]
    assert u.logic_error("T", "M", 400, 1).to_json()["httpCode"] == 400
    assert u.standarlize("Đà Nẵng!") == "da nang"
    assert u.parse_int_null("0") is None
    assert u.is_empty({}) is True
    assert u.opt(None) is u.ABSENT


def test_version() -> None:
    assert u.__version__ == "1.0.0"


def test_geo_near_opts() -> None:
    opts = u.geo_near_opts(u.EARTH_RADIUS * 2, num=5)
    assert opts == {"spherical": True, "maxDistance": 2.0, "distanceMultiplier": 6378137, "num": 5}
