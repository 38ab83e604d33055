from typing import Any, Dict


EARTH_RADIUS = 6378137  # metres


def geo_near_opts(dist: float, num: int = 100) -> Dict[str, Any]:
    """Options for a spherical MongoDB ``geoNear`` returning distances in metres."""
    return {
        "spherical": True,
        "maxDistance": dist / EARTH_RADIUS,
        "distanceMultiplier": EARTH_RADIUS,
        "num": num,
    }
