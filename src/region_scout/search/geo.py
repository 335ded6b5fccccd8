"""Bounding-box geometry helpers."""

from __future__ import annotations

import math

from region_scout.schemas import BoundingBox

EARTH_RADIUS_KM = 6371.0088


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def bounding_box_dimensions_km(bbox: BoundingBox) -> tuple[float, float]:
    """Return ``(width_km, height_km)``; width is measured at the middle latitude."""
    mid_lat = (bbox.south + bbox.north) / 2
    # arc length along the middle parallel
    width = EARTH_RADIUS_KM * math.radians(abs(bbox.east - bbox.west)) * math.cos(math.radians(mid_lat))
    height = haversine_km(bbox.south, bbox.west, bbox.north, bbox.west)
    return abs(width), height


def tile_bounding_box(bbox: BoundingBox, step_deg: float) -> list[BoundingBox]:
    """
    Split ``bbox`` into a row-major grid of ``step_deg`` tiles.

    The last row and column are clipped to the outer box, so the tiles cover
    it exactly.

    Raises:
        ValueError: If ``step_deg`` is not positive.
    """
    if step_deg <= 0:
        raise ValueError(f"step_deg must be positive, got {step_deg}")

    tiles = []
    south = bbox.south
    while south < bbox.north:
        north = min(south + step_deg, bbox.north)
        west = bbox.west
        while west < bbox.east:
            east = min(west + step_deg, bbox.east)
            tiles.append(BoundingBox(south=south, west=west, north=north, east=east))
            west = east
        south = north
    return tiles
