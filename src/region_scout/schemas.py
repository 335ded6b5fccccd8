"""
Domain models for region scout.

Pydantic models for data from external APIs and internal processing.
These define the canonical schema - datasources normalize API responses to these.
"""

from __future__ import annotations

from enum import IntFlag

from pydantic import BaseModel, Field

# =============================================================================
# Geographic
# =============================================================================


def _compact(value: float) -> str:
    """Format a coordinate without trailing zeros (``10.0`` -> ``10``)."""
    text = f"{value:.7f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class BoundingBox(BaseModel):
    """Geographic bounding box for spatial queries.

    Only coordinate ranges are validated. A box with ``south > north`` is
    accepted and simply matches nothing on the Overpass side.
    """

    model_config = {"frozen": True}

    south: float = Field(..., ge=-90, le=90)
    west: float = Field(..., ge=-180, le=180)
    north: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)

    def as_overpass(self) -> str:
        """Render in Overpass QL order: ``south,west,north,east``."""
        return ",".join(_compact(v) for v in (self.south, self.west, self.north, self.east))


# =============================================================================
# Region preferences
# =============================================================================


class RegionFeature(IntFlag):
    """Feature categories a region must contain."""

    NONE = 0
    INTERNATIONAL_AIRPORTS = 1
    PEAKS = 2
    SEA_BEACHES = 4
    SALT_LAKES = 8


#: Property key for the minimum peak elevation in meters.
MIN_PEAK_HEIGHT = "minPeakHeight"


class RegionPreferences(BaseModel):
    """Bitmask of required features plus feature-specific parameters."""

    features: RegionFeature = RegionFeature.NONE
    properties: dict[str, str] = Field(default_factory=dict)

    def wants(self, feature: RegionFeature) -> bool:
        """Whether ``feature`` is enabled."""
        return bool(self.features & feature)


# =============================================================================
# Places
# =============================================================================


class PlaceFeature(BaseModel):
    """A point of interest attached to a place (e.g. a museum)."""

    latitude: float
    longitude: float
    tags: dict[str, str] = Field(default_factory=dict)


class PlaceInfo(BaseModel):
    """A named place resolved by the geocoding service."""

    osm_id: int = Field(..., description="OSM relation id")
    name: str
    country: str = ""
    latitude: float
    longitude: float
    features: list[PlaceFeature] = Field(default_factory=list)
