"""Overpass element models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class OsmNode:
    """A point element with its raw tags."""

    lat: float
    lon: float
    tags: dict[str, str] = field(default_factory=dict)
