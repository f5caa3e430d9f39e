"""models.py

GeoJSON models for exporting grid cells.

Every cell becomes a ``Feature`` with a closed rectangular ``Polygon`` ring
and its GID as both ``id`` and ``properties.gid``.  The models reject unknown
fields so that a malformed document fails loudly instead of being silently
trimmed.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Position = List[float]


class PolygonGeometry(BaseModel):
    """GeoJSON Polygon in ``[lon, lat]`` order, exterior ring only."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[Position]]

    @field_validator("coordinates")
    @classmethod
    def _check_rings(cls, rings: List[List[Position]]) -> List[List[Position]]:
        if not rings:
            raise ValueError("polygon needs at least one ring")
        for ring in rings:
            if len(ring) < 4:
                raise ValueError("a linear ring needs at least 4 positions")
            if ring[0] != ring[-1]:
                raise ValueError("a linear ring must be closed")
            for pos in ring:
                if len(pos) != 2:
                    raise ValueError("positions must be 2D [lon, lat]")
        return rings


class CellProperties(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.0"
    gid: str
    level: int = Field(ge=1, le=15)
    size_m: int
    center: Position

    @field_validator("center")
    @classmethod
    def _check_center(cls, center: Position) -> Position:
        if len(center) != 2:
            raise ValueError("center must be [lon, lat]")
        return center


class Feature(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["Feature"] = "Feature"
    id: str
    bbox: Optional[List[float]] = None
    geometry: PolygonGeometry
    properties: CellProperties


class FeatureCollection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)

    def gids(self) -> List[str]:
        """GIDs of all features, in order."""
        return [f.id for f in self.features]

    def by_level(self, level: int) -> List[Feature]:
        """Features whose cell is at *level*."""
        return [f for f in self.features if f.properties.level == level]
