"""geo.py

Geometry helpers shared by the coverage search, the cell views and the GPX
track indexer.  Polygon construction, intersection and area are delegated to
shapely; this module only adapts inputs and turns two polygons into the area
ratio the coverage search works with.

Areas are spherical, in square metres on a sphere of radius
:data:`EARTH_RADIUS_M`: geometries are projected to Lambert's cylindrical
equal-area projection with pyproj before shapely measures them.  Overlays stay
in degrees.
"""

from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional, Tuple

import gpxpy
import pyproj
from pydantic import BaseModel
from shapely.geometry import Polygon, box, shape
from shapely.geometry.base import BaseGeometry
from shapely.ops import transform, unary_union

from .grid_index import BoundingBox

# Cell edges computed along different bisection paths can disagree in the
# last bits.  Overlaps thinner than this (degrees, ~0.1 micrometre) are noise.
EDGE_TOLERANCE = 1e-12

EARTH_RADIUS_M = 6_371_008.8

# EDGE_TOLERANCE as a distance along the equator, metres
EDGE_TOLERANCE_M = math.radians(EDGE_TOLERANCE) * EARTH_RADIUS_M

_SPHERE = f"+proj=longlat +R={EARTH_RADIUS_M} +over +no_defs"
_EQUAL_AREA = f"+proj=cea +R={EARTH_RADIUS_M} +over +no_defs"
_to_equal_area = pyproj.Transformer.from_crs(_SPHERE, _EQUAL_AREA, always_xy=True)


# ------------------------------------------------------------
# Construction / coercion
# ------------------------------------------------------------

def cell_polygon(bbox: BoundingBox) -> Polygon:
    """Closed rectangular polygon for a cell box, ring starting at the south-west corner."""
    min_lon, min_lat, max_lon, max_lat = bbox
    return Polygon([
        (min_lon, min_lat),
        (min_lon, max_lat),
        (max_lon, max_lat),
        (max_lon, min_lat),
        (min_lon, min_lat),
    ])


def _normalize(geom: BaseGeometry) -> BaseGeometry:
    if geom.is_empty or geom.is_valid:
        return geom
    # self-intersecting rings are repaired the cheap way
    return geom.buffer(0)


def as_geometry(obj: Any) -> BaseGeometry:
    """Coerce a query geometry into a valid shapely geometry.

    Accepts a shapely geometry, a GeoJSON mapping (a geometry or a
    ``Feature`` wrapping one) or a pydantic model that dumps to such a
    mapping (e.g. :class:`geosquare_grid.models.Feature`).

    Raises:
        TypeError: If *obj* is none of the above.
    """
    if isinstance(obj, BaseGeometry):
        return _normalize(obj)
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(exclude_none=True)
    if isinstance(obj, Mapping):
        if obj.get("type") == "Feature":
            obj = obj["geometry"]
        return _normalize(shape(obj))
    raise TypeError(f"Cannot use {type(obj).__name__} as a geometry")


# ------------------------------------------------------------
# Overlay
# ------------------------------------------------------------

def intersect(a: BaseGeometry, b: BaseGeometry) -> Optional[BaseGeometry]:
    """Intersection of *a* and *b*, or None when they share no area."""
    overlap = a.intersection(b)
    if overlap.is_empty or overlap.area == 0:
        return None
    if overlap.geom_type == "GeometryCollection":
        # keep the areal parts only; stray edges and points carry no area
        overlap = unary_union([g for g in overlap.geoms if g.area > 0])
    return overlap


def _equal_area(geom: BaseGeometry) -> Optional[BaseGeometry]:
    min_x, min_y, max_x, max_y = geom.bounds
    if min_y < -90 or max_y > 90:
        # cells of the padded range reach past the poles
        geom = geom.intersection(box(min_x, -90, max_x, 90))
        if geom.is_empty:
            return None
    return transform(_to_equal_area.transform, geom)


def spherical_area(geom: BaseGeometry) -> float:
    """Area of *geom* in square metres; the part beyond the poles counts as nothing."""
    projected = _equal_area(geom)
    return 0.0 if projected is None else projected.area


def area_ratio(cell: BaseGeometry, geometry: BaseGeometry) -> float:
    """Fraction of *cell*'s spherical area covered by *geometry*, in ``[0, 1]``.

    Returns exactly 0.0 when the overlap is only a sliver along a shared
    edge (thinner than :data:`EDGE_TOLERANCE`) and exactly 1.0 when the
    uncovered part of *cell* is no more than such a sliver along its
    perimeter.
    """
    projected_cell = _equal_area(cell)
    if projected_cell is None or projected_cell.area <= 0:
        return 0.0
    overlap = intersect(cell, geometry)
    if overlap is None:
        return 0.0

    min_x, min_y, max_x, max_y = overlap.bounds
    if max_x - min_x <= EDGE_TOLERANCE or max_y - min_y <= EDGE_TOLERANCE:
        return 0.0

    cell_area = projected_cell.area
    overlap_area = spherical_area(overlap)
    if cell_area - overlap_area <= EDGE_TOLERANCE_M * projected_cell.length:
        return 1.0
    return overlap_area / cell_area


# ------------------------------------------------------------
# GPX
# ------------------------------------------------------------

def extract_gpx_points(gpx: gpxpy.gpx.GPX) -> List[Tuple[float, float]]:
    """Collect all route & track points as (lon, lat)."""
    pts: List[Tuple[float, float]] = []

    for route in gpx.routes:
        for p in route.points:
            pts.append((p.longitude, p.latitude))

    for track in gpx.tracks:
        for seg in track.segments:
            for p in seg.points:
                pts.append((p.longitude, p.latitude))

    return pts
