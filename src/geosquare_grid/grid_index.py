"""
grid_index.py

Hierarchical square-grid index for geographic coordinates.

A GID is a path from the root of an implicit tree.  Starting from a padded
working range, each symbol picks one child of a 5x5 or 2x2 split (the
dimension alternates 5, 2, 5, ... with depth).  Fifteen levels take the
roughly 450 degree wide root down to cells of about one meter.

Design goals:
- deterministic, bit-compatible GIDs
- uppercase alphanumeric encoding only
- prefix == ancestor, so parent/child navigation is string slicing
- pure functions, no state

Encoding is a *pure* function of (lon, lat, level).  The geometry of a cell is
fully described by its GID; see :func:`bounds`.
"""

from __future__ import annotations

from math import floor
from typing import List, NamedTuple, Tuple

from .alphabet import SYMBOL_POSITION, alphabet_for, symbol_at
from .errors import InvalidLevel
from .levels import DIMENSIONS, LAT_RANGE, LON_RANGE, MAX_LEVEL
from .validation import validate_coordinates, validate_gid, validate_level


# ------------------------------------------------------------
# Bounding box
# ------------------------------------------------------------

class BoundingBox(NamedTuple):
    """Edges of a grid cell in decimal degrees.

    Unpacks like the ``[min_lon, min_lat, max_lon, max_lat]`` list of the
    GeoJSON ``bbox`` member.
    """
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def contains(self, lon: float, lat: float) -> bool:
        """True if ``(lon, lat)`` lies inside or on the edge of the box."""
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat


# ------------------------------------------------------------
# Range narrowing
# ------------------------------------------------------------

def _narrow(
    lon_range: Tuple[float, float],
    lat_range: Tuple[float, float],
    depth: int,
    row: int,
    col: int,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Shrink both ranges to the child at ``(row, col)`` of the split at *depth*.

    The arithmetic order (``min + part * position`` then ``+ part``) must not
    change; GIDs depend on it bit for bit.
    """
    d = DIMENSIONS[depth]
    part_x = (lon_range[1] - lon_range[0]) / d
    part_y = (lat_range[1] - lat_range[0]) / d
    lon_min = lon_range[0] + part_x * col
    lat_min = lat_range[0] + part_y * row
    return (lon_min, lon_min + part_x), (lat_min, lat_min + part_y)


def _walk(gid: str) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Return the final (lon_range, lat_range) reached by following *gid*."""
    lon_range = LON_RANGE
    lat_range = LAT_RANGE
    # the depth, not the symbol, selects the split dimension
    for depth, char in enumerate(gid):
        row, col = SYMBOL_POSITION[char]
        lon_range, lat_range = _narrow(lon_range, lat_range, depth, row, col)
    return lon_range, lat_range


# ------------------------------------------------------------
# Codec
# ------------------------------------------------------------

def encode(longitude: float, latitude: float, level: int) -> str:
    """Convert a WGS84 coordinate into the GID of the cell containing it.

    At each depth the current range is split into ``d x d`` parts and the
    part holding the coordinate is selected with
    ``floor((value - min) / (max - min) * d)``.

    Args:
        longitude: Longitude in decimal degrees, ``[-180, 180]``.
        latitude: Latitude in decimal degrees, ``[-90, 90]``.
        level: Resolution level, ``[1, 15]``.  Equals the GID length.

    Returns:
        GID string of *level* symbols (e.g. ``"J3N2M763L7X3X2"``).

    Raises:
        InvalidCoordinate: If a coordinate is out of range or not finite.
        InvalidLevel: If *level* is outside ``[1, 15]``.
    """
    validate_coordinates(longitude, latitude)
    validate_level(level)

    lon_range = LON_RANGE
    lat_range = LAT_RANGE
    chars = []
    for depth in range(level):
        d = DIMENSIONS[depth]
        col = int(floor((longitude - lon_range[0]) / (lon_range[1] - lon_range[0]) * d))
        row = int(floor((latitude - lat_range[0]) / (lat_range[1] - lat_range[0]) * d))
        # points on a cell edge can land one part outside the narrowed range
        col = min(max(col, 0), d - 1)
        row = min(max(row, 0), d - 1)
        lon_range, lat_range = _narrow(lon_range, lat_range, depth, row, col)
        chars.append(symbol_at(row, col))
    return "".join(chars)


def decode(gid: str) -> Tuple[float, float]:
    """Return the ``(lon, lat)`` centre of the cell identified by *gid*.

    Raises:
        InvalidGID: If *gid* is not a valid grid path.
    """
    validate_gid(gid)
    lon_range, lat_range = _walk(gid)
    return (lon_range[0] + lon_range[1]) / 2, (lat_range[0] + lat_range[1]) / 2


def bounds(gid: str) -> BoundingBox:
    """Return the bounding box of the cell identified by *gid*.

    Raises:
        InvalidGID: If *gid* is not a valid grid path.
    """
    validate_gid(gid)
    lon_range, lat_range = _walk(gid)
    return BoundingBox(lon_range[0], lat_range[0], lon_range[1], lat_range[1])


# ------------------------------------------------------------
# Navigation
# ------------------------------------------------------------

def children(gid: str) -> List[str]:
    """Return the GIDs of the direct children of *gid*.

    A cell at depth ``len(gid)`` splits 5x5 (25 children) or 2x2 (4 children);
    children are listed in alphabet order, i.e. row-major from the south-west
    corner.

    Raises:
        InvalidGID: If *gid* is not a valid grid path.
        InvalidLevel: If *gid* is already at the finest level.
    """
    validate_gid(gid)
    if len(gid) >= MAX_LEVEL:
        raise InvalidLevel(f"GID {gid!r} is at level {MAX_LEVEL} and has no children")
    return [gid + c for c in alphabet_for(DIMENSIONS[len(gid)])]


def parent(gid: str) -> str:
    """Return the GID of the parent cell.

    A one-symbol GID is a top-level cell and is returned unchanged.

    Raises:
        InvalidGID: If *gid* is not a valid grid path.
    """
    validate_gid(gid)
    return gid[:-1] if len(gid) > 1 else gid
