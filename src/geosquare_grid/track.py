"""track.py

Index GPX routes and tracks on the geosquare grid.

Every route and track point of a GPX file is encoded at the level of the
requested cell size; the resulting GIDs are deduplicated while keeping the
order in which the track first enters each cell.

Usage::

    from geosquare_grid.track import gpx_to_gids, gpx_to_cells

    gids = gpx_to_gids("track.gpx", size=100)
    fc = gpx_to_cells("track.gpx", size=100)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import gpxpy

from .cell import cells_to_feature_collection
from .geo import extract_gpx_points
from .grid_index import encode
from .levels import level_for_size
from .models import FeatureCollection

logger = logging.getLogger(__name__)


def _read_points(gpx_path: str) -> List[Tuple[float, float]]:
    with open(gpx_path, "r", encoding="utf-8") as f:
        gpx = gpxpy.parse(f)
    return extract_gpx_points(gpx)


def points_to_gids(points: Iterable[Tuple[float, float]], size: float) -> List[str]:
    """Encode ``(lon, lat)`` points at the level of *size*, unique, first-seen order.

    Raises:
        UnsupportedSize: If *size* is not a supported size.
        InvalidCoordinate: If a point is outside the WGS84 range.
    """
    level = level_for_size(size)
    seen: set[str] = set()
    gids: List[str] = []
    for lon, lat in points:
        gid = encode(lon, lat, level)
        if gid in seen:
            continue
        seen.add(gid)
        gids.append(gid)
    return gids


def gpx_to_gids(gpx_path: str, size: float) -> List[str]:
    """Return the cells a GPX file's routes and tracks pass through.

    Args:
        gpx_path: Path to a GPX file.
        size: Cell size in meters (one of the supported sizes).

    Returns:
        Unique GIDs in track order; empty when the file has no points.
    """
    points = _read_points(gpx_path)
    gids = points_to_gids(points, size)
    logger.debug("%s: %d points in %d cells", gpx_path, len(points), len(gids))
    return gids


def gpx_files_to_gids(gpx_paths: List[str], size: float) -> List[str]:
    """Like :func:`gpx_to_gids` over several files, deduplicated across files."""
    all_points: List[Tuple[float, float]] = []
    for gpx_path in gpx_paths:
        all_points.extend(_read_points(gpx_path))
    return points_to_gids(all_points, size)


def gpx_to_cells(gpx_path: str, size: float) -> FeatureCollection:
    """Return the cells of :func:`gpx_to_gids` as a GeoJSON FeatureCollection."""
    return cells_to_feature_collection(gpx_to_gids(gpx_path, size))
