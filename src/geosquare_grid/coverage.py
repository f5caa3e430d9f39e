"""coverage.py

Polygon coverage ("polyfill") over the geosquare grid.

The search walks the cell tree from a start cell and compares every visited
cell against the query geometry:

- no overlap: the branch is dropped
- fully covered: the cell is *approved*; it is emitted as soon as its level
  enters the requested range, and its descendants are emitted without any
  further geometry work if it is still too coarse
- partial overlap: the cell is split further, or, at the finest requested
  level, kept or dropped according to the ``fullcover`` policy

The walk uses an explicit stack instead of recursion.  Children are pushed in
reverse so results come out in the same depth-first order a recursive walk
would produce.

Usage::

    from geosquare_grid.coverage import polyfill

    gids = polyfill(polygon, 500)             # level 10 cells
    gids = polyfill(polygon, (1000, 50))      # mixed levels 9..12
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, List, Optional, Tuple

from shapely.geometry.base import BaseGeometry

from .alphabet import next_symbol
from .errors import InvalidResolutionRange, ResolutionBelowParent
from .geo import area_ratio, as_geometry, cell_polygon, intersect
from .grid_index import bounds, children
from .levels import MAX_LEVEL, MIN_LEVEL, ROOT_GID, level_for_size
from .validation import SizeArg, resolution_for_size, validate_gid

logger = logging.getLogger(__name__)


def _cell_geometry(gid: str) -> BaseGeometry:
    return cell_polygon(bounds(gid))


# ------------------------------------------------------------
# Coverage search
# ------------------------------------------------------------

def coverage(
    geometry: Any,
    resolution: Tuple[int, int],
    start: str = ROOT_GID,
    fullcover: bool = True,
) -> List[str]:
    """Return the GIDs of the cells covering *geometry* between two levels.

    Args:
        geometry: Query polygon (shapely geometry, GeoJSON mapping or
            pydantic Feature).
        resolution: ``(min_level, max_level)``.  Fully covered cells are
            emitted at the first level inside the range; partially covered
            cells only at *max_level*.
        start: GID to start the search from.  Any start other than the root
            symbol ``"2"`` first clips the geometry to that cell.
        fullcover: Keep every partially covered cell at *max_level* when
            True; keep only those more than half covered when False.

    Returns:
        GIDs in traversal order, without duplicates.  Empty when the
        geometry does not overlap the search area.

    Raises:
        InvalidResolutionRange: If the levels are out of order or outside 1-15.
        InvalidGID: If *start* is not a valid GID.
        ResolutionBelowParent: If *start* is finer than *max_level*.
    """
    min_level, max_level = resolution
    if not (MIN_LEVEL <= min_level <= max_level <= MAX_LEVEL):
        raise InvalidResolutionRange(
            f"Resolution must satisfy {MIN_LEVEL} <= min <= max <= {MAX_LEVEL}, got {resolution!r}"
        )
    validate_gid(start)
    if len(start) > max_level:
        raise ResolutionBelowParent(
            f"Start GID {start!r} is finer than the requested level {max_level}"
        )

    geom = as_geometry(geometry)
    if start != ROOT_GID:
        geom = intersect(geom, _cell_geometry(start))
        if geom is None:
            logger.debug("Query geometry does not overlap start cell %s", start)
            return []

    keys: List[str] = []
    stack: List[Tuple[str, bool]] = [(start, False)]
    visited = 0

    while stack:
        key, approved = stack.pop()
        visited += 1

        if approved:
            if min_level <= len(key) <= max_level:
                keys.append(key)
            else:
                stack.extend((child, True) for child in reversed(children(key)))
            continue

        ratio = area_ratio(_cell_geometry(key), geom)

        if ratio == 0:
            # top-level cells are scanned forward until one overlaps
            if len(key) == 1:
                nxt = next_symbol(key)
                if nxt is not None:
                    stack.append((nxt, False))
            continue

        if ratio == 1:
            stack.append((key, True))
        elif len(key) == max_level:
            if fullcover or ratio > 0.5:
                keys.append(key)
        else:
            stack.extend((child, False) for child in reversed(children(key)))

    logger.debug(
        "Coverage from %s at levels %d-%d visited %d cells, kept %d",
        start, min_level, max_level, visited, len(keys),
    )
    return keys


def polyfill(
    polygon: Any,
    size: SizeArg,
    start: str = ROOT_GID,
    fullcover: bool = True,
) -> List[str]:
    """Return the GIDs of the cells covering *polygon* at a given cell size.

    Args:
        polygon: Query polygon (shapely geometry, GeoJSON mapping or
            pydantic Feature).
        size: A supported cell size in meters, or a pair given **larger
            size first**, e.g. ``(1000, 50)``, for a mixed-level result.
        start: GID to start the search from.
        fullcover: See :func:`coverage`.

    Raises:
        UnsupportedSize: If a size is not one of the fifteen supported sizes.
        InvalidResolutionRange: If a size pair is not strictly descending.
    """
    return coverage(polygon, resolution_for_size(size), start=start, fullcover=fullcover)


# ------------------------------------------------------------
# Descendant expansion
# ------------------------------------------------------------

def all_children_at_level(
    gid: str,
    size: float,
    geometry: Optional[Any] = None,
) -> List[str]:
    """Return every descendant of *gid* at the level of *size*.

    Descendants are enumerated breadth-first.  With *geometry*, a descendant
    is kept only if it overlaps the geometry at all; unlike :func:`coverage`
    there is no area threshold.

    Args:
        gid: Parent GID.
        size: Target cell size in meters.
        geometry: Optional filter geometry.

    Returns:
        ``[gid]`` when *size* is the parent's own size, otherwise the
        descendants in breadth-first order.

    Raises:
        InvalidGID: If *gid* is not a valid GID.
        UnsupportedSize: If *size* is not a supported size.
        ResolutionBelowParent: If *size* is coarser than the parent cell.
    """
    validate_gid(gid)
    level = level_for_size(size)
    if level < len(gid):
        raise ResolutionBelowParent(
            f"Size {size} (level {level}) is coarser than GID {gid!r} (level {len(gid)})"
        )
    if level == len(gid):
        return [gid]

    geom = as_geometry(geometry) if geometry is not None else None

    keys: List[str] = []
    queue = deque([gid])
    while queue:
        key = queue.popleft()
        if len(key) == level:
            if geom is None or area_ratio(_cell_geometry(key), geom) > 0:
                keys.append(key)
        else:
            queue.extend(children(key))

    logger.debug("Expanded %s to %d cells at level %d", gid, len(keys), level)
    return keys
