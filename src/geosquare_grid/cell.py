"""cell.py

Views of a single grid cell.

A cell is known either from a coordinate and a level, from its GID, or from
both.  Instead of one object that fills in missing fields as they are asked
for, the three cases are separate immutable values and every derived
property is computed by a plain function::

    cell = from_lonlat(106.837, -6.217, 14)
    cell_gid(cell)            # "J3N2M763L7X3X2"
    cell_bounds(cell)         # BoundingBox(...)
    cell_feature(cell)        # GeoJSON Feature
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from shapely.geometry import Polygon

from .geo import cell_polygon as _box_polygon
from .grid_index import BoundingBox, bounds, decode, encode
from .levels import size_for_level
from .models import CellProperties, Feature, FeatureCollection, PolygonGeometry
from .validation import validate_coordinates, validate_gid, validate_level


@dataclass(frozen=True)
class FromCoordinate:
    """A cell selected by a coordinate it contains."""
    lon: float
    lat: float
    level: int


@dataclass(frozen=True)
class FromGID:
    """A cell selected by its GID."""
    gid: str


@dataclass(frozen=True)
class Resolved:
    """A cell whose GID and a representative coordinate are both known.

    For a cell built from a coordinate, ``lon``/``lat`` is that coordinate;
    for one built from a GID it is the cell centre.
    """
    gid: str
    lon: float
    lat: float
    level: int


GridCell = Union[FromCoordinate, FromGID, Resolved]


# ------------------------------------------------------------
# Constructors
# ------------------------------------------------------------

def from_lonlat(lon: float, lat: float, level: int) -> FromCoordinate:
    """Validated :class:`FromCoordinate`."""
    validate_coordinates(lon, lat)
    validate_level(level)
    return FromCoordinate(lon, lat, level)


def from_gid(gid: str) -> FromGID:
    """Validated :class:`FromGID`."""
    validate_gid(gid)
    return FromGID(gid)


# ------------------------------------------------------------
# Derivations
# ------------------------------------------------------------

def resolve(cell: GridCell) -> Resolved:
    """Fill in whatever *cell* does not carry yet."""
    if isinstance(cell, Resolved):
        return cell
    if isinstance(cell, FromCoordinate):
        return Resolved(encode(cell.lon, cell.lat, cell.level), cell.lon, cell.lat, cell.level)
    if isinstance(cell, FromGID):
        lon, lat = decode(cell.gid)
        return Resolved(cell.gid, lon, lat, len(cell.gid))
    raise TypeError(f"Not a grid cell: {cell!r}")


def cell_gid(cell: GridCell) -> str:
    """GID of the cell, encoding its coordinate if needed."""
    if isinstance(cell, (FromGID, Resolved)):
        return cell.gid
    return resolve(cell).gid


def cell_lonlat(cell: GridCell) -> Tuple[float, float]:
    """Coordinate the cell carries; the centre for a cell built from a GID."""
    if isinstance(cell, (FromCoordinate, Resolved)):
        return cell.lon, cell.lat
    r = resolve(cell)
    return r.lon, r.lat


def cell_level(cell: GridCell) -> int:
    """Resolution level, i.e. the GID length."""
    if isinstance(cell, FromGID):
        return len(cell.gid)
    return cell.level


def cell_bounds(cell: GridCell) -> BoundingBox:
    """Bounding box of the cell."""
    return bounds(cell_gid(cell))


def cell_polygon(cell: GridCell) -> Polygon:
    """Shapely polygon of the cell rectangle."""
    return _box_polygon(cell_bounds(cell))


def cell_feature(cell: GridCell) -> Feature:
    """GeoJSON Feature for the cell, with the GID as feature id.

    ``properties.center`` is always the cell centre, whatever coordinate the
    cell was built from.
    """
    gid = cell_gid(cell)
    box = bounds(gid)
    min_lon, min_lat, max_lon, max_lat = box
    ring = [
        [min_lon, min_lat],
        [min_lon, max_lat],
        [max_lon, max_lat],
        [max_lon, min_lat],
        [min_lon, min_lat],
    ]
    center_lon, center_lat = decode(gid)
    return Feature(
        id=gid,
        bbox=list(box),
        geometry=PolygonGeometry(coordinates=[ring]),
        properties=CellProperties(
            gid=gid,
            level=len(gid),
            size_m=size_for_level(len(gid)),
            center=[center_lon, center_lat],
        ),
    )


def cells_to_feature_collection(gids: Iterable[str]) -> FeatureCollection:
    """Bundle many cells, in the given order, into one FeatureCollection."""
    return FeatureCollection(features=[cell_feature(from_gid(g)) for g in gids])
