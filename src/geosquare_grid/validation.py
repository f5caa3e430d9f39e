"""validation.py

Precondition checks for coordinates, levels, GIDs and size arguments.

Each check raises one of the exceptions in :mod:`geosquare_grid.errors` and
returns nothing (or the normalized value) on success.
"""

from __future__ import annotations

from math import isfinite
from numbers import Real
from typing import Sequence, Tuple, Union

from .alphabet import alphabet_for
from .errors import (
    InvalidCoordinate,
    InvalidGID,
    InvalidLevel,
    InvalidResolutionRange,
)
from .levels import MAX_LEVEL, MIN_LEVEL, dimension_at, level_for_size

SizeArg = Union[float, Sequence[float]]


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and isfinite(value)


def validate_longitude(longitude: float) -> None:
    if not _is_number(longitude) or longitude < -180 or longitude > 180:
        raise InvalidCoordinate("Longitude must be a number between -180 and 180.")


def validate_latitude(latitude: float) -> None:
    if not _is_number(latitude) or latitude < -90 or latitude > 90:
        raise InvalidCoordinate("Latitude must be a number between -90 and 90.")


def validate_coordinates(longitude: float, latitude: float) -> None:
    """Raise :class:`InvalidCoordinate` unless both values are finite and in WGS84 range."""
    validate_longitude(longitude)
    validate_latitude(latitude)


def validate_level(level: int) -> None:
    """Raise :class:`InvalidLevel` unless *level* is an int in ``[1, 15]``."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidLevel(f"Level must be an integer between {MIN_LEVEL} and {MAX_LEVEL}.")
    if level < MIN_LEVEL or level > MAX_LEVEL:
        raise InvalidLevel(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}")


def validate_gid(gid: str) -> None:
    """Check that *gid* is a path through the grid.

    A GID is 1-15 symbols long and every symbol must belong to the alphabet of
    the split at its depth: any of the 25 symbols where the split is 5x5, one
    of ``2 3 7 8`` where it is 2x2.

    Raises:
        InvalidGID: On a non-string, an empty or over-long string, or a
            symbol that is not valid at its depth.
    """
    if not isinstance(gid, str) or len(gid) < 1:
        raise InvalidGID("GID must be a non-empty string.")
    if len(gid) > MAX_LEVEL:
        raise InvalidGID(f"GID must be at most {MAX_LEVEL} characters long, got {len(gid)}.")
    for depth, char in enumerate(gid):
        if char not in alphabet_for(dimension_at(depth)):
            raise InvalidGID(f"Invalid character {char!r} at position {depth} of GID {gid!r}.")


def resolution_for_size(size: SizeArg) -> Tuple[int, int]:
    """Turn a size argument into a ``(min_level, max_level)`` pair.

    *size* is either a single supported size, which gives a fixed level, or a
    pair given **larger size first**, e.g. ``(1000, 50)`` for levels 9 to 12.
    An ascending or equal pair is rejected.

    Raises:
        InvalidResolutionRange: If a pair is not strictly descending or does
            not have exactly two entries.
        UnsupportedSize: If any size is not in the size table.
    """
    if isinstance(size, (list, tuple)):
        if len(size) != 2:
            raise InvalidResolutionRange("Size must be in [min, max] format")
        coarse, fine = size
        if coarse <= fine:
            raise InvalidResolutionRange("Size must be in [min, max] format")
        return level_for_size(coarse), level_for_size(fine)

    level = level_for_size(size)  # type: ignore[arg-type]
    return level, level
