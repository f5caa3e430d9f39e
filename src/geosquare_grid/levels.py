"""levels.py

Fixed protocol constants of the geosquare grid: the per-depth split
dimensions, the padded working range the codec bisects, and the table that
maps a nominal cell size in meters to a resolution level.

None of these values are tunable.  The padded range is chosen so that the
alternating 5/2 split divides it evenly over fifteen levels, and changing any
digit of it changes every GID ever produced.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .errors import InvalidLevel, UnsupportedSize

# ------------------------------------------------------------
# Hierarchy shape
# ------------------------------------------------------------

MIN_LEVEL = 1
MAX_LEVEL = 15

# split dimension at each depth (0-indexed)
DIMENSIONS: Tuple[int, ...] = (5, 2, 5, 2, 5, 2, 5, 2, 5, 2, 5, 2, 5, 2, 5)

# GID of the root cell a coverage search starts from
ROOT_GID = "2"

# ------------------------------------------------------------
# Padded working range (degrees)
# ------------------------------------------------------------

LON_RANGE: Tuple[float, float] = (-217.0, 232.157642055036)
LAT_RANGE: Tuple[float, float] = (-216.0, 233.157642055036)

# ------------------------------------------------------------
# Size (meters) -> level
# ------------------------------------------------------------

SIZE_LEVEL: Dict[int, int] = {
    10000000: 1,
    5000000: 2,
    1000000: 3,
    500000: 4,
    100000: 5,
    50000: 6,
    10000: 7,
    5000: 8,
    1000: 9,
    500: 10,
    100: 11,
    50: 12,
    10: 13,
    5: 14,
    1: 15,
}

LEVEL_SIZE: Dict[int, int] = {level: size for size, level in SIZE_LEVEL.items()}


def dimension_at(depth: int) -> int:
    """Split dimension (5 or 2) of a cell at *depth*, i.e. of a GID with *depth* symbols."""
    return DIMENSIONS[depth]


def _supported_sizes() -> str:
    return ", ".join(str(s) for s in SIZE_LEVEL)


def level_for_size(size: float) -> int:
    """Return the resolution level for a nominal cell size.

    Only the fifteen sizes in :data:`SIZE_LEVEL` are accepted; there is no
    rounding to the nearest size.

    Args:
        size: Nominal cell size in meters (e.g. ``500``).

    Returns:
        Level between 1 and 15.

    Raises:
        UnsupportedSize: If *size* is not in the table.
    """
    if isinstance(size, bool):
        raise UnsupportedSize(f"Size must be one of: {_supported_sizes()}")
    try:
        return SIZE_LEVEL[size]  # type: ignore[index]
    except (KeyError, TypeError):
        raise UnsupportedSize(f"Size must be one of: {_supported_sizes()}") from None


def size_for_level(level: int) -> int:
    """Inverse of :func:`level_for_size`."""
    try:
        return LEVEL_SIZE[level]
    except KeyError:
        raise InvalidLevel(
            f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}"
        ) from None
