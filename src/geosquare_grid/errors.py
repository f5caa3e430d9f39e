"""errors.py

Exceptions raised by the geosquare grid.

All of them derive from :class:`ValueError`, so code that already guards
input with ``except ValueError`` keeps working.
"""


class GeosquareError(ValueError):
    """Base class for every error raised on invalid grid input."""


class InvalidCoordinate(GeosquareError):
    """Longitude or latitude is not a finite number inside the WGS84 range."""


class InvalidLevel(GeosquareError):
    """Resolution level is not an integer between 1 and 15."""


class InvalidGID(GeosquareError):
    """GID is not a string of 1-15 valid grid symbols."""


class UnsupportedSize(GeosquareError):
    """Cell size is not one of the fifteen supported sizes."""


class InvalidResolutionRange(GeosquareError):
    """A size pair is not given as ``(larger_size, smaller_size)``."""


class ResolutionBelowParent(GeosquareError):
    """Requested level is coarser than the GID it should start from."""
