# conftest.py
import pytest
from shapely.geometry import Polygon

from geosquare_grid.grid_index import bounds

SAMPLE_GID = "J3P7V8Y247G3"

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="geosquare-tests" xmlns="http://www.topografix.com/GPX/1/1">
{body}
</gpx>
"""


def _box_polygon(gid: str) -> Polygon:
    min_lon, min_lat, max_lon, max_lat = bounds(gid)
    return Polygon([
        (min_lon, min_lat),
        (min_lon, max_lat),
        (max_lon, max_lat),
        (max_lon, min_lat),
        (min_lon, min_lat),
    ])


@pytest.fixture
def sample_gid() -> str:
    return SAMPLE_GID


@pytest.fixture
def sample_polygon() -> Polygon:
    return _box_polygon(SAMPLE_GID)


@pytest.fixture
def write_gpx(tmp_path):
    """Write a GPX file from raw <trk>/<rte> markup and return its path."""
    counter = {"n": 0}

    def _write(body: str) -> str:
        counter["n"] += 1
        p = tmp_path / f"track{counter['n']}.gpx"
        p.write_text(GPX_TEMPLATE.format(body=body), encoding="utf-8")
        return str(p)

    return _write
