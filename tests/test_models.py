# test_models.py
import json

import pytest
from pydantic import ValidationError

from geosquare_grid.cell import cell_feature, cells_to_feature_collection, from_gid
from geosquare_grid.grid_index import children
from geosquare_grid.models import (
    CellProperties,
    Feature,
    FeatureCollection,
    PolygonGeometry,
)

RING = [[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0], [0.0, 0.0]]


def _props(**kw):
    data = dict(gid="J", level=1, size_m=10000000, center=[0.5, 0.5])
    data.update(kw)
    return CellProperties(**data)


def test_polygon_defaults():
    geom = PolygonGeometry(coordinates=[RING])
    assert geom.type == "Polygon"
    assert geom.coordinates == [RING]


def test_open_ring_rejected():
    with pytest.raises(ValidationError):
        PolygonGeometry(coordinates=[RING[:-1] + [[2.0, 2.0]]])


def test_short_ring_rejected():
    with pytest.raises(ValidationError):
        PolygonGeometry(coordinates=[[[0.0, 0.0], [1.0, 1.0], [0.0, 0.0]]])


def test_3d_position_rejected():
    ring = [p + [5.0] for p in RING]
    with pytest.raises(ValidationError):
        PolygonGeometry(coordinates=[ring])


def test_empty_polygon_rejected():
    with pytest.raises(ValidationError):
        PolygonGeometry(coordinates=[])


def test_level_bounds():
    with pytest.raises(ValidationError):
        _props(level=0)
    with pytest.raises(ValidationError):
        _props(level=16)
    assert _props(level=15).level == 15


def test_center_must_be_2d():
    with pytest.raises(ValidationError):
        _props(center=[1.0])


def test_schema_version_default():
    assert _props().schema_version == "1.0"


def test_extra_fields_forbidden():
    with pytest.raises(ValidationError):
        PolygonGeometry(coordinates=[RING], extra_field=1)  # type: ignore[call-arg]

    with pytest.raises(ValidationError):
        _props(unexpected="nope")

    with pytest.raises(ValidationError):
        Feature(
            id="J",
            geometry=PolygonGeometry(coordinates=[RING]),
            properties=_props(),
            bogus=True,  # type: ignore[call-arg]
        )


def test_featurecollection_round_trip(sample_gid):
    fc = cells_to_feature_collection(children(sample_gid))
    fc2 = FeatureCollection.model_validate(fc.model_dump())
    assert fc2.gids() == fc.gids()


def test_model_dump_json_and_validate(sample_gid):
    fc = cells_to_feature_collection([sample_gid])
    json_str = fc.model_dump_json(indent=2)
    assert '"FeatureCollection"' in json_str
    fc2 = FeatureCollection.model_validate_json(json_str)
    assert fc2.features[0].id == sample_gid


def test_file_io_roundtrip(tmp_path, sample_gid):
    fc = cells_to_feature_collection(children(sample_gid))
    p = tmp_path / "cells.geojson"
    p.write_text(fc.model_dump_json(indent=2), encoding="utf-8")
    fc2 = FeatureCollection.model_validate_json(p.read_text(encoding="utf-8"))
    assert fc2.gids() == fc.gids()


def test_by_level():
    fc = cells_to_feature_collection(["J", "J3", "J7", "J3P"])
    assert [f.id for f in fc.by_level(2)] == ["J3", "J7"]
    assert [f.id for f in fc.by_level(3)] == ["J3P"]
    assert fc.by_level(4) == []


def test_parse_from_minimal_json_string():
    json_str = json.dumps({
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "J",
                "geometry": {"type": "Polygon", "coordinates": [RING]},
                "properties": {
                    "schema_version": "1.0",
                    "gid": "J",
                    "level": 1,
                    "size_m": 10000000,
                    "center": [0.5, 0.5],
                },
            }
        ],
    })
    fc = FeatureCollection.model_validate_json(json_str)
    assert fc.type == "FeatureCollection"
    assert fc.features[0].properties.gid == "J"
    assert fc.features[0].bbox is None


def test_feature_serialises_bbox(sample_gid):
    data = json.loads(cell_feature(from_gid(sample_gid)).model_dump_json())
    assert len(data["bbox"]) == 4
    assert data["geometry"]["type"] == "Polygon"
