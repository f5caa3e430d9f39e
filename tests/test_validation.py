import math

import pytest

from geosquare_grid.errors import (
    GeosquareError,
    InvalidCoordinate,
    InvalidGID,
    InvalidLevel,
    InvalidResolutionRange,
    UnsupportedSize,
)
from geosquare_grid.validation import (
    resolution_for_size,
    validate_coordinates,
    validate_gid,
    validate_level,
)


class TestCoordinates:
    def test_valid_edges(self):
        validate_coordinates(-180, -90)
        validate_coordinates(180, 90)
        validate_coordinates(0.0, 0.0)

    @pytest.mark.parametrize("lon", [-180.0001, 180.0001, 200])
    def test_longitude_out_of_range(self, lon):
        with pytest.raises(InvalidCoordinate, match="Longitude"):
            validate_coordinates(lon, 0)

    @pytest.mark.parametrize("lat", [-90.5, 90.5, 100])
    def test_latitude_out_of_range(self, lat):
        with pytest.raises(InvalidCoordinate, match="Latitude"):
            validate_coordinates(0, lat)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, value):
        with pytest.raises(InvalidCoordinate):
            validate_coordinates(value, 0)
        with pytest.raises(InvalidCoordinate):
            validate_coordinates(0, value)

    @pytest.mark.parametrize("value", ["10", None, True])
    def test_non_numeric(self, value):
        with pytest.raises(InvalidCoordinate):
            validate_coordinates(value, 0)  # type: ignore[arg-type]


class TestLevel:
    def test_valid_range(self):
        for level in range(1, 16):
            validate_level(level)

    @pytest.mark.parametrize("level", [0, 16, -1])
    def test_out_of_range(self, level):
        with pytest.raises(InvalidLevel):
            validate_level(level)

    @pytest.mark.parametrize("level", [5.0, "5", None, True])
    def test_not_an_int(self, level):
        with pytest.raises(InvalidLevel):
            validate_level(level)  # type: ignore[arg-type]


class TestGID:
    @pytest.mark.parametrize("gid", ["2", "Y", "J3", "J3P7V8Y247G3", "J3N2M763L7X3X2V"])
    def test_valid(self, gid):
        validate_gid(gid)

    @pytest.mark.parametrize("gid", ["", None, 12, b"J3"])
    def test_not_a_non_empty_string(self, gid):
        with pytest.raises(InvalidGID):
            validate_gid(gid)  # type: ignore[arg-type]

    def test_too_long(self):
        with pytest.raises(InvalidGID):
            validate_gid("J3N2M763L7X3X2V2")

    @pytest.mark.parametrize("gid", ["A", "j3", "J3P0", "J-"])
    def test_invalid_character(self, gid):
        with pytest.raises(InvalidGID):
            validate_gid(gid)

    def test_symbol_outside_2x2_alphabet(self):
        # depth 1 is a 2x2 split: only 2, 3, 7, 8 are positions there
        with pytest.raises(InvalidGID, match="position 1"):
            validate_gid("JY")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_gid("A")
        assert issubclass(InvalidGID, GeosquareError)


class TestResolutionForSize:
    def test_single_size(self):
        assert resolution_for_size(500) == (10, 10)

    def test_pair_larger_first(self):
        assert resolution_for_size((1000, 50)) == (9, 12)
        assert resolution_for_size([1000, 50]) == (9, 12)

    def test_pair_smaller_first_rejected(self):
        with pytest.raises(InvalidResolutionRange, match=r"Size must be in \[min, max\] format"):
            resolution_for_size((50, 1000))

    def test_equal_pair_rejected(self):
        with pytest.raises(InvalidResolutionRange):
            resolution_for_size((500, 500))

    def test_wrong_length(self):
        with pytest.raises(InvalidResolutionRange):
            resolution_for_size((1000,))

    def test_unsupported_size_in_pair(self):
        with pytest.raises(UnsupportedSize):
            resolution_for_size((1000, 7))

    def test_unsupported_single_size(self):
        with pytest.raises(UnsupportedSize):
            resolution_for_size(42)
