# -*- coding: utf-8 -*-
"""
Coordinate Axis Tests - Nearest-index lookup along 1D source axes.

Tests RegularAxis and RectilinearAxis: nearest-index selection, half-way
ties toward the lower index, coverage edges, longitude wrapping, descending
axes, and axis construction/validation.

Dependencies
------------
pytest

Author
------
Duane Smalley, PhD

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import numpy as np
import pytest

from rasterindex.coords.axis import (
    RectilinearAxis,
    RegularAxis,
    create_axis,
)
from rasterindex.exceptions import ValidationError
from rasterindex.vocabulary import AxisType


# ---------------------------------------------------------------------------
# RegularAxis
# ---------------------------------------------------------------------------

class TestRegularAxis:
    """Test direct index computation on evenly spaced axes."""

    @pytest.fixture
    def axis(self):
        return RegularAxis(0.0, 1.0, 10, AxisType.GEO_X)

    def test_exact_values(self, axis):
        for k in range(10):
            assert axis.index_of(float(k)) == k

    def test_nearest(self, axis):
        assert axis.index_of(2.49) == 2
        assert axis.index_of(2.51) == 3

    def test_tie_goes_to_lower_index(self, axis):
        assert axis.index_of(2.5) == 2
        assert axis.index_of(0.5) == 0

    def test_edges(self, axis):
        assert axis.index_of(-0.49) == 0
        assert axis.index_of(-0.5) == -1
        assert axis.index_of(9.5) == 9
        assert axis.index_of(9.51) == -1

    def test_non_finite_is_miss(self, axis):
        idx = axis.indices_of([np.nan, np.inf, -np.inf, 3.0])
        np.testing.assert_array_equal(idx, [-1, -1, -1, 3])

    def test_indices_dtype(self, axis):
        idx = axis.indices_of(np.array([0.2, 4.7]))
        assert idx.dtype == np.int64
        np.testing.assert_array_equal(idx, [0, 5])

    def test_negative_stride(self):
        lat = RegularAxis(90.0, -1.0, 181, AxisType.LATITUDE)
        assert lat.index_of(90.0) == 0
        assert lat.index_of(89.5) == 0
        assert lat.index_of(-90.0) == 180
        assert lat.index_of(0.2) == 90

    def test_coordinate_values(self, axis):
        np.testing.assert_allclose(axis.coordinate_values(), np.arange(10.0))
        assert len(axis) == 10

    @pytest.mark.parametrize("stride", [0.0, np.nan, np.inf])
    def test_bad_stride(self, stride):
        with pytest.raises(ValidationError, match="stride"):
            RegularAxis(0.0, stride, 10, AxisType.GEO_X)

    def test_bad_size(self):
        with pytest.raises(ValidationError, match="size"):
            RegularAxis(0.0, 1.0, 0, AxisType.GEO_X)

    def test_bad_axis_type(self):
        with pytest.raises(TypeError, match="AxisType"):
            RegularAxis(0.0, 1.0, 10, 'longitude')


# ---------------------------------------------------------------------------
# Longitude wrapping
# ---------------------------------------------------------------------------

class TestLongitudeWrapping:
    """Test that longitude axes accept values shifted by whole turns."""

    def test_global_axis(self):
        lon = RegularAxis(0.0, 1.0, 360, AxisType.LONGITUDE)
        assert lon.index_of(-1.0) == 359
        assert lon.index_of(359.4) == 359
        assert lon.index_of(359.6) == 0
        assert lon.index_of(720.2) == 0

    def test_regional_axis(self):
        lon = RegularAxis(141.84, (152.32 - 141.84) / 4612, 4613,
                          AxisType.LONGITUDE)
        value = 141.84 + 0.51 * (152.32 - 141.84)
        assert lon.index_of(value) == 2352
        assert lon.index_of(value - 360.0) == 2352
        assert lon.index_of(value + 720.0) == 2352
        assert lon.index_of(0.0) == -1

    def test_non_longitude_does_not_wrap(self):
        x = RegularAxis(0.0, 1.0, 360, AxisType.GEO_X)
        assert x.index_of(-1.0) == -1
        assert x.index_of(360.0) == -1

    def test_rectilinear_longitude(self):
        lon = RectilinearAxis([10.0, 11.0, 13.0], AxisType.LONGITUDE)
        assert lon.index_of(371.0) == 1
        assert lon.index_of(-347.0) == 2


# ---------------------------------------------------------------------------
# RectilinearAxis
# ---------------------------------------------------------------------------

class TestRectilinearAxis:
    """Test binary-search lookup on irregular axes."""

    @pytest.fixture
    def ascending(self):
        return RectilinearAxis([0.0, 1.0, 3.0, 7.0], AxisType.GEO_Y)

    @pytest.fixture
    def descending(self):
        return RectilinearAxis([7.0, 3.0, 1.0, 0.0], AxisType.GEO_Y)

    def test_exact_values(self, ascending, descending):
        for k, v in enumerate([0.0, 1.0, 3.0, 7.0]):
            assert ascending.index_of(v) == k
        for k, v in enumerate([7.0, 3.0, 1.0, 0.0]):
            assert descending.index_of(v) == k

    def test_nearest(self, ascending):
        assert ascending.index_of(2.1) == 2
        assert ascending.index_of(4.9) == 2
        assert ascending.index_of(5.1) == 3

    def test_tie_goes_to_lower_index(self, ascending, descending):
        assert ascending.index_of(2.0) == 1
        assert ascending.index_of(5.0) == 2
        # Between 3.0 (index 1) and 1.0 (index 2)
        assert descending.index_of(2.0) == 1
        # Between 7.0 (index 0) and 3.0 (index 1)
        assert descending.index_of(5.0) == 0

    def test_edges(self, ascending, descending):
        assert ascending.index_of(-0.5) == 0
        assert ascending.index_of(-0.6) == -1
        assert ascending.index_of(9.0) == 3
        assert ascending.index_of(9.1) == -1
        assert descending.index_of(9.0) == 0
        assert descending.index_of(-0.6) == -1

    def test_non_finite_is_miss(self, ascending):
        idx = ascending.indices_of([np.nan, np.inf, 1.0])
        np.testing.assert_array_equal(idx, [-1, -1, 1])

    def test_single_value(self):
        axis = RectilinearAxis([5.0], AxisType.GEO_X)
        assert axis.index_of(5.0) == 0
        assert axis.index_of(5.1) == -1

    def test_values_are_copied(self):
        values = np.array([0.0, 1.0, 2.0])
        axis = RectilinearAxis(values, AxisType.GEO_X)
        values[0] = 100.0
        assert axis.coordinate_values()[0] == 0.0
        assert values.flags.writeable

    def test_matches_regular_axis(self):
        regular = RegularAxis(-44.2, 0.37, 93, AxisType.LATITUDE)
        rect = RectilinearAxis(regular.coordinate_values(), AxisType.LATITUDE)
        rng = np.random.default_rng(42)
        values = rng.uniform(-44.0, -10.4, 1000)
        np.testing.assert_array_equal(
            regular.indices_of(values), rect.indices_of(values)
        )

    @pytest.mark.parametrize("values", [
        [0.0, 1.0, 1.0, 2.0],
        [0.0, 2.0, 1.0],
        [0.0, np.nan, 2.0],
        [],
    ])
    def test_invalid_values(self, values):
        with pytest.raises(ValidationError):
            RectilinearAxis(values, AxisType.GEO_X)

    def test_not_1d(self):
        with pytest.raises(ValidationError, match="1D"):
            RectilinearAxis([[0.0, 1.0], [2.0, 3.0]], AxisType.GEO_X)


# ---------------------------------------------------------------------------
# create_axis
# ---------------------------------------------------------------------------

class TestCreateAxis:
    """Test selection between regular and rectilinear axes."""

    def test_regular_values(self):
        axis = create_axis(np.linspace(141.84, 152.32, 4613), AxisType.LONGITUDE)
        assert isinstance(axis, RegularAxis)
        assert axis.size == 4613
        assert axis.stride == pytest.approx((152.32 - 141.84) / 4612)

    def test_descending_regular_values(self):
        axis = create_axis([3.0, 2.0, 1.0, 0.0], AxisType.LATITUDE)
        assert isinstance(axis, RegularAxis)
        assert axis.stride == -1.0

    def test_irregular_values(self):
        axis = create_axis([0.0, 1.0, 3.0, 7.0], AxisType.GEO_X)
        assert isinstance(axis, RectilinearAxis)

    def test_single_value(self):
        axis = create_axis([4.0], AxisType.GEO_X)
        assert isinstance(axis, RectilinearAxis)
        assert axis.index_of(4.0) == 0
