# -*- coding: utf-8 -*-
"""
CRS Helper Tests - Validity testing and conversion to longitude/latitude.

Tests CrsHelper with geographic (EPSG:4326, OGC:CRS84) and projected
(EPSG:3857) reference systems: lon/lat detection, domain validity,
pass-through and pyproj conversion, and failure on bad definitions.

Dependencies
------------
pytest
pyproj

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

from rasterindex.coords.crs import CRS_84, CrsHelper
from rasterindex.coords.position import HorizontalPosition, LonLatPosition
from rasterindex.exceptions import RasterIndexError, TransformError


# Half the circumference of the web-mercator sphere
_MERCATOR_HALF_WORLD = 20037508.342789244


@pytest.fixture
def mercator():
    return CrsHelper('EPSG:3857')


class TestConstruction:
    """Test CRS parsing and lon/lat detection."""

    @pytest.mark.parametrize("crs", ['OGC:CRS84', 'EPSG:4326', 4326])
    def test_lon_lat_systems(self, crs):
        assert CrsHelper(crs).is_lon_lat

    def test_constant(self):
        assert CRS_84.is_lon_lat

    def test_from_epsg(self):
        assert CrsHelper.from_epsg(4326).is_lon_lat
        assert not CrsHelper.from_epsg(3857).is_lon_lat

    def test_projected(self, mercator):
        assert not mercator.is_lon_lat
        assert '3857' in mercator.name

    def test_malformed_definition(self):
        with pytest.raises(TransformError, match="Cannot interpret"):
            CrsHelper('EPSG:999999999')

    def test_error_hierarchy(self):
        with pytest.raises(RasterIndexError):
            CrsHelper('not a crs at all')
        with pytest.raises(RuntimeError):
            CrsHelper('not a crs at all')


class TestValidity:
    """Test domain membership for geographic and projected systems."""

    def test_geographic_latitude_range(self):
        mask = CRS_84.valid_mask(
            [0.0, 0.0, 0.0, 0.0, 0.0],
            [90.0, -90.0, 90.0001, -90.0001, 45.0],
        )
        np.testing.assert_array_equal(mask, [True, True, False, False, True])

    def test_geographic_non_finite(self):
        mask = CRS_84.valid_mask([np.nan, 0.0, np.inf], [0.0, np.nan, 0.0])
        assert not mask.any()

    def test_scalar(self):
        assert CRS_84.is_point_valid_for_crs(LonLatPosition(10.0, 20.0))
        assert not CRS_84.is_point_valid_for_crs(LonLatPosition(10.0, 91.0))

    def test_projected_valid(self, mercator):
        mask = mercator.valid_mask([0.0, 1.0e6, -1.0e7], [0.0, 5.0e6, -1.0e7])
        assert mask.all()

    def test_projected_non_finite(self, mercator):
        mask = mercator.valid_mask([np.inf, 0.0], [0.0, np.nan])
        assert not mask.any()


class TestConversion:
    """Test conversion to and from WGS84 longitude/latitude."""

    def test_lon_lat_passthrough(self):
        xs = np.array([147.1848, -10.5])
        ys = np.array([-27.7, 60.25])
        lons, lats = CRS_84.crs_to_lonlat_array(xs, ys)
        np.testing.assert_array_equal(lons, xs)
        np.testing.assert_array_equal(lats, ys)

    def test_mercator_origin(self, mercator):
        lons, lats = mercator.crs_to_lonlat_array([0.0], [0.0])
        assert lons[0] == pytest.approx(0.0, abs=1e-9)
        assert lats[0] == pytest.approx(0.0, abs=1e-9)

    def test_mercator_edge(self, mercator):
        pos = mercator.crs_to_lonlat(
            HorizontalPosition(_MERCATOR_HALF_WORLD / 2.0, 0.0)
        )
        assert isinstance(pos, LonLatPosition)
        assert pos.lon == pytest.approx(90.0, abs=1e-6)
        assert pos.lat == pytest.approx(0.0, abs=1e-6)

    def test_round_trip(self, mercator):
        lons = np.array([-120.0, 0.5, 147.18])
        lats = np.array([-60.0, 0.0, 45.3])
        xs, ys = mercator.lonlat_to_crs_array(lons, lats)
        back_lons, back_lats = mercator.crs_to_lonlat_array(xs, ys)
        np.testing.assert_allclose(back_lons, lons, atol=1e-8)
        np.testing.assert_allclose(back_lats, lats, atol=1e-8)

    def test_repr(self, mercator):
        assert repr(mercator).startswith("CrsHelper(")


class TestValidLonLat:
    """Test combined validation and conversion."""

    def test_lon_lat_passthrough(self):
        mask, lons, lats = CRS_84.valid_lonlat([10.0, 20.0], [45.0, 95.0])
        np.testing.assert_array_equal(mask, [True, False])
        np.testing.assert_array_equal(lons, [10.0, 20.0])
        np.testing.assert_array_equal(lats, [45.0, 95.0])

    def test_matches_separate_calls(self, mercator):
        xs = np.array([0.0, 1.0e6, np.inf, -3.0e6])
        ys = np.array([0.0, 5.0e6, 0.0, 2.0e6])
        mask, lons, lats = mercator.valid_lonlat(xs, ys)
        np.testing.assert_array_equal(mask, mercator.valid_mask(xs, ys))
        exp_lons, exp_lats = mercator.crs_to_lonlat_array(xs[mask], ys[mask])
        np.testing.assert_allclose(lons[mask], exp_lons)
        np.testing.assert_allclose(lats[mask], exp_lats)

    def test_single_transformation(self, mercator, monkeypatch):
        calls = []
        convert = mercator.crs_to_lonlat_array

        def counting(xs, ys):
            calls.append(len(xs))
            return convert(xs, ys)

        monkeypatch.setattr(mercator, 'crs_to_lonlat_array', counting)
        mercator.valid_lonlat([0.0, 1.0e6], [0.0, 1.0e6])
        assert calls == [2]
