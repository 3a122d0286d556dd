# -*- coding: utf-8 -*-
"""
Horizontal Coordinate Systems - Longitude/latitude to source-grid indices.

Defines the abstract ``HorizontalCoordSys`` interface that maps a WGS84
longitude/latitude pair to the ``(i, j)`` indices of the nearest cell of a
source grid, and three concrete implementations:

- ``LatLonCoordSys``: separable 1D longitude and latitude axes. Each axis
  is resolved independently by direct index computation, so a rectangular
  longitude/latitude request needs one lookup per column and one per row
  rather than one per point (see ``rasterindex.pixel_map``).
- ``ProjectedCoordSys``: separable 1D axes in a projected reference system.
  Longitude/latitude is reprojected with pyproj before the axis lookups.
- ``CurvilinearCoordSys``: 2D longitude and latitude arrays (non-separable).
  Every lookup is a full-domain nearest-neighbour search through a
  ``scipy.spatial.cKDTree``.

Index conventions:

- ``i`` is the column (x / longitude) index, ``j`` the row (y / latitude)
  index. ``x_axis_size`` is the number of columns.
- A position outside the grid is a normal, frequent outcome: scalar
  lookups return ``None`` and array lookups return ``-1`` in both ``i``
  and ``j``. Nothing is raised for it.
- Equidistant candidates resolve to the lower index.

Dependencies
------------
numpy
scipy
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

# Standard library
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union

# Third-party
import numpy as np
import pyproj
from scipy.spatial import cKDTree

# rasterindex internal
from rasterindex.coords.axis import OneDCoordAxis
from rasterindex.coords.crs import CrsHelper
from rasterindex.exceptions import ValidationError
from rasterindex.vocabulary import AxisType

logger = logging.getLogger(__name__)


# Neighbours fetched per query so that equidistant cells can be compared
_TIE_CANDIDATES = 4

# Curvilinear distances this close to the nearest one are ties
_TIE_RTOL = 1e-9
_TIE_ATOL = 1e-12


def _normalize_longitude(lons: np.ndarray) -> np.ndarray:
    """Map longitudes in degrees into [-180, 180)."""
    return np.mod(lons + 180.0, 360.0) - 180.0


def _wrap_difference(d_lon: np.ndarray) -> np.ndarray:
    """Shortest signed longitude difference in degrees."""
    with np.errstate(invalid='ignore'):
        return np.mod(d_lon + 180.0, 360.0) - 180.0


class HorizontalCoordSys(ABC):
    """
    Abstract base class for source-grid coordinate systems.

    Subclasses implement ``_lonlat_to_grid_array`` which operates on 1D
    float64 arrays. The public methods handle scalar/array dispatch and
    make sure a miss on either axis is reported as a miss on both.

    Parameters
    ----------
    x_axis_size : int
        Number of columns in the source grid (the row width used to
        linearize ``(i, j)`` as ``j * x_axis_size + i``).
    y_axis_size : int
        Number of rows in the source grid.
    """

    def __init__(self, x_axis_size: int, y_axis_size: int) -> None:
        self.x_axis_size = int(x_axis_size)
        self.y_axis_size = int(y_axis_size)

    @property
    def source_width(self) -> int:
        """Alias of ``x_axis_size``."""
        return self.x_axis_size

    @abstractmethod
    def _lonlat_to_grid_array(
        self,
        lons: np.ndarray,
        lats: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Find nearest cell indices for longitude/latitude arrays.

        Parameters
        ----------
        lons : np.ndarray
            Longitudes in degrees East (1D, float64).
        lats : np.ndarray
            Latitudes in degrees North (1D, float64).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(i, j)`` int64 arrays; negative where the point is missed.
        """

    def lonlat_to_grid_array(
        self,
        lons: Any,
        lats: Any,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Find the nearest source cell for each longitude/latitude pair.

        Parameters
        ----------
        lons : array-like
            Longitudes in degrees East.
        lats : array-like
            Latitudes in degrees North (same length as ``lons``).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(i, j)`` int64 arrays. Both are ``-1`` where the point lies
            outside the source grid.

        Raises
        ------
        ValidationError
            If ``lons`` and ``lats`` differ in length.
        """
        lons = np.asarray(lons, dtype=np.float64).ravel()
        lats = np.asarray(lats, dtype=np.float64).ravel()
        if lons.shape != lats.shape:
            raise ValidationError(
                f"lons and lats must have the same length, got "
                f"{lons.size} and {lats.size}"
            )
        i, j = self._lonlat_to_grid_array(lons, lats)
        miss = (i < 0) | (j < 0)
        i = np.where(miss, -1, i).astype(np.int64)
        j = np.where(miss, -1, j).astype(np.int64)
        return i, j

    def lonlat_to_grid(self, lon: float, lat: float) -> Optional[Tuple[int, int]]:
        """
        Find the nearest source cell for a single position.

        Parameters
        ----------
        lon : float
            Longitude in degrees East.
        lat : float
            Latitude in degrees North.

        Returns
        -------
        Tuple[int, int] or None
            ``(i, j)`` of the nearest cell, or None when the position is
            outside the source grid.
        """
        i, j = self.lonlat_to_grid_array([lon], [lat])
        if i[0] < 0:
            return None
        return int(i[0]), int(j[0])

    @staticmethod
    def from_axes(
        x_axis: OneDCoordAxis,
        y_axis: OneDCoordAxis,
        crs: Optional[Union[str, int, pyproj.CRS, CrsHelper]] = None,
    ) -> 'HorizontalCoordSys':
        """Create the appropriate coordinate system for two 1D axes.

        Longitude/latitude axes (with no CRS, or a WGS84 geographic CRS)
        yield a ``LatLonCoordSys``; anything else a ``ProjectedCoordSys``.

        Raises
        ------
        ValidationError
            If the axes are not longitude/latitude and no CRS is given.
        """
        is_lonlat_axes = (x_axis.axis_type is AxisType.LONGITUDE
                          and y_axis.axis_type is AxisType.LATITUDE)
        if is_lonlat_axes:
            if crs is None:
                return LatLonCoordSys(x_axis, y_axis)
            helper = crs if isinstance(crs, CrsHelper) else CrsHelper(crs)
            if helper.is_lon_lat:
                return LatLonCoordSys(x_axis, y_axis)
            return ProjectedCoordSys(x_axis, y_axis, helper)
        if crs is None:
            raise ValidationError(
                "A CRS is required for axes that are not longitude/latitude"
            )
        return ProjectedCoordSys(x_axis, y_axis, crs)


class LatLonCoordSys(HorizontalCoordSys):
    """Separable longitude/latitude source grid.

    Parameters
    ----------
    lon_axis : OneDCoordAxis
        Longitude axis (``AxisType.LONGITUDE``), one value per column.
    lat_axis : OneDCoordAxis
        Latitude axis (``AxisType.LATITUDE``), one value per row.

    Raises
    ------
    ValidationError
        If the axes are not a longitude and a latitude axis.

    Examples
    --------
    >>> cs = LatLonCoordSys(
    ...     RegularAxis(-180.0, 1.0, 360, AxisType.LONGITUDE),
    ...     RegularAxis(-90.0, 1.0, 181, AxisType.LATITUDE),
    ... )
    >>> cs.lonlat_to_grid(10.2, 45.7)
    (190, 136)
    """

    def __init__(self, lon_axis: OneDCoordAxis, lat_axis: OneDCoordAxis) -> None:
        if lon_axis.axis_type is not AxisType.LONGITUDE:
            raise ValidationError(
                f"lon_axis must be a LONGITUDE axis, got {lon_axis.axis_type.name}"
            )
        if lat_axis.axis_type is not AxisType.LATITUDE:
            raise ValidationError(
                f"lat_axis must be a LATITUDE axis, got {lat_axis.axis_type.name}"
            )
        super().__init__(lon_axis.size, lat_axis.size)
        self.lon_axis = lon_axis
        self.lat_axis = lat_axis

    def get_lon_index(self, lon: float) -> int:
        """Column index nearest ``lon``, or -1."""
        return self.lon_axis.index_of(lon)

    def get_lat_index(self, lat: float) -> int:
        """Row index nearest ``lat``, or -1."""
        return self.lat_axis.index_of(lat)

    def get_lon_indices(self, lons: Any) -> np.ndarray:
        return self.lon_axis.indices_of(lons)

    def get_lat_indices(self, lats: Any) -> np.ndarray:
        return self.lat_axis.indices_of(lats)

    def _lonlat_to_grid_array(
        self,
        lons: np.ndarray,
        lats: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        return self.lon_axis.indices_of(lons), self.lat_axis.indices_of(lats)

    def __repr__(self) -> str:
        return f"LatLonCoordSys(lon={self.lon_axis!r}, lat={self.lat_axis!r})"


class ProjectedCoordSys(HorizontalCoordSys):
    """Separable grid whose 1D axes are in a projected reference system.

    Parameters
    ----------
    x_axis : OneDCoordAxis
        Easting axis, one value per column.
    y_axis : OneDCoordAxis
        Northing axis, one value per row.
    crs : str, int, pyproj.CRS, or CrsHelper
        Reference system of the axis values.

    Raises
    ------
    TransformError
        If the CRS cannot be interpreted.
    """

    def __init__(
        self,
        x_axis: OneDCoordAxis,
        y_axis: OneDCoordAxis,
        crs: Union[str, int, pyproj.CRS, CrsHelper],
    ) -> None:
        super().__init__(x_axis.size, y_axis.size)
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.crs_helper = crs if isinstance(crs, CrsHelper) else CrsHelper(crs)

    def _lonlat_to_grid_array(
        self,
        lons: np.ndarray,
        lats: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        xs, ys = self.crs_helper.lonlat_to_crs_array(lons, lats)
        return self.x_axis.indices_of(xs), self.y_axis.indices_of(ys)

    def __repr__(self) -> str:
        return (
            f"ProjectedCoordSys(crs={self.crs_helper.name!r}, "
            f"size={self.y_axis_size}x{self.x_axis_size})"
        )


class CurvilinearCoordSys(HorizontalCoordSys):
    """Non-separable grid described by 2D longitude and latitude arrays.

    Cells whose coordinates are NaN (e.g. masked land or swath gaps) are
    never matched. A position whose nearest cell is farther away than the
    largest spacing between neighbouring cells anywhere in the grid is
    outside the domain.

    Distances are measured in degrees of longitude and latitude, the same
    metric a separable grid uses, with longitude differences taken the
    short way round the globe. A curvilinear description of a rectangular
    grid therefore resolves every position, ties included, to the same
    cell as the equivalent ``LatLonCoordSys``.

    Parameters
    ----------
    lons : array-like
        Cell-centre longitudes, shape ``(ny, nx)``.
    lats : array-like
        Cell-centre latitudes, shape ``(ny, nx)``.

    Raises
    ------
    ValidationError
        If the arrays are not 2D, differ in shape, or hold no valid cell.
    """

    def __init__(self, lons: Any, lats: Any) -> None:
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        if lons.ndim != 2 or lons.shape != lats.shape:
            raise ValidationError(
                f"lons and lats must be 2D arrays of the same shape, got "
                f"{lons.shape} and {lats.shape}"
            )
        ny, nx = lons.shape
        super().__init__(nx, ny)

        with np.errstate(invalid='ignore'):
            valid = (np.isfinite(lons) & np.isfinite(lats)
                     & (lats >= -90.0) & (lats <= 90.0))
        if not valid.any():
            raise ValidationError("Coordinate arrays contain no valid cells")

        t0 = time.perf_counter()
        cell_index = np.flatnonzero(valid.ravel()).astype(np.int64)
        cell_lons = _normalize_longitude(lons.ravel()[cell_index])
        cell_lats = lats.ravel()[cell_index]

        # Copies one turn east and west make the planar search wrap
        self._cell_index = np.tile(cell_index, 3)
        self._tree = cKDTree(np.column_stack([
            np.concatenate([cell_lons, cell_lons - 360.0, cell_lons + 360.0]),
            np.tile(cell_lats, 3),
        ]))
        self._cell_count = cell_index.size
        self._max_distance = self._max_neighbour_distance(lons, lats, valid)
        logger.debug(
            "Built curvilinear search tree over %d cells in %.1f ms",
            self._cell_count, (time.perf_counter() - t0) * 1000.0,
        )

    @staticmethod
    def _max_neighbour_distance(
        lons: np.ndarray,
        lats: np.ndarray,
        valid: np.ndarray,
    ) -> float:
        """Largest lon/lat distance between horizontally or vertically adjacent cells."""
        lons = np.where(valid, lons, np.nan)
        lats = np.where(valid, lats, np.nan)
        spans = []
        for axis in (0, 1):
            if lons.shape[axis] > 1:
                d_lon = _wrap_difference(np.diff(lons, axis=axis))
                d_lat = np.diff(lats, axis=axis)
                spans.append(np.hypot(d_lon, d_lat).ravel())
        if not spans:
            return 0.0
        spans = np.concatenate(spans)
        spans = spans[np.isfinite(spans)]
        return float(spans.max()) if spans.size else 0.0

    def _lonlat_to_grid_array(
        self,
        lons: np.ndarray,
        lats: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        i = np.full(lons.shape, -1, dtype=np.int64)
        j = np.full(lons.shape, -1, dtype=np.int64)

        with np.errstate(invalid='ignore'):
            query = (np.isfinite(lons) & np.isfinite(lats)
                     & (lats >= -90.0) & (lats <= 90.0))
        if not query.any():
            return i, j

        k = min(_TIE_CANDIDATES, self._cell_index.size)
        dist, pos = self._tree.query(
            np.column_stack([_normalize_longitude(lons[query]), lats[query]]),
            k=k,
        )
        dist = np.asarray(dist).reshape(-1, k)
        pos = np.asarray(pos).reshape(-1, k)

        # Among equidistant nearest candidates keep the lowest linear index;
        # distances within rounding error of the nearest count as equal
        candidates = self._cell_index[pos]
        nearest = dist[:, :1]
        tied = dist <= nearest + _TIE_RTOL * nearest + _TIE_ATOL
        flat = np.where(tied, candidates, np.iinfo(np.int64).max).min(axis=1)
        inside = dist[:, 0] <= self._max_distance * (1.0 + _TIE_RTOL) + _TIE_ATOL

        hit = np.flatnonzero(query)[inside]
        i[hit] = flat[inside] % self.x_axis_size
        j[hit] = flat[inside] // self.x_axis_size
        return i, j

    def __repr__(self) -> str:
        return (
            f"CurvilinearCoordSys(size={self.y_axis_size}x{self.x_axis_size}, "
            f"cells={self._cell_count})"
        )
