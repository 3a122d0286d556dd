# -*- coding: utf-8 -*-
"""
CRS Helper - Validity testing and longitude/latitude conversion for a CRS.

Wraps a ``pyproj.CRS`` with the two capabilities a target enumeration
needs before its positions can be matched against a source grid:

1. Deciding whether a point is inside the physically meaningful domain of
   its reference system (e.g. latitude beyond a pole, or a projected point
   that the projection cannot invert).
2. Converting points to WGS84 longitude/latitude.

Coordinate flow:

    native CRS (x, y)  --pyproj-->  WGS84 (lon, lat)

When the native CRS is already WGS84 geographic the pyproj step is skipped
entirely and coordinates are passed through unchanged.

Dependencies
------------
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
from typing import Any, Tuple, Union

# Third-party
import numpy as np
import pyproj
from pyproj.exceptions import CRSError, ProjError

# rasterindex internal
from rasterindex.coords.position import HorizontalPosition, LonLatPosition
from rasterindex.exceptions import TransformError


_WGS84_LONLAT = pyproj.CRS.from_user_input('OGC:CRS84')


def _transform(
    transformer: pyproj.Transformer,
    xs: np.ndarray,
    ys: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Run a transformer over coordinate arrays.

    Points the projection cannot handle come back as ``inf`` rather than
    raising; only a failure of the transformation as a whole raises.
    """
    try:
        out_x, out_y = transformer.transform(xs, ys, errcheck=False)
    except ProjError as exc:
        raise TransformError(f"Coordinate transformation failed: {exc}") from exc
    return (np.asarray(out_x, dtype=np.float64),
            np.asarray(out_y, dtype=np.float64))


class CrsHelper:
    """Reference-system wrapper used by target point lists.

    Parameters
    ----------
    crs : str, int, or pyproj.CRS
        Any input accepted by ``pyproj.CRS.from_user_input`` (e.g.
        ``'EPSG:4326'``, ``'OGC:CRS84'``, ``3857`` or a WKT/PROJ string).

    Attributes
    ----------
    crs : pyproj.CRS
        The parsed reference system.
    is_lon_lat : bool
        True when the system is WGS84 longitude/latitude (in either axis
        order). Coordinates are always handled in ``(x=lon, y=lat)`` order.

    Raises
    ------
    TransformError
        If the definition cannot be parsed or no transformation to WGS84
        can be built for it.

    Examples
    --------
    >>> helper = CrsHelper('EPSG:3857')
    >>> lon, lat = helper.crs_to_lonlat_array(
    ...     np.array([0.0, 1.0e6]), np.array([0.0, 1.0e6]))
    """

    def __init__(self, crs: Union[str, int, pyproj.CRS]) -> None:
        try:
            self.crs = pyproj.CRS.from_user_input(crs)
        except CRSError as exc:
            raise TransformError(
                f"Cannot interpret reference system {crs!r}: {exc}"
            ) from exc

        self.is_lon_lat = bool(
            self.crs.is_geographic
            and (self.crs.to_epsg() == 4326
                 or self.crs.equals(_WGS84_LONLAT, ignore_axis_order=True))
        )

        # Build pyproj Transformers once (only needed for non-WGS84 systems)
        self._to_lonlat = None
        self._from_lonlat = None
        if not self.is_lon_lat:
            try:
                self._to_lonlat = pyproj.Transformer.from_crs(
                    self.crs, _WGS84_LONLAT, always_xy=True
                )
                self._from_lonlat = pyproj.Transformer.from_crs(
                    _WGS84_LONLAT, self.crs, always_xy=True
                )
            except (CRSError, ProjError) as exc:
                raise TransformError(
                    f"Cannot build a transformation from {self.name} to "
                    f"WGS84: {exc}"
                ) from exc

    @classmethod
    def from_epsg(cls, code: int) -> 'CrsHelper':
        """Create a helper from an EPSG code."""
        return cls(f"EPSG:{int(code)}")

    @property
    def name(self) -> str:
        """Short identifier of the reference system (e.g. ``'EPSG:3857'``)."""
        return self.crs.to_string()

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------

    def valid_mask(self, xs: Any, ys: Any) -> np.ndarray:
        """Test which points lie in the valid domain of this CRS.

        Geographic systems accept finite points with latitude in
        [-90, 90] (the poles themselves are valid). Projected systems
        accept finite points whose conversion to longitude/latitude is
        finite and lands in the same latitude range, which rejects
        projection singularities and points beyond the projection's
        invertible domain.

        Parameters
        ----------
        xs, ys : array-like
            Native coordinates (1D, same length).

        Returns
        -------
        np.ndarray
            Boolean mask, True where the point is valid.
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if self.crs.is_geographic:
            with np.errstate(invalid='ignore'):
                return (np.isfinite(xs) & np.isfinite(ys)
                        & (ys >= -90.0) & (ys <= 90.0))
        return self.valid_lonlat(xs, ys)[0]

    def valid_lonlat(
        self,
        xs: Any,
        ys: Any,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Validate and convert points with a single transformation.

        Combines :meth:`valid_mask` and :meth:`crs_to_lonlat_array` for
        callers that need both, so projected points go through the
        projection engine once.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            ``(mask, lons, lats)``. Converted values are only meaningful
            where ``mask`` is True.

        Raises
        ------
        TransformError
            If the projection engine fails outright.
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        lons, lats = self.crs_to_lonlat_array(xs, ys)
        with np.errstate(invalid='ignore'):
            mask = np.isfinite(xs) & np.isfinite(ys)
            if self.crs.is_geographic:
                mask &= (ys >= -90.0) & (ys <= 90.0)
            else:
                mask &= (np.isfinite(lons) & np.isfinite(lats)
                         & (lats >= -90.0) & (lats <= 90.0))
        return mask, lons, lats

    def is_point_valid_for_crs(self, position: HorizontalPosition) -> bool:
        """Scalar form of :meth:`valid_mask`."""
        mask = self.valid_mask([position.x], [position.y])
        return bool(mask[0])

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def crs_to_lonlat_array(
        self,
        xs: Any,
        ys: Any,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Convert native coordinate arrays to WGS84 longitude/latitude.

        Callers are expected to have filtered points through
        :meth:`valid_mask` first; invalid points may convert to ``inf``.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(lons, lats)`` in degrees.

        Raises
        ------
        TransformError
            If the projection engine fails outright.
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if self.is_lon_lat:
            return xs, ys
        return _transform(self._to_lonlat, xs, ys)

    def lonlat_to_crs_array(
        self,
        lons: Any,
        lats: Any,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Convert WGS84 longitude/latitude arrays to native coordinates."""
        lons = np.asarray(lons, dtype=np.float64)
        lats = np.asarray(lats, dtype=np.float64)
        if self.is_lon_lat:
            return lons, lats
        return _transform(self._from_lonlat, lons, lats)

    def crs_to_lonlat(self, position: HorizontalPosition) -> LonLatPosition:
        """Convert a single position to WGS84 longitude/latitude."""
        lons, lats = self.crs_to_lonlat_array([position.x], [position.y])
        return LonLatPosition(float(lons[0]), float(lats[0]))

    def __repr__(self) -> str:
        return f"CrsHelper({self.name!r})"


CRS_84 = CrsHelper('OGC:CRS84')
