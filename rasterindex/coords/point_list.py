# -*- coding: utf-8 -*-
"""
Point Lists - Ordered target positions to be resolved against a source grid.

A ``PointList`` is an immutable, ordered sequence of positions sharing one
reference system. The zero-based position of a point in the sequence is its
*linear index*; pixel maps report target points by this index so that
extracted values can be written straight back into an output array.

``HorizontalGrid`` is the rectangular refinement. It exposes separable x
and y coordinate arrays and enumerates its points in row-major order::

    linear_index = row * width + col

``RegularGrid`` builds a ``HorizontalGrid`` from a bounding box and an image
size, the way a map request describes its output.

Dependencies
------------
numpy

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
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np
import pyproj

# rasterindex internal
from rasterindex.coords.crs import CRS_84, CrsHelper
from rasterindex.coords.position import HorizontalPosition, LonLatPosition
from rasterindex.exceptions import ValidationError

CrsLike = Union[str, int, pyproj.CRS, CrsHelper]


def _as_crs_helper(crs: CrsLike) -> CrsHelper:
    return crs if isinstance(crs, CrsHelper) else CrsHelper(crs)


def _readonly(values: Any) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


class PointList(ABC):
    """
    Abstract base class for ordered target positions.

    Parameters
    ----------
    crs_helper : CrsHelper
        Reference system shared by every position in the list.
    """

    def __init__(self, crs_helper: CrsHelper) -> None:
        self.crs_helper = crs_helper

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of positions."""

    @abstractmethod
    def coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(xs, ys)`` arrays of length ``size`` in linear order."""

    def positions(self) -> Iterator[HorizontalPosition]:
        """Iterate over the positions in linear order."""
        xs, ys = self.coordinates()
        make = LonLatPosition if self.crs_helper.is_lon_lat else HorizontalPosition
        for x, y in zip(xs.tolist(), ys.tolist()):
            yield make(x, y)

    def __len__(self) -> int:
        return self.size

    @staticmethod
    def from_point(
        position: HorizontalPosition,
        crs: Optional[CrsLike] = None,
    ) -> 'ArrayPointList':
        """Create a one-element list.

        A ``LonLatPosition`` defaults to CRS:84; any other position needs
        an explicit ``crs``.
        """
        if crs is None:
            if not isinstance(position, LonLatPosition):
                raise ValidationError(
                    "A CRS is required for positions that are not LonLatPosition"
                )
            crs = CRS_84
        return ArrayPointList([position.x], [position.y], crs)

    @staticmethod
    def from_list(
        positions: Iterable[HorizontalPosition],
        crs: CrsLike,
    ) -> 'ArrayPointList':
        """Create a list from positions, preserving their order."""
        positions = list(positions)
        xs = [p.x for p in positions]
        ys = [p.y for p in positions]
        return ArrayPointList(xs, ys, crs)


class ArrayPointList(PointList):
    """Point list backed by two coordinate arrays.

    Parameters
    ----------
    xs : array-like
        x (or longitude) coordinates, 1D.
    ys : array-like
        y (or latitude) coordinates, 1D, same length as ``xs``.
    crs : str, int, pyproj.CRS, or CrsHelper
        Reference system of the coordinates.

    Raises
    ------
    ValidationError
        If ``xs`` and ``ys`` are not 1D arrays of the same length.
    """

    def __init__(self, xs: Any, ys: Any, crs: CrsLike) -> None:
        super().__init__(_as_crs_helper(crs))
        self._xs = _readonly(xs)
        self._ys = _readonly(ys)
        if self._xs.ndim != 1 or self._xs.shape != self._ys.shape:
            raise ValidationError(
                f"xs and ys must be 1D arrays of the same length, got shapes "
                f"{self._xs.shape} and {self._ys.shape}"
            )

    @property
    def size(self) -> int:
        return int(self._xs.size)

    def coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._xs, self._ys

    def __repr__(self) -> str:
        return f"ArrayPointList(size={self.size}, crs={self.crs_helper.name!r})"


class HorizontalGrid(PointList):
    """Rectangular grid of target positions in row-major order.

    Parameters
    ----------
    x_values : array-like
        Column coordinates (1D), one per column.
    y_values : array-like
        Row coordinates (1D), one per row.
    crs : str, int, pyproj.CRS, or CrsHelper
        Reference system of the coordinates.

    Raises
    ------
    ValidationError
        If either axis is not a non-empty 1D array.
    """

    def __init__(self, x_values: Any, y_values: Any, crs: CrsLike) -> None:
        super().__init__(_as_crs_helper(crs))
        self._x_values = _readonly(x_values)
        self._y_values = _readonly(y_values)
        for name, arr in (('x_values', self._x_values),
                          ('y_values', self._y_values)):
            if arr.ndim != 1 or arr.size == 0:
                raise ValidationError(
                    f"{name} must be a non-empty 1D array, got shape {arr.shape}"
                )

    @property
    def x_axis_values(self) -> np.ndarray:
        return self._x_values

    @property
    def y_axis_values(self) -> np.ndarray:
        return self._y_values

    @property
    def width(self) -> int:
        return int(self._x_values.size)

    @property
    def height(self) -> int:
        return int(self._y_values.size)

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def is_lon_lat(self) -> bool:
        """True when the grid is itself a WGS84 longitude/latitude grid."""
        return self.crs_helper.is_lon_lat

    def coordinates(self) -> Tuple[np.ndarray, np.ndarray]:
        xs = np.tile(self._x_values, self.height)
        ys = np.repeat(self._y_values, self.width)
        return xs, ys

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self.height}x{self.width}, "
            f"crs={self.crs_helper.name!r})"
        )


class RegularGrid(HorizontalGrid):
    """Evenly spaced grid of cell centres covering a bounding box.

    Follows image conventions: row 0 is the top (maximum y) edge and rows
    run toward minimum y; column 0 is the left (minimum x) edge.

    Parameters
    ----------
    bbox : Sequence[float]
        ``(min_x, min_y, max_x, max_y)`` in the grid's CRS.
    width : int
        Number of columns.
    height : int
        Number of rows.
    crs : str, int, pyproj.CRS, or CrsHelper
        Reference system of ``bbox``.

    Raises
    ------
    ValidationError
        If the bounding box is degenerate or a dimension is not positive.

    Examples
    --------
    >>> grid = RegularGrid((140.0, -45.0, 155.0, -10.0), 256, 512, 'EPSG:4326')
    >>> grid.size
    131072
    """

    def __init__(
        self,
        bbox: Sequence[float],
        width: int,
        height: int,
        crs: CrsLike,
    ) -> None:
        if len(bbox) != 4:
            raise ValidationError(
                f"bbox must be (min_x, min_y, max_x, max_y), got {bbox!r}"
            )
        min_x, min_y, max_x, max_y = (float(v) for v in bbox)
        if not max_x > min_x:
            raise ValidationError(
                f"max_x ({max_x}) must be greater than min_x ({min_x})"
            )
        if not max_y > min_y:
            raise ValidationError(
                f"max_y ({max_y}) must be greater than min_y ({min_y})"
            )
        if int(width) < 1 or int(height) < 1:
            raise ValidationError(
                f"width and height must be positive, got {width}x{height}"
            )
        width = int(width)
        height = int(height)

        dx = (max_x - min_x) / width
        dy = (max_y - min_y) / height
        x_values = min_x + (np.arange(width) + 0.5) * dx
        y_values = max_y - (np.arange(height) + 0.5) * dy
        super().__init__(x_values, y_values, crs)
        self.bbox = (min_x, min_y, max_x, max_y)
