# -*- coding: utf-8 -*-
"""
One-Dimensional Coordinate Axes - Nearest-index lookup along a source axis.

A source grid whose coordinates are separable is described by two of these
axes. Each axis answers one question: given a coordinate value, which
index along the axis holds the nearest coordinate, or ``-1`` when the value
lies outside the axis' coverage.

Lookup rules shared by every axis:

- Nearest by coordinate distance.
- An exact half-way tie resolves toward the lower index.
- Longitude axes wrap: values are shifted by whole turns of 360 degrees
  into the axis' span before the lookup.

Two implementations are provided:

- ``RegularAxis``: evenly spaced values; direct index computation.
- ``RectilinearAxis``: arbitrary strictly monotonic values; binary search.

``create_axis`` picks between them from an array of values.

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
from typing import Any

# Third-party
import numpy as np

# rasterindex internal
from rasterindex.exceptions import ValidationError
from rasterindex.vocabulary import AxisType


# Relative spacing tolerance used by ``create_axis`` to accept an axis as regular
_REGULAR_SPACING_RTOL = 1.0e-6


class OneDCoordAxis(ABC):
    """
    Abstract base class for one-dimensional coordinate axes.

    Subclasses implement ``_indices_of_array``, which operates on a 1D
    float64 array of values already shifted into range for longitude axes.
    The public ``index_of`` and ``indices_of`` methods handle wrapping and
    scalar/array dispatch.

    Parameters
    ----------
    size : int
        Number of coordinate values along the axis.
    axis_type : AxisType
        Physical meaning of the axis.
    """

    def __init__(self, size: int, axis_type: AxisType) -> None:
        if not isinstance(axis_type, AxisType):
            raise TypeError(
                f"axis_type must be an AxisType, got {type(axis_type).__name__}"
            )
        if int(size) < 1:
            raise ValidationError(f"Axis size must be at least 1, got {size}")
        self.size = int(size)
        self.axis_type = axis_type

    @property
    def is_longitude(self) -> bool:
        return self.axis_type is AxisType.LONGITUDE

    @property
    @abstractmethod
    def lower_edge(self) -> float:
        """Smallest coordinate covered by the axis (outer cell edge)."""

    @abstractmethod
    def coordinate_values(self) -> np.ndarray:
        """Return all coordinate values, in index order."""

    @abstractmethod
    def _indices_of_array(self, values: np.ndarray) -> np.ndarray:
        """Nearest indices for a 1D float64 array, ``-1`` where missed."""

    def _wrap_longitude(self, values: np.ndarray) -> np.ndarray:
        lo = self.lower_edge
        with np.errstate(invalid='ignore'):
            in_span = (values >= lo) & (values < lo + 360.0)
            wrapped = lo + np.mod(values - lo, 360.0)
        return np.where(in_span, values, wrapped)

    def indices_of(self, values: Any) -> np.ndarray:
        """Find the nearest index for each value.

        Parameters
        ----------
        values : array-like
            Coordinate values (any shape; flattened).

        Returns
        -------
        np.ndarray
            int64 array of indices, ``-1`` for values outside the axis.
        """
        arr = np.asarray(values, dtype=np.float64).ravel()
        if self.is_longitude:
            arr = self._wrap_longitude(arr)
        return self._indices_of_array(arr)

    def index_of(self, value: float) -> int:
        """Scalar form of :meth:`indices_of`; ``-1`` when outside the axis."""
        return int(self.indices_of([value])[0])

    def __len__(self) -> int:
        return self.size


class RegularAxis(OneDCoordAxis):
    """Axis with evenly spaced values ``start + k * stride``.

    Parameters
    ----------
    start : float
        Coordinate value at index 0.
    stride : float
        Spacing between consecutive values. May be negative (e.g. a
        latitude axis running north to south) but not zero.
    size : int
        Number of values.
    axis_type : AxisType
        Physical meaning of the axis.

    Examples
    --------
    >>> lon = RegularAxis(141.84, (152.32 - 141.84) / 4612, 4613,
    ...                   AxisType.LONGITUDE)
    >>> lon.index_of(147.1848)
    2352
    """

    def __init__(
        self,
        start: float,
        stride: float,
        size: int,
        axis_type: AxisType,
    ) -> None:
        super().__init__(size, axis_type)
        start = float(start)
        stride = float(stride)
        if not np.isfinite(start):
            raise ValidationError(f"Axis start must be finite, got {start}")
        if not np.isfinite(stride) or stride == 0.0:
            raise ValidationError(
                f"Axis stride must be finite and non-zero, got {stride}"
            )
        self.start = start
        self.stride = stride

    @property
    def lower_edge(self) -> float:
        first = self.start
        last = self.start + (self.size - 1) * self.stride
        return min(first, last) - abs(self.stride) / 2.0

    def coordinate_values(self) -> np.ndarray:
        return self.start + np.arange(self.size, dtype=np.float64) * self.stride

    def _indices_of_array(self, values: np.ndarray) -> np.ndarray:
        with np.errstate(invalid='ignore'):
            steps = (values - self.start) / self.stride
            # ceil(x - 0.5) is round-half-down: ties go to the lower index
            nearest = np.ceil(steps - 0.5)
            inside = np.isfinite(nearest) & (nearest >= 0) & (nearest < self.size)
        out = np.full(values.shape, -1, dtype=np.int64)
        out[inside] = nearest[inside].astype(np.int64)
        return out

    def __repr__(self) -> str:
        return (
            f"RegularAxis(start={self.start}, stride={self.stride}, "
            f"size={self.size}, axis_type={self.axis_type.name})"
        )


class RectilinearAxis(OneDCoordAxis):
    """Axis with arbitrary, strictly monotonic values.

    Values may be ascending or descending. A value is inside the axis when
    it lies no further than half a spacing beyond either end value.

    Parameters
    ----------
    values : array-like
        Coordinate values in index order (1D, finite, strictly monotonic).
    axis_type : AxisType
        Physical meaning of the axis.

    Raises
    ------
    ValidationError
        If values are empty, non-finite, or not strictly monotonic.
    """

    def __init__(self, values: Any, axis_type: AxisType) -> None:
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 1:
            raise ValidationError(
                f"Axis values must be 1D, got shape {arr.shape}"
            )
        super().__init__(arr.size, axis_type)
        if not np.all(np.isfinite(arr)):
            raise ValidationError("Axis values must all be finite")

        diffs = np.diff(arr)
        if np.all(diffs > 0):
            self._descending = False
        elif np.all(diffs < 0):
            self._descending = True
        else:
            raise ValidationError("Axis values must be strictly monotonic")

        self._values = arr
        self._values.flags.writeable = False
        self._ascending = arr[::-1] if self._descending else arr

        asc = self._ascending
        if asc.size > 1:
            self._lower = float(asc[0] - (asc[1] - asc[0]) / 2.0)
            self._upper = float(asc[-1] + (asc[-1] - asc[-2]) / 2.0)
        else:
            self._lower = self._upper = float(asc[0])

    @property
    def lower_edge(self) -> float:
        return self._lower

    def coordinate_values(self) -> np.ndarray:
        return self._values

    def _indices_of_array(self, values: np.ndarray) -> np.ndarray:
        asc = self._ascending
        n = asc.size
        pos = np.searchsorted(asc, values, side='left')
        below = np.clip(pos - 1, 0, n - 1)
        above = np.clip(pos, 0, n - 1)
        with np.errstate(invalid='ignore'):
            d_below = np.abs(values - asc[below])
            d_above = np.abs(asc[above] - values)
            if self._descending:
                # Higher ascending position is the lower stored index
                take_above = d_above <= d_below
            else:
                take_above = d_above < d_below
            inside = (values >= self._lower) & (values <= self._upper)

        nearest = np.where(take_above, above, below).astype(np.int64)
        if self._descending:
            nearest = (n - 1) - nearest
        return np.where(inside, nearest, -1).astype(np.int64)

    def __repr__(self) -> str:
        return (
            f"RectilinearAxis(size={self.size}, "
            f"range=[{self._lower:.6f}, {self._upper:.6f}], "
            f"axis_type={self.axis_type.name})"
        )


def create_axis(values: Any, axis_type: AxisType) -> OneDCoordAxis:
    """Build the most efficient axis for a set of coordinate values.

    Evenly spaced values (within a relative tolerance) produce a
    ``RegularAxis``; anything else a ``RectilinearAxis``.

    Parameters
    ----------
    values : array-like
        Coordinate values in index order.
    axis_type : AxisType
        Physical meaning of the axis.

    Returns
    -------
    OneDCoordAxis
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1 or arr.size < 2:
        return RectilinearAxis(arr, axis_type)

    diffs = np.diff(arr)
    stride = (arr[-1] - arr[0]) / (arr.size - 1)
    if stride != 0.0 and np.all(np.isfinite(diffs)) and np.allclose(
        diffs, stride, rtol=_REGULAR_SPACING_RTOL, atol=0.0
    ):
        return RegularAxis(arr[0], stride, arr.size, axis_type)
    return RectilinearAxis(arr, axis_type)
