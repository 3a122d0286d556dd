# -*- coding: utf-8 -*-
"""
Pixel Map - Grouped mapping from touched source cells to target points.

A ``PixelMap`` records, for every distinct source-grid cell that at least one
target position resolves to, the linear indices of those target positions.
It is built once from a ``HorizontalCoordSys`` (the source grid) and a
``PointList`` (the requested positions) and is read-only afterwards.

Build algorithm:

    For each point in the PointList:
       1. Skip it if it is not valid in the PointList's CRS
       2. Transform its x-y coordinates into longitude and latitude
       3. Ask the HorizontalCoordSys for the (i, j) of the nearest source cell
       4. Append (j * source_width + i, linear index) to a growable buffer

    Then sort the buffer by source key (stable) and group equal keys.

When the target is a longitude/latitude ``HorizontalGrid`` and the source is
a ``LatLonCoordSys``, steps 1-3 are replaced by one longitude lookup per
column and one latitude lookup per row. Both paths produce identical maps.

Consumers (data-reading strategies) use ``unique_cell_count``,
``bounding_box_cell_count`` and ``scanline_cell_count`` to choose between
reading cell by cell, row by row, or the whole bounding box, then walk the
entries in ascending source-key order to scatter values onto the output.

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
import logging
import time
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

# Third-party
import numpy as np

# rasterindex internal
from rasterindex.coords.coord_sys import HorizontalCoordSys, LatLonCoordSys
from rasterindex.coords.point_list import HorizontalGrid, PointList

logger = logging.getLogger(__name__)


# Bounding-box values reported by an empty map
UNDEFINED_MIN = int(np.iinfo(np.int64).max)
UNDEFINED_MAX = -1

# Resolution buffer sizing: starts at the target size (clamped to these
# limits) and doubles when full, so total copying is O(n)
_MIN_CAPACITY = 1024
_MAX_INITIAL_CAPACITY = 1 << 22
_GROWTH_FACTOR = 2

# Generic-path points converted per vectorized batch
_BLOCK_SIZE = 1 << 16


@dataclass(frozen=True, eq=False)
class PixelMapEntry:
    """One touched source cell and the target points that depend on it.

    Attributes
    ----------
    i : int
        Column index of the cell in the source grid.
    j : int
        Row index of the cell in the source grid.
    target_indices : np.ndarray
        Read-only int64 array of target linear indices, in the order they
        were discovered during the build.
    """

    i: int
    j: int
    target_indices: np.ndarray

    def source_key(self, source_width: int) -> int:
        """64-bit linear key ``j * source_width + i`` of this cell."""
        return self.j * int(source_width) + self.i


class _PairBuffer:
    """Growable (source key, target index) buffer with a running bounding box.

    Appends never search or hash; cells with a negative index are dropped.
    """

    def __init__(self, expected: int, source_width: int) -> None:
        capacity = min(max(int(expected), _MIN_CAPACITY), _MAX_INITIAL_CAPACITY)
        self._keys = np.empty(capacity, dtype=np.int64)
        self._targets = np.empty(capacity, dtype=np.int64)
        self._count = 0
        self._source_width = np.int64(source_width)

        self.min_i = UNDEFINED_MIN
        self.min_j = UNDEFINED_MIN
        self.max_i = UNDEFINED_MAX
        self.max_j = UNDEFINED_MAX

    def _reserve(self, needed: int) -> None:
        capacity = self._keys.size
        if needed <= capacity:
            return
        while capacity < needed:
            capacity *= _GROWTH_FACTOR
        for name in ('_keys', '_targets'):
            old = getattr(self, name)
            new = np.empty(capacity, dtype=np.int64)
            new[:self._count] = old[:self._count]
            setattr(self, name, new)

    def append(
        self,
        i: np.ndarray,
        j: Union[int, np.ndarray],
        targets: np.ndarray,
    ) -> None:
        i = np.asarray(i, dtype=np.int64)
        j = np.broadcast_to(np.asarray(j, dtype=np.int64), i.shape)
        targets = np.asarray(targets, dtype=np.int64)

        keep = (i >= 0) & (j >= 0)
        if not keep.all():
            i, j, targets = i[keep], j[keep], targets[keep]
        n = i.size
        if n == 0:
            return

        self._reserve(self._count + n)
        end = self._count + n
        self._keys[self._count:end] = j * self._source_width + i
        self._targets[self._count:end] = targets
        self._count = end

        self.min_i = min(self.min_i, int(i.min()))
        self.max_i = max(self.max_i, int(i.max()))
        self.min_j = min(self.min_j, int(j.min()))
        self.max_j = max(self.max_j, int(j.max()))

    def contents(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._keys[:self._count], self._targets[:self._count]


def _resolve_point_list(
    coord_sys: HorizontalCoordSys,
    point_list: PointList,
    buffer: _PairBuffer,
) -> None:
    """Generic path: validate, convert and look up every point."""
    xs, ys = point_list.coordinates()
    helper = point_list.crs_helper
    for start in range(0, xs.size, _BLOCK_SIZE):
        block_x = xs[start:start + _BLOCK_SIZE]
        block_y = ys[start:start + _BLOCK_SIZE]
        valid, lons, lats = helper.valid_lonlat(block_x, block_y)
        if not valid.any():
            continue
        targets = start + np.flatnonzero(valid)
        i, j = coord_sys.lonlat_to_grid_array(lons[valid], lats[valid])
        buffer.append(i, j, targets)


def _resolve_lon_lat_grid(
    coord_sys: LatLonCoordSys,
    grid: HorizontalGrid,
    buffer: _PairBuffer,
) -> None:
    """Fast path: one longitude lookup per column, one latitude lookup per row."""
    width = grid.width
    lon_indices = coord_sys.get_lon_indices(grid.x_axis_values)
    columns = np.flatnonzero(lon_indices >= 0).astype(np.int64)
    lon_indices = lon_indices[columns]
    if columns.size == 0:
        return

    for row, lat in enumerate(grid.y_axis_values.tolist()):
        # Rows off the globe emit nothing; their linear indices are still
        # consumed because targets are computed from the row number
        if not -90.0 <= lat <= 90.0:
            continue
        lat_index = coord_sys.get_lat_index(lat)
        if lat_index < 0:
            continue
        buffer.append(lon_indices, lat_index, row * width + columns)


class PixelMap:
    """
    Maps target points to the source-grid cells they draw their values from.

    Parameters
    ----------
    coord_sys : HorizontalCoordSys
        Source grid coordinate system.
    point_list : PointList
        Target positions. Linear indices reported by the map index into
        this list (row-major for a ``HorizontalGrid``).

    Attributes
    ----------
    source_width : int
        Number of columns in the source grid.
    target_size : int
        Number of positions in the target point list.
    min_i, max_i, min_j, max_j : int
        Bounding box, in source-grid indices, of every touched cell.
        Undefined (``UNDEFINED_MIN`` / ``UNDEFINED_MAX``) when the map is
        empty; check :meth:`is_empty` first.

    Raises
    ------
    TypeError
        If the arguments are not a ``HorizontalCoordSys`` and a
        ``PointList``.
    TransformError
        If a target position cannot be converted at all. No map is built.

    Notes
    -----
    Positions outside the target CRS domain or outside the source grid are
    silently left out of the map. An empty map means the request and the
    source data do not overlap; it is not an error.

    Once constructed the map is immutable and safe to read from any number
    of threads.

    Examples
    --------
    >>> pixel_map = PixelMap(coord_sys, RegularGrid(bbox, 256, 256, 'EPSG:4326'))
    >>> if not pixel_map.is_empty():
    ...     for entry in pixel_map:
    ...         output.flat[entry.target_indices] = data[entry.j, entry.i]
    """

    def __init__(self, coord_sys: HorizontalCoordSys, point_list: PointList) -> None:
        if not isinstance(coord_sys, HorizontalCoordSys):
            raise TypeError(
                f"coord_sys must be a HorizontalCoordSys, got "
                f"{type(coord_sys).__name__}"
            )
        if not isinstance(point_list, PointList):
            raise TypeError(
                f"point_list must be a PointList, got {type(point_list).__name__}"
            )

        t0 = time.perf_counter()
        source_width = coord_sys.x_axis_size
        buffer = _PairBuffer(point_list.size, source_width)

        # Both source and target are lat-lon: avoid a lookup per point
        if (isinstance(point_list, HorizontalGrid) and point_list.is_lon_lat
                and isinstance(coord_sys, LatLonCoordSys)):
            logger.debug("Using optimized method for lat-lon coordinates with 1D axes")
            _resolve_lon_lat_grid(coord_sys, point_list, buffer)
        else:
            logger.debug("Using generic method based on iterating over the PointList")
            _resolve_point_list(coord_sys, point_list, buffer)

        keys, targets = buffer.contents()
        order = np.argsort(keys, kind='stable')
        keys = keys[order]
        targets = targets[order]
        if keys.size:
            starts = np.flatnonzero(np.r_[True, keys[1:] != keys[:-1]])
        else:
            starts = np.empty(0, dtype=np.int64)

        self.source_width = source_width
        self.target_size = point_list.size
        self.min_i = buffer.min_i
        self.max_i = buffer.max_i
        self.min_j = buffer.min_j
        self.max_j = buffer.max_j
        self._keys = keys[starts]
        self._offsets = np.append(starts, keys.size).astype(np.int64)
        self._targets = targets
        for arr in (self._keys, self._offsets, self._targets):
            arr.flags.writeable = False

        logger.debug(
            "Built pixel map: %d unique cells for %d of %d target points in %.1f ms",
            self._keys.size, self._targets.size, self.target_size,
            (time.perf_counter() - t0) * 1000.0,
        )

    def is_empty(self) -> bool:
        """True if no target point maps onto the source grid."""
        return self._keys.size == 0

    def unique_cell_count(self) -> int:
        """Number of distinct source cells touched (cells read one by one)."""
        return int(self._keys.size)

    def target_point_count(self) -> int:
        """Number of target points that resolved to a source cell."""
        return int(self._targets.size)

    def bounding_box_cell_count(self) -> int:
        """Number of cells in the i-j bounding box of the touched cells.

        This is what reading the whole bounding box as one block fetches.
        May exceed :meth:`unique_cell_count` when the box has untouched
        gaps. Zero for an empty map.
        """
        if self.is_empty():
            return 0
        return (self.max_i - self.min_i + 1) * (self.max_j - self.min_j + 1)

    def scanline_cell_count(self) -> int:
        """Sum over touched rows of ``last_i - first_i + 1``.

        This is what reading each source row from its first to its last
        touched cell fetches. Zero for an empty map.
        """
        if self.is_empty():
            return 0
        rows = self._keys // self.source_width
        cols = self._keys % self.source_width
        first = np.flatnonzero(np.r_[True, rows[1:] != rows[:-1]])
        last = np.r_[first[1:] - 1, rows.size - 1]
        return int(np.sum(cols[last] - cols[first] + 1))

    def source_indices(self) -> Tuple[np.ndarray, np.ndarray]:
        """``(i, j)`` arrays of every touched cell, in ascending key order."""
        return self._keys % self.source_width, self._keys // self.source_width

    def entries(self) -> Iterator[PixelMapEntry]:
        """Iterate over entries in strictly ascending source-key order.

        Each call returns a new, forward-only iterator over the same
        finalized data; the build is never repeated.
        """
        width = self.source_width
        offsets = self._offsets
        targets = self._targets
        for n, key in enumerate(self._keys.tolist()):
            yield PixelMapEntry(
                i=key % width,
                j=key // width,
                target_indices=targets[offsets[n]:offsets[n + 1]],
            )

    def __iter__(self) -> Iterator[PixelMapEntry]:
        return self.entries()

    def __len__(self) -> int:
        return self.unique_cell_count()

    def __repr__(self) -> str:
        if self.is_empty():
            return f"PixelMap(empty, targets={self.target_size})"
        return (
            f"PixelMap(cells={self.unique_cell_count()}, "
            f"i=[{self.min_i}, {self.max_i}], j=[{self.min_j}, {self.max_j}], "
            f"targets={self.target_point_count()}/{self.target_size})"
        )
