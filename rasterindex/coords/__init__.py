# -*- coding: utf-8 -*-
"""
Coordinates Module - Positions, reference systems, axes and source grids.

Provides the two inputs a ``PixelMap`` is built from:

- Target side: ``PointList`` / ``HorizontalGrid`` / ``RegularGrid``, ordered
  positions in some CRS, with ``CrsHelper`` supplying validity testing and
  conversion to longitude/latitude.
- Source side: ``HorizontalCoordSys`` implementations that turn a
  longitude/latitude pair into the nearest source-grid ``(i, j)``.

Usage
-----
    >>> from rasterindex.coords import (
    ...     AxisType, RegularAxis, LatLonCoordSys, RegularGrid)
    >>> cs = LatLonCoordSys(
    ...     RegularAxis(141.84, 10.48 / 4612, 4613, AxisType.LONGITUDE),
    ...     RegularAxis(-44.20, 34.22 / 15053, 15054, AxisType.LATITUDE),
    ... )
    >>> cs.lonlat_to_grid(147.0, -30.0)
    >>> grid = RegularGrid((142.0, -44.0, 152.0, -10.0), 256, 512, 'EPSG:4326')

Modules
-------
- position: Position value types
- crs: Reference-system validity and conversion (pyproj)
- axis: One-dimensional coordinate axes
- coord_sys: Source-grid coordinate systems
- point_list: Target point lists and grids

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

from rasterindex.vocabulary import AxisType
from rasterindex.coords.position import HorizontalPosition, LonLatPosition
from rasterindex.coords.crs import CrsHelper, CRS_84
from rasterindex.coords.axis import (
    OneDCoordAxis,
    RegularAxis,
    RectilinearAxis,
    create_axis,
)
from rasterindex.coords.coord_sys import (
    HorizontalCoordSys,
    LatLonCoordSys,
    ProjectedCoordSys,
    CurvilinearCoordSys,
)
from rasterindex.coords.point_list import (
    PointList,
    ArrayPointList,
    HorizontalGrid,
    RegularGrid,
)

__all__ = [
    'AxisType',
    'HorizontalPosition',
    'LonLatPosition',
    'CrsHelper',
    'CRS_84',
    'OneDCoordAxis',
    'RegularAxis',
    'RectilinearAxis',
    'create_axis',
    'HorizontalCoordSys',
    'LatLonCoordSys',
    'ProjectedCoordSys',
    'CurvilinearCoordSys',
    'PointList',
    'ArrayPointList',
    'HorizontalGrid',
    'RegularGrid',
]
