# -*- coding: utf-8 -*-
"""
rasterindex - Index mapping for raster map serving.

Translates a request for values at a list or grid of real-world positions
into the minimal, ordered set of source-grid cells that must be read, with
each cell carrying the output positions that depend on it.

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from rasterindex.exceptions import (
    RasterIndexError,
    ValidationError,
    TransformError,
)
from rasterindex.vocabulary import AxisType
from rasterindex.coords import (
    HorizontalPosition,
    LonLatPosition,
    CrsHelper,
    CRS_84,
    OneDCoordAxis,
    RegularAxis,
    RectilinearAxis,
    create_axis,
    HorizontalCoordSys,
    LatLonCoordSys,
    ProjectedCoordSys,
    CurvilinearCoordSys,
    PointList,
    ArrayPointList,
    HorizontalGrid,
    RegularGrid,
)
from rasterindex.pixel_map import PixelMap, PixelMapEntry

__all__ = [
    'RasterIndexError',
    'ValidationError',
    'TransformError',
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
    'PixelMap',
    'PixelMapEntry',
]
