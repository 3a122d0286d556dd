# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for rasterindex.

Defines the controlled vocabulary used to tag one-dimensional coordinate
axes so that coordinate systems can tell longitude/latitude axes (which
support the separable fast path and longitude wrapping) from projected
x/y axes.

Author
------
Steven Siebert

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

from enum import Enum


class AxisType(Enum):
    """Physical meaning of a one-dimensional coordinate axis."""

    LONGITUDE = "longitude"
    LATITUDE = "latitude"
    GEO_X = "geo_x"
    GEO_Y = "geo_y"
