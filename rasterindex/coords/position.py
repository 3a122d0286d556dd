# -*- coding: utf-8 -*-
"""
Horizontal Positions - Real-world coordinate pairs.

A ``HorizontalPosition`` is an opaque ``(x, y)`` pair whose meaning is
given by the reference system of the collection that holds it (see
``rasterindex.coords.point_list``). ``LonLatPosition`` is the refinement
whose coordinates are already WGS84 longitude and latitude in degrees.

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
from dataclasses import dataclass


@dataclass(frozen=True)
class HorizontalPosition:
    """A point in the horizontal plane of some reference system.

    Parameters
    ----------
    x : float
        First coordinate (easting, or longitude for geographic systems).
    y : float
        Second coordinate (northing, or latitude for geographic systems).
    """

    x: float
    y: float


class LonLatPosition(HorizontalPosition):
    """A WGS84 longitude/latitude position in degrees.

    Parameters
    ----------
    lon : float
        Longitude in degrees East.
    lat : float
        Latitude in degrees North.
    """

    def __init__(self, lon: float, lat: float) -> None:
        super().__init__(float(lon), float(lat))

    @property
    def lon(self) -> float:
        return self.x

    @property
    def lat(self) -> float:
        return self.y

    def __repr__(self) -> str:
        return f"LonLatPosition(lon={self.x!r}, lat={self.y!r})"
