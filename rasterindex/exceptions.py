# -*- coding: utf-8 -*-
"""
Raster Index Exception Hierarchy - Domain-specific exceptions for index mapping.

Provides a small exception hierarchy that lets callers (e.g. a map server's
request handler) catch index-mapping errors distinctly from Python built-in
exceptions. All exceptions subclass both ``RasterIndexError`` and the
appropriate built-in exception for backward compatibility.

A position that falls outside a source grid is *not* an error and never
raises; see ``rasterindex.pixel_map``.

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


class RasterIndexError(Exception):
    """Base exception for all rasterindex errors."""


class ValidationError(RasterIndexError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for empty or non-monotonic axes, zero strides, mismatched
    coordinate array shapes, and other input validation failures.
    """


class TransformError(RasterIndexError, RuntimeError):
    """Coordinate transformation failure.

    Raised when a reference system definition cannot be parsed or the
    projection engine cannot perform a conversion at all. A pixel map
    build that encounters one is aborted and no map is returned.
    """
