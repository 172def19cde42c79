"""
Marching squares isolines.

Re-exports the public API so that `from contours import marching_square` works.
"""
from __future__ import annotations

from .builder import build_level_segments as build_level_segments
from .builder import build_segments as build_segments
from .builder import contour_levels as contour_levels
from .builder import drop_non_finite as drop_non_finite
from .classifier import basic_lines as basic_lines
from .interpolate import linear_interpolation as linear_interpolation
from .walker import marching_square as marching_square
