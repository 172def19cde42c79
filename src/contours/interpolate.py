"""Edge interpolation and grid-to-world projection for marching squares."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from shared.constants import (
    CORNER_COUNT,
    HORIZONTAL_EDGES,
    LINE_END_POINTS,
    REFLECTED_EDGES,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.classifier import LinePattern

Point = list[float]
Segment = list[Point]


def linear_interpolation(v1: float, v2: float, v_iso: float) -> float:
    """
    Fraction of the way from ``v1`` to ``v2`` at which ``v_iso`` is reached.

    v_iso == v1 -> 0, v_iso == v2 -> 1, midpoint -> 0.5. Equal endpoints have
    no defined crossing and give ``math.inf``.
    """
    if v2 == v1:
        return math.inf
    return (v_iso - v1) / (v2 - v1)


def edge_fractions(corner_values: Sequence[float], iso_value: float) -> list[float]:
    """
    Crossing position along each of the four edges, in world-axis direction.

    Edge k runs from corner k to corner (k+1) mod 4. The right edge runs
    bottom to top and the top edge right to left, so their fractions are
    flipped to measure along +y (rows) and +x (columns) respectively.
    """
    fractions = [
        linear_interpolation(
            corner_values[k], corner_values[(k + 1) % CORNER_COUNT], iso_value
        )
        for k in range(CORNER_COUNT)
    ]
    for k in REFLECTED_EDGES:
        fractions[k] = 1 - fractions[k]
    return fractions


def edge_point(
    edge: int,
    t: float,
    column: int,
    row: int,
    lng_start: float,
    lat_start: float,
    grid_size: float,
) -> Point:
    """Project the crossing at fraction ``t`` on ``edge`` of cell (column, row)."""
    base_x, base_y = LINE_END_POINTS[edge]
    if edge in HORIZONTAL_EDGES:
        offset_x, offset_y = t, base_y
    else:
        offset_x, offset_y = base_x, t
    return [
        lng_start + (column + offset_x) * grid_size,
        lat_start + (row + offset_y) * grid_size,
    ]


def actual_lines(
    column: int,
    row: int,
    pattern: LinePattern,
    fractions: Sequence[float],
    lng_start: float,
    lat_start: float,
    grid_size: float,
) -> list[Segment]:
    """Turn a symbolic line pattern into world-space segments, one per pair."""
    return [
        [
            edge_point(e1, fractions[e1], column, row, lng_start, lat_start, grid_size),
            edge_point(e2, fractions[e2], column, row, lng_start, lat_start, grid_size),
        ]
        for e1, e2 in pattern
    ]
