"""
Marching squares: an algorithm that generates isolines for a 2D scalar field.

Input is a row-major grid (``discrete_data[row][col]``), output is a flat list
of segments ``[[x1, y1], [x2, y2]]``. Rows grow downwards: cell (col, row) maps
to ``lng_start + col * grid_size`` and ``lat_start + row * grid_size``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from contours.classifier import basic_lines
from contours.interpolate import actual_lines, edge_fractions
from shared.constants import CORNER_OFFSETS, MIN_GRID_SIZE

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from contours.interpolate import Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    column: int
    row: int
    corner_values: tuple[float, float, float, float]


def grid_shape(discrete_data: Sequence[Sequence[float]]) -> tuple[int, int]:
    """Return (rows, columns); an empty grid has zero columns."""
    rows = len(discrete_data)
    columns = len(discrete_data[0]) if rows else 0
    return rows, columns


def iter_cells(
    discrete_data: Sequence[Sequence[float]],
    row_start: int = 0,
    row_stop: int | None = None,
) -> Iterator[Cell]:
    """
    Yield the cells whose top-left row lies in ``[row_start, row_stop)``.

    Iteration is row-major. Grids with fewer than two rows or columns have no
    cells.
    """
    rows, columns = grid_shape(discrete_data)
    if rows < MIN_GRID_SIZE or columns < MIN_GRID_SIZE:
        return
    last_row = rows - 1 if row_stop is None else min(row_stop, rows - 1)
    for row in range(max(0, row_start), last_row):
        for column in range(columns - 1):
            corners = tuple(
                float(discrete_data[row + dr][column + dc])
                for dr, dc in CORNER_OFFSETS
            )
            yield Cell(column, row, corners)


def marching_square_rows(
    discrete_data: Sequence[Sequence[float]],
    iso_value: float,
    lng_start: float,
    lat_start: float,
    grid_size: float,
    row_start: int = 0,
    row_stop: int | None = None,
) -> list[Segment]:
    """Run marching squares over a band of cell rows."""
    result: list[Segment] = []
    for cell in iter_cells(discrete_data, row_start, row_stop):
        pattern = basic_lines(cell.corner_values, iso_value)
        if not pattern:
            continue
        fractions = edge_fractions(cell.corner_values, iso_value)
        result.extend(
            actual_lines(
                cell.column,
                cell.row,
                pattern,
                fractions,
                lng_start,
                lat_start,
                grid_size,
            )
        )
    return result


def marching_square(
    discrete_data: Sequence[Sequence[float]],
    iso_value: float,
    lng_start: float,
    lat_start: float,
    grid_size: float,
) -> list[Segment]:
    """
    Compute isoline segments of ``discrete_data`` at ``iso_value``.

    Args:
        discrete_data: Rectangular grid of samples, row-major.
        iso_value: Threshold the isolines are drawn at.
        lng_start: World x of grid node (0, 0).
        lat_start: World y of grid node (0, 0).
        grid_size: Edge length of one cell in world units (not validated).

    Returns:
        Unordered list of segments ``[[x1, y1], [x2, y2]]``. Edges with equal
        endpoint values give non-finite coordinates.

    """
    segments = marching_square_rows(
        discrete_data, iso_value, lng_start, lat_start, grid_size
    )
    logger.debug('Marching squares at %s: %d segments', iso_value, len(segments))
    return segments
