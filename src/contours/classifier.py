"""Cell classification for marching squares.

Corners are ordered bottom-left, bottom-right, top-right, top-left and edges
bottom, right, top, left; edge k joins corner k and corner (k+1) mod 4.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.constants import (
    MARCHING_SQUARES_CENTER_WEIGHT,
    MS_AMBIGUOUS_CASES,
    MS_MASK_BL_TR,
    MS_NO_CONTOUR_CASES,
    MS_SADDLE_CUT_BL_TR,
    MS_SADDLE_CUT_BR_TL,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

EdgePair = tuple[int, int]
LinePattern = tuple[EdgePair, ...]

# Индекс — код ячейки (бит k = угол k выше уровня), значение — пары рёбер
BASIC_LINE_TABLE: tuple[LinePattern, ...] = (
    (),
    ((0, 3),),
    ((0, 1),),
    ((1, 3),),
    ((1, 2),),
    ((0, 1), (2, 3)),
    ((0, 2),),
    ((2, 3),),
    ((2, 3),),
    ((0, 2),),
    ((0, 3), (1, 2)),
    ((1, 2),),
    ((1, 3),),
    ((0, 1),),
    ((0, 3),),
    (),
)


def corner_binary(corner_values: Sequence[float], iso_value: float) -> list[int]:
    """Threshold each corner: 1 when strictly above ``iso_value``, else 0."""
    return [1 if v > iso_value else 0 for v in corner_values]


def case_index(binary: Sequence[int]) -> int:
    """Weight bit k by 2**k in corner order."""
    return sum(bit << k for k, bit in enumerate(binary))


def resolve_saddle(
    case: int, corner_values: Sequence[float], iso_value: float
) -> LinePattern:
    """
    Pick the pairing for an ambiguous (checkerboard) cell.

    The mean of the four corners stands in for the value at the cell center.
    Non-saddle cases fall through to the table entry.
    """
    if case not in MS_AMBIGUOUS_CASES:
        return BASIC_LINE_TABLE[case]
    center = sum(corner_values) * MARCHING_SQUARES_CENTER_WEIGHT
    center_above = center >= iso_value
    if case == MS_MASK_BL_TR:
        return MS_SADDLE_CUT_BL_TR if center_above else MS_SADDLE_CUT_BR_TL
    return MS_SADDLE_CUT_BR_TL if center_above else MS_SADDLE_CUT_BL_TR


def basic_lines(corner_values: Sequence[float], iso_value: float) -> LinePattern:
    """
    Classify a cell and return its symbolic line pattern.

    Args:
        corner_values: Four corner samples in bottom-left, bottom-right,
            top-right, top-left order.
        iso_value: Contour threshold.

    Returns:
        Tuple of ``(e1, e2)`` edge pairs; empty when the cell has no crossing.

    """
    case = case_index(corner_binary(corner_values, iso_value))
    if case in MS_NO_CONTOUR_CASES:
        return ()
    return resolve_saddle(case, corner_values, iso_value)
