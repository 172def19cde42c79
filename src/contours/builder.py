"""
Построение изолиний поверх ядра marching squares.

Поддерживает параллельную обработку полос строк и нескольких уровней через
ThreadPoolExecutor. Результат параллельной обработки совпадает с
последовательным: полосы склеиваются в исходном порядке строк.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from contours.walker import grid_shape, marching_square, marching_square_rows
from shared.constants import (
    CONTOUR_LOG_MEMORY_EVERY_LEVELS,
    CONTOUR_MIN_ROWS_PER_BAND,
    CONTOUR_PARALLEL_WORKERS,
)
from shared.diagnostics import log_memory_usage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.interpolate import Segment

logger = logging.getLogger(__name__)


def effective_workers(requested: int, jobs: int) -> int:
    """Clamp the requested worker count by CPU count, the hard cap and job count."""
    return max(
        1,
        min(requested, CONTOUR_PARALLEL_WORKERS, os.cpu_count() or 1, jobs),
    )


def row_bands(
    cell_rows: int, workers: int, min_rows: int = CONTOUR_MIN_ROWS_PER_BAND
) -> list[tuple[int, int]]:
    """
    Split ``cell_rows`` rows of cells into contiguous ``(start, stop)`` bands.

    At most ``workers`` bands are produced and none is shorter than
    ``min_rows`` unless the grid itself is.
    """
    if cell_rows <= 0:
        return []
    band_count = max(1, min(workers, cell_rows // max(1, min_rows)))
    size, extra = divmod(cell_rows, band_count)
    bands: list[tuple[int, int]] = []
    start = 0
    for i in range(band_count):
        stop = start + size + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def build_segments(
    discrete_data: Sequence[Sequence[float]],
    iso_value: float,
    lng_start: float,
    lat_start: float,
    grid_size: float,
    *,
    workers: int = 1,
) -> list[Segment]:
    """
    Marching squares with optional row-band parallelism.

    Each worker fills its own list; lists are concatenated in band order, so
    the output equals ``marching_square`` on the same input.
    """
    rows, _columns = grid_shape(discrete_data)
    bands = row_bands(rows - 1, workers)
    num_workers = effective_workers(workers, len(bands))

    if num_workers <= 1:
        return marching_square(discrete_data, iso_value, lng_start, lat_start, grid_size)

    def process_band(band: tuple[int, int]) -> list[Segment]:
        start, stop = band
        return marching_square_rows(
            discrete_data,
            iso_value,
            lng_start,
            lat_start,
            grid_size,
            row_start=start,
            row_stop=stop,
        )

    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        parts = list(executor.map(process_band, bands))

    segments = [seg for part in parts for seg in part]
    logger.debug(
        'Marching squares at %s: %d bands, %d workers, %d segments',
        iso_value,
        len(bands),
        num_workers,
        len(segments),
    )
    return segments


def build_level_segments(
    discrete_data: Sequence[Sequence[float]],
    levels: Sequence[float],
    lng_start: float,
    lat_start: float,
    grid_size: float,
    *,
    workers: int = 1,
) -> dict[int, list[Segment]]:
    """
    Строит отрезки изолиний для нескольких уровней.

    Args:
        discrete_data: Матрица значений (row-major)
        levels: Список уровней
        lng_start: Мировая координата x узла (0, 0)
        lat_start: Мировая координата y узла (0, 0)
        grid_size: Размер ячейки в мировых единицах
        workers: Число потоков (уровни обрабатываются параллельно)

    Returns:
        Словарь {индекс_уровня: список_отрезков}

    """
    num_workers = effective_workers(workers, len(levels))

    def process_level(li_level: tuple[int, float]) -> tuple[int, list[Segment]]:
        li, level = li_level
        segs = marching_square(discrete_data, level, lng_start, lat_start, grid_size)
        every = CONTOUR_LOG_MEMORY_EVERY_LEVELS
        if every and (li + 1) % every == 0:
            log_memory_usage(f'after level {li + 1}/{len(levels)}')
        return li, segs

    if num_workers > 1:
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            segments_by_level = dict(executor.map(process_level, enumerate(levels)))
    else:
        segments_by_level = dict(map(process_level, enumerate(levels)))

    logger.info(
        'Built isolines: levels=%d, total_segments=%d',
        len(levels),
        sum(len(s) for s in segments_by_level.values()),
    )
    return segments_by_level


def contour_levels(
    min_value: float, max_value: float, interval: float, base: float = 0.0
) -> list[float]:
    """
    Levels ``base + k * interval`` lying within ``[min_value, max_value]``.

    Raises:
        ValueError: if ``interval`` is not positive.

    """
    if interval <= 0:
        msg = f'Contour interval must be positive, got {interval}'
        raise ValueError(msg)
    if min_value > max_value:
        return []
    k_start = math.ceil((min_value - base) / interval)
    k_end = math.floor((max_value - base) / interval)
    return [base + k * interval for k in range(k_start, k_end + 1)]


def is_finite_segment(segment: Segment) -> bool:
    return all(math.isfinite(c) for point in segment for c in point)


def drop_non_finite(segments: Sequence[Segment]) -> list[Segment]:
    """Remove segments with an undefined (non-finite) endpoint coordinate."""
    kept = [seg for seg in segments if is_finite_segment(seg)]
    dropped = len(segments) - len(kept)
    if dropped:
        logger.warning('Dropped %d segments with non-finite coordinates', dropped)
    return kept
