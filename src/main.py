"""Command-line entry point: contour a grid file and print JSON segments."""

import argparse
import json
import logging
import math
import sys
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from contours import build_level_segments, build_segments, drop_non_finite
from domain.models import ContourSettings
from domain.profiles import load_profile, save_profile
from shared.constants import GRID_NDIM, LOG_FORMAT, NUMPY_GRID_SUFFIX
from shared.diagnostics import log_memory_usage

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure logging to stderr (stdout carries the JSON result)."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='isolines',
        description='Marching-squares isolines for a gridded scalar field',
    )
    parser.add_argument('grid', type=Path, help='Text grid (rows of numbers) or .npy')
    parser.add_argument('--profile', help='Profile name or path to a TOML file')
    parser.add_argument(
        '--save-profile',
        metavar='NAME',
        help='Save the resolved settings as a profile (name or .toml path)',
    )
    parser.add_argument('--iso', type=float, dest='iso_value', help='Iso value')
    parser.add_argument(
        '--level',
        type=float,
        action='append',
        dest='levels',
        help='Contour level (repeatable)',
    )
    parser.add_argument('--interval', type=float, dest='level_interval')
    parser.add_argument('--base', type=float, dest='level_base')
    parser.add_argument('--lng-start', type=float, dest='lng_start')
    parser.add_argument('--lat-start', type=float, dest='lat_start')
    parser.add_argument('--grid-size', type=float, dest='grid_size')
    parser.add_argument('--workers', type=int)
    parser.add_argument('--delimiter')
    parser.add_argument(
        '--skip-non-finite',
        action='store_true',
        default=None,
        help='Drop segments with undefined crossings',
    )
    parser.add_argument('--output', type=Path, help='Write JSON here instead of stdout')
    parser.add_argument('--log-file', type=Path)
    parser.add_argument('--verbose', action='store_true')
    return parser


_OVERRIDE_FIELDS = (
    'iso_value',
    'levels',
    'level_interval',
    'level_base',
    'lng_start',
    'lat_start',
    'grid_size',
    'workers',
    'delimiter',
    'skip_non_finite',
)


def resolve_settings(args: argparse.Namespace) -> ContourSettings:
    """Profile values first, then any flag given on the command line."""
    base = load_profile(args.profile) if args.profile else ContourSettings()
    overrides = {
        name: getattr(args, name)
        for name in _OVERRIDE_FIELDS
        if getattr(args, name) is not None
    }
    # --iso или --interval без --level заменяют уровни из профиля
    if args.levels is None and (
        args.iso_value is not None or args.level_interval is not None
    ):
        overrides['levels'] = []
        if args.level_interval is None:
            overrides['level_interval'] = None
    return ContourSettings.model_validate({**base.model_dump(), **overrides})


def load_grid(path: Path, delimiter: str | None = None) -> np.ndarray:
    """Read a 2D grid from a ``.npy`` file or a delimited text file."""
    if not path.exists():
        msg = f'Grid file not found: {path}'
        raise FileNotFoundError(msg)
    if path.suffix.lower() == NUMPY_GRID_SUFFIX:
        grid = np.load(path)
    else:
        grid = np.loadtxt(path, delimiter=delimiter, dtype=np.float64, ndmin=2)
    if grid.ndim != GRID_NDIM:
        msg = f'Grid must be 2D, got shape {grid.shape}'
        raise ValueError(msg)
    logger.info('Loaded grid %s: %d rows x %d columns', path, *grid.shape)
    return grid


def run(settings: ContourSettings, grid: np.ndarray) -> list:
    """Contour ``grid``; a single iso value gives a plain segment list."""
    origin = (settings.lng_start, settings.lat_start, settings.grid_size)

    if not settings.has_levels:
        if settings.iso_value is None:
            msg = 'No iso value or levels configured'
            raise ValueError(msg)
        segments = build_segments(
            grid, settings.iso_value, *origin, workers=settings.workers
        )
        if settings.skip_non_finite:
            segments = drop_non_finite(segments)
        logger.info('Iso value %s: %d segments', settings.iso_value, len(segments))
        return segments

    if grid.size:
        levels = settings.resolve_levels(float(np.nanmin(grid)), float(np.nanmax(grid)))
    else:
        levels = settings.resolve_levels(0.0, -1.0)
    by_level = build_level_segments(grid, levels, *origin, workers=settings.workers)
    result = []
    for li, level in enumerate(levels):
        segments = by_level[li]
        if settings.skip_non_finite:
            segments = drop_non_finite(segments)
        result.append({'level': level, 'segments': segments})
    return result


def to_json_value(value):
    """
    Replace non-finite floats with None throughout ``value``.

    Undefined crossings (NaN samples) are written as ``null`` so the output
    stays strict JSON.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_json_value(v) for v in value]
    return value


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        settings = resolve_settings(args)
        if args.save_profile:
            save_profile(args.save_profile, settings)
        grid = load_grid(args.grid, settings.delimiter)
        log_memory_usage('before contouring')
        result = run(settings, grid)
        log_memory_usage('after contouring')
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error('Contouring failed: %s', e)
        return 1

    text = json.dumps(to_json_value(result), allow_nan=False)
    if args.output is not None:
        args.output.write_text(text, encoding='utf-8')
        logger.info('Wrote %s', args.output)
    else:
        sys.stdout.write(text + '\n')
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == '__main__':
    cli()
