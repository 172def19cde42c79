"""
Resource snapshots around contouring runs.

Only process memory is tracked: the marching-squares passes hold every
segment of a level in memory, so RSS is what grows with the grid.
"""

import logging
from typing import Any

import psutil

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


def get_memory_info() -> dict[str, Any]:
    """Process RSS/VMS and system availability in MB, or an ``error`` entry."""
    try:
        process = psutil.Process()
        memory = process.memory_info()
        system_memory = psutil.virtual_memory()
        return {
            'process_rss_mb': round(memory.rss / _MB, 2),
            'process_vms_mb': round(memory.vms / _MB, 2),
            'system_available_mb': round(system_memory.available / _MB, 2),
            'system_used_percent': system_memory.percent,
        }
    except (psutil.Error, OSError) as e:
        return {'error': f'Failed to get memory info: {e}'}


def log_memory_usage(context: str = '') -> None:
    """Log one memory line; ``context`` names the contouring stage."""
    info = get_memory_info()
    if 'error' in info:
        logger.debug('Memory usage (%s) unavailable: %s', context, info['error'])
        return
    context_label = f' ({context})' if context else ''
    logger.info(
        'Memory usage%s: RSS=%sMB, Available=%sMB',
        context_label,
        info['process_rss_mb'],
        info['system_available_mb'],
    )
