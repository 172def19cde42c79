"""Shared constants and helpers."""
from shared.diagnostics import log_memory_usage

__all__ = ['log_memory_usage']
