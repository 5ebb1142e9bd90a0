"""Flush scheduling core."""

from .flush_scheduler import FlushScheduler

__all__ = ["FlushScheduler"]
