"""Metric key routing module."""

from .key_router import KeyRouter
from .models import AllowList, AllowListEntry, LiteralEntry, PatternEntry, RoutedKey

__all__ = [
    "KeyRouter",
    "AllowList",
    "AllowListEntry",
    "LiteralEntry",
    "PatternEntry",
    "RoutedKey",
]
