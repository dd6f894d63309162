"""Cache persistence and lookup."""

from gitforge.cache.manager import CacheManager
from gitforge.cache.resolver import resolve_template

__all__ = ["CacheManager", "resolve_template"]
