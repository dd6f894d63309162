"""Core abstractions and models."""

from gitforge.core.config import DEFAULT_CACHE_MAX_AGE, GitforgeConfig, default_cache_dir
from gitforge.core.exceptions import (
    CacheError,
    CacheIOError,
    CacheParseError,
    FetchError,
    GitforgeError,
    HomeDirectoryError,
    TemplateNotFoundError,
    TemplateWriteError,
)
from gitforge.core.models import Cache, CacheEntry, CacheMetadata

__all__ = [
    # Config
    "GitforgeConfig",
    "DEFAULT_CACHE_MAX_AGE",
    "default_cache_dir",
    # Exceptions
    "GitforgeError",
    "HomeDirectoryError",
    "CacheError",
    "CacheIOError",
    "CacheParseError",
    "TemplateNotFoundError",
    "FetchError",
    "TemplateWriteError",
    # Models
    "Cache",
    "CacheEntry",
    "CacheMetadata",
]
