"""gitforge - Scaffold GitHub templates from cached remote indexes."""

from gitforge.cache import CacheManager, resolve_template
from gitforge.core import (
    Cache,
    CacheEntry,
    CacheError,
    CacheIOError,
    CacheMetadata,
    CacheParseError,
    FetchError,
    GitforgeConfig,
    GitforgeError,
    HomeDirectoryError,
    TemplateNotFoundError,
    TemplateWriteError,
)
from gitforge.remote import Fetcher

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Cache",
    "CacheEntry",
    "CacheMetadata",
    "GitforgeConfig",
    # Exceptions
    "GitforgeError",
    "HomeDirectoryError",
    "CacheError",
    "CacheIOError",
    "CacheParseError",
    "TemplateNotFoundError",
    "FetchError",
    "TemplateWriteError",
    # Cache
    "CacheManager",
    "resolve_template",
    # Remote
    "Fetcher",
]
