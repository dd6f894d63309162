"""Cache maintenance commands."""

from datetime import datetime

from gitforge.cache.manager import CacheManager
from gitforge.core.config import DEFAULT_CACHE_MAX_AGE
from gitforge.core.exceptions import GitforgeError


def _format_time(timestamp: int) -> str:
    if not timestamp:
        return "never"
    return datetime.fromtimestamp(timestamp).isoformat(timespec="seconds")


def list_caches(cache_manager: CacheManager) -> None:
    names = cache_manager.list_caches()
    print(f"Cache directory: {cache_manager.cache_dir}")
    if not names:
        print("No caches found.")
        return
    for name in names:
        print(f"  {name:<24} {cache_manager.get_cache_size(name):>10} bytes")


def show_cache_info(cache_manager: CacheManager, name: str, max_age: int = DEFAULT_CACHE_MAX_AGE) -> None:
    """Print location, size, entry count and freshness of one cache."""
    if not cache_manager.cache_exists(name):
        print(f"Cache '{name}' does not exist yet.")
        return

    cache = cache_manager.load_cache(name)
    stale = cache.is_stale(max_age)
    print(f"Cache:        {name}")
    print(f"Path:         {cache_manager.get_cache_path(name)}")
    print(f"Size:         {cache_manager.get_cache_size(name)} bytes")
    print(f"Entries:      {cache.metadata.total_entries}")
    print(f"Last updated: {_format_time(cache.metadata.last_updated)}")
    print(f"Status:       {'stale' if stale else 'fresh'}")


def clear_caches(cache_manager: CacheManager, names: list[str] | None = None, clear_all: bool = False) -> None:
    if clear_all:
        cache_manager.clear_all_caches()
        print(f"✓ Removed all caches in {cache_manager.cache_dir}")
        return

    if not names:
        raise GitforgeError("No cache specified. Pass one or more cache names or use --all.")

    for name in names:
        cache_manager.clear_cache(name)
        print(f"✓ Cleared cache '{name}'")
