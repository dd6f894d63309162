"""
Cache Manager for gitforge.

Maps a cache name to a single ``<name>.json`` file under a fixed directory
and handles loading, saving, staleness checks and cleanup.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitforge.core.config import GitforgeConfig, default_cache_dir
from gitforge.core.exceptions import CacheIOError, CacheParseError
from gitforge.core.models import Cache

logger = logging.getLogger(__name__)

CACHE_SUFFIX = ".json"


class CacheManager:
    """
    Owns the on-disk cache directory.

    Nothing is held in memory between calls; every load and save goes
    through the backing file. A missing file is a normal state meaning
    "never fetched" and is never reported as an error.
    """

    def __init__(self, cache_dir: Path | None = None):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else default_cache_dir()

    @classmethod
    def from_config(cls, config: GitforgeConfig) -> "CacheManager":
        return cls(cache_dir=config.cache_dir)

    def ensure_cache_dir(self) -> None:
        """Create the cache directory and its parents if needed."""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(
                f"Failed to create cache directory: {self.cache_dir}", path=self.cache_dir, cause=e
            ) from e

    def get_cache_path(self, cache_name: str) -> Path:
        return self.cache_dir / f"{cache_name}{CACHE_SUFFIX}"

    def load_cache(self, cache_name: str, data_type: Any = Any) -> Cache:
        """Load a named cache from disk.

        Args:
            cache_name: Logical cache name
            data_type: Payload type used to validate entries

        Returns:
            The persisted cache, or an empty one if no file exists yet

        Raises:
            CacheIOError: If the file cannot be read
            CacheParseError: If the file content is not a valid cache
        """
        cache_file = self.get_cache_path(cache_name)
        cache_model = Cache[data_type]

        if not cache_file.exists():
            logger.debug(f"No cache file for '{cache_name}', starting empty")
            return cache_model()

        try:
            content = cache_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CacheParseError(cache_file, e) from e
        except OSError as e:
            raise CacheIOError(f"Failed to read cache file: {cache_file}", path=cache_file, cause=e) from e

        try:
            cache = cache_model.model_validate_json(content)
        except ValidationError as e:
            raise CacheParseError(cache_file, e) from e

        logger.debug(f"Loaded cache '{cache_name}' ({cache.metadata.total_entries} entries)")
        return cache

    def save_cache(self, cache_name: str, cache: Cache) -> None:
        """Persist a cache, fully replacing any previous file.

        The content is written to a sibling temp file and renamed over the
        target, so readers never observe a partial write.
        """
        self.ensure_cache_dir()

        cache_file = self.get_cache_path(cache_name)
        content = cache.model_dump_json(indent=2)

        tmp = cache_file.with_name(f".{cache_file.name}.tmp.{os.getpid()}")
        try:
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, cache_file)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise CacheIOError(f"Failed to write cache file: {cache_file}", path=cache_file, cause=e) from e

        logger.info(f"Saved cache '{cache_name}' ({cache.metadata.total_entries} entries) to {cache_file}")

    def cache_exists(self, cache_name: str) -> bool:
        return self.get_cache_path(cache_name).exists()

    def clear_cache(self, cache_name: str) -> None:
        cache_file = self.get_cache_path(cache_name)
        if not cache_file.exists():
            return
        try:
            cache_file.unlink()
        except OSError as e:
            raise CacheIOError(f"Failed to remove cache file: {cache_file}", path=cache_file, cause=e) from e
        logger.info(f"Removed cache '{cache_name}'")

    def clear_all_caches(self) -> None:
        if not self.cache_dir.exists():
            return
        try:
            shutil.rmtree(self.cache_dir)
        except OSError as e:
            raise CacheIOError(
                f"Failed to remove cache directory: {self.cache_dir}", path=self.cache_dir, cause=e
            ) from e
        logger.info(f"Removed cache directory {self.cache_dir}")

    def get_cache_size(self, cache_name: str) -> int:
        """Size in bytes of the persisted cache, or 0 when absent."""
        cache_file = self.get_cache_path(cache_name)
        if not cache_file.exists():
            return 0
        try:
            return cache_file.stat().st_size
        except OSError as e:
            raise CacheIOError(
                f"Failed to get cache file metadata: {cache_file}", path=cache_file, cause=e
            ) from e

    def list_caches(self) -> list[str]:
        """Names of all persisted caches, sorted."""
        if not self.cache_dir.exists():
            return []
        try:
            return sorted(
                path.stem
                for path in self.cache_dir.iterdir()
                if path.is_file() and path.suffix == CACHE_SUFFIX and not path.name.startswith(".")
            )
        except OSError as e:
            raise CacheIOError(
                f"Failed to list cache directory: {self.cache_dir}", path=self.cache_dir, cause=e
            ) from e

    def should_update_cache(self, cache_name: str, max_age_seconds: int, data_type: Any = Any) -> bool:
        """Decide whether a named cache must be re-fetched.

        True when no cache file exists yet or the persisted cache is stale.
        """
        if not self.cache_exists(cache_name):
            return True

        cache = self.load_cache(cache_name, data_type)
        return cache.is_stale(max_age_seconds)
