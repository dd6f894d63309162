"""Shared plumbing for template commands."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from gitforge.cache.manager import CacheManager
from gitforge.cache.resolver import resolve_template
from gitforge.core.config import DEFAULT_CACHE_MAX_AGE
from gitforge.core.exceptions import CacheParseError, TemplateWriteError
from gitforge.core.models import Cache
from gitforge.remote.fetcher import Fetcher

logger = logging.getLogger(__name__)


class TemplateCommand(ABC):
    """Base class for commands backed by a cached template index.

    Subclasses describe how to build a fresh index from the remote source;
    this class decides when to rebuild it and how names resolve against it.
    """

    cache_name: str
    list_name: str

    def __init__(
        self,
        cache_manager: CacheManager,
        fetcher: Fetcher,
        max_age: int = DEFAULT_CACHE_MAX_AGE,
    ) -> None:
        self.cache_manager = cache_manager
        self.fetcher = fetcher
        self.max_age = max_age

    @abstractmethod
    def build_cache(self) -> Cache[str]:
        """Fetch the remote index and return a freshly populated cache."""
        pass

    def ensure_cache(self, update_cache: bool = False) -> Cache[str]:
        """Return the template index, refreshing it when missing or stale.

        A corrupt cache file is treated like a missing one and rebuilt.
        The persisted file is only replaced after a complete fetch.
        """
        if not update_cache:
            try:
                if not self.cache_manager.should_update_cache(self.cache_name, self.max_age, str):
                    return self.cache_manager.load_cache(self.cache_name, str)
            except CacheParseError as e:
                logger.warning(f"Discarding unreadable cache '{self.cache_name}': {e}")

        logger.info(f"Refreshing cache '{self.cache_name}'")
        cache = self.build_cache()
        self.cache_manager.save_cache(self.cache_name, cache)
        return cache

    def resolve(self, name: str, cache: Cache[str]) -> str:
        return resolve_template(name, cache, kind=self.list_name)


def with_extension(name: str, extension: str) -> str:
    """Append ``extension`` to ``name`` unless it already ends with it."""
    if name.lower().endswith(extension):
        return name
    return f"{name}{extension}"


def check_output_count(templates: list[str], outputs: list[str] | None, message: str) -> None:
    if outputs and len(outputs) != len(templates):
        raise TemplateWriteError(message)


def write_template(path: Path, content: str, force: bool = False) -> None:
    """Write ``content`` to ``path``, refusing to clobber without ``force``.

    Raises:
        TemplateWriteError: If the file exists and ``force`` is not set,
            or the file cannot be written
    """
    if path.exists() and not force:
        raise TemplateWriteError(f"{path} already exists. Use --force to overwrite.")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TemplateWriteError(f"Failed to write {path}: {e}") from e
    logger.debug(f"Wrote {len(content)} characters to {path}")


def format_columns(names: list[str], columns: int = 4, width: int = 28) -> str:
    rows = []
    for start in range(0, len(names), columns):
        row = names[start : start + columns]
        rows.append("  " + "".join(name.ljust(width) for name in row).rstrip())
    return "\n".join(rows)
