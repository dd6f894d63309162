"""Core data models for the template cache."""

import time
from typing import Generic, TypeVar, get_args

from pydantic import BaseModel, Field

T = TypeVar("T")


def _now() -> int:
    """Current wall-clock time in whole seconds since the epoch."""
    return int(time.time())


class CacheMetadata(BaseModel):
    """Summary of a cache, recomputed after every mutation."""

    last_updated: int = 0
    total_entries: int = 0


class CacheEntry(BaseModel, Generic[T]):
    """Single timestamped payload stored under a cache key."""

    data: T
    timestamp: int
    metadata: dict[str, str] = Field(default_factory=dict)


class Cache(BaseModel, Generic[T]):
    """Keyed store of timestamped entries with TTL helpers.

    The cache knows nothing about persistence; ``CacheManager`` owns the
    on-disk representation, which is simply this model dumped as JSON.
    """

    metadata: CacheMetadata = Field(default_factory=CacheMetadata)
    entries: dict[str, CacheEntry[T]] = Field(default_factory=dict)

    def insert(self, key: str, data: T) -> None:
        """Store ``data`` under ``key``, replacing any previous entry."""
        self.insert_with_metadata(key, data, {})

    def insert_with_metadata(self, key: str, data: T, metadata: dict[str, str]) -> None:
        """Store ``data`` under ``key`` with tags usable by ``filter_by_metadata``.

        Args:
            key: Cache key
            data: Payload
            metadata: Arbitrary string tags for the entry
        """
        entry_type = self._entry_type()
        self.entries[key] = entry_type(data=data, timestamp=_now(), metadata=dict(metadata))
        self._update_metadata()

    def get(self, key: str) -> T | None:
        entry = self.entries.get(key)
        return entry.data if entry is not None else None

    def get_entry(self, key: str) -> CacheEntry[T] | None:
        return self.entries.get(key)

    def contains_key(self, key: str) -> bool:
        return key in self.entries

    def remove(self, key: str) -> CacheEntry[T] | None:
        """Remove ``key`` and return its entry, if any.

        Summary metadata is refreshed even when nothing was removed.
        """
        entry = self.entries.pop(key, None)
        self._update_metadata()
        return entry

    def keys(self) -> list[str]:
        return list(self.entries.keys())

    def len(self) -> int:
        return len(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def clear(self) -> None:
        self.entries.clear()
        self._update_metadata()

    def is_stale(self, max_age_seconds: int) -> bool:
        """Whether the cache as a whole is older than ``max_age_seconds``.

        A ``last_updated`` in the future counts as age zero.
        """
        return _age(self.metadata.last_updated) > max_age_seconds

    def is_entry_stale(self, key: str, max_age_seconds: int) -> bool:
        """Whether the entry at ``key`` is older than ``max_age_seconds``.

        Missing entries are always stale.
        """
        entry = self.entries.get(key)
        if entry is None:
            return True
        return _age(entry.timestamp) > max_age_seconds

    def filter_by_metadata(self, key: str, value: str) -> list[tuple[str, T]]:
        """Return ``(key, data)`` pairs whose entry metadata has ``key == value``.

        Args:
            key: Metadata tag name
            value: Exact tag value to match

        Returns:
            Matching pairs; entries without the tag are excluded
        """
        return [
            (entry_key, entry.data)
            for entry_key, entry in self.entries.items()
            if entry.metadata.get(key) == value
        ]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    @classmethod
    def _entry_type(cls) -> type[CacheEntry]:
        # Entries must be instances of the parametrized class to serialize cleanly.
        return get_args(cls.model_fields["entries"].annotation)[1]

    def _update_metadata(self) -> None:
        self.metadata.last_updated = _now()
        self.metadata.total_entries = len(self.entries)


def _age(timestamp: int) -> int:
    return max(0, _now() - timestamp)
