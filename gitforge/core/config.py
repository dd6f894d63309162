"""Runtime configuration for gitforge."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from gitforge.core.exceptions import GitforgeError, HomeDirectoryError

DEFAULT_CACHE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days


def default_cache_dir() -> Path:
    """Return ``~/.local/share/gitforge``.

    Raises:
        HomeDirectoryError: If the host provides no home directory
    """
    try:
        home_dir = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError(f"Unable to determine home directory: {e}") from e

    # XDG data directory layout
    return home_dir / ".local" / "share" / "gitforge"


class GitforgeConfig(BaseModel):
    """Configuration constructed once at process start."""

    cache_dir: Path = Field(default_factory=default_cache_dir)
    timeout: float = 30.0
    user_agent: str = "gitforge-fetcher"
    max_retries: int = 3
    retry_delay: float = 1.0
    cache_max_age: int = DEFAULT_CACHE_MAX_AGE

    @classmethod
    def from_env(cls) -> "GitforgeConfig":
        """Build a config, applying ``GITFORGE_*`` environment overrides."""
        overrides: dict[str, object] = {}
        if os.environ.get("GITFORGE_CACHE_DIR"):
            overrides["cache_dir"] = Path(os.environ["GITFORGE_CACHE_DIR"]).expanduser()
        if os.environ.get("GITFORGE_TIMEOUT"):
            overrides["timeout"] = os.environ["GITFORGE_TIMEOUT"]
        if os.environ.get("GITFORGE_CACHE_MAX_AGE"):
            overrides["cache_max_age"] = os.environ["GITFORGE_CACHE_MAX_AGE"]
        try:
            return cls(**overrides)
        except ValidationError as e:
            raise GitforgeError(f"Invalid GITFORGE_* environment configuration: {e}") from e
