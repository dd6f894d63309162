"""Remote content fetching."""

from gitforge.remote.fetcher import Fetcher

__all__ = ["Fetcher"]
