"""Custom exceptions for gitforge."""

from pathlib import Path


class GitforgeError(Exception):
    """Base exception for gitforge errors."""

    def __init__(self, message: str) -> None:
        """Initialize error.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class HomeDirectoryError(GitforgeError):
    """Raised when the user's home directory cannot be determined."""

    def __init__(self, message: str = "Unable to determine home directory") -> None:
        super().__init__(message)


class CacheError(GitforgeError):
    """Base exception for cache file failures."""

    def __init__(self, message: str, path: Path | None = None, cause: Exception | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            path: Cache file or directory involved
            cause: Underlying exception
        """
        self.path = path
        self.cause = cause
        if cause is not None:
            message = f"{message}\n\nCaused by:\n    {cause}"
        super().__init__(message)


class CacheIOError(CacheError):
    """Raised when reading, writing or deleting cache files fails."""

    pass


class CacheParseError(CacheError):
    """Raised when a cache file exists but cannot be deserialized."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Failed to parse cache file: {path}", path=path, cause=cause)


class TemplateNotFoundError(GitforgeError):
    """Raised when a template name matches nothing in the cache."""

    def __init__(self, template_name: str, kind: str = "gitignore") -> None:
        """Initialize error.

        Args:
            template_name: Name exactly as the user typed it
            kind: Template family, used to suggest the listing command
        """
        self.template_name = template_name
        self.kind = kind
        super().__init__(
            f"Template '{template_name}' not found in cache. "
            f"Try `gitforge list {kind}` to view available templates."
        )


class FetchError(GitforgeError):
    """Raised when a remote resource cannot be fetched or decoded."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            url: Requested URL
            status_code: HTTP status, if a response was received
        """
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class TemplateWriteError(GitforgeError):
    """Raised when a template cannot be written to its destination."""

    pass
