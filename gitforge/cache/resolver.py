"""Tolerant template-name lookup against a populated cache."""

from gitforge.core.exceptions import TemplateNotFoundError
from gitforge.core.models import Cache


def resolve_template(template_name: str, cache: Cache[str], kind: str = "gitignore") -> str:
    """Find the cached payload best matching a user-typed template name.

    Candidates are tried in a fixed order and the first hit wins:

    1. the lowercased name, then the lowercased name with ``/`` turned
       into ``-`` (``Global/Windows`` -> ``global-windows``)
    2. the part after the last ``/`` (``Global/Windows`` -> ``windows``)
    3. a scan of every stored key, lowercased, for equality with either
       form above or a suffix match in either direction

    Args:
        template_name: Name as typed by the user
        cache: Cache whose keys come from the remote index
        kind: Template family, used in the not-found message

    Returns:
        The stored payload (a relative path or identifier)

    Raises:
        TemplateNotFoundError: If nothing matches
    """
    normalized = template_name.lower()
    dash_normalized = normalized.replace("/", "-")

    for candidate in (normalized, dash_normalized):
        data = cache.get(candidate)
        if data is not None:
            return data

    if "/" in normalized:
        data = cache.get(normalized.rsplit("/", 1)[1])
        if data is not None:
            return data

    # Several keys may satisfy the suffix rules; dict order decides.
    for cache_key, entry in cache.entries.items():
        key_lower = cache_key.lower()
        if (
            key_lower == normalized
            or key_lower == dash_normalized
            or key_lower.endswith(normalized)
            or normalized.endswith(key_lower)
        ):
            return entry.data

    raise TemplateNotFoundError(template_name, kind=kind)
