"""Hierarchical operation names (e.g. /Company/Edit)."""

from collections.abc import Iterable

from warden.domain.exceptions import InvalidArgument

SEPARATOR = "/"


def _normalize(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument(f"Operation name must be a non-empty string, got {name!r}")
    normalized = name.strip().rstrip(SEPARATOR)
    if not normalized:
        raise InvalidArgument(f"Operation name has no segments: {name!r}")
    return normalized


def parent_name(name: str) -> str | None:
    """Return the parent operation name, or None for a root-level name."""
    idx = name.rfind(SEPARATOR)
    if idx <= 0:
        return None
    return name[:idx].rstrip(SEPARATOR) or None


def ancestors_of(name: str) -> list[str]:
    """Return name followed by every ancestor prefix, most specific first."""
    current: str | None = _normalize(name)
    chain: list[str] = []
    while current:
        chain.append(current)
        current = parent_name(current)
    return chain


def expand_operation_names(names: str | Iterable[str] | None) -> list[str]:
    """
    Expand operation names into themselves plus all ancestor prefixes.

    /Company/Edit -> ["/Company/Edit", "/Company"]. Inputs are processed in
    order and duplicates keep their first position, so the result is stable
    for identical input. A permission on an ancestor applies to every
    descendant unless a more specific record overrides it.
    Raises InvalidArgument for a missing or empty list, or a blank name.
    """
    if names is None:
        raise InvalidArgument("Operation names are required")
    if isinstance(names, str):
        names = [names]
    names = list(names)
    if not names:
        raise InvalidArgument("At least one operation name is required")

    expanded: dict[str, None] = {}
    for name in names:
        for candidate in ancestors_of(name):
            expanded.setdefault(candidate, None)
    return list(expanded)
