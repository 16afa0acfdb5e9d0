"""Key -> ordered roots table used for prefixes and namespaces.

Roots are searched in list order, so ``prepend=True`` makes a root win over
every root registered before it, and ``reset=True`` discards them all.
"""

from __future__ import annotations

from collections.abc import Iterator


class PathTable:
    """Mapping from a prefix or namespace to an ordered list of roots.

    The table does not check that roots exist; callers that take roots from
    users validate them first.

    Example:
        >>> table = PathTable()
        >>> table.add("Acme", "/srv/a")
        >>> table.add("Acme", "/srv/b", prepend=True)
        >>> table.get("Acme")
        ['/srv/b', '/srv/a']
        >>> table.add("Acme", "/srv/c", reset=True)
        >>> table.get("Acme")
        ['/srv/c']
    """

    def __init__(self) -> None:
        self._roots: dict[str, list[str]] = {}

    def add(self, key: str, root: str, reset: bool = False, prepend: bool = False) -> None:
        """Add a root for key.

        Args:
            key: Prefix or namespace.
            root: Directory to search.
            reset: Replace all roots of key with this one.
            prepend: Search this root before the existing ones.
        """
        roots = self._roots.get(key)
        if reset or roots is None:
            self._roots[key] = [root]
        elif prepend:
            roots.insert(0, root)
        else:
            roots.append(root)

    def get(self, key: str) -> list[str]:
        """Return a copy of the roots for key (empty if unknown)."""
        return list(self._roots.get(key, ()))

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate (key, roots) pairs in first-registration order."""
        for key, roots in list(self._roots.items()):
            yield key, list(roots)

    def as_dict(self) -> dict[str, list[str]]:
        return {key: list(roots) for key, roots in self._roots.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._roots

    def __len__(self) -> int:
        return len(self._roots)


__all__ = ["PathTable"]
