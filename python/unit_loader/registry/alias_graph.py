"""Alias graph: alias -> canonical identifiers and the inverse index.

Aliases are write-once. The canonical side may be written with a leading
namespace separator; the inverse index always stores it stripped, so
``aliases_of("Acme.Thing")`` finds aliases registered against
``".Acme.Thing"`` as well.
"""

from __future__ import annotations

from ..exceptions import AliasGraphInvariantError
from ..naming import strip_leading_separator
from ..types import NAMESPACE_SEPARATOR, DeprecatedAlias


class AliasGraph:
    """Bidirectional alias mapping plus the deprecated-alias log.

    Example:
        >>> graph = AliasGraph()
        >>> graph.register("JOldThing", "Acme.Thing")
        True
        >>> graph.register("JOldThing", "Acme.Other")
        False
        >>> graph.canonical_of("JOldThing")
        'Acme.Thing'
        >>> graph.aliases_of("Acme.Thing")
        ['JOldThing']
    """

    def __init__(self) -> None:
        self._aliases: dict[str, str] = {}
        self._inverse: dict[str, list[str]] = {}
        self._deprecated: list[DeprecatedAlias] = []

    def register(self, alias: str, canonical: str, version: str | None = None) -> bool:
        """Register alias as a synonym of canonical.

        Args:
            alias: The alias identifier.
            canonical: The identifier the alias stands for.
            version: If given, the alias is logged as deprecated as of it.

        Returns:
            True if registered, False if alias is already registered.
        """
        if alias in self._aliases:
            return False

        self._aliases[alias] = canonical

        stripped = strip_leading_separator(canonical)
        self._inverse.setdefault(stripped, []).append(alias)

        if version:
            self._deprecated.append(DeprecatedAlias(old=alias, new=stripped, version=str(version)))

        return True

    def canonical_of(self, alias: str) -> str | None:
        """Return the canonical identifier exactly as registered, or None."""
        return self._aliases.get(alias)

    def aliases_of(self, canonical: str) -> list[str]:
        """Return the aliases of canonical (leading separator ignored)."""
        return list(self._inverse.get(strip_leading_separator(canonical), ()))

    def find_alias_for(self, canonical: str) -> str | None:
        """Return the first alias whose stored canonical is canonical or .canonical."""
        for candidate in (canonical, NAMESPACE_SEPARATOR + canonical):
            for alias, target in self._aliases.items():
                if target == candidate:
                    return alias
        return None

    def deprecated(self) -> list[DeprecatedAlias]:
        return list(self._deprecated)

    def as_dict(self) -> dict[str, str]:
        return dict(self._aliases)

    def check_invariants(self) -> None:
        """Verify that the alias map and the inverse index agree.

        Raises:
            AliasGraphInvariantError: On the first inconsistency found.
        """
        for alias, canonical in self._aliases.items():
            if alias not in self._inverse.get(strip_leading_separator(canonical), ()):
                raise AliasGraphInvariantError(
                    f"Alias '{alias}' missing from inverse index of '{canonical}'"
                )

        for canonical, aliases in self._inverse.items():
            if len(aliases) != len(set(aliases)):
                raise AliasGraphInvariantError(f"Duplicate aliases recorded for '{canonical}'")
            for alias in aliases:
                target = self._aliases.get(alias)
                if target is None or strip_leading_separator(target) != canonical:
                    raise AliasGraphInvariantError(
                        f"Inverse entry '{canonical}' -> '{alias}' has no forward mapping"
                    )

    def __contains__(self, alias: object) -> bool:
        return alias in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)


__all__ = ["AliasGraph"]
