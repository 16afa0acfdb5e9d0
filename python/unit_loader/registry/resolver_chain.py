"""Resolver Chain - Priority-Ordered Unit Resolution.

The ResolverChain orchestrates unit resolution by trying resolvers in
priority order until one reports that it located and loaded the unit.

Resolution Contract:
1. Try resolvers in priority order (lower = first)
2. Skip resolvers whose can_resolve() rejects the identifier
3. Stop at the first resolver whose resolve() returns True
4. Return False if no resolver can load the unit

Default Chain (when using Loader.setup()):
- Priority 10: ClassMapResolver     - explicit registrations
- Priority 20: PrefixResolver       - legacy prefix + camel case convention
- Priority 30: NamespaceV0Resolver  - namespace appended to root
- Priority 40: NamespaceV4Resolver  - namespace replaced by root
- Priority 50: ExtensionResolver    - extension layout probe
- Priority 60: AliasResolver        - alias indirection

Usage:
    chain = ResolverChain()
    chain.add_resolver(ClassMapResolver(loader))
    chain.add_resolver(PrefixResolver(loader))

    found = chain.resolve("JDatabaseDriver")

Resolvers with equal priority keep their insertion order.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from ..logging import log_debug, log_trace

if TYPE_CHECKING:
    from .base_resolver import BaseResolver


class ResolverChain:
    """Priority-ordered chain of unit resolvers.

    Attributes:
        resolvers: List of resolvers in priority order.
        resolvers_by_name: Mapping of resolver names to resolvers.
    """

    def __init__(self) -> None:
        """Initialize an empty resolver chain."""
        self._resolvers: list[BaseResolver] = []
        self._resolvers_by_name: dict[str, BaseResolver] = {}
        self._lock = threading.RLock()

    def add_resolver(self, resolver: BaseResolver) -> ResolverChain:
        """Add a resolver to the chain.

        Resolvers are kept sorted by priority (lower = first). Adding a
        resolver whose name is already present replaces the old one.

        Args:
            resolver: Resolver to add.

        Returns:
            Self for method chaining.
        """
        with self._lock:
            existing = self._resolvers_by_name.pop(resolver.name, None)
            if existing is not None:
                self._resolvers.remove(existing)
            self._resolvers.append(resolver)
            self._resolvers.sort(key=lambda r: r.priority)
            self._resolvers_by_name[resolver.name] = resolver
        return self

    def remove_resolver(self, name: str) -> BaseResolver | None:
        """Remove a resolver by name.

        Args:
            name: Resolver name to remove.

        Returns:
            Removed resolver or None if not found.
        """
        with self._lock:
            resolver = self._resolvers_by_name.pop(name, None)
            if resolver:
                self._resolvers.remove(resolver)
            return resolver

    def get_resolver(self, name: str) -> BaseResolver | None:
        """Get a resolver by name."""
        return self._resolvers_by_name.get(name)

    def has_resolver(self, name: str) -> bool:
        return name in self._resolvers_by_name

    def resolve(self, identifier: str) -> bool:
        """Resolve an identifier by trying each resolver in order.

        Args:
            identifier: The identifier to load.

        Returns:
            True if some resolver located and loaded the unit.
        """
        with self._lock:
            resolvers = list(self._resolvers)

        for resolver in resolvers:
            if not resolver.can_resolve(identifier):
                continue

            if resolver.resolve(identifier):
                log_debug(
                    f"ResolverChain: Resolved '{identifier}' via '{resolver.name}'",
                    {"identifier": identifier, "strategy": resolver.name},
                )
                return True

            log_trace(f"ResolverChain: '{resolver.name}' missed '{identifier}'")

        log_debug(f"ResolverChain: No resolver could handle '{identifier}'")
        return False

    def can_resolve(self, identifier: str) -> bool:
        """Check if any resolver is eligible for this identifier."""
        return any(r.can_resolve(identifier) for r in self._resolvers)

    def registered_keys(self) -> list[str]:
        """Get all registered keys across all resolvers."""
        keys: list[str] = []
        for resolver in self._resolvers:
            keys.extend(resolver.registered_keys())
        return list(dict.fromkeys(keys))

    def chain_info(self) -> list[dict[str, Any]]:
        """Get chain info for debugging.

        Returns:
            List of resolver info dicts.
        """
        return [
            {
                "name": resolver.name,
                "priority": resolver.priority,
                "keys": len(resolver.registered_keys()),
            }
            for resolver in self._resolvers
        ]

    def __len__(self) -> int:
        """Return number of resolvers in chain."""
        return len(self._resolvers)

    @property
    def resolver_names(self) -> list[str]:
        """Get names of resolvers in priority order."""
        return [r.name for r in self._resolvers]

    def list_resolvers(self) -> list[tuple[str, int]]:
        """List resolvers with their priorities.

        Returns:
            List of (name, priority) tuples in priority order.
        """
        return [(r.name, r.priority) for r in self._resolvers]


__all__ = ["ResolverChain"]
