"""Abstract base class for unit resolvers.

This module defines the contract that all resolution strategies implement.
Resolvers are tried in priority order by the ResolverChain until one
reports that it located and loaded the unit.

Resolution Contract:
1. name - Human-readable identifier for logging/debugging
2. priority - Lower numbers = tried first (10 = classmap, 60 = alias)
3. can_resolve() - Cheap check if this resolver might handle the identifier
4. resolve() - Locate and load the unit, True on success

Example Implementation:
    class VendorResolver(BaseResolver):
        @property
        def name(self) -> str:
            return "vendor"

        @property
        def priority(self) -> int:
            return 45  # Between namespace_v4 (40) and extension (50)

        def can_resolve(self, identifier: str) -> bool:
            return identifier.startswith("Vendor.")

        def resolve(self, identifier: str) -> bool:
            # Locate a file and ask the context to load it
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..loader import Loader


class BaseResolver(ABC):
    """Abstract base class for unit resolvers.

    Built-in resolvers receive the Loader context that owns the tables
    they read and the host they load into.
    """

    def __init__(self, context: Loader) -> None:
        self._context = context

    @property
    def context(self) -> Loader:
        return self._context

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this resolver (for logging/debugging)."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Resolution priority (lower = tried first).

        Standard priorities:
        - 10: ClassMap
        - 20: Prefix convention
        - 30: Namespace v0
        - 40: Namespace v4
        - 50: Extension probe
        - 60: Alias
        """
        ...

    @abstractmethod
    def can_resolve(self, identifier: str) -> bool:
        """Quick eligibility check (called before resolve).

        Args:
            identifier: The identifier being resolved.

        Returns:
            True if this resolver might be able to load the unit.
        """
        ...

    @abstractmethod
    def resolve(self, identifier: str) -> bool:
        """Locate and load the unit for identifier.

        Args:
            identifier: The identifier being resolved.

        Returns:
            True if a unit was found and loaded, False otherwise.
        """
        ...

    def registered_keys(self) -> list[str]:
        """Return the keys (identifiers, prefixes, namespaces) this resolver knows.

        Used for debugging and introspection.
        """
        return []


__all__ = ["BaseResolver"]
