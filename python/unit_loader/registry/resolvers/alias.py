"""Alias resolver (priority 60).

Resolves an alias by resolving its canonical identifier through the host
(which re-enters the whole chain) and binding the alias to the result.
"""

from __future__ import annotations

from ...naming import strip_leading_separator
from ..base_resolver import BaseResolver


class AliasResolver(BaseResolver):
    """Resolver for identifiers registered with register_alias."""

    @property
    def name(self) -> str:
        return "alias"

    @property
    def priority(self) -> int:
        return 60

    def can_resolve(self, identifier: str) -> bool:
        return strip_leading_separator(identifier) in self.context.aliases

    def resolve(self, identifier: str) -> bool:
        return self.context.resolve_alias_entry(identifier)

    def registered_keys(self) -> list[str]:
        return list(self.context.aliases.as_dict())


__all__ = ["AliasResolver"]
