"""ClassMap resolver (priority 10).

Loads units registered directly in the classmap. It is the cheapest and
most authoritative strategy and is always tried first when enabled.

Example:
    >>> loader.register_class("JFoo", "/srv/app/libraries/foo.py")
    >>> ClassMapResolver(loader).resolve("JFoo")
    True
"""

from __future__ import annotations

from ...logging import log_trace
from ...naming import strip_leading_separator
from ..base_resolver import BaseResolver


class ClassMapResolver(BaseResolver):
    """Resolver for identifiers registered in the classmap.

    After the mapped file runs, the requested identifier may still be
    undefined because the file declares the unit under a related alias
    name. In that case the two names are bound together without loading
    another file.
    """

    @property
    def name(self) -> str:
        return "class_map"

    @property
    def priority(self) -> int:
        return 10

    def can_resolve(self, identifier: str) -> bool:
        return identifier in self.context.class_map

    def resolve(self, identifier: str) -> bool:
        context = self.context
        host = context.host

        if host.exists(identifier):
            return True

        path = context.class_map.get(identifier)
        if path is None:
            return False

        context.load_unit(identifier, path)

        if not host.exists(identifier):
            self._bind_related(identifier)

        return True

    def registered_keys(self) -> list[str]:
        return list(self.context.class_map.as_dict())

    def _bind_related(self, identifier: str) -> None:
        context = self.context
        host = context.host

        # The file defined an alias whose canonical is the identifier
        alias = context.aliases.find_alias_for(identifier)
        if alias is not None and host.exists(alias):
            context.bind_synonym(alias, identifier)
            return

        # The file defined the canonical of the identifier
        canonical = context.aliases.canonical_of(identifier)
        if canonical is not None:
            canonical = strip_leading_separator(canonical)
            if host.exists(canonical):
                context.bind_synonym(canonical, identifier)
                return

        log_trace(f"ClassMapResolver: '{identifier}' still undefined after load")


__all__ = ["ClassMapResolver"]
