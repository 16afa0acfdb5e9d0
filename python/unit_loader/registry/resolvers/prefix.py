"""Prefix convention resolver (priority 20).

Maps a flat identifier made of a registered prefix and a camel-case
remainder to a file path: with prefix ``J`` rooted at ``/lib``,
``JDatabaseDriver`` is looked up at ``/lib/database/driver.py``.

The prefix ends where an uppercase character follows it, so ``J`` matches
``JFoo`` but not ``Jfoo``.
"""

from __future__ import annotations

import os

from ...logging import log_trace
from ...naming import split_camel_case
from ..base_resolver import BaseResolver


class PrefixResolver(BaseResolver):
    """Resolver for the legacy prefix + camel case convention.

    Prefixes are checked in registration order and only the first matching
    prefix is searched. Its roots are searched in list order and the first
    existing file is loaded.
    """

    @property
    def name(self) -> str:
        return "prefix"

    @property
    def priority(self) -> int:
        return 20

    def can_resolve(self, identifier: str) -> bool:
        return len(self.context.prefixes) > 0

    def resolve(self, identifier: str) -> bool:
        for prefix, roots in self.context.prefixes.items():
            if self.matches(prefix, identifier):
                return self._load(identifier, identifier[len(prefix) :], roots)
        return False

    def registered_keys(self) -> list[str]:
        return [prefix for prefix, _ in self.context.prefixes.items()]

    @staticmethod
    def matches(prefix: str, identifier: str) -> bool:
        """Check if identifier starts with prefix at a word boundary.

        The character after the prefix must not be a lowercase letter.

        Example:
            >>> PrefixResolver.matches("J", "JFoo")
            True
            >>> PrefixResolver.matches("J", "Jfoo")
            False
            >>> PrefixResolver.matches("J", "J")
            False
        """
        if len(identifier) <= len(prefix) or not identifier.startswith(prefix):
            return False
        next_char = identifier[len(prefix)]
        return next_char == next_char.upper()

    def _load(self, identifier: str, remainder: str, roots: list[str]) -> bool:
        context = self.context
        extension = context.unit_extension
        parts = [part.lower() for part in split_camel_case(remainder)]

        for root in roots:
            path = os.path.join(root, *parts) + extension
            if context.filesystem.is_file(path):
                return context.load_unit(identifier, path)

            # Backward compatibility: a single-word unit may live in name/name.py
            if len(parts) == 1:
                path = os.path.join(root, parts[0], parts[0]) + extension
                if context.filesystem.is_file(path):
                    return context.load_unit(identifier, path)

        log_trace(f"PrefixResolver: No file for '{identifier}'", {"roots": ",".join(roots)})
        return False


__all__ = ["PrefixResolver"]
