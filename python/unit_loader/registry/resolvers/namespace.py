"""Hierarchical namespace resolvers (priorities 30 and 40).

Both resolvers map a dotted identifier to a file under the roots registered
for a namespace that the identifier starts with. They differ in how the
namespace relates to the root:

- v0: the whole identifier path is appended to the root, and ``_`` inside
  the unit name becomes a directory separator.
  ``Acme.Blog.Post_Draft`` with ``Acme`` -> ``/lib`` loads
  ``/lib/Acme/Blog/Post/Draft.py``.
- v4: the registered namespace is replaced by the root and the unit name is
  used verbatim.
  ``Acme.Blog.Post_Draft`` with ``Acme.Blog`` -> ``/src`` loads
  ``/src/Post_Draft.py``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ...naming import strip_leading_separator
from ...types import LEGACY_WORD_SEPARATOR, NAMESPACE_SEPARATOR, NamespaceVariant
from ..base_resolver import BaseResolver

if TYPE_CHECKING:
    from ..path_table import PathTable


def compose_relative_path(identifier: str, extension: str, legacy: bool) -> str:
    """Build the relative file path for a (leading-separator-free) identifier.

    Example:
        >>> compose_relative_path("Acme.Blog.Post_Draft", ".py", legacy=True)
        'Acme/Blog/Post/Draft.py'
        >>> compose_relative_path("Acme.Blog.Post_Draft", ".py", legacy=False)
        'Acme/Blog/Post_Draft.py'
    """
    namespace, _, unit = identifier.rpartition(NAMESPACE_SEPARATOR)
    directory = namespace.replace(NAMESPACE_SEPARATOR, os.sep) + os.sep if namespace else ""

    if legacy:
        unit = unit.replace(LEGACY_WORD_SEPARATOR, os.sep)

    return directory + unit + extension


class _NamespaceResolver(BaseResolver):
    variant: NamespaceVariant

    @property
    def table(self) -> PathTable:
        return self.context.namespace_table(self.variant)

    def can_resolve(self, identifier: str) -> bool:
        return len(self.table) > 0

    def registered_keys(self) -> list[str]:
        return [namespace for namespace, _ in self.table.items()]

    def _try_file(self, identifier: str, path: str) -> bool | None:
        """Load path if it exists and identifier is not yet defined.

        Returns None when the candidate does not apply, so the search goes on.
        """
        context = self.context
        if context.filesystem.is_file(path) and not context.host.exists(identifier):
            return context.load_unit(identifier, path)
        return None


class NamespaceV0Resolver(_NamespaceResolver):
    """Resolver for the v0 convention (namespace path appended to the root)."""

    variant = NamespaceVariant.V0

    @property
    def name(self) -> str:
        return "namespace_v0"

    @property
    def priority(self) -> int:
        return 30

    def resolve(self, identifier: str) -> bool:
        identifier = strip_leading_separator(identifier)
        relative = compose_relative_path(identifier, self.context.unit_extension, legacy=True)

        for namespace, roots in self.table.items():
            if not identifier.startswith(namespace):
                continue
            for root in roots:
                found = self._try_file(identifier, os.path.join(root, relative))
                if found is not None:
                    return found

        return False


class NamespaceV4Resolver(_NamespaceResolver):
    """Resolver for the v4 convention (namespace prefix replaced by the root)."""

    variant = NamespaceVariant.V4

    @property
    def name(self) -> str:
        return "namespace_v4"

    @property
    def priority(self) -> int:
        return 40

    def resolve(self, identifier: str) -> bool:
        identifier = strip_leading_separator(identifier)
        extension = self.context.unit_extension
        relative = compose_relative_path(identifier, extension, legacy=False)

        for namespace, roots in self.table.items():
            # Acme.Blog covers Acme.Blog.X but not Acme.Blogx.X
            boundary = namespace.strip(NAMESPACE_SEPARATOR)
            if boundary and not identifier.startswith(boundary + NAMESPACE_SEPARATOR):
                continue

            namespace_path = boundary.replace(NAMESPACE_SEPARATOR, os.sep)
            remainder = relative[len(namespace_path) + 1 :] if namespace_path else relative
            if len(remainder) <= len(extension):
                continue

            for root in roots:
                found = self._try_file(identifier, os.path.join(root, remainder.lstrip(os.sep)))
                if found is not None:
                    return found

        return False


__all__ = ["NamespaceV0Resolver", "NamespaceV4Resolver", "compose_relative_path"]
