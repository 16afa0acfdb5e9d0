"""Extension layout resolver (priority 50).

Autoloads units that belong to an extension. The identifier must have at
least five segments and name the extension kind in its second segment:

- Component: ``Acme.Component.Content.Site.ArticleModel``
- Module:    ``Acme.Module.ArticlesLatest.Site.Helper``
- Plugin:    ``Acme.Plugin.System.Cache.Extension``

The fourth segment selects an extension root registered with
``register_extension_root`` (plugins always use the empty key). On a hit
the first four segments are registered as a v4 namespace rooted at the
extension directory, and the unit is loaded through the v4 resolver.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ...logging import log_debug, log_trace
from ...naming import split_camel_case_grouped, strip_leading_separator
from ...types import NAMESPACE_SEPARATOR, ExtensionKind, NamespaceVariant
from ..base_resolver import BaseResolver
from .namespace import NamespaceV4Resolver

if TYPE_CHECKING:
    from ...loader import Loader

MIN_SEGMENTS = 5

_KINDS = {kind.value: kind for kind in ExtensionKind}


class ExtensionResolver(BaseResolver):
    """Resolver that derives a namespace root from the extension layout."""

    def __init__(self, context: Loader) -> None:
        super().__init__(context)
        self._v4 = NamespaceV4Resolver(context)

    @property
    def name(self) -> str:
        return "extension"

    @property
    def priority(self) -> int:
        return 50

    def can_resolve(self, identifier: str) -> bool:
        segments = strip_leading_separator(identifier).split(NAMESPACE_SEPARATOR)
        return len(segments) >= MIN_SEGMENTS and segments[1] in _KINDS

    def resolve(self, identifier: str) -> bool:
        if not self.can_resolve(identifier):
            return False

        segments = strip_leading_separator(identifier).split(NAMESPACE_SEPARATOR)
        path = self.extension_path(segments)
        if path is None:
            return False

        filesystem = self.context.filesystem
        source = os.path.join(path, "src")
        if filesystem.exists(source):
            path = source

        if not filesystem.exists(path):
            log_trace(f"ExtensionResolver: '{path}' does not exist", {"identifier": identifier})
            return False

        namespace = NAMESPACE_SEPARATOR.join(segments[:4])
        if path not in self.context.namespace_table(NamespaceVariant.V4).get(namespace):
            self.context.add_namespace_root(namespace, path, NamespaceVariant.V4)
            log_debug(
                f"ExtensionResolver: Registered namespace '{namespace}'",
                {"path": path, "identifier": identifier},
            )

        return self._v4.resolve(identifier)

    def registered_keys(self) -> list[str]:
        return list(self.context.list_extension_roots())

    def extension_path(self, segments: list[str]) -> str | None:
        """Compose the extension directory, or None if no root is registered.

        Example:
            >>> resolver.extension_path(["Acme", "Module", "ArticlesLatest", "Site", "Helper"])
            '/srv/site/modules/mod_articles_latest'
        """
        kind = _KINDS[segments[1]]
        key = "" if kind is ExtensionKind.PLUGIN else segments[3]

        root = self.context.extension_root(key)
        if root is None:
            return None

        if kind is ExtensionKind.COMPONENT:
            return os.path.join(root, "components", "com_" + segments[2].lower())
        if kind is ExtensionKind.MODULE:
            name = "_".join(split_camel_case_grouped(segments[2])).lower()
            return os.path.join(root, "modules", "mod_" + name)
        return os.path.join(root, "plugins", segments[2].lower(), segments[3].lower())


__all__ = ["ExtensionResolver"]
