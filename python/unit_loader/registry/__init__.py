r"""Unit resolution infrastructure.

This package provides the tables behind the loader and the resolver chain
that consults them. Resolvers are tried in priority order until one loads
the unit.

Tables:
- ClassMap: identifier -> file
- PathTable: prefix or namespace -> ordered roots
- AliasGraph: alias -> canonical, with inverse index and deprecation log

Built-in Resolvers:
- ClassMapResolver (priority 10)
- PrefixResolver (priority 20)
- NamespaceV0Resolver (priority 30)
- NamespaceV4Resolver (priority 40)
- ExtensionResolver (priority 50)
- AliasResolver (priority 60)

Custom Resolvers:
Extend BaseResolver and add it to the loader's chain:

    from unit_loader.registry import BaseResolver

    class VendorResolver(BaseResolver):
        name = "vendor"
        priority = 45

        def can_resolve(self, identifier):
            return identifier.startswith("Vendor.")

        def resolve(self, identifier):
            ...

    loader.chain.add_resolver(VendorResolver(loader))
"""

from __future__ import annotations

from .alias_graph import AliasGraph
from .base_resolver import BaseResolver
from .class_map import ClassMap
from .path_table import PathTable
from .resolver_chain import ResolverChain
from .resolvers import (
    AliasResolver,
    ClassMapResolver,
    ExtensionResolver,
    NamespaceV0Resolver,
    NamespaceV4Resolver,
    PrefixResolver,
)

__all__ = [
    # Tables
    "AliasGraph",
    "ClassMap",
    "PathTable",
    # Resolver base class
    "BaseResolver",
    # Resolver chain
    "ResolverChain",
    # Built-in resolvers
    "ClassMapResolver",
    "PrefixResolver",
    "NamespaceV0Resolver",
    "NamespaceV4Resolver",
    "ExtensionResolver",
    "AliasResolver",
]
