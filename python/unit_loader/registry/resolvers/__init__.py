"""Built-in resolver implementations.

This module provides the default resolvers for the resolver chain:
- ClassMapResolver (priority 10): Explicit identifier -> file registrations
- PrefixResolver (priority 20): Prefix + camel case convention
- NamespaceV0Resolver (priority 30): Namespace appended to root
- NamespaceV4Resolver (priority 40): Namespace replaced by root
- ExtensionResolver (priority 50): Extension layout probe
- AliasResolver (priority 60): Alias indirection
"""

from __future__ import annotations

from .alias import AliasResolver
from .class_map import ClassMapResolver
from .extension import ExtensionResolver
from .namespace import NamespaceV0Resolver, NamespaceV4Resolver
from .prefix import PrefixResolver

__all__ = [
    "ClassMapResolver",
    "PrefixResolver",
    "NamespaceV0Resolver",
    "NamespaceV4Resolver",
    "ExtensionResolver",
    "AliasResolver",
]
