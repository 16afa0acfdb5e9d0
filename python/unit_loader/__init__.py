"""
unit-loader

Resolves symbolic identifiers to unit files on disk and loads them on first
reference. A Loader consults a priority-ordered chain of strategies:
direct classmap entries, a prefix + camel case convention, two hierarchical
namespace conventions, an extension layout probe, and alias indirection.

Example:
    >>> from unit_loader import Loader
    >>>
    >>> loader = Loader()
    >>> loader.register_prefix("J", "/srv/app/libraries/platform")
    >>> loader.register_namespace("Acme.Blog", "/srv/app/blog/src", variant="v4")
    >>> loader.setup()
    >>>
    >>> loader.resolve("JDatabaseDriver")
    True
    >>> loader.get("Acme.Blog.Article").__name__
    'Article'

    >>> # Configure the process-wide loader from unit_loader.yaml
    >>> from unit_loader import bootstrap_loader
    >>> loader = bootstrap_loader()
"""

from __future__ import annotations

from unit_loader.bootstrap import (
    bootstrap_loader,
    exit_process,
    find_config_file,
    import_library,
    load_config,
)
from unit_loader.events import EventBridge, EventNames
from unit_loader.exceptions import (
    AliasGraphInvariantError,
    ConfigurationError,
    InvalidVariantError,
    LoaderError,
    PathNotFoundError,
)
from unit_loader.filesystem import DirectoryEntry, FileSystem, LocalFileSystem
from unit_loader.host import ModuleHost, UnitHost
from unit_loader.loader import Loader
from unit_loader.logging import (
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
    set_log_level,
)
from unit_loader.registry import (
    AliasGraph,
    AliasResolver,
    BaseResolver,
    ClassMap,
    ClassMapResolver,
    ExtensionResolver,
    NamespaceV0Resolver,
    NamespaceV4Resolver,
    PathTable,
    PrefixResolver,
    ResolverChain,
)
from unit_loader.types import (
    NAMESPACE_SEPARATOR,
    DeprecatedAlias,
    ExtensionKind,
    LoaderConfig,
    LogContext,
    NamespaceVariant,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Loader context
    "Loader",
    # Bootstrap
    "bootstrap_loader",
    "load_config",
    "find_config_file",
    "import_library",
    "exit_process",
    # Host and file system
    "UnitHost",
    "ModuleHost",
    "FileSystem",
    "LocalFileSystem",
    "DirectoryEntry",
    # Registry
    "AliasGraph",
    "ClassMap",
    "PathTable",
    "ResolverChain",
    "BaseResolver",
    "ClassMapResolver",
    "PrefixResolver",
    "NamespaceV0Resolver",
    "NamespaceV4Resolver",
    "ExtensionResolver",
    "AliasResolver",
    # Events
    "EventBridge",
    "EventNames",
    # Types
    "NAMESPACE_SEPARATOR",
    "NamespaceVariant",
    "ExtensionKind",
    "DeprecatedAlias",
    "LoaderConfig",
    "LogContext",
    # Exceptions
    "LoaderError",
    "PathNotFoundError",
    "InvalidVariantError",
    "AliasGraphInvariantError",
    "ConfigurationError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    "set_log_level",
]
