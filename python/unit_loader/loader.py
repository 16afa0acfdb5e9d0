"""Loader context: owns every resolution table and the resolver chain.

A Loader holds the classmap, the prefix and namespace tables, the alias
graph, the extension roots and the library import memo, together with the
host the units are loaded into. All state lives for the lifetime of the
loader; nothing is persisted.

Example:
    >>> from unit_loader import Loader
    >>>
    >>> loader = Loader()
    >>> loader.register_prefix("J", "/srv/app/libraries/platform")
    >>> loader.register_namespace("Acme.Blog", "/srv/app/blog/src", variant="v4")
    >>> loader.register_alias("JArticle", "Acme.Blog.Article", version="5.0")
    >>> loader.setup()
    >>>
    >>> loader.resolve("JDatabaseDriver")   # /srv/app/libraries/platform/database/driver.py
    True
    >>> loader.resolve("JArticle")          # loads Acme.Blog.Article, binds the alias
    True

``Loader.instance()`` returns the process-wide loader; tests create their
own ``Loader()`` objects instead.
"""

from __future__ import annotations

import os
import threading
from typing import Any

from .events import EventBridge, EventNames
from .exceptions import PathNotFoundError
from .filesystem import FileSystem, LocalFileSystem
from .host import ModuleHost, UnitHost
from .logging import log_debug, log_info, log_trace, log_warn
from .naming import strip_leading_separator
from .registry import (
    AliasGraph,
    AliasResolver,
    ClassMap,
    ClassMapResolver,
    ExtensionResolver,
    NamespaceV0Resolver,
    NamespaceV4Resolver,
    PathTable,
    PrefixResolver,
    ResolverChain,
)
from .types import DeprecatedAlias, LoaderConfig, NamespaceVariant


class Loader:
    """Process-lifetime registry of unit locations.

    Thread-safe: every table mutation and every resolution runs under one
    reentrant lock, which the default ModuleHost shares.
    """

    _instance: Loader | None = None

    def __init__(
        self,
        config: LoaderConfig | None = None,
        host: UnitHost | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize an empty loader.

        Args:
            config: Loader settings. Defaults to LoaderConfig().
            host: Host runtime to load units into. Defaults to a ModuleHost
                sharing this loader's lock.
            filesystem: File system primitives. Defaults to LocalFileSystem.
        """
        self._config = config or LoaderConfig()
        self._lock = threading.RLock()
        self._host = host if host is not None else ModuleHost(lock=self._lock)
        self._filesystem = filesystem if filesystem is not None else LocalFileSystem()

        self._aliases = AliasGraph()
        self._class_map = ClassMap(self._filesystem, self._aliases, self._config.unit_extension)
        self._prefixes = PathTable()
        self._namespaces: dict[NamespaceVariant, PathTable] = {
            NamespaceVariant.V0: PathTable(),
            NamespaceVariant.V4: PathTable(),
        }
        self._extension_roots: dict[str, str] = {}
        self._imported: dict[str, bool] = {}

        self._chain = ResolverChain()
        self._events = EventBridge()
        self._events.start()
        self._installed = False

    @classmethod
    def instance(cls) -> Loader:
        """Get the process-wide Loader instance.

        Example:
            >>> loader = Loader.instance()
            >>> assert loader is Loader.instance()
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_instance(cls, loader: Loader) -> None:
        """Install loader as the process-wide instance (used by bootstrap)."""
        cls._instance = loader

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the process-wide instance.

        This is primarily for testing to ensure a clean state between tests.
        """
        if cls._instance is not None:
            cls._instance.teardown()
        cls._instance = None

    # ------------------------------------------------------------------
    # Collaborators and tables
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def host(self) -> UnitHost:
        return self._host

    @property
    def filesystem(self) -> FileSystem:
        return self._filesystem

    @property
    def chain(self) -> ResolverChain:
        return self._chain

    @property
    def events(self) -> EventBridge:
        return self._events

    @property
    def class_map(self) -> ClassMap:
        return self._class_map

    @property
    def prefixes(self) -> PathTable:
        return self._prefixes

    @property
    def aliases(self) -> AliasGraph:
        return self._aliases

    @property
    def unit_extension(self) -> str:
        return self._config.unit_extension

    def namespace_table(self, variant: NamespaceVariant | str) -> PathTable:
        """Return the namespace table for a variant.

        Raises:
            InvalidVariantError: If variant is not v0 or v4.
        """
        return self._namespaces[NamespaceVariant.parse(variant)]

    def extension_root(self, key: str) -> str | None:
        return self._extension_roots.get(key)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_class(self, identifier: str, path: str, force: bool = True) -> None:
        """Register the unit file for an identifier in the classmap.

        Silently ignored if the identifier is empty or the file does not
        exist. When identifier is an alias, its canonical identifier is
        registered with the same path as well.

        Args:
            identifier: Identifier to register (case-insensitive).
            path: Path to the unit file.
            force: Overwrite an existing registration.
        """
        with self._lock:
            self._class_map.register(identifier, path, force)

    def discover_classes(
        self,
        prefix: str,
        root_dir: str,
        force: bool = True,
        recurse: bool = False,
    ) -> int:
        """Register every unit file in a directory as ``prefix + stem``.

        Args:
            prefix: Identifier prefix for discovered units.
            root_dir: Directory to scan. A missing directory is ignored.
            force: Overwrite existing registrations.
            recurse: Also scan subdirectories.

        Returns:
            Number of unit files registered.
        """
        with self._lock:
            return self._class_map.discover(prefix, root_dir, force, recurse)

    def register_prefix(
        self,
        prefix: str,
        path: str,
        reset: bool = False,
        prepend: bool = False,
    ) -> None:
        """Register a prefix with a lookup root.

        More than one root may be registered for the same prefix. Roots are
        searched in list order; ``prepend`` puts the new root first and
        ``reset`` replaces all roots with the new one.

        Args:
            prefix: The identifier prefix to register.
            path: Root directory where units with this prefix live.
            reset: Replace all roots of the prefix with path.
            prepend: Search path before the already registered roots.

        Raises:
            PathNotFoundError: If path does not exist.
        """
        self._require_path(path)
        with self._lock:
            self._prefixes.add(prefix, path, reset=reset, prepend=prepend)
        log_debug(f"Loader: Registered prefix '{prefix}'", {"path": path})

    def register_namespace(
        self,
        namespace: str,
        path: str,
        reset: bool = False,
        prepend: bool = False,
        variant: NamespaceVariant | str = NamespaceVariant.V0,
    ) -> None:
        """Register a namespace with a lookup root.

        Args:
            namespace: Case-sensitive namespace, e.g. ``Acme.Blog``.
            path: Case-sensitive root directory for the namespace.
            reset: Replace all roots of the namespace with path.
            prepend: Search path before the already registered roots.
            variant: ``v0`` or ``v4``.

        Raises:
            InvalidVariantError: If variant is not v0 or v4.
            PathNotFoundError: If path does not exist.
        """
        parsed = NamespaceVariant.parse(variant)
        self._require_path(path)
        self.add_namespace_root(namespace, path, parsed, reset=reset, prepend=prepend)

    def add_namespace_root(
        self,
        namespace: str,
        path: str,
        variant: NamespaceVariant,
        reset: bool = False,
        prepend: bool = False,
    ) -> None:
        """Add a namespace root without checking that it exists."""
        with self._lock:
            self._namespaces[variant].add(namespace, path, reset=reset, prepend=prepend)
        log_debug(
            f"Loader: Registered {variant.value} namespace '{namespace}'",
            {"path": path},
        )
        self._events.publish(EventNames.NAMESPACE_REGISTERED, variant, namespace, path)

    def register_alias(self, alias: str, canonical: str, version: str | None = None) -> bool:
        """Register an alias that resolves to canonical on first use.

        An alias can only be registered once.

        Args:
            alias: The alias identifier.
            canonical: The identifier the alias stands for.
            version: Version in which the alias goes away; marks it deprecated.

        Returns:
            True if registered, False if the alias already exists.
        """
        with self._lock:
            registered = self._aliases.register(alias, canonical, version)
            record = self._aliases.deprecated()[-1] if registered and version else None

        if not registered:
            log_trace(f"Loader: Alias '{alias}' already registered")
            return False

        log_debug(f"Loader: Registered alias '{alias}' -> '{canonical}'")
        if record is not None:
            self._events.publish(EventNames.ALIAS_DEPRECATED, record)
        return True

    def register_extension_root(self, key: str, path: str) -> None:
        """Register the root folder where extensions for key live.

        Example:
            >>> loader.register_extension_root("Site", "/srv/app")
            >>> loader.register_extension_root("Administrator", "/srv/app/administrator")
            >>> loader.register_extension_root("", "/srv/app")  # plugins
        """
        with self._lock:
            self._extension_roots[key] = path
        log_debug(f"Loader: Registered extension root '{key}'", {"path": path})

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def setup(
        self,
        enable_convention_lookup: bool | None = None,
        enable_prefix_lookup: bool | None = None,
        enable_classmap_lookup: bool | None = None,
    ) -> None:
        """Install the selected resolvers and hook the chain into the host.

        The classmap resolver goes first so explicitly registered units
        override convention-based ones. Flags left as None fall back to the
        loader config.

        Args:
            enable_convention_lookup: Namespace v0/v4, extension and alias resolvers.
            enable_prefix_lookup: Prefix resolver (and the platform prefix).
            enable_classmap_lookup: ClassMap resolver.
        """
        config = self._config
        if enable_convention_lookup is None:
            enable_convention_lookup = config.enable_convention_lookup
        if enable_prefix_lookup is None:
            enable_prefix_lookup = config.enable_prefix_lookup
        if enable_classmap_lookup is None:
            enable_classmap_lookup = config.enable_classmap_lookup

        self._events.start()

        with self._lock:
            if enable_classmap_lookup:
                self._chain.add_resolver(ClassMapResolver(self))

            if enable_prefix_lookup:
                self._register_platform_prefix()
                self._chain.add_resolver(PrefixResolver(self))

            if enable_convention_lookup:
                self._chain.add_resolver(NamespaceV0Resolver(self))
                self._chain.add_resolver(NamespaceV4Resolver(self))
                self._chain.add_resolver(ExtensionResolver(self))
                self._chain.add_resolver(AliasResolver(self))

            if not self._installed:
                self._host.register_autoloader(self._chain.resolve)
                self._installed = True

        log_info(
            "Loader: Setup complete",
            {"resolvers": ",".join(self._chain.resolver_names)},
        )

    def teardown(self) -> None:
        """Unhook the chain from the host and stop publishing events."""
        with self._lock:
            if self._installed:
                self._host.unregister_autoloader(self._chain.resolve)
                self._installed = False
        self._events.stop()

    def resolve(self, identifier: str) -> bool:
        """Resolve an identifier, loading its unit on first reference.

        Args:
            identifier: Flat, dotted, or prefixed identifier.

        Returns:
            True if the unit is already defined or a resolver loaded it.
        """
        with self._lock:
            if self._host.exists(identifier):
                return True
            return self._chain.resolve(identifier)

    def get(self, identifier: str) -> Any | None:
        """Resolve identifier and return the object the host published for it."""
        if self.resolve(identifier):
            return self._host.get(strip_leading_separator(identifier))
        return None

    def load_unit(self, identifier: str, path: str) -> bool:
        """Materialize path for identifier and propagate to its aliases."""
        found = self._host.materialize(path)
        if found:
            self._events.publish(EventNames.UNIT_MATERIALIZED, identifier, path)
            self.propagate_for(identifier)
        return found

    def propagate_for(self, identifier: str) -> None:
        """Autoload every alias of a just-loaded identifier."""
        for alias in self._aliases.aliases_of(identifier):
            self._host.exists(alias, autoload=True)

    def resolve_alias_entry(self, identifier: str) -> bool:
        """Resolve an alias through its canonical identifier.

        Returns:
            True if the canonical identifier could be resolved.
        """
        alias = strip_leading_separator(identifier)
        canonical = self._aliases.canonical_of(alias)
        if canonical is None:
            return False

        canonical = strip_leading_separator(canonical)
        found = self._host.exists(canonical, autoload=True)
        if found and not self._host.exists(alias):
            self.bind_synonym(canonical, alias)
        return found

    def apply_alias_for(self, identifier: str) -> None:
        """Bind every registered alias of an already defined identifier."""
        canonical = strip_leading_separator(identifier)
        for alias in self._aliases.aliases_of(canonical):
            self.bind_synonym(canonical, alias)

    def bind_synonym(self, canonical: str, alias: str) -> bool:
        """Bind alias to canonical in the host and publish the binding."""
        bound = self._host.bind_synonym(canonical, alias)
        if not bound:
            log_trace(f"Loader: Could not bind '{alias}' to '{canonical}'")
            return False

        self._events.publish(EventNames.ALIAS_BOUND, canonical, alias)
        record = self._deprecation_of(alias)
        if record is not None:
            log_warn(
                f"Loader: '{alias}' is deprecated, use '{record.new}'",
                {"identifier": alias, "version": record.version},
            )
            self._events.publish(EventNames.ALIAS_DEPRECATED, record)
        return True

    def import_library_key(self, key: str, base_dir: str | None = None) -> bool:
        """Import a library by dotted key, at most once per key.

        Keys under the platform namespace are registered in the classmap
        with the platform prefix (``platform.database.driver`` ->
        ``JDriver``); other keys are executed directly. A ``helper`` last
        segment names ``<Previous>Helper``.

        Args:
            key: Dotted library key.
            base_dir: Directory the key is relative to. Defaults to the
                configured library root, then the working directory.

        Returns:
            True if the library was found; the memoized result on later calls.
        """
        with self._lock:
            if key in self._imported:
                return self._imported[key]

            # Claim the key before any unit code runs
            self._imported[key] = False
            success = self._import_library(key, base_dir)
            self._imported[key] = success

        self._events.publish(EventNames.LIBRARY_IMPORTED, key, success)
        return success

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def list_class_map(self) -> dict[str, str]:
        return self._class_map.as_dict()

    def list_prefixes(self) -> dict[str, list[str]]:
        return self._prefixes.as_dict()

    def list_namespaces(self, variant: NamespaceVariant | str = NamespaceVariant.V0) -> dict[str, list[str]]:
        """Return namespace -> roots for a variant.

        Raises:
            InvalidVariantError: If variant is not v0 or v4.
        """
        return self.namespace_table(variant).as_dict()

    def list_aliases(self) -> dict[str, str]:
        return self._aliases.as_dict()

    def list_deprecated_aliases(self) -> list[DeprecatedAlias]:
        return self._aliases.deprecated()

    def list_extension_roots(self) -> dict[str, str]:
        return dict(self._extension_roots)

    def list_imported(self) -> dict[str, bool]:
        return dict(self._imported)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _import_library(self, key: str, base_dir: str | None) -> bool:
        config = self._config
        base = base_dir or config.library_root or os.getcwd()

        parts = key.split(".")
        name = parts.pop()
        if name == "helper":
            owner = parts.pop() if parts else ""
            name = _upper_first(owner) + "Helper"
        else:
            name = _upper_first(name)

        relative = key.replace(".", os.sep)
        path = os.path.join(base, relative) + config.unit_extension

        if relative.startswith(config.platform_namespace):
            if not self._filesystem.is_file(path):
                return False
            self._class_map.register(config.platform_prefix + name, path)
            log_debug(f"Loader: Imported platform library '{key}'", {"path": path})
            return True

        if not self._filesystem.is_file(path):
            log_trace(f"Loader: No library file for '{key}'", {"path": path})
            return False

        log_debug(f"Loader: Importing library '{key}'", {"path": path})
        return self._host.materialize(path)

    def _register_platform_prefix(self) -> None:
        config = self._config
        root = config.platform_root
        if not root or not config.platform_prefix or not self._filesystem.exists(root):
            return
        if root not in self._prefixes.get(config.platform_prefix):
            self._prefixes.add(config.platform_prefix, root)

    def _require_path(self, path: str) -> None:
        if self._filesystem.exists(path):
            return

        display = self._display_path(path)
        log_warn(f"Loader: Library path {display} cannot be found")
        raise PathNotFoundError(display)

    def _display_path(self, path: str) -> str:
        root = self._config.root_path
        if root and root in path:
            return path.replace(root, "")
        return os.path.basename(path)

    def _deprecation_of(self, alias: str) -> DeprecatedAlias | None:
        for record in self._aliases.deprecated():
            if record.old == alias:
                return record
        return None


def _upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


__all__ = ["Loader"]
