"""Host runtime: executes unit files and owns the symbol table.

The loader never executes code itself. It asks a UnitHost to materialize a
file, to tell whether a symbol is defined, and to bind one symbol name as a
synonym of another. The host also keeps the autoloader stack: asking for a
symbol with ``autoload=True`` runs each registered autoloader in order until
the symbol is defined.

ModuleHost is the default implementation. A unit file is executed as a fresh
module and every class defined at its top level is published:

    # units/foo.py
    __namespace__ = "Acme.Blog"

    class Article:         # published as "Acme.Blog.Article"
        ...

Without ``__namespace__`` the bare class name is used.
"""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import os
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from types import ModuleType
from typing import Any

from .logging import log_debug, log_trace
from .types import NAMESPACE_SEPARATOR

Autoloader = Callable[[str], Any]

UNIT_MODULE_PREFIX = "_unit_loader_units"


class UnitHost(ABC):
    """Abstract host runtime interface."""

    @abstractmethod
    def materialize(self, path: str) -> bool:
        """Execute the unit at path once and publish its symbols.

        Returns:
            True if the unit was executed now or earlier.
        """
        ...

    @abstractmethod
    def exists(self, name: str, autoload: bool = False) -> bool:
        """Check if a symbol is defined, optionally running the autoloaders."""
        ...

    @abstractmethod
    def bind_synonym(self, canonical: str, alias: str) -> bool:
        """Make alias resolve to the same object as canonical.

        Returns:
            False if canonical is undefined or alias is bound to something else.
        """
        ...

    @abstractmethod
    def get(self, name: str) -> Any | None:
        """Return the object published under name, or None."""
        ...

    @abstractmethod
    def register_autoloader(self, autoloader: Autoloader) -> None:
        """Append an autoloader to the stack (no-op if already registered)."""
        ...

    @abstractmethod
    def unregister_autoloader(self, autoloader: Autoloader) -> bool:
        """Remove an autoloader. Returns False if it was not registered."""
        ...


class ModuleHost(UnitHost):
    """UnitHost that executes unit files as Python modules.

    Thread-safe: the symbol table, the executed-file set and the autoloader
    stack share one reentrant lock, so an autoloader may call back into the
    host while it runs. A Loader passes its own lock in, so the host and
    the loader tables are guarded by a single lock.

    Example:
        >>> host = ModuleHost()
        >>> host.materialize("/srv/app/units/article.py")
        True
        >>> host.exists("Acme.Blog.Article")
        True
    """

    def __init__(self, lock: threading.RLock | None = None) -> None:
        self._symbols: dict[str, Any] = {}
        self._modules: dict[str, ModuleType] = {}
        self._autoloaders: list[Autoloader] = []
        self._autoloading: set[str] = set()
        self._lock = lock if lock is not None else threading.RLock()

    def materialize(self, path: str) -> bool:
        real_path = os.path.realpath(path)
        with self._lock:
            if real_path in self._modules:
                log_trace(f"ModuleHost: '{real_path}' already materialized")
                return True

            module_name = self._module_name_for(real_path)
            spec = importlib.util.spec_from_file_location(module_name, real_path)
            if spec is None or spec.loader is None:
                return False

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except BaseException:
                sys.modules.pop(module_name, None)
                raise

            self._modules[real_path] = module
            published = self._publish(module)
            log_debug(
                f"ModuleHost: Materialized '{real_path}'",
                {"path": real_path, "symbols": ",".join(published)},
            )
            return True

    def exists(self, name: str, autoload: bool = False) -> bool:
        with self._lock:
            if name in self._symbols:
                return True
            if not autoload or name in self._autoloading:
                return False

            self._autoloading.add(name)
            try:
                for autoloader in list(self._autoloaders):
                    autoloader(name)
                    if name in self._symbols:
                        return True
            finally:
                self._autoloading.discard(name)
            return False

    def bind_synonym(self, canonical: str, alias: str) -> bool:
        with self._lock:
            target = self._symbols.get(canonical)
            if target is None:
                return False

            current = self._symbols.get(alias)
            if current is not None:
                return current is target

            self._symbols[alias] = target
            log_debug(f"ModuleHost: Bound '{alias}' to '{canonical}'")
            return True

    def get(self, name: str) -> Any | None:
        return self._symbols.get(name)

    def register_autoloader(self, autoloader: Autoloader) -> None:
        with self._lock:
            if autoloader not in self._autoloaders:
                self._autoloaders.append(autoloader)

    def unregister_autoloader(self, autoloader: Autoloader) -> bool:
        with self._lock:
            if autoloader in self._autoloaders:
                self._autoloaders.remove(autoloader)
                return True
            return False

    @property
    def symbols(self) -> list[str]:
        """Names of all published symbols, synonyms included."""
        return list(self._symbols)

    @property
    def materialized_paths(self) -> list[str]:
        """Resolved paths of all executed unit files, in execution order."""
        return list(self._modules)

    def _publish(self, module: ModuleType) -> list[str]:
        namespace = getattr(module, "__namespace__", "") or ""
        namespace = namespace.strip(NAMESPACE_SEPARATOR)

        published: list[str] = []
        for attr, value in vars(module).items():
            if not inspect.isclass(value) or value.__module__ != module.__name__:
                continue
            name = f"{namespace}{NAMESPACE_SEPARATOR}{attr}" if namespace else attr
            # First definition wins
            if name not in self._symbols:
                self._symbols[name] = value
                published.append(name)
        return published

    @staticmethod
    def _module_name_for(real_path: str) -> str:
        stem = os.path.splitext(os.path.basename(real_path))[0]
        digest = hashlib.sha1(real_path.encode("utf-8")).hexdigest()[:12]
        safe_stem = "".join(c if c.isalnum() or c == "_" else "_" for c in stem)
        return f"{UNIT_MODULE_PREFIX}_{safe_stem}_{digest}"


__all__ = ["Autoloader", "UnitHost", "ModuleHost"]
