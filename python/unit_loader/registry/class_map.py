"""ClassMap: direct identifier -> file registrations.

The classmap is the most authoritative resolution source. Keys are
lowercased identifiers; values are paths to existing unit files.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..logging import log_debug, log_trace
from ..naming import strip_leading_separator

if TYPE_CHECKING:
    from ..filesystem import FileSystem
    from .alias_graph import AliasGraph


class ClassMap:
    """Normalized identifier -> absolute unit path.

    Registration is best-effort: an empty identifier or a path that is not
    an existing file is silently ignored.

    Example:
        >>> classmap = ClassMap(LocalFileSystem(), AliasGraph())
        >>> classmap.register("JFoo", "/srv/app/libraries/foo.py")
        >>> classmap.get("jfoo")
        '/srv/app/libraries/foo.py'
    """

    def __init__(
        self,
        filesystem: FileSystem,
        aliases: AliasGraph,
        unit_extension: str = ".py",
    ) -> None:
        self._filesystem = filesystem
        self._aliases = aliases
        self._unit_extension = unit_extension
        self._paths: dict[str, str] = {}

    def register(self, identifier: str, path: str, force: bool = True) -> None:
        """Register the unit file for identifier.

        When identifier is a registered alias, its canonical identifier is
        registered first with the same path and force flag.

        Args:
            identifier: Identifier to register (case-insensitive).
            path: Path to the unit file.
            force: Overwrite an existing registration.
        """
        canonical = self._aliases.canonical_of(identifier)
        if canonical is not None:
            self.register(strip_leading_separator(canonical), path, force)

        key = identifier.lower()
        if not key or not self._filesystem.is_file(path):
            log_trace(f"ClassMap: Ignoring registration of '{identifier}'", {"path": path})
            return

        if force or key not in self._paths:
            self._paths[key] = path
            log_debug(f"ClassMap: Registered '{key}'", {"path": path})

    def discover(
        self,
        prefix: str,
        root_dir: str,
        force: bool = True,
        recurse: bool = False,
    ) -> int:
        """Register every unit file found under root_dir.

        Each file registers ``lower(prefix + stem)``. A root that is missing
        or not a directory registers nothing.

        Args:
            prefix: Identifier prefix for discovered units.
            root_dir: Directory to scan.
            force: Overwrite existing registrations.
            recurse: Also scan subdirectories.

        Returns:
            Number of unit files registered.
        """
        try:
            entries = list(self._filesystem.list_directory(root_dir, recursive=recurse))
        except NotADirectoryError:
            log_trace(f"ClassMap: '{root_dir}' is not a directory, nothing discovered")
            return 0

        count = 0
        for entry in entries:
            stem, extension = os.path.splitext(entry.name)
            if not entry.is_file or extension != self._unit_extension:
                continue

            identifier = (prefix + stem).lower()
            if force or identifier not in self._paths:
                self.register(identifier, entry.path)
                if self._paths.get(identifier) == entry.path:
                    count += 1

        log_debug(f"ClassMap: Discovered {count} units in '{root_dir}'", {"prefix": prefix})
        return count

    def get(self, identifier: str) -> str | None:
        """Return the registered path for identifier (case-insensitive)."""
        return self._paths.get(identifier.lower())

    def as_dict(self) -> dict[str, str]:
        return dict(self._paths)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._paths

    def __len__(self) -> int:
        return len(self._paths)


__all__ = ["ClassMap"]
