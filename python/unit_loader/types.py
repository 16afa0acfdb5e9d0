"""Pydantic models for unit-loader.

This module provides the typed data models shared by the loader context,
the bootstrap layer, and structured logging, using Pydantic v2 for
validation and serialization.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from .exceptions import InvalidVariantError

NAMESPACE_SEPARATOR = "."
"""Separator between the segments of a hierarchical identifier."""

LEGACY_WORD_SEPARATOR = "_"
"""Separator the v0 convention maps to directories inside a unit name."""

DEFAULT_UNIT_EXTENSION = ".py"


class NamespaceVariant(str, Enum):
    """The two competing hierarchical namespace conventions."""

    V0 = "v0"
    """Namespace path appended to the root, ``_`` in unit names maps to directories."""

    V4 = "v4"
    """Namespace prefix replaced by the root, unit names taken verbatim."""

    @classmethod
    def parse(cls, value: NamespaceVariant | str) -> NamespaceVariant:
        """Coerce a variant tag, raising InvalidVariantError for unknown tags.

        Example:
            >>> NamespaceVariant.parse("v4")
            <NamespaceVariant.V4: 'v4'>
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidVariantError(
                f"Variant needs to be v0 or v4, got {value!r}"
            ) from None


class ExtensionKind(str, Enum):
    """Extension kinds recognized in the second segment of an identifier."""

    COMPONENT = "Component"
    MODULE = "Module"
    PLUGIN = "Plugin"


class DeprecatedAlias(BaseModel):
    """Append-only record of an alias flagged as deprecated.

    Example:
        >>> DeprecatedAlias(old="JOldThing", new="Acme.Thing", version="5.0")
        DeprecatedAlias(old='JOldThing', new='Acme.Thing', version='5.0')
    """

    old: str = Field(description="The alias identifier.")
    new: str = Field(description="The canonical identifier the alias points to.")
    version: str = Field(description="Version in which the alias goes away.")

    model_config = {"frozen": True}


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(identifier="JFoo", strategy="prefix")
        >>> log_debug("Resolved unit", context)
    """

    identifier: str | None = Field(
        default=None,
        description="Identifier being resolved or registered.",
    )
    strategy: str | None = Field(
        default=None,
        description="Name of the resolver strategy involved.",
    )
    path: str | None = Field(
        default=None,
        description="File system path involved.",
    )
    operation: str | None = Field(
        default=None,
        description="Current operation name.",
    )


class NamespaceEntry(BaseModel):
    """A namespace mapping as written in a bootstrap config file."""

    namespace: str
    path: str
    variant: NamespaceVariant = NamespaceVariant.V0
    reset: bool = False
    prepend: bool = False

    model_config = {"extra": "forbid"}


class PrefixEntry(BaseModel):
    """A prefix mapping as written in a bootstrap config file."""

    prefix: str
    path: str
    reset: bool = False
    prepend: bool = False

    model_config = {"extra": "forbid"}


class DiscoveryEntry(BaseModel):
    """A directory scan to register into the classmap at bootstrap."""

    prefix: str = ""
    path: str
    force: bool = True
    recurse: bool = False

    model_config = {"extra": "forbid"}


class AliasEntry(BaseModel):
    """An alias registration as written in a bootstrap config file."""

    alias: str
    canonical: str
    version: str | None = None

    model_config = {"extra": "forbid"}


class LoaderConfig(BaseModel):
    """Configuration for a loader context.

    Holds the settings the loader itself needs (unit extension, the root used
    to shorten error messages, the platform naming used by
    ``import_library_key``) plus the registrations applied by
    ``bootstrap_loader``.

    Example:
        >>> config = LoaderConfig(root_path="/srv/app", library_root="/srv/app/libraries")
        >>> loader = Loader(config=config)
    """

    unit_extension: str = Field(
        default=DEFAULT_UNIT_EXTENSION,
        pattern=r"^\.\w+$",
        description="File extension of unit files, including the dot.",
    )
    root_path: str | None = Field(
        default=None,
        description="Application root, used to shorten paths in error messages.",
    )
    library_root: str | None = Field(
        default=None,
        description="Default base directory for import_library_key.",
    )
    platform_namespace: str = Field(
        default="platform",
        description="Leading key segment that marks platform libraries for import_library_key.",
    )
    platform_prefix: str = Field(
        default="J",
        description="Class prefix given to platform libraries.",
    )
    platform_root: str | None = Field(
        default=None,
        description="Root registered for the platform prefix when setup enables prefix lookup.",
    )
    enable_convention_lookup: bool = True
    enable_prefix_lookup: bool = True
    enable_classmap_lookup: bool = True
    log_level: str = Field(
        default="info",
        pattern="^(trace|debug|info|warn|error)$",
        description="Level for the unit_loader logger (trace, debug, info, warn, error).",
    )
    extension_roots: dict[str, str] = Field(default_factory=dict)
    prefixes: list[PrefixEntry] = Field(default_factory=list)
    namespaces: list[NamespaceEntry] = Field(default_factory=list)
    classes: dict[str, str] = Field(default_factory=dict)
    discover: list[DiscoveryEntry] = Field(default_factory=list)
    aliases: list[AliasEntry] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


__all__ = [
    "NAMESPACE_SEPARATOR",
    "LEGACY_WORD_SEPARATOR",
    "DEFAULT_UNIT_EXTENSION",
    "NamespaceVariant",
    "ExtensionKind",
    "DeprecatedAlias",
    "LogContext",
    "NamespaceEntry",
    "PrefixEntry",
    "DiscoveryEntry",
    "AliasEntry",
    "LoaderConfig",
]
