"""Custom exceptions for unit-loader.

This module provides a hierarchy of exceptions for the hard failures of the
loader. Resolution misses are never raised; they are reported as ``False``
so that the resolver chain can move on to the next strategy.
"""

from __future__ import annotations


class LoaderError(Exception):
    """Base exception for all unit-loader errors.

    Example:
        >>> try:
        ...     loader.register_prefix("J", "/missing")
        ... except LoaderError as e:
        ...     print(f"Loader error: {e}")
    """

    pass


class PathNotFoundError(LoaderError, FileNotFoundError):
    """Raised when a prefix or namespace root does not exist on disk.

    The message names the path relative to the configured root path when
    possible, otherwise only its basename.

    Example:
        >>> try:
        ...     loader.register_namespace("Acme", "/srv/app/missing")
        ... except PathNotFoundError as e:
        ...     print(e)
        Library path /missing cannot be found.
    """

    def __init__(self, display_path: str) -> None:
        self.display_path = display_path
        super().__init__(f"Library path {display_path} cannot be found.")


class InvalidVariantError(LoaderError, ValueError):
    """Raised when a namespace variant other than v0 or v4 is supplied.

    Example:
        >>> loader.register_namespace("Acme", root, variant="v2")
        Traceback (most recent call last):
        ...
        InvalidVariantError: Variant needs to be v0 or v4, got 'v2'
    """

    pass


class AliasGraphInvariantError(LoaderError):
    """Raised when the alias map and its inverse index disagree."""

    pass


class ConfigurationError(LoaderError):
    """Raised when a bootstrap configuration cannot be read or validated."""

    pass


__all__ = [
    "LoaderError",
    "PathNotFoundError",
    "InvalidVariantError",
    "AliasGraphInvariantError",
    "ConfigurationError",
]
