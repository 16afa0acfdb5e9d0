"""Loader bootstrap from configuration.

This module provides the application-level entry points: reading a YAML
configuration, building the process-wide Loader from it, and the
convenience ``import_library`` and ``exit_process`` functions.

The configuration file is found in this order:
1. UNIT_LOADER_CONFIG environment variable (explicit override)
2. unit_loader.yaml in the current directory

Example configuration:

    root_path: /srv/app
    library_root: /srv/app/libraries
    platform_root: /srv/app/libraries/platform
    log_level: debug
    extension_roots:
      Site: /srv/app
      Administrator: /srv/app/administrator
    prefixes:
      - prefix: Acme
        path: /srv/app/libraries/acme
    namespaces:
      - namespace: Acme.Blog
        path: /srv/app/blog/src
        variant: v4
    aliases:
      - alias: JArticle
        canonical: Acme.Blog.Article
        version: "5.0"

Example:
    >>> from unit_loader.bootstrap import bootstrap_loader
    >>>
    >>> loader = bootstrap_loader()
    >>> loader.resolve("Acme.Blog.Article")
    True
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .loader import Loader
from .logging import log_debug, log_info, log_warn, set_log_level
from .types import LoaderConfig

CONFIG_ENV_VAR = "UNIT_LOADER_CONFIG"
DEFAULT_CONFIG_FILE = "unit_loader.yaml"


def find_config_file() -> Path | None:
    """Find the loader configuration file.

    Returns:
        Path to the configuration file, or None if none is found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.is_file():
            log_debug(f"Using {CONFIG_ENV_VAR}: {path}")
            return path
        log_warn(f"{CONFIG_ENV_VAR} does not exist: {env_path}")

    fallback = Path.cwd() / DEFAULT_CONFIG_FILE
    if fallback.is_file():
        log_debug(f"Using config file in working directory: {fallback}")
        return fallback

    return None


def load_config(path: str | Path) -> LoaderConfig:
    """Read and validate a loader configuration file.

    Args:
        path: Path to a YAML configuration file.

    Returns:
        The validated LoaderConfig. An empty file yields the defaults.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or does not match the LoaderConfig schema.
    """
    config_path = Path(path)
    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read loader config {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Loader config {config_path} must be a mapping")

    try:
        return LoaderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid loader config {config_path}: {e}") from e


def bootstrap_loader(
    config: LoaderConfig | None = None,
    loader: Loader | None = None,
) -> Loader:
    """Build a loader from configuration and install it as the process-wide instance.

    Registrations are applied in this order: extension roots, prefixes,
    namespaces, classes, discovery directories, aliases. Then ``setup``
    runs with the config's lookup flags.

    Args:
        config: Configuration to apply. When omitted, the file found by
            find_config_file() is used, or the defaults if there is none.
        loader: Existing loader to configure. Defaults to a new Loader
            built with config.

    Returns:
        The configured loader.

    Raises:
        ConfigurationError: If the configuration file is invalid.
        PathNotFoundError: If a configured prefix or namespace root is missing.
    """
    if config is None:
        config_file = find_config_file()
        config = load_config(config_file) if config_file else LoaderConfig()

    set_log_level(config.log_level)

    if loader is None:
        loader = Loader(config=config)

    for key, path in config.extension_roots.items():
        loader.register_extension_root(key, path)

    for prefix in config.prefixes:
        loader.register_prefix(prefix.prefix, prefix.path, reset=prefix.reset, prepend=prefix.prepend)

    for entry in config.namespaces:
        loader.register_namespace(
            entry.namespace,
            entry.path,
            reset=entry.reset,
            prepend=entry.prepend,
            variant=entry.variant,
        )

    for identifier, path in config.classes.items():
        loader.register_class(identifier, path)

    for scan in config.discover:
        loader.discover_classes(scan.prefix, scan.path, force=scan.force, recurse=scan.recurse)

    for alias in config.aliases:
        loader.register_alias(alias.alias, alias.canonical, alias.version)

    loader.setup(
        config.enable_convention_lookup,
        config.enable_prefix_lookup,
        config.enable_classmap_lookup,
    )

    Loader.set_instance(loader)
    log_info(
        "Loader bootstrapped",
        {
            "prefixes": len(config.prefixes),
            "namespaces": len(config.namespaces),
            "aliases": len(config.aliases),
        },
    )
    return loader


def import_library(key: str, base_dir: str | None = None) -> bool:
    """Import a library by dotted key through the process-wide loader.

    Example:
        >>> import_library("platform.filesystem.path")
        True
    """
    return Loader.instance().import_library_key(key, base_dir)


def exit_process(code: int | str = 0) -> NoReturn:
    """Single exit point for the application."""
    sys.exit(code)


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_FILE",
    "find_config_file",
    "load_config",
    "bootstrap_loader",
    "import_library",
    "exit_process",
]
