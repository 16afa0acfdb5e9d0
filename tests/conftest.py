"""pytest configuration and fixtures for unit_loader tests.

This module provides shared fixtures for building unit trees on disk and
fresh Loader contexts, so every test starts from empty tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from unit_loader import Loader, LoaderConfig
from unit_loader.logging import LOGGER_NAME

UnitWriter = Callable[..., Path]


@pytest.fixture
def write_unit() -> UnitWriter:
    """Provide a helper that writes a unit file declaring classes.

    Usage:
        write_unit(tmp_path / "blog" / "Article.py", "Article", namespace="Acme.Blog")
    """

    def _write(path: Path, *class_names: str, namespace: str | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = []
        if namespace is not None:
            lines.append(f"__namespace__ = {namespace!r}")
            lines.append("")
        for class_name in class_names:
            lines.append(f"class {class_name}:")
            lines.append(f"    unit_path = {str(path)!r}")
            lines.append("")
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def loader(tmp_path: Path) -> Generator[Loader, None, None]:
    """Provide a fresh Loader with all resolvers installed.

    The config root is the test's tmp_path, so missing-path errors are
    reported relative to it.
    """
    instance = Loader(config=LoaderConfig(root_path=str(tmp_path)))
    instance.setup()
    yield instance
    instance.teardown()


@pytest.fixture(autouse=True)
def reset_loader_singleton() -> Generator[None, None, None]:
    """Ensure the process-wide Loader does not leak between tests."""
    Loader.reset_instance()
    yield
    Loader.reset_instance()


@pytest.fixture(autouse=True)
def restore_log_level() -> Generator[None, None, None]:
    """Undo set_log_level calls made by bootstrap tests."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    yield
    logger.setLevel(level)
