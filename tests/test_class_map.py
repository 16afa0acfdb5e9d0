"""ClassMap registration, discovery and resolution tests.

These tests verify:
- register_class normalization, force semantics and silent no-ops
- Alias registrations cascading to the canonical identifier
- discover_classes with and without recursion
- ClassMapResolver loading and alias repair after load
"""

from __future__ import annotations

import os
from pathlib import Path

from unit_loader import ClassMapResolver, LocalFileSystem, Loader


class TestRegisterClass:
    """Tests for Loader.register_class."""

    def test_register_normalizes_identifier(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "foo.py", "JFoo")

        loader.register_class("JFoo", str(path))

        assert loader.list_class_map() == {"jfoo": str(path)}

    def test_missing_file_is_ignored(self, loader: Loader, tmp_path: Path):
        loader.register_class("JFoo", str(tmp_path / "missing.py"))

        assert loader.list_class_map() == {}

    def test_empty_identifier_is_ignored(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "foo.py", "JFoo")

        loader.register_class("", str(path))

        assert loader.list_class_map() == {}

    def test_without_force_keeps_original(self, loader: Loader, write_unit, tmp_path: Path):
        first = write_unit(tmp_path / "first.py", "JFoo")
        second = write_unit(tmp_path / "second.py", "JFoo")

        loader.register_class("JFoo", str(first))
        loader.register_class("JFoo", str(second), force=False)

        assert loader.list_class_map()["jfoo"] == str(first)

    def test_with_force_overwrites(self, loader: Loader, write_unit, tmp_path: Path):
        first = write_unit(tmp_path / "first.py", "JFoo")
        second = write_unit(tmp_path / "second.py", "JFoo")

        loader.register_class("JFoo", str(first))
        loader.register_class("JFoo", str(second), force=True)

        assert loader.list_class_map()["jfoo"] == str(second)

    def test_alias_registration_cascades_to_canonical(
        self, loader: Loader, write_unit, tmp_path: Path
    ):
        path = write_unit(tmp_path / "thing.py", "Thing", namespace="Acme")
        loader.register_alias("JThing", ".Acme.Thing")

        loader.register_class("JThing", str(path))

        assert loader.list_class_map() == {"acme.thing": str(path), "jthing": str(path)}

    def test_cascade_respects_force(self, loader: Loader, write_unit, tmp_path: Path):
        original = write_unit(tmp_path / "original.py", "Thing", namespace="Acme")
        other = write_unit(tmp_path / "other.py", "Thing", namespace="Acme")
        loader.register_alias("JThing", "Acme.Thing")
        loader.register_class("Acme.Thing", str(original))

        loader.register_class("JThing", str(other), force=False)

        assert loader.list_class_map()["acme.thing"] == str(original)
        assert loader.list_class_map()["jthing"] == str(other)


class TestDiscoverClasses:
    """Tests for Loader.discover_classes."""

    def _tree(self, write_unit, root: Path) -> None:
        write_unit(root / "Foo.py", "Foo")
        write_unit(root / "Bar.py", "Bar")
        (root / "notes.txt").write_text("not a unit")
        write_unit(root / "sub" / "Baz.py", "Baz")

    def test_discover_top_level_only(self, loader: Loader, write_unit, tmp_path: Path):
        self._tree(write_unit, tmp_path / "lib")

        count = loader.discover_classes("lib.", str(tmp_path / "lib"))

        assert count == 2
        assert loader.list_class_map() == {
            "lib.foo": os.path.join(str(tmp_path / "lib"), "Foo.py"),
            "lib.bar": os.path.join(str(tmp_path / "lib"), "Bar.py"),
        }

    def test_discover_recursive(self, loader: Loader, write_unit, tmp_path: Path):
        self._tree(write_unit, tmp_path / "lib")

        count = loader.discover_classes("lib.", str(tmp_path / "lib"), recurse=True)

        assert count == 3
        assert loader.list_class_map()["lib.baz"] == os.path.join(
            str(tmp_path / "lib" / "sub"), "Baz.py"
        )

    def test_discover_missing_root_is_noop(self, loader: Loader, tmp_path: Path):
        assert loader.discover_classes("lib.", str(tmp_path / "missing")) == 0
        assert loader.list_class_map() == {}

    def test_discover_file_root_is_noop(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "Foo.py", "Foo")

        assert loader.discover_classes("lib.", str(path)) == 0

    def test_discover_without_force_keeps_existing(
        self, loader: Loader, write_unit, tmp_path: Path
    ):
        existing = write_unit(tmp_path / "elsewhere.py", "Foo")
        self._tree(write_unit, tmp_path / "lib")
        loader.register_class("lib.foo", str(existing))

        loader.discover_classes("lib.", str(tmp_path / "lib"), force=False)

        assert loader.list_class_map()["lib.foo"] == str(existing)
        assert "lib.bar" in loader.list_class_map()

    def test_count_skips_ignored_registrations(self, write_unit, tmp_path: Path):
        self._tree(write_unit, tmp_path / "lib")
        loader = Loader(filesystem=_HidingFileSystem("Bar.py"))

        count = loader.discover_classes("lib.", str(tmp_path / "lib"))

        assert count == 1
        assert list(loader.list_class_map()) == ["lib.foo"]
        loader.teardown()


class _HidingFileSystem(LocalFileSystem):
    """Lists every entry but reports the named file as missing."""

    def __init__(self, hidden: str) -> None:
        self._hidden = hidden

    def is_file(self, path: str) -> bool:
        return os.path.basename(path) != self._hidden and super().is_file(path)


class TestClassMapResolution:
    """Tests for resolving through the classmap."""

    def test_resolve_loads_registered_file(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "foo.py", "JFoo")
        loader.register_class("JFoo", str(path))

        assert loader.resolve("JFoo") is True
        assert loader.host.exists("JFoo")
        assert loader.host.get("JFoo").unit_path == str(path)
        assert loader.host.materialized_paths == [os.path.realpath(path)]

    def test_resolve_twice_loads_once(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "foo.py", "JFoo")
        loader.register_class("JFoo", str(path))

        loader.resolve("JFoo")
        loader.resolve("JFoo")

        assert len(loader.host.materialized_paths) == 1

    def test_unregistered_identifier(self, loader: Loader):
        assert ClassMapResolver(loader).resolve("JNope") is False
        assert loader.resolve("JNope") is False

    def test_already_defined_short_circuits(self, loader: Loader, write_unit, tmp_path: Path):
        path = write_unit(tmp_path / "foo.py", "JFoo")
        loader.host.materialize(str(path))

        assert ClassMapResolver(loader).resolve("JFoo") is True

    def test_file_defining_canonical_binds_alias(
        self, loader: Loader, write_unit, tmp_path: Path
    ):
        path = write_unit(tmp_path / "thing.py", "Thing", namespace="Acme")
        loader.register_alias("JThing", "Acme.Thing")
        loader.register_class("JThing", str(path))

        assert loader.resolve("JThing") is True
        assert loader.host.get("JThing") is loader.host.get("Acme.Thing")
        assert len(loader.host.materialized_paths) == 1

    def test_file_defining_alias_binds_canonical(
        self, loader: Loader, write_unit, tmp_path: Path
    ):
        path = write_unit(tmp_path / "legacy.py", "JLegacy")
        loader.register_alias("JLegacy", "Modern")
        loader.register_class("Modern", str(path))

        assert loader.resolve("Modern") is True
        assert loader.host.get("Modern") is loader.host.get("JLegacy")
