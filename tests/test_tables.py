"""Tests for the resolution tables.

These tests verify:
- PathTable append / prepend / reset ordering
- AliasGraph write-once registration, inverse index and deprecation log
- AliasGraph invariant checking
"""

from __future__ import annotations

import pytest

from unit_loader import AliasGraph, AliasGraphInvariantError, DeprecatedAlias, PathTable


class TestPathTable:
    """Tests for PathTable."""

    def test_absent_key_creates_singleton(self):
        table = PathTable()
        table.add("Acme", "/a")

        assert table.get("Acme") == ["/a"]
        assert "Acme" in table
        assert len(table) == 1

    def test_append_searches_last(self):
        table = PathTable()
        table.add("Acme", "/a")
        table.add("Acme", "/b")

        assert table.get("Acme") == ["/a", "/b"]

    def test_prepend_searches_first(self):
        table = PathTable()
        table.add("Acme", "/a")
        table.add("Acme", "/b", prepend=True)

        assert table.get("Acme") == ["/b", "/a"]

    def test_reset_replaces_all_roots(self):
        table = PathTable()
        table.add("Acme", "/a")
        table.add("Acme", "/b")
        table.add("Acme", "/c", reset=True, prepend=True)

        assert table.get("Acme") == ["/c"]

    def test_reset_keeps_key_position(self):
        table = PathTable()
        table.add("First", "/a")
        table.add("Second", "/b")
        table.add("First", "/c", reset=True)

        assert [key for key, _ in table.items()] == ["First", "Second"]

    def test_get_unknown_key_is_empty(self):
        assert PathTable().get("Nope") == []

    def test_get_returns_copy(self):
        table = PathTable()
        table.add("Acme", "/a")
        table.get("Acme").append("/mutated")

        assert table.get("Acme") == ["/a"]

    def test_as_dict(self):
        table = PathTable()
        table.add("Acme", "/a")
        table.add("Other", "/b")

        assert table.as_dict() == {"Acme": ["/a"], "Other": ["/b"]}


class TestAliasGraph:
    """Tests for AliasGraph."""

    def test_register_alias(self):
        graph = AliasGraph()

        assert graph.register("JOld", "Acme.New") is True
        assert graph.canonical_of("JOld") == "Acme.New"
        assert graph.aliases_of("Acme.New") == ["JOld"]
        assert "JOld" in graph

    def test_alias_is_write_once(self):
        graph = AliasGraph()
        graph.register("JOld", "Acme.New")

        assert graph.register("JOld", "Acme.Other") is False
        assert graph.canonical_of("JOld") == "Acme.New"
        assert graph.aliases_of("Acme.Other") == []

    def test_canonical_with_many_aliases(self):
        graph = AliasGraph()
        graph.register("JOne", "Acme.Thing")
        graph.register("JTwo", "Acme.Thing")

        assert graph.aliases_of("Acme.Thing") == ["JOne", "JTwo"]

    def test_inverse_index_strips_leading_separator(self):
        graph = AliasGraph()
        graph.register("JOld", ".Acme.New")

        assert graph.canonical_of("JOld") == ".Acme.New"
        assert graph.aliases_of("Acme.New") == ["JOld"]
        assert graph.aliases_of(".Acme.New") == ["JOld"]

    def test_find_alias_for_matches_with_or_without_separator(self):
        graph = AliasGraph()
        graph.register("JPlain", "Acme.Plain")
        graph.register("JDotted", ".Acme.Dotted")

        assert graph.find_alias_for("Acme.Plain") == "JPlain"
        assert graph.find_alias_for("Acme.Dotted") == "JDotted"
        assert graph.find_alias_for("Acme.Missing") is None

    def test_deprecated_log(self):
        graph = AliasGraph()
        graph.register("JOld", ".Acme.New", version="5.0")
        graph.register("JKept", "Acme.Kept")

        assert graph.deprecated() == [DeprecatedAlias(old="JOld", new="Acme.New", version="5.0")]

    def test_deprecated_log_is_append_only(self):
        graph = AliasGraph()
        graph.register("JOld", "Acme.New", version="5.0")
        graph.deprecated().clear()

        assert len(graph.deprecated()) == 1

    def test_rejected_registration_is_not_logged(self):
        graph = AliasGraph()
        graph.register("JOld", "Acme.New", version="5.0")
        graph.register("JOld", "Acme.Other", version="6.0")

        assert len(graph.deprecated()) == 1

    def test_check_invariants_passes(self):
        graph = AliasGraph()
        graph.register("JOne", "Acme.Thing")
        graph.register("JTwo", ".Acme.Thing")

        graph.check_invariants()

    def test_check_invariants_detects_missing_inverse(self):
        graph = AliasGraph()
        graph.register("JOne", "Acme.Thing")
        graph._inverse.clear()

        with pytest.raises(AliasGraphInvariantError):
            graph.check_invariants()

    def test_check_invariants_detects_orphan_inverse(self):
        graph = AliasGraph()
        graph._inverse["Acme.Thing"] = ["JGhost"]

        with pytest.raises(AliasGraphInvariantError):
            graph.check_invariants()
