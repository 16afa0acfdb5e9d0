"""Tests for ResolverChain.

These tests verify:
- Resolvers are ordered by priority
- Resolution stops at the first resolver that loads the unit
- Ineligible resolvers are skipped
- Adding, replacing and removing resolvers by name
"""

from __future__ import annotations

from unit_loader import BaseResolver, Loader, ResolverChain


class RecordingResolver(BaseResolver):
    """Test resolver that records the identifiers it was asked to resolve."""

    def __init__(
        self,
        name: str,
        priority: int,
        result: bool = False,
        accepts: bool = True,
        keys: list[str] | None = None,
    ) -> None:
        super().__init__(context=None)
        self._name = name
        self._priority = priority
        self._result = result
        self._accepts = accepts
        self._keys = keys or []
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    def can_resolve(self, identifier: str) -> bool:
        return self._accepts

    def resolve(self, identifier: str) -> bool:
        self.calls.append(identifier)
        return self._result

    def registered_keys(self) -> list[str]:
        return list(self._keys)


class TestResolverChainOrdering:
    """Tests for resolver ordering."""

    def test_sorted_by_priority(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("late", 50))
        chain.add_resolver(RecordingResolver("early", 10))
        chain.add_resolver(RecordingResolver("middle", 30))

        assert chain.resolver_names == ["early", "middle", "late"]
        assert chain.list_resolvers() == [("early", 10), ("middle", 30), ("late", 50)]

    def test_equal_priority_keeps_insertion_order(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("first", 20))
        chain.add_resolver(RecordingResolver("second", 20))

        assert chain.resolver_names == ["first", "second"]

    def test_add_resolver_returns_self(self):
        chain = ResolverChain()

        assert chain.add_resolver(RecordingResolver("one", 10)) is chain

    def test_same_name_replaces(self):
        chain = ResolverChain()
        old = RecordingResolver("custom", 10)
        new = RecordingResolver("custom", 70)
        chain.add_resolver(old)
        chain.add_resolver(RecordingResolver("other", 40))
        chain.add_resolver(new)

        assert len(chain) == 2
        assert chain.get_resolver("custom") is new
        assert chain.resolver_names == ["other", "custom"]


class TestResolverChainResolve:
    """Tests for ResolverChain.resolve."""

    def test_stops_at_first_success(self):
        chain = ResolverChain()
        miss = RecordingResolver("miss", 10)
        hit = RecordingResolver("hit", 20, result=True)
        after = RecordingResolver("after", 30, result=True)
        chain.add_resolver(miss).add_resolver(hit).add_resolver(after)

        assert chain.resolve("JFoo") is True
        assert miss.calls == ["JFoo"]
        assert hit.calls == ["JFoo"]
        assert after.calls == []

    def test_skips_ineligible_resolvers(self):
        chain = ResolverChain()
        skipped = RecordingResolver("skipped", 10, result=True, accepts=False)
        hit = RecordingResolver("hit", 20, result=True)
        chain.add_resolver(skipped).add_resolver(hit)

        assert chain.resolve("JFoo") is True
        assert skipped.calls == []

    def test_all_miss(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("one", 10))
        chain.add_resolver(RecordingResolver("two", 20))

        assert chain.resolve("JFoo") is False

    def test_empty_chain(self):
        chain = ResolverChain()

        assert chain.resolve("JFoo") is False
        assert chain.can_resolve("JFoo") is False

    def test_can_resolve_any(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("no", 10, accepts=False))
        chain.add_resolver(RecordingResolver("yes", 20, accepts=True))

        assert chain.can_resolve("JFoo") is True


class TestResolverChainManagement:
    """Tests for removal and introspection."""

    def test_remove_resolver(self):
        chain = ResolverChain()
        resolver = RecordingResolver("custom", 10)
        chain.add_resolver(resolver)

        assert chain.remove_resolver("custom") is resolver
        assert chain.has_resolver("custom") is False
        assert len(chain) == 0

    def test_remove_unknown_resolver(self):
        assert ResolverChain().remove_resolver("nope") is None

    def test_registered_keys_deduplicated(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("one", 10, keys=["a", "b"]))
        chain.add_resolver(RecordingResolver("two", 20, keys=["b", "c"]))

        assert chain.registered_keys() == ["a", "b", "c"]

    def test_chain_info(self):
        chain = ResolverChain()
        chain.add_resolver(RecordingResolver("one", 10, keys=["a", "b"]))

        assert chain.chain_info() == [{"name": "one", "priority": 10, "keys": 2}]


class TestDefaultChain:
    """Tests for the chain installed by Loader.setup."""

    def test_full_setup_order(self, loader: Loader):
        assert loader.chain.list_resolvers() == [
            ("class_map", 10),
            ("prefix", 20),
            ("namespace_v0", 30),
            ("namespace_v4", 40),
            ("extension", 50),
            ("alias", 60),
        ]

    def test_setup_subset(self):
        loader = Loader()
        loader.setup(
            enable_convention_lookup=False,
            enable_prefix_lookup=False,
            enable_classmap_lookup=True,
        )

        assert loader.chain.resolver_names == ["class_map"]
        loader.teardown()

    def test_setup_twice_does_not_duplicate(self, loader: Loader):
        loader.setup()

        assert len(loader.chain) == 6

    def test_custom_resolver_joins_default_chain(self, loader: Loader):
        custom = RecordingResolver("vendor", 45, result=True)
        loader.chain.add_resolver(custom)

        assert loader.resolve("Vendor.Thing") is True
        assert custom.calls == ["Vendor.Thing"]
