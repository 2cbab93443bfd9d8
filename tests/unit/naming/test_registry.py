"""Unit tests for NamingRegistry."""

from schemabind.naming import NamingRegistry


class TestNamingRegistry:
    """Tests for the append-only short name registry."""

    def test_first_registration_wins(self):
        """A later registration should not replace the first one."""
        registry = NamingRegistry()
        assert registry.register("UserAccount", "ua") == "ua"
        assert registry.register("UserAccount", "usr") == "ua"
        assert registry.get("UserAccount") == "ua"

    def test_builtin_seed(self):
        """Builtin target types are registered up front."""
        registry = NamingRegistry()
        assert registry.get("str") == "s"
        assert registry.get("list[int]") == "l"

    def test_explicit_seed(self):
        """An explicit seed should replace the builtin seed."""
        registry = NamingRegistry(seed={"Foo": "f"})
        assert registry.get("Foo") == "f"
        assert registry.get("str") is None

    def test_snapshot_is_a_copy(self):
        """Mutating a snapshot should not touch the registry."""
        registry = NamingRegistry(seed={})
        registry.register("User", "u")
        snapshot = registry.snapshot()
        snapshot["User"] = "x"
        assert registry.get("User") == "u"

    def test_container_protocol(self):
        """The registry should support in, len and iteration."""
        registry = NamingRegistry(seed={})
        registry.register("User", "u")
        assert "User" in registry
        assert len(registry) == 1
        assert list(registry) == ["User"]

    def test_runs_are_isolated(self):
        """Separate registries never share registrations."""
        first, second = NamingRegistry(), NamingRegistry()
        first.register("User", "u")
        assert second.get("User") is None
