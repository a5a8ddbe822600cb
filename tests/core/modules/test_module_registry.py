"""模块注册中心测试"""

from __future__ import annotations

import pytest

from bizcore.core.modules import ModuleRegistry, build_module_registry


class TestRegistryQueries:
    def test_all_and_installable_modules(self, registry: ModuleRegistry) -> None:
        assert [d.key for d in registry.all_modules()] == [
            "auth",
            "outbox",
            "inventory",
            "pos",
            "reports",
            "purchases",
        ]
        assert [d.key for d in registry.installable_modules()] == [
            "inventory",
            "pos",
            "reports",
            "purchases",
        ]

    def test_get_normalizes_key(self, registry: ModuleRegistry) -> None:
        descriptor = registry.get("  POS ")

        assert descriptor is not None
        assert descriptor.key == "pos"
        assert descriptor.dependencies == ("inventory",)
        assert registry.get("unknown") is None
        assert registry.get(None) is None

    def test_by_key_is_read_only(self, registry: ModuleRegistry) -> None:
        by_key = registry.by_key()

        assert set(by_key) == {"auth", "outbox", "inventory", "pos", "reports", "purchases"}
        with pytest.raises(TypeError):
            by_key["x"] = by_key["pos"]  # type: ignore[index]

    def test_builtin_keys(self, registry: ModuleRegistry) -> None:
        assert registry.builtin_keys() == ["auth", "outbox"]

    def test_suites(self, registry: ModuleRegistry) -> None:
        suites = registry.suites()

        assert suites["ops"] == ["inventory", "reports", "purchases"]
        assert suites["sales"] == ["pos"]
        assert registry.suite_members(" ops ") == ["inventory", "reports", "purchases"]
        assert registry.suite_members("nope") == []

    def test_dependents_of(self, registry: ModuleRegistry) -> None:
        installed = ["auth", "inventory", "pos", "purchases"]

        assert registry.dependents_of("inventory", installed) == ["pos", "purchases"]
        assert registry.dependents_of("inventory", ["inventory"]) == []
        assert registry.dependents_of("auth", installed) == ["inventory"]

    def test_validate_small_catalog(self, registry: ModuleRegistry) -> None:
        assert registry.validate().ok


class TestShippedCatalog:
    """内置目录必须能编译并通过依赖图校验"""

    def test_builds_and_validates(self) -> None:
        registry = build_module_registry()
        result = registry.validate()

        assert result.cycles == []
        assert result.missing_dependencies == {}
        assert len(registry.suites()) == 8

    def test_name_only_entries_get_canonical_keys(self) -> None:
        registry = build_module_registry()
        pos = registry.get("pos")
        accounting = registry.get("accounting")

        assert pos is not None and accounting is not None
        assert "organizations" in pos.dependencies
        assert pos.requires_setup
        assert accounting.requires_setup

    def test_system_modules_not_installable(self) -> None:
        registry = build_module_registry()
        installable = {d.key for d in registry.installable_modules()}

        assert "auth" not in installable
        assert "outbox" not in installable
        assert {"inventory", "pos", "products"} <= installable
