"""模块目录编译测试"""

from __future__ import annotations

import pytest

from bizcore.config.constants import ModuleDefaults
from bizcore.core.exceptions import CatalogError
from bizcore.core.modules import ModuleCatalog, normalize_module_key
from bizcore.core.modules.base import compile_descriptor


class TestNormalizeModuleKey:
    def test_strips_and_lowercases(self) -> None:
        assert normalize_module_key("  Inventory ") == "inventory"

    @pytest.mark.parametrize("value", [None, "", "   ", 42, ["pos"]])
    def test_rejects_non_strings_and_blanks(self, value: object) -> None:
        assert normalize_module_key(value) is None


class TestCompileDescriptor:
    """测试描述符编译规则"""

    def test_key_falls_back_to_name(self) -> None:
        descriptor = compile_descriptor({"name": " POS "}, 0)

        assert descriptor.key == "pos"
        assert descriptor.name == "POS"

    def test_defaults_applied(self) -> None:
        descriptor = compile_descriptor({"key": "notes"}, 0)

        assert descriptor.name == "notes"
        assert descriptor.version == ModuleDefaults.VERSION
        assert descriptor.category == ModuleDefaults.CATEGORY
        assert descriptor.suite == ModuleDefaults.SUITE
        assert descriptor.order == ModuleDefaults.ORDER
        assert descriptor.dependencies == ()
        assert descriptor.tags == ()
        assert descriptor.is_system is False
        assert descriptor.is_installable is True
        assert descriptor.requires_setup is False
        assert descriptor.is_builtin is False

    def test_dependencies_normalized_and_deduplicated(self) -> None:
        descriptor = compile_descriptor(
            {"key": "pos", "dependencies": ["Inventory", " inventory", "", "Organizations"]}, 0
        )

        assert descriptor.dependencies == ("inventory", "organizations")

    def test_unknown_category_falls_back(self) -> None:
        descriptor = compile_descriptor({"key": "x", "category": "gardening"}, 0)

        assert descriptor.category == ModuleDefaults.CATEGORY

    def test_tags_trimmed(self) -> None:
        descriptor = compile_descriptor({"key": "x", "tags": [" barcode ", "", 3, "sku"]}, 0)

        assert descriptor.tags == ("barcode", "sku")

    def test_setup_wizard_requires_setup(self) -> None:
        descriptor = compile_descriptor({"key": "pos", "setup_wizard": {}}, 0)
        assert descriptor.requires_setup is False

        wizard = {"steps": [{"id": "tax"}]}
        descriptor = compile_descriptor({"key": "pos", "setup_wizard": wizard}, 0)
        assert descriptor.requires_setup is True

        descriptor = compile_descriptor({"key": "pos", "settings_schema": {"type": "object"}}, 0)
        assert descriptor.requires_setup is True

    def test_non_installable_is_builtin(self) -> None:
        descriptor = compile_descriptor({"key": "outbox", "is_installable": False}, 0)

        assert descriptor.is_builtin is True
        assert descriptor.is_system is False

    @pytest.mark.parametrize(
        "raw",
        [
            "inventory",
            {"description": "no key"},
            {"key": "   "},
            {"key": "pos", "dependencies": "inventory"},
            {"key": "x", "is_system": "false"},
            {"key": "x", "is_installable": 0},
            {"key": "x", "version": 2},
            {"key": "x", "description": ["text"]},
            {"key": "x", "icon": 7},
            {"key": "x", "setup_wizard": ["step"]},
            {"key": "x", "settings_schema": "object"},
        ],
    )
    def test_malformed_entries_raise(self, raw: object) -> None:
        with pytest.raises(ValueError):
            compile_descriptor(raw, 3)


class TestModuleCatalog:
    """测试目录构建"""

    def test_preserves_registration_order(self) -> None:
        catalog = ModuleCatalog.from_configs([{"key": "b"}, {"key": "a"}, {"name": "C"}])

        assert catalog.keys() == ["b", "a", "c"]
        assert len(catalog) == 3
        assert "a" in catalog
        assert "z" not in catalog

    def test_duplicate_keys_rejected(self) -> None:
        with pytest.raises(CatalogError) as exc_info:
            ModuleCatalog.from_configs([{"key": "pos"}, {"name": " POS "}])

        assert len(exc_info.value.problems) == 1
        assert "pos" in exc_info.value.problems[0]

    def test_all_problems_collected(self) -> None:
        with pytest.raises(CatalogError) as exc_info:
            ModuleCatalog.from_configs(
                [{"key": "a"}, None, {"key": "a"}, {"key": "b", "dependencies": 5}]
            )

        assert len(exc_info.value.problems) == 3

    def test_list_returns_copy(self) -> None:
        catalog = ModuleCatalog.from_configs([{"key": "a"}])
        catalog.list().clear()

        assert catalog.keys() == ["a"]

    def test_mistyped_fields_reported_together(self) -> None:
        with pytest.raises(CatalogError) as exc_info:
            ModuleCatalog.from_configs(
                [{"key": "x", "is_system": "false", "version": 2}, {"key": "y", "icon": 1}]
            )

        problems = exc_info.value.problems
        assert len(problems) == 2
        assert "is_system" in problems[0]
        assert "icon" in problems[1]

    def test_explicit_none_uses_defaults(self) -> None:
        catalog = ModuleCatalog.from_configs(
            [{"key": "x", "is_system": None, "is_installable": None, "version": None}]
        )
        descriptor = catalog.list()[0]

        assert descriptor.is_system is False
        assert descriptor.is_installable is True
        assert descriptor.version == ModuleDefaults.VERSION
