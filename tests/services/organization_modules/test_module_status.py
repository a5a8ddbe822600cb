"""模块状态规范化测试"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from bizcore.core.enums import OrganizationModuleStatus
from bizcore.models.database import OrgModule
from bizcore.services.organization_modules.schemas import OrganizationModuleRecord
from bizcore.services.organization_modules.status import normalize_module_status, status_value


@pytest.mark.parametrize(
    "value, expected",
    [
        ("READY ", OrganizationModuleStatus.CONFIGURED),
        ("configured", OrganizationModuleStatus.CONFIGURED),
        (" Enabled", OrganizationModuleStatus.ENABLED_UNCONFIGURED),
        ("pendingConfig", OrganizationModuleStatus.ENABLED_UNCONFIGURED),
        ("pending_config", OrganizationModuleStatus.ENABLED_UNCONFIGURED),
        ("enabled_unconfigured", OrganizationModuleStatus.ENABLED_UNCONFIGURED),
        ("inactive", OrganizationModuleStatus.DISABLED),
        ({"status": "disabled"}, OrganizationModuleStatus.DISABLED),
        ({"status": {"status": "ready"}}, OrganizationModuleStatus.CONFIGURED),
        (OrganizationModuleStatus.CONFIGURED, OrganizationModuleStatus.CONFIGURED),
    ],
)
def test_known_statuses(value: object, expected: OrganizationModuleStatus) -> None:
    assert normalize_module_status(value) == expected


@pytest.mark.parametrize("value", ["", "   ", None, 3, ["ready"], {"state": "ready"}])
def test_empty_or_unusable_values(value: object) -> None:
    assert normalize_module_status(value) is None


def test_unknown_status_passthrough() -> None:
    assert normalize_module_status(" Weird_Future_Status ") == "weird_future_status"


def test_unknown_status_strict() -> None:
    assert normalize_module_status("weird_future_status", strict=True) is None
    assert normalize_module_status("ready", strict=True) == OrganizationModuleStatus.CONFIGURED


def test_status_value() -> None:
    assert status_value(OrganizationModuleStatus.DISABLED) == "disabled"
    assert status_value("weird") == "weird"


def test_object_with_status_attribute() -> None:
    row = OrgModule(organization_id="org1", key="pos", status=" Ready")
    record = OrganizationModuleRecord(organization_id="org1", key="pos", status="pendingConfig")

    assert normalize_module_status(row) == OrganizationModuleStatus.CONFIGURED
    assert normalize_module_status(record) == OrganizationModuleStatus.ENABLED_UNCONFIGURED
    assert normalize_module_status(SimpleNamespace(status=None)) is None
    assert normalize_module_status(SimpleNamespace(status="weird"), strict=True) is None
