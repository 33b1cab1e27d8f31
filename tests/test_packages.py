"""业务包注册中心的测试。"""

import pytest

from iconhub.packages import PACKAGE_REGISTRY, get_active_package
from iconhub.packages.assets.core.exceptions import AssetError


def test_assets_package_is_active_by_default(monkeypatch):
    monkeypatch.delenv("APP_ACTIVE_PACKAGE", raising=False)
    package = get_active_package()
    assert package is PACKAGE_REGISTRY["assets"]
    assert package.domain_exception is AssetError


def test_package_selected_by_environment(monkeypatch):
    monkeypatch.setenv("APP_ACTIVE_PACKAGE", "assets")
    assert get_active_package().name == "assets"


def test_unknown_package_raises(monkeypatch):
    monkeypatch.setenv("APP_ACTIVE_PACKAGE", "billing")
    with pytest.raises(RuntimeError, match="billing"):
        get_active_package()
