"""
权限码生成与权限校验测试
"""
from types import SimpleNamespace

import pytest

from backoffice.utils.permission_checker import (
    collect_user_permissions,
    generate_permission_code,
    has_permissions,
)


def _user(permissions=(), is_admin=False, menu_type="button"):
    menus = [SimpleNamespace(type=menu_type, permission=code) for code in permissions]
    return SimpleNamespace(is_admin=is_admin, roles=[SimpleNamespace(menus=menus)])


class TestGeneratePermissionCode:
    @pytest.mark.parametrize(
        "method, path, expected",
        [
            ("POST", "/api/system/user", "system:user:create"),
            ("DELETE", "/api/system/dept/{id}", "system:dept:delete"),
            ("PATCH", "/system/role/{id}", "system:role:update"),
            ("PUT", "/system/role/:id", "system:role:update"),
            ("get", "/api/system/menu", "system:menu:read"),
        ],
    )
    def test_method_and_path(self, method, path, expected):
        assert generate_permission_code(method, path) == expected

    def test_unknown_method(self):
        assert generate_permission_code("OPTIONS", "/api/system/user") is None

    def test_path_too_short(self):
        assert generate_permission_code("POST", "/api/user") is None
        assert generate_permission_code("POST", "/api/{id}/user") is None


class TestHasPermissions:
    def test_no_required_permission(self):
        assert has_permissions(None, [])

    def test_anonymous_user(self):
        assert not has_permissions(None, ["system:user:create"])

    def test_admin_bypass(self):
        assert has_permissions(_user(is_admin=True), ["system:user:create"])

    def test_requires_all_codes(self):
        user = _user(["system:user:create"])
        assert has_permissions(user, ["system:user:create"])
        assert not has_permissions(user, ["system:user:create", "system:user:delete"])

    def test_only_button_menus_count(self):
        user = _user(["system:user:create"], menu_type="menu")
        assert collect_user_permissions(user) == set()
        assert not has_permissions(user, ["system:user:create"])
