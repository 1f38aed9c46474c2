"""
权限码枚举测试
"""
from backoffice.enums.sys_permissions import PermissionCode
from backoffice.utils.permission_checker import generate_permission_code


def test_code_and_metadata():
    assert PermissionCode.SYSTEM_USER_UPDATE.value == "system:user:update"
    assert PermissionCode.SYSTEM_DICT_DATA_CREATE.value == "system:dictData:create"
    assert PermissionCode.SYSTEM_USER_UPDATE.display_name == "更新用户"


def test_enum_codes_match_generated_codes():
    """枚举中的常规权限码与 方法+路由 自动生成的权限码一致"""
    assert generate_permission_code("PATCH", "/api/system/user/:id") == PermissionCode.SYSTEM_USER_UPDATE.value
    assert generate_permission_code("DELETE", "/api/system/post/:id") == PermissionCode.SYSTEM_POST_DELETE.value


def test_codes_are_unique():
    values = [perm.value for perm in PermissionCode]
    assert len(values) == len(set(values))
