"""
权限校验工具文件
backend/backoffice/utils/permission_checker.py
核心功能：
1. 根据 HTTP方法 + 路由路径 自动生成权限码（module:controller:action）
2. 汇总用户 角色→按钮菜单 的权限码，要求所需权限全部命中
3. 超级管理员（is_admin）豁免
"""
import logging
from typing import Any, Callable, Iterable, Optional, Set

from fastapi import Depends, Request

from backoffice.api.deps import get_current_user
from backoffice.core.exceptions import PermissionDenied
from backoffice.models import MENU_TYPE_BUTTON, SysUser

logger = logging.getLogger(__name__)

__all__ = [
    "METHOD_ACTION_MAP",
    "generate_permission_code",
    "collect_user_permissions",
    "has_permissions",
    "permission_checker",
]

METHOD_ACTION_MAP = {
    "GET": "read",
    "POST": "create",
    "PATCH": "update",
    "PUT": "update",
    "DELETE": "delete",
}


def _is_path_param(segment: str) -> bool:
    return (segment.startswith("{") and segment.endswith("}")) or segment.startswith(":")


def generate_permission_code(method: str, route_path: str) -> Optional[str]:
    """
    HTTP方法 + 路由模板 → 权限码
    例：DELETE /api/system/dept/{id} → system:dept:delete
    无法识别的方法或有效路径段不足两段时返回None
    """
    action = METHOD_ACTION_MAP.get((method or "").upper())
    if action is None:
        return None

    segments = [s for s in (route_path or "").split("/") if s and not _is_path_param(s)]
    if segments and segments[0] == "api":
        segments = segments[1:]
    if len(segments) < 2:
        return None
    return f"{segments[0]}:{segments[1]}:{action}"


def collect_user_permissions(user: Any) -> Set[str]:
    """用户全部角色下 按钮类型菜单 的权限码并集"""
    permissions: Set[str] = set()
    for role in getattr(user, "roles", None) or []:
        for menu in getattr(role, "menus", None) or []:
            if menu.type == MENU_TYPE_BUTTON and menu.permission:
                permissions.add(menu.permission)
    return permissions


def has_permissions(user: Any, required: Iterable[str]) -> bool:
    """
    - 无需权限 → 放行
    - 未登录 → 拒绝
    - 超级管理员 → 放行
    - 其他用户需拥有全部所需权限
    """
    required = [code for code in required if code]
    if not required:
        return True
    if user is None:
        return False
    if getattr(user, "is_admin", False):
        return True
    owned = collect_user_permissions(user)
    return all(code in owned for code in required)


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def permission_checker(*codes: str, auto: bool = False) -> Callable:
    """
    权限验证工厂函数

    :param codes: 显式指定的权限码
    :param auto: 是否追加根据 方法+路由 自动生成的权限码（与显式权限码同时生效）
    :return: FastAPI依赖
    """
    explicit = [code for code in codes if code]

    async def checker(
        request: Request,
        current_user: SysUser = Depends(get_current_user),
    ) -> SysUser:
        required = list(explicit)
        if auto:
            generated = generate_permission_code(request.method, _route_path(request))
            if generated and generated not in required:
                required.append(generated)

        if not has_permissions(current_user, required):
            logger.warning(
                f"用户权限不足 | 用户名：{current_user.username} | 所需权限：{required} | "
                f"已拥有权限：{sorted(collect_user_permissions(current_user))}"
            )
            raise PermissionDenied(f"权限不足，缺少权限：{', '.join(required)}")

        logger.debug(f"用户权限校验通过 | 用户名：{current_user.username} | 所需权限：{required}")
        return current_user

    return checker
