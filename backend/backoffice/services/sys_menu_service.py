"""
菜单模块业务层
backend/backoffice/services/sys_menu_service.py
- 非按钮菜单带 path 创建时，自动生成 创建/读取/更新/删除 四个按钮子菜单及其权限标识
"""
import logging
import re
from typing import List, Optional
from uuid import UUID

from backoffice.core.exceptions import ResourceNotFound
from backoffice.models import MENU_TYPE_BUTTON, SysUser
from backoffice.repositories.sys_menu_repository import MenuRepository
from backoffice.schemas.sys_menu import MenuCreate, MenuOut, MenuQuery, MenuUpdate
from backoffice.utils.field_mapper import to_create_fields, to_update_fields

logger = logging.getLogger(__name__)

# (按钮名称, 权限动作)
AUTO_BUTTONS = (("创建", "create"), ("读取", "read"), ("更新", "update"), ("删除", "delete"))


def permission_prefix(path: str) -> str:
    """/system/user/:id → system:user"""
    prefix = re.sub(r":id$", "", path)
    prefix = prefix.strip("/")
    return prefix.replace("/", ":")


def build_button_menus(parent_id: UUID, path: str) -> List[dict]:
    prefix = permission_prefix(path)
    return [
        {
            "parent_id": parent_id,
            "name": name,
            "title": name,
            "type": MENU_TYPE_BUTTON,
            "permission": f"{prefix}:{action}",
            "order": index + 1,
        }
        for index, (name, action) in enumerate(AUTO_BUTTONS)
    ]


class MenuService:
    def __init__(self, menu_repository: MenuRepository):
        self.menu_repository = menu_repository

    async def create(self, menu_in: MenuCreate) -> MenuOut:
        async with self.menu_repository.transaction() as session:
            menu = await self.menu_repository.add(to_create_fields(menu_in), session)
            if menu.path and menu.type != MENU_TYPE_BUTTON:
                buttons = await self.menu_repository.add_many(build_button_menus(menu.id, menu.path), session)
                logger.info(
                    f"菜单自动生成按钮权限 | 菜单：{menu.name} | 权限：{[b.permission for b in buttons]}"
                )
        return MenuOut.model_validate(menu)

    async def delete(self, menu_id: UUID) -> int:
        """删除菜单及其子孙菜单，返回删除数量"""
        async with self.menu_repository.transaction() as session:
            if not await self.menu_repository.get_by_id(menu_id, session):
                raise ResourceNotFound(f"菜单不存在：{menu_id}")
            return await self.menu_repository.remove_tree(menu_id, session)

    async def find_all(self, user: SysUser, query: Optional[MenuQuery] = None) -> List[MenuOut]:
        """超级管理员可见全部菜单，其他用户仅可见所属角色关联的菜单"""
        query = query or MenuQuery()
        role_ids = None if user.is_admin else [role.id for role in user.roles]
        menus = await self.menu_repository.find_all(name=query.name, path=query.path, role_ids=role_ids)
        return [MenuOut.model_validate(menu) for menu in menus]

    async def find_one(self, menu_id: UUID) -> MenuOut:
        menu = await self.menu_repository.get_by_id(menu_id)
        if not menu:
            raise ResourceNotFound(f"菜单不存在：{menu_id}")
        return MenuOut.model_validate(menu)

    async def update(self, menu_id: UUID, menu_in: MenuUpdate) -> MenuOut:
        async with self.menu_repository.transaction() as session:
            menu = await self.menu_repository.get_by_id(menu_id, session)
            if not menu:
                raise ResourceNotFound(f"菜单不存在：{menu_id}")
            data = to_update_fields(
                menu_in,
                nullable={"parent_id", "path", "permission", "icon", "active_icon", "active_path", "redirect",
                          "query", "link", "iframe_src", "badge", "badge_type", "badge_variants", "title"},
            )
            await self.menu_repository.update(menu, data, session)
        return MenuOut.model_validate(menu)
