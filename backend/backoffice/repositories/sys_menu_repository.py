"""
菜单模块数据访问层
backend/backoffice/repositories/sys_menu_repository.py
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from backoffice.models import SysMenu, sys_role_menu
from backoffice.repositories.base_repository import BaseRepository, contains_conditions


class MenuRepository(BaseRepository):
    model = SysMenu

    async def find_all(
        self,
        name: Optional[str] = None,
        path: Optional[str] = None,
        role_ids: Optional[List[UUID]] = None,
    ) -> List[SysMenu]:
        """
        查询菜单列表，按 order 升序
        role_ids 为 None 时不限制（超级管理员），否则仅返回这些角色关联的菜单
        """
        stmt = select(SysMenu).where(*contains_conditions(SysMenu, {"name": name, "path": path}))
        if role_ids is not None:
            menu_ids = select(sys_role_menu.c.menu_id).where(sys_role_menu.c.role_id.in_(role_ids))
            stmt = stmt.where(SysMenu.id.in_(menu_ids))
        return await self.all(stmt.order_by(SysMenu.order.asc(), SysMenu.created_at.asc()))

    async def collect_descendant_ids(self, menu_id: UUID, session: AsyncSession) -> List[UUID]:
        """逐层收集子孙菜单ID（不含自身）"""
        descendants: List[UUID] = []
        frontier = [menu_id]
        while frontier:
            result = await session.execute(select(SysMenu.id).where(SysMenu.parent_id.in_(frontier)))
            frontier = [child_id for child_id in result.scalars().all() if child_id not in descendants]
            descendants.extend(frontier)
        return descendants

    # ------------------------------
    # 写操作类方法（需在事务内执行）
    # ------------------------------
    async def add_many(self, items: List[dict], session: AsyncSession) -> List[SysMenu]:
        menus = [SysMenu(**item) for item in items]
        session.add_all(menus)
        await session.flush()
        return menus

    async def remove_tree(self, menu_id: UUID, session: AsyncSession) -> int:
        """删除菜单及全部子孙菜单，返回删除数量"""
        ids = [menu_id] + await self.collect_descendant_ids(menu_id, session)
        await session.execute(delete(sys_role_menu).where(sys_role_menu.c.menu_id.in_(ids)))
        result = await session.execute(delete(SysMenu).where(SysMenu.id.in_(ids)))
        return result.rowcount
