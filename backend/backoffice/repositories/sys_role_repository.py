"""
角色模块数据访问层
backend/backoffice/repositories/sys_role_repository.py
"""
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import delete, insert, select

from backoffice.models import SysRole, sys_role_menu, sys_user_role
from backoffice.repositories.base_repository import BaseRepository, contains_conditions, created_at_conditions


class RoleRepository(BaseRepository):
    model = SysRole

    async def get_with_menus(self, role_id: UUID, session: Optional[AsyncSession] = None) -> Optional[SysRole]:
        return await self.get_by_id(role_id, session, options=(selectinload(SysRole.menus),))

    async def find_page(
        self,
        filters: Dict[str, Optional[str]],
        time_range: Tuple[Any, Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[SysRole], int]:
        conditions = contains_conditions(SysRole, filters) + created_at_conditions(SysRole, time_range)
        stmt = select(SysRole).where(*conditions).order_by(SysRole.order.asc(), SysRole.created_at.asc())
        return await self.paginate(stmt, offset, limit)

    async def get_by_values(self, values: List[str], session: Optional[AsyncSession] = None) -> List[SysRole]:
        return await self.all(select(SysRole).where(SysRole.value.in_(values)), session)

    # ------------------------------
    # 写操作类方法（需在事务内执行）
    # ------------------------------
    async def set_menus(self, role_id: UUID, menu_ids: List[UUID], session: AsyncSession) -> None:
        """重置角色菜单（先清空再新增）"""
        await session.execute(delete(sys_role_menu).where(sys_role_menu.c.role_id == role_id))
        if menu_ids:
            await session.execute(
                insert(sys_role_menu).values([{"role_id": role_id, "menu_id": mid} for mid in dict.fromkeys(menu_ids)])
            )

    async def remove(self, role_id: UUID, session: AsyncSession) -> int:
        """删除角色及其用户/菜单关联"""
        await session.execute(delete(sys_user_role).where(sys_user_role.c.role_id == role_id))
        await session.execute(delete(sys_role_menu).where(sys_role_menu.c.role_id == role_id))
        return await self.delete_by_id(role_id, session)
