"""
用户模块数据访问层
backend/backoffice/repositories/sys_user_repository.py
"""
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import delete, insert, select

from backoffice.models import SysRole, SysUser, sys_user_role
from backoffice.repositories.base_repository import BaseRepository, contains_conditions, created_at_conditions

# 列表/详情统一预加载：角色 + 部门
USER_BRIEF_OPTIONS = (selectinload(SysUser.roles), selectinload(SysUser.dept))
# 当前用户预加载：角色 → 菜单 + 部门（权限校验依赖）
USER_MENU_OPTIONS = (selectinload(SysUser.roles).selectinload(SysRole.menus), selectinload(SysUser.dept))


class UserRepository(BaseRepository):
    model = SysUser

    # ------------------------------
    # 查询类方法
    # ------------------------------
    async def get_detail(self, user_id: UUID, session: Optional[AsyncSession] = None) -> Optional[SysUser]:
        """按ID查询用户（预加载角色+部门）"""
        return await self.get_by_id(user_id, session, options=USER_BRIEF_OPTIONS)

    async def get_with_menus(self, user_id: UUID, session: Optional[AsyncSession] = None) -> Optional[SysUser]:
        """按ID查询用户（预加载角色→菜单+部门）"""
        return await self.get_by_id(user_id, session, options=USER_MENU_OPTIONS)

    async def get_by_username(self, username: str, session: Optional[AsyncSession] = None) -> Optional[SysUser]:
        async with self.use_session(session) as s:
            stmt = select(SysUser).options(*USER_BRIEF_OPTIONS).where(SysUser.username == username)
            result = await s.execute(stmt)
            return result.scalars().first()

    def _filtered(self, filters: Dict[str, Optional[str]], time_range: Tuple[Any, Any]):
        conditions = contains_conditions(SysUser, filters) + created_at_conditions(SysUser, time_range)
        return (
            select(SysUser)
            .options(*USER_BRIEF_OPTIONS)
            .where(*conditions)
            .order_by(SysUser.created_at.desc())
        )

    async def find_all(self, filters: Dict[str, Optional[str]], time_range: Tuple[Any, Any] = (None, None)) -> List[SysUser]:
        return await self.all(self._filtered(filters, time_range))

    async def find_page(
        self,
        filters: Dict[str, Optional[str]],
        time_range: Tuple[Any, Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[SysUser], int]:
        return await self.paginate(self._filtered(filters, time_range), offset, limit)

    # ------------------------------
    # 写操作类方法（需在事务内执行）
    # ------------------------------
    async def set_roles(self, user_id: UUID, role_ids: List[UUID], session: AsyncSession) -> None:
        """重置用户角色（先清空再新增）"""
        await session.execute(delete(sys_user_role).where(sys_user_role.c.user_id == user_id))
        if role_ids:
            await session.execute(
                insert(sys_user_role).values([{"user_id": user_id, "role_id": rid} for rid in dict.fromkeys(role_ids)])
            )

    async def remove(self, user: SysUser, session: AsyncSession) -> None:
        """删除用户及其角色关联"""
        await session.execute(delete(sys_user_role).where(sys_user_role.c.user_id == user.id))
        await self.delete_by_id(user.id, session)
