"""
部门模块数据访问层
backend/backoffice/repositories/sys_dept_repository.py
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from backoffice.models import SysDept, SysUser
from backoffice.repositories.base_repository import BaseRepository, contains_conditions


class DeptRepository(BaseRepository):
    """
    部门仓储层
    """
    model = SysDept

    async def find_all(self, name: Optional[str] = None) -> List[SysDept]:
        stmt = (
            select(SysDept)
            .where(*contains_conditions(SysDept, {"name": name}))
            .order_by(SysDept.order.asc(), SysDept.created_at.asc())
        )
        return await self.all(stmt)

    async def remove(self, dept_id: UUID, session: AsyncSession) -> int:
        """删除部门：子部门上移为顶级，部门成员解除归属"""
        await session.execute(update(SysDept).where(SysDept.parent_id == dept_id).values(parent_id=None))
        await session.execute(update(SysUser).where(SysUser.dept_id == dept_id).values(dept_id=None))
        return await self.delete_by_id(dept_id, session)
