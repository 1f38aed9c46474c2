"""
数据字典数据访问层（字典类型 + 字典数据）
backend/backoffice/repositories/sys_dict_repository.py
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from backoffice.models import SysDict, SysDictData
from backoffice.repositories.base_repository import BaseRepository, contains_conditions


class DictRepository(BaseRepository):
    model = SysDict

    async def find_all(self, name: Optional[str] = None, value: Optional[str] = None) -> List[SysDict]:
        stmt = (
            select(SysDict)
            .where(*contains_conditions(SysDict, {"name": name, "value": value}))
            .order_by(SysDict.created_at.asc())
        )
        return await self.all(stmt)

    async def get_by_value(self, value: str, session: Optional[AsyncSession] = None) -> Optional[SysDict]:
        rows = await self.all(select(SysDict).where(SysDict.value == value), session)
        return rows[0] if rows else None

    async def first_by_value_contains(self, value: str, session: Optional[AsyncSession] = None) -> Optional[SysDict]:
        """按字典标识模糊匹配，返回第一条"""
        stmt = (
            select(SysDict)
            .where(*contains_conditions(SysDict, {"value": value}))
            .order_by(SysDict.created_at.asc())
            .limit(1)
        )
        rows = await self.all(stmt, session)
        return rows[0] if rows else None

    async def remove(self, dict_id: UUID, session: AsyncSession) -> int:
        """删除字典及其全部字典数据"""
        await session.execute(delete(SysDictData).where(SysDictData.dict_id == dict_id))
        return await self.delete_by_id(dict_id, session)


class DictDataRepository(BaseRepository):
    model = SysDictData

    async def find_all(self, name: Optional[str] = None, dict_id: Optional[UUID] = None) -> List[SysDictData]:
        stmt = select(SysDictData).where(*contains_conditions(SysDictData, {"name": name}))
        if dict_id is not None:
            stmt = stmt.where(SysDictData.dict_id == dict_id)
        return await self.all(stmt.order_by(SysDictData.order.asc(), SysDictData.created_at.asc()))
