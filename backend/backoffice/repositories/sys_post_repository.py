"""
岗位模块数据访问层
backend/backoffice/repositories/sys_post_repository.py
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from backoffice.models import SysPost
from backoffice.repositories.base_repository import BaseRepository, contains_conditions, created_at_conditions


class PostRepository(BaseRepository):
    model = SysPost

    async def find_page(
        self,
        filters: Dict[str, Optional[str]],
        time_range: Tuple[Any, Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[SysPost], int]:
        conditions = contains_conditions(SysPost, filters) + created_at_conditions(SysPost, time_range)
        stmt = select(SysPost).where(*conditions).order_by(SysPost.order.asc(), SysPost.created_at.asc())
        return await self.paginate(stmt, offset, limit)

    async def get_by_code(self, code: str, session: Optional[AsyncSession] = None) -> Optional[SysPost]:
        rows = await self.all(select(SysPost).where(SysPost.code == code), session)
        return rows[0] if rows else None
