"""
数据访问层基类
backend/backoffice/repositories/base_repository.py
标准Repo层实现：
1. 注入会话工厂，自主创建事务会话
2. 事务上下文统一管理会话生命周期（创建→提交/回滚→关闭）
3. 查询方法可复用调用方传入的会话（同一事务内读写），未传入时自建事务
4. 纯DB操作，无业务逻辑
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import delete, select


class BaseRepository:
    # 子类指定对应的ORM模型
    model: Any = None

    # 注入会话工厂（从DI容器获取）
    def __init__(self, async_session_factory: sessionmaker):
        self.async_session_factory = async_session_factory

    # ------------------------------
    # 核心：标准异步事务上下文
    # ------------------------------
    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        session: AsyncSession = self.async_session_factory()
        try:
            await session.begin()
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def use_session(self, session: Optional[AsyncSession] = None) -> AsyncGenerator[AsyncSession, None]:
        """有外部会话则复用，否则新建事务"""
        if session is not None:
            yield session
            return
        async with self.transaction() as own_session:
            yield own_session

    # ------------------------------
    # 通用查询
    # ------------------------------
    async def get_by_id(self, entity_id: Any, session: Optional[AsyncSession] = None, options: Sequence = ()):
        async with self.use_session(session) as s:
            stmt = select(self.model).where(self.model.id == entity_id)
            if options:
                stmt = stmt.options(*options).execution_options(populate_existing=True)
            result = await s.execute(stmt)
            return result.scalars().first()

    async def paginate(self, stmt, offset: int, limit: int, session: Optional[AsyncSession] = None) -> Tuple[List[Any], int]:
        """分页查询：返回（当前页数据，总条数）"""
        async with self.use_session(session) as s:
            count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
            total = (await s.execute(count_stmt)).scalar_one()
            result = await s.execute(stmt.offset(offset).limit(limit))
            return list(result.scalars().all()), total

    async def all(self, stmt, session: Optional[AsyncSession] = None) -> List[Any]:
        async with self.use_session(session) as s:
            result = await s.execute(stmt)
            return list(result.scalars().all())

    # ------------------------------
    # 通用写操作（需在事务内执行）
    # ------------------------------
    async def add(self, data: Dict[str, Any], session: AsyncSession):
        entity = self.model(**data)
        session.add(entity)
        await session.flush()  # 刷新获取ID（不提交事务）
        return entity

    async def update(self, entity: Any, data: Dict[str, Any], session: AsyncSession):
        for field, value in data.items():
            setattr(entity, field, value)
        session.add(entity)
        await session.flush()
        return entity

    async def delete_by_id(self, entity_id: Any, session: AsyncSession) -> int:
        """按ID删除，返回删除行数"""
        result = await session.execute(delete(self.model).where(self.model.id == entity_id))
        return result.rowcount


# ------------------------------
# 查询条件构造
# ------------------------------
def contains_conditions(model: Any, filters: Dict[str, Optional[str]]) -> List[Any]:
    """大小写不敏感的模糊匹配条件，空值忽略"""
    return [
        getattr(model, field).icontains(value, autoescape=True)
        for field, value in filters.items()
        if value
    ]


def created_at_conditions(model: Any, time_range: Tuple[Optional[datetime], Optional[datetime]]) -> List[Any]:
    """创建时间区间条件 [start, end)"""
    start, end = time_range
    conditions = []
    if start is not None:
        conditions.append(model.created_at >= start)
    if end is not None:
        conditions.append(model.created_at < end)
    return conditions
