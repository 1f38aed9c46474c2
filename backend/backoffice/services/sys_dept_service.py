"""
部门服务层
backend/backoffice/services/sys_dept_service.py
"""
import logging
from typing import List, Optional
from uuid import UUID

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.repositories.sys_dept_repository import DeptRepository
from backoffice.repositories.sys_user_repository import UserRepository
from backoffice.schemas.sys_dept import DeptCreate, DeptOut, DeptQuery, DeptTreeOut, DeptUpdate
from backoffice.utils.field_mapper import to_create_fields, to_update_fields
from backoffice.utils.tree import transformation_tree

logger = logging.getLogger(__name__)


class DeptService:
    """
    部门服务
    """

    def __init__(self, dept_repository: DeptRepository, user_repository: UserRepository):
        self.dept_repository = dept_repository
        self.user_repository = user_repository

    async def _get_leader(self, leader_id: UUID, session):
        leader = await self.user_repository.get_by_id(leader_id, session)
        if not leader:
            raise ResourceNotFound(f"负责人不存在：{leader_id}")
        return leader

    async def create(self, dept_in: DeptCreate) -> DeptOut:
        """创建部门：负责人同步标记为部门负责人并归属到新部门"""
        async with self.dept_repository.transaction() as session:
            leader = await self._get_leader(dept_in.leader_id, session)
            data = to_create_fields(dept_in)
            data["leader"] = leader.username
            dept = await self.dept_repository.add(data, session)
            await self.user_repository.update(leader, {"is_dept_admin": True, "dept_id": dept.id}, session)
        logger.info(f"创建部门成功 | 部门：{dept.name} | 负责人：{dept.leader}")
        return DeptOut.model_validate(dept)

    async def delete(self, dept_id: UUID) -> None:
        async with self.dept_repository.transaction() as session:
            if not await self.dept_repository.remove(dept_id, session):
                raise ResourceNotFound(f"部门不存在：{dept_id}")

    async def find_all(self, query: Optional[DeptQuery] = None) -> List[DeptTreeOut]:
        """部门列表（树形）"""
        query = query or DeptQuery()
        depts = await self.dept_repository.find_all(name=query.name)
        items = [DeptOut.model_validate(dept).model_dump() for dept in depts]
        return [DeptTreeOut.model_validate(node) for node in transformation_tree(items, None)]

    async def find_one(self, dept_id: UUID) -> DeptOut:
        dept = await self.dept_repository.get_by_id(dept_id)
        if not dept:
            raise ResourceNotFound(f"部门不存在：{dept_id}")
        return DeptOut.model_validate(dept)

    async def update(self, dept_id: UUID, dept_in: DeptUpdate) -> DeptOut:
        async with self.dept_repository.transaction() as session:
            dept = await self.dept_repository.get_by_id(dept_id, session)
            if not dept:
                raise ResourceNotFound(f"部门不存在：{dept_id}")
            data = to_update_fields(dept_in, nullable={"parent_id"})
            if data.get("parent_id") == dept_id:
                raise BadRequest("上级部门不能是自身")
            if "leader_id" in data and data["leader_id"] != dept.leader_id:
                data["leader"] = (await self._get_leader(data["leader_id"], session)).username
            await self.dept_repository.update(dept, data, session)
        return DeptOut.model_validate(dept)
