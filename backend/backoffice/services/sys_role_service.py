"""
角色模块业务层
backend/backoffice/services/sys_role_service.py
"""
import logging
from uuid import UUID

from backoffice.core.exceptions import Conflict, ResourceNotFound
from backoffice.repositories.sys_role_repository import RoleRepository
from backoffice.schemas.responses import PageResult
from backoffice.schemas.sys_role import RoleCreate, RoleDetailOut, RoleOut, RoleQuery, RoleUpdate
from backoffice.utils.field_mapper import to_create_fields, to_update_fields

logger = logging.getLogger(__name__)


class RoleService:
    def __init__(self, role_repository: RoleRepository):
        self.role_repository = role_repository

    async def _ensure_unique_value(self, value: str, session) -> None:
        if await self.role_repository.get_by_values([value], session):
            raise Conflict(f"角色标识已存在：{value}")

    async def create(self, role_in: RoleCreate) -> RoleDetailOut:
        async with self.role_repository.transaction() as session:
            await self._ensure_unique_value(role_in.value, session)
            role = await self.role_repository.add(to_create_fields(role_in, exclude={"menu_ids"}), session)
            if role_in.menu_ids:
                await self.role_repository.set_menus(role.id, role_in.menu_ids, session)
        logger.info(f"创建角色成功 | 角色：{role.name}({role.value})")
        return await self.find_one(role.id)

    async def delete(self, role_id: UUID) -> None:
        async with self.role_repository.transaction() as session:
            if not await self.role_repository.remove(role_id, session):
                raise ResourceNotFound(f"角色不存在：{role_id}")

    async def find_one(self, role_id: UUID) -> RoleDetailOut:
        role = await self.role_repository.get_with_menus(role_id)
        if not role:
            raise ResourceNotFound(f"角色不存在：{role_id}")
        detail = RoleDetailOut.model_validate(role)
        detail.menu_ids = [menu.id for menu in role.menus]
        return detail

    async def find_with_pagination(self, query: RoleQuery) -> PageResult[RoleOut]:
        roles, total = await self.role_repository.find_page(
            {"name": query.name, "value": query.value},
            query.created_at_range(),
            query.offset,
            query.page_size,
        )
        return PageResult[RoleOut].build(
            [RoleOut.model_validate(role) for role in roles], total, query.current, query.page_size
        )

    async def update(self, role_id: UUID, role_in: RoleUpdate) -> RoleDetailOut:
        async with self.role_repository.transaction() as session:
            role = await self.role_repository.get_by_id(role_id, session)
            if not role:
                raise ResourceNotFound(f"角色不存在：{role_id}")
            data = to_update_fields(role_in, exclude={"menu_ids"})
            if "value" in data and data["value"] != role.value:
                await self._ensure_unique_value(data["value"], session)
            await self.role_repository.update(role, data, session)
            if role_in.menu_ids is not None:
                await self.role_repository.set_menus(role.id, role_in.menu_ids, session)
        return await self.find_one(role_id)
