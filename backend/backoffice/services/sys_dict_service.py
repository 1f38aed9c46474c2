"""
数据字典业务层（字典类型 + 字典数据）
backend/backoffice/services/sys_dict_service.py
"""
import logging
from typing import List, Optional
from uuid import UUID

from backoffice.core.exceptions import Conflict, ResourceNotFound
from backoffice.repositories.sys_dict_repository import DictDataRepository, DictRepository
from backoffice.schemas.sys_dict import (
    DictCreate,
    DictDataCreate,
    DictDataOut,
    DictDataQuery,
    DictDataUpdate,
    DictOut,
    DictQuery,
    DictUpdate,
)
from backoffice.utils.field_mapper import to_create_fields, to_update_fields

logger = logging.getLogger(__name__)


class DictService:
    def __init__(self, dict_repository: DictRepository, dict_data_repository: DictDataRepository):
        self.dict_repository = dict_repository
        self.dict_data_repository = dict_data_repository

    # ========== 字典类型 ==========

    async def _ensure_unique_value(self, value: str, session) -> None:
        if await self.dict_repository.get_by_value(value, session):
            raise Conflict(f"字典标识已存在：{value}")

    async def create(self, dict_in: DictCreate) -> DictOut:
        async with self.dict_repository.transaction() as session:
            await self._ensure_unique_value(dict_in.value, session)
            sys_dict = await self.dict_repository.add(to_create_fields(dict_in), session)
        logger.info(f"创建字典成功 | 字典：{sys_dict.name}({sys_dict.value})")
        return DictOut.model_validate(sys_dict)

    async def delete(self, dict_id: UUID) -> None:
        async with self.dict_repository.transaction() as session:
            if not await self.dict_repository.remove(dict_id, session):
                raise ResourceNotFound(f"字典不存在：{dict_id}")

    async def find_all(self, query: Optional[DictQuery] = None) -> List[DictOut]:
        query = query or DictQuery()
        dicts = await self.dict_repository.find_all(name=query.name, value=query.value)
        return [DictOut.model_validate(d) for d in dicts]

    async def find_one(self, dict_id: UUID) -> DictOut:
        sys_dict = await self.dict_repository.get_by_id(dict_id)
        if not sys_dict:
            raise ResourceNotFound(f"字典不存在：{dict_id}")
        return DictOut.model_validate(sys_dict)

    async def update(self, dict_id: UUID, dict_in: DictUpdate) -> DictOut:
        async with self.dict_repository.transaction() as session:
            sys_dict = await self.dict_repository.get_by_id(dict_id, session)
            if not sys_dict:
                raise ResourceNotFound(f"字典不存在：{dict_id}")
            data = to_update_fields(dict_in)
            if "value" in data and data["value"] != sys_dict.value:
                await self._ensure_unique_value(data["value"], session)
            await self.dict_repository.update(sys_dict, data, session)
        return DictOut.model_validate(sys_dict)

    # ========== 字典数据 ==========

    async def create_data(self, data_in: DictDataCreate, operator: Optional[str] = None) -> DictDataOut:
        async with self.dict_data_repository.transaction() as session:
            if not await self.dict_repository.get_by_id(data_in.dict_id, session):
                raise ResourceNotFound(f"字典不存在：{data_in.dict_id}")
            data = to_create_fields(data_in)
            data["update_by"] = operator
            dict_data = await self.dict_data_repository.add(data, session)
        return DictDataOut.model_validate(dict_data)

    async def delete_data(self, data_id: UUID) -> None:
        async with self.dict_data_repository.transaction() as session:
            if not await self.dict_data_repository.delete_by_id(data_id, session):
                raise ResourceNotFound(f"字典数据不存在：{data_id}")

    async def find_all_data(self, query: Optional[DictDataQuery] = None) -> List[DictDataOut]:
        """
        字典数据列表
        传入 dict_value 时按字典标识模糊匹配第一条字典，匹配不到直接返回空列表
        """
        query = query or DictDataQuery()
        dict_id = query.dict_id
        if query.dict_value:
            sys_dict = await self.dict_repository.first_by_value_contains(query.dict_value)
            if not sys_dict:
                return []
            dict_id = sys_dict.id
        rows = await self.dict_data_repository.find_all(name=query.name, dict_id=dict_id)
        return [DictDataOut.model_validate(row) for row in rows]

    async def find_one_data(self, data_id: UUID) -> DictDataOut:
        dict_data = await self.dict_data_repository.get_by_id(data_id)
        if not dict_data:
            raise ResourceNotFound(f"字典数据不存在：{data_id}")
        return DictDataOut.model_validate(dict_data)

    async def update_data(self, data_id: UUID, data_in: DictDataUpdate, operator: Optional[str] = None) -> DictDataOut:
        async with self.dict_data_repository.transaction() as session:
            dict_data = await self.dict_data_repository.get_by_id(data_id, session)
            if not dict_data:
                raise ResourceNotFound(f"字典数据不存在：{data_id}")
            data = to_update_fields(data_in)
            if "dict_id" in data and not await self.dict_repository.get_by_id(data["dict_id"], session):
                raise ResourceNotFound(f"字典不存在：{data['dict_id']}")
            data["update_by"] = operator
            await self.dict_data_repository.update(dict_data, data, session)
        return DictDataOut.model_validate(dict_data)
