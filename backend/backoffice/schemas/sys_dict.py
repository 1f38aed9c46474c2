"""
数据字典相关的Pydantic Schemas
backend/backoffice/schemas/sys_dict.py
"""
from typing import Optional
from uuid import UUID

from pydantic import Field

from backoffice.schemas.base import BaseSchema, IDSchema, TimestampSchema


# ========== 字典类型 ==========
class DictCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=64, description="字典名称", examples=["用户性别"])
    value: str = Field(..., min_length=1, max_length=64, description="字典标识", examples=["sys_user_sex"])
    remark: str = Field('', max_length=255)
    status: bool = True


class DictUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    value: Optional[str] = Field(None, min_length=1, max_length=64)
    remark: Optional[str] = Field(None, max_length=255)
    status: Optional[bool] = None


class DictQuery(BaseSchema):
    name: Optional[str] = None
    value: Optional[str] = None


class DictOut(DictCreate, IDSchema, TimestampSchema):
    pass


# ========== 字典数据 ==========
class DictDataCreate(BaseSchema):
    dict_id: UUID = Field(..., description="所属字典ID")
    name: str = Field(..., min_length=1, max_length=64, description="数据标签")
    value: str = Field(..., min_length=1, max_length=64, description="数据值")
    order: int = 0
    remark: str = Field('', max_length=255)
    status: bool = True


class DictDataUpdate(BaseSchema):
    dict_id: Optional[UUID] = None
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    value: Optional[str] = Field(None, min_length=1, max_length=64)
    order: Optional[int] = None
    remark: Optional[str] = Field(None, max_length=255)
    status: Optional[bool] = None


class DictDataQuery(BaseSchema):
    name: Optional[str] = None
    dict_id: Optional[UUID] = None
    dict_value: Optional[str] = None


class DictDataOut(DictDataCreate, IDSchema, TimestampSchema):
    update_by: Optional[str] = None
