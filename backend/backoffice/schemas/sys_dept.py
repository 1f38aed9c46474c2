"""
部门相关的Pydantic Schemas
backend/backoffice/schemas/sys_dept.py
"""
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from backoffice.schemas.base import BaseSchema, IDSchema, TimestampSchema


class DeptCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100, description="部门名称")
    leader_id: UUID = Field(..., description="负责人用户ID")
    email: Optional[EmailStr] = Field(None, description="邮箱")
    phone: Optional[str] = Field(None, max_length=20, description="联系电话")
    order: int = Field(0, description="显示顺序")
    parent_id: Optional[UUID] = Field(None, description="父部门ID")


class DeptUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    leader_id: Optional[UUID] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    order: Optional[int] = None
    parent_id: Optional[UUID] = None


class DeptQuery(BaseSchema):
    name: Optional[str] = None


class DeptOut(IDSchema, TimestampSchema):
    name: str
    parent_id: Optional[UUID] = None
    leader_id: Optional[UUID] = None
    leader: Optional[str] = None
    email: str = ''
    phone: str = ''
    order: int = 0


class DeptTreeOut(DeptOut):
    children: List['DeptTreeOut'] = Field(default_factory=list)


DeptTreeOut.model_rebuild()
