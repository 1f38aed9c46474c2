"""
角色相关的Pydantic Schemas
backend/backoffice/schemas/sys_role.py
"""
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from backoffice.schemas.base import BaseSchema, IDSchema, PageQuery, TimestampSchema


class RoleBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=64, description="角色名称", examples=["管理员"])
    value: str = Field(..., min_length=1, max_length=64, description="角色标识", examples=["admin"])
    order: int = Field(0, description="显示顺序")
    remark: str = Field('', max_length=255, description="备注")
    status: bool = Field(True, description="角色状态")


class RoleCreate(RoleBase):
    menu_ids: Optional[List[UUID]] = Field(None, description="菜单ID列表")


class RoleUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    value: Optional[str] = Field(None, min_length=1, max_length=64)
    order: Optional[int] = None
    remark: Optional[str] = Field(None, max_length=255)
    status: Optional[bool] = None
    menu_ids: Optional[List[UUID]] = None


class RoleQuery(PageQuery):
    name: Optional[str] = None
    value: Optional[str] = None


class RoleOut(RoleBase, IDSchema, TimestampSchema):
    pass


class RoleDetailOut(RoleOut):
    menu_ids: List[UUID] = Field(default_factory=list, description="已分配的菜单ID")
