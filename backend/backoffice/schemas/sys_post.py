"""
岗位相关的Pydantic Schemas
backend/backoffice/schemas/sys_post.py
"""
from typing import Optional

from pydantic import Field

from backoffice.schemas.base import BaseSchema, IDSchema, PageQuery, TimestampSchema


class PostCreate(BaseSchema):
    code: str = Field(..., min_length=1, max_length=64, description="岗位编码", examples=["ceo"])
    name: str = Field(..., min_length=1, max_length=64, description="岗位名称", examples=["董事长"])
    order: int = Field(0, description="显示顺序")
    remark: str = Field('', max_length=255)


class PostUpdate(BaseSchema):
    code: Optional[str] = Field(None, min_length=1, max_length=64)
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    order: Optional[int] = None
    remark: Optional[str] = Field(None, max_length=255)


class PostQuery(PageQuery):
    name: Optional[str] = None
    code: Optional[str] = None


class PostOut(PostCreate, IDSchema, TimestampSchema):
    pass
