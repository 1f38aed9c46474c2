"""
base类
backend/backoffice/schemas/base.py
- 对外字段统一使用小驼峰（phoneNumber / createdAt），入参同时兼容下划线写法
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from backoffice.core.config import DEFAULT_TZ


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True  # 替换原来的orm_mode
        populate_by_name = True
        alias_generator = to_camel


class TimestampSchema(BaseSchema):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IDSchema(BaseSchema):
    id: UUID


class PageQuery(BaseSchema):
    """分页查询公共参数"""
    current: int = Field(1, ge=1, description="页码")
    page_size: int = Field(10, ge=1, description="每页数量")
    created_at_start: Optional[date] = Field(None, description="创建日期起始")
    created_at_end: Optional[date] = Field(None, description="创建日期结束（含当天）")

    @property
    def offset(self) -> int:
        return (self.current - 1) * self.page_size

    def created_at_range(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """创建时间区间 [start 00:00, end+1天 00:00)，按全局时区计算"""
        start = datetime.combine(self.created_at_start, time.min, DEFAULT_TZ) if self.created_at_start else None
        end = None
        if self.created_at_end:
            end = datetime.combine(self.created_at_end + timedelta(days=1), time.min, DEFAULT_TZ)
        return start, end
