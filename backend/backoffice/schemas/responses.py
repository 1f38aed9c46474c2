"""
统一API响应模型
backend/backoffice/schemas/responses.py
"""
import math
from datetime import datetime
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from backoffice.core.config import DEFAULT_TZ
from backoffice.schemas.base import BaseSchema

T = TypeVar('T')


def _now() -> datetime:
    return datetime.now(DEFAULT_TZ)


class ApiResponse(BaseModel, Generic[T]):
    """API统一响应格式"""
    code: str = Field(default="00000", description="响应代码")
    data: Optional[T] = Field(default=None, description="响应数据")
    msg: str = Field(default="操作成功", description="响应消息")
    timestamp: datetime = Field(default_factory=_now, description="响应时间戳")

    @classmethod
    def success(cls, data: Any = None, msg: str = "操作成功") -> 'ApiResponse[T]':
        """成功响应快捷方法"""
        return cls(code=ResponseCode.SUCCESS, data=data, msg=msg)


class ErrorResponse(BaseSchema):
    """错误响应模型（全局异常处理器统一输出）"""
    code: str = Field(..., description="错误代码")
    msg: str = Field(..., description="错误消息")
    details: Optional[Any] = Field(None, description="错误详情")
    path: Optional[str] = Field(None, description="请求路径")
    request_id: Optional[str] = Field(None, description="请求ID")
    timestamp: datetime = Field(default_factory=_now)


class PageResult(BaseSchema, Generic[T]):
    """分页结果"""
    list: List[T] = Field(default_factory=lambda: [], description="当前页数据")
    current_page: int = Field(1, description="当前页码")
    page_count: int = Field(0, description="总页数")
    total_count: int = Field(0, description="总条数")
    is_first_page: bool = True
    is_last_page: bool = True
    previous_page: Optional[int] = None
    next_page: Optional[int] = None

    @classmethod
    def build(cls, items: Sequence[Any], total: int, current: int, page_size: int) -> 'PageResult[T]':
        page_count = math.ceil(total / page_size) if page_size else 0
        return cls(
            list=items,
            current_page=current,
            page_count=page_count,
            total_count=total,
            is_first_page=current <= 1,
            is_last_page=current >= page_count,
            previous_page=current - 1 if current > 1 else None,
            next_page=current + 1 if current < page_count else None,
        )


# 常用响应代码
class ResponseCode:
    SUCCESS = "00000"
    VALIDATION_ERROR = "10001"
    AUTH_ERROR = "20001"
    PERMISSION_DENIED = "20003"
    NOT_FOUND = "30001"
    CONFLICT = "30009"
    INTERNAL_ERROR = "50000"

    _STATUS_MAP = {
        400: VALIDATION_ERROR,
        401: AUTH_ERROR,
        403: PERMISSION_DENIED,
        404: NOT_FOUND,
        409: CONFLICT,
        422: VALIDATION_ERROR,
    }

    @classmethod
    def from_status(cls, status_code: int) -> str:
        if status_code >= 500:
            return cls.INTERNAL_ERROR
        return cls._STATUS_MAP.get(status_code, cls.VALIDATION_ERROR)
