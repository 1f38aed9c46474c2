"""
字段映射工具 - 入参Schema → ORM字段
backend/backoffice/utils/field_mapper.py
- 数据库层保持snake_case，API层的camelCase由Schema别名处理，这里统一按字段名导出
"""
from typing import Any, Dict, Iterable

from pydantic import BaseModel


def to_create_fields(schema: BaseModel, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    """创建：忽略值为None的字段，交给模型默认值"""
    return schema.model_dump(exclude=set(exclude), exclude_none=True)


def to_update_fields(schema: BaseModel, exclude: Iterable[str] = (), nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """
    部分更新：仅导出请求中显式传入的字段
    值为None的字段只有在 nullable 中声明时才会写入（如置空外键）
    """
    nullable = set(nullable)
    data = schema.model_dump(exclude=set(exclude), exclude_unset=True)
    return {field: value for field, value in data.items() if value is not None or field in nullable}
