"""
SQLAlchemy Declarative Base
backend/backoffice/models/base.py
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base

from backoffice.core.config import DEFAULT_TZ

# 创建DeclarativeBase实例
Base = declarative_base()


def now_tz() -> datetime:
    """当前时间（全局时区）"""
    return datetime.now(DEFAULT_TZ)


def uuid_pk_column():
    """生成UUID主键列的辅助函数（PostgreSQL原生uuid，其他数据库以字符串存储）"""
    return Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        unique=True,
        nullable=False
    )


def created_at_column():
    return Column(DateTime(timezone=True), default=now_tz, nullable=False, comment='创建时间')


def updated_at_column():
    return Column(DateTime(timezone=True), default=now_tz, onupdate=now_tz, nullable=False, comment='更新时间')


__all__ = ['Base', 'uuid_pk_column', 'created_at_column', 'updated_at_column', 'now_tz']
