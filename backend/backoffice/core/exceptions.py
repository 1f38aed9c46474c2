"""
核心异常处理配置文件
backend/backoffice/core/exceptions.py
"""
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError


class AppException(HTTPException):
    """基础异常类"""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class ResourceNotFound(AppException):
    """资源不存在异常（404）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequest(AppException):
    """参数错误/业务错误（400）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthorized(AppException):
    """未认证或认证失败（401）"""
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
        self.headers = {"WWW-Authenticate": "Bearer"}


class PermissionDenied(AppException):
    """权限不足（403）"""
    def __init__(self, detail: str = "Not enough privileges"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class Conflict(AppException):
    """资源冲突（409）"""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


# 数据库约束错误关键字（兼容 PostgreSQL / SQLite 的报错文本）
_UNIQUE_MARKERS = ("unique constraint", "duplicate key", "uniqueviolation")
_FOREIGN_KEY_MARKERS = ("foreign key", "foreignkeyviolation")


def integrity_error_status(exc: IntegrityError) -> int:
    """
    数据库完整性异常映射为HTTP状态码
    - 唯一约束冲突 → 409
    - 外键约束失败 → 400
    - 其他完整性错误（如非空约束） → 400
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if any(marker in message for marker in _UNIQUE_MARKERS):
        return status.HTTP_409_CONFLICT
    if any(marker in message for marker in _FOREIGN_KEY_MARKERS):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_400_BAD_REQUEST


def integrity_error_message(exc: IntegrityError) -> str:
    """提取数据库异常的首行信息，避免把完整SQL返回给前端"""
    message = str(exc.orig if exc.orig is not None else exc)
    first_line = message.strip().splitlines()[0] if message.strip() else ""
    return first_line or "Database integrity error"
