"""
认证相关的Pydantic Schemas
backend/backoffice/schemas/sys_auth.py
"""
from typing import Optional

from pydantic import Field

from backoffice.schemas.base import BaseSchema


class SignInRequest(BaseSchema):
    username: str = Field(..., min_length=4, max_length=64, description="用户名", examples=["admin"])
    password: str = Field(..., min_length=4, max_length=128, description="密码")


class SignUpRequest(BaseSchema):
    username: str = Field(..., min_length=4, max_length=64, description="用户名")
    nickname: Optional[str] = Field(None, max_length=64, description="昵称")
    password: str = Field(..., min_length=4, max_length=128, description="密码")


class RefreshTokenRequest(BaseSchema):
    refresh_token: str = Field(..., description="刷新令牌")


class TokenPair(BaseSchema):
    access_token: str
    refresh_token: str


class ClientInfo(BaseSchema):
    """登录客户端信息（系统/浏览器/IP）"""
    os: str = ""
    browser: str = "Other"
    ip: Optional[str] = None
