"""
认证相关核心文件
backend/backoffice/core/security.py
- 密码加密/校验（bcrypt，截断到72字节）
- 访问令牌/刷新令牌生成与解析
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.security import HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from backoffice.core.config import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# ------------------------------
# 密码加密上下文
# ------------------------------
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.AUTH_BCRYPT_ROUNDS
)

# ------------------------------
# Bearer认证（Swagger中展示为HTTP Bearer）
# ------------------------------
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="BearerAuth")


# ------------------------------
# 密码加密（截断到72字节）
# ------------------------------
def get_password_hash(password: str) -> str:
    """
    加密密码：
    1. 将字符串密码编码为UTF-8字节（处理中文/特殊字符）
    2. 截断到72字节（符合bcrypt限制）
    3. 哈希处理
    """
    password_bytes = password.encode("utf-8")[:72]
    return pwd_context.hash(password_bytes)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """明文密码按加密逻辑同样编码+截断后与哈希值比对"""
    plain_password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return pwd_context.verify(plain_password_bytes, hashed_password)
    except ValueError:
        # 库中存储的不是合法的bcrypt哈希
        return False


# ------------------------------
# Token生成/解析
# ------------------------------
def _encode(subject: Any, ttl_seconds: int, token_type: str, claims: Optional[Dict[str, Any]] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
    to_encode: Dict[str, Any] = dict(claims or {})
    to_encode.update({"sub": str(subject), "exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def create_access_token(subject: Any, username: str, nickname: Optional[str] = None) -> str:
    """
    创建访问令牌（Access Token）
    payload: sub / username / nickname，有效期 AUTH_JWT_ACCESS_TOKEN_TTL
    """
    return _encode(
        subject,
        settings.AUTH_JWT_ACCESS_TOKEN_TTL,
        ACCESS_TOKEN_TYPE,
        {"username": username, "nickname": nickname or ""},
    )


def create_refresh_token(subject: Any, refresh_token_id: Optional[str] = None) -> tuple[str, str]:
    """
    创建刷新令牌（Refresh Token）

    Returns:
        (token, refresh_token_id)：refresh_token_id 需缓存，用于校验令牌是否已被轮换
    """
    refresh_token_id = refresh_token_id or str(uuid.uuid4())
    token = _encode(
        subject,
        settings.AUTH_JWT_REFRESH_TOKEN_TTL,
        REFRESH_TOKEN_TYPE,
        {"refreshTokenId": refresh_token_id},
    )
    return token, refresh_token_id


def decode_jwt_token(token: str) -> dict[str, Any]:
    """
    解码JWT令牌

    Raises:
        JWTError: 如果token无效或已过期
    """
    return jwt.decode(token, settings.AUTH_JWT_SECRET, algorithms=[settings.AUTH_JWT_ALGORITHM])


def verify_token(token: str, expected_type: str) -> Dict[str, Any]:
    """
    验证JWT令牌及其类型并返回payload

    Raises:
        JWTError: token无效、已过期或类型不符
    """
    payload = decode_jwt_token(token)
    if payload.get("type") != expected_type:
        raise JWTError(f"Token类型错误，期望 {expected_type}")
    if not payload.get("sub"):
        raise JWTError("Token缺少sub")
    return payload
