"""
认证业务层
backend/backoffice/services/sys_auth_service.py
- 登录 / 注册 / 刷新令牌
- 刷新令牌单次有效：缓存 user-{id} → {tokenId, id, user}，刷新时校验并删除
"""
import logging
from typing import Optional
from uuid import UUID

from jose import JWTError

from backoffice.core.config import settings
from backoffice.core.events import EventBus, LOGIN_LOG
from backoffice.core.exceptions import Conflict, Unauthorized
from backoffice.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from backoffice.models import SysUser
from backoffice.repositories.sys_user_repository import UserRepository
from backoffice.schemas.sys_auth import ClientInfo, SignInRequest, SignUpRequest, TokenPair
from backoffice.schemas.sys_user import UserOut
from backoffice.services.redis_service import RedisService

logger = logging.getLogger(__name__)

REFRESH_FAILED_MSG = "Refresh token 验证失败"


class AuthService:
    """认证Service层：处理用户登录、Token签发与校验"""

    def __init__(self, user_repository: UserRepository, redis_service: RedisService, event_bus: EventBus):
        self.user_repository = user_repository
        self.redis_service = redis_service
        self.event_bus = event_bus

    # ------------------------------
    # 登录
    # ------------------------------
    async def sign_in(self, sign_in: SignInRequest, client: Optional[ClientInfo] = None) -> TokenPair:
        client = client or ClientInfo()
        user = await self.user_repository.get_by_username(sign_in.username)
        if not user:
            self._emit_login_event("", client, "用户名不存在")
            raise Unauthorized("用户名不存在")

        if not verify_password(sign_in.password, user.password):
            self._emit_login_event(user.username, client, "密码错误")
            raise Unauthorized("密码错误")

        if not user.status:
            self._emit_login_event(user.username, client, "账号已被禁用")
            raise Unauthorized("账号已被禁用")

        self._emit_login_event(user.username, client)
        return await self.generate_tokens(user)

    # ------------------------------
    # 注册
    # ------------------------------
    async def sign_up(self, sign_up: SignUpRequest) -> SysUser:
        async with self.user_repository.transaction() as session:
            if await self.user_repository.get_by_username(sign_up.username, session):
                raise Conflict("用户名已存在")
            user = await self.user_repository.add(
                {
                    "username": sign_up.username,
                    "nickname": sign_up.nickname or "",
                    "password": get_password_hash(sign_up.password),
                },
                session,
            )
        logger.info(f"新用户注册成功 | 用户名：{user.username}")
        return await self.user_repository.get_detail(user.id)

    # ------------------------------
    # Token签发
    # ------------------------------
    async def generate_tokens(self, user: SysUser) -> TokenPair:
        access_token = create_access_token(user.id, user.username, user.nickname)
        refresh_token, refresh_token_id = create_refresh_token(user.id)
        await self.redis_service.cache_user_token(
            user.id,
            {
                "tokenId": refresh_token_id,
                "id": str(user.id),
                "user": UserOut.model_validate(user).model_dump(mode="json", by_alias=True),
            },
            settings.AUTH_JWT_REFRESH_TOKEN_TTL,
        )
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """校验刷新令牌并轮换（旧令牌作废）"""
        try:
            payload = verify_token(refresh_token, REFRESH_TOKEN_TYPE)
            user = await self.user_repository.get_detail(UUID(payload["sub"]))
            if not user:
                raise Unauthorized("用户不存在")

            cached = await self.redis_service.get_user_token(user.id)
            if not cached:
                raise Unauthorized("Access token 已过期")
            if cached.get("tokenId") != payload.get("refreshTokenId"):
                raise Unauthorized("Refresh token 已过期")

            await self.redis_service.delete_user_token(user.id)
            return await self.generate_tokens(user)
        except Exception as e:
            logger.error(f"{REFRESH_FAILED_MSG}：{e}")
            raise Unauthorized(REFRESH_FAILED_MSG) from e

    # ------------------------------
    # Token解析获取当前用户（预加载 角色→菜单，供权限校验使用）
    # ------------------------------
    async def get_current_user(self, token: Optional[str]) -> SysUser:
        if not token:
            raise Unauthorized("未登录或登录已过期")
        try:
            payload = verify_token(token, ACCESS_TOKEN_TYPE)
            user_id = UUID(payload["sub"])
        except (JWTError, ValueError) as e:
            raise Unauthorized(f"Could not validate credentials: {e}") from e

        user = await self.user_repository.get_with_menus(user_id)
        if not user:
            raise Unauthorized("用户不存在")
        return user

    def _emit_login_event(self, username: str, client: ClientInfo, message: Optional[str] = None) -> None:
        payload = {
            "username": username,
            "ip": client.ip or "",
            "os": client.os,
            "browser": client.browser,
            "status": not message,
        }
        if message:
            payload["message"] = message
        self.event_bus.emit(LOGIN_LOG, payload)
