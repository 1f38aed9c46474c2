"""
Redis服务层（异步版本）
backend/backoffice/services/redis_service.py
- 统一处理JSON序列化、错误处理、键前缀管理
- Redis异常只记录日志并返回空结果，由业务层按"缓存未命中"处理
"""
import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from backoffice.core.config import settings

logger = logging.getLogger(__name__)


class RedisService:
    """
    Redis服务层（异步）：封装所有Redis操作
    """

    def __init__(self, redis_client: redis.Redis):
        """
        Args:
            redis_client: Redis客户端实例（异步，decode_responses=True）
        """
        self.redis = redis_client
        self.key_prefix = settings.REDIS_KEY_PREFIX

    def _make_key(self, key: str) -> str:
        """添加统一前缀的键名"""
        return f"{self.key_prefix}{key}"

    @staticmethod
    def _serialize(value: Any) -> str:
        return json.dumps(value, default=str, ensure_ascii=False)

    @staticmethod
    def _deserialize(value: Optional[str]) -> Any:
        if value is None:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    # ==================== 基础操作 ====================

    async def set(self, key: str, value: Any, expire_seconds: Optional[int] = None) -> bool:
        """设置键值（支持过期时间）"""
        try:
            full_key = self._make_key(key)
            if expire_seconds:
                return bool(await self.redis.setex(full_key, expire_seconds, self._serialize(value)))
            return bool(await self.redis.set(full_key, self._serialize(value)))
        except RedisError as e:
            logger.error(f"Redis set error for key {key}: {e}")
            return False

    async def get(self, key: str) -> Any:
        """获取键值"""
        try:
            return self._deserialize(await self.redis.get(self._make_key(key)))
        except RedisError as e:
            logger.error(f"Redis get error for key {key}: {e}")
            return None

    async def delete(self, *keys: str) -> int:
        """删除一个或多个键"""
        try:
            return await self.redis.delete(*[self._make_key(key) for key in keys])
        except RedisError as e:
            logger.error(f"Redis delete error for keys {keys}: {e}")
            return 0

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self.redis.exists(self._make_key(key)))
        except RedisError as e:
            logger.error(f"Redis exists error for key {key}: {e}")
            return False

    async def ttl(self, key: str) -> int:
        """获取键剩余生存时间，-2 表示键不存在"""
        try:
            return await self.redis.ttl(self._make_key(key))
        except RedisError as e:
            logger.error(f"Redis ttl error for key {key}: {e}")
            return -2

    # ==================== 业务相关方法 ====================

    @staticmethod
    def user_token_key(user_id: Any) -> str:
        return f"user-{user_id}"

    async def cache_user_token(self, user_id: Any, payload: Dict[str, Any], expire_seconds: int) -> bool:
        """缓存用户刷新令牌信息 {tokenId, id, user}，与刷新令牌同时过期"""
        return await self.set(self.user_token_key(user_id), payload, expire_seconds)

    async def get_user_token(self, user_id: Any) -> Optional[Dict[str, Any]]:
        data = await self.get(self.user_token_key(user_id))
        return data if isinstance(data, dict) else None

    async def delete_user_token(self, user_id: Any) -> bool:
        return bool(await self.delete(self.user_token_key(user_id)))

    # ==================== 健康检查 ====================

    async def ping(self) -> bool:
        """检查Redis连接是否正常"""
        try:
            return bool(await self.redis.ping())
        except RedisError:
            return False
