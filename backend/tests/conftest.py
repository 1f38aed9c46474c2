"""
测试公共夹具
backend/tests/conftest.py
- 数据库：sqlite内存库（aiosqlite + StaticPool，所有会话共用一个连接）
- Redis / 对象存储：内存替身，不依赖外部服务
"""
import os
import time
from typing import Any, Dict, List, Optional, Tuple

# 导入项目配置前设置测试环境变量
os.environ.setdefault("ENV_FILE_PATH", "/dev/null")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key")
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("APP_LOG_ON", "false")

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.core.events import EventBus, LOGIN_LOG, OPERATION_LOG
from backoffice.core.security import get_password_hash
from backoffice.models import Base, SysMenu, SysRole, SysUser, sys_user_role
from backoffice.repositories.sys_dept_repository import DeptRepository
from backoffice.repositories.sys_dict_repository import DictDataRepository, DictRepository
from backoffice.repositories.sys_menu_repository import MenuRepository
from backoffice.repositories.sys_post_repository import PostRepository
from backoffice.repositories.sys_role_repository import RoleRepository
from backoffice.repositories.sys_user_repository import UserRepository
from backoffice.services.redis_service import RedisService


class FakeRedis:
    """redis.asyncio.Redis 的内存替身（仅实现用到的命令）"""

    def __init__(self):
        self.store: Dict[str, Tuple[str, Optional[float]]] = {}

    def _alive(self, key: str) -> bool:
        item = self.store.get(key)
        if item is None:
            return False
        _, expire_at = item
        if expire_at is not None and expire_at <= time.monotonic():
            del self.store[key]
            return False
        return True

    async def set(self, key, value):
        self.store[key] = (value, None)
        return True

    async def setex(self, key, seconds, value):
        self.store[key] = (value, time.monotonic() + seconds)
        return True

    async def get(self, key):
        return self.store[key][0] if self._alive(key) else None

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self._alive(key):
                del self.store[key]
                removed += 1
        return removed

    async def exists(self, key):
        return int(self._alive(key))

    async def ttl(self, key):
        if not self._alive(key):
            return -2
        expire_at = self.store[key][1]
        return -1 if expire_at is None else int(expire_at - time.monotonic())

    async def ping(self):
        return True


class FakeStorage:
    """对象存储替身：前 fail_times 次上传抛错，用于验证重试"""

    def __init__(self, fail_times: int = 0):
        self.fail_times = fail_times
        self.upload_calls = 0
        self.objects: Dict[str, bytes] = {}

    async def upload_file(self, bucket: str, object_name: str, data: bytes, content_type: Optional[str] = None):
        self.upload_calls += 1
        if self.upload_calls <= self.fail_times:
            raise ConnectionError("storage unavailable")
        self.objects[f"{bucket}/{object_name}"] = data

    async def get_url(self, bucket: str, object_name: str, expires: Optional[int] = None) -> str:
        return f"http://minio.test/{bucket}/{object_name}?signature=test"


class RecordingEventBus(EventBus):
    """记录所有发布的事件"""

    def __init__(self):
        super().__init__()
        self.events: List[Tuple[str, Dict[str, Any]]] = []
        self.on(LOGIN_LOG, lambda payload: self.events.append((LOGIN_LOG, payload)))
        self.on(OPERATION_LOG, lambda payload: self.events.append((OPERATION_LOG, payload)))


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def redis_service(fake_redis):
    return RedisService(fake_redis)


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def flaky_storage():
    return FakeStorage(fail_times=2)


@pytest.fixture
def event_bus():
    return RecordingEventBus()


@pytest.fixture
def user_repository(session_factory):
    return UserRepository(session_factory)


@pytest.fixture
def role_repository(session_factory):
    return RoleRepository(session_factory)


@pytest.fixture
def menu_repository(session_factory):
    return MenuRepository(session_factory)


@pytest.fixture
def dept_repository(session_factory):
    return DeptRepository(session_factory)


@pytest.fixture
def dict_repository(session_factory):
    return DictRepository(session_factory)


@pytest.fixture
def dict_data_repository(session_factory):
    return DictDataRepository(session_factory)


@pytest.fixture
def post_repository(session_factory):
    return PostRepository(session_factory)


@pytest.fixture
def make_user(session_factory):
    """直接落库创建用户，可同时挂载角色"""

    async def _make_user(username: str, password: str = "123456", roles: Optional[List[SysRole]] = None, **fields):
        async with session_factory() as session:
            async with session.begin():
                user = SysUser(username=username, password=get_password_hash(password), **fields)
                session.add(user)
                await session.flush()
                if roles:
                    await session.execute(
                        insert(sys_user_role).values([{"user_id": user.id, "role_id": role.id} for role in roles])
                    )
        return user

    return _make_user


@pytest.fixture
def make_role(session_factory):
    """直接落库创建角色，可同时关联按钮权限（按权限码生成按钮菜单）"""

    async def _make_role(value: str, permissions: Tuple[str, ...] = ()):
        async with session_factory() as session:
            async with session.begin():
                menus = [SysMenu(name=code, title=code, type="button", permission=code) for code in permissions]
                role = SysRole(name=value, value=value, menus=menus)
                session.add(role)
                await session.flush()
        return role

    return _make_role
