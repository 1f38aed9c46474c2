"""
DI容器
项目核心框架文件
backend/backoffice/di/container.py
"""
from typing import AsyncIterator

import redis.asyncio as redis
from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from backoffice.core.config import settings
from backoffice.core.events import create_event_bus
from backoffice.repositories.sys_dept_repository import DeptRepository
from backoffice.repositories.sys_dict_repository import DictDataRepository, DictRepository
from backoffice.repositories.sys_menu_repository import MenuRepository
from backoffice.repositories.sys_post_repository import PostRepository
from backoffice.repositories.sys_role_repository import RoleRepository
from backoffice.repositories.sys_user_repository import UserRepository
from backoffice.services.redis_service import RedisService
from backoffice.services.storage_service import create_storage_service
from backoffice.services.sys_auth_service import AuthService
from backoffice.services.sys_dept_service import DeptService
from backoffice.services.sys_dict_service import DictService
from backoffice.services.sys_menu_service import MenuService
from backoffice.services.sys_post_service import PostService
from backoffice.services.sys_role_service import RoleService
from backoffice.services.sys_user_service import UserService


# Redis连接工厂（应用生命周期内共享连接池，关闭时释放）
async def redis_client_factory() -> AsyncIterator[redis.Redis]:
    """Redis客户端工厂（异步）"""
    redis_client = redis.from_url(
        settings.REDIS_URL,
        encoding=settings.REDIS_ENCODING,
        decode_responses=True,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        socket_keepalive=True,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT,
    )
    try:
        yield redis_client
    finally:
        await redis_client.aclose()


class Container(containers.DeclarativeContainer):
    # 模块扫描：API端点模块 + 认证依赖模块
    wiring_config = containers.WiringConfiguration(
        modules=[
            "backoffice.api.deps",
            "backoffice.api.v1.endpoints.auth",
            "backoffice.api.v1.endpoints.users",
            "backoffice.api.v1.endpoints.roles",
            "backoffice.api.v1.endpoints.menus",
            "backoffice.api.v1.endpoints.depts",
            "backoffice.api.v1.endpoints.dicts",
            "backoffice.api.v1.endpoints.posts",
        ]
    )

    # 1. 底层：数据库引擎（单例，全局唯一）
    async_engine = providers.Singleton(
        create_async_engine,
        settings.SQLALCHEMY_DATABASE_URI,
        echo=False,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )

    # 2. 中层：会话工厂（单例，全局唯一）
    async_session_factory = providers.Singleton(
        sessionmaker,
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    # 3. 基础设施：Redis / 对象存储 / 事件总线
    redis_client = providers.Resource(redis_client_factory)
    redis_service = providers.Factory(RedisService, redis_client=redis_client)
    storage_service = providers.Singleton(create_storage_service)
    event_bus = providers.Singleton(create_event_bus)

    # 4. Repo层：注入会话工厂
    user_repository = providers.Factory(UserRepository, async_session_factory=async_session_factory)
    role_repository = providers.Factory(RoleRepository, async_session_factory=async_session_factory)
    menu_repository = providers.Factory(MenuRepository, async_session_factory=async_session_factory)
    dept_repository = providers.Factory(DeptRepository, async_session_factory=async_session_factory)
    dict_repository = providers.Factory(DictRepository, async_session_factory=async_session_factory)
    dict_data_repository = providers.Factory(DictDataRepository, async_session_factory=async_session_factory)
    post_repository = providers.Factory(PostRepository, async_session_factory=async_session_factory)

    # 5. Service层：注入Repo和基础设施
    auth_service = providers.Factory(
        AuthService,
        user_repository=user_repository,
        redis_service=redis_service,
        event_bus=event_bus,
    )
    user_service = providers.Factory(
        UserService,
        user_repository=user_repository,
        storage_service=storage_service,
        event_bus=event_bus,
    )
    role_service = providers.Factory(RoleService, role_repository=role_repository)
    menu_service = providers.Factory(MenuService, menu_repository=menu_repository)
    dept_service = providers.Factory(DeptService, dept_repository=dept_repository, user_repository=user_repository)
    dict_service = providers.Factory(
        DictService,
        dict_repository=dict_repository,
        dict_data_repository=dict_data_repository,
    )
    post_service = providers.Factory(PostService, post_repository=post_repository)
