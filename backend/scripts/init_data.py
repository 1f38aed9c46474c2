"""
初始化基础数据
backend/scripts/init_data.py
- 建表 + 写入 角色/超级管理员/系统管理菜单/基础字典
- 可重复执行：已存在的数据按唯一字段跳过

用法（在 backend 目录下）：python -m scripts.init_data
"""
import asyncio
import logging
import os
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import select

from backoffice.core.config import settings
from backoffice.core.logger import init_global_logger
from backoffice.core.security import get_password_hash
from backoffice.models import Base, SysDict, SysDictData, SysMenu, SysRole, SysUser
from backoffice.services.sys_menu_service import build_button_menus

logger = logging.getLogger(__name__)

ADMIN_USERNAME = os.getenv("INIT_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("INIT_ADMIN_PASSWORD", "123456")

ROLES = [
    {"name": "超级管理员", "value": "admin", "order": 1, "remark": "拥有全部权限"},
    {"name": "普通角色", "value": "common", "order": 2, "remark": ""},
    {"name": "短视频部门角色", "value": "business", "order": 3, "remark": ""},
]

# 系统管理目录下的菜单，path 决定自动生成的按钮权限前缀
SYSTEM_MENUS = [
    {"name": "User", "title": "用户管理", "path": "/system/user", "icon": "mdi:account"},
    {"name": "Role", "title": "角色管理", "path": "/system/role", "icon": "mdi:account-group"},
    {"name": "Menu", "title": "菜单管理", "path": "/system/menu", "icon": "mdi:menu"},
    {"name": "Dept", "title": "部门管理", "path": "/system/dept", "icon": "mdi:file-tree"},
    {"name": "Post", "title": "岗位管理", "path": "/system/post", "icon": "mdi:badge-account"},
    {"name": "Dict", "title": "字典管理", "path": "/system/dict", "icon": "mdi:book-open"},
    {"name": "DictData", "title": "字典数据", "path": "/system/dictData", "icon": "mdi:book", "hide_in_menu": True},
]

DICTS = [
    {
        "name": "用户性别",
        "value": "sys_user_sex",
        "data": [("男", "1"), ("女", "2"), ("未知", "0")],
    },
    {
        "name": "系统开关",
        "value": "sys_normal_disable",
        "data": [("正常", "1"), ("停用", "0")],
    },
]


def create_session_factory() -> sessionmaker:
    engine = create_async_engine(settings.SQLALCHEMY_DATABASE_URI, echo=False, pool_pre_ping=True)
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_roles(session: AsyncSession) -> Dict[str, SysRole]:
    roles: Dict[str, SysRole] = {}
    for data in ROLES:
        role = (await session.execute(select(SysRole).where(SysRole.value == data["value"]))).scalars().first()
        if role is None:
            role = SysRole(**data)
            session.add(role)
            logger.info(f"新增角色：{data['value']}")
        roles[data["value"]] = role
    await session.flush()
    return roles


async def init_admin(session: AsyncSession, admin_role: SysRole) -> SysUser:
    user = (await session.execute(select(SysUser).where(SysUser.username == ADMIN_USERNAME))).scalars().first()
    if user is not None:
        logger.info(f"超级管理员已存在，跳过：{ADMIN_USERNAME}")
        return user
    user = SysUser(
        username=ADMIN_USERNAME,
        nickname="超级管理员",
        password=get_password_hash(ADMIN_PASSWORD),
        is_admin=True,
        roles=[admin_role],
    )
    session.add(user)
    await session.flush()
    logger.info(f"新增超级管理员：{ADMIN_USERNAME}")
    return user


async def _get_menu(session: AsyncSession, name: str, parent_id: Optional[UUID]) -> Optional[SysMenu]:
    stmt = select(SysMenu).where(SysMenu.name == name, SysMenu.parent_id == parent_id)
    return (await session.execute(stmt)).scalars().first()


async def init_menus(session: AsyncSession) -> List[SysMenu]:
    created: List[SysMenu] = []
    root = await _get_menu(session, "System", None)
    if root is None:
        root = SysMenu(name="System", title="系统管理", type="catalog", path="/system", icon="mdi:cog", order=1)
        session.add(root)
        await session.flush()
        created.append(root)

    for order, data in enumerate(SYSTEM_MENUS, start=1):
        if await _get_menu(session, data["name"], root.id) is not None:
            continue
        menu = SysMenu(type="menu", parent_id=root.id, order=order, **data)
        session.add(menu)
        await session.flush()
        buttons = [SysMenu(**fields) for fields in build_button_menus(menu.id, menu.path)]
        session.add_all(buttons)
        created.extend([menu, *buttons])
    await session.flush()
    logger.info(f"新增菜单：{len(created)} 条")
    return created


async def init_dicts(session: AsyncSession) -> None:
    for item in DICTS:
        exists = (await session.execute(select(SysDict).where(SysDict.value == item["value"]))).scalars().first()
        if exists is not None:
            continue
        sys_dict = SysDict(name=item["name"], value=item["value"])
        session.add(sys_dict)
        await session.flush()
        session.add_all(
            SysDictData(dict_id=sys_dict.id, name=name, value=value, order=index, update_by=ADMIN_USERNAME)
            for index, (name, value) in enumerate(item["data"])
        )
        logger.info(f"新增字典：{item['value']}")


async def main() -> None:
    init_global_logger()
    session_factory = create_session_factory()
    engine = session_factory.kw["bind"]

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        async with session.begin():
            roles = await init_roles(session)
            await init_admin(session, roles["admin"])
            await init_menus(session)
            await init_dicts(session)

    await engine.dispose()
    logger.info("基础数据初始化完成")


if __name__ == "__main__":
    asyncio.run(main())
