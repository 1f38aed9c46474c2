"""
角色业务层测试
"""
from uuid import uuid4

import pytest

from backoffice.core.exceptions import Conflict, ResourceNotFound
from backoffice.schemas.sys_menu import MenuCreate
from backoffice.schemas.sys_role import RoleCreate, RoleQuery, RoleUpdate
from backoffice.services.sys_menu_service import MenuService
from backoffice.services.sys_role_service import RoleService


@pytest.fixture
def role_service(role_repository):
    return RoleService(role_repository)


@pytest.fixture
def menu_service(menu_repository):
    return MenuService(menu_repository)


async def test_create_with_menus(role_service, menu_service):
    menu = await menu_service.create(MenuCreate(name="Dashboard", type="menu"))
    role = await role_service.create(RoleCreate(name="普通用户", value="common", menu_ids=[menu.id, menu.id]))
    assert role.value == "common"
    assert role.menu_ids == [menu.id]


async def test_duplicate_value(role_service):
    await role_service.create(RoleCreate(name="A", value="common"))
    with pytest.raises(Conflict):
        await role_service.create(RoleCreate(name="B", value="common"))


async def test_update_replaces_menus(role_service, menu_service):
    first = await menu_service.create(MenuCreate(name="First", type="menu"))
    second = await menu_service.create(MenuCreate(name="Second", type="menu"))
    role = await role_service.create(RoleCreate(name="A", value="a", menu_ids=[first.id]))

    updated = await role_service.update(role.id, RoleUpdate(remark="改", menu_ids=[second.id]))
    assert updated.menu_ids == [second.id]
    assert updated.remark == "改"
    assert updated.name == "A"


async def test_update_value_conflict(role_service):
    await role_service.create(RoleCreate(name="A", value="a"))
    role = await role_service.create(RoleCreate(name="B", value="b"))
    with pytest.raises(Conflict):
        await role_service.update(role.id, RoleUpdate(value="a"))


async def test_delete_detaches_users(role_service, make_role, make_user, user_repository):
    role = await make_role("common", ("system:user:create",))
    user = await make_user("zhangsan", roles=[role])

    await role_service.delete(role.id)

    with pytest.raises(ResourceNotFound):
        await role_service.find_one(role.id)
    assert (await user_repository.get_detail(user.id)).roles == []


async def test_delete_missing(role_service):
    with pytest.raises(ResourceNotFound):
        await role_service.delete(uuid4())


async def test_pagination_ordered_by_order(role_service):
    await role_service.create(RoleCreate(name="后", value="late", order=2))
    await role_service.create(RoleCreate(name="先", value="early", order=1))
    page = await role_service.find_with_pagination(RoleQuery(current=1, page_size=10))
    assert [r.value for r in page.list] == ["early", "late"]
    assert page.is_first_page and page.is_last_page

    filtered = await role_service.find_with_pagination(RoleQuery(value="EAR"))
    assert filtered.total_count == 1
