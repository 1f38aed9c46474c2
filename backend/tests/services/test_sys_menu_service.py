"""
菜单业务层测试
"""
from uuid import uuid4

import pytest

from backoffice.core.exceptions import ResourceNotFound
from backoffice.models import MENU_TYPE_BUTTON
from backoffice.schemas.sys_menu import MenuCreate, MenuQuery, MenuUpdate
from backoffice.services.sys_menu_service import MenuService, build_button_menus, permission_prefix


@pytest.fixture
def menu_service(menu_repository):
    return MenuService(menu_repository)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/system/user", "system:user"),
        ("/system/user/:id", "system:user"),
        ("system/dict/", "system:dict"),
    ],
)
def test_permission_prefix(path, expected):
    assert permission_prefix(path) == expected


def test_build_button_menus():
    parent_id = uuid4()
    buttons = build_button_menus(parent_id, "/system/post")
    assert [b["permission"] for b in buttons] == [
        "system:post:create",
        "system:post:read",
        "system:post:update",
        "system:post:delete",
    ]
    assert all(b["parent_id"] == parent_id and b["type"] == MENU_TYPE_BUTTON for b in buttons)


async def test_create_generates_buttons(menu_service, make_user):
    admin = await make_user("admin", is_admin=True)
    menu = await menu_service.create(MenuCreate(name="User", type="menu", path="/system/user"))

    menus = await menu_service.find_all(admin)
    buttons = [m for m in menus if m.parent_id == menu.id]
    assert sorted(b.permission for b in buttons) == [
        "system:user:create",
        "system:user:delete",
        "system:user:read",
        "system:user:update",
    ]


async def test_button_or_pathless_menu_has_no_children(menu_service, make_user):
    admin = await make_user("admin", is_admin=True)
    await menu_service.create(MenuCreate(name="Catalog", type="catalog"))
    await menu_service.create(MenuCreate(name="Btn", type="button", path="/system/x"))
    assert len(await menu_service.find_all(admin)) == 2


async def test_non_admin_sees_role_menus_only(menu_service, make_user, make_role, user_repository):
    await menu_service.create(MenuCreate(name="Hidden", type="catalog"))
    role = await make_role("common", ("system:user:read",))
    user = await make_user("zhangsan", roles=[role])
    current = await user_repository.get_with_menus(user.id)

    menus = await menu_service.find_all(current)
    assert [m.permission for m in menus] == ["system:user:read"]

    assert await menu_service.find_all(current, MenuQuery(name="nothing")) == []


async def test_delete_removes_descendants(menu_service, make_user):
    admin = await make_user("admin", is_admin=True)
    root = await menu_service.create(MenuCreate(name="System", type="catalog"))
    await menu_service.create(MenuCreate(name="User", type="menu", path="/system/user", parent_id=root.id))

    assert await menu_service.delete(root.id) == 6
    assert await menu_service.find_all(admin) == []


async def test_delete_missing(menu_service):
    with pytest.raises(ResourceNotFound):
        await menu_service.delete(uuid4())


async def test_update_can_clear_parent(menu_service):
    root = await menu_service.create(MenuCreate(name="Root", type="catalog"))
    child = await menu_service.create(MenuCreate(name="Child", type="catalog", parent_id=root.id))

    updated = await menu_service.update(child.id, MenuUpdate.model_validate({"parentId": None, "order": 5}))
    assert updated.parent_id is None
    assert updated.order == 5
    assert updated.name == "Child"
