"""
部门业务层测试
"""
from uuid import uuid4

import pytest

from backoffice.core.exceptions import BadRequest, ResourceNotFound
from backoffice.schemas.sys_dept import DeptCreate, DeptQuery, DeptUpdate
from backoffice.services.sys_dept_service import DeptService


@pytest.fixture
def dept_service(dept_repository, user_repository):
    return DeptService(dept_repository, user_repository)


async def test_create_marks_leader(dept_service, make_user, user_repository):
    leader = await make_user("leader")
    dept = await dept_service.create(DeptCreate(name="研发部", leader_id=leader.id))

    assert dept.leader == "leader"
    assert dept.email == ""
    stored = await user_repository.get_by_id(leader.id)
    assert stored.is_dept_admin
    assert stored.dept_id == dept.id


async def test_create_with_unknown_leader(dept_service):
    with pytest.raises(ResourceNotFound):
        await dept_service.create(DeptCreate(name="研发部", leader_id=uuid4()))


async def test_find_all_returns_tree(dept_service, make_user):
    leader = await make_user("leader")
    root = await dept_service.create(DeptCreate(name="总部", leader_id=leader.id))
    await dept_service.create(DeptCreate(name="二组", leader_id=leader.id, parent_id=root.id, order=2))
    await dept_service.create(DeptCreate(name="一组", leader_id=leader.id, parent_id=root.id, order=1))

    tree = await dept_service.find_all()
    assert [node.name for node in tree] == ["总部"]
    assert [child.name for child in tree[0].children] == ["一组", "二组"]

    flat = await dept_service.find_all(DeptQuery(name="一组"))
    assert flat == []


async def test_update_rejects_self_parent(dept_service, make_user):
    leader = await make_user("leader")
    dept = await dept_service.create(DeptCreate(name="研发部", leader_id=leader.id))
    with pytest.raises(BadRequest):
        await dept_service.update(dept.id, DeptUpdate(parent_id=dept.id))


async def test_update_leader_name_follows_id(dept_service, make_user):
    first = await make_user("first")
    second = await make_user("second")
    dept = await dept_service.create(DeptCreate(name="研发部", leader_id=first.id))

    updated = await dept_service.update(dept.id, DeptUpdate(leader_id=second.id))
    assert updated.leader == "second"
    assert updated.leader_id == second.id


async def test_delete_promotes_children(dept_service, make_user, user_repository):
    leader = await make_user("leader")
    root = await dept_service.create(DeptCreate(name="总部", leader_id=leader.id))
    child = await dept_service.create(DeptCreate(name="研发部", leader_id=leader.id, parent_id=root.id))

    await dept_service.delete(root.id)

    assert (await dept_service.find_one(child.id)).parent_id is None
    with pytest.raises(ResourceNotFound):
        await dept_service.delete(root.id)
