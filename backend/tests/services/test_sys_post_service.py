"""
岗位业务层测试
"""
from uuid import uuid4

import pytest

from backoffice.core.exceptions import Conflict, ResourceNotFound
from backoffice.schemas.sys_post import PostCreate, PostQuery, PostUpdate
from backoffice.services.sys_post_service import PostService


@pytest.fixture
def post_service(post_repository):
    return PostService(post_repository)


async def test_create_and_unique_code(post_service):
    post = await post_service.create(PostCreate(code="ceo", name="董事长"))
    assert post.code == "ceo"
    with pytest.raises(Conflict):
        await post_service.create(PostCreate(code="ceo", name="另一个"))


async def test_update(post_service):
    await post_service.create(PostCreate(code="se", name="工程师"))
    post = await post_service.create(PostCreate(code="pm", name="产品"))

    updated = await post_service.update(post.id, PostUpdate(name="产品经理"))
    assert updated.name == "产品经理"
    assert updated.code == "pm"
    with pytest.raises(Conflict):
        await post_service.update(post.id, PostUpdate(code="se"))


async def test_pagination(post_service):
    for index in range(3):
        await post_service.create(PostCreate(code=f"p{index}", name=f"岗位{index}", order=index))
    page = await post_service.find_with_pagination(PostQuery(current=1, page_size=2))
    assert page.total_count == 3
    assert [p.code for p in page.list] == ["p0", "p1"]
    assert page.next_page == 2


async def test_delete(post_service):
    post = await post_service.create(PostCreate(code="ceo", name="董事长"))
    await post_service.delete(post.id)
    with pytest.raises(ResourceNotFound):
        await post_service.find_one(post.id)
    with pytest.raises(ResourceNotFound):
        await post_service.delete(uuid4())
