"""
用户业务层测试
"""
from datetime import date, datetime
from uuid import uuid4

import pytest

from backoffice.core.config import DEFAULT_TZ, settings
from backoffice.core.events import OPERATION_LOG
from backoffice.core.exceptions import BadRequest, Conflict, ResourceNotFound, Unauthorized
from backoffice.core.security import verify_password
from backoffice.schemas.sys_user import ChangePasswordRequest, UserCreate, UserQuery, UserUpdate
from backoffice.services.sys_user_service import UserService


@pytest.fixture
def user_service(user_repository, fake_storage, event_bus):
    return UserService(user_repository, fake_storage, event_bus)


class TestCreate:
    async def test_create_with_roles(self, user_service, make_role):
        role = await make_role("common")
        user = await user_service.create(
            UserCreate(username="zhangsan", password="123456", nickname="张三", role_ids=[role.id])
        )
        assert user.username == "zhangsan"
        assert [r.id for r in user.roles] == [role.id]
        assert user.email == ""

    async def test_duplicate_username(self, user_service, make_user):
        await make_user("zhangsan")
        with pytest.raises(Conflict, match="账号已存在"):
            await user_service.create(UserCreate(username="zhangsan", password="123456"))


class TestDelete:
    async def test_admin_cannot_be_deleted(self, user_service, make_user):
        admin = await make_user("admin", is_admin=True)
        with pytest.raises(Conflict, match="管理员账号不允许删除"):
            await user_service.delete(admin.id, admin)

    async def test_delete_emits_operation_log(self, user_service, make_user, make_role, event_bus):
        operator = await make_user("admin", is_admin=True)
        role = await make_role("common")
        user = await make_user("zhangsan", roles=[role])

        await user_service.delete(user.id, operator, "10.0.0.2")

        with pytest.raises(ResourceNotFound):
            await user_service.find_one(user.id)
        event, payload = event_bus.events[-1]
        assert event == OPERATION_LOG
        assert payload["username"] == "admin"
        assert payload["business_type"] == 2
        assert "zhangsan" in payload["title"]

    async def test_missing_user(self, user_service, make_user):
        operator = await make_user("admin", is_admin=True)
        with pytest.raises(ResourceNotFound):
            await user_service.delete(uuid4(), operator)


class TestQuery:
    async def test_pagination_and_filters(self, user_service, make_user):
        for index in range(5):
            await make_user(f"user{index}", phone_number=f"1380000000{index}")
        await make_user("other")

        page = await user_service.find_with_pagination(UserQuery(current=2, page_size=2, username="USER"))
        assert page.total_count == 5
        assert page.page_count == 3
        assert len(page.list) == 2
        assert page.previous_page == 1
        assert page.next_page == 3

        matched = await user_service.find_all(UserQuery(phone_number="13800000003"))
        assert [u.username for u in matched] == ["user3"]

    async def test_created_at_range_includes_end_day(self, user_service, make_user):
        await make_user("before", created_at=datetime(2024, 4, 30, 23, 59, tzinfo=DEFAULT_TZ))
        await make_user("start", created_at=datetime(2024, 5, 1, 0, 0, tzinfo=DEFAULT_TZ))
        await make_user("on_end", created_at=datetime(2024, 5, 10, 23, 59, 59, tzinfo=DEFAULT_TZ))
        await make_user("next_day", created_at=datetime(2024, 5, 11, 0, 0, tzinfo=DEFAULT_TZ))

        query = UserQuery(created_at_start=date(2024, 5, 1), created_at_end=date(2024, 5, 10))
        matched = await user_service.find_all(query)
        assert sorted(u.username for u in matched) == ["on_end", "start"]

        page = await user_service.find_with_pagination(query)
        assert page.total_count == 2

    async def test_like_wildcards_are_escaped(self, user_service, make_user):
        await make_user("a_b")
        await make_user("axb")
        matched = await user_service.find_all(UserQuery(username="a_b"))
        assert [u.username for u in matched] == ["a_b"]

    async def test_self_codes(self, user_service, make_user, make_role):
        role_a = await make_role("a", ("system:user:create", "system:user:update"))
        role_b = await make_role("b", ("system:user:create",))
        user = await make_user("zhangsan", roles=[role_a, role_b])

        codes = await user_service.find_self_code(user.id)
        assert set(codes) == {"system:user:create", "system:user:update"}
        assert len(codes) == len(set(codes))

        info = await user_service.find_self(user.id)
        assert {r.value for r in info.roles} == {"a", "b"}


class TestUpdate:
    async def test_partial_update_and_roles(self, user_service, make_user, make_role):
        role = await make_role("common")
        user = await make_user("zhangsan", nickname="张三")

        updated = await user_service.update(user.id, UserUpdate(remark="备注", role_ids=[role.id]))
        assert updated.nickname == "张三"
        assert updated.remark == "备注"
        assert [r.name for r in updated.roles] == ["common"]

        cleared = await user_service.update(user.id, UserUpdate(role_ids=[]))
        assert cleared.roles == []

    async def test_username_conflict(self, user_service, make_user):
        await make_user("lisi")
        user = await make_user("zhangsan")
        with pytest.raises(Conflict):
            await user_service.update(user.id, UserUpdate(username="lisi"))


class TestChangePassword:
    async def test_requires_old_password(self, user_service, make_user, user_repository):
        user = await make_user("zhangsan", "123456")
        with pytest.raises(Unauthorized, match="原密码错误"):
            await user_service.change_password(ChangePasswordRequest(id=user.id, old_password="bad!", password="abcdef"))

        await user_service.change_password(ChangePasswordRequest(id=user.id, old_password="123456", password="abcdef"))
        stored = await user_repository.get_by_id(user.id)
        assert verify_password("abcdef", stored.password)

    async def test_admin_skips_old_password(self, user_service, make_user, user_repository):
        admin = await make_user("admin", "123456", is_admin=True)
        await user_service.change_password(ChangePasswordRequest(id=admin.id, password="newpass"))
        stored = await user_repository.get_by_id(admin.id)
        assert verify_password("newpass", stored.password)


class TestUploadAvatar:
    async def test_upload_retries_and_saves_url(self, user_repository, event_bus, flaky_storage, make_user, monkeypatch):
        async def no_sleep(delay):
            return None

        monkeypatch.setattr("backoffice.utils.retry.asyncio.sleep", no_sleep)
        service = UserService(user_repository, flaky_storage, event_bus)
        user = await make_user("zhangsan")

        updated = await service.upload_avatar(user.id, "a.png", "image/png", b"\x89PNG")

        assert flaky_storage.upload_calls == 3
        assert updated.avatar.startswith(f"http://minio.test/{settings.AVATAR_BUCKET}/a.png")

    async def test_rejects_large_file(self, user_service, make_user):
        user = await make_user("zhangsan")
        with pytest.raises(BadRequest):
            await user_service.upload_avatar(user.id, "a.png", "image/png", b"0" * (settings.AVATAR_MAX_SIZE_BYTE + 1))

    async def test_rejects_content_type(self, user_service, make_user):
        user = await make_user("zhangsan")
        with pytest.raises(BadRequest, match="png/jpg/jpeg"):
            await user_service.upload_avatar(user.id, "a.gif", "image/gif", b"GIF")

    def test_size_checked_before_reading(self):
        UserService.check_avatar_size(None)
        UserService.check_avatar_size(settings.AVATAR_MAX_SIZE_BYTE)
        with pytest.raises(BadRequest, match="文件大小不能超过2MB"):
            UserService.check_avatar_size(settings.AVATAR_MAX_SIZE_BYTE + 1)
