"""
接口层测试：认证、权限校验、统一响应/错误格式
- DI容器覆盖为 sqlite会话工厂 + 内存Redis + 存储替身
"""
import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from backoffice.core.config import settings
from backoffice.di.container import Container
from backoffice.main import create_app

API = settings.API_PREFIX


@pytest.fixture
async def client(session_factory, fake_redis, fake_storage):
    container = Container()
    container.async_session_factory.override(providers.Object(session_factory))
    container.redis_client.override(providers.Object(fake_redis))
    container.storage_service.override(providers.Object(fake_storage))
    app = create_app(container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    container.unwire()


async def _login(client, username, password="123456"):
    resp = await client.post(f"{API}/auth/authentication/sign-in", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['accessToken']}"}


async def test_sign_in_and_self_info(client, make_user):
    await make_user("admin", is_admin=True, nickname="超级管理员")
    headers = await _login(client, "admin")

    resp = await client.get(f"{API}/system/user/info", headers=headers)
    body = resp.json()
    assert resp.status_code == 200
    assert body["code"] == "00000"
    assert body["data"]["username"] == "admin"
    assert body["data"]["isAdmin"] is True
    assert "X-Request-ID" in resp.headers


async def test_refresh_token_rotation(client, make_user):
    await make_user("admin")
    resp = await client.post(f"{API}/auth/authentication/sign-in", json={"username": "admin", "password": "123456"})
    refresh = resp.json()["data"]["refreshToken"]

    first = await client.post(f"{API}/auth/authentication/refresh-token", json={"refreshToken": refresh})
    assert first.status_code == 200
    second = await client.post(f"{API}/auth/authentication/refresh-token", json={"refreshToken": refresh})
    assert second.status_code == 401
    assert second.json()["msg"] == "Refresh token 验证失败"


async def test_missing_token_is_401(client):
    resp = await client.get(f"{API}/system/user/info")
    body = resp.json()
    assert resp.status_code == 401
    assert body["code"] == "20001"
    assert body["path"] == f"{API}/system/user/info"
    assert body["requestId"]


async def test_validation_error_envelope(client):
    resp = await client.post(f"{API}/auth/authentication/sign-in", json={"username": "ad", "password": "1"})
    body = resp.json()
    assert resp.status_code == 422
    assert body["code"] == "10001"
    assert body["details"]["errors"]


async def test_auto_permission_from_route(client, make_user, make_role):
    await make_user("nobody")
    role = await make_role("post_admin", ("system:post:create",))
    await make_user("editor", roles=[role])
    payload = {"code": "ceo", "name": "董事长"}

    denied = await client.post(f"{API}/system/post", json=payload, headers=await _login(client, "nobody"))
    assert denied.status_code == 403
    assert denied.json()["code"] == "20003"
    assert "system:post:create" in denied.json()["msg"]

    allowed = await client.post(f"{API}/system/post", json=payload, headers=await _login(client, "editor"))
    assert allowed.status_code == 200
    assert allowed.json()["data"]["code"] == "ceo"

    duplicate = await client.post(f"{API}/system/post", json=payload, headers=await _login(client, "editor"))
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "30009"


async def test_change_password_requires_explicit_permission(client, make_user):
    user = await make_user("zhangsan")
    headers = await _login(client, "zhangsan")
    resp = await client.patch(
        f"{API}/system/user/changePassword",
        json={"id": str(user.id), "oldPassword": "123456", "password": "abcdef"},
        headers=headers,
    )
    assert resp.status_code == 403


async def test_user_pagination_query(client, make_user):
    await make_user("admin", is_admin=True)
    await make_user("zhangsan")
    headers = await _login(client, "admin")

    resp = await client.get(
        f"{API}/system/user",
        params={"current": 1, "pageSize": 1, "username": "zhang", "createdAt[0]": "", "createdAt[1]": "bad"},
        headers=headers,
    )
    data = resp.json()["data"]
    assert resp.status_code == 200
    assert data["totalCount"] == 1
    assert data["list"][0]["username"] == "zhangsan"


async def test_dict_data_route_is_not_shadowed_by_id(client, make_user):
    await make_user("admin", is_admin=True)
    headers = await _login(client, "admin")
    resp = await client.get(f"{API}/system/dict/data", params={"dictValue": "missing"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


async def test_not_found_envelope(client, make_user):
    await make_user("admin", is_admin=True)
    headers = await _login(client, "admin")
    resp = await client.get(f"{API}/system/role/00000000-0000-0000-0000-000000000000", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["code"] == "30001"


async def test_large_page_size_is_accepted(client, make_user):
    await make_user("admin", is_admin=True)
    headers = await _login(client, "admin")
    resp = await client.get(f"{API}/system/user", params={"current": 1, "pageSize": 1000}, headers=headers)
    data = resp.json()["data"]
    assert resp.status_code == 200
    assert data["pageCount"] == 1
    assert data["totalCount"] == 1


async def test_oversized_avatar_is_rejected(client, make_user, fake_storage):
    await make_user("zhangsan")
    headers = await _login(client, "zhangsan")
    content = b"0" * (settings.AVATAR_MAX_SIZE_BYTE + 1)
    resp = await client.post(
        f"{API}/system/user/uploadAvatar",
        files={"file": ("a.png", content, "image/png")},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["msg"] == "文件大小不能超过2MB"
    assert fake_storage.upload_calls == 0
