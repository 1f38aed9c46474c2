"""
用户模块业务层
backend/backoffice/services/sys_user_service.py
"""
import logging
from typing import List, Optional
from uuid import UUID

from backoffice.core.config import settings
from backoffice.core.events import EventBus, OPERATION_LOG
from backoffice.core.exceptions import BadRequest, Conflict, ResourceNotFound, Unauthorized
from backoffice.core.security import get_password_hash, verify_password
from backoffice.models import SysUser
from backoffice.repositories.sys_user_repository import UserRepository
from backoffice.schemas.responses import PageResult
from backoffice.schemas.sys_user import (
    ChangePasswordRequest,
    UserCreate,
    UserOut,
    UserQuery,
    UserSelfOut,
    UserUpdate,
)
from backoffice.services.storage_service import StorageService
from backoffice.utils.field_mapper import to_create_fields, to_update_fields
from backoffice.utils.retry import with_retry

logger = logging.getLogger(__name__)

AVATAR_CONTENT_TYPES = ("image/png", "image/jpg", "image/jpeg")


class UserService:
    """用户Service层：业务校验 + 调用Repo，事务由Repo上下文管理"""

    def __init__(self, user_repository: UserRepository, storage_service: StorageService, event_bus: EventBus):
        self.user_repository = user_repository
        self.storage_service = storage_service
        self.event_bus = event_bus

    async def _get_or_404(self, user_id: UUID, session=None) -> SysUser:
        user = await self.user_repository.get_by_id(user_id, session)
        if not user:
            raise ResourceNotFound(f"用户不存在：{user_id}")
        return user

    async def _detail(self, user_id: UUID) -> UserOut:
        user = await self.user_repository.get_detail(user_id)
        if not user:
            raise ResourceNotFound(f"用户不存在：{user_id}")
        return UserOut.model_validate(user)

    # ------------------------------
    # 创建
    # ------------------------------
    async def create(self, user_in: UserCreate) -> UserOut:
        async with self.user_repository.transaction() as session:
            if await self.user_repository.get_by_username(user_in.username, session):
                raise Conflict("账号已存在")
            data = to_create_fields(user_in, exclude={"role_ids", "password"})
            data["password"] = get_password_hash(user_in.password)
            user = await self.user_repository.add(data, session)
            if user_in.role_ids:
                await self.user_repository.set_roles(user.id, user_in.role_ids, session)
        logger.info(f"创建用户成功 | 用户名：{user.username}")
        return await self._detail(user.id)

    # ------------------------------
    # 删除（管理员账号不允许删除）
    # ------------------------------
    async def delete(self, user_id: UUID, operator: SysUser, ip: Optional[str] = None) -> None:
        async with self.user_repository.transaction() as session:
            user = await self._get_or_404(user_id, session)
            if user.is_admin:
                raise Conflict("管理员账号不允许删除")
            username = user.username
            await self.user_repository.remove(user, session)

        self.event_bus.emit(OPERATION_LOG, {
            "title": f"删除ID为{user_id}, 账号为{username}的用户",
            "business_type": 2,
            "module": "用户管理",
            "username": operator.username,
            "ip": ip or "",
        })

    # ------------------------------
    # 查询
    # ------------------------------
    @staticmethod
    def _filters(query: UserQuery) -> dict:
        return {
            "username": query.username,
            "nickname": query.nickname,
            "email": query.email,
            "phone_number": query.phone_number,
        }

    async def find_all(self, query: UserQuery) -> List[UserOut]:
        users = await self.user_repository.find_all(self._filters(query), query.created_at_range())
        return [UserOut.model_validate(user) for user in users]

    async def find_with_pagination(self, query: UserQuery) -> PageResult[UserOut]:
        users, total = await self.user_repository.find_page(
            self._filters(query), query.created_at_range(), query.offset, query.page_size
        )
        return PageResult[UserOut].build(
            [UserOut.model_validate(user) for user in users], total, query.current, query.page_size
        )

    async def find_one(self, user_id: UUID) -> UserOut:
        return await self._detail(user_id)

    async def find_self(self, user_id: UUID) -> UserSelfOut:
        user = await self.user_repository.get_with_menus(user_id)
        if not user:
            raise ResourceNotFound(f"用户不存在：{user_id}")
        return UserSelfOut.model_validate(user)

    async def find_self_code(self, user_id: UUID) -> List[str]:
        """当前用户所有角色菜单的权限标识（去重，保持顺序）"""
        user = await self.user_repository.get_with_menus(user_id)
        if not user:
            raise ResourceNotFound(f"用户不存在：{user_id}")
        codes = [menu.permission for role in user.roles for menu in role.menus if menu.permission]
        return list(dict.fromkeys(codes))

    # ------------------------------
    # 更新
    # ------------------------------
    async def update(self, user_id: UUID, user_in: UserUpdate) -> UserOut:
        async with self.user_repository.transaction() as session:
            user = await self._get_or_404(user_id, session)
            data = to_update_fields(user_in, exclude={"role_ids"}, nullable={"dept_id", "post_id"})
            if "username" in data and data["username"] != user.username:
                if await self.user_repository.get_by_username(data["username"], session):
                    raise Conflict("账号已存在")
            if "password" in data:
                data["password"] = get_password_hash(data["password"])
            await self.user_repository.update(user, data, session)
            if user_in.role_ids is not None:
                await self.user_repository.set_roles(user.id, user_in.role_ids, session)
        return await self._detail(user_id)

    async def change_password(self, payload: ChangePasswordRequest) -> UserOut:
        """修改密码：超级管理员无需校验原密码"""
        async with self.user_repository.transaction() as session:
            user = await self._get_or_404(payload.id, session)
            if not user.is_admin and not verify_password(payload.old_password or "", user.password):
                raise Unauthorized("原密码错误")
            await self.user_repository.update(user, {"password": get_password_hash(payload.password)}, session)
        logger.info(f"用户修改密码成功 | 用户名：{user.username}")
        return await self._detail(payload.id)

    # ------------------------------
    # 头像上传
    # ------------------------------
    @staticmethod
    def check_avatar_size(size: Optional[int]) -> None:
        if size is not None and size > settings.AVATAR_MAX_SIZE_BYTE:
            raise BadRequest(f"文件大小不能超过{settings.AVATAR_MAX_SIZE_BYTE // (1024 * 1024)}MB")

    async def upload_avatar(self, user_id: UUID, filename: str, content_type: Optional[str], data: bytes) -> UserOut:
        self.check_avatar_size(len(data))
        if content_type not in AVATAR_CONTENT_TYPES:
            raise BadRequest("只支持上传 png/jpg/jpeg 格式的图片")
        if not filename:
            raise BadRequest("文件名不能为空")

        bucket = settings.AVATAR_BUCKET
        await with_retry(
            lambda: self.storage_service.upload_file(bucket, filename, data, content_type),
            label="头像上传",
        )
        url = await self.storage_service.get_url(bucket, filename)

        async with self.user_repository.transaction() as session:
            user = await self._get_or_404(user_id, session)
            await self.user_repository.update(user, {"avatar": url}, session)
        return await self._detail(user_id)
