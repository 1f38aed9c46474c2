"""
用户API端点
backend/backoffice/api/v1/endpoints/users.py

设计原则：
1. 最小API逻辑：只处理HTTP相关逻辑（参数解析、响应包装）
2. 依赖注入：通过依赖获取服务实例
3. 权限：写接口按 方法+路由 自动生成权限码，修改密码显式声明
4. 统一响应：所有接口返回标准格式
"""
from typing import Any, List, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, File, Query, UploadFile

from backoffice.api.deps import ClientInfoDep, CurrentUser, UserServiceDep
from backoffice.core.config import settings
from backoffice.enums.sys_permissions import PermissionCode
from backoffice.models import SysUser
from backoffice.schemas.responses import ApiResponse, PageResult
from backoffice.schemas.sys_user import (
    ChangePasswordRequest,
    UserCreate,
    UserOut,
    UserQuery,
    UserSelfOut,
    UserUpdate,
)
from backoffice.utils.parse_utils import parse_date
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/user", tags=["user"])


def user_query(
    current: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(10, ge=1, alias="pageSize", description="每页数量"),
    username: Optional[str] = Query(None, description="用户名（模糊匹配）"),
    nickname: Optional[str] = Query(None, description="昵称（模糊匹配）"),
    email: Optional[str] = Query(None, description="邮箱（模糊匹配）"),
    phone_number: Optional[str] = Query(None, alias="phoneNumber", description="手机号（模糊匹配）"),
    created_at_start: Optional[str] = Query(None, alias="createdAt[0]", description="创建时间起始（YYYY-MM-DD）"),
    created_at_end: Optional[str] = Query(None, alias="createdAt[1]", description="创建时间结束（YYYY-MM-DD）"),
) -> UserQuery:
    return UserQuery(
        current=current,
        page_size=page_size,
        username=username,
        nickname=nickname,
        email=email,
        phone_number=phone_number,
        created_at_start=parse_date(created_at_start),
        created_at_end=parse_date(created_at_end),
    )


@router.patch(
    "/changePassword",
    response_model=ApiResponse[UserOut],
    summary="修改密码",
    description="超级管理员无需校验原密码"
)
@inject
async def change_password(
    payload: ChangePasswordRequest,
    user_service: UserServiceDep,
    _=Depends(permission_checker(PermissionCode.SYSTEM_USER_UPDATE.value)),
) -> Any:
    user = await user_service.change_password(payload)
    return ApiResponse.success(data=user, msg="密码修改成功")


@router.post(
    "",
    response_model=ApiResponse[UserOut],
    summary="创建用户",
)
@inject
async def create_user(
    user_in: UserCreate,
    user_service: UserServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    user = await user_service.create(user_in)
    return ApiResponse.success(data=user, msg="创建成功")


@router.delete(
    "/{id}",
    response_model=ApiResponse[None],
    summary="删除用户",
    description="管理员账号不允许删除"
)
@inject
async def delete_user(
    id: UUID,
    client: ClientInfoDep,
    user_service: UserServiceDep,
    current_user: SysUser = Depends(permission_checker(auto=True)),
) -> Any:
    await user_service.delete(id, current_user, client.ip)
    return ApiResponse.success(msg="删除成功")


@router.get(
    "/all",
    response_model=ApiResponse[List[UserOut]],
    summary="用户列表（不分页）",
)
@inject
async def find_all_users(
    user_service: UserServiceDep,
    _: CurrentUser,
    query: UserQuery = Depends(user_query),
) -> Any:
    return ApiResponse.success(data=await user_service.find_all(query))


@router.get(
    "/info",
    response_model=ApiResponse[UserSelfOut],
    summary="获取当前用户信息",
    description="返回当前用户及其角色（含菜单）、部门"
)
@inject
async def find_self(
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> Any:
    return ApiResponse.success(data=await user_service.find_self(current_user.id))


@router.get(
    "/code",
    response_model=ApiResponse[List[str]],
    summary="获取当前用户权限标识",
)
@inject
async def find_self_code(
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> Any:
    return ApiResponse.success(data=await user_service.find_self_code(current_user.id))


@router.get(
    "",
    response_model=ApiResponse[PageResult[UserOut]],
    summary="用户分页列表",
)
@inject
async def find_users_with_pagination(
    user_service: UserServiceDep,
    _: CurrentUser,
    query: UserQuery = Depends(user_query),
) -> Any:
    return ApiResponse.success(data=await user_service.find_with_pagination(query))


@router.post(
    "/uploadAvatar",
    response_model=ApiResponse[UserOut],
    summary="上传头像",
    description="仅支持 png/jpg/jpeg，大小不超过2MB"
)
@inject
async def upload_avatar(
    current_user: CurrentUser,
    user_service: UserServiceDep,
    file: UploadFile = File(..., description="头像文件"),
) -> Any:
    user_service.check_avatar_size(file.size)
    # 未声明大小时最多读取 上限+1 字节，超限由服务层拒绝
    data = await file.read(settings.AVATAR_MAX_SIZE_BYTE + 1)
    user = await user_service.upload_avatar(current_user.id, file.filename, file.content_type, data)
    return ApiResponse.success(data=user, msg="上传成功")


@router.get(
    "/{id}",
    response_model=ApiResponse[UserOut],
    summary="用户详情",
)
@inject
async def find_user(
    id: UUID,
    user_service: UserServiceDep,
    _: CurrentUser,
) -> Any:
    return ApiResponse.success(data=await user_service.find_one(id))


@router.patch(
    "/{id}",
    response_model=ApiResponse[UserOut],
    summary="更新用户",
)
@inject
async def update_user(
    id: UUID,
    user_in: UserUpdate,
    user_service: UserServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await user_service.update(id, user_in), msg="更新成功")
