"""
认证API端点
backend/backoffice/api/v1/endpoints/auth.py
- 登录 / 注册 / 刷新令牌，均无需登录
"""
from typing import Any

from dependency_injector.wiring import inject
from fastapi import APIRouter

from backoffice.api.deps import AuthServiceDep, ClientInfoDep
from backoffice.schemas.responses import ApiResponse
from backoffice.schemas.sys_auth import RefreshTokenRequest, SignInRequest, SignUpRequest, TokenPair
from backoffice.schemas.sys_user import UserOut

router = APIRouter(prefix="/auth/authentication", tags=["auth"])


@router.post(
    "/sign-in",
    response_model=ApiResponse[TokenPair],
    summary="登录",
    description="用户名+密码登录，返回访问令牌与刷新令牌"
)
@inject
async def sign_in(
    sign_in_in: SignInRequest,
    client: ClientInfoDep,
    auth_service: AuthServiceDep,
) -> Any:
    tokens = await auth_service.sign_in(sign_in_in, client)
    return ApiResponse.success(data=tokens, msg="登录成功")


@router.post(
    "/sign-up",
    response_model=ApiResponse[UserOut],
    summary="注册",
)
@inject
async def sign_up(
    sign_up_in: SignUpRequest,
    auth_service: AuthServiceDep,
) -> Any:
    user = await auth_service.sign_up(sign_up_in)
    return ApiResponse.success(data=UserOut.model_validate(user), msg="注册成功")


@router.post(
    "/refresh-token",
    response_model=ApiResponse[TokenPair],
    summary="刷新令牌",
    description="刷新令牌单次有效，刷新后旧令牌作废"
)
@inject
async def refresh_token(
    refresh_in: RefreshTokenRequest,
    auth_service: AuthServiceDep,
) -> Any:
    tokens = await auth_service.refresh_tokens(refresh_in.refresh_token)
    return ApiResponse.success(data=tokens, msg="刷新成功")
