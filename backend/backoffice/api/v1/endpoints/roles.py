"""
角色API端点
backend/backoffice/api/v1/endpoints/roles.py
"""
from typing import Any, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import CurrentUser, RoleServiceDep
from backoffice.schemas.responses import ApiResponse, PageResult
from backoffice.schemas.sys_role import RoleCreate, RoleDetailOut, RoleOut, RoleQuery, RoleUpdate
from backoffice.utils.parse_utils import parse_date
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/role", tags=["role"])


def role_query(
    current: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(10, ge=1, alias="pageSize", description="每页数量"),
    name: Optional[str] = Query(None, description="角色名称（模糊匹配）"),
    value: Optional[str] = Query(None, description="角色值（模糊匹配）"),
    created_at_start: Optional[str] = Query(None, alias="createdAt[0]"),
    created_at_end: Optional[str] = Query(None, alias="createdAt[1]"),
) -> RoleQuery:
    return RoleQuery(
        current=current,
        page_size=page_size,
        name=name,
        value=value,
        created_at_start=parse_date(created_at_start),
        created_at_end=parse_date(created_at_end),
    )


@router.post("", response_model=ApiResponse[RoleDetailOut], summary="创建角色")
@inject
async def create_role(
    role_in: RoleCreate,
    role_service: RoleServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await role_service.create(role_in), msg="创建成功")


@router.delete("/{id}", response_model=ApiResponse[None], summary="删除角色")
@inject
async def delete_role(
    id: UUID,
    role_service: RoleServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    await role_service.delete(id)
    return ApiResponse.success(msg="删除成功")


@router.get("", response_model=ApiResponse[PageResult[RoleOut]], summary="角色分页列表")
@inject
async def find_roles_with_pagination(
    role_service: RoleServiceDep,
    _: CurrentUser,
    query: RoleQuery = Depends(role_query),
) -> Any:
    return ApiResponse.success(data=await role_service.find_with_pagination(query))


@router.get(
    "/{id}",
    response_model=ApiResponse[RoleDetailOut],
    summary="角色详情",
    description="返回角色信息及关联的菜单ID列表"
)
@inject
async def find_role(id: UUID, role_service: RoleServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await role_service.find_one(id))


@router.patch("/{id}", response_model=ApiResponse[RoleDetailOut], summary="更新角色")
@inject
async def update_role(
    id: UUID,
    role_in: RoleUpdate,
    role_service: RoleServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await role_service.update(id, role_in), msg="更新成功")
