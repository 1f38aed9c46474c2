"""
岗位API端点
backend/backoffice/api/v1/endpoints/posts.py
"""
from typing import Any, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import CurrentUser, PostServiceDep
from backoffice.schemas.responses import ApiResponse, PageResult
from backoffice.schemas.sys_post import PostCreate, PostOut, PostQuery, PostUpdate
from backoffice.utils.parse_utils import parse_date
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/post", tags=["post"])


def post_query(
    current: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    name: Optional[str] = Query(None, description="岗位名称（模糊匹配）"),
    code: Optional[str] = Query(None, description="岗位编码（模糊匹配）"),
    created_at_start: Optional[str] = Query(None, alias="createdAt[0]"),
    created_at_end: Optional[str] = Query(None, alias="createdAt[1]"),
) -> PostQuery:
    return PostQuery(
        current=current,
        page_size=page_size,
        name=name,
        code=code,
        created_at_start=parse_date(created_at_start),
        created_at_end=parse_date(created_at_end),
    )


@router.post("", response_model=ApiResponse[PostOut], summary="创建岗位")
@inject
async def create_post(
    post_in: PostCreate,
    post_service: PostServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await post_service.create(post_in), msg="创建成功")


@router.delete("/{id}", response_model=ApiResponse[None], summary="删除岗位")
@inject
async def delete_post(
    id: UUID,
    post_service: PostServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    await post_service.delete(id)
    return ApiResponse.success(msg="删除成功")


@router.get("", response_model=ApiResponse[PageResult[PostOut]], summary="岗位分页列表")
@inject
async def find_posts_with_pagination(
    post_service: PostServiceDep,
    _: CurrentUser,
    query: PostQuery = Depends(post_query),
) -> Any:
    return ApiResponse.success(data=await post_service.find_with_pagination(query))


@router.get("/{id}", response_model=ApiResponse[PostOut], summary="岗位详情")
@inject
async def find_post(id: UUID, post_service: PostServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await post_service.find_one(id))


@router.patch("/{id}", response_model=ApiResponse[PostOut], summary="更新岗位")
@inject
async def update_post(
    id: UUID,
    post_in: PostUpdate,
    post_service: PostServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await post_service.update(id, post_in), msg="更新成功")
