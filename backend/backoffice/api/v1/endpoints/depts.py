"""
部门API端点
backend/backoffice/api/v1/endpoints/depts.py
"""
from typing import Any, List, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import CurrentUser, DeptServiceDep
from backoffice.schemas.responses import ApiResponse
from backoffice.schemas.sys_dept import DeptCreate, DeptOut, DeptQuery, DeptTreeOut, DeptUpdate
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/dept", tags=["dept"])


@router.post(
    "",
    response_model=ApiResponse[DeptOut],
    summary="创建部门",
    description="负责人自动标记为部门管理员并归属该部门"
)
@inject
async def create_dept(
    dept_in: DeptCreate,
    dept_service: DeptServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await dept_service.create(dept_in), msg="创建成功")


@router.delete("/{id}", response_model=ApiResponse[None], summary="删除部门")
@inject
async def delete_dept(
    id: UUID,
    dept_service: DeptServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    await dept_service.delete(id)
    return ApiResponse.success(msg="删除成功")


@router.get("", response_model=ApiResponse[List[DeptTreeOut]], summary="部门树")
@inject
async def find_depts(
    dept_service: DeptServiceDep,
    _: CurrentUser,
    name: Optional[str] = Query(None, description="部门名称（模糊匹配）"),
) -> Any:
    return ApiResponse.success(data=await dept_service.find_all(DeptQuery(name=name)))


@router.get("/{id}", response_model=ApiResponse[DeptOut], summary="部门详情")
@inject
async def find_dept(id: UUID, dept_service: DeptServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await dept_service.find_one(id))


@router.patch("/{id}", response_model=ApiResponse[DeptOut], summary="更新部门")
@inject
async def update_dept(
    id: UUID,
    dept_in: DeptUpdate,
    dept_service: DeptServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await dept_service.update(id, dept_in), msg="更新成功")
