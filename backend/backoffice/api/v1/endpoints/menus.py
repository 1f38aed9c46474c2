"""
菜单API端点
backend/backoffice/api/v1/endpoints/menus.py
- 列表返回扁平数据，由前端组装菜单树
- 超级管理员返回全部菜单，其他用户按所属角色过滤
"""
from typing import Any, List, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import CurrentUser, MenuServiceDep
from backoffice.schemas.responses import ApiResponse
from backoffice.schemas.sys_menu import MenuCreate, MenuOut, MenuQuery, MenuUpdate
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/menu", tags=["menu"])


@router.post(
    "",
    response_model=ApiResponse[MenuOut],
    summary="创建菜单",
    description="非按钮类型且配置了路由地址时，自动生成 创建/读取/更新/删除 四个按钮权限"
)
@inject
async def create_menu(
    menu_in: MenuCreate,
    menu_service: MenuServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await menu_service.create(menu_in), msg="创建成功")


@router.delete(
    "/{id}",
    response_model=ApiResponse[int],
    summary="删除菜单",
    description="级联删除全部子孙菜单，返回删除数量"
)
@inject
async def delete_menu(
    id: UUID,
    menu_service: MenuServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await menu_service.delete(id), msg="删除成功")


@router.get("", response_model=ApiResponse[List[MenuOut]], summary="菜单列表")
@inject
async def find_menus(
    current_user: CurrentUser,
    menu_service: MenuServiceDep,
    name: Optional[str] = Query(None, description="菜单名称（模糊匹配）"),
    path: Optional[str] = Query(None, description="路由地址（模糊匹配）"),
) -> Any:
    menus = await menu_service.find_all(current_user, MenuQuery(name=name, path=path))
    return ApiResponse.success(data=menus)


@router.get("/{id}", response_model=ApiResponse[MenuOut], summary="菜单详情")
@inject
async def find_menu(id: UUID, menu_service: MenuServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await menu_service.find_one(id))


@router.patch("/{id}", response_model=ApiResponse[MenuOut], summary="更新菜单")
@inject
async def update_menu(
    id: UUID,
    menu_in: MenuUpdate,
    menu_service: MenuServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await menu_service.update(id, menu_in), msg="更新成功")
