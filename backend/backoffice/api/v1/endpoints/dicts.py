"""
字典API端点
backend/backoffice/api/v1/endpoints/dicts.py
- 字典数据路由（/data）声明在 /{id} 之前，避免被路径参数吞掉
- 字典数据写接口显式声明 system:dictData:* 权限
"""
from typing import Any, List, Optional
from uuid import UUID

from dependency_injector.wiring import inject
from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import CurrentUser, DictServiceDep
from backoffice.enums.sys_permissions import PermissionCode
from backoffice.models import SysUser
from backoffice.schemas.responses import ApiResponse
from backoffice.schemas.sys_dict import (
    DictCreate,
    DictDataCreate,
    DictDataOut,
    DictDataQuery,
    DictDataUpdate,
    DictOut,
    DictQuery,
    DictUpdate,
)
from backoffice.utils.permission_checker import permission_checker

router = APIRouter(prefix="/system/dict", tags=["dict"])


# ------------------------------
# 字典数据
# ------------------------------
@router.post("/data", response_model=ApiResponse[DictDataOut], summary="创建字典数据")
@inject
async def create_dict_data(
    data_in: DictDataCreate,
    dict_service: DictServiceDep,
    current_user: SysUser = Depends(permission_checker(PermissionCode.SYSTEM_DICT_DATA_CREATE.value)),
) -> Any:
    data = await dict_service.create_data(data_in, operator=current_user.username)
    return ApiResponse.success(data=data, msg="创建成功")


@router.delete("/data/{id}", response_model=ApiResponse[None], summary="删除字典数据")
@inject
async def delete_dict_data(
    id: UUID,
    dict_service: DictServiceDep,
    _=Depends(permission_checker(PermissionCode.SYSTEM_DICT_DATA_DELETE.value)),
) -> Any:
    await dict_service.delete_data(id)
    return ApiResponse.success(msg="删除成功")


@router.get(
    "/data",
    response_model=ApiResponse[List[DictDataOut]],
    summary="字典数据列表",
    description="传入 dictValue 时按字典值查找所属字典的数据，找不到返回空列表"
)
@inject
async def find_dict_data(
    dict_service: DictServiceDep,
    _: CurrentUser,
    name: Optional[str] = Query(None, description="数据名称（模糊匹配）"),
    dict_id: Optional[UUID] = Query(None, alias="dictId"),
    dict_value: Optional[str] = Query(None, alias="dictValue"),
) -> Any:
    query = DictDataQuery(name=name, dict_id=dict_id, dict_value=dict_value)
    return ApiResponse.success(data=await dict_service.find_all_data(query))


@router.get("/data/{id}", response_model=ApiResponse[DictDataOut], summary="字典数据详情")
@inject
async def find_one_dict_data(id: UUID, dict_service: DictServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await dict_service.find_one_data(id))


@router.patch("/data/{id}", response_model=ApiResponse[DictDataOut], summary="更新字典数据")
@inject
async def update_dict_data(
    id: UUID,
    data_in: DictDataUpdate,
    dict_service: DictServiceDep,
    current_user: SysUser = Depends(permission_checker(PermissionCode.SYSTEM_DICT_DATA_UPDATE.value)),
) -> Any:
    data = await dict_service.update_data(id, data_in, operator=current_user.username)
    return ApiResponse.success(data=data, msg="更新成功")


# ------------------------------
# 字典
# ------------------------------
@router.post("", response_model=ApiResponse[DictOut], summary="创建字典")
@inject
async def create_dict(
    dict_in: DictCreate,
    dict_service: DictServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await dict_service.create(dict_in), msg="创建成功")


@router.delete(
    "/{id}",
    response_model=ApiResponse[None],
    summary="删除字典",
    description="同时删除字典下的全部数据"
)
@inject
async def delete_dict(
    id: UUID,
    dict_service: DictServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    await dict_service.delete(id)
    return ApiResponse.success(msg="删除成功")


@router.get("", response_model=ApiResponse[List[DictOut]], summary="字典列表")
@inject
async def find_dicts(
    dict_service: DictServiceDep,
    _: CurrentUser,
    name: Optional[str] = Query(None, description="字典名称（模糊匹配）"),
    value: Optional[str] = Query(None, description="字典值（模糊匹配）"),
) -> Any:
    return ApiResponse.success(data=await dict_service.find_all(DictQuery(name=name, value=value)))


@router.get("/{id}", response_model=ApiResponse[DictOut], summary="字典详情")
@inject
async def find_dict(id: UUID, dict_service: DictServiceDep, _: CurrentUser) -> Any:
    return ApiResponse.success(data=await dict_service.find_one(id))


@router.patch("/{id}", response_model=ApiResponse[DictOut], summary="更新字典")
@inject
async def update_dict(
    id: UUID,
    dict_in: DictUpdate,
    dict_service: DictServiceDep,
    _=Depends(permission_checker(auto=True)),
) -> Any:
    return ApiResponse.success(data=await dict_service.update(id, dict_in), msg="更新成功")
