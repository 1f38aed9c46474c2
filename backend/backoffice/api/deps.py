"""
API 依赖项配置文件
backend/backoffice/api/deps.py
"""
from typing import Annotated, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials

from backoffice.core.security import bearer_scheme
from backoffice.di.container import Container
from backoffice.models import SysUser
from backoffice.schemas.sys_auth import ClientInfo
from backoffice.services.sys_auth_service import AuthService
from backoffice.services.sys_dept_service import DeptService
from backoffice.services.sys_dict_service import DictService
from backoffice.services.sys_menu_service import MenuService
from backoffice.services.sys_post_service import PostService
from backoffice.services.sys_role_service import RoleService
from backoffice.services.sys_user_service import UserService
from backoffice.utils.client_info import extract_client_info


# ------------------------------
# 认证依赖：获取当前用户（Bearer Token）
# ------------------------------
@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(Provide[Container.auth_service]),
) -> SysUser:
    """从Token中解析用户（预加载 角色→菜单），失败统一返回401"""
    token = credentials.credentials if credentials else None
    return await auth_service.get_current_user(token)


# ------------------------------
# 客户端信息依赖（登录日志/操作日志）
# ------------------------------
def get_client_info(request: Request) -> ClientInfo:
    peer_host = request.client.host if request.client else None
    return extract_client_info(request.headers, peer_host)


# ------------------------------
# 类型别名（简化API层代码）
# ------------------------------
CurrentUser = Annotated[SysUser, Depends(get_current_user)]
ClientInfoDep = Annotated[ClientInfo, Depends(get_client_info)]

# 依赖类型注解（简化写法）
AuthServiceDep = Annotated[AuthService, Depends(Provide[Container.auth_service])]
UserServiceDep = Annotated[UserService, Depends(Provide[Container.user_service])]
RoleServiceDep = Annotated[RoleService, Depends(Provide[Container.role_service])]
MenuServiceDep = Annotated[MenuService, Depends(Provide[Container.menu_service])]
DeptServiceDep = Annotated[DeptService, Depends(Provide[Container.dept_service])]
DictServiceDep = Annotated[DictService, Depends(Provide[Container.dict_service])]
PostServiceDep = Annotated[PostService, Depends(Provide[Container.post_service])]
