# 功能：统一导出所有Schema模型，对外提供一致的导入入口
# 文件相对项目根目录路径：backend/backoffice/schemas/__init__.py
from backoffice.schemas.base import BaseSchema, TimestampSchema, IDSchema, PageQuery
from backoffice.schemas.responses import ApiResponse, ErrorResponse, PageResult, ResponseCode
from backoffice.schemas.sys_auth import (
    SignInRequest, SignUpRequest, RefreshTokenRequest, TokenPair, ClientInfo
)
from backoffice.schemas.sys_user import (
    UserCreate, UserUpdate, UserQuery, ChangePasswordRequest,
    UserOut, UserSelfOut, RoleBrief, DeptBrief, MenuBrief, RoleWithMenus
)
from backoffice.schemas.sys_role import RoleCreate, RoleUpdate, RoleQuery, RoleOut, RoleDetailOut
from backoffice.schemas.sys_menu import MenuCreate, MenuUpdate, MenuQuery, MenuOut
from backoffice.schemas.sys_dept import DeptCreate, DeptUpdate, DeptQuery, DeptOut, DeptTreeOut
from backoffice.schemas.sys_dict import (
    DictCreate, DictUpdate, DictQuery, DictOut,
    DictDataCreate, DictDataUpdate, DictDataQuery, DictDataOut
)
from backoffice.schemas.sys_post import PostCreate, PostUpdate, PostQuery, PostOut

__all__ = [
    # Base
    'BaseSchema', 'TimestampSchema', 'IDSchema', 'PageQuery',
    'ApiResponse', 'ErrorResponse', 'PageResult', 'ResponseCode',

    # Auth
    'SignInRequest', 'SignUpRequest', 'RefreshTokenRequest', 'TokenPair', 'ClientInfo',

    # User
    'UserCreate', 'UserUpdate', 'UserQuery', 'ChangePasswordRequest',
    'UserOut', 'UserSelfOut', 'RoleBrief', 'DeptBrief', 'MenuBrief', 'RoleWithMenus',

    # Role / Menu / Dept
    'RoleCreate', 'RoleUpdate', 'RoleQuery', 'RoleOut', 'RoleDetailOut',
    'MenuCreate', 'MenuUpdate', 'MenuQuery', 'MenuOut',
    'DeptCreate', 'DeptUpdate', 'DeptQuery', 'DeptOut', 'DeptTreeOut',

    # Dict / Post
    'DictCreate', 'DictUpdate', 'DictQuery', 'DictOut',
    'DictDataCreate', 'DictDataUpdate', 'DictDataQuery', 'DictDataOut',
    'PostCreate', 'PostUpdate', 'PostQuery', 'PostOut',
]
