"""
权限枚举文件
backend/backoffice/enums/sys_permissions.py
- 接口显式声明的权限码，以及种子数据生成按钮菜单时使用的权限码
- 其余接口权限码由 方法+路由 自动生成（见 utils/permission_checker.py），与此处命名保持一致
"""
from enum import Enum


class PermissionCode(Enum):
    """
    系统权限枚举类
    每个枚举值格式: (权限代码, 显示名称, 描述)
    """

    def __new__(cls, code: str, name: str, description: str):
        obj = object.__new__(cls)
        obj._value_ = code
        obj.display_name = name
        obj.description = description
        return obj

    # 用户管理
    SYSTEM_USER_CREATE = ("system:user:create", "创建用户", "允许在系统中创建新用户")
    SYSTEM_USER_UPDATE = ("system:user:update", "更新用户", "允许修改用户信息及重置密码")
    SYSTEM_USER_DELETE = ("system:user:delete", "删除用户", "允许从系统中删除用户（管理员账号除外）")

    # 角色管理
    SYSTEM_ROLE_CREATE = ("system:role:create", "创建角色", "允许创建角色并分配菜单")
    SYSTEM_ROLE_UPDATE = ("system:role:update", "更新角色", "允许修改角色及其菜单")
    SYSTEM_ROLE_DELETE = ("system:role:delete", "删除角色", "允许删除角色")

    # 菜单管理
    SYSTEM_MENU_CREATE = ("system:menu:create", "创建菜单", "允许创建菜单")
    SYSTEM_MENU_UPDATE = ("system:menu:update", "更新菜单", "允许修改菜单")
    SYSTEM_MENU_DELETE = ("system:menu:delete", "删除菜单", "允许删除菜单及其子菜单")

    # 部门管理
    SYSTEM_DEPT_CREATE = ("system:dept:create", "创建部门", "允许在系统中创建新部门")
    SYSTEM_DEPT_UPDATE = ("system:dept:update", "更新部门", "允许修改现有部门信息")
    SYSTEM_DEPT_DELETE = ("system:dept:delete", "删除部门", "允许从系统中删除部门")

    # 数据字典
    SYSTEM_DICT_CREATE = ("system:dict:create", "创建数据字典", "允许创建数据字典")
    SYSTEM_DICT_UPDATE = ("system:dict:update", "更新数据字典", "允许更新数据字典")
    SYSTEM_DICT_DELETE = ("system:dict:delete", "删除数据字典", "允许删除数据字典")
    SYSTEM_DICT_DATA_CREATE = ("system:dictData:create", "创建字典数据", "允许新增字典数据项")
    SYSTEM_DICT_DATA_UPDATE = ("system:dictData:update", "更新字典数据", "允许修改字典数据项")
    SYSTEM_DICT_DATA_DELETE = ("system:dictData:delete", "删除字典数据", "允许删除字典数据项")

    # 岗位管理
    SYSTEM_POST_CREATE = ("system:post:create", "创建岗位", "允许创建岗位")
    SYSTEM_POST_UPDATE = ("system:post:update", "更新岗位", "允许修改岗位")
    SYSTEM_POST_DELETE = ("system:post:delete", "删除岗位", "允许删除岗位")
