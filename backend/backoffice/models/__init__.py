"""
模型统一导出入口
backend/backoffice/models/__init__.py
- 按"被依赖→依赖"顺序导入，保证关系字符串引用可解析
- 业务层统一从此处导入（如：from backoffice.models import SysUser）
"""
from backoffice.models.base import Base

from backoffice.models.sys_post import SysPost
from backoffice.models.sys_dept import SysDept
from backoffice.models.sys_menu import SysMenu, MENU_TYPE_BUTTON, MENU_TYPES
from backoffice.models.sys_role import SysRole, sys_role_menu
from backoffice.models.sys_user import SysUser, sys_user_role
from backoffice.models.sys_dict import SysDict, SysDictData

__all__ = [
    'Base',
    'SysPost',
    'SysDept',
    'SysMenu',
    'SysRole',
    'SysUser',
    'SysDict',
    'SysDictData',
    'sys_role_menu',
    'sys_user_role',
    'MENU_TYPE_BUTTON',
    'MENU_TYPES',
]
