"""
用户相关的Pydantic Schemas
backend/backoffice/schemas/sys_user.py
"""
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from backoffice.schemas.base import BaseSchema, IDSchema, PageQuery, TimestampSchema

Sex = Literal['0', '1', '2']


class RoleBrief(IDSchema):
    name: str


class DeptBrief(IDSchema):
    name: str


class MenuBrief(IDSchema):
    name: str
    title: Optional[str] = None
    type: str
    permission: Optional[str] = None


class RoleWithMenus(RoleBrief):
    value: str
    menus: List[MenuBrief] = Field(default_factory=list)


class UserBase(BaseSchema):
    nickname: Optional[str] = Field(None, max_length=64, description="昵称")
    email: Optional[EmailStr] = Field(None, description="邮箱")
    phone_number: Optional[str] = Field(None, max_length=20, description="联系方式")
    avatar: Optional[str] = Field(None, max_length=1024, description="头像地址")
    remark: Optional[str] = Field(None, max_length=255, description="备注")
    dept_id: Optional[UUID] = Field(None, description="部门ID")
    post_id: Optional[UUID] = Field(None, description="岗位ID")


class UserCreate(UserBase):
    username: str = Field(..., min_length=1, max_length=64, description="用户名", examples=["zhangsan"])
    password: str = Field(..., min_length=4, max_length=128, description="密码")
    sex: Sex = Field('1', description="性别(0-保密 1-男 2-女)")
    status: bool = Field(True, description="状态")
    is_dept_admin: bool = Field(False, description="是否部门负责人")
    role_ids: Optional[List[UUID]] = Field(None, description="角色ID列表")


class UserUpdate(UserBase):
    """部分更新：未传字段保持不变"""
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    password: Optional[str] = Field(None, min_length=4, max_length=128)
    sex: Optional[Sex] = None
    status: Optional[bool] = None
    is_dept_admin: Optional[bool] = None
    role_ids: Optional[List[UUID]] = None


class UserQuery(PageQuery):
    username: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


class ChangePasswordRequest(BaseSchema):
    id: UUID = Field(..., description="用户ID")
    old_password: Optional[str] = Field(None, description="原密码（管理员可不传）")
    password: str = Field(..., min_length=4, max_length=128, description="新密码")


class UserOut(IDSchema, TimestampSchema):
    username: str
    nickname: str = ''
    email: str = ''
    phone_number: str = ''
    sex: str = '1'
    avatar: str = ''
    status: bool = True
    is_admin: bool = False
    is_dept_admin: bool = False
    remark: str = ''
    dept_id: Optional[UUID] = None
    post_id: Optional[UUID] = None
    roles: List[RoleBrief] = Field(default_factory=list)
    dept: Optional[DeptBrief] = None


class UserSelfOut(UserOut):
    """当前登录用户信息（角色带菜单）"""
    roles: List[RoleWithMenus] = Field(default_factory=list)
