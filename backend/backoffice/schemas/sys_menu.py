"""
菜单相关的Pydantic Schemas
backend/backoffice/schemas/sys_menu.py
"""
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from backoffice.schemas.base import BaseSchema, IDSchema, TimestampSchema

MenuType = Literal['catalog', 'menu', 'button', 'embedded', 'link']


class MenuFields(BaseSchema):
    """菜单可选字段（前端路由meta）"""
    active_icon: Optional[str] = None
    active_path: Optional[str] = None
    badge: Optional[str] = None
    badge_type: Optional[str] = None
    badge_variants: Optional[str] = None
    icon: Optional[str] = None
    iframe_src: Optional[str] = None
    link: Optional[str] = None
    parent_id: Optional[UUID] = None
    path: Optional[str] = None
    permission: Optional[str] = None
    query: Optional[str] = None
    redirect: Optional[str] = None
    title: Optional[str] = None


class MenuCreate(MenuFields):
    name: str = Field(..., min_length=1, max_length=64, description="菜单名称")
    type: MenuType = Field(..., description="菜单类型")
    affix_tab: bool = True
    affix_tab_order: int = 1
    hide_children_in_menu: bool = False
    hide_in_breadcrumb: bool = False
    hide_in_menu: bool = False
    hide_in_tab: bool = False
    keep_alive: bool = False
    max_num_of_open_tabs: int = 1
    no_basic_layout: bool = False
    open_in_new_window: bool = False
    order: int = 1
    status: bool = True


class MenuUpdate(MenuFields):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    type: Optional[MenuType] = None
    affix_tab: Optional[bool] = None
    affix_tab_order: Optional[int] = None
    hide_children_in_menu: Optional[bool] = None
    hide_in_breadcrumb: Optional[bool] = None
    hide_in_menu: Optional[bool] = None
    hide_in_tab: Optional[bool] = None
    keep_alive: Optional[bool] = None
    max_num_of_open_tabs: Optional[int] = None
    no_basic_layout: Optional[bool] = None
    open_in_new_window: Optional[bool] = None
    order: Optional[int] = None
    status: Optional[bool] = None


class MenuQuery(BaseSchema):
    name: Optional[str] = None
    path: Optional[str] = None


class MenuOut(MenuCreate, IDSchema, TimestampSchema):
    type: str
