"""
系统菜单模型
backend/backoffice/models/sys_menu.py
菜单类型：catalog-目录 menu-菜单 button-按钮 embedded-内嵌 link-外链
按钮类型菜单的 permission 字段即接口权限码（module:controller:action）
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column

MENU_TYPE_BUTTON = 'button'
MENU_TYPES = ('catalog', 'menu', 'button', 'embedded', 'link')


class SysMenu(Base):
    __tablename__ = 'sys_menu'
    __table_args__ = {'comment': '系统菜单表'}

    id = uuid_pk_column()
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('sys_menu.id', ondelete='CASCADE'),
        nullable=True,
        comment='父菜单ID（NULL表示顶级菜单）'
    )
    name = Column(String(64), nullable=False, comment='菜单名称')
    title = Column(String(64), nullable=True, comment='菜单标题')
    type = Column(String(16), nullable=False, comment='菜单类型')
    path = Column(String(255), nullable=True, comment='路由路径')
    permission = Column(String(128), nullable=True, comment='权限标识')
    icon = Column(String(64), nullable=True, comment='菜单图标')
    active_icon = Column(String(64), nullable=True, comment='激活时图标')
    active_path = Column(String(255), nullable=True, comment='激活时高亮的菜单路径')
    redirect = Column(String(255), nullable=True, comment='重定向路径')
    query = Column(String(255), nullable=True, comment='路由参数')
    link = Column(String(255), nullable=True, comment='外链地址')
    iframe_src = Column(String(255), nullable=True, comment='内嵌iframe地址')
    badge = Column(String(32), nullable=True, comment='徽标内容')
    badge_type = Column(String(32), nullable=True, comment='徽标类型')
    badge_variants = Column(String(32), nullable=True, comment='徽标颜色')
    affix_tab = Column(Boolean, nullable=False, default=True, comment='是否固定标签页')
    affix_tab_order = Column(Integer, nullable=False, default=1, comment='固定标签页排序')
    hide_children_in_menu = Column(Boolean, nullable=False, default=False, comment='子菜单是否在菜单中隐藏')
    hide_in_breadcrumb = Column(Boolean, nullable=False, default=False, comment='是否在面包屑中隐藏')
    hide_in_menu = Column(Boolean, nullable=False, default=False, comment='是否在菜单中隐藏')
    hide_in_tab = Column(Boolean, nullable=False, default=False, comment='是否在标签页中隐藏')
    keep_alive = Column(Boolean, nullable=False, default=False, comment='是否缓存页面')
    max_num_of_open_tabs = Column(Integer, nullable=False, default=1, comment='最大打开标签数')
    no_basic_layout = Column(Boolean, nullable=False, default=False, comment='是否不使用基础布局')
    open_in_new_window = Column(Boolean, nullable=False, default=False, comment='是否在新窗口打开')
    order = Column(Integer, nullable=False, default=1, comment='排序')
    status = Column(Boolean, nullable=False, default=True, comment='状态')

    created_at = created_at_column()
    updated_at = updated_at_column()

    roles = relationship('SysRole', secondary='sys_role_menu', back_populates='menus')

    def __repr__(self):
        return f"<SysMenu(id={self.id}, name={self.name}, type={self.type})>"
