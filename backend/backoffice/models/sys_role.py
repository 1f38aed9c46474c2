"""
系统角色模型
backend/backoffice/models/sys_role.py
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Uuid
from sqlalchemy.orm import relationship

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column


class SysRole(Base):
    __tablename__ = 'sys_role'
    __table_args__ = {'comment': '系统角色表'}

    id = uuid_pk_column()
    name = Column(String(64), nullable=False, comment='角色名称')
    value = Column(String(64), nullable=False, unique=True, comment='角色标识')
    order = Column(Integer, nullable=False, default=0, comment='显示顺序')
    status = Column(Boolean, nullable=False, default=True, comment='角色状态')
    remark = Column(String(255), nullable=False, default='', comment='备注')

    created_at = created_at_column()
    updated_at = updated_at_column()

    users = relationship('SysUser', secondary='sys_user_role', back_populates='roles')
    menus = relationship('SysMenu', secondary='sys_role_menu', back_populates='roles')

    def __repr__(self):
        return f"<SysRole(id={self.id}, name={self.name}, value={self.value})>"


# 角色菜单关联表（多对多）
sys_role_menu = Table(
    'sys_role_menu',
    Base.metadata,
    Column('role_id', Uuid(as_uuid=True), ForeignKey('sys_role.id', ondelete='CASCADE'), primary_key=True, comment='角色ID'),
    Column('menu_id', Uuid(as_uuid=True), ForeignKey('sys_menu.id', ondelete='CASCADE'), primary_key=True, comment='菜单ID'),
    comment='角色菜单关联表'
)
