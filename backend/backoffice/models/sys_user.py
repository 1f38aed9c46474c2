"""
系统用户模型
backend/backoffice/models/sys_user.py
"""
from sqlalchemy import Boolean, Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import relationship

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column


class SysUser(Base):
    __tablename__ = 'sys_user'
    __table_args__ = {'comment': '系统用户表'}

    id = uuid_pk_column()
    username = Column(String(64), unique=True, index=True, nullable=False, comment='用户名')
    nickname = Column(String(64), nullable=False, default='', comment='昵称')
    password = Column(String(100), nullable=False, comment='密码（bcrypt）')
    email = Column(String(128), nullable=False, default='', comment='用户邮箱')
    phone_number = Column(String(20), nullable=False, default='', comment='联系方式')
    sex = Column(String(1), nullable=False, default='1', comment='性别(0-保密 1-男 2-女)')
    avatar = Column(String(1024), nullable=False, default='', comment='用户头像')
    status = Column(Boolean, nullable=False, default=True, comment='状态(True-正常 False-禁用)')
    is_admin = Column(Boolean, nullable=False, default=False, comment='是否超级管理员')
    is_dept_admin = Column(Boolean, nullable=False, default=False, comment='是否部门负责人')
    remark = Column(String(255), nullable=False, default='', comment='备注')

    dept_id = Column(Uuid(as_uuid=True), ForeignKey('sys_dept.id', ondelete='SET NULL'), nullable=True, comment='部门ID')
    post_id = Column(Uuid(as_uuid=True), ForeignKey('sys_post.id', ondelete='SET NULL'), nullable=True, comment='岗位ID')

    created_at = created_at_column()
    updated_at = updated_at_column()

    roles = relationship('SysRole', secondary='sys_user_role', back_populates='users')
    dept = relationship('SysDept', foreign_keys=[dept_id])
    post = relationship('SysPost')

    def __repr__(self):
        return f"<SysUser(id={self.id}, username={self.username}, nickname={self.nickname})>"


# 用户角色关联表（多对多）
sys_user_role = Table(
    'sys_user_role',
    Base.metadata,
    Column('user_id', Uuid(as_uuid=True), ForeignKey('sys_user.id', ondelete='CASCADE'), primary_key=True, comment='用户ID'),
    Column('role_id', Uuid(as_uuid=True), ForeignKey('sys_role.id', ondelete='CASCADE'), primary_key=True, comment='角色ID'),
    comment='用户角色关联表'
)
