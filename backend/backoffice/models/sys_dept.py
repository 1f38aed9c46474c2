"""
部门管理模型
backend/backoffice/models/sys_dept.py
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Uuid

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column


class SysDept(Base):
    __tablename__ = 'sys_dept'
    __table_args__ = {'comment': '部门管理表'}

    id = uuid_pk_column()
    name = Column(String(100), nullable=False, comment='部门名称')
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey('sys_dept.id', ondelete='SET NULL'),
        nullable=True,
        comment='父部门ID'
    )
    # 负责人ID不设置外键约束（sys_user.dept_id 已引用本表，避免循环外键）
    leader_id = Column(Uuid(as_uuid=True), nullable=True, comment='负责人用户ID')
    leader = Column(String(64), nullable=True, comment='负责人用户名')
    email = Column(String(128), nullable=False, default='', comment='邮箱')
    phone = Column(String(20), nullable=False, default='', comment='联系电话')
    order = Column(Integer, nullable=False, default=0, comment='显示顺序')

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<SysDept(id={self.id}, name={self.name})>"
