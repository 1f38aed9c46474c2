"""
岗位模型
backend/backoffice/models/sys_post.py
"""
from sqlalchemy import Column, Integer, String

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column


class SysPost(Base):
    __tablename__ = 'sys_post'
    __table_args__ = {'comment': '岗位表'}

    id = uuid_pk_column()
    code = Column(String(64), nullable=False, unique=True, comment='岗位编码')
    name = Column(String(64), nullable=False, comment='岗位名称')
    order = Column(Integer, nullable=False, default=0, comment='显示顺序')
    remark = Column(String(255), nullable=False, default='', comment='备注')

    created_at = created_at_column()
    updated_at = updated_at_column()

    def __repr__(self):
        return f"<SysPost(id={self.id}, code={self.code}, name={self.name})>"
