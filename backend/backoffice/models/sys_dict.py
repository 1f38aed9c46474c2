"""
数据字典模型（字典类型 + 字典数据）
backend/backoffice/models/sys_dict.py
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from backoffice.models.base import Base, uuid_pk_column, created_at_column, updated_at_column


class SysDict(Base):
    __tablename__ = 'sys_dict'
    __table_args__ = {'comment': '数据字典类型表'}

    id = uuid_pk_column()
    name = Column(String(64), nullable=False, comment='字典名称')
    value = Column(String(64), nullable=False, unique=True, comment='字典标识')
    status = Column(Boolean, nullable=False, default=True, comment='状态')
    remark = Column(String(255), nullable=False, default='', comment='备注')

    created_at = created_at_column()
    updated_at = updated_at_column()

    data = relationship('SysDictData', back_populates='dict', passive_deletes=True)

    def __repr__(self):
        return f"<SysDict(id={self.id}, value={self.value}, name={self.name})>"


class SysDictData(Base):
    __tablename__ = 'sys_dict_data'
    __table_args__ = {'comment': '数据字典数据表'}

    id = uuid_pk_column()
    dict_id = Column(Uuid(as_uuid=True), ForeignKey('sys_dict.id', ondelete='CASCADE'), nullable=False, comment='所属字典ID')
    name = Column(String(64), nullable=False, comment='数据标签')
    value = Column(String(64), nullable=False, comment='数据值')
    order = Column(Integer, nullable=False, default=0, comment='排序')
    status = Column(Boolean, nullable=False, default=True, comment='状态')
    remark = Column(String(255), nullable=False, default='', comment='备注')
    update_by = Column(String(64), nullable=True, comment='最后修改人')

    created_at = created_at_column()
    updated_at = updated_at_column()

    dict = relationship('SysDict', back_populates='data')

    def __repr__(self):
        return f"<SysDictData(id={self.id}, dict_id={self.dict_id}, name={self.name})>"
