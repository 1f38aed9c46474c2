"""
入参Schema → ORM字段映射测试
"""
from uuid import uuid4

from backoffice.schemas.sys_user import UserCreate, UserUpdate
from backoffice.utils.field_mapper import to_create_fields, to_update_fields


def test_create_fields_drop_none_and_excluded():
    schema = UserCreate(username="zhangsan", password="123456", roleIds=[uuid4()])
    data = to_create_fields(schema, exclude={"role_ids", "password"})
    assert data["username"] == "zhangsan"
    assert "role_ids" not in data
    assert "password" not in data
    assert "email" not in data


def test_update_fields_only_explicitly_set():
    schema = UserUpdate(nickname="张三")
    assert to_update_fields(schema) == {"nickname": "张三"}


def test_update_fields_keep_declared_nullable():
    schema = UserUpdate.model_validate({"deptId": None, "avatar": None, "phoneNumber": "13800000000"})
    data = to_update_fields(schema, nullable={"dept_id"})
    assert data == {"dept_id": None, "phone_number": "13800000000"}
