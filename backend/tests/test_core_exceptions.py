"""
数据库完整性异常映射测试
"""
import pytest
from sqlalchemy.exc import IntegrityError

from backoffice.core.exceptions import integrity_error_message, integrity_error_status


def _error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


@pytest.mark.parametrize(
    "message, status_code",
    [
        ('duplicate key value violates unique constraint "sys_user_username_key"', 409),
        ("UNIQUE constraint failed: sys_user.username", 409),
        ('insert or update on table "sys_user" violates foreign key constraint', 400),
        ('null value in column "name" violates not-null constraint', 400),
    ],
)
def test_status_mapping(message, status_code):
    assert integrity_error_status(_error(message)) == status_code


def test_message_keeps_first_line_only():
    error = _error("UNIQUE constraint failed: sys_role.value\n[SQL: INSERT INTO sys_role ...]")
    assert integrity_error_message(error) == "UNIQUE constraint failed: sys_role.value"
