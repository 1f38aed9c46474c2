"""
数据解析工具：字符串 → 类型安全值（数字 / Decimal / 日期）
backend/backoffice/utils/parse_utils.py
"""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional


def parse_number(value: Optional[str]) -> float:
    """安全解析数字，空值或非法值返回0"""
    if value is None or value == "":
        return 0
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0
    if number != number:  # NaN
        return 0
    return int(number) if number.is_integer() else number


def parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    """安全解析Decimal，空值或非法值返回None"""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        return None


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    解析日期字符串，仅保留日期部分
    兼容 "YYYY-MM-DD" 和 "YYYY-MM-DD HH:mm:ss"（也接受ISO格式的T分隔）
    """
    if value is None or value == "":
        return None
    date_part = value.strip().split(" ")[0].split("T")[0]
    if not date_part:
        return None
    try:
        return date.fromisoformat(date_part)
    except ValueError:
        return None
