"""
分页参数 / 分页结果 / 响应码测试
"""
from datetime import date, timedelta

from backoffice.core.config import DEFAULT_TZ
from backoffice.schemas.base import PageQuery
from backoffice.schemas.responses import ApiResponse, PageResult, ResponseCode
from backoffice.schemas.sys_user import UserOut


def test_page_query_offset_and_range():
    query = PageQuery(current=3, pageSize=20, createdAtStart=date(2024, 1, 1), createdAtEnd=date(2024, 1, 31))
    assert query.offset == 40

    start, end = query.created_at_range()
    assert start.date() == date(2024, 1, 1)
    assert end.date() == date(2024, 2, 1)
    assert end - start == timedelta(days=31)
    assert start.tzinfo == DEFAULT_TZ


def test_page_query_open_range():
    assert PageQuery().created_at_range() == (None, None)


def test_page_result_build():
    page = PageResult[int].build([5, 6], total=5, current=3, page_size=2)
    assert page.page_count == 3
    assert page.is_last_page
    assert not page.is_first_page
    assert page.previous_page == 2
    assert page.next_page is None

    empty = PageResult[int].build([], total=0, current=1, page_size=10)
    assert empty.page_count == 0
    assert empty.is_first_page and empty.is_last_page


def test_page_result_serialized_in_camel_case():
    dumped = PageResult[int].build([], 0, 1, 10).model_dump(by_alias=True)
    assert {"list", "currentPage", "pageCount", "totalCount", "isFirstPage", "isLastPage"} <= set(dumped)


def test_api_response_success():
    resp = ApiResponse[UserOut].success(msg="ok")
    assert resp.code == ResponseCode.SUCCESS
    assert resp.data is None


def test_response_code_from_status():
    assert ResponseCode.from_status(401) == ResponseCode.AUTH_ERROR
    assert ResponseCode.from_status(403) == ResponseCode.PERMISSION_DENIED
    assert ResponseCode.from_status(404) == ResponseCode.NOT_FOUND
    assert ResponseCode.from_status(409) == ResponseCode.CONFLICT
    assert ResponseCode.from_status(503) == ResponseCode.INTERNAL_ERROR
    assert ResponseCode.from_status(418) == ResponseCode.VALIDATION_ERROR
