"""
指数退避重试测试
"""
import asyncio

import pytest

from backoffice.utils import retry as retry_module
from backoffice.utils.retry import RetryTimeoutError, with_retry


@pytest.fixture
def sleeps(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr(retry_module.asyncio, "sleep", fake_sleep)
    return delays


class Flaky:
    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"failure {self.calls}")
        return "ok"


async def test_returns_after_transient_failures(sleeps):
    fn = Flaky(failures=2)
    assert await with_retry(fn, label="upload") == "ok"
    assert fn.calls == 3
    assert sleeps == [0.2, 0.4]


async def test_raises_last_error_after_max_retries(sleeps):
    fn = Flaky(failures=10)
    with pytest.raises(ConnectionError, match="failure 4"):
        await with_retry(fn, max_retries=3)
    assert fn.calls == 4
    assert sleeps == [0.2, 0.4, 0.8]


async def test_should_retry_false_raises_immediately(sleeps):
    fn = Flaky(failures=1)
    with pytest.raises(ConnectionError):
        await with_retry(fn, should_retry=lambda exc: False)
    assert fn.calls == 1
    assert sleeps == []


async def test_timeout_is_reported_with_label(sleeps):
    async def slow():
        await asyncio.Event().wait()

    with pytest.raises(RetryTimeoutError, match="头像上传 超时"):
        await with_retry(slow, max_retries=0, timeout=0.01, label="头像上传")
