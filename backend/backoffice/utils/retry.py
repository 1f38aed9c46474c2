"""
通用指数退避重试
backend/backoffice/utils/retry.py
- 每次调用受 timeout 保护，超时视为一次失败
- 延迟策略：base_delay * 2^attempt（0.2s → 0.4s → 0.8s）
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryTimeoutError(TimeoutError):
    """单次调用超时"""


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    base_delay: float = 0.2,
    timeout: float = 60.0,
    label: Optional[str] = None,
    should_retry: Optional[Callable[[Exception], bool]] = None,
) -> T:
    """
    对任意异步操作添加指数退避重试

    :param fn: 无参可调用对象，每次调用返回新的awaitable
    :param max_retries: 最大重试次数（不含首次调用）
    :param base_delay: 基础延迟（秒）
    :param timeout: 单次调用超时（秒）
    :param label: 日志/超时信息前缀
    :param should_retry: 返回False时直接抛出，不再重试；默认所有错误都重试
    """
    for attempt in range(max_retries + 1):
        try:
            try:
                return await asyncio.wait_for(fn(), timeout=timeout)
            except asyncio.TimeoutError as exc:
                raise RetryTimeoutError(f"{label or 'Operation'} 超时 ({timeout}s)") from exc
        except Exception as exc:
            if should_retry is not None and not should_retry(exc):
                raise
            if attempt >= max_retries:
                logger.error(f"{label or 'Operation'} 重试{max_retries}次后仍失败：{exc}")
                raise
            delay = base_delay * 2 ** attempt
            logger.warning(
                f"{label or 'Operation'} 第{attempt + 1}次调用失败：{exc}，{delay:.2f}s后重试"
            )
            await asyncio.sleep(delay)

    # 理论不可达
    raise RuntimeError("with_retry: unreachable")
