"""
应用内事件总线
backend/backoffice/core/events.py
- 业务层通过 emit 发布事件（登录日志、操作日志），监听器负责落审计日志
- 同步分发：监听器按注册顺序执行，单个监听器异常不影响业务流程
"""
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("backoffice.audit")

LOGIN_LOG = "login.log"
OPERATION_LOG = "operation.log"

EventHandler = Callable[[Dict[str, Any]], None]


class EventBus:
    """简单的发布/订阅实现"""

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def on(self, event: str, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        if handler in self._handlers.get(event, []):
            self._handlers[event].remove(handler)

    def emit(self, event: str, payload: Dict[str, Any]) -> int:
        """发布事件，返回成功执行的监听器数量"""
        handled = 0
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(payload)
                handled += 1
            except Exception:
                logger.exception(f"事件监听器执行失败 | 事件：{event} | 监听器：{handler!r}")
        return handled


def log_login_event(payload: Dict[str, Any]) -> None:
    """登录日志监听器"""
    level = logging.INFO if payload.get("status") else logging.WARNING
    audit_logger.log(
        level,
        f"登录日志 | 用户名：{payload.get('username') or '-'} | IP：{payload.get('ip') or '-'} | "
        f"系统：{payload.get('os') or '-'} | 浏览器：{payload.get('browser') or '-'} | "
        f"状态：{'成功' if payload.get('status') else '失败'} | 信息：{payload.get('message', '')}",
        extra={"event": LOGIN_LOG},
    )


def log_operation_event(payload: Dict[str, Any]) -> None:
    """操作日志监听器"""
    audit_logger.info(
        f"操作日志 | 模块：{payload.get('module')} | 业务类型：{payload.get('business_type')} | "
        f"操作人：{payload.get('username')} | IP：{payload.get('ip') or '-'} | 内容：{payload.get('title')}",
        extra={"event": OPERATION_LOG},
    )


def create_event_bus() -> EventBus:
    """创建事件总线并注册默认审计监听器"""
    bus = EventBus()
    bus.on(LOGIN_LOG, log_login_event)
    bus.on(OPERATION_LOG, log_operation_event)
    return bus
