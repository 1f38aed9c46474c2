"""
全局日志配置
backend/backoffice/core/logger.py
- 控制台输出始终开启；LOG_TO_FILE_FLAG=True 时按日期+级别额外落文件
- 日志格式包含 request_id，由请求中间件写入 request_id_ctx
- 日志时间统一使用全局时区 DEFAULT_TZ
"""
import logging
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Optional

from backoffice.core.config import settings, DEFAULT_TZ

# 请求ID上下文变量（请求中间件注入）
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

LOG_FORMAT = "%(asctime)s | %(request_id)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# 按级别拆分的日志文件
LEVEL_FILE_MAP = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
}


class RequestIDFilter(logging.Filter):
    """为每条日志注入request_id，未在请求上下文中时显示unknown"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_ctx.get() or "unknown"
        return True


def _build_formatter() -> logging.Formatter:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    formatter.converter = lambda *args: datetime.now(DEFAULT_TZ).timetuple()
    return formatter


def init_global_logger() -> logging.Logger:
    """初始化根日志（重复调用无副作用）"""
    logger = logging.getLogger()
    if any(isinstance(f, RequestIDFilter) for h in logger.handlers for f in h.filters):
        return logger

    log_level = logging.DEBUG if settings.ENVIRONMENT == "local" else logging.INFO
    formatter = _build_formatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(log_level)
    stream_handler.addFilter(RequestIDFilter())
    logger.addHandler(stream_handler)

    if settings.LOG_TO_FILE_FLAG:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        current_date = datetime.now(DEFAULT_TZ).strftime("%Y-%m-%d")
        for level, level_name in LEVEL_FILE_MAP.items():
            file_handler = logging.FileHandler(
                filename=str(log_dir / f"app-{current_date}.{level_name}.log"),
                mode="a",
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(RequestIDFilter())
            logger.addHandler(file_handler)

    logger.setLevel(log_level)

    # 第三方库日志统一走根处理器
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error", "passlib"):
        third_logger = logging.getLogger(name)
        third_logger.handlers.clear()
        third_logger.propagate = True
    # SQLAlchemy 仅输出错误，避免SQL刷屏
    logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)

    return logger
