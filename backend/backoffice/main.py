"""
项目主入口文件
backend/backoffice/main.py
- 日志初始化、DI容器、Sentry、CORS
- request_id中间件：注入request_id_ctx，响应头返回X-Request-ID
- 全局异常处理器：统一返回 ErrorResponse 结构
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime

import sentry_sdk
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.middleware.cors import CORSMiddleware

from backoffice.api.main import api_router
from backoffice.core.config import DEFAULT_TZ, settings
from backoffice.core.exceptions import integrity_error_message, integrity_error_status
from backoffice.core.logger import init_global_logger, request_id_ctx
from backoffice.di.container import Container
from backoffice.schemas.responses import ErrorResponse, ResponseCode

logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    """路由ID生成函数，处理无tags情况"""
    if not route.tags:
        return f"untagged-{route.name}"
    return f"{route.tags[0]}-{route.name}"


def error_response(request: Request, status_code: int, msg: str, details=None, headers=None) -> JSONResponse:
    body = ErrorResponse(
        code=ResponseCode.from_status(status_code),
        msg=msg,
        details=details,
        path=request.url.path,
        request_id=request_id_ctx.get() or "unknown",
        timestamp=datetime.now(DEFAULT_TZ).isoformat(),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # AppException 继承自 HTTPException，一并处理
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"请求异常 | 路径：{request.url.path} | 状态码：{exc.status_code} | 详情：{exc.detail}")
        return error_response(request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        status_code = integrity_error_status(exc)
        logger.error(f"数据库完整性异常 | 路径：{request.url.path} | 详情：{exc.orig}")
        return error_response(request, status_code, integrity_error_message(exc))

    @app.exception_handler(NoResultFound)
    async def no_result_exception_handler(request: Request, exc: NoResultFound):
        logger.warning(f"数据不存在 | 路径：{request.url.path}")
        return error_response(request, 404, "数据不存在")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning(f"请求参数校验失败 | 路径：{request.url.path} | 错误详情：{errors}")
        return error_response(request, 422, "请求参数校验失败", details={"errors": errors})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"服务器内部错误 | 路径：{request.url.path}")
        return error_response(request, 500, "服务器内部错误")


def create_app(container: Container = None) -> FastAPI:
    init_global_logger()

    if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
        sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True, environment=settings.ENVIRONMENT)

    container = container or Container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await container.init_resources()
        logger.info(
            f"{settings.PROJECT_NAME} 启动成功 | 环境：{settings.ENVIRONMENT} | "
            f"API前缀：{settings.API_PREFIX} | 时区：{settings.DEFAULT_TIMEZONE}"
        )
        try:
            yield
        finally:
            await container.shutdown_resources()
            logger.info(f"{settings.PROJECT_NAME} 已关闭")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="后台管理系统RBAC接口（Bearer Token认证）",
        version="1.0.0",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            if settings.APP_LOG_ON:
                logger.info(
                    f"{request.method} {request.url.path} | 状态码：{response.status_code} | "
                    f"耗时：{(time.perf_counter() - start) * 1000:.1f}ms"
                )
            return response
        finally:
            request_id_ctx.reset(token)

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.state.container = container
    return app


app = create_app()
