# 项目核心配置文件，包含数据库、JWT、Redis、MinIO、CORS、日志等全局配置，支持从.env文件加载环境变量
# backend/backoffice/core/config.py
#  - 所有字段均带默认值，未提供.env时也可直接导入（测试环境依赖此行为）
#  - 导出全局DEFAULT_TZ对象，供Service层和日志统一使用

import os
import secrets
import warnings
from typing import Annotated, Any, Literal
from zoneinfo import ZoneInfo

from pydantic import (
    AnyUrl,
    BeforeValidator,
    Field,
    HttpUrl,
    computed_field,
    model_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # 默认读取backend上一级的.env，可通过ENV_FILE_PATH覆盖
        env_file=os.getenv("ENV_FILE_PATH", "../.env"),
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "backoffice"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    API_PREFIX: str = "/api"
    APP_CORS: bool = Field(True, description="是否开启CORS")
    APP_LOG_ON: bool = Field(True, description="是否输出请求访问日志")

    # ========== JWT / 密码 ==========
    AUTH_JWT_SECRET: str = secrets.token_urlsafe(32)
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_ACCESS_TOKEN_TTL: int = Field(3600, description="访问令牌有效期（秒）")
    AUTH_JWT_REFRESH_TOKEN_TTL: int = Field(86400, description="刷新令牌有效期（秒）")
    AUTH_BCRYPT_ROUNDS: int = Field(10, description="bcrypt加密轮数")

    FRONTEND_HOST: str = "http://localhost:5666"
    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        if not self.APP_CORS:
            return []
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    SENTRY_DSN: HttpUrl | None = None

    # ========== 数据库 ==========
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "backoffice"

    DB_POOL_SIZE: int = Field(20, description="数据库连接池大小")
    DB_MAX_OVERFLOW: int = Field(50, description="最大溢出连接数")
    DB_POOL_RECYCLE: int = Field(3600, description="连接回收时间(秒)")
    DB_POOL_PRE_PING: bool = Field(True, description="连接有效性检查")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        return str(
            MultiHostUrl.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # ========== Redis ==========
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ""
    REDIS_ENCODING: str = "utf-8"
    REDIS_MAX_CONNECTIONS: int = 10
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_SOCKET_CONNECT_TIMEOUT: int = 5
    REDIS_KEY_PREFIX: str = Field("backoffice:", description="Redis键统一前缀")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def REDIS_URL(self) -> str:
        """生成 Redis 连接 URL"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ========== MinIO（S3兼容对象存储） ==========
    MINIO_ENDPOINT: str = "localhost"
    MINIO_PORT: int = 9000
    MINIO_USE_SSL: bool = False
    MINIO_ACCESS_KEY: str = "minioadmin"
    MINIO_SECRET_KEY: str = "minioadmin"
    MINIO_REGION: str = "us-east-1"
    MINIO_PRESIGN_EXPIRES: int = Field(7 * 24 * 3600, description="预签名URL有效期（秒），S3上限7天")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def MINIO_URL(self) -> str:
        scheme = "https" if self.MINIO_USE_SSL else "http"
        return f"{scheme}://{self.MINIO_ENDPOINT}:{self.MINIO_PORT}"

    AVATAR_BUCKET: str = "avatar"
    AVATAR_MAX_SIZE_BYTE: int = Field(2 * 1024 * 1024, description="头像上传最大大小限制（字节）")

    # ========== 时区 / 日志 ==========
    DEFAULT_TIMEZONE: str = Field("Asia/Shanghai", description="项目全局默认时区")
    LOG_TO_FILE_FLAG: bool = Field(False, description="日志落文件开关（True：控制台+文件；False：仅控制台）")
    LOG_DIR: str = Field("logs", description="日志文件目录")

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", '
                "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("AUTH_JWT_SECRET", self.AUTH_JWT_SECRET)
        self._check_default_secret("POSTGRES_PASSWORD", self.POSTGRES_PASSWORD)
        self._check_default_secret("MINIO_SECRET_KEY", self.MINIO_SECRET_KEY)
        return self


# 全局settings对象
settings = Settings()  # type: ignore

# 全局时区对象
DEFAULT_TZ = ZoneInfo(settings.DEFAULT_TIMEZONE)
