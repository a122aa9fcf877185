# src/transflow/config.py
"""
Transflow 配置（Pydantic v2）

- 纯粹的数据模型，环境准备（.env 加载）由 bootstrap.py 负责。
- 所有环境变量使用 `TRANSFLOW_` 前缀，嵌套字段使用 `__` 分隔。
"""

from __future__ import annotations

from typing import Literal, Optional

import langcodes
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import make_url

# ===================== 子模型 =====================


class DatabaseSettings(BaseModel):
    """主库（运行期异步驱动）"""

    url: str = Field(
        default="sqlite+aiosqlite:///transflow.db",
        description="异步 DSN（sqlite+aiosqlite / postgresql+asyncpg）",
    )
    echo: bool = Field(default=False, description="SQLAlchemy echo（调试）")
    pool_size: Optional[int] = Field(default=None, ge=1)
    max_overflow: Optional[int] = Field(default=None, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_pre_ping: bool = True

    @field_validator("url")
    @classmethod
    def _validate_async_driver(cls, v: str) -> str:
        allowed = {"sqlite+aiosqlite", "postgresql+asyncpg"}
        try:
            drv = make_url(v).drivername.lower()
        except Exception as e:
            raise ValueError(f"非法数据库 URL：{v!r}（{e}）") from e
        if drv not in allowed:
            raise ValueError(
                f"不支持的运行期数据库驱动：{drv!r}，仅允许 {', '.join(sorted(allowed))}"
            )
        return v


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: Literal["console", "json"] = Field(default="console")


class LockSettings(BaseModel):
    """按文档串行化工作流动作的锁参数。"""

    acquire_timeout: float = Field(default=10.0, gt=0)
    pool_size: int = Field(default=1024, gt=0, description="分段锁池大小")


class ApiSettings(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    title: str = Field(default="Transflow API")


class AuthSettings(BaseModel):
    scheme: str = Field(default="Bearer", description="Authorization 头的认证方案")
    token_bytes: int = Field(default=32, ge=16, description="新签发 API 令牌的随机字节数")


# ===================== 顶层配置 =====================
class TransflowConfig(BaseSettings):
    """
    Transflow 核心配置模型。
    """

    debug: bool = False
    service_name: str = "transflow"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    locks: LockSettings = Field(default_factory=LockSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)

    # 创建文档时未指定语言的默认值
    default_source_lang: Optional[str] = None
    default_target_lang: Optional[str] = None

    @field_validator("default_source_lang", "default_target_lang")
    @classmethod
    def _validate_lang(cls, v: Optional[str]) -> Optional[str]:
        if v in (None, ""):
            return None
        if not langcodes.tag_is_valid(v):
            raise ValueError(f"非法语言代码: {v}")
        return v

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix="TRANSFLOW_",
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )
