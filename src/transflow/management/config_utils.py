# src/transflow/management/config_utils.py
"""
配置相关的工具函数：数据库 URL 脱敏与异步/同步驱动转换。
"""

from __future__ import annotations

from typing import Union

from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.exc import ArgumentError

_SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql+psycopg",
}


def mask_db_url(url: Union[str, URL, None]) -> str:
    """
    安全地脱敏一个数据库连接 URL，将其密码替换为 '***'，适合写入日志或控制台。
    """
    if url is None:
        return "[未配置]"
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "[无法解析的数据库 URL]"


def convert_async_to_sync_url(async_url: Union[str, URL]) -> URL:
    """
    将运行期的异步 DSN 转换为同步 DSN（Alembic 与管理命令使用）。
    无法识别的驱动原样返回。
    """
    url_obj = make_url(async_url)
    sync_driver = _SYNC_DRIVERS.get(url_obj.drivername)
    return url_obj.set(drivername=sync_driver) if sync_driver else url_obj


def render_url(url: URL) -> str:
    """渲染包含真实密码的 DSN。仅用于建立连接，严禁写入日志。"""
    return url.render_as_string(hide_password=False)
