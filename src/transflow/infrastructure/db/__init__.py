# src/transflow/infrastructure/db/__init__.py
"""
数据库公共 API

使用约定：仅从本包导入公共函数，不直接引用内部模块路径。
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from .base import Base, metadata
from .engine import create_async_db_engine
from .session import create_async_sessionmaker


async def create_all_tables(engine: AsyncEngine) -> None:
    """按 ORM 元数据直接建表（测试与 `db init` 使用，生产环境走 Alembic）。"""
    # 导入以注册所有模型
    from . import _schema  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """释放底层连接池资源。"""
    await engine.dispose()


__all__ = [
    "Base",
    "metadata",
    "create_all_tables",
    "create_async_db_engine",
    "create_async_sessionmaker",
    "dispose_engine",
]
