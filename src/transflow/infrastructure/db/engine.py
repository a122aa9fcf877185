# src/transflow/infrastructure/db/engine.py
"""
异步引擎工厂

- PostgreSQL：映射连接池参数（QueuePool）
- SQLite：NullPool，忽略不适用的池参数，并在每个连接上开启外键约束
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from ...config import TransflowConfig


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite+aiosqlite") or url.startswith("sqlite://")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_async_db_engine(cfg: TransflowConfig) -> AsyncEngine:
    """根据配置创建 AsyncEngine。"""
    url = cfg.database.url
    is_sqlite = _is_sqlite(url)

    kwargs: dict[str, Any] = {
        "echo": cfg.database.echo,
        "pool_pre_ping": cfg.database.pool_pre_ping,
    }

    if is_sqlite:
        # SQLite 推荐使用 NullPool，避免跨协程共享句柄
        kwargs["poolclass"] = NullPool
    else:
        if cfg.database.pool_size is not None:
            kwargs["pool_size"] = cfg.database.pool_size
        if cfg.database.max_overflow is not None:
            kwargs["max_overflow"] = cfg.database.max_overflow
        kwargs["pool_timeout"] = cfg.database.pool_timeout

    engine = create_async_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine
