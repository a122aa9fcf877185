# alembic/env.py
"""
Alembic 环境配置

1. 元数据来源：优先使用 `config.attributes["target_metadata"]`（测试注入），
   否则从 `transflow.infrastructure.db` 导入。
2. 连接来源（按优先级）：注入的 `config.attributes["connection"]`；
   alembic.ini / DbService 设置的 `sqlalchemy.url`；
   最后回退到 TransflowConfig 的异步 DSN，并转换为同步驱动。
"""

from __future__ import annotations

from contextlib import nullcontext
from logging.config import fileConfig

import structlog
from alembic import context
from sqlalchemy import create_engine, pool

logger = structlog.get_logger(__name__)

config = context.config

if config.config_file_name is not None and not config.attributes.get("skip_logging"):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = config.attributes.get("target_metadata")
if target_metadata is None:
    from transflow.infrastructure.db import _schema  # noqa: F401
    from transflow.infrastructure.db.base import metadata as target_metadata


def _resolve_sync_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url and url.strip():
        return url

    from transflow.bootstrap import create_app_config
    from transflow.management.config_utils import convert_async_to_sync_url, render_url

    app_config = create_app_config("prod")
    sync_url = convert_async_to_sync_url(app_config.database.url)
    logger.debug("使用应用配置推导的同步 URL", driver=sync_url.drivername)
    return render_url(sync_url)


def run_migrations_offline() -> None:
    """在“离线”模式下运行迁移（只输出 SQL）。"""
    context.configure(
        url=_resolve_sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """在“在线”模式下运行迁移。"""
    injected = config.attributes.get("connection")
    if injected is not None:
        connection_context = nullcontext(injected)
    else:
        engine = create_engine(_resolve_sync_url(), poolclass=pool.NullPool)
        connection_context = engine.connect()

    with connection_context as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite 不支持大部分 ALTER，统一使用批处理模式
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
