# src/transflow/presentation/api/app.py
"""
FastAPI 应用工厂。

容器在应用创建时装配，协调器与身份提供者挂在 `app.state` 上供依赖读取；
lifespan 结束时释放数据库连接池。
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI

from transflow import __version__
from transflow.bootstrap import create_app_config, create_container, shutdown_container

from .errors import register_exception_handlers
from .routes import ALL_ROUTERS

if TYPE_CHECKING:
    from transflow.containers import ApplicationContainer

logger = structlog.get_logger(__name__)


def create_app(container: ApplicationContainer | None = None) -> FastAPI:
    """创建 API 应用；未提供容器时按生产模式加载配置并自行装配。"""
    if container is None:
        container = create_container(create_app_config(env_mode="prod"))
    config = container.pydantic_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("API 服务启动", service=config.service_name)
        try:
            yield
        finally:
            await shutdown_container(container)
            logger.info("API 服务已停止")

    app = FastAPI(title=config.api.title, version=__version__, lifespan=lifespan)
    app.state.container = container
    app.state.service_name = config.service_name
    app.state.coordinator = container.services.coordinator()
    app.state.identity_provider = container.persistence.identity_provider()
    app.state.auth_scheme = config.auth.scheme

    register_exception_handlers(app)
    for router in ALL_ROUTERS:
        app.include_router(router)
    return app
