# src/transflow/bootstrap.py
"""
应用引导程序和 DI 容器的生命周期管理。

本模块是应用的唯一初始化入口，负责：
1. 按环境模式加载 .env 文件并构造配置；
2. 创建并装配 DI 容器（同时初始化日志）；
3. 在进程退出时释放数据库连接池。
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog
from dotenv import load_dotenv

from transflow.config import TransflowConfig
from transflow.containers import ApplicationContainer
from transflow.management.config_utils import mask_db_url

EnvMode = Literal["prod", "dev", "test"]

logger = structlog.get_logger("transflow.bootstrap")


def _load_dotenv_files(env_mode: EnvMode, base_dir: Path | None = None) -> list[Path]:
    """
    根据环境模式加载 .env 文件。

    `.env` 总是加载且不覆盖已有环境变量；`.env.dev` 在 dev/test 模式下加载，
    `.env.test` 只在 test 模式下加载，二者可以覆盖前面文件里的同名键。
    """
    root = base_dir or Path.cwd()
    loaded: list[Path] = []

    base_env = root / ".env"
    if base_env.is_file():
        load_dotenv(base_env, override=False)
        loaded.append(base_env)

    layered = []
    if env_mode in ("dev", "test"):
        layered.append(root / ".env.dev")
    if env_mode == "test":
        layered.append(root / ".env.test")
    for path in layered:
        if path.is_file():
            load_dotenv(path, override=True)
            loaded.append(path)

    logger.debug("已加载 dotenv 文件", files=[str(p) for p in loaded])
    return loaded


def create_app_config(
    env_mode: EnvMode = "prod", base_dir: Path | None = None
) -> TransflowConfig:
    """加载、验证并返回应用配置对象。"""
    _load_dotenv_files(env_mode, base_dir)
    config = TransflowConfig()
    logger.debug(
        "配置已加载",
        env_mode=env_mode,
        database_url=mask_db_url(config.database.url),
    )
    return config


def create_container(
    config: TransflowConfig, *, init_logging: bool = True
) -> ApplicationContainer:
    """创建并装配 DI 容器。"""
    container = ApplicationContainer()
    container.pydantic_config.override(config)
    container.config.from_dict(config.model_dump())

    if init_logging:
        container.init_resources()
    return container


async def shutdown_container(container: ApplicationContainer) -> None:
    """释放容器持有的核心资源（数据库连接池等）。"""
    engine = container.persistence.db_engine()
    await engine.dispose()
    container.shutdown_resources()
    logger.debug("容器资源已释放")
