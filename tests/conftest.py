# tests/conftest.py
"""
Pytest 共享夹具 (DI Container 驱动)

核心 Fixtures:
- test_config: 指向临时 SQLite 文件的配置对象。
- app_container: 完全装配好的 DI 容器，数据库表已创建。
- uow_factory: 从容器获取的 UoW 工厂，用于在测试中直接读写数据库。
- coordinator: 从容器获取的 WorkflowCoordinator。
- admin / translator / translator_b / reviewer: 已注册的调用者身份。
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from transflow.application.coordinator import WorkflowCoordinator
from transflow.bootstrap import create_container, shutdown_container
from transflow.config import DatabaseSettings, LockSettings, TransflowConfig
from transflow.containers import ApplicationContainer
from transflow.core.types import PermissionLevel, Principal
from transflow.infrastructure.db import create_all_tables
from transflow.infrastructure.uow import UowFactory

from tests.helpers.factories import register_principal


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """关闭 Rich 的颜色输出，让 CLI 断言只面对纯文本。"""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("TERM", "dumb")


def make_sqlite_config(db_path: Path, **overrides) -> TransflowConfig:
    return TransflowConfig(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{db_path}"),
        locks=LockSettings(acquire_timeout=5.0),
        default_source_lang="en",
        default_target_lang="zh-CN",
        **overrides,
    )


@pytest.fixture
def test_config(tmp_path: Path) -> TransflowConfig:
    return make_sqlite_config(tmp_path / "transflow_test.db")


@pytest_asyncio.fixture
async def app_container(
    test_config: TransflowConfig,
) -> AsyncGenerator[ApplicationContainer, None]:
    container = create_container(test_config, init_logging=False)
    await create_all_tables(container.persistence.db_engine())
    yield container
    await shutdown_container(container)


@pytest.fixture
def uow_factory(app_container: ApplicationContainer) -> UowFactory:
    return app_container.persistence.uow_factory


@pytest.fixture
def coordinator(app_container: ApplicationContainer) -> WorkflowCoordinator:
    return app_container.services.coordinator()


@pytest_asyncio.fixture
async def admin(coordinator: WorkflowCoordinator) -> Principal:
    return await register_principal(
        coordinator, "admin@example.com", PermissionLevel.ADMIN
    )


@pytest_asyncio.fixture
async def translator(coordinator: WorkflowCoordinator) -> Principal:
    return await register_principal(coordinator, "alice@example.com")


@pytest_asyncio.fixture
async def translator_b(coordinator: WorkflowCoordinator) -> Principal:
    return await register_principal(coordinator, "bob@example.com")


@pytest_asyncio.fixture
async def reviewer(coordinator: WorkflowCoordinator) -> Principal:
    return await register_principal(coordinator, "rita@example.com")
