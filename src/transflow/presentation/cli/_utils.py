# src/transflow/presentation/cli/_utils.py
"""
CLI 内部共享的辅助工具。

Typer 命令是同步函数，需要访问应用层的命令通过 `run_async` 进入事件循环，
并在 `get_coordinator` 退出时释放本次事件循环内创建的数据库连接。
"""

import asyncio
from collections.abc import AsyncGenerator, Coroutine
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from transflow.application.coordinator import WorkflowCoordinator
from transflow.core.types import PermissionLevel, Principal

from ._state import CLISharedState

T = TypeVar("T")

# 本地运维身份：能在服务器上运行 CLI 即视为最高管理员
CLI_PRINCIPAL = Principal(id="cli", level=PermissionLevel.SUPER_ADMIN)


@asynccontextmanager
async def get_coordinator(
    state: CLISharedState,
) -> AsyncGenerator[WorkflowCoordinator, None]:
    coordinator = state.container.services.coordinator()
    try:
        yield coordinator
    finally:
        await state.container.persistence.db_engine().dispose()


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    return asyncio.run(coro)
