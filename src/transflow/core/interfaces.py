# src/transflow/core/interfaces.py
"""
定义了 Transflow 中外部协作方的抽象接口协议 (Protocols)。
应用层只依赖这些抽象，而不是具体的实现类。
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .types import Principal


class LockProvider(Protocol):
    """定义了按键互斥锁提供者的接口。"""

    def lock(
        self, key: str, timeout: float | None = None
    ) -> AbstractAsyncContextManager[None]:
        """
        一个异步上下文管理器，用于获取指定键上的锁。
        如果在 `timeout` 秒内无法获取锁，应抛出 `LockAcquisitionError`。
        """
        ...


class IdentityProvider(Protocol):
    """定义了身份提供者的接口：校验凭据并返回调用者身份。"""

    async def authenticate(self, credential: str | None) -> Principal:
        """凭据无效时抛出 `AuthenticationError`。"""
        ...
