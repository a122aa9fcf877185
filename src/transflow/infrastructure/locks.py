# src/transflow/infrastructure/locks.py
"""
进程内的按键互斥锁提供者。

使用固定大小的锁池（分段锁），通过键的哈希值选择锁，而不是为每个键创建
一个新锁，内存占用不随文档数量增长。不同文档可能落在同一把锁上，只会多一些
串行化：每个动作只持有一把锁，因此不会死锁。
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog

from transflow.core.exceptions import LockAcquisitionError
from transflow.core.interfaces import LockProvider

logger = structlog.get_logger(__name__)


class InMemoryLockProvider(LockProvider):
    """基于 asyncio.Lock 分段锁池的 LockProvider 实现（单进程部署）。"""

    def __init__(self, default_timeout: float = 10.0, pool_size: int = 1024):
        if default_timeout <= 0 or pool_size <= 0:
            raise ValueError("超时时间与锁池大小必须为正数")
        self._default_timeout = default_timeout
        self._pool_size = pool_size
        self._locks: list[asyncio.Lock] = [asyncio.Lock() for _ in range(pool_size)]

    def _lock_for(self, key: str) -> asyncio.Lock:
        return self._locks[hash(key) % self._pool_size]

    @asynccontextmanager
    async def lock(self, key: str, timeout: float | None = None) -> AsyncIterator[None]:
        wait = self._default_timeout if timeout is None else timeout
        lk = self._lock_for(key)
        try:
            await asyncio.wait_for(lk.acquire(), timeout=wait)
        except asyncio.TimeoutError:
            logger.warning("获取锁超时", key=key, timeout=wait)
            raise LockAcquisitionError(f"在 {wait} 秒内未能获取锁: {key}") from None
        try:
            yield
        finally:
            lk.release()
