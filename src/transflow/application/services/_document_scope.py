# src/transflow/application/services/_document_scope.py
"""级联动作共用的“锁定文档 + 工作单元”作用域。"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from transflow.core.exceptions import NotFoundError

if TYPE_CHECKING:
    from transflow.core.interfaces import LockProvider
    from transflow.core.types import Document
    from transflow.core.uow import IUnitOfWork
    from transflow.infrastructure.uow import UowFactory


def document_lock_key(document_id: str) -> str:
    return f"document:{document_id}"


class DocumentScope:
    """
    把一个级联动作串行化到单个文档上。

    顺序固定：先取进程内文档锁，再开启新的 UoW，并以 FOR UPDATE 重新读取
    文档行。动作体内的所有读取都发生在锁内，看到的是一致的快照。
    """

    def __init__(
        self,
        uow_factory: UowFactory,
        lock_provider: LockProvider,
        lock_timeout: float | None = None,
    ):
        self._uow_factory = uow_factory
        self._lock_provider = lock_provider
        self._lock_timeout = lock_timeout

    @asynccontextmanager
    async def open(self, document_id: str) -> AsyncIterator[tuple[IUnitOfWork, Document]]:
        async with self._lock_provider.lock(
            document_lock_key(document_id), self._lock_timeout
        ):
            async with self._uow_factory() as uow:
                document = await uow.documents.get_for_update(document_id)
                if document is None:
                    raise NotFoundError(f"文档不存在: {document_id}")
                yield uow, document
