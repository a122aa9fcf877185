# src/transflow/infrastructure/uow.py
"""
SQLAlchemy 单元工作 (Unit of Work) 的具体实现。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import structlog
from sqlalchemy.exc import SQLAlchemyError

from transflow.core.exceptions import DatabaseError
from transflow.core.uow import IUnitOfWork

from .persistence.repositories import (
    SqlAlchemyDocumentRepository,
    SqlAlchemyReviewRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyTermRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyVersionRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(IUnitOfWork):
    """SQLAlchemy UoW 实现。正常退出提交，异常退出回滚。"""

    def __init__(self, sessionmaker: "async_sessionmaker[AsyncSession]"):
        self._sessionmaker = sessionmaker
        self.session: "AsyncSession"

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._sessionmaker()
        self.documents = SqlAlchemyDocumentRepository(self.session)
        self.versions = SqlAlchemyVersionRepository(self.session)
        self.tasks = SqlAlchemyTaskRepository(self.session)
        self.reviews = SqlAlchemyReviewRepository(self.session)
        self.terms = SqlAlchemyTermRepository(self.session)
        self.users = SqlAlchemyUserRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
            else:
                await self.commit()
        finally:
            await self.session.close()
        # 业务异常原样传播；裸露的 SQLAlchemy 异常统一包装为内部错误
        if isinstance(exc_val, SQLAlchemyError):
            logger.error("数据库操作失败", error=str(exc_val))
            raise DatabaseError(f"数据库操作失败: {exc_val}") from exc_val

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseError(f"提交事务失败: {e}") from e

    async def rollback(self) -> None:
        await self.session.rollback()


# 类型别名，用于依赖注入
UowFactory = Callable[[], IUnitOfWork]
