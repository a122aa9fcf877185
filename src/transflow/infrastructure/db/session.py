# src/transflow/infrastructure/db/session.py
"""会话工厂。事务边界由 SqlAlchemyUnitOfWork 负责。"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


def create_async_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """基于引擎创建 AsyncSession 工厂。"""
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
