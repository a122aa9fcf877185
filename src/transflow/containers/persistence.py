# src/transflow/containers/persistence.py
"""
持久化层容器：数据库引擎、会话工厂、工作单元工厂与基于数据库的身份提供者。
"""

from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from transflow.config import TransflowConfig
from transflow.core.uow import IUnitOfWork
from transflow.infrastructure.db import create_async_db_engine, create_async_sessionmaker
from transflow.infrastructure.identity import DatabaseIdentityProvider
from transflow.infrastructure.uow import SqlAlchemyUnitOfWork


class PersistenceContainer(containers.DeclarativeContainer):
    """持久化层相关服务的容器。"""

    config = providers.Dependency(instance_of=TransflowConfig)

    # 引擎是单例；进程退出时由 bootstrap.shutdown_container 释放
    db_engine: providers.Singleton[AsyncEngine] = providers.Singleton(
        create_async_db_engine,
        cfg=config,
    )

    session_maker: providers.Singleton[async_sessionmaker[AsyncSession]] = (
        providers.Singleton(
            create_async_sessionmaker,
            engine=db_engine,
        )
    )

    # UoW 是一个工厂，每次调用都会创建一个新的实例
    uow_factory: providers.Factory[IUnitOfWork] = providers.Factory(
        SqlAlchemyUnitOfWork,
        sessionmaker=session_maker,
    )

    identity_provider = providers.Singleton(
        DatabaseIdentityProvider,
        uow_factory=uow_factory.provider,
    )
