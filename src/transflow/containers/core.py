# src/transflow/containers/core.py
"""
核心容器：日志初始化与进程内的文档锁提供者。
使用字段级的配置提供者。
"""

from dependency_injector import containers, providers

from transflow.infrastructure.locks import InMemoryLockProvider
from transflow.observability.logging_config import setup_logging


class CoreContainer(containers.DeclarativeContainer):
    """核心服务和配置的容器。"""

    config = providers.Configuration()

    # 在 init_resources() 时调用一次以配置全局日志
    logging = providers.Resource(
        setup_logging,
        log_level=config.logging.level,
        log_format=config.logging.format,
        service=config.service_name,
    )

    # 所有服务必须共享同一个锁池，否则串行化失效
    lock_provider = providers.Singleton(
        InMemoryLockProvider,
        default_timeout=config.locks.acquire_timeout,
        pool_size=config.locks.pool_size,
    )
