# src/transflow/containers/__init__.py
"""
应用的组合根 (Composition Root)。

`ApplicationContainer` 聚合所有子容器，并把整块配置对象向下传递。
"""

from __future__ import annotations

from dependency_injector import containers, providers

from transflow.config import TransflowConfig

from .core import CoreContainer
from .persistence import PersistenceContainer
from .services import ServicesContainer


class ApplicationContainer(containers.DeclarativeContainer):
    """应用的顶层 DI 容器。"""

    # 1. 整块配置对象，作为唯一事实来源向下传递
    pydantic_config = providers.Dependency(instance_of=TransflowConfig)
    # 2. 字段级配置提供者，供日志等需要细粒度配置的场景
    config = providers.Configuration()

    core = providers.Container(
        CoreContainer,
        config=config,
    )
    persistence = providers.Container(
        PersistenceContainer,
        config=pydantic_config,
    )
    services = providers.Container(
        ServicesContainer,
        config=pydantic_config,
        uow_factory=persistence.uow_factory.provider,
        lock_provider=core.lock_provider,
    )


__all__ = ["ApplicationContainer"]
