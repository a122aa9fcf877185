# src/transflow/containers/services.py
"""
应用服务层容器：组装所有业务服务和总协调器 (WorkflowCoordinator)。
本容器只依赖于抽象契约，不依赖任何具体的基础设施实现。
"""

from dependency_injector import containers, providers

from transflow.application import coordinator, services
from transflow.config import TransflowConfig


class ServicesContainer(containers.DeclarativeContainer):
    """应用服务和协调器的容器。"""

    config = providers.Dependency(instance_of=TransflowConfig)
    # 注入的是可调用的 UoW 工厂本身，而不是一个 UoW 实例
    uow_factory = providers.Dependency()
    lock_provider = providers.Dependency()

    document_scope = providers.Factory(
        services.DocumentScope,
        uow_factory=uow_factory,
        lock_provider=lock_provider,
        lock_timeout=config.provided.locks.acquire_timeout,
    )

    # --- 原子应用服务 ---
    document_lifecycle = providers.Factory(
        services.DocumentLifecycleService,
        uow_factory=uow_factory,
        config=config,
    )
    version_ledger = providers.Factory(
        services.VersionLedgerService,
        uow_factory=uow_factory,
        scope=document_scope,
    )
    task_coordinator = providers.Factory(
        services.TaskCoordinatorService,
        uow_factory=uow_factory,
        scope=document_scope,
        lifecycle=document_lifecycle,
    )
    review_workflow = providers.Factory(
        services.ReviewWorkflowService,
        uow_factory=uow_factory,
        scope=document_scope,
        lifecycle=document_lifecycle,
        ledger=version_ledger,
    )
    term_dictionary = providers.Factory(
        services.TermDictionaryService,
        uow_factory=uow_factory,
    )
    user_directory = providers.Factory(
        services.UserDirectoryService,
        uow_factory=uow_factory,
        config=config,
    )

    # --- 总协调器 (门面) ---
    coordinator = providers.Factory(
        coordinator.WorkflowCoordinator,
        documents=document_lifecycle,
        versions=version_ledger,
        tasks=task_coordinator,
        reviews=review_workflow,
        terms=term_dictionary,
        users=user_directory,
    )
