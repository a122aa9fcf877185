# src/transflow/application/__init__.py
"""应用层：业务用例服务与总协调器。"""

from .coordinator import WorkflowCoordinator

__all__ = ["WorkflowCoordinator"]
