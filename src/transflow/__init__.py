# src/transflow/__init__.py
"""Transflow: 带持久化存储的翻译工作流引擎。

管理文档的版本账本、翻译任务、审校流程与文档生命周期，并通过
HTTP API 与命令行工具对外提供服务。
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
