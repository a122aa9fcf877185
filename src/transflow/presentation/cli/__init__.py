# src/transflow/presentation/cli/__init__.py
"""Transflow 命令行管理工具。"""
