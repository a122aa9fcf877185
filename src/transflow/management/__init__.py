# src/transflow/management/__init__.py
"""管理平面：数据库迁移与配置工具。"""
