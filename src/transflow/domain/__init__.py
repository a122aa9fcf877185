# src/transflow/domain/__init__.py
"""领域规则：版本编号与状态机守卫。"""
