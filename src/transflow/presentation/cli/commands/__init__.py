# src/transflow/presentation/cli/commands/__init__.py
