# tests/integration/cli/test_cli.py
"""
对 CLI 应用进行端到端测试：每条命令都经过主回调装配的真实容器和临时 SQLite 数据库。
"""

import logging

import pytest
import structlog
from typer.testing import CliRunner

from transflow.presentation.cli.main import app

pytestmark = [pytest.mark.db, pytest.mark.integration]

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """把 CLI 指向临时数据库，并在测试结束后还原被 CLI 改写的全局日志配置。"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    monkeypatch.setenv("TRANSFLOW_ENV", "test")
    monkeypatch.setenv(
        "TRANSFLOW_DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    )
    monkeypatch.setenv("TRANSFLOW_LOGGING__LEVEL", "WARNING")
    monkeypatch.chdir(tmp_path)
    yield tmp_path

    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def test_help_lists_command_groups():
    result = _invoke("--help")
    assert result.exit_code == 0
    for group in ("db", "users", "documents", "serve"):
        assert group in result.output


def test_db_init_then_status_reports_unmigrated(cli_env):
    result = _invoke("db", "init")
    assert result.exit_code == 0, result.output
    assert "documents" in result.output

    # 直接建表不会写入 alembic_version
    result = _invoke("db", "status")
    assert result.exit_code == 1


def test_db_migrate_then_status_is_healthy(cli_env):
    result = _invoke("db", "migrate")
    assert result.exit_code == 0, result.output
    result = _invoke("db", "status")
    assert result.exit_code == 0, result.output


def test_user_lifecycle(cli_env):
    assert _invoke("db", "init").exit_code == 0

    result = _invoke("users", "add", "ops@example.com", "Ops", "--level", "admin")
    assert result.exit_code == 0, result.output
    assert "API 令牌" in result.output
    assert "ADMIN" in result.output

    result = _invoke("users", "add", "ops@example.com", "Ops again")
    assert result.exit_code == 1
    assert "注册失败" in result.output

    result = _invoke(
        "users", "set-role", "--email", "ops@example.com", "--level", "CONTRIBUTOR"
    )
    assert result.exit_code == 0, result.output
    assert "CONTRIBUTOR" in result.output

    result = _invoke("users", "set-role", "--level", "ADMIN")
    assert result.exit_code == 1


def test_documents_list_empty(cli_env):
    assert _invoke("db", "init").exit_code == 0
    result = _invoke("documents", "list", "--status", "draft")
    assert result.exit_code == 0, result.output
    assert "没有符合条件的文档" in result.output
